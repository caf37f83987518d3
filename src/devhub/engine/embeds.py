"""Extraction of embeddable third-party media from featured-media bundles."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from devhub.core.exceptions import RenderError
from devhub.core.types import FeaturedMedia, MediaItem

logger = logging.getLogger(__name__)

YOUTUBE_TEMPLATE = "component/youtube-embed"
TWITTER_TEMPLATE = "component/twitter-embed"

# (marker, characters ending the id), checked in order.
_YOUTUBE_MARKERS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("youtu.be/", re.compile(r"[?&#]")),
    ("watch?v=", re.compile(r"[&#]")),
    ("embed/", re.compile(r"[?&#]")),
)


class Renderer(Protocol):
    def render(self, template_name: str, context: Mapping[str, Any]) -> str: ...


def extract_youtube_id(url: str) -> str | None:
    """Return the video id of a YouTube URL, or None for unsupported shapes.

    Examples:
        >>> extract_youtube_id("https://youtu.be/abc123?t=42")
        'abc123'
        >>> extract_youtube_id("https://www.youtube.com/watch?v=abc123&list=x")
        'abc123'
        >>> extract_youtube_id("https://www.youtube.com/embed/abc123")
        'abc123'
        >>> extract_youtube_id("https://vimeo.com/123") is None
        True

    """
    for marker, terminators in _YOUTUBE_MARKERS:
        _, found, rest = url.partition(marker)
        if found:
            video_id = terminators.split(rest, maxsplit=1)[0]
            return video_id or None
    return None


@dataclass(frozen=True, slots=True)
class EmbedFragments:
    """Rendered embed markup for one featured-media bundle."""

    youtube: str | None = None
    twitter: str | None = None
    section_title: str | None = None

    @property
    def has_twitter(self) -> bool:
        return self.twitter is not None

    @property
    def has_media(self) -> bool:
        return self.youtube is not None or self.twitter is not None


def _url(item: MediaItem | None) -> str | None:
    return item.url if item is not None and item.url else None


def _title(item: MediaItem | None) -> str | None:
    return item.title if item is not None and item.title else None


class EmbedResolver:
    """Turns featured media into embed fragments. Never raises."""

    def __init__(self, renderer: Renderer) -> None:
        self.renderer = renderer

    def resolve(self, media: FeaturedMedia | None) -> EmbedFragments:
        if media is None:
            return EmbedFragments()

        youtube_html: str | None = None
        twitter_html: str | None = None
        title: str | None = None

        youtube_url = _url(media.youtube)
        video_id = extract_youtube_id(youtube_url) if youtube_url else None
        if video_id is not None:
            video_title = media.youtube.title if media.youtube else None
            youtube_html = self._render(YOUTUBE_TEMPLATE, {"video_id": video_id, "video_title": video_title})
            if youtube_html is not None:
                title = video_title

        # twitter wins over x when both carry a URL
        tweet = media.twitter if _url(media.twitter) else media.x
        tweet_url = _url(tweet)
        if tweet_url is not None:
            twitter_html = self._render(TWITTER_TEMPLATE, {"tweet_url": tweet_url})
            if twitter_html is not None and title is None:
                # the title may come from either field, whichever supplied the URL
                title = _title(media.twitter) or _title(media.x)

        return EmbedFragments(youtube=youtube_html, twitter=twitter_html, section_title=title)

    def _render(self, template_name: str, context: Mapping[str, Any]) -> str | None:
        try:
            return self.renderer.render(template_name, context)
        except RenderError:
            logger.exception("Embed fragment %s could not be rendered", template_name)
            return None
