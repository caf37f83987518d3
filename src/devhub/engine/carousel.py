"""Homepage carousel assembly."""

from pydantic import BaseModel, Field

from devhub.core.repository import ContentRepository
from devhub.core.types import Event, Post, PromoContent, PromoSlide

CAROUSEL_LIMIT = 7
CAROUSEL_POSTS = 4
CAROUSEL_EVENTS = 3
DATE_TBA = "Date TBA"
LOCATION_SEPARATOR = " • "


class CarouselItem(BaseModel):
    type: str
    slug: str
    title: str
    deck: str
    kind: str
    published_on: str
    tags: list[str] = Field(default_factory=list)
    href: str | None = None


def promo_item(slide: PromoSlide) -> CarouselItem:
    return CarouselItem(
        type=slide.type,
        slug=slide.slug,
        title=slide.title,
        deck=slide.deck,
        kind=slide.kind or slide.type,
        published_on=slide.published_on,
        tags=list(slide.tags),
        href=slide.href,
    )


def post_item(post: Post) -> CarouselItem:
    return CarouselItem(
        type="news",
        slug=post.slug,
        title=post.title,
        deck=post.deck,
        kind=post.kind,
        published_on=post.published_on,
        tags=list(post.tags),
    )


def event_deck(event: Event) -> str:
    """``"<location> • <starts_on>"``, without the separator when location is empty."""
    when = event.starts_on if event.starts_on is not None else DATE_TBA
    if not event.location:
        return when
    return f"{event.location}{LOCATION_SEPARATOR}{when}"


def event_item(event: Event) -> CarouselItem:
    return CarouselItem(
        type="events",
        slug=event.slug,
        title=event.title,
        deck=event_deck(event),
        kind="event",
        published_on=event.starts_on or "",
        tags=list(event.tags),
    )


def build_carousel_items(
    promo: PromoContent,
    repository: ContentRepository,
    *,
    limit: int = CAROUSEL_LIMIT,
    max_posts: int = CAROUSEL_POSTS,
    max_events: int = CAROUSEL_EVENTS,
) -> list[CarouselItem]:
    """Promo slides, then the leading posts, then upcoming events, truncated as a whole.

    Promo slides are pinned first, so they take the budget before posts and events.
    """
    items = [promo_item(slide) for slide in promo.slides]
    items.extend(post_item(post) for post in repository.posts[:max_posts])
    items.extend(event_item(event) for event in repository.upcoming_events()[:max_events])
    return items[:limit]
