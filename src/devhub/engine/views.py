"""Per-page view composition.

Each page kind has its own context model. A composed context holds copies of
repository records, so it can be rendered or serialized without touching the
repository again. Single-entity pages raise ``EntityNotFoundError`` for an
unknown slug; that is the only failure a composition routine surfaces.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, Field

from devhub.core.config import CarouselSettings
from devhub.core.exceptions import EntityNotFoundError
from devhub.core.repository import Collection, ContentRepository
from devhub.core.types import (
    BestStart,
    Creator,
    Ecosystem,
    Event,
    FeaturedMedia,
    Job,
    JobSource,
    Label,
    LearningPath,
    MediaAsset,
    Post,
    PostLink,
    PostRelated,
    PromoContent,
    Resource,
    RoleArchetype,
    SeedModel,
    Tool,
    Updates,
)
from devhub.engine.carousel import CarouselItem, build_carousel_items
from devhub.engine.embeds import EmbedResolver

FEATURED_MEDIA_TITLE = "Featured media"
ALL_TOOLS_TITLE = "All tools"
ALL_TOOLS_SLUG = "all"
LEARNING_PATHS_TITLE = "Learning paths"

# Creator groups shown first, in this order; the rest follow alphabetically.
PINNED_CREATOR_TYPES = ("playlist", "youtube", "newsletter")
CREATOR_TYPE_TITLES = {
    "youtube": "YouTube",
    "podcast": "Podcasts",
    "newsletter": "Newsletters",
    "playlist": "Playlists",
}

_M = TypeVar("_M", bound=SeedModel)


def _copies(items: Iterable[_M]) -> list[_M]:
    return [item.model_copy(deep=True) for item in items]


# --- Context models ---
class PageContext(BaseModel):
    """Base of every page context."""

    template: ClassVar[str]

    def to_context(self) -> dict[str, Any]:
        """JSON-compatible mapping handed to the template engine or the serializer."""
        return self.model_dump(mode="json")


class MediaBlock(BaseModel):
    section_title: str


class EmbedContext(PageContext):
    """Fields shared by single-entity pages that may show featured media."""

    media: MediaBlock | None = None
    embed_youtube: str | None = None
    embed_twitter: str | None = None
    has_twitter: bool = False


class LabeledListContext(PageContext):
    labels: list[Label] = Field(default_factory=list)


class HomePage(PageContext):
    template: ClassVar[str] = "index"

    carousel_items: list[CarouselItem] = Field(default_factory=list)

    def to_context(self) -> dict[str, Any]:
        context = super().to_context()
        # items without a link carry no href key
        for item in context["carousel_items"]:
            if item["href"] is None:
                del item["href"]
        return context


class EcosystemsListPage(LabeledListContext):
    template: ClassVar[str] = "ecosystems-list"

    ecosystems: list[Ecosystem] = Field(default_factory=list)


class EcosystemPage(EmbedContext):
    template: ClassVar[str] = "ecosystem-single"

    slug: str
    name: str
    one_liner: str = ""
    topics: list[str] = Field(default_factory=list)
    official_links: dict[str, str] = Field(default_factory=dict)
    featured_tools: list[Tool] = Field(default_factory=list)
    assets: MediaAsset | None = None


class ToolCategoryView(BaseModel):
    title: str
    slug: str
    tools: list[Tool] = Field(default_factory=list)


class ToolsListPage(LabeledListContext):
    template: ClassVar[str] = "tools-list"

    categories: list[ToolCategoryView] = Field(default_factory=list)


class ToolPage(EmbedContext):
    template: ClassVar[str] = "tool-single"

    slug: str
    name: str
    category: str = ""
    description: str = ""
    featured_media: FeaturedMedia | None = None
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    tier: str | None = None
    tags: list[str] = Field(default_factory=list)
    links: dict[str, str] = Field(default_factory=dict)
    updates: Updates | None = None
    assets: MediaAsset | None = None


class EventsListPage(LabeledListContext):
    template: ClassVar[str] = "events-list"

    upcoming: list[Event] = Field(default_factory=list)
    past: list[Event] = Field(default_factory=list)


class EventPage(EmbedContext):
    template: ClassVar[str] = "event-single"

    slug: str
    title: str
    href: str | None = None
    teaser: str | None = None
    schedule_note: str | None = None
    featured_media: FeaturedMedia | None = None
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    status: str = ""
    starts_on: str | None = None
    ends_on: str | None = None
    location: str = ""
    tags: list[str] = Field(default_factory=list)
    url: str = ""
    updates: Updates | None = None
    assets: MediaAsset | None = None


class LearnSection(BaseModel):
    title: str
    paths: list[LearningPath] = Field(default_factory=list)


class LearnListPage(LabeledListContext):
    template: ClassVar[str] = "learn-list"

    sections: list[LearnSection] = Field(default_factory=list)


class LearningPathPage(EmbedContext):
    template: ClassVar[str] = "learning-single"

    slug: str
    title: str
    summary: str = ""
    difficulty: str = ""
    duration_hours: int = 0
    milestones: list[str] = Field(default_factory=list)
    resources_data: list[Resource] = Field(default_factory=list)
    assets: MediaAsset | None = None


class CreatorSection(BaseModel):
    type: str
    title: str
    creators: list[Creator] = Field(default_factory=list)


class CreatorsListPage(LabeledListContext):
    template: ClassVar[str] = "creators-list"

    sections: list[CreatorSection] = Field(default_factory=list)


class CreatorPage(EmbedContext):
    template: ClassVar[str] = "creator-single"

    slug: str
    name: str
    type: str
    focus: list[str] = Field(default_factory=list)
    links: dict[str, str] = Field(default_factory=dict)
    about: str | None = None
    description: str | None = None
    video_id: str | None = None
    best_start: BestStart | None = None
    thumbnail: str | None = None
    assets: MediaAsset | None = None


class NewsListPage(LabeledListContext):
    template: ClassVar[str] = "news-list"

    posts: list[Post] = Field(default_factory=list)


class PostPage(EmbedContext):
    template: ClassVar[str] = "post-single"

    slug: str
    title: str
    featured_media: FeaturedMedia | None = None
    about: str | None = None
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    deck: str = ""
    kind: str = ""
    published_on: str = ""
    author_handle: str = ""
    tags: list[str] = Field(default_factory=list)
    cover_image: str | None = None
    links: list[PostLink] = Field(default_factory=list)
    body_md: str = ""
    sources: list[str] = Field(default_factory=list)
    related: PostRelated | None = None
    updates: Updates | None = None
    assets: MediaAsset | None = None


class JobsListPage(LabeledListContext):
    template: ClassVar[str] = "jobs-list"

    job_sources: list[JobSource] = Field(default_factory=list)
    role_archetypes: list[RoleArchetype] = Field(default_factory=list)
    jobs: list[Job] = Field(default_factory=list)


# --- Composition rules ---
def creator_section_title(kind: str) -> str:
    if kind in CREATOR_TYPE_TITLES:
        return CREATOR_TYPE_TITLES[kind]
    if not kind:
        return "Creators"
    return kind[0].upper() + kind[1:]


def group_creators(creators: Iterable[Creator]) -> list[CreatorSection]:
    """Group creators by type: pinned types first, the others sorted by type name."""
    grouped: dict[str, list[Creator]] = defaultdict(list)
    for creator in creators:
        grouped[creator.type].append(creator)

    order = [kind for kind in PINNED_CREATOR_TYPES if kind in grouped]
    order.extend(sorted(kind for kind in grouped if kind not in PINNED_CREATOR_TYPES))
    return [
        CreatorSection(type=kind, title=creator_section_title(kind), creators=_copies(grouped[kind]))
        for kind in order
    ]


def fallback_body(post: Post) -> str:
    """The post body, or its about text, or its deck when the body is blank. Empty when all are blank."""
    if post.body_md.strip():
        return post.body_md
    if post.about and post.about.strip():
        return post.about
    if post.deck:
        return post.deck
    return ""


def valid_best_start(best_start: BestStart | None) -> BestStart | None:
    if best_start is None or not best_start.is_valid:
        return None
    return best_start.model_copy()


def _entity_fields(entity: SeedModel) -> dict[str, Any]:
    """Entity fields for a page context; the media asset moves to ``assets``."""
    data = entity.model_dump(exclude={"media"})
    data["assets"] = getattr(entity, "media", None)
    return data


class ViewComposer:
    """Builds page contexts from the repository."""

    def __init__(
        self,
        repository: ContentRepository,
        embeds: EmbedResolver,
        promo: PromoContent | None = None,
        carousel: CarouselSettings | None = None,
    ) -> None:
        self.repository = repository
        self.embeds = embeds
        self.promo = promo if promo is not None else PromoContent()
        self.carousel = carousel if carousel is not None else CarouselSettings()

        self._list_pages: dict[str, Callable[[], PageContext]] = {
            "home": self.home,
            "ecosystems": self.ecosystems_list,
            "tools": self.tools_list,
            "events": self.events_list,
            "learn": self.learn_list,
            "creators": self.creators_list,
            "news": self.news_list,
            "jobs": self.jobs_list,
        }
        self._single_pages: dict[str, Callable[[str], PageContext]] = {
            "ecosystems": self.ecosystem,
            "tools": self.tool,
            "events": self.event,
            "learn": self.learning_path,
            "creators": self.creator,
            "news": self.post,
        }

    def compose(self, page: str, slug: str | None = None) -> PageContext:
        """Dispatch to the composition routine of a route section."""
        if slug is None:
            build_list = self._list_pages.get(page)
            if build_list is None:
                raise EntityNotFoundError("page", page)
            return build_list()
        build_single = self._single_pages.get(page)
        if build_single is None:
            raise EntityNotFoundError("page", f"{page}/{slug}")
        return build_single(slug)

    def _get(self, collection: Collection, slug: str) -> Any:
        entity = self.repository.by_slug(collection, slug)
        if entity is None:
            raise EntityNotFoundError(collection.value, slug)
        return entity

    def _embed_fields(self, media: FeaturedMedia | None) -> dict[str, Any]:
        fragments = self.embeds.resolve(media)
        block = None
        if fragments.has_media:
            block = MediaBlock(section_title=fragments.section_title or FEATURED_MEDIA_TITLE)
        return {
            "media": block,
            "embed_youtube": fragments.youtube,
            "embed_twitter": fragments.twitter,
            "has_twitter": fragments.has_twitter,
        }

    def _labels(self) -> list[Label]:
        return _copies(self.repository.labels)

    # --- Home ---
    def home(self) -> HomePage:
        items = build_carousel_items(
            self.promo,
            self.repository,
            limit=self.carousel.limit,
            max_posts=self.carousel.posts,
            max_events=self.carousel.events,
        )
        return HomePage(carousel_items=items)

    # --- Ecosystems ---
    def ecosystems_list(self) -> EcosystemsListPage:
        return EcosystemsListPage(ecosystems=_copies(self.repository.ecosystems), labels=self._labels())

    def ecosystem(self, slug: str) -> EcosystemPage:
        ecosystem: Ecosystem = self._get(Collection.ECOSYSTEMS, slug)
        featured = self.repository.many(Collection.TOOLS, ecosystem.featured_tools)
        return EcosystemPage(
            slug=ecosystem.slug,
            name=ecosystem.name,
            one_liner=ecosystem.one_liner,
            topics=list(ecosystem.topics),
            official_links=dict(ecosystem.official_links),
            featured_tools=_copies(featured),
            assets=ecosystem.media,
            **self._embed_fields(ecosystem.featured_media),
        )

    # --- Tools ---
    def tools_list(self) -> ToolsListPage:
        if not self.repository.tool_categories:
            categories = [
                ToolCategoryView(
                    title=ALL_TOOLS_TITLE,
                    slug=ALL_TOOLS_SLUG,
                    tools=_copies(self.repository.tools),
                )
            ]
        else:
            categories = [
                ToolCategoryView(
                    title=category.title,
                    slug=category.slug,
                    tools=_copies(self.repository.many(Collection.TOOLS, category.items)),
                )
                for category in self.repository.tool_categories
            ]
        return ToolsListPage(categories=categories, labels=self._labels())

    def tool(self, slug: str) -> ToolPage:
        tool: Tool = self._get(Collection.TOOLS, slug)
        return ToolPage(**_entity_fields(tool), **self._embed_fields(tool.featured_media))

    # --- Events ---
    def events_list(self) -> EventsListPage:
        upcoming: list[Event] = []
        past: list[Event] = []
        for event in self.repository.events:
            (past if event.is_past else upcoming).append(event)
        return EventsListPage(upcoming=_copies(upcoming), past=_copies(past), labels=self._labels())

    def event(self, slug: str) -> EventPage:
        event: Event = self._get(Collection.EVENTS, slug)
        return EventPage(**_entity_fields(event), **self._embed_fields(event.featured_media))

    # --- Learning paths ---
    def learn_list(self) -> LearnListPage:
        section = LearnSection(
            title=LEARNING_PATHS_TITLE,
            paths=_copies(self.repository.learning_paths_for_tracks()),
        )
        return LearnListPage(sections=[section], labels=self._labels())

    def learning_path(self, slug: str) -> LearningPathPage:
        path: LearningPath = self._get(Collection.LEARNING_PATHS, slug)
        resources = self.repository.many(Collection.RESOURCES, path.resources)
        return LearningPathPage(
            slug=path.slug,
            title=path.title,
            summary=path.summary,
            difficulty=path.difficulty,
            duration_hours=path.duration_hours,
            milestones=list(path.milestones),
            resources_data=_copies(resources),
            assets=path.media,
            **self._embed_fields(path.featured_media),
        )

    # --- Creators ---
    def creators_list(self) -> CreatorsListPage:
        return CreatorsListPage(sections=group_creators(self.repository.creators), labels=self._labels())

    def creator(self, slug: str) -> CreatorPage:
        creator: Creator = self._get(Collection.CREATORS, slug)
        return CreatorPage(
            slug=creator.slug,
            name=creator.name,
            type=creator.type,
            focus=list(creator.focus),
            links=dict(creator.links),
            about=creator.about,
            description=creator.description,
            video_id=creator.video_id,
            best_start=valid_best_start(creator.best_start),
            thumbnail=creator.thumbnail,
            assets=creator.media,
            **self._embed_fields(creator.featured_media),
        )

    # --- News ---
    def news_list(self) -> NewsListPage:
        return NewsListPage(posts=_copies(self.repository.posts), labels=self._labels())

    def post(self, slug: str) -> PostPage:
        post: Post = self._get(Collection.POSTS, slug)
        fields = _entity_fields(post)
        fields["body_md"] = fallback_body(post)
        return PostPage(**fields, **self._embed_fields(post.featured_media))

    # --- Jobs ---
    def jobs_list(self) -> JobsListPage:
        return JobsListPage(
            job_sources=_copies(self.repository.job_sources_in_order()),
            role_archetypes=_copies(self.repository.role_archetypes),
            jobs=_copies(self.repository.jobs),
            labels=self._labels(),
        )
