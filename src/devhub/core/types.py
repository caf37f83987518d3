"""Seed document schema.

Every field that is not required by the content model carries an explicit
default, so hand-maintained seed files may omit anything optional. Only
structurally invalid input (bad JSON, wrong types, missing identity fields)
fails validation.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SeedModel(BaseModel):
    """Base for all seed records: unknown keys are ignored, instances are frozen."""

    model_config = ConfigDict(extra="ignore", frozen=True)


# --- Media ---
class MediaItem(SeedModel):
    title: str | None = None
    url: str | None = None


class FeaturedMedia(SeedModel):
    youtube: MediaItem | None = None
    twitter: MediaItem | None = None
    x: MediaItem | None = None
    article: MediaItem | None = None


class MediaAsset(SeedModel):
    logo_url: str | None = None
    avatar_url: str | None = None
    background_url: str | None = None
    card_url: str | None = None
    teaser_thumb_url: str | None = None


class Updates(SeedModel):
    github_releases: str | None = None
    github_tags: str | None = None
    github_issues: str | None = None
    site: str | None = None
    twitter: str | None = None
    youtube: str | None = None
    schedule: str | None = None


# --- Page configuration ---
class ToolCategory(SeedModel):
    slug: str
    title: str
    items: list[str] = Field(default_factory=list)


class RoleArchetype(SeedModel):
    title: str
    tags: list[str] = Field(default_factory=list)


class ToolPageConfig(SeedModel):
    categories: list[ToolCategory] = Field(default_factory=list)


class LearnPageConfig(SeedModel):
    tracks: list[str] = Field(default_factory=list)


class WorkPageConfig(SeedModel):
    job_sources: list[str] = Field(default_factory=list)
    role_archetypes: list[RoleArchetype] = Field(default_factory=list)


class Pages(SeedModel):
    tools: ToolPageConfig = Field(default_factory=ToolPageConfig)
    learn: LearnPageConfig = Field(default_factory=LearnPageConfig)
    work: WorkPageConfig = Field(default_factory=WorkPageConfig)


# --- Entities ---
class Ecosystem(SeedModel):
    slug: str
    name: str
    one_liner: str = ""
    featured_media: FeaturedMedia | None = None
    media: MediaAsset | None = None
    topics: list[str] = Field(default_factory=list)
    official_links: dict[str, str] = Field(default_factory=dict)
    featured_tools: list[str] = Field(default_factory=list)


class Tool(SeedModel):
    slug: str
    name: str
    category: str = ""
    description: str = ""
    featured_media: FeaturedMedia | None = None
    media: MediaAsset | None = None
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    tier: str | None = None
    tags: list[str] = Field(default_factory=list)
    links: dict[str, str] = Field(default_factory=dict)
    updates: Updates | None = None


class Event(SeedModel):
    slug: str
    title: str
    href: str | None = None
    teaser: str | None = None
    schedule_note: str | None = None
    featured_media: FeaturedMedia | None = None
    media: MediaAsset | None = None
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    status: str = ""
    starts_on: str | None = None
    ends_on: str | None = None
    location: str = ""
    tags: list[str] = Field(default_factory=list)
    url: str = ""
    updates: Updates | None = None

    @property
    def is_past(self) -> bool:
        # Exact match: "Past" or "" are upcoming.
        return self.status == "past"


class LearningPath(SeedModel):
    slug: str
    title: str
    summary: str = ""
    featured_media: FeaturedMedia | None = None
    media: MediaAsset | None = None
    difficulty: str = ""
    duration_hours: int = Field(default=0, ge=0)
    milestones: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)


class BestStart(SeedModel):
    title: str | None = None
    url: str | None = None

    @property
    def is_valid(self) -> bool:
        """Both title and URL must be present and non-blank."""
        return bool(self.title and self.title.strip() and self.url and self.url.strip())


class Creator(SeedModel):
    slug: str
    name: str
    type: str
    featured_media: FeaturedMedia | None = None
    media: MediaAsset | None = None
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    focus: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    links: dict[str, str] = Field(default_factory=dict)
    about: str | None = None
    description: str | None = None
    video_id: str | None = None
    best_start: BestStart | None = None
    thumbnail: str | None = None
    updates: Updates | None = None


class PostLink(SeedModel):
    label: str
    url: str


class PostRelated(SeedModel):
    tools: list[str] = Field(default_factory=list)
    events: list[str] = Field(default_factory=list)
    protocols: list[str] = Field(default_factory=list)


class Post(SeedModel):
    slug: str
    title: str
    featured_media: FeaturedMedia | None = None
    about: str | None = None
    media: MediaAsset | None = None
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


class Resource(SeedModel):
    slug: str | None = None
    title: str = ""
    url: str = ""


class JobSource(SeedModel):
    slug: str
    name: str
    url: str


class JobCompany(SeedModel):
    name: str = ""
    domain: str | None = None


class Job(SeedModel):
    slug: str = ""
    title: str = ""
    company: JobCompany = Field(default_factory=JobCompany)
    labels: list[str] = Field(default_factory=list)
    primary_label: str | None = None
    about: str = ""
    apply_url: str = ""
    last_verified: str | None = None
    media: MediaAsset | None = None


class Label(SeedModel):
    slug: str
    name: str
    description: str | None = None


class Taxonomy(SeedModel):
    labels: list[Label] = Field(default_factory=list)


class Seed(SeedModel):
    """The whole content document.

    Three collections accept a deprecated key. When both keys are present the
    canonical one wins; the values are never merged.
    """

    pages: Pages = Field(default_factory=Pages)
    ecosystems: list[Ecosystem] = Field(
        default_factory=list,
        validation_alias=AliasChoices("ecosystems", "protocols"),
    )
    tools: list[Tool] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    learning_paths: list[LearningPath] = Field(default_factory=list)
    creators: list[Creator] = Field(default_factory=list)
    posts: list[Post] = Field(
        default_factory=list,
        validation_alias=AliasChoices("posts", "news"),
    )
    resources: list[Resource] = Field(default_factory=list)
    job_sources: list[JobSource] = Field(
        default_factory=list,
        validation_alias=AliasChoices("job_sources", "jobs_sources"),
    )
    taxonomy: Taxonomy = Field(default_factory=Taxonomy)
    jobs: list[Job] = Field(default_factory=list)


# --- Promo document ---
class PromoSlide(SeedModel):
    type: str = ""
    slug: str = ""
    title: str = ""
    deck: str = ""
    kind: str = ""
    published_on: str = ""
    tags: list[str] = Field(default_factory=list)
    href: str | None = None


class PromoContent(SeedModel):
    slides: list[PromoSlide] = Field(default_factory=list)
