import pytest

from devhub.core.exceptions import EntityNotFoundError
from devhub.core.repository import Collection, ContentRepository
from devhub.core.types import BestStart, Creator, Post, Seed
from devhub.engine.embeds import EmbedResolver
from devhub.engine.views import (
    CreatorsListPage,
    EcosystemPage,
    HomePage,
    ToolsListPage,
    ViewComposer,
    creator_section_title,
    fallback_body,
    group_creators,
    valid_best_start,
)


def test_home_page_carousel(composer):
    page = composer.home()

    assert isinstance(page, HomePage)
    assert [item.slug for item in page.carousel_items] == [
        "launch",
        "release",
        "about-only",
        "deck-only",
        "conf-2025",
    ]


def test_home_context_omits_missing_href(composer):
    items = composer.home().to_context()["carousel_items"]

    assert items[0]["href"] == "https://example.com/launch"
    assert all("href" not in item for item in items[1:])
    assert items[1] == {
        "type": "news",
        "slug": "release",
        "title": "Release notes",
        "deck": "A new release",
        "kind": "release",
        "published_on": "2025-01-02",
        "tags": ["release"],
    }


def test_ecosystems_list(composer):
    page = composer.ecosystems_list()

    assert [e.slug for e in page.ecosystems] == ["tokio", "embedded"]
    assert [label.slug for label in page.labels] == ["testing"]


def test_ecosystem_page(composer):
    page = composer.ecosystem("tokio")

    assert isinstance(page, EcosystemPage)
    assert page.name == "Tokio"
    assert page.topics == ["async", "io"]
    assert [tool.slug for tool in page.featured_tools] == ["clippy", "cargo-nextest"]
    assert page.media.section_title == "Tokio intro"
    assert "youtube-nocookie.com/embed/abc123" in page.embed_youtube
    assert page.embed_twitter is None
    assert page.has_twitter is False


def test_ecosystem_without_media(composer):
    page = composer.ecosystem("embedded")

    assert page.media is None
    assert page.embed_youtube is None
    assert page.featured_tools == []


def test_tools_list_uses_configured_categories(composer):
    page = composer.tools_list()

    assert isinstance(page, ToolsListPage)
    assert [(c.slug, c.title, [t.slug for t in c.tools]) for c in page.categories] == [
        ("testing", "Testing", ["cargo-nextest"]),
        ("lint", "Lint", ["clippy"]),
    ]


def test_tools_list_without_categories_has_all_tools(templates):
    repository = ContentRepository(
        Seed.model_validate({"tools": [{"slug": "a", "name": "A"}, {"slug": "b", "name": "B"}]})
    )

    page = ViewComposer(repository, EmbedResolver(templates)).tools_list()

    assert len(page.categories) == 1
    assert page.categories[0].title == "All tools"
    assert page.categories[0].slug == "all"
    assert [tool.slug for tool in page.categories[0].tools] == ["a", "b"]


def test_tool_page(composer):
    page = composer.tool("cargo-nextest")

    assert page.description == "Next-generation test runner"
    assert page.tier == "core"
    assert page.assets.logo_url == "https://example.com/nextest.png"
    assert page.media is None


def test_tool_page_with_tweet(composer):
    page = composer.tool("clippy")

    assert page.has_twitter is True
    assert page.media.section_title == "Clippy thread"
    assert "https://x.com/clippy/status/1" in page.embed_twitter


def test_events_split_on_exact_past_status(composer):
    page = composer.events_list()

    assert [event.slug for event in page.upcoming] == ["conf-2025", "caps-meetup", "workshop"]
    assert [event.slug for event in page.past] == ["old-meetup"]


def test_event_page(composer):
    page = composer.event("conf-2025")

    assert page.location == "Berlin"
    assert page.starts_on == "2025-09-01"
    assert page.media is None


def test_learn_list_single_section_in_track_order(composer):
    page = composer.learn_list()

    assert [section.title for section in page.sections] == ["Learning paths"]
    assert [path.slug for path in page.sections[0].paths] == ["async", "basics"]


def test_learning_path_resolves_resources(composer):
    page = composer.learning_path("basics")

    assert [resource.slug for resource in page.resources_data] == ["book", "intro"]
    assert page.milestones == ["Install", "Hello world"]
    assert page.duration_hours == 10


def test_creators_list_sections(composer):
    page = composer.creators_list()

    assert isinstance(page, CreatorsListPage)
    assert [(s.type, s.title) for s in page.sections] == [
        ("playlist", "Playlists"),
        ("youtube", "YouTube"),
        ("newsletter", "Newsletters"),
        ("blog", "Blog"),
        ("podcast", "Podcasts"),
    ]
    youtube = page.sections[1]
    assert [creator.slug for creator in youtube.creators] == ["jon", "jane"]


def test_group_creators_with_empty_type():
    sections = group_creators([Creator(slug="a", name="A", type=""), Creator(slug="b", name="B", type="youtube")])

    assert [(s.type, s.title) for s in sections] == [("youtube", "YouTube"), ("", "Creators")]


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        ("youtube", "YouTube"),
        ("podcast", "Podcasts"),
        ("newsletter", "Newsletters"),
        ("playlist", "Playlists"),
        ("blog", "Blog"),
        ("video essays", "Video essays"),
        ("", "Creators"),
    ],
)
def test_creator_section_title(kind, expected):
    assert creator_section_title(kind) == expected


def test_creator_page_keeps_valid_best_start(composer):
    page = composer.creator("jane")

    assert page.best_start.title == "First video"
    assert page.type == "youtube"


def test_creator_page_drops_incomplete_best_start(composer):
    assert composer.creator("blogger").best_start is None


@pytest.mark.parametrize(
    ("best_start", "valid"),
    [
        (None, False),
        (BestStart(), False),
        (BestStart(title="Start", url=""), False),
        (BestStart(title=" ", url="https://example.com"), False),
        (BestStart(title="Start", url="https://example.com"), True),
    ],
)
def test_valid_best_start(best_start, valid):
    assert (valid_best_start(best_start) is not None) is valid


@pytest.mark.parametrize(
    ("fields", "expected"),
    [
        ({"body_md": "Body", "about": "About", "deck": "Deck"}, "Body"),
        ({"body_md": "  \n", "about": "About", "deck": "Deck"}, "About"),
        ({"body_md": "", "about": "   ", "deck": "Deck"}, "Deck"),
        ({"body_md": "", "deck": "Deck"}, "Deck"),
        ({"body_md": " "}, ""),
        ({"body_md": "   ", "about": "", "deck": ""}, ""),
    ],
)
def test_fallback_body(fields, expected):
    assert fallback_body(Post(slug="p", title="P", **fields)) == expected


def test_post_page_body_fallbacks(composer):
    assert composer.post("release").body_md == "# Hello\n\nBody text"
    assert composer.post("about-only").body_md == "About text"
    assert composer.post("deck-only").body_md == "Deck text"


def test_news_list(composer):
    assert [post.slug for post in composer.news_list().posts] == ["release", "about-only", "deck-only"]


def test_jobs_list(composer):
    page = composer.jobs_list()

    assert [source.slug for source in page.job_sources] == ["alpha"]
    assert [role.title for role in page.role_archetypes] == ["Backend"]
    assert [job.title for job in page.jobs] == ["Engineer"]
    assert [label.name for label in page.labels] == ["Testing"]


@pytest.mark.parametrize(
    ("page", "slug"),
    [
        ("ecosystems", "nope"),
        ("tools", "nope"),
        ("events", "nope"),
        ("learn", "nope"),
        ("creators", "nope"),
        ("news", "nope"),
        ("jobs", "engineer"),
        ("home", "anything"),
        ("unknown", None),
    ],
)
def test_compose_not_found(composer, page, slug):
    with pytest.raises(EntityNotFoundError):
        composer.compose(page, slug)


@pytest.mark.parametrize(
    ("page", "slug", "template"),
    [
        ("home", None, "index"),
        ("ecosystems", None, "ecosystems-list"),
        ("ecosystems", "tokio", "ecosystem-single"),
        ("tools", None, "tools-list"),
        ("tools", "bacon", "tool-single"),
        ("events", None, "events-list"),
        ("events", "workshop", "event-single"),
        ("learn", None, "learn-list"),
        ("learn", "async", "learning-single"),
        ("creators", None, "creators-list"),
        ("creators", "pod", "creator-single"),
        ("news", None, "news-list"),
        ("news", "release", "post-single"),
        ("jobs", None, "jobs-list"),
    ],
)
def test_compose_dispatch(composer, page, slug, template):
    assert composer.compose(page, slug).template == template


def test_contexts_hold_copies(composer, repository):
    page = composer.tools_list()

    original = repository.by_slug(Collection.TOOLS, "cargo-nextest")
    assert page.categories[0].tools[0] == original
    assert page.categories[0].tools[0] is not original


def test_to_context_is_json_ready(composer):
    context = composer.tool("cargo-nextest").to_context()

    assert context["assets"] == {
        "logo_url": "https://example.com/nextest.png",
        "avatar_url": None,
        "background_url": None,
        "card_url": None,
        "teaser_thumb_url": None,
    }
    assert context["media"] is None
    assert context["has_twitter"] is False
    assert "template" not in context
