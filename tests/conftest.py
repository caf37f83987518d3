from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from devhub.core.config import DevhubConfig
from devhub.core.repository import ContentRepository
from devhub.core.types import PromoContent, Seed
from devhub.engine.embeds import EmbedResolver
from devhub.engine.template_loader import TemplateLoader
from devhub.engine.views import ViewComposer


def make_seed_data() -> dict[str, Any]:
    return {
        "pages": {
            "tools": {
                "categories": [
                    {"slug": "testing", "title": "Testing", "items": ["cargo-nextest", "ghost-tool"]},
                    {"slug": "lint", "title": "Lint", "items": ["clippy"]},
                ]
            },
            "learn": {"tracks": ["async", "basics"]},
            "work": {
                "job_sources": ["alpha", "nope"],
                "role_archetypes": [{"title": "Backend", "tags": ["async"]}],
            },
        },
        "ecosystems": [
            {
                "slug": "tokio",
                "name": "Tokio",
                "one_liner": "Async runtime",
                "topics": ["async", "io"],
                "official_links": {"site": "https://tokio.example"},
                "featured_tools": ["clippy", "ghost-tool", "cargo-nextest"],
                "featured_media": {"youtube": {"title": "Tokio intro", "url": "https://youtu.be/abc123?t=10"}},
            },
            {"slug": "embedded", "name": "Embedded"},
        ],
        "tools": [
            {
                "slug": "cargo-nextest",
                "name": "cargo-nextest",
                "category": "testing",
                "description": "Next-generation test runner",
                "labels": ["testing"],
                "tier": "core",
                "media": {"logo_url": "https://example.com/nextest.png"},
            },
            {
                "slug": "clippy",
                "name": "Clippy",
                "category": "lint",
                "featured_media": {"x": {"title": "Clippy thread", "url": "https://x.com/clippy/status/1"}},
            },
            {"slug": "bacon", "name": "bacon"},
        ],
        "events": [
            {
                "slug": "conf-2025",
                "title": "Conf 2025",
                "status": "upcoming",
                "starts_on": "2025-09-01",
                "location": "Berlin",
                "tags": ["conf"],
            },
            {"slug": "old-meetup", "title": "Old meetup", "status": "past"},
            {"slug": "caps-meetup", "title": "Caps meetup", "status": "Past"},
            {"slug": "workshop", "title": "Workshop", "location": "Remote"},
        ],
        "learning_paths": [
            {
                "slug": "basics",
                "title": "Basics",
                "difficulty": "beginner",
                "duration_hours": 10,
                "milestones": ["Install", "Hello world"],
                "resources": ["book", "intro", "ghost-resource"],
            },
            {"slug": "async", "title": "Async"},
        ],
        "creators": [
            {"slug": "jon", "name": "Jon", "type": "youtube"},
            {"slug": "weekly", "name": "Weekly", "type": "newsletter"},
            {"slug": "pod", "name": "Pod", "type": "podcast"},
            {"slug": "talks", "name": "Talks", "type": "playlist"},
            {
                "slug": "blogger",
                "name": "Blogger",
                "type": "blog",
                "best_start": {"title": "Start here", "url": "   "},
            },
            {
                "slug": "jane",
                "name": "Jane",
                "type": "youtube",
                "best_start": {"title": "First video", "url": "https://youtu.be/xyz"},
            },
        ],
        "posts": [
            {
                "slug": "release",
                "title": "Release notes",
                "deck": "A new release",
                "kind": "release",
                "published_on": "2025-01-02",
                "tags": ["release"],
                "body_md": "# Hello\n\nBody text",
            },
            {"slug": "about-only", "title": "About only", "about": "About text", "deck": "Deck text", "body_md": "  "},
            {"slug": "deck-only", "title": "Deck only", "deck": "Deck text"},
        ],
        "resources": [
            {"slug": "book", "title": "The Book", "url": "https://doc.example.org/book/"},
            {"title": "Intro guide", "url": "https://example.com/guides/intro.html"},
            {"title": "Hello World!", "url": ""},
            {"title": "", "url": ""},
        ],
        "job_sources": [
            {"slug": "beta", "name": "Beta", "url": "https://beta.example"},
            {"slug": "alpha", "name": "Alpha", "url": "https://alpha.example"},
        ],
        "taxonomy": {"labels": [{"slug": "testing", "name": "Testing", "description": "Test tooling"}]},
        "jobs": [
            {
                "slug": "engineer",
                "title": "Engineer",
                "company": {"name": "Acme", "domain": "acme.example"},
                "apply_url": "https://acme.example/jobs/1",
            }
        ],
    }


def make_promo_data() -> dict[str, Any]:
    return {
        "slides": [
            {
                "type": "promo",
                "slug": "launch",
                "title": "Launch",
                "deck": "We launched",
                "href": "https://example.com/launch",
            }
        ]
    }


@pytest.fixture
def seed_data() -> dict[str, Any]:
    return make_seed_data()


@pytest.fixture
def seed(seed_data: dict[str, Any]) -> Seed:
    return Seed.model_validate(seed_data)


@pytest.fixture
def repository(seed: Seed) -> ContentRepository:
    return ContentRepository(seed)


@pytest.fixture
def promo() -> PromoContent:
    return PromoContent.model_validate(make_promo_data())


@pytest.fixture
def templates() -> TemplateLoader:
    return TemplateLoader()


@pytest.fixture
def composer(repository: ContentRepository, templates: TemplateLoader, promo: PromoContent) -> ViewComposer:
    return ViewComposer(repository, EmbedResolver(templates), promo)


@pytest.fixture
def site_root(tmp_path: Path, seed_data: dict[str, Any]) -> Path:
    """A site directory with seed, promo and a config allowing the test client host."""
    static = tmp_path / "static"
    static.mkdir()
    (static / "seed.json").write_text(json.dumps(seed_data), encoding="utf-8")
    (static / "promo.json").write_text(json.dumps(make_promo_data()), encoding="utf-8")
    (tmp_path / ".devhub.toml").write_text('[server]\nallowed_hosts = ["testserver", "localhost"]\n')
    return tmp_path


@pytest.fixture
def config(site_root: Path) -> DevhubConfig:
    return DevhubConfig.load(site_root)
