"""In-memory content repository built once from the seed document.

The repository owns every entity. It is constructed in a single pass over the
seed and exposes read operations only, so one instance can be shared by any
number of concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple

from devhub.core.types import (
    Creator,
    Ecosystem,
    Event,
    Job,
    JobSource,
    Label,
    LearningPath,
    Post,
    Resource,
    RoleArchetype,
    Seed,
    SeedModel,
    Tool,
    ToolCategory,
)
from devhub.core.utils import derive_resource_slug

logger = logging.getLogger(__name__)


class Collection(str, Enum):
    ECOSYSTEMS = "ecosystems"
    TOOLS = "tools"
    EVENTS = "events"
    LEARNING_PATHS = "learning_paths"
    CREATORS = "creators"
    POSTS = "posts"
    RESOURCES = "resources"
    JOB_SOURCES = "job_sources"


class DanglingReference(NamedTuple):
    """A foreign slug that does not resolve in its target collection."""

    owner: str
    collection: Collection
    slug: str


def build_index(items: Sequence[Any], key: Callable[[Any], str]) -> Mapping[str, int]:
    """Map each item's key to its position. Later duplicates win."""
    return MappingProxyType({key(item): idx for idx, item in enumerate(items)})


class ContentRepository:
    """Slug-indexed, read-only view over one seed document."""

    def __init__(self, seed: Seed) -> None:
        self._ecosystems: tuple[Ecosystem, ...] = tuple(seed.ecosystems)
        self._tools: tuple[Tool, ...] = tuple(seed.tools)
        self._events: tuple[Event, ...] = tuple(seed.events)
        self._learning_paths: tuple[LearningPath, ...] = tuple(seed.learning_paths)
        self._creators: tuple[Creator, ...] = tuple(seed.creators)
        self._posts: tuple[Post, ...] = tuple(seed.posts)
        self._jobs: tuple[Job, ...] = tuple(seed.jobs)

        self._indices: Mapping[Collection, Mapping[str, int]] = MappingProxyType(
            {
                Collection.ECOSYSTEMS: build_index(self._ecosystems, lambda e: e.slug),
                Collection.TOOLS: build_index(self._tools, lambda t: t.slug),
                Collection.EVENTS: build_index(self._events, lambda e: e.slug),
                Collection.LEARNING_PATHS: build_index(self._learning_paths, lambda p: p.slug),
                Collection.CREATORS: build_index(self._creators, lambda c: c.slug),
                Collection.POSTS: build_index(self._posts, lambda p: p.slug),
            }
        )

        resources: dict[str, Resource] = {}
        for resource in seed.resources:
            slug = derive_resource_slug(resource)
            if slug is None:
                logger.debug("Dropping resource without usable slug: %r", resource.title or resource.url)
                continue
            resources[slug] = resource.model_copy(update={"slug": slug})
        self._resources: Mapping[str, Resource] = MappingProxyType(resources)

        self._job_sources: Mapping[str, JobSource] = MappingProxyType(
            {source.slug: source for source in seed.job_sources}
        )

        self._tool_categories: tuple[ToolCategory, ...] = tuple(seed.pages.tools.categories)
        self._learn_tracks: tuple[str, ...] = tuple(seed.pages.learn.tracks)
        self._role_archetypes: tuple[RoleArchetype, ...] = tuple(seed.pages.work.role_archetypes)
        self._job_source_slugs: tuple[str, ...] = tuple(seed.pages.work.job_sources)
        self._labels: tuple[Label, ...] = tuple(seed.taxonomy.labels)

        logger.info(
            "Content repository ready: %d ecosystems, %d tools, %d events, %d learning paths, "
            "%d creators, %d posts, %d resources, %d job sources, %d jobs",
            len(self._ecosystems),
            len(self._tools),
            len(self._events),
            len(self._learning_paths),
            len(self._creators),
            len(self._posts),
            len(self._resources),
            len(self._job_sources),
            len(self._jobs),
        )

    # --- Collections ---
    @property
    def ecosystems(self) -> tuple[Ecosystem, ...]:
        return self._ecosystems

    @property
    def tools(self) -> tuple[Tool, ...]:
        return self._tools

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    @property
    def learning_paths(self) -> tuple[LearningPath, ...]:
        return self._learning_paths

    @property
    def creators(self) -> tuple[Creator, ...]:
        return self._creators

    @property
    def posts(self) -> tuple[Post, ...]:
        return self._posts

    @property
    def jobs(self) -> tuple[Job, ...]:
        return self._jobs

    @property
    def resources(self) -> Mapping[str, Resource]:
        return self._resources

    @property
    def job_sources(self) -> Mapping[str, JobSource]:
        return self._job_sources

    # --- Page configuration ---
    @property
    def tool_categories(self) -> tuple[ToolCategory, ...]:
        return self._tool_categories

    @property
    def learn_tracks(self) -> tuple[str, ...]:
        return self._learn_tracks

    @property
    def role_archetypes(self) -> tuple[RoleArchetype, ...]:
        return self._role_archetypes

    @property
    def job_source_slugs(self) -> tuple[str, ...]:
        return self._job_source_slugs

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._labels

    # --- Lookups ---
    def by_slug(self, collection: Collection, slug: str) -> Any | None:
        """Return the entity stored under ``slug`` or None."""
        if collection is Collection.RESOURCES:
            return self._resources.get(slug)
        if collection is Collection.JOB_SOURCES:
            return self._job_sources.get(slug)
        idx = self._indices[collection].get(slug)
        if idx is None:
            return None
        return self._items(collection)[idx]

    def many(self, collection: Collection, slugs: Iterable[str]) -> list[Any]:
        """Resolve foreign slugs in input order, silently skipping unknown ones."""
        resolved = []
        for slug in slugs:
            item = self.by_slug(collection, slug)
            if item is not None:
                resolved.append(item)
        return resolved

    def job_sources_in_order(self) -> list[JobSource]:
        """Job sources in configured order, or all of them sorted by name."""
        ordered = self.many(Collection.JOB_SOURCES, self._job_source_slugs)
        if ordered:
            return ordered
        return sorted(self._job_sources.values(), key=lambda source: source.name)

    def learning_paths_for_tracks(self) -> list[LearningPath]:
        """Learning paths in track order, or in source order when tracks resolve to nothing."""
        if not self._learn_tracks:
            return list(self._learning_paths)
        ordered = self.many(Collection.LEARNING_PATHS, self._learn_tracks)
        return ordered or list(self._learning_paths)

    def upcoming_events(self) -> list[Event]:
        """Events whose status is exactly ``upcoming``, in source order."""
        return [event for event in self._events if event.status == "upcoming"]

    def dangling_references(self) -> list[DanglingReference]:
        """List every foreign slug that does not resolve. Used for authoring diagnostics."""
        dangling: list[DanglingReference] = []

        def check(owner: str, collection: Collection, slugs: Iterable[str]) -> None:
            dangling.extend(
                DanglingReference(owner, collection, slug)
                for slug in slugs
                if self.by_slug(collection, slug) is None
            )

        for category in self._tool_categories:
            check(f"pages.tools.categories[{category.slug}]", Collection.TOOLS, category.items)
        check("pages.learn.tracks", Collection.LEARNING_PATHS, self._learn_tracks)
        check("pages.work.job_sources", Collection.JOB_SOURCES, self._job_source_slugs)
        for ecosystem in self._ecosystems:
            check(f"ecosystems[{ecosystem.slug}].featured_tools", Collection.TOOLS, ecosystem.featured_tools)
        for path in self._learning_paths:
            check(f"learning_paths[{path.slug}].resources", Collection.RESOURCES, path.resources)
        for post in self._posts:
            if post.related is None:
                continue
            check(f"posts[{post.slug}].related.tools", Collection.TOOLS, post.related.tools)
            check(f"posts[{post.slug}].related.events", Collection.EVENTS, post.related.events)
            check(f"posts[{post.slug}].related.protocols", Collection.ECOSYSTEMS, post.related.protocols)
        return dangling

    def _items(self, collection: Collection) -> Sequence[SeedModel]:
        return {
            Collection.ECOSYSTEMS: self._ecosystems,
            Collection.TOOLS: self._tools,
            Collection.EVENTS: self._events,
            Collection.LEARNING_PATHS: self._learning_paths,
            Collection.CREATORS: self._creators,
            Collection.POSTS: self._posts,
        }[collection]
