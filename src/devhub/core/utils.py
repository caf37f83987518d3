"""Slug helpers shared by the seed model and the repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devhub.core.types import Resource

_SEPARATORS = frozenset("-_/")


def slugify(text: str) -> str:
    """Convert text to a URL-safe slug.

    ASCII letters and digits are lowercased, runs of whitespace, ``-``, ``_``
    and ``/`` collapse into a single hyphen, and everything else (including
    non-ASCII characters) is dropped. The result never starts or ends with a
    hyphen and may be empty.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("  async__io / tokio ")
        'async-io-tokio'
        >>> slugify("Café")
        'caf'

    """
    chars: list[str] = []
    for ch in text:
        if ch.isascii() and ch.isalnum():
            chars.append(ch.lower())
        elif (ch.isspace() or ch in _SEPARATORS) and (not chars or chars[-1] != "-"):
            chars.append("-")
    return "".join(chars).strip("-")


def derive_resource_slug(resource: Resource) -> str | None:
    """Return the slug a resource is indexed under, or None when none is usable.

    Priority: the explicit slug, then the last non-empty URL path segment cut at
    its first dot, then the title. Derived candidates are slugified; an empty
    candidate falls through to the next source.
    """
    if resource.slug:
        return resource.slug

    segments = [segment for segment in resource.url.split("/") if segment]
    if segments:
        stem = segments[-1].split(".", 1)[0]
        slug = slugify(stem)
        if slug:
            return slug

    slug = slugify(resource.title)
    return slug or None
