"""Centralized exceptions for devhub."""


class DevhubError(Exception):
    """Base exception for all devhub errors."""


class MalformedSeedError(DevhubError):
    """Raised when the seed document cannot be read or decoded into the schema."""


class PromoDocumentError(DevhubError):
    """Base exception for promo document failures. Never fatal."""


class MissingPromoDocumentError(PromoDocumentError):
    """Raised when the promo document does not exist or cannot be read."""


class MalformedPromoDocumentError(PromoDocumentError):
    """Raised when the promo document is not valid for the promo schema."""


class EntityNotFoundError(DevhubError):
    """Raised when a requested slug has no record in its collection."""

    def __init__(self, collection: str, slug: str) -> None:
        self.collection = collection
        self.slug = slug
        super().__init__(f"No {collection} entry with slug {slug!r}")


class RenderError(DevhubError):
    """Raised when the template engine fails to produce markup."""

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Failed to render {template!r}: {reason}")
