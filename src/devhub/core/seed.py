"""Loading of the seed and promo documents."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from devhub.core.exceptions import (
    MalformedPromoDocumentError,
    MalformedSeedError,
    MissingPromoDocumentError,
    PromoDocumentError,
)
from devhub.core.types import PromoContent, Seed

logger = logging.getLogger(__name__)


def parse_seed(raw: bytes | str) -> Seed:
    """Decode the seed document.

    Raises:
        MalformedSeedError: If the payload is not JSON or does not fit the schema.

    """
    try:
        return Seed.model_validate_json(raw)
    except ValidationError as e:
        msg = f"Seed document is not valid: {e.error_count()} error(s)\n{e}"
        raise MalformedSeedError(msg) from e


def load_seed(path: Path) -> Seed:
    """Read and decode the seed document at ``path``."""
    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"Cannot read seed document {path}: {e}"
        raise MalformedSeedError(msg) from e
    seed = parse_seed(raw)
    logger.info("Loaded seed document from %s", path)
    return seed


def parse_promo(raw: bytes | str) -> PromoContent:
    try:
        return PromoContent.model_validate_json(raw)
    except ValidationError as e:
        msg = f"Promo document is not valid: {e.error_count()} error(s)"
        raise MalformedPromoDocumentError(msg) from e


def load_promo(path: Path) -> PromoContent:
    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"Cannot read promo document {path}: {e}"
        raise MissingPromoDocumentError(msg) from e
    return parse_promo(raw)


def load_promo_or_empty(path: Path) -> PromoContent:
    """Load the promo document, substituting an empty slide set on any failure."""
    try:
        promo = load_promo(path)
    except PromoDocumentError as e:
        logger.warning("%s; continuing without promo slides", e)
        return PromoContent()
    logger.info("Loaded %d promo slide(s) from %s", len(promo.slides), path)
    return promo
