"""Centralized logging configuration for devhub."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "DEVHUB_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)


def _resolve_level(level_name: str | None = None) -> int:
    """Return the logging level requested explicitly or via environment variable."""
    name = (level_name or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level_name: str | None = None) -> None:
    """Configure the root logger once with a Rich handler."""
    root_logger = logging.getLogger()

    managed = next(
        (h for h in root_logger.handlers if getattr(h, "_devhub_managed", False)),
        None,
    )
    if managed is None:
        root_logger.handlers.clear()
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._devhub_managed = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

    root_logger.setLevel(_resolve_level(level_name))
    logging.captureWarnings(True)

    # Uvicorn installs its own handlers; route them through ours.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
