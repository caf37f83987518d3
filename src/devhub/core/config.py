import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = ".devhub.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )
    seed_path: Path = Field(default=Path("static/seed.json"), description="Seed content document")
    promo_path: Path = Field(default=Path("static/promo.json"), description="Optional promo slides document")
    templates_dir: Path | None = Field(
        default=None,
        description="Page templates directory (defaults to the packaged templates)",
    )

    @property
    def abs_seed_path(self) -> Path:
        return self._resolve(self.seed_path)

    @property
    def abs_promo_path(self) -> Path:
        return self._resolve(self.promo_path)

    @property
    def abs_templates_dir(self) -> Path | None:
        if self.templates_dir is None:
            return None
        return self._resolve(self.templates_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    allowed_hosts: list[str] = Field(
        default_factory=lambda: ["localhost"],
        description="Host names served; any other Host header gets a 404",
    )
    allow_loopback: bool = Field(default=True, description="Also serve any 127.* host")
    html_cache_control: str = Field(
        default="public, max-age=120, stale-while-revalidate=60",
        description="Cache-Control header sent with rendered HTML",
    )


class CarouselSettings(BaseModel):
    """Homepage carousel bounds."""

    limit: int = Field(default=7, ge=0, description="Maximum number of carousel items")
    posts: int = Field(default=4, ge=0, description="Number of leading posts considered")
    events: int = Field(default=3, ge=0, description="Number of upcoming events considered")


class DevhubConfig(BaseSettings):
    """Root configuration for devhub.

    Supports environment variable overrides with the pattern:
    DEVHUB_SECTION__KEY (e.g., DEVHUB_SERVER__PORT)
    """

    paths: PathsSettings = Field(default_factory=PathsSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    carousel: CarouselSettings = Field(default_factory=CarouselSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="DEVHUB_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "DevhubConfig":
        """Loads configuration from .devhub.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (DEVHUB_SECTION__KEY)
        2. Config file (.devhub.toml in the site root)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            with config_file.open("rb") as f:
                file_settings = tomllib.load(f)

        env_settings = cls().model_dump(exclude_unset=True)

        merged_config = _deep_merge(file_settings, env_settings)
        merged_config.setdefault("paths", {})["site_root"] = root_path

        return cls.model_validate(merged_config)
