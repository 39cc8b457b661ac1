"""Unified configuration loaded from .search-index.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from search_index.index.urls import site_host_of

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".search-index.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG_PATH = Path.home() / ".config" / "search-index" / "config.toml"


class OutputConfig(BaseModel):
    """[output] section — the artifacts live under ``<directory>/search/``."""

    directory: str = "./public/uploads"


class StoreConfig(BaseModel):
    """[store] section."""

    content_path: str = "./content.json"
    settings_path: str = "./settings.json"


class SiteConfig(BaseModel):
    """[site] section."""

    url: str = ""
    content_type: str = "post"
    blog_base: str = "/blog"

    @property
    def host(self) -> str | None:
        return site_host_of(self.url)


class SearchIndexConfig(BaseModel):
    """Top-level configuration model."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    site: SiteConfig = Field(default_factory=SiteConfig)

    @property
    def output_dir(self) -> Path:
        return Path(self.output.directory)

    @property
    def content_path(self) -> Path:
        return Path(self.store.content_path)

    @property
    def settings_path(self) -> Path:
        return Path(self.store.settings_path)


def load_config(path: str | Path | None = None) -> SearchIndexConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .search-index.toml in CWD
    3. ~/.config/search-index/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG_PATH.exists():
            data = _load_toml(GLOBAL_CONFIG_PATH)
            logger.info("Loaded config from %s", GLOBAL_CONFIG_PATH)

    config = SearchIndexConfig.model_validate(data) if data else SearchIndexConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: SearchIndexConfig, **cli_kwargs: object) -> SearchIndexConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "output_directory": ("output", "directory"),
        "content_path": ("store", "content_path"),
        "settings_path": ("store", "settings_path"),
        "site_url": ("site", "url"),
        "content_type": ("site", "content_type"),
    }

    for key, value in cli_kwargs.items():
        if value is None or key not in mapping:
            continue
        section, field = mapping[key]
        data[section][field] = str(value)

    return SearchIndexConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SearchIndexConfig) -> SearchIndexConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SEARCH_INDEX_OUTPUT_DIR": ("output", "directory"),
        "SEARCH_INDEX_CONTENT_PATH": ("store", "content_path"),
        "SEARCH_INDEX_SETTINGS_PATH": ("store", "settings_path"),
        "SEARCH_INDEX_SITE_URL": ("site", "url"),
        "SEARCH_INDEX_CONTENT_TYPE": ("site", "content_type"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return SearchIndexConfig.model_validate(data)
