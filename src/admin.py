"""Administrative actions and the status view.

Thin callers around the index builder: wiring stores from config, the
manual rebuild, the settings save action, activation defaults, and a
read-only status summary of the emitted artifacts.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from search_index.config import SearchIndexConfig
from search_index.content.store import JsonContentStore
from search_index.index.assembler import IndexAssembler
from search_index.index.models import BuildReport
from search_index.index.normalizer import is_valid_strip_regex
from search_index.index.trigger import RebuildTrigger
from search_index.settings.models import (
    CONTENT_MODE_OPTION,
    DEFAULT_STRIP_REGEX,
    RESOURCE_OPTION,
    STRIP_REGEX_OPTION,
    TRUNCATE_WORDS_OPTION,
    ContentMode,
)
from search_index.settings.store import SettingsStore

logger = logging.getLogger(__name__)


class Services:
    """Stores, assembler and trigger wired from one config."""

    def __init__(self, config: SearchIndexConfig) -> None:
        self.config = config
        self.content = JsonContentStore(config.content_path)
        self.settings = SettingsStore(config.settings_path)
        self.assembler = IndexAssembler(
            self.content,
            self.settings,
            config.output_dir,
            content_type=config.site.content_type,
            blog_base=config.site.blog_base,
            site_host=config.site.host,
        )
        self.trigger = RebuildTrigger(self.assembler, self.settings)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def manual_rebuild(assembler: IndexAssembler) -> BuildReport:
    """Rebuild now, regardless of what changed."""
    return assembler.build()


def save_settings(
    settings: SettingsStore,
    assembler: IndexAssembler,
    *,
    mode: str = ContentMode.EXCERPT,
    truncate_words: int = 40,
    strip_regex: str = "",
    resource_tags: bool = False,
) -> BuildReport:
    """Validate and persist the index options, then rebuild.

    An unknown mode becomes ``excerpt``, a negative limit becomes 0 and a
    regex that does not compile is stored as empty.
    """
    if mode not in (ContentMode.EXCERPT, ContentMode.FULL):
        mode = ContentMode.EXCERPT
    truncate_words = max(truncate_words, 0)
    if not is_valid_strip_regex(strip_regex):
        logger.warning("Rejected invalid strip regex %r", strip_regex)
        strip_regex = ""

    settings.set(CONTENT_MODE_OPTION, str(mode))
    settings.set(TRUNCATE_WORDS_OPTION, truncate_words)
    settings.set(STRIP_REGEX_OPTION, strip_regex)
    settings.set(RESOURCE_OPTION, "1" if resource_tags else "0")
    return assembler.build()


def activate(settings: SettingsStore, assembler: IndexAssembler) -> BuildReport:
    """Seed defaults for unset options and run the first build."""
    if not settings.get(STRIP_REGEX_OPTION):
        settings.set(STRIP_REGEX_OPTION, DEFAULT_STRIP_REGEX)
    if not settings.has(RESOURCE_OPTION):
        settings.set(RESOURCE_OPTION, "1")
    return assembler.build()


# ---------------------------------------------------------------------------
# Status view
# ---------------------------------------------------------------------------


class ArtifactStatus(BaseModel):
    """On-disk state of one emitted document."""

    path: Path
    exists: bool = False
    size: int = 0
    modified: datetime | None = None
    version: str = ""
    generated_at: str = ""
    count: int | None = None


class IndexStatus(BaseModel):
    index: ArtifactStatus
    resource_export_enabled: bool
    resource_tags: ArtifactStatus | None = None


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def artifact_status(path: Path, list_key: str) -> ArtifactStatus:
    """Describe one artifact; unreadable content leaves fields blank."""
    if not path.is_file():
        return ArtifactStatus(path=path)
    stat = path.stat()
    data = _read_json(path)
    entries = data.get(list_key)
    version = data.get("version")
    generated = data.get("generatedAt")
    return ArtifactStatus(
        path=path,
        exists=True,
        size=stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        version=version if isinstance(version, str) else "",
        generated_at=generated if isinstance(generated, str) else "",
        count=len(entries) if isinstance(entries, list) else None,
    )


def index_status(assembler: IndexAssembler, settings: SettingsStore) -> IndexStatus:
    enabled = settings.resource_export_enabled()
    return IndexStatus(
        index=artifact_status(assembler.index_path, "items"),
        resource_export_enabled=enabled,
        resource_tags=artifact_status(assembler.resource_tags_path, "posts") if enabled else None,
    )
