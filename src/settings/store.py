"""JSON-backed settings store.

Holds named option values in a single JSON object, loaded on init and
saved after every write.  ``snapshot()`` reads the options the index
builder cares about into an immutable ``Settings`` value.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from search_index.settings.models import (
    CATEGORY_SETTINGS_OPTION,
    CONTENT_MODE_OPTION,
    DEFAULT_SHORTCODES,
    DEFAULT_TRUNCATE_WORDS,
    PROFILE_SETTINGS_OPTION,
    RESOURCE_OPTION,
    RESOURCE_TAG_SETTINGS_OPTION,
    SHORTCODES_OPTION,
    STRIP_REGEX_OPTION,
    TRUNCATE_WORDS_OPTION,
    ContentMode,
    Settings,
    parse_flag,
)

logger = logging.getLogger(__name__)

class SettingsStore:
    """Key/value option store persisted as one JSON object."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._options = self._load()

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            logger.warning("Corrupt settings store at %s, starting fresh", self._path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Unexpected settings store shape at %s, starting fresh", self._path)
            return {}
        return raw

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(self._options, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key``, or ``default`` when unset."""
        return self._options.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._options

    def set(self, key: str, value: Any) -> bool:
        """Store a value.  Returns True when the stored value changed."""
        if key in self._options and self._options[key] == value:
            return False
        self._options[key] = value
        self._save()
        return True

    def resource_export_enabled(self) -> bool:
        return parse_flag(self.get(RESOURCE_OPTION, "1"))

    def snapshot(self) -> Settings:
        """Read the current options into an immutable ``Settings``."""
        return Settings(
            content_mode=self.get(CONTENT_MODE_OPTION, ContentMode.EXCERPT),
            truncate_words=self.get(TRUNCATE_WORDS_OPTION, DEFAULT_TRUNCATE_WORDS),
            strip_regex=self.get(STRIP_REGEX_OPTION, ""),
            shortcodes=self.get(SHORTCODES_OPTION, DEFAULT_SHORTCODES),
            resource_tags_enabled=self.resource_export_enabled(),
            category_settings=self.get(CATEGORY_SETTINGS_OPTION, {}),
            resource_tag_settings=self.get(RESOURCE_TAG_SETTINGS_OPTION, {}),
            profile_settings=self.get(PROFILE_SETTINGS_OPTION, {}),
        )
