"""Settings domain — option keys, the immutable snapshot, and the store."""

from search_index.settings.models import (
    CATEGORY_SETTINGS_OPTION,
    CONTENT_MODE_OPTION,
    DEFAULT_SHORTCODES,
    DEFAULT_STRIP_REGEX,
    DEFAULT_TRUNCATE_WORDS,
    OVERRIDE_OPTIONS,
    PROFILE_SETTINGS_OPTION,
    RESOURCE_OPTION,
    RESOURCE_TAG_SETTINGS_OPTION,
    SHORTCODES_OPTION,
    STRIP_REGEX_OPTION,
    TRUNCATE_WORDS_OPTION,
    AuthorProfile,
    CategorySetting,
    ContentMode,
    ResourceTagSetting,
    Settings,
    parse_flag,
)
from search_index.settings.store import SettingsStore

__all__ = [
    "CATEGORY_SETTINGS_OPTION",
    "CONTENT_MODE_OPTION",
    "DEFAULT_SHORTCODES",
    "DEFAULT_STRIP_REGEX",
    "DEFAULT_TRUNCATE_WORDS",
    "OVERRIDE_OPTIONS",
    "PROFILE_SETTINGS_OPTION",
    "RESOURCE_OPTION",
    "RESOURCE_TAG_SETTINGS_OPTION",
    "SHORTCODES_OPTION",
    "STRIP_REGEX_OPTION",
    "TRUNCATE_WORDS_OPTION",
    "AuthorProfile",
    "CategorySetting",
    "ContentMode",
    "ResourceTagSetting",
    "Settings",
    "SettingsStore",
    "parse_flag",
]
