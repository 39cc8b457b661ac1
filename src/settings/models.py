"""Settings models — the immutable snapshot handed to the index builder.

The settings store holds loosely typed values under named option keys.
``Settings`` is built from those values once per rebuild; anything of the
wrong shape falls back to its default here and nowhere else.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Option keys in the settings store
CONTENT_MODE_OPTION = "search_index_content_mode"
TRUNCATE_WORDS_OPTION = "search_index_truncate_words"
STRIP_REGEX_OPTION = "search_index_strip_regex"
SHORTCODES_OPTION = "search_index_shortcodes"
RESOURCE_OPTION = "search_index_enable_resource_tags"
CATEGORY_SETTINGS_OPTION = "blog-categories-settings"
RESOURCE_TAG_SETTINGS_OPTION = "blog-resource-tag-settings"
PROFILE_SETTINGS_OPTION = "user-profile-details"

OVERRIDE_OPTIONS = (
    CATEGORY_SETTINGS_OPTION,
    RESOURCE_TAG_SETTINGS_OPTION,
    PROFILE_SETTINGS_OPTION,
)

DEFAULT_TRUNCATE_WORDS = 40
DEFAULT_STRIP_REGEX = r"/\[(?:\/)?vc_[^\]]*\]/i"

# Shortcodes the host registers out of the box; bracketed text with any
# other name is ordinary prose
DEFAULT_SHORTCODES = ("audio", "caption", "embed", "gallery", "playlist", "video", "wp_caption")

# Reserved key in the profile map carrying the default author picture
DEFAULT_PROFILE_KEY = "default"


class ContentMode(StrEnum):
    """Which source text feeds the ``content`` field."""

    EXCERPT = "excerpt"
    FULL = "full"


class CategorySetting(BaseModel):
    """Display overrides for one category."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    color: str = ""


class ResourceTagSetting(BaseModel):
    """Display overrides for one resource tag."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    color: str = ""
    icon: str = ""


class AuthorProfile(BaseModel):
    """Profile overrides for one author."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    picture: str = ""


def _override_map(value: Any, model: type[BaseModel]) -> dict[str, Any]:
    if not isinstance(value, dict):
        return {}
    result: dict[str, Any] = {}
    for key, entry in value.items():
        if isinstance(entry, model):
            result[str(key)] = entry
            continue
        if not isinstance(entry, dict):
            continue
        fields = {
            k: str(v) for k, v in entry.items()
            if k in model.model_fields and isinstance(v, (str, int, float)) and not isinstance(v, bool)
        }
        result[str(key)] = model.model_validate(fields)
    return result


class Settings(BaseModel):
    """Immutable settings snapshot for one rebuild."""

    model_config = ConfigDict(frozen=True)

    content_mode: ContentMode = ContentMode.EXCERPT
    truncate_words: int = DEFAULT_TRUNCATE_WORDS
    strip_regex: str = ""
    shortcodes: tuple[str, ...] = DEFAULT_SHORTCODES
    resource_tags_enabled: bool = True
    category_settings: dict[str, CategorySetting] = Field(default_factory=dict)
    resource_tag_settings: dict[str, ResourceTagSetting] = Field(default_factory=dict)
    profile_settings: dict[str, AuthorProfile] = Field(default_factory=dict)

    @field_validator("content_mode", mode="before")
    @classmethod
    def _mode(cls, value: Any) -> Any:
        if value in (ContentMode.EXCERPT, ContentMode.FULL):
            return value
        return ContentMode.EXCERPT

    @field_validator("truncate_words", mode="before")
    @classmethod
    def _truncate(cls, value: Any) -> int:
        try:
            words = int(value)
        except (TypeError, ValueError):
            return DEFAULT_TRUNCATE_WORDS
        return max(words, 0)

    @field_validator("strip_regex", mode="before")
    @classmethod
    def _regex(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("shortcodes", mode="before")
    @classmethod
    def _shortcodes(cls, value: Any) -> tuple[str, ...]:
        if not isinstance(value, (list, tuple)):
            return DEFAULT_SHORTCODES
        return tuple(n.strip() for n in value if isinstance(n, str) and n.strip())

    @field_validator("resource_tags_enabled", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return parse_flag(value)

    @field_validator("category_settings", mode="before")
    @classmethod
    def _categories(cls, value: Any) -> dict[str, Any]:
        return _override_map(value, CategorySetting)

    @field_validator("resource_tag_settings", mode="before")
    @classmethod
    def _resource_tags(cls, value: Any) -> dict[str, Any]:
        return _override_map(value, ResourceTagSetting)

    @field_validator("profile_settings", mode="before")
    @classmethod
    def _profiles(cls, value: Any) -> dict[str, Any]:
        return _override_map(value, AuthorProfile)

    @property
    def default_picture(self) -> str:
        profile = self.profile_settings.get(DEFAULT_PROFILE_KEY)
        return profile.picture if profile else ""


def parse_flag(value: Any) -> bool:
    """Interpret a stored option value as a boolean flag."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return False
