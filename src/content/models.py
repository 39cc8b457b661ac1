"""Content domain models — pure Pydantic v2 data types.

These models are the boundary between the external content store and the
index builder.  Loose records (missing keys, wrong types, ``None`` where a
string belongs) are normalized once here, in the ``mode="before"``
validators, so the mapping code never re-checks optionality.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class PostStatus(StrEnum):
    """Publication status of a content item."""

    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    FUTURE = "future"
    TRASH = "trash"


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


class Term(BaseModel):
    """A category or tag attached to a content item."""

    id: int = 0
    name: str = ""
    slug: str = ""

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            return {}
        return {
            "id": _as_int(data.get("id")),
            "name": _as_str(data.get("name")),
            "slug": _as_str(data.get("slug")),
        }


class Thumbnail(BaseModel):
    """Featured image attached to a content item."""

    url: str = ""
    alt: str = ""

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        if isinstance(data, str):
            return {"url": data}
        if not isinstance(data, dict):
            return {}
        return {
            "url": _as_str(data.get("url")),
            "alt": _as_str(data.get("alt")),
        }


class User(BaseModel):
    """An author record from the content store."""

    id: int = 0
    name: str = ""
    slug: str = ""
    avatar_url: str = ""

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            return {}
        return {
            "id": _as_int(data.get("id")),
            "name": _as_str(data.get("name")),
            "slug": _as_str(data.get("slug")),
            "avatar_url": _as_str(data.get("avatar_url")),
        }


class ContentItem(BaseModel):
    """A single content entry as the index builder sees it."""

    id: int
    type: str = "post"
    status: str = PostStatus.DRAFT
    title: str = ""
    body: str = ""
    excerpt: str = ""
    date: datetime = Field(default_factory=lambda: datetime(1970, 1, 1, tzinfo=UTC))
    author: int = 0
    slug: str = ""
    permalink: str = ""
    categories: list[Term] = Field(default_factory=list)
    tags: list[Term] = Field(default_factory=list)
    thumbnail: Thumbnail | None = None

    @field_validator("type", "status", "title", "body", "excerpt", "slug", "permalink", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return _as_str(value)

    @field_validator("author", mode="before")
    @classmethod
    def _author(cls, value: Any) -> int:
        return _as_int(value)

    @field_validator("categories", "tags", mode="before")
    @classmethod
    def _terms(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [t for t in value if isinstance(t, (dict, Term))]

    @field_validator("thumbnail", mode="before")
    @classmethod
    def _thumbnail(cls, value: Any) -> Any:
        if not value:
            return None
        if isinstance(value, (dict, str, Thumbnail)):
            return value
        return None

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> Any:
        if value in (None, ""):
            return datetime(1970, 1, 1, tzinfo=UTC)
        return value

    @field_validator("date")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        # Naive timestamps from the store are GMT.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISH
