"""Pure data models for the emitted search documents.

All Pydantic models live here.  No I/O, no business logic.  Field aliases
carry the camelCase names used in the JSON artifacts; serialize with
``by_alias=True``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_VERSION = "1"

# ---------------------------------------------------------------------------
# Resolved taxonomy / author attributes
# ---------------------------------------------------------------------------


class CategoryAttributes(BaseModel):
    """Display attributes of an item's primary category."""

    name: str = ""
    color: str = ""
    url: str = ""


class ResourceTagAttributes(BaseModel):
    """Display attributes of an item's resource tag."""

    name: str = ""
    slug: str = ""
    color: str = ""
    icon: str = ""
    url: str = ""


class StandardTagAttributes(BaseModel):
    """The first ordinary (non-resource) tag of an item."""

    name: str = ""
    slug: str = ""
    id: int | str = ""
    url: str = ""


class AuthorAttributes(BaseModel):
    """Resolved author display attributes."""

    id: int | str = ""
    name: str = ""
    url: str = ""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class SearchIndexRecord(BaseModel):
    """One entry of ``search/index.json``."""

    id: int
    slug: str = ""
    title: str = ""
    content: str = ""
    url: str = "/"
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class ResourceTagRecord(BaseModel):
    """One entry of the ``posts`` array of ``search/resource-tags.json``."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = ""
    summary: str = ""
    permalink: str = "/"
    date: str = ""
    reading_time: str = Field(default="1 min read", alias="readingTime")
    thumbnail: str = ""
    category: CategoryAttributes = Field(default_factory=CategoryAttributes)
    author: AuthorAttributes = Field(default_factory=AuthorAttributes)
    resource_tag: ResourceTagAttributes = Field(
        default_factory=ResourceTagAttributes, alias="resourceTag"
    )
    tag: StandardTagAttributes = Field(default_factory=StandardTagAttributes)


class AuthorPictureRecord(BaseModel):
    """One entry of the ``authors`` array of ``search/resource-tags.json``."""

    id: int | str
    name: str = ""
    slug: str = ""
    picture: str = ""


# ---------------------------------------------------------------------------
# Envelopes
# ---------------------------------------------------------------------------


class IndexEnvelope(BaseModel):
    """Top-level object of ``search/index.json``."""

    model_config = ConfigDict(populate_by_name=True)

    version: Literal["1"] = SCHEMA_VERSION
    generated_at: str = Field(alias="generatedAt")
    items: list[SearchIndexRecord] = Field(default_factory=list)


class ResourceTagEnvelope(BaseModel):
    """Top-level object of ``search/resource-tags.json``."""

    model_config = ConfigDict(populate_by_name=True)

    version: Literal["1"] = SCHEMA_VERSION
    generated_at: str = Field(alias="generatedAt")
    posts: list[ResourceTagRecord] = Field(default_factory=list)
    authors: list[AuthorPictureRecord] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Write / build results
# ---------------------------------------------------------------------------


class WriteResult(BaseModel):
    """Outcome of one document write or delete."""

    path: Path
    ok: bool
    action: Literal["write", "delete"] = "write"
    bytes_written: int = 0
    error: str = ""


class BuildReport(BaseModel):
    """What one rebuild did, artifact by artifact."""

    generated_at: str
    item_count: int = 0
    index: WriteResult | None = None
    resource_tags: WriteResult | None = None
    resource_post_count: int = 0
    author_count: int = 0

    @property
    def ok(self) -> bool:
        results = [r for r in (self.index, self.resource_tags) if r is not None]
        return all(r.ok for r in results)
