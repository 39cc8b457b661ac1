"""Index assembler — full rebuild of the search documents.

Every build starts from scratch: settings are snapshotted once, one UTC
timestamp is captured, eligible ids are selected newest first, and each id
is fetched and mapped.  ``search/index.json`` is always rebuilt;
``search/resource-tags.json`` is rebuilt while the resource-tag export is
enabled and deleted otherwise.  Write failures are isolated per artifact.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from search_index.content.models import ContentItem, User
from search_index.content.store import ContentSource
from search_index.index.mapper import (
    default_picture_record,
    map_author_picture,
    map_item,
    map_resource_item,
)
from search_index.index.models import (
    AuthorPictureRecord,
    BuildReport,
    IndexEnvelope,
    ResourceTagEnvelope,
    ResourceTagRecord,
    SearchIndexRecord,
)
from search_index.index.taxonomy import DEFAULT_BLOG_BASE
from search_index.index.writer import DocumentWriter
from search_index.settings.models import Settings
from search_index.settings.store import SettingsStore

logger = logging.getLogger(__name__)

SEARCH_DIRNAME = "search"
INDEX_FILENAME = "index.json"
RESOURCE_TAGS_FILENAME = "resource-tags.json"


def index_path(output_dir: Path) -> Path:
    return output_dir / SEARCH_DIRNAME / INDEX_FILENAME


def resource_tags_path(output_dir: Path) -> Path:
    return output_dir / SEARCH_DIRNAME / RESOURCE_TAGS_FILENAME


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _as_ids(value: Any) -> list[int]:
    """Coerce a selection result to a list of ids; other shapes mean none."""
    if not isinstance(value, list):
        logger.warning("Content selection returned %s, treating as empty", type(value).__name__)
        return []
    ids: list[int] = []
    for raw in value:
        try:
            ids.append(int(raw))
        except (TypeError, ValueError):
            continue
    return ids


class IndexAssembler:
    """Rebuilds the search documents from the content and settings stores."""

    def __init__(
        self,
        source: ContentSource,
        settings_store: SettingsStore,
        output_dir: Path,
        *,
        content_type: str = "post",
        blog_base: str = DEFAULT_BLOG_BASE,
        site_host: str | None = None,
        writer: DocumentWriter | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.source = source
        self.settings_store = settings_store
        self.output_dir = output_dir
        self.content_type = content_type
        self.blog_base = blog_base
        self.site_host = site_host
        self.writer = writer or DocumentWriter()
        self._clock = clock or _utc_now

    @property
    def index_path(self) -> Path:
        return index_path(self.output_dir)

    @property
    def resource_tags_path(self) -> Path:
        return resource_tags_path(self.output_dir)

    # ── Selection ────────────────────────────────────────────────

    def _select(self) -> list[ContentItem | None]:
        ids = _as_ids(self.source.published_ids(self.content_type))
        return [self.source.get(post_id) for post_id in ids]

    def _authors(self) -> list[User]:
        users = self.source.published_authors(self.content_type)
        if not isinstance(users, list):
            logger.warning("Author selection returned %s, treating as empty", type(users).__name__)
            return []
        return [u for u in users if isinstance(u, User) and u.id > 0]

    # ── Mapping ──────────────────────────────────────────────────

    def _index_records(
        self, items: list[ContentItem | None], settings: Settings
    ) -> list[SearchIndexRecord]:
        records = [map_item(item, settings, content_type=self.content_type) for item in items]
        return [r for r in records if r is not None]

    def _resource_records(
        self, items: list[ContentItem | None], settings: Settings
    ) -> list[ResourceTagRecord]:
        users: dict[int, User | None] = {}
        records: list[ResourceTagRecord] = []
        for item in items:
            if item is None:
                continue
            if item.author not in users:
                users[item.author] = self.source.get_user(item.author) if item.author else None
            record = map_resource_item(
                item,
                users[item.author],
                settings,
                content_type=self.content_type,
                blog_base=self.blog_base,
                site_host=self.site_host,
            )
            if record is not None:
                records.append(record)
        return records

    def _author_records(self, settings: Settings) -> list[AuthorPictureRecord]:
        records: list[AuthorPictureRecord] = []
        default = default_picture_record(settings, site_host=self.site_host)
        if default is not None:
            records.append(default)
        records.extend(
            map_author_picture(user, settings, site_host=self.site_host)
            for user in self._authors()
        )
        return records

    # ── Build ────────────────────────────────────────────────────

    def build(self) -> BuildReport:
        """Rebuild every search document from current store state."""
        settings = self.settings_store.snapshot()
        generated_at = self._clock().astimezone(UTC).isoformat(timespec="seconds")
        items = self._select()

        records = self._index_records(items, settings)
        report = BuildReport(generated_at=generated_at, item_count=len(records))
        report.index = self.writer.write(
            self.index_path,
            IndexEnvelope(generated_at=generated_at, items=records),
        )

        if settings.resource_tags_enabled:
            posts = self._resource_records(items, settings)
            authors = self._author_records(settings)
            report.resource_post_count = len(posts)
            report.author_count = len(authors)
            report.resource_tags = self.writer.write(
                self.resource_tags_path,
                ResourceTagEnvelope(generated_at=generated_at, posts=posts, authors=authors),
            )
        else:
            report.resource_tags = self.writer.delete(self.resource_tags_path)

        logger.info(
            "Rebuilt search index: %d items, resource export %s",
            report.item_count,
            "enabled" if settings.resource_tags_enabled else "disabled",
        )
        return report
