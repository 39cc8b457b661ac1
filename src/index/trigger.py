"""Rebuild trigger — change events to synchronous rebuilds.

The host wires its own notification bus to these handlers; nothing is
registered or queued here.  Each relevant event runs one full ``build()``
before the handler returns.  Handlers return True when a rebuild ran.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel

from search_index.content.models import PostStatus
from search_index.index.assembler import IndexAssembler
from search_index.settings.models import OVERRIDE_OPTIONS
from search_index.settings.store import SettingsStore

logger = logging.getLogger(__name__)


class ContentEventKind(StrEnum):
    SAVED = "saved"
    TRASHED = "trashed"
    DELETED = "deleted"
    STATUS_CHANGED = "status_changed"


class ContentEvent(BaseModel):
    """A content-store notification.

    ``post_type`` is None when the host no longer knows the item's type
    (e.g. after a permanent delete).
    """

    kind: ContentEventKind
    post_id: int
    post_type: str | None = None
    status: str = ""
    old_status: str = ""
    is_revision: bool = False
    is_autosave: bool = False


class RebuildTrigger:
    """Stateless event handlers around an ``IndexAssembler``."""

    def __init__(self, assembler: IndexAssembler, settings_store: SettingsStore) -> None:
        self.assembler = assembler
        self.settings_store = settings_store

    @property
    def content_type(self) -> str:
        return self.assembler.content_type

    def _rebuild(self, reason: str) -> bool:
        logger.debug("Rebuilding search index: %s", reason)
        self.assembler.build()
        return True

    def _type_matches(self, post_type: str | None) -> bool:
        return post_type is None or post_type == self.content_type

    def on_content_changed(self, event: ContentEvent) -> bool:
        """Dispatch a content event to its handler."""
        handlers = {
            ContentEventKind.SAVED: self.on_content_saved,
            ContentEventKind.TRASHED: self.on_content_trashed,
            ContentEventKind.DELETED: self.on_content_deleted,
        }
        if event.kind == ContentEventKind.STATUS_CHANGED:
            return self.on_status_changed(event.status, event.old_status, event.post_type)
        return handlers[event.kind](event)

    def on_content_saved(self, event: ContentEvent) -> bool:
        if event.is_revision or event.is_autosave:
            logger.debug("Ignoring revision/autosave of %d", event.post_id)
            return False
        if event.post_type != self.content_type:
            return False
        if event.status not in (PostStatus.PUBLISH, PostStatus.TRASH):
            return False
        return self._rebuild(f"saved {event.post_id}")

    def on_content_trashed(self, event: ContentEvent) -> bool:
        if not self._type_matches(event.post_type):
            return False
        return self._rebuild(f"trashed {event.post_id}")

    def on_content_deleted(self, event: ContentEvent) -> bool:
        if not self._type_matches(event.post_type):
            return False
        return self._rebuild(f"deleted {event.post_id}")

    def on_status_changed(self, new_status: str, old_status: str, post_type: str | None) -> bool:
        """Rebuild when an item moves into or out of ``publish``."""
        if post_type != self.content_type:
            return False
        if PostStatus.PUBLISH not in (new_status, old_status):
            return False
        return self._rebuild(f"status {old_status} -> {new_status}")

    def on_settings_changed(self, key: str) -> bool:
        """Override maps only matter while the resource export is enabled."""
        if key not in OVERRIDE_OPTIONS:
            return False
        if not self.settings_store.resource_export_enabled():
            logger.debug("Ignoring %s change: resource export disabled", key)
            return False
        return self._rebuild(f"settings {key}")
