"""Content store collaborator.

``ContentSource`` is the read interface the index builder needs from the
host's content store.  ``JsonContentStore`` is a JSON-backed implementation
that loads the store file on init and saves after every write operation;
it is what the CLI and the tests run against.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from search_index.content.models import ContentItem, PostStatus, User

logger = logging.getLogger(__name__)

STORE_FILENAME = "content.json"

# Alias to avoid shadowing by JsonContentStore.list method
_list = list


class ContentSource(ABC):
    """Read-only view of the content store used by the index builder."""

    @abstractmethod
    def published_ids(self, content_type: str) -> list[int]:
        """Ids of published items of ``content_type``, newest first, unpaged."""

    @abstractmethod
    def get(self, post_id: int) -> ContentItem | None:
        """Fetch a full item (terms and thumbnail included), or None."""

    @abstractmethod
    def get_user(self, user_id: int) -> User | None:
        """Fetch a user by id, or None."""

    @abstractmethod
    def published_authors(self, content_type: str) -> list[User]:
        """Users with at least one published item of ``content_type``."""


class JsonContentStore(ContentSource):
    """JSON-backed content store.

    The file holds ``{"posts": [...], "users": [...]}``.  Records that fail
    validation are skipped with a warning rather than poisoning the store.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._posts: dict[int, ContentItem] = {}
        self._users: dict[int, User] = {}
        self._load()

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return
        if not isinstance(raw, dict):
            logger.warning("Unexpected content store shape at %s, starting fresh", self._path)
            return

        for entry in _as_records(raw.get("posts")):
            try:
                item = ContentItem.model_validate(entry)
            except ValidationError:
                logger.warning("Skipping invalid post record in %s: %r", self._path, entry.get("id"))
                continue
            if item.id > 0:
                self._posts[item.id] = item
        for entry in _as_records(raw.get("users")):
            user = User.model_validate(entry)
            if user.id > 0:
                self._users[user.id] = user

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "posts": [p.model_dump(mode="json") for p in self._posts.values()],
            "users": [u.model_dump(mode="json") for u in self._users.values()],
        }
        self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def _published(self, content_type: str) -> _list[ContentItem]:
        items = [
            p for p in self._posts.values()
            if p.type == content_type and p.status == PostStatus.PUBLISH
        ]
        return sorted(items, key=lambda p: (p.date, p.id), reverse=True)

    # ── ContentSource ────────────────────────────────────────────

    def published_ids(self, content_type: str) -> _list[int]:
        return [p.id for p in self._published(content_type)]

    def get(self, post_id: int) -> ContentItem | None:
        return self._posts.get(post_id)

    def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def published_authors(self, content_type: str) -> _list[User]:
        author_ids = {p.author for p in self._published(content_type)}
        return [self._users[uid] for uid in sorted(author_ids) if uid in self._users]

    # ── Write operations ─────────────────────────────────────────

    def upsert(self, item: ContentItem) -> None:
        """Insert or replace a content item by id."""
        self._posts[item.id] = item
        self._save()

    def upsert_user(self, user: User) -> None:
        """Insert or replace a user by id."""
        self._users[user.id] = user
        self._save()

    def update_status(self, post_id: int, status: str) -> str:
        """Set the status of an item and return the previous status.

        Raises KeyError if the id does not exist.
        """
        item = self._posts.get(post_id)
        if item is None:
            raise KeyError(post_id)
        old = item.status
        item.status = status
        self._save()
        return old

    def delete(self, post_id: int) -> ContentItem | None:
        """Permanently remove an item.  Returns the removed item, if any."""
        item = self._posts.pop(post_id, None)
        if item is not None:
            self._save()
        return item

    def list(self) -> _list[ContentItem]:
        """Return every item regardless of type or status."""
        return _list(self._posts.values())


def _as_records(value: Any) -> _list[dict[str, Any]]:
    if not isinstance(value, _list):
        return []
    return [v for v in value if isinstance(v, dict)]
