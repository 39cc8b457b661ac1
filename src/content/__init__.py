"""Content domain — boundary models and the content store collaborator.

The index builder only ever reads content through ``ContentSource``;
``JsonContentStore`` is the file-backed implementation used by the CLI.
"""

from search_index.content.models import (
    ContentItem,
    PostStatus,
    Term,
    Thumbnail,
    User,
)
from search_index.content.store import STORE_FILENAME, ContentSource, JsonContentStore

__all__ = [
    "STORE_FILENAME",
    "ContentItem",
    "ContentSource",
    "JsonContentStore",
    "PostStatus",
    "Term",
    "Thumbnail",
    "User",
]
