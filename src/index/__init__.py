"""Index builder — selection, mapping, assembly and atomic output.

Leaves first: ``normalizer`` and ``urls`` (text/URL rules), ``taxonomy``
(category, tag and author resolution), ``mapper`` (item → record),
``assembler`` (full rebuild), ``writer`` (atomic JSON output) and
``trigger`` (change events → rebuilds).
"""

from search_index.index.assembler import (
    INDEX_FILENAME,
    RESOURCE_TAGS_FILENAME,
    SEARCH_DIRNAME,
    IndexAssembler,
    index_path,
    resource_tags_path,
)
from search_index.index.models import (
    SCHEMA_VERSION,
    AuthorPictureRecord,
    BuildReport,
    IndexEnvelope,
    ResourceTagEnvelope,
    ResourceTagRecord,
    SearchIndexRecord,
    WriteResult,
)
from search_index.index.trigger import ContentEvent, ContentEventKind, RebuildTrigger
from search_index.index.writer import DocumentWriter

__all__ = [
    "INDEX_FILENAME",
    "RESOURCE_TAGS_FILENAME",
    "SCHEMA_VERSION",
    "SEARCH_DIRNAME",
    "AuthorPictureRecord",
    "BuildReport",
    "ContentEvent",
    "ContentEventKind",
    "DocumentWriter",
    "IndexAssembler",
    "IndexEnvelope",
    "RebuildTrigger",
    "ResourceTagEnvelope",
    "ResourceTagRecord",
    "SearchIndexRecord",
    "WriteResult",
    "index_path",
    "resource_tags_path",
]
