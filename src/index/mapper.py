"""Content mapper — one content item plus settings to one output record.

Pure functions only.  ``None`` means the item is excluded and contributes
nothing to any document.
"""

from __future__ import annotations

import html
import logging
import math
from datetime import datetime

from search_index.content.models import ContentItem, PostStatus, Thumbnail, User
from search_index.index.models import (
    AuthorPictureRecord,
    ResourceTagRecord,
    SearchIndexRecord,
)
from search_index.index.normalizer import normalize, select_source, strip_all_tags, word_count
from search_index.index.taxonomy import (
    DEFAULT_BLOG_BASE,
    resolve_author,
    resolve_author_picture,
    resolve_primary_category,
    resolve_resource_tag,
    resolve_standard_tag,
)
from search_index.index.urls import asset_url, permalink_path
from search_index.settings.models import DEFAULT_PROFILE_KEY, ContentMode, Settings

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
SUMMARY_WORDS = 100
THUMBNAIL_WIDTH = 768
THUMBNAIL_HEIGHT = 432


# ---------------------------------------------------------------------------
# Reading time / image helpers
# ---------------------------------------------------------------------------


def reading_time(body: str) -> str:
    """``"<n> min read"`` at 200 words per minute, never less than 1."""
    minutes = max(1, math.ceil(word_count(body) / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def thumbnail_markup(thumbnail: Thumbnail | None, site_host: str | None = None) -> str:
    """Lazy-loading ``<img>`` at the fixed display size, or ``""``."""
    if thumbnail is None or not thumbnail.url:
        return ""
    src = asset_url(thumbnail.url, site_host)
    if not src:
        return ""
    alt = thumbnail.alt.strip()
    return (
        f'<img src="{html.escape(src)}" width="{THUMBNAIL_WIDTH}" height="{THUMBNAIL_HEIGHT}" '
        f'loading="lazy" decoding="async" alt="{html.escape(alt)}" />'
    )


def format_date(value: datetime) -> str:
    """Long-form publication date, e.g. ``March 5, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def is_eligible(item: ContentItem, content_type: str) -> bool:
    """Published item of the configured type with a usable id."""
    return (
        item.id > 0
        and item.type == content_type
        and item.status == PostStatus.PUBLISH
    )


def item_content(item: ContentItem, settings: Settings) -> str:
    raw = select_source(item.body, item.excerpt, settings.content_mode)
    return normalize(raw, settings.truncate_words, settings.strip_regex, settings.shortcodes)


def map_item(
    item: ContentItem | None,
    settings: Settings,
    *,
    content_type: str = "post",
) -> SearchIndexRecord | None:
    """Map an item to its search index record.

    Eligibility is re-checked here: the item may have changed status since
    it was selected.
    """
    if item is None or not is_eligible(item, content_type):
        logger.debug("Excluding item %s from index", getattr(item, "id", None))
        return None

    return SearchIndexRecord(
        id=item.id,
        slug=item.slug,
        title=strip_all_tags(item.title),
        content=item_content(item, settings),
        url=permalink_path(item.permalink),
        categories=[c.slug for c in item.categories],
        tags=[t.slug for t in item.tags],
    )


def map_resource_item(
    item: ContentItem | None,
    author: User | None,
    settings: Settings,
    *,
    content_type: str = "post",
    blog_base: str = DEFAULT_BLOG_BASE,
    site_host: str | None = None,
) -> ResourceTagRecord | None:
    """Map an item to its resource-tag dataset record."""
    if item is None or not is_eligible(item, content_type):
        return None

    return ResourceTagRecord(
        id=item.id,
        title=strip_all_tags(item.title),
        summary=normalize(
            select_source(item.body, item.excerpt, ContentMode.FULL),
            SUMMARY_WORDS,
            settings.strip_regex,
            settings.shortcodes,
        ),
        permalink=permalink_path(item.permalink),
        date=format_date(item.date),
        reading_time=reading_time(item.body),
        thumbnail=thumbnail_markup(item.thumbnail, site_host),
        category=resolve_primary_category(
            item, settings.category_settings, blog_base=blog_base
        ),
        author=resolve_author(author, settings.profile_settings, blog_base=blog_base),
        resource_tag=resolve_resource_tag(
            item, settings.resource_tag_settings, blog_base=blog_base, site_host=site_host
        ),
        tag=resolve_standard_tag(item, settings.resource_tag_settings, blog_base=blog_base),
    )


def map_author_picture(
    user: User,
    settings: Settings,
    *,
    site_host: str | None = None,
) -> AuthorPictureRecord:
    author = resolve_author(user, settings.profile_settings)
    return AuthorPictureRecord(
        id=user.id,
        name=author.name,
        slug=user.slug,
        picture=resolve_author_picture(user, settings.profile_settings, site_host=site_host),
    )


def default_picture_record(
    settings: Settings,
    *,
    site_host: str | None = None,
) -> AuthorPictureRecord | None:
    """The default-picture entry, when one is configured."""
    if not settings.default_picture:
        return None
    return AuthorPictureRecord(
        id=DEFAULT_PROFILE_KEY,
        picture=asset_url(settings.default_picture, site_host),
    )
