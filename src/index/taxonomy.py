"""Taxonomy resolver — categories, tags and authors to display attributes.

Tie-break rules are positional: the item's own term order decides.  The
primary category is the first-listed category; the resource tag is the
first tag whose slug has a resource override; the standard tag is the
first tag without one.  The two tag lookups are independent scans.
"""

from __future__ import annotations

from collections.abc import Mapping

from search_index.content.models import ContentItem, User
from search_index.index.models import (
    AuthorAttributes,
    CategoryAttributes,
    ResourceTagAttributes,
    StandardTagAttributes,
)
from search_index.index.urls import asset_url, term_url
from search_index.settings.models import AuthorProfile, CategorySetting, ResourceTagSetting

DEFAULT_BLOG_BASE = "/blog"


def resolve_primary_category(
    item: ContentItem,
    category_settings: Mapping[str, CategorySetting],
    *,
    blog_base: str = DEFAULT_BLOG_BASE,
) -> CategoryAttributes:
    if not item.categories:
        return CategoryAttributes()
    category = item.categories[0]
    override = category_settings.get(category.slug)
    return CategoryAttributes(
        name=category.name,
        color=override.color if override else "",
        url=term_url(f"{blog_base}/category", category.slug),
    )


def resolve_resource_tag(
    item: ContentItem,
    resource_settings: Mapping[str, ResourceTagSetting],
    *,
    blog_base: str = DEFAULT_BLOG_BASE,
    site_host: str | None = None,
) -> ResourceTagAttributes:
    for tag in item.tags:
        override = resource_settings.get(tag.slug) if tag.slug else None
        if override is None:
            continue
        return ResourceTagAttributes(
            name=override.name or tag.name,
            slug=tag.slug,
            color=override.color,
            icon=asset_url(override.icon, site_host),
            url=term_url(f"{blog_base}/tag", tag.slug),
        )
    return ResourceTagAttributes()


def resolve_standard_tag(
    item: ContentItem,
    resource_settings: Mapping[str, ResourceTagSetting],
    *,
    blog_base: str = DEFAULT_BLOG_BASE,
) -> StandardTagAttributes:
    for tag in item.tags:
        if tag.slug in resource_settings:
            continue
        return StandardTagAttributes(
            name=tag.name,
            slug=tag.slug,
            id=tag.id,
            url=term_url(f"{blog_base}/tag", tag.slug),
        )
    return StandardTagAttributes()


def _profile_for(user: User, profile_settings: Mapping[str, AuthorProfile]) -> AuthorProfile | None:
    return profile_settings.get(str(user.id))


def resolve_author(
    user: User | None,
    profile_settings: Mapping[str, AuthorProfile],
    *,
    blog_base: str = DEFAULT_BLOG_BASE,
) -> AuthorAttributes:
    """Author attributes; an override name wins only when non-empty."""
    if user is None:
        return AuthorAttributes()
    profile = _profile_for(user, profile_settings)
    name = profile.name if profile and profile.name else user.name
    return AuthorAttributes(
        id=user.id,
        name=name,
        url=term_url(f"{blog_base}/author", user.slug),
    )


def resolve_author_picture(
    user: User,
    profile_settings: Mapping[str, AuthorProfile],
    *,
    site_host: str | None = None,
) -> str:
    """Picture URL from the profile override, else the user's avatar."""
    profile = _profile_for(user, profile_settings)
    picture = profile.picture if profile and profile.picture else user.avatar_url
    return asset_url(picture, site_host)
