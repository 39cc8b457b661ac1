"""URL helpers — root-relative rewriting for links and assets."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit


def _is_data_url(url: str) -> bool:
    return url[:5].lower() == "data:"


def to_root_relative(url: Any, site_host: str | None = None) -> str:
    """Rewrite an absolute URL to a root-relative path.

    ``data:`` URLs pass through.  When ``site_host`` is given only URLs on
    that host are rewritten.  Anything that cannot be rewritten is returned
    unchanged, so a non-empty input never yields an empty string.
    """
    if not isinstance(url, str):
        return ""
    if not url or _is_data_url(url):
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not parts.netloc:
        return url
    if site_host and (parts.hostname or "").lower() != site_host.lower():
        return url

    relative = parts.path or "/"
    if not relative.startswith("/"):
        relative = "/" + relative
    if parts.query:
        relative += "?" + parts.query
    if parts.fragment:
        relative += "#" + parts.fragment
    return relative


def asset_url(url: Any, site_host: str | None = None) -> str:
    """Normalize an icon/picture URL; inline ``data:`` assets are kept as-is."""
    if isinstance(url, str) and _is_data_url(url):
        return url
    return to_root_relative(url, site_host)


def permalink_path(permalink: Any) -> str:
    """Path component of a permalink, ``/`` when it has none."""
    if not isinstance(permalink, str) or not permalink:
        return "/"
    try:
        path = urlsplit(permalink).path
    except ValueError:
        return "/"
    return path or "/"


def site_host_of(site_url: str) -> str | None:
    """Host name of the configured site URL, or None."""
    if not site_url:
        return None
    try:
        return urlsplit(site_url).hostname
    except ValueError:
        return None


def term_url(base: str, slug: str) -> str:
    """``<base>/<slug>`` when a slug exists, else ``""``."""
    if not slug:
        return ""
    return f"{base.rstrip('/')}/{slug}"
