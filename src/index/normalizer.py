"""Content normalizer — raw markup to clean plain text.

Pipeline order matters and is fixed:

1. strip registered shortcode tokens (``[name attrs]``, ``[/name]``, ``[name /]``)
2. delete matches of the user strip regex, if one is configured and valid
3. strip remaining markup tags; entities are left encoded
4. collapse whitespace runs to single spaces and trim
5. truncate to N words, appending an ellipsis

No I/O happens here.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any

from search_index.settings.models import DEFAULT_SHORTCODES

logger = logging.getLogger(__name__)

ELLIPSIS = "…"

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
# A tag starts with a name, closing slash, or declaration; "x < 10" is prose.
_TAG_RE = re.compile(r"<[A-Za-z/!?][^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

_BRACKET_PAIRS = {"(": ")", "{": "}", "[": "]", "<": ">"}
_PCRE_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


@lru_cache(maxsize=8)
def _shortcode_re(names: tuple[str, ...]) -> re.Pattern[str] | None:
    if not names:
        return None
    alternation = "|".join(re.escape(n) for n in sorted(set(names), key=len, reverse=True))
    return re.compile(
        rf"\[(\[?)(/?)({alternation})(?![\w-])([^\[\]]*?)(/?)\](\]?)"
    )


def _shortcode_replace(match: re.Match[str]) -> str:
    # [[name]] is an escaped shortcode and stays as literal [name]
    if match.group(1) == "[" and match.group(6) == "]":
        return match.group(0)[1:-1]
    return match.group(1) + match.group(6)


def strip_shortcodes(text: str, names: tuple[str, ...] = DEFAULT_SHORTCODES) -> str:
    """Remove tokens of the named shortcodes, keeping any text they enclose.

    Bracketed text with any other name (``[sic]``) is left alone.
    """
    pattern = _shortcode_re(tuple(names))
    if pattern is None:
        return text
    return pattern.sub(_shortcode_replace, text)


def strip_all_tags(text: Any) -> str:
    """Strip markup tags.  Non-strings become ``""``."""
    if not isinstance(text, str) or not text:
        return ""
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _COMMENT_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    return text.strip()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def _split_delimited(pattern: str) -> tuple[str, str] | None:
    """Split a PCRE-style ``/body/flags`` pattern, or return None."""
    opener = pattern[0]
    if opener.isalnum() or opener == "\\" or opener.isspace():
        return None
    closer = _BRACKET_PAIRS.get(opener, opener)
    end = pattern.rfind(closer)
    if end <= 0:
        return None
    flags = pattern[end + 1:]
    if any(f not in _PCRE_FLAGS for f in flags):
        return None
    return pattern[1:end], flags


@lru_cache(maxsize=32)
def compile_strip_regex(pattern: str) -> re.Pattern[str] | None:
    """Compile a user strip pattern.

    Accepts either a PCRE-delimited pattern (``/\\[vc_[^\\]]*\\]/i``) or a
    bare Python pattern.  Returns None for an empty or invalid pattern.
    """
    if not pattern:
        return None
    body, flags = pattern, ""
    delimited = _split_delimited(pattern)
    if delimited is not None:
        body, flags = delimited
    re_flags = 0
    for flag in flags:
        re_flags |= _PCRE_FLAGS[flag]
    try:
        return re.compile(body, re_flags)
    except re.error as exc:
        logger.warning("Ignoring invalid strip regex %r: %s", pattern, exc)
        return None


def is_valid_strip_regex(pattern: str) -> bool:
    """True for an empty pattern or one that compiles."""
    return not pattern or compile_strip_regex(pattern) is not None


def apply_strip_regex(text: str, pattern: str) -> str:
    compiled = compile_strip_regex(pattern)
    if compiled is None:
        return text
    return compiled.sub("", text)


def truncate_words(text: str, limit: int) -> str:
    """Keep the first ``limit`` space-separated words, adding an ellipsis.

    A limit of 0 (or less) means unlimited.
    """
    if limit <= 0:
        return text
    words = text.split(" ")
    if len(words) <= limit:
        return text
    return " ".join(words[:limit]) + ELLIPSIS


def select_source(body: str, excerpt: str, mode: str) -> str:
    """Pick the raw text for a content mode.

    ``excerpt`` uses the explicit excerpt when non-empty, else the body;
    ``full`` always uses the body.
    """
    if mode == "excerpt" and excerpt:
        return excerpt
    return body


def normalize(
    raw: Any,
    truncate: int = 0,
    strip_regex: str = "",
    shortcodes: tuple[str, ...] = DEFAULT_SHORTCODES,
) -> str:
    """Run the full normalization pipeline over raw markup."""
    if not isinstance(raw, str) or not raw:
        return ""
    text = strip_shortcodes(raw, shortcodes)
    text = apply_strip_regex(text, strip_regex)
    text = strip_all_tags(text)
    text = collapse_whitespace(text)
    return truncate_words(text, truncate)


def word_count(raw: Any) -> int:
    """Number of words in markup-stripped text."""
    text = strip_all_tags(raw)
    return len(text.split()) if text else 0
