"""Tests for the content normalizer text pipeline."""

from search_index.index.normalizer import (
    ELLIPSIS,
    compile_strip_regex,
    is_valid_strip_regex,
    normalize,
    select_source,
    strip_all_tags,
    strip_shortcodes,
    truncate_words,
    word_count,
)
from search_index.settings.models import DEFAULT_STRIP_REGEX


class TestStripShortcodes:
    def test_removes_tokens_keeps_enclosed_text(self):
        raw = '[gallery ids="1,2"]Before [caption]Text[/caption] after'
        assert strip_shortcodes(raw) == "Before Text after"

    def test_self_closing(self):
        assert strip_shortcodes("a [embed /] b") == "a  b"

    def test_escaped_shortcode_stays_literal(self):
        assert strip_shortcodes("[[gallery]]") == "[gallery]"

    def test_numeric_brackets_untouched(self):
        assert strip_shortcodes("see note [1]") == "see note [1]"

    def test_unregistered_names_untouched(self):
        raw = "He said [sic] it twice [Editor's note: fixed] [gallery]"
        assert strip_shortcodes(raw) == "He said [sic] it twice [Editor's note: fixed] "

    def test_custom_names(self):
        raw = "[vc_row][vc_column]Hi[/vc_column][/vc_row] [gallery]"
        assert strip_shortcodes(raw, ("vc_row", "vc_column")) == "Hi [gallery]"

    def test_name_prefix_does_not_match(self):
        assert strip_shortcodes("[videos] [video]", ("video",)) == "[videos] "

    def test_no_names_is_noop(self):
        assert strip_shortcodes("[gallery]", ()) == "[gallery]"


class TestStripAllTags:
    def test_strips_markup(self):
        assert strip_all_tags("Hello <b>World</b>") == "Hello World"

    def test_drops_script_and_style_bodies(self):
        raw = "<style>p { color: red }</style>Text<script>alert(1)</script>"
        assert strip_all_tags(raw) == "Text"

    def test_drops_comments(self):
        assert strip_all_tags("a<!-- hidden -->b") == "ab"

    def test_entities_stay_encoded(self):
        assert strip_all_tags("Tom &amp; Jerry") == "Tom &amp; Jerry"

    def test_escaped_markup_not_revived(self):
        raw = "&lt;img src=x onerror=alert(1)&gt; hi"
        assert strip_all_tags(raw) == raw

    def test_comparison_operators_are_prose(self):
        assert strip_all_tags("if x < 10 and y > 5 then go") == "if x < 10 and y > 5 then go"

    def test_closing_and_declaration_tags(self):
        assert strip_all_tags("<!DOCTYPE html><p>a</p><?xml x?>b") == "ab"

    def test_non_string_is_empty(self):
        assert strip_all_tags(None) == ""
        assert strip_all_tags(12) == ""


class TestStripRegex:
    def test_pcre_delimited_with_flags(self):
        compiled = compile_strip_regex(r"/secret-\d+/i")
        assert compiled is not None
        assert compiled.sub("", "a SECRET-42 b") == "a  b"

    def test_bare_pattern(self):
        compiled = compile_strip_regex(r"\d+")
        assert compiled is not None
        assert compiled.sub("", "foo123bar") == "foobar"

    def test_default_pattern_compiles(self):
        compiled = compile_strip_regex(DEFAULT_STRIP_REGEX)
        assert compiled is not None
        assert compiled.sub("", "[VC_ROW]x[/vc_row]") == "x"

    def test_empty_is_no_pattern(self):
        assert compile_strip_regex("") is None
        assert is_valid_strip_regex("")

    def test_invalid_is_no_pattern(self):
        assert compile_strip_regex("/(unclosed/") is None
        assert not is_valid_strip_regex("/[a-/")


class TestTruncateWords:
    def test_zero_never_truncates(self):
        text = " ".join(f"w{i}" for i in range(500))
        assert truncate_words(text, 0) == text

    def test_truncates_with_ellipsis(self):
        assert truncate_words("a b c d e", 3) == "a b c" + ELLIPSIS

    def test_exact_limit_unchanged(self):
        assert truncate_words("a b c", 3) == "a b c"


class TestSelectSource:
    def test_excerpt_mode_prefers_excerpt(self):
        assert select_source("body", "excerpt", "excerpt") == "excerpt"

    def test_excerpt_mode_falls_back_to_body(self):
        assert select_source("body", "", "excerpt") == "body"

    def test_full_mode_ignores_excerpt(self):
        assert select_source("body", "excerpt", "full") == "body"


class TestNormalize:
    def test_collapses_whitespace(self):
        assert normalize("<p>Hello   <b>world</b></p>\n\n\t ") == "Hello world"

    def test_pipeline_order(self):
        raw = "[vc_row]<p>Intro SECRET-1</p>[/vc_row]\n<p>More   text</p>"
        assert normalize(raw, 0, r"/secret-\d+/i", ("vc_row",)) == "Intro More text"

    def test_prose_with_angle_brackets_kept(self):
        assert normalize("if x < 10 and y > 5 then go") == "if x < 10 and y > 5 then go"

    def test_escaped_markup_stays_escaped(self):
        assert normalize("&lt;b&gt;bold&lt;/b&gt; text") == "&lt;b&gt;bold&lt;/b&gt; text"

    def test_invalid_regex_ignored(self):
        assert normalize("a (b", 0, "/(unclosed/") == "a (b"

    def test_truncation_after_cleanup(self):
        raw = "<p>one</p>  <p>two</p> three four"
        assert normalize(raw, 2) == "one two" + ELLIPSIS

    def test_empty_and_non_text(self):
        assert normalize("") == ""
        assert normalize(None) == ""
        assert normalize(["x"]) == ""


class TestWordCount:
    def test_counts_stripped_words(self):
        assert word_count("<p>one two</p> <em>three</em>") == 3

    def test_empty(self):
        assert word_count("") == 0
