"""Tests for root-relative URL helpers."""

from search_index.index.urls import (
    asset_url,
    permalink_path,
    site_host_of,
    term_url,
    to_root_relative,
)


class TestToRootRelative:
    def test_strips_scheme_and_host(self):
        assert to_root_relative("https://example.com/blog/post/?p=1#top") == "/blog/post/?p=1#top"

    def test_bare_host_becomes_root(self):
        assert to_root_relative("https://example.com") == "/"

    def test_protocol_relative(self):
        assert to_root_relative("//example.com/a.png") == "/a.png"

    def test_data_url_unchanged(self):
        url = "data:image/svg+xml;base64,PHN2Zy8+"
        assert to_root_relative(url) == url

    def test_already_relative_unchanged(self):
        assert to_root_relative("/already/here") == "/already/here"

    def test_empty_stays_empty(self):
        assert to_root_relative("") == ""

    def test_unparseable_returned_unchanged(self):
        assert to_root_relative("http://[::1") == "http://[::1"

    def test_site_host_limits_rewriting(self):
        assert to_root_relative("https://cdn.other.com/a.png", "example.com") == (
            "https://cdn.other.com/a.png"
        )
        assert to_root_relative("https://Example.com/a.png", "example.com") == "/a.png"


class TestAssetUrl:
    def test_data_url_short_circuits(self):
        assert asset_url("DATA:image/png;base64,AAA") == "DATA:image/png;base64,AAA"

    def test_absolute_asset_rewritten(self):
        assert asset_url("https://example.com/icons/guide.svg") == "/icons/guide.svg"

    def test_non_string(self):
        assert asset_url(None) == ""


class TestPermalinkPath:
    def test_path_component(self):
        assert permalink_path("https://example.com/2024/hello/?utm=1") == "/2024/hello/"

    def test_defaults_to_root(self):
        assert permalink_path("https://example.com") == "/"
        assert permalink_path("") == "/"
        assert permalink_path(None) == "/"

    def test_parse_failure_defaults_to_root(self):
        assert permalink_path("http://[bad") == "/"


class TestHelpers:
    def test_site_host_of(self):
        assert site_host_of("https://www.example.com/blog") == "www.example.com"
        assert site_host_of("") is None

    def test_term_url(self):
        assert term_url("/blog/category", "news") == "/blog/category/news"
        assert term_url("/blog/category/", "news") == "/blog/category/news"
        assert term_url("/blog/category", "") == ""
