"""Tests for category, tag and author resolution."""

from search_index.content.models import ContentItem, Term, User
from search_index.index.models import ResourceTagAttributes, StandardTagAttributes
from search_index.index.taxonomy import (
    resolve_author,
    resolve_author_picture,
    resolve_primary_category,
    resolve_resource_tag,
    resolve_standard_tag,
)
from search_index.settings.models import (
    AuthorProfile,
    CategorySetting,
    ResourceTagSetting,
)


def _make_item(
    categories: list[Term] | None = None,
    tags: list[Term] | None = None,
) -> ContentItem:
    return ContentItem(
        id=1,
        status="publish",
        categories=categories or [],
        tags=tags or [],
    )


TAG_A = Term(id=11, name="Alpha", slug="a")
TAG_B = Term(id=12, name="Beta", slug="b")
GUIDE_SETTINGS = {
    "b": ResourceTagSetting(name="Guide", color="#f00", icon="https://example.com/i/guide.svg"),
}


class TestPrimaryCategory:
    def test_first_listed_wins(self):
        item = _make_item(categories=[
            Term(id=9, name="Zeta", slug="zeta"),
            Term(id=1, name="Alpha", slug="alpha"),
        ])
        result = resolve_primary_category(item, {"zeta": CategorySetting(color="#123")})
        assert result.name == "Zeta"
        assert result.color == "#123"
        assert result.url == "/blog/category/zeta"

    def test_no_override_color_is_empty(self):
        item = _make_item(categories=[Term(id=1, name="News", slug="news")])
        result = resolve_primary_category(item, {})
        assert result.color == ""
        assert result.name == "News"

    def test_no_category(self):
        result = resolve_primary_category(_make_item(), {})
        assert (result.name, result.color, result.url) == ("", "", "")

    def test_missing_slug_has_no_url(self):
        item = _make_item(categories=[Term(id=1, name="Loose", slug="")])
        assert resolve_primary_category(item, {}).url == ""

    def test_custom_blog_base(self):
        item = _make_item(categories=[Term(id=1, name="News", slug="news")])
        assert resolve_primary_category(item, {}, blog_base="/journal").url == "/journal/category/news"


class TestResourceTag:
    def test_first_matching_tag_wins(self):
        item = _make_item(tags=[TAG_A, TAG_B])
        result = resolve_resource_tag(item, GUIDE_SETTINGS)
        assert result.slug == "b"
        assert result.name == "Guide"
        assert result.color == "#f00"
        assert result.icon == "/i/guide.svg"
        assert result.url == "/blog/tag/b"

    def test_only_one_resource_tag(self):
        settings = {
            "a": ResourceTagSetting(name="Video"),
            "b": ResourceTagSetting(name="Guide"),
        }
        item = _make_item(tags=[TAG_B, TAG_A])
        assert resolve_resource_tag(item, settings).slug == "b"

    def test_name_falls_back_to_tag_name(self):
        item = _make_item(tags=[TAG_B])
        result = resolve_resource_tag(item, {"b": ResourceTagSetting(color="#0f0")})
        assert result.name == "Beta"

    def test_data_icon_kept(self):
        icon = "data:image/svg+xml;base64,PHN2Zy8+"
        item = _make_item(tags=[TAG_B])
        result = resolve_resource_tag(item, {"b": ResourceTagSetting(icon=icon)})
        assert result.icon == icon

    def test_no_match_is_empty(self):
        item = _make_item(tags=[TAG_A])
        assert resolve_resource_tag(item, GUIDE_SETTINGS) == ResourceTagAttributes()


class TestStandardTag:
    def test_first_non_resource_tag(self):
        item = _make_item(tags=[TAG_A, TAG_B])
        result = resolve_standard_tag(item, GUIDE_SETTINGS)
        assert result.slug == "a"
        assert result.name == "Alpha"
        assert result.id == 11
        assert result.url == "/blog/tag/a"

    def test_skips_leading_resource_tag(self):
        item = _make_item(tags=[TAG_B, TAG_A])
        assert resolve_standard_tag(item, GUIDE_SETTINGS).slug == "a"

    def test_all_resource_tags_yields_empty(self):
        item = _make_item(tags=[TAG_B])
        assert resolve_standard_tag(item, GUIDE_SETTINGS) == StandardTagAttributes()

    def test_independent_of_resource_result(self):
        item = _make_item(tags=[TAG_A, TAG_B])
        resource = resolve_resource_tag(item, GUIDE_SETTINGS)
        standard = resolve_standard_tag(item, GUIDE_SETTINGS)
        assert resource.slug != standard.slug


class TestAuthor:
    USER = User(id=7, name="Jo Writer", slug="jo", avatar_url="https://example.com/a/jo.png")

    def test_base_attributes(self):
        result = resolve_author(self.USER, {})
        assert result.id == 7
        assert result.name == "Jo Writer"
        assert result.url == "/blog/author/jo"

    def test_override_name(self):
        result = resolve_author(self.USER, {"7": AuthorProfile(name="J. Writer")})
        assert result.name == "J. Writer"

    def test_empty_override_keeps_name(self):
        result = resolve_author(self.USER, {"7": AuthorProfile(name="")})
        assert result.name == "Jo Writer"

    def test_missing_user(self):
        result = resolve_author(None, {})
        assert (result.id, result.name, result.url) == ("", "", "")

    def test_no_slug_no_url(self):
        assert resolve_author(User(id=3, name="X"), {}).url == ""

    def test_picture_prefers_override(self):
        profiles = {"7": AuthorProfile(picture="https://example.com/p/jo.jpg")}
        assert resolve_author_picture(self.USER, profiles) == "/p/jo.jpg"

    def test_picture_falls_back_to_avatar(self):
        assert resolve_author_picture(self.USER, {}) == "/a/jo.png"
