"""Tests for the administrative actions and the status view."""

import json
from pathlib import Path

import pytest
from search_index.admin import (
    Services,
    activate,
    artifact_status,
    index_status,
    manual_rebuild,
    save_settings,
)
from search_index.config import SearchIndexConfig, merge_cli_overrides
from search_index.content.models import ContentItem
from search_index.settings.models import (
    CONTENT_MODE_OPTION,
    DEFAULT_STRIP_REGEX,
    RESOURCE_OPTION,
    STRIP_REGEX_OPTION,
    TRUNCATE_WORDS_OPTION,
)


@pytest.fixture
def services(tmp_path: Path) -> Services:
    cfg = merge_cli_overrides(
        SearchIndexConfig(),
        output_directory=tmp_path / "uploads",
        content_path=tmp_path / "content.json",
        settings_path=tmp_path / "settings.json",
    )
    svc = Services(cfg)
    svc.content.upsert(ContentItem(id=1, status="publish", title="Hello", body="one two three"))
    return svc


class TestServices:
    def test_wires_paths_from_config(self, services, tmp_path):
        assert services.assembler.output_dir == tmp_path / "uploads"
        assert services.assembler.content_type == "post"
        assert services.trigger.assembler is services.assembler


class TestManualRebuild:
    def test_writes_index(self, services):
        report = manual_rebuild(services.assembler)
        assert report.ok
        assert report.item_count == 1
        assert services.assembler.index_path.exists()


class TestSaveSettings:
    def test_persists_and_rebuilds(self, services):
        report = save_settings(
            services.settings,
            services.assembler,
            mode="full",
            truncate_words=2,
            strip_regex=r"/\[x\]/",
            resource_tags=True,
        )
        assert report.ok
        assert services.settings.get(CONTENT_MODE_OPTION) == "full"
        assert services.settings.get(TRUNCATE_WORDS_OPTION) == 2
        assert services.settings.get(STRIP_REGEX_OPTION) == r"/\[x\]/"
        assert services.settings.get(RESOURCE_OPTION) == "1"
        assert services.assembler.resource_tags_path.exists()

        data = json.loads(services.assembler.index_path.read_text(encoding="utf-8"))
        assert data["items"][0]["content"] == "one two…"

    def test_invalid_values_fall_back(self, services):
        save_settings(
            services.settings,
            services.assembler,
            mode="everything",
            truncate_words=-3,
            strip_regex="/[unclosed/",
            resource_tags=False,
        )
        assert services.settings.get(CONTENT_MODE_OPTION) == "excerpt"
        assert services.settings.get(TRUNCATE_WORDS_OPTION) == 0
        assert services.settings.get(STRIP_REGEX_OPTION) == ""
        assert services.settings.get(RESOURCE_OPTION) == "0"
        assert not services.assembler.resource_tags_path.exists()


class TestActivate:
    def test_seeds_defaults(self, services):
        report = activate(services.settings, services.assembler)
        assert report.ok
        assert services.settings.get(STRIP_REGEX_OPTION) == DEFAULT_STRIP_REGEX
        assert services.settings.get(RESOURCE_OPTION) == "1"
        assert services.assembler.resource_tags_path.exists()

    def test_keeps_existing_values(self, services):
        services.settings.set(STRIP_REGEX_OPTION, r"/foo/")
        services.settings.set(RESOURCE_OPTION, "0")
        activate(services.settings, services.assembler)
        assert services.settings.get(STRIP_REGEX_OPTION) == r"/foo/"
        assert services.settings.get(RESOURCE_OPTION) == "0"
        assert not services.assembler.resource_tags_path.exists()


class TestStatus:
    def test_missing_artifacts(self, services):
        services.settings.set(RESOURCE_OPTION, "0")
        status = index_status(services.assembler, services.settings)
        assert not status.index.exists
        assert status.index.count is None
        assert status.resource_export_enabled is False
        assert status.resource_tags is None

    def test_after_build(self, services):
        manual_rebuild(services.assembler)
        status = index_status(services.assembler, services.settings)
        assert status.index.exists
        assert status.index.version == "1"
        assert status.index.count == 1
        assert status.index.size > 0
        assert status.index.generated_at
        assert status.resource_tags is not None
        assert status.resource_tags.exists
        assert status.resource_tags.count == 1

    def test_unreadable_artifact(self, tmp_path):
        path = tmp_path / "index.json"
        path.write_text("garbage", encoding="utf-8")
        status = artifact_status(path, "items")
        assert status.exists
        assert status.version == ""
        assert status.count is None
