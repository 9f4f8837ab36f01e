"""Tests for building section indexes."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from conftest import write_page
from doctree.exceptions import IndexBuildError, MissingVersionDirectoryError
from doctree.indexer import (
    build_multi_version_index,
    build_section_index,
    find_available_versions,
    iter_markdown_files,
)


class TestBuildMultiVersionIndex:
    """Tests for build_multi_version_index."""

    def test_versions_and_latest(self, docs_root: Path) -> None:
        result = build_multi_version_index(docs_root, ["v1.4.x", "v1.3.x"])

        assert result.index.versions == ("v1.4.x", "v1.3.x")
        assert result.index.latest == "v1.4.x"
        assert result.ok
        assert result.warnings == []

    def test_sections_sorted_by_weight_then_title(self, docs_root: Path) -> None:
        result = build_multi_version_index(docs_root, ["v1.4.x"])
        slugs = [section.slug for section in result.index.sections["v1.4.x"]]

        assert slugs == [
            "using-k6/scenarios/executors",
            "get-started",
            "get-started/running",
            "using-k6/scenarios",
            "get-started/install",
            "using-k6",
            "release-notes",
        ]

    def test_title_tie_break_is_case_sensitive(self, tmp_path: Path) -> None:
        version_root = tmp_path / "v1.0.x"
        write_page(version_root, "b.md", "title: beta")
        write_page(version_root, "a.md", "title: Zulu")
        result = build_multi_version_index(tmp_path, ["v1.0.x"])

        assert [s.title for s in result.index.sections["v1.0.x"]] == ["Zulu", "beta"]

    def test_only_markdown_files_are_indexed(self, tmp_path: Path) -> None:
        version_root = tmp_path / "v1.0.x"
        write_page(version_root, "page.md", "title: Page")
        (version_root / "image.png").write_bytes(b"\x89PNG")
        (version_root / "notes.txt").write_text("ignored", encoding="utf-8")
        (version_root / "folder.md").mkdir()

        result = build_multi_version_index(tmp_path, ["v1.0.x"])

        assert [s.rel_path for s in result.index.sections["v1.0.x"]] == ["page.md"]

    def test_broken_frontmatter_is_skipped_with_warning(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        version_root = tmp_path / "v1.0.x"
        write_page(version_root, "good.md", "title: Good")
        bad = write_page(version_root, "bad.md", "title: [unclosed")

        with caplog.at_level(logging.WARNING, logger="doctree"):
            result = build_multi_version_index(tmp_path, ["v1.0.x"])

        assert [s.slug for s in result.index.sections["v1.0.x"]] == ["good"]
        assert not result.ok
        assert len(result.warnings) == 1
        warning = result.warnings[0]
        assert warning.kind == "frontmatter"
        assert warning.version == "v1.0.x"
        assert warning.path == str(bad)
        assert str(bad) in caplog.text

    def test_non_utf8_body_keeps_the_page(self, tmp_path: Path) -> None:
        page = tmp_path / "v1.0.x" / "latin.md"
        page.parent.mkdir(parents=True)
        page.write_bytes(b"---\ntitle: Latin\nweight: 1\n---\nCaf\xe9 body\n")

        result = build_multi_version_index(tmp_path, ["v1.0.x"])

        assert result.ok
        assert [s.title for s in result.index.sections["v1.0.x"]] == ["Latin"]

    def test_alias_collision_is_reported(self, tmp_path: Path) -> None:
        version_root = tmp_path / "v1.0.x"
        write_page(version_root, "first.md", "title: First\nweight: 1\naliases:\n  - /shared")
        write_page(version_root, "second.md", "title: Second\nweight: 2\naliases:\n  - /shared")

        result = build_multi_version_index(tmp_path, ["v1.0.x"])

        assert result.index.by_slug["v1.0.x"]["shared"].slug == "first"
        assert [w.kind for w in result.warnings] == ["alias_collision"]
        assert result.warnings[0].path == "second.md"

    def test_duplicate_primary_slug_is_reported(self, tmp_path: Path) -> None:
        version_root = tmp_path / "v1.0.x"
        write_page(version_root, "guide.md", "title: Guide page\nweight: 1")
        write_page(version_root, "guide/_index.md", "title: Guide index\nweight: 2")

        result = build_multi_version_index(tmp_path, ["v1.0.x"])

        assert result.index.by_slug["v1.0.x"]["guide"].rel_path == "guide.md"
        assert [w.kind for w in result.warnings] == ["duplicate_slug"]

    def test_missing_version_directory_is_fatal(self, docs_root: Path) -> None:
        with pytest.raises(MissingVersionDirectoryError, match="v9.9.x"):
            build_multi_version_index(docs_root, ["v1.4.x", "v9.9.x"])

    def test_no_versions_is_fatal(self, docs_root: Path) -> None:
        with pytest.raises(IndexBuildError, match="no versions"):
            build_multi_version_index(docs_root, [])


class TestBuildSectionIndex:
    """Tests for single-version indexing."""

    def test_single_version(self, docs_root: Path) -> None:
        result = build_section_index(docs_root / "v1.3.x", "v1.3.x")

        assert result.index.versions == ("v1.3.x",)
        assert result.index.latest == "v1.3.x"
        assert [s.slug for s in result.index.sections["v1.3.x"]] == ["get-started", "using-k6"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(MissingVersionDirectoryError):
            build_section_index(tmp_path / "absent", "v1.0.x")


class TestFindAvailableVersions:
    """Tests for version directory discovery."""

    def test_discovers_and_sorts_numerically(self, tmp_path: Path) -> None:
        for name in ("v0.57.x", "v1.4.x", "v1.10.x", "v1.3.x", "next", "v2.x", "latest"):
            (tmp_path / name).mkdir()
        (tmp_path / "v3.0.x").write_text("a file, not a directory", encoding="utf-8")

        assert find_available_versions(tmp_path) == ["v1.10.x", "v1.4.x", "v1.3.x", "v0.57.x"]

    def test_excludes_next(self, docs_root: Path) -> None:
        assert find_available_versions(docs_root) == ["v1.4.x", "v1.3.x"]

    def test_no_versions_found(self, tmp_path: Path) -> None:
        (tmp_path / "next").mkdir()
        with pytest.raises(IndexBuildError, match="no valid version directories"):
            find_available_versions(tmp_path)

    def test_unreadable_root(self, tmp_path: Path) -> None:
        with pytest.raises(IndexBuildError, match="failed to read docs directory"):
            find_available_versions(tmp_path / "absent")


def test_iter_markdown_files_walks_in_lexical_order(tmp_path: Path) -> None:
    for rel_path in ("b/z.md", "b/a.md", "a.md", "c/d/e.md"):
        write_page(tmp_path, rel_path)

    found = [path.relative_to(tmp_path).as_posix() for path in iter_markdown_files(tmp_path)]

    assert found == ["a.md", "b/a.md", "b/z.md", "c/d/e.md"]
