"""Tests for section extraction."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write_page
from doctree.exceptions import FrontmatterParseError
from doctree.extractor import build_hierarchy, extract_section, path_to_slug


@pytest.mark.parametrize(
    ("rel_path", "slug"),
    [
        ("using-k6/scenarios/_index.md", "using-k6/scenarios"),
        ("javascript-api/k6-http/request.md", "javascript-api/k6-http/request"),
        ("get-started.md", "get-started"),
        ("_index.md", "_index"),
        ("a\\b\\c.md", "a/b/c"),
    ],
)
def test_path_to_slug(rel_path: str, slug: str) -> None:
    assert path_to_slug(rel_path) == slug


@pytest.mark.parametrize(
    ("rel_path", "hierarchy"),
    [
        ("using-k6/scenarios/_index.md", ("using-k6", "scenarios")),
        ("javascript-api/k6-http/request.md", ("javascript-api", "k6-http")),
        ("get-started.md", ()),
    ],
)
def test_build_hierarchy(rel_path: str, hierarchy: tuple[str, ...]) -> None:
    assert build_hierarchy(rel_path) == hierarchy


class TestExtractSection:
    """Tests for extract_section."""

    def test_nested_page(self, tmp_path: Path) -> None:
        path = write_page(
            tmp_path,
            "javascript-api/k6-http/request.md",
            "title: request\ndescription: Issue a request\nweight: 7\naliases:\n  - /docs/k6/request",
        )
        section = extract_section(path, tmp_path)

        assert section.slug == "javascript-api/k6-http/request"
        assert section.rel_path == "javascript-api/k6-http/request.md"
        assert section.title == "request"
        assert section.description == "Issue a request"
        assert section.weight == 7
        assert section.aliases == ("/docs/k6/request",)
        assert section.category == "javascript-api"
        assert section.hierarchy == ("javascript-api", "k6-http")
        assert section.is_index is False

    def test_index_page_collapses_to_directory(self, tmp_path: Path) -> None:
        path = write_page(tmp_path, "using-k6/scenarios/_index.md", "title: Scenarios")
        section = extract_section(path, tmp_path)

        assert section.slug == "using-k6/scenarios"
        assert section.is_index is True
        assert section.category == "using-k6"

    def test_root_level_page(self, tmp_path: Path) -> None:
        path = write_page(tmp_path, "get-started.md")
        section = extract_section(path, tmp_path)

        assert section.slug == "get-started"
        assert section.category == ""
        assert section.hierarchy == ()
        assert section.title == ""
        assert section.weight == 0
        assert section.aliases == ()

    def test_frontmatter_failure_propagates(self, tmp_path: Path) -> None:
        path = write_page(tmp_path, "broken.md", "title: [")
        with pytest.raises(FrontmatterParseError):
            extract_section(path, tmp_path)
