"""Test setup for doctree."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from doctree.schemas import Section  # noqa: E402


def write_page(root: Path, rel_path: str, frontmatter: str | None = None, body: str = "Body.\n") -> Path:
    """Write a markdown page, optionally with a frontmatter block."""
    path = root / rel_path
    path.parent.mkdir(parents=True, exist_ok=True)
    text = body if frontmatter is None else f"---\n{frontmatter.strip()}\n---\n{body}"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Two documentation versions plus an ignored ``next`` directory.

    v1.4.x::

        get-started/_index.md        weight 1
        get-started/install.md       weight 2, alias /docs/k6/install/
        get-started/running.md       weight 1
        using-k6/_index.md           weight 2
        using-k6/scenarios/_index.md weight 1, alias /docs/k6/scenarios
        using-k6/scenarios/executors.md
        release-notes.md             weight 10
    """
    root = tmp_path / "docs"
    v14 = root / "v1.4.x"
    write_page(v14, "get-started/_index.md", "title: Get started\ndescription: First steps\nweight: 1")
    write_page(
        v14,
        "get-started/install.md",
        "title: Install\nweight: 2\naliases:\n  - /docs/k6/install/",
    )
    write_page(v14, "get-started/running.md", "title: Running k6\ndescription: Run a test\nweight: 1")
    write_page(v14, "using-k6/_index.md", "title: Using k6\nweight: 2")
    write_page(
        v14,
        "using-k6/scenarios/_index.md",
        "title: Scenarios\nweight: 1\naliases:\n  - /docs/k6/scenarios",
    )
    write_page(v14, "using-k6/scenarios/executors.md", "title: Executors\ndescription: Executor types")
    write_page(v14, "release-notes.md", "title: Release notes\nweight: 10")

    v13 = root / "v1.3.x"
    write_page(v13, "get-started/_index.md", "title: Get started\nweight: 1")
    write_page(v13, "using-k6/_index.md", "title: Using k6\nweight: 2")

    write_page(root / "next", "get-started/_index.md", "title: Unreleased")
    return root


@pytest.fixture
def chain_sections() -> list[Section]:
    """``root`` -> ``root/child`` -> ``root/child/grand``."""
    return [
        Section(slug="root", rel_path="root/_index.md", title="Root"),
        Section(slug="root/child", rel_path="root/child/_index.md", title="Child"),
        Section(slug="root/child/grand", rel_path="root/child/grand.md", title="Grandchild"),
    ]
