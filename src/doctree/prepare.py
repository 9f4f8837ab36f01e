"""Prepare a distribution directory from a versioned docs source tree."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from doctree.config import DEFAULT_MARKDOWN_DIRNAME, DEFAULT_SECTIONS_FILENAME
from doctree.exceptions import IndexBuildError
from doctree.file_utils import copy_file
from doctree.index import write_index
from doctree.indexer import BuildWarning, build_multi_version_index, find_available_versions, iter_markdown_files
from doctree.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class PrepareReport:
    """Outcome of ``prepare_docs``."""

    versions: list[str]
    latest: str
    index_path: Path
    markdown_path: Path
    section_counts: dict[str, int] = field(default_factory=dict)
    warnings: list[BuildWarning] = field(default_factory=list)


def prepare_docs(docs_dir: str | Path, dist_dir: str | Path, *, strict: bool = False) -> PrepareReport:
    """Build ``sections.json`` and copy markdown files into ``dist_dir``.

    Args:
        docs_dir: Directory holding ``v<major>.<minor>.x`` version directories.
        dist_dir: Output directory; ``markdown/`` inside it is replaced.
        strict: Fail instead of writing anything when the build produced warnings.

    Returns:
        A report of what was written.

    Raises:
        IndexBuildError: If versions cannot be discovered, a version is
            missing, or ``strict`` is set and warnings occurred.
    """
    docs_dir = Path(docs_dir)
    dist_dir = Path(dist_dir)

    versions = find_available_versions(docs_dir)
    logger.info("Using documentation version %s as latest", versions[0])

    result = build_multi_version_index(docs_dir, versions)
    if strict and result.warnings:
        raise IndexBuildError(f"build produced {len(result.warnings)} warning(s) in strict mode")

    index_path = write_index(result.index, dist_dir / DEFAULT_SECTIONS_FILENAME)

    markdown_path = dist_dir / DEFAULT_MARKDOWN_DIRNAME
    if markdown_path.exists():
        shutil.rmtree(markdown_path)
    copy_markdown_docs(docs_dir, markdown_path, versions)

    logger.info("Prepared documentation for %d versions", len(versions))
    return PrepareReport(
        versions=list(result.index.versions),
        latest=result.index.latest,
        index_path=index_path,
        markdown_path=markdown_path,
        section_counts={version: len(items) for version, items in result.index.sections.items()},
        warnings=result.warnings,
    )


def copy_markdown_docs(docs_root: Path, dest_root: Path, versions: Sequence[str]) -> int:
    """Mirror every markdown file of each version under ``dest_root``."""
    copied = 0
    for version in versions:
        source_root = docs_root / version
        target_root = dest_root / version
        for path in iter_markdown_files(source_root):
            copy_file(path, target_root / path.relative_to(source_root))
            copied += 1
    logger.debug("Copied markdown files", extra={"count": copied, "dest": str(dest_root)})
    return copied
