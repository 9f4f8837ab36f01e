"""Build section indexes from documentation directories."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Literal, Sequence

from doctree.config import (
    DOCTREE_MARKDOWN_EXTENSION,
    DOCTREE_NEXT_VERSION_DIR,
    DOCTREE_VERSION_DIR_PATTERN,
)
from doctree.exceptions import FrontmatterParseError, IndexBuildError, MissingVersionDirectoryError
from doctree.extractor import extract_section
from doctree.index import SectionIndex, SlugCollision
from doctree.schemas import Section
from doctree.utils.logging_config import get_logger

logger = get_logger(__name__)

_VERSION_DIR_RE = re.compile(DOCTREE_VERSION_DIR_PATTERN)


@dataclass(frozen=True)
class BuildWarning:
    """A problem that did not stop the build."""

    kind: Literal["frontmatter", "duplicate_slug", "alias_collision"]
    version: str
    path: str
    message: str


@dataclass
class IndexBuildResult:
    """A freshly built index and everything that was skipped or dropped."""

    index: SectionIndex
    warnings: list[BuildWarning] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


def build_section_index(docs_path: str | Path, version: str) -> IndexBuildResult:
    """Index a single documentation directory as ``version``."""
    docs_path = Path(docs_path)
    if not docs_path.is_dir():
        raise MissingVersionDirectoryError(f"docs directory not found: {docs_path}")

    warnings: list[BuildWarning] = []
    sections = collect_sections(docs_path, version, warnings)
    index = SectionIndex([version], version, {version: sections})
    warnings.extend(_collision_warnings(index.collisions))
    return IndexBuildResult(index=index, warnings=warnings)


def build_multi_version_index(docs_root: str | Path, versions: Sequence[str]) -> IndexBuildResult:
    """Index ``<docs_root>/<version>`` for every version, latest first.

    Args:
        docs_root: Directory holding one subdirectory per version.
        versions: Versions to index; the first one becomes ``latest``.

    Returns:
        The built index plus the warnings collected along the way.

    Raises:
        IndexBuildError: If no versions are given or a walk fails.
        MissingVersionDirectoryError: If a version has no directory.
    """
    if not versions:
        raise IndexBuildError("no versions specified")

    docs_root = Path(docs_root)
    warnings: list[BuildWarning] = []
    sections: dict[str, list[Section]] = {}

    for version in versions:
        version_path = docs_root / version
        if not version_path.is_dir():
            raise MissingVersionDirectoryError(f"version directory not found: {version_path}")

        sections[version] = collect_sections(version_path, version, warnings)
        logger.info(
            "Indexed %d sections for version %s",
            len(sections[version]),
            version,
        )

    index = SectionIndex(versions, versions[0], sections)
    warnings.extend(_collision_warnings(index.collisions))
    return IndexBuildResult(index=index, warnings=warnings)


def collect_sections(version_path: Path, version: str, warnings: list[BuildWarning]) -> list[Section]:
    """Extract and sort the sections below one version root.

    Files with broken frontmatter are logged, recorded in ``warnings`` and
    left out.
    """
    sections: list[Section] = []
    for path in iter_markdown_files(version_path):
        try:
            sections.append(extract_section(path, version_path))
        except FrontmatterParseError as exc:
            logger.warning(
                "Skipping %s: %s",
                path,
                exc.reason,
                extra={"version": version},
            )
            warnings.append(BuildWarning("frontmatter", version, str(path), exc.reason))
    return sort_sections(sections)


def sort_sections(sections: list[Section]) -> list[Section]:
    """Order sections by weight, then title."""
    return sorted(sections, key=lambda section: (section.weight, section.title))


def iter_markdown_files(root: Path) -> Iterator[Path]:
    """Yield markdown files below ``root`` in lexical walk order."""

    def _raise(error: OSError) -> None:
        raise IndexBuildError(f"failed to walk directory {root}: {error}") from error

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.endswith(DOCTREE_MARKDOWN_EXTENSION):
                yield Path(dirpath) / filename


def find_available_versions(docs_root: str | Path) -> list[str]:
    """List ``v<major>.<minor>.x`` directories, newest first.

    The ``next`` directory and anything not matching the pattern are ignored.

    Raises:
        IndexBuildError: If the directory cannot be read or holds no versions.
    """
    docs_root = Path(docs_root)
    try:
        entries = list(docs_root.iterdir())
    except OSError as exc:
        raise IndexBuildError(f"failed to read docs directory {docs_root}: {exc}") from exc

    found: list[tuple[int, int, str]] = []
    for entry in entries:
        if not entry.is_dir() or entry.name == DOCTREE_NEXT_VERSION_DIR:
            continue
        match = _VERSION_DIR_RE.match(entry.name)
        if not match:
            continue
        found.append((int(match.group(1)), int(match.group(2)), entry.name))

    if not found:
        raise IndexBuildError(f"no valid version directories found in {docs_root}")

    found.sort(key=lambda item: (item[0], item[1]), reverse=True)
    return [name for _, _, name in found]


def _collision_warnings(collisions: Sequence[SlugCollision]) -> list[BuildWarning]:
    warnings = []
    for collision in collisions:
        kind = "alias_collision" if collision.kind == "alias" else "duplicate_slug"
        message = f"{collision.kind} {collision.key!r} already claimed by {collision.claimed_by}"
        logger.warning(
            "Dropped %s %r from %s",
            collision.kind,
            collision.key,
            collision.rel_path,
            extra={"version": collision.version, "claimed_by": collision.claimed_by},
        )
        warnings.append(BuildWarning(kind, collision.version, collision.rel_path, message))
    return warnings
