"""Query operations over a loaded section index."""

from __future__ import annotations

from typing import NamedTuple

from doctree.exceptions import SectionNotFoundError, VersionNotFoundError
from doctree.index import SectionIndex
from doctree.schemas import Section
from doctree.utils.logging_config import get_logger

logger = get_logger(__name__)


class VersionMatch(NamedTuple):
    """Result of mapping a client version onto an indexed version."""

    version: str
    exact: bool


class Finder:
    """Lookups against one ``SectionIndex``.

    Every ``version`` argument defaults to the index's latest version when
    empty. The index is never modified, so a finder can be shared freely.
    """

    def __init__(self, index: SectionIndex) -> None:
        self._index = index

    def get_all(self, version: str = "") -> list[Section]:
        """All sections of a version in build order."""
        return list(self._sections(version))

    def get_by_slug(self, slug: str, version: str = "") -> Section:
        """Find a section by slug or alias."""
        version = self.resolve_version(version)
        if not self._index.has_version(version):
            raise VersionNotFoundError(f"version not found: {version}")

        section = self._index.by_slug.get(version, {}).get(slug)
        if section is None:
            raise SectionNotFoundError(f"section not found: {slug} (version {version})")
        return section

    def get_by_category(self, category: str, version: str = "") -> list[Section]:
        return [section for section in self._sections(version) if section.category == category]

    def search(self, query: str, version: str = "") -> list[Section]:
        """Case-insensitive substring match on title, description and slug."""
        needle = query.lower()
        return [
            section
            for section in self._sections(version)
            if needle in section.title.lower()
            or needle in section.description.lower()
            or needle in section.slug.lower()
        ]

    def get_categories(self, version: str = "") -> list[str]:
        """Non-empty categories in first-seen order."""
        categories: dict[str, None] = {}
        for section in self._sections(version):
            if section.category:
                categories.setdefault(section.category, None)
        return list(categories)

    def get_versions(self) -> list[str]:
        return list(self._index.versions)

    def get_latest_version(self) -> str:
        return self._index.latest

    def has_version(self, version: str) -> bool:
        return self._index.has_version(version)

    def resolve_version(self, version: str) -> str:
        return version or self._index.latest

    def match_version(self, client_version: str, *, strict: bool = False) -> VersionMatch:
        """Map a client version such as ``v1.4.0`` onto an indexed version.

        Tries an exact match, then ``<major>.<minor>.x``. Anything else falls
        back to the latest version with ``exact=False``, or raises when
        ``strict`` is set.

        Raises:
            VersionNotFoundError: Only with ``strict=True`` and no match.
        """
        if not client_version:
            return VersionMatch(self._index.latest, True)

        if self._index.has_version(client_version):
            return VersionMatch(client_version, True)

        parts = client_version.split(".")
        if len(parts) >= 2:
            candidate = f"{parts[0]}.{parts[1]}.x"
            if self._index.has_version(candidate):
                return VersionMatch(candidate, True)

        if strict:
            raise VersionNotFoundError(f"no documentation version matches {client_version}")

        logger.warning(
            "No exact match for version %s, using latest",
            client_version,
            extra={"latest": self._index.latest},
        )
        return VersionMatch(self._index.latest, False)

    def _sections(self, version: str) -> tuple[Section, ...]:
        version = self.resolve_version(version)
        sections = self._index.get_version(version)
        if sections is None:
            raise VersionNotFoundError(f"version not found: {version}")
        return sections
