"""Immutable multi-version section index and its JSON persistence."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Literal, Mapping, Sequence

from pydantic import ValidationError

from doctree.config import DOCTREE_ALIAS_ROOT_PREFIX
from doctree.exceptions import IndexDeserializationError
from doctree.schemas import IndexDocument, Section
from doctree.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SlugCollision:
    """A slug registration that lost to an earlier one."""

    version: str
    key: str
    kind: Literal["slug", "alias"]
    rel_path: str
    claimed_by: str


@dataclass(frozen=True)
class LookupTables:
    """Derived per-version lookup tables."""

    by_slug: Mapping[str, Mapping[str, Section]]
    by_path: Mapping[str, Mapping[str, Section]]
    collisions: tuple[SlugCollision, ...]


def normalize_alias(alias: str, prefix: str = DOCTREE_ALIAS_ROOT_PREFIX) -> str:
    """Strip one leading ``/`` and the documentation root prefix from an alias."""
    alias = alias.removeprefix("/")
    if prefix:
        alias = alias.removeprefix(prefix)
    return alias


def build_lookup_tables(sections: Mapping[str, Sequence[Section]]) -> LookupTables:
    """Register slugs, relative paths and aliases for every version.

    Primary slugs are registered before any alias, so an alias can never
    shadow a page's own slug. Within each pass the first registration of a key
    wins; later ones are returned as collisions.
    """
    by_slug: dict[str, Mapping[str, Section]] = {}
    by_path: dict[str, Mapping[str, Section]] = {}
    collisions: list[SlugCollision] = []

    for version, version_sections in sections.items():
        slugs: dict[str, Section] = {}
        paths: dict[str, Section] = {}

        for section in version_sections:
            paths.setdefault(section.rel_path, section)
            existing = slugs.setdefault(section.slug, section)
            if existing is not section:
                collisions.append(
                    SlugCollision(version, section.slug, "slug", section.rel_path, existing.rel_path)
                )

        for section in version_sections:
            for alias in section.aliases:
                key = normalize_alias(alias)
                if not key:
                    continue
                existing = slugs.setdefault(key, section)
                if existing is not section:
                    collisions.append(
                        SlugCollision(version, key, "alias", section.rel_path, existing.rel_path)
                    )

        by_slug[version] = MappingProxyType(slugs)
        by_path[version] = MappingProxyType(paths)

    return LookupTables(
        by_slug=MappingProxyType(by_slug),
        by_path=MappingProxyType(by_path),
        collisions=tuple(collisions),
    )


class SectionIndex:
    """Read-only snapshot of every indexed version.

    The slug and path tables are always derived from ``sections`` by the
    constructor; they are never persisted and never modified afterwards.
    """

    __slots__ = ("_versions", "_latest", "_sections", "_tables")

    def __init__(
        self,
        versions: Iterable[str],
        latest: str,
        sections: Mapping[str, Iterable[Section]],
    ) -> None:
        self._versions = tuple(versions)
        self._latest = latest
        self._sections: Mapping[str, tuple[Section, ...]] = MappingProxyType(
            {version: tuple(items) for version, items in sections.items()}
        )
        self._tables = build_lookup_tables(self._sections)

    @property
    def versions(self) -> tuple[str, ...]:
        return self._versions

    @property
    def latest(self) -> str:
        return self._latest

    @property
    def sections(self) -> Mapping[str, tuple[Section, ...]]:
        return self._sections

    @property
    def by_slug(self) -> Mapping[str, Mapping[str, Section]]:
        return self._tables.by_slug

    @property
    def by_path(self) -> Mapping[str, Mapping[str, Section]]:
        return self._tables.by_path

    @property
    def collisions(self) -> tuple[SlugCollision, ...]:
        return self._tables.collisions

    def has_version(self, version: str) -> bool:
        return version in self._sections

    def get_version(self, version: str) -> tuple[Section, ...] | None:
        return self._sections.get(version)

    def __repr__(self) -> str:
        return f"SectionIndex(versions={list(self._versions)!r}, latest={self._latest!r})"

    def to_document(self) -> IndexDocument:
        return IndexDocument(
            versions=list(self._versions),
            latest=self._latest,
            sections={version: list(items) for version, items in self._sections.items()},
        )

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize versions, latest and the section lists."""
        return self.to_document().model_dump_json(indent=indent)

    @classmethod
    def from_document(cls, document: IndexDocument) -> "SectionIndex":
        return cls(document.versions, document.latest, document.sections)

    @classmethod
    def from_json(cls, data: str | bytes) -> "SectionIndex":
        """Load an index and rebuild its lookup tables.

        Raises:
            IndexDeserializationError: If the document is not a valid index.
        """
        try:
            document = IndexDocument.model_validate_json(data)
        except ValidationError as exc:
            raise IndexDeserializationError(f"failed to load section index: {exc}") from exc
        return cls.from_document(document)


def write_index(index: SectionIndex, output_path: str | Path) -> Path:
    """Write ``index`` as JSON, creating parent directories as needed."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(index.to_json(), encoding="utf-8")
    logger.info(
        "Wrote section index",
        extra={"path": str(output_path), "versions": len(index.versions)},
    )
    return output_path


def load_index(path: str | Path) -> SectionIndex:
    """Read a persisted index from ``path``.

    Raises:
        IndexDeserializationError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise IndexDeserializationError(f"failed to read section index {path}: {exc}") from exc
    index = SectionIndex.from_json(data)
    logger.debug(
        "Loaded section index",
        extra={"path": str(path), "versions": len(index.versions), "latest": index.latest},
    )
    return index
