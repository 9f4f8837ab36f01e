"""Custom exceptions for doctree."""

from __future__ import annotations

from pathlib import Path


class DoctreeError(Exception):
    """Base exception for doctree operations."""


class FrontmatterParseError(DoctreeError):
    """Frontmatter of a single markdown file could not be read or parsed."""

    def __init__(self, path: str | Path | None, reason: str) -> None:
        self.path = str(path) if path is not None else None
        self.reason = reason
        if self.path:
            super().__init__(f"failed to parse frontmatter for {self.path}: {reason}")
        else:
            super().__init__(f"failed to parse frontmatter: {reason}")


class IndexBuildError(DoctreeError):
    """The section index could not be built."""


class MissingVersionDirectoryError(IndexBuildError):
    """A requested version has no directory under the docs root."""


class IndexDeserializationError(DoctreeError):
    """A persisted section index could not be loaded."""


class QueryError(DoctreeError):
    """Error while answering a query against a loaded index."""


class VersionNotFoundError(QueryError):
    """Requested version is not part of the index."""


class SectionNotFoundError(QueryError):
    """No section (or alias) matches the requested slug."""


class RootNotFoundError(QueryError):
    """Tree root slug does not exist in the section list."""


class InvalidDepthError(QueryError):
    """Tree depth is lower than one."""


class ContentNotFoundError(QueryError):
    """Markdown body of an indexed section is missing."""
