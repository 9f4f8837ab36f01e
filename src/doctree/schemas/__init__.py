"""Shared schemas for doctree."""

from doctree.schemas.frontmatter import Frontmatter
from doctree.schemas.index import IndexDocument
from doctree.schemas.responses import DocumentationResult, FilterInfo, ListSectionsResult, VersionsResult
from doctree.schemas.sections import Section, SectionNode, SectionView

__all__ = [
    "DocumentationResult",
    "FilterInfo",
    "Frontmatter",
    "IndexDocument",
    "ListSectionsResult",
    "Section",
    "SectionNode",
    "SectionView",
    "VersionsResult",
]
