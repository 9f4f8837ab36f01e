"""doctree: index versioned markdown documentation and browse it as trees."""

from doctree.exceptions import (
    ContentNotFoundError,
    DoctreeError,
    FrontmatterParseError,
    IndexBuildError,
    IndexDeserializationError,
    InvalidDepthError,
    MissingVersionDirectoryError,
    QueryError,
    RootNotFoundError,
    SectionNotFoundError,
    VersionNotFoundError,
)
from doctree.finder import Finder, VersionMatch
from doctree.index import SectionIndex, load_index, write_index
from doctree.indexer import (
    BuildWarning,
    IndexBuildResult,
    build_multi_version_index,
    build_section_index,
    find_available_versions,
)
from doctree.schemas import Section, SectionNode, SectionView
from doctree.tree import build_section_tree, nodes_to_view

__all__ = [
    "BuildWarning",
    "ContentNotFoundError",
    "DoctreeError",
    "Finder",
    "FrontmatterParseError",
    "IndexBuildError",
    "IndexBuildResult",
    "IndexDeserializationError",
    "InvalidDepthError",
    "MissingVersionDirectoryError",
    "QueryError",
    "RootNotFoundError",
    "Section",
    "SectionIndex",
    "SectionNode",
    "SectionNotFoundError",
    "SectionView",
    "VersionMatch",
    "VersionNotFoundError",
    "build_multi_version_index",
    "build_section_index",
    "build_section_tree",
    "find_available_versions",
    "load_index",
    "nodes_to_view",
    "write_index",
]
