"""Host-facing listing and retrieval built on ``Finder`` and the tree builder."""

from __future__ import annotations

from pathlib import Path

from doctree.config import DOCTREE_DEFAULT_TREE_DEPTH, DOCTREE_MARKDOWN_PATH, DOCTREE_MAX_TREE_DEPTH
from doctree.exceptions import ContentNotFoundError, SectionNotFoundError, VersionNotFoundError
from doctree.file_utils import markdown_path_for, read_text_async
from doctree.finder import Finder
from doctree.schemas import DocumentationResult, FilterInfo, ListSectionsResult, VersionsResult
from doctree.tree import build_section_tree, nodes_to_view
from doctree.utils.logging_config import get_logger

logger = get_logger(__name__)

ALL_VERSIONS = "all"

_USAGE_ALL = (
    "Use the 'slug' field with get_documentation to retrieve full content. "
    "Use 'root_slug' to expand any branch and 'depth' to include more nested children."
)
_USAGE_CATEGORY = (
    "Use the 'slug' field with get_documentation to retrieve full content. "
    "Adjust 'root_slug' or 'depth' to explore deeper within this category."
)
_VERSIONS_MESSAGE = "Available documentation versions. Use the version parameter to filter sections."


def clamp_depth(
    depth: int | None,
    *,
    default: int = DOCTREE_DEFAULT_TREE_DEPTH,
    maximum: int = DOCTREE_MAX_TREE_DEPTH,
) -> int:
    """Bring a caller-supplied depth into ``[1, maximum]``; missing or < 1 means ``default``."""
    if depth is None or depth < 1:
        return default
    return min(depth, maximum)


def resolve_listing_version(finder: Finder, version: str) -> str:
    """Latest for an empty version, else the version itself if it is indexed.

    Raises:
        VersionNotFoundError: If the version is not indexed.
    """
    if not version:
        return finder.get_latest_version()
    if finder.has_version(version):
        return version
    raise VersionNotFoundError(
        f"version not found: {version}. Use version='{ALL_VERSIONS}' to see available versions"
    )


def list_versions(finder: Finder) -> VersionsResult:
    return VersionsResult(
        versions=finder.get_versions(),
        latest=finder.get_latest_version(),
        message=_VERSIONS_MESSAGE,
    )


def list_sections(
    finder: Finder,
    *,
    version: str = "",
    category: str = "",
    root_slug: str = "",
    depth: int | None = None,
) -> ListSectionsResult | VersionsResult:
    """List sections of a version as a depth-limited tree.

    Args:
        finder: Finder over the loaded index.
        version: Version to list; empty for latest, ``"all"`` for the version list.
        category: Only include sections of this top-level category.
        root_slug: List the children of this section.
        depth: Requested depth, clamped into the configured range.

    Returns:
        The tree listing, or the available versions for ``version="all"``.

    Raises:
        VersionNotFoundError: If the version is not indexed.
        RootNotFoundError: If ``root_slug`` is not in the listed sections.
    """
    depth = clamp_depth(depth)
    logger.debug(
        "Listing sections",
        extra={"version": version, "category": category, "root_slug": root_slug, "depth": depth},
    )

    if version == ALL_VERSIONS:
        return list_versions(finder)

    try:
        resolved = resolve_listing_version(finder, version)
    except VersionNotFoundError:
        logger.warning(
            "Version not found",
            extra={"version": version, "available_versions": finder.get_versions()},
        )
        raise

    if category:
        section_list = finder.get_by_category(category, resolved)
    else:
        section_list = finder.get_all(resolved)

    nodes = build_section_tree(section_list, root_slug, depth)

    filtered_by = None
    if category or root_slug:
        filtered_by = FilterInfo(category=category or None, root_slug=root_slug or None)

    result = ListSectionsResult(
        tree=nodes_to_view(nodes),
        count=len(nodes),
        total=len(section_list),
        version=resolved,
        available_versions=finder.get_versions(),
        filtered_by=filtered_by,
        depth=depth,
        usage=_USAGE_CATEGORY if category else _USAGE_ALL,
        root_slug=root_slug or None,
    )
    logger.info(
        "Sections listed",
        extra={"version": resolved, "section_count": len(section_list), "depth": depth},
    )
    return result


async def get_documentation(
    finder: Finder,
    slug: str,
    *,
    version: str = "",
    markdown_root: str | Path = DOCTREE_MARKDOWN_PATH,
) -> DocumentationResult:
    """Return a section and its markdown body.

    Raises:
        VersionNotFoundError: If the version is not indexed.
        SectionNotFoundError: If neither a slug nor an alias matches.
        ContentNotFoundError: If the prepared markdown file is missing.
    """
    resolved = finder.resolve_version(version)
    try:
        section = finder.get_by_slug(slug, resolved)
    except SectionNotFoundError as exc:
        logger.warning("Section not found", extra={"slug": slug, "version": resolved})
        raise SectionNotFoundError(
            f"section not found: {slug} in version {resolved}. Use list_sections to find valid slugs"
        ) from exc

    try:
        path = markdown_path_for(Path(markdown_root), resolved, section.rel_path)
        content = await read_text_async(path)
    except (OSError, ValueError) as exc:
        logger.error(
            "Failed to read markdown file",
            extra={"slug": section.slug, "version": resolved, "error": str(exc)},
        )
        raise ContentNotFoundError(
            f"failed to read documentation content for {section.slug} (version {resolved})"
        ) from exc

    logger.info(
        "Documentation retrieved",
        extra={"slug": slug, "version": resolved, "content_size": len(content)},
    )
    return DocumentationResult(
        section=section,
        content=content,
        version=resolved,
        available_versions=finder.get_versions(),
    )
