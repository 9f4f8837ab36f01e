"""Turn a markdown file into a ``Section``."""

from __future__ import annotations

from pathlib import Path, PurePath

from doctree.config import DOCTREE_INDEX_FILENAME, DOCTREE_MARKDOWN_EXTENSION
from doctree.frontmatter import parse_frontmatter
from doctree.schemas import Section


def extract_section(path: str | Path, docs_root: str | Path) -> Section:
    """Build the section for ``path`` relative to its version root.

    Args:
        path: Markdown file inside ``docs_root``.
        docs_root: Root directory of one documentation version.

    Returns:
        The section with slug, hierarchy and frontmatter metadata filled in.

    Raises:
        FrontmatterParseError: If the file's frontmatter cannot be parsed.
        ValueError: If ``path`` is not inside ``docs_root``.
    """
    path = Path(path)
    frontmatter = parse_frontmatter(path)

    rel_path = path.relative_to(docs_root).as_posix()
    hierarchy = build_hierarchy(rel_path)

    return Section(
        slug=path_to_slug(rel_path),
        rel_path=rel_path,
        title=frontmatter.title,
        description=frontmatter.description,
        weight=frontmatter.weight,
        aliases=tuple(frontmatter.aliases),
        category=hierarchy[0] if hierarchy else "",
        hierarchy=hierarchy,
        is_index=path.name == DOCTREE_INDEX_FILENAME,
    )


def build_hierarchy(rel_path: str) -> tuple[str, ...]:
    """Directory segments leading to a file.

    Example: ``"using-k6/scenarios/_index.md"`` -> ``("using-k6", "scenarios")``.
    """
    parent = PurePath(rel_path).parent
    return tuple(part for part in parent.parts if part not in ("", "."))


def path_to_slug(rel_path: str) -> str:
    """Convert a relative markdown path to a slug.

    Examples:
        ``"using-k6/scenarios/_index.md"`` -> ``"using-k6/scenarios"``
        ``"javascript-api/k6-http/request.md"`` -> ``"javascript-api/k6-http/request"``
        ``"get-started.md"`` -> ``"get-started"``
    """
    slug = rel_path.replace("\\", "/")
    slug = slug.removesuffix(DOCTREE_MARKDOWN_EXTENSION)
    index_stem = DOCTREE_INDEX_FILENAME.removesuffix(DOCTREE_MARKDOWN_EXTENSION)
    return slug.removesuffix(f"/{index_stem}")
