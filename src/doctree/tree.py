"""Depth-limited section trees."""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from doctree.exceptions import InvalidDepthError, RootNotFoundError
from doctree.schemas import Section, SectionNode, SectionView


def build_section_tree(sections: Sequence[Section], root_slug: str = "", depth: int = 1) -> list[SectionNode]:
    """Organize a flat section list into a tree.

    Args:
        sections: Sections of one version, in sibling order.
        root_slug: When set, return the children of this section instead of
            the top-level sections.
        depth: Number of levels to return, counting the returned nodes as the
            first level.

    Returns:
        The top-level nodes. Nodes on the last level whose children were cut
        off have ``has_more_children`` set.

    Raises:
        InvalidDepthError: If ``depth`` is lower than one.
        RootNotFoundError: If ``root_slug`` is not a slug in ``sections``.
    """
    if depth < 1:
        raise InvalidDepthError(f"depth must be at least 1, got {depth}")

    known_slugs = set()
    children_by_parent: dict[str, list[Section]] = defaultdict(list)
    for section in sections:
        known_slugs.add(section.slug)
        children_by_parent[parent_slug(section.slug)].append(section)

    if root_slug and root_slug not in known_slugs:
        raise RootNotFoundError(f"root slug not found: {root_slug}")

    return [
        _build_node(section, children_by_parent, depth, 1)
        for section in children_by_parent.get(root_slug, [])
    ]


def _build_node(
    section: Section,
    children_by_parent: dict[str, list[Section]],
    max_depth: int,
    current_depth: int,
) -> SectionNode:
    child_sections = children_by_parent.get(section.slug, [])
    node = SectionNode(
        section=section,
        child_count=len(child_sections),
        has_children=bool(child_sections),
    )
    if not child_sections:
        return node

    if current_depth < max_depth:
        node.children = [
            _build_node(child, children_by_parent, max_depth, current_depth + 1)
            for child in child_sections
        ]
    else:
        node.has_more_children = True
    return node


def parent_slug(slug: str) -> str:
    """Slug without its last segment; ``""`` for top-level slugs."""
    parent, _, _ = slug.rpartition("/")
    return parent


def nodes_to_view(nodes: Sequence[SectionNode]) -> list[SectionView]:
    """Strip tree nodes down to the fields consumers need."""
    return [node_to_view(node) for node in nodes if node is not None]


def node_to_view(node: SectionNode) -> SectionView:
    return SectionView(
        slug=node.slug,
        title=node.title,
        description=node.section.description or None,
        child_count=node.child_count,
        has_more=True if node.has_more_children else None,
        children=nodes_to_view(node.children) if node.children else None,
    )
