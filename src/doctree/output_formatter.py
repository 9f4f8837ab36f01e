"""Render section trees as plain-text outlines."""

from __future__ import annotations

from typing import Sequence

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from doctree.schemas import SectionView


def format_tree(views: Sequence[SectionView], *, header: str | None = "Sections:") -> str:
    """Create an indented outline of ``views``.

    Truncated branches end with ``(+N more)``, where N is the number of direct
    children that were not expanded.
    """
    body = _create_sections_tree(views)
    if header is None:
        return body
    return f"{header}\n{body}" if body else header


def estimate_tokens(text: str) -> str | None:
    """Compact token count for ``text`` (e.g. ``"1.2k"``), if tiktoken is available."""
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        count = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None
    return compact_count(count)


def compact_count(count: int) -> str:
    """Render ``count`` with a ``k`` or ``M`` suffix once it reaches four digits."""
    for threshold, suffix in ((1_000_000, "M"), (1_000, "k")):
        if count >= threshold:
            return f"{count / threshold:.1f}{suffix}"
    return str(count)


def _create_sections_tree(views: Sequence[SectionView], indent: int = 0) -> str:
    lines: list[str] = []
    for view in views:
        label = view.title or view.slug
        line = " " * (indent * 4) + f"{label} [{view.slug}]"
        if view.has_more:
            line += f" (+{view.child_count} more)"
        lines.append(line)
        if view.children:
            lines.append(_create_sections_tree(view.children, indent + 1))
    return "\n".join(lines)
