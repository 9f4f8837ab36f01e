"""YAML frontmatter extraction for markdown pages."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from yaml.constructor import ConstructorError

from doctree.exceptions import FrontmatterParseError
from doctree.schemas import Frontmatter

_DELIMITER = b"---"
_OPENINGS = (b"---\n", b"---\r\n")
_PLAIN_TEXT_TAGS = frozenset({"tag:yaml.org,2002:bool", "tag:yaml.org,2002:timestamp"})


class DuplicateKeyError(ConstructorError):
    """A YAML mapping declares the same key twice."""


class _UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that refuses duplicate mapping keys instead of keeping the last.

    Booleans and timestamps are not resolved implicitly: metadata fields are
    text, and YAML 1.1 would otherwise turn ``No`` into False and dates into
    ``date`` objects.
    """

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag not in _PLAIN_TEXT_TAGS]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        seen: set[Any] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # unhashable keys are reported by the base constructor
                continue
            if duplicate:
                raise DuplicateKeyError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"mapping key {key!r} already defined",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def parse_frontmatter(path: str | Path) -> Frontmatter:
    """Read ``path`` and parse its frontmatter.

    Raises:
        FrontmatterParseError: If the file cannot be read or the metadata block
            is invalid.
    """
    path = Path(path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise FrontmatterParseError(path, f"failed to read file: {exc}") from exc
    return parse_frontmatter_bytes(content, source=path)


def parse_frontmatter_bytes(content: bytes, *, source: str | Path | None = None) -> Frontmatter:
    """Parse the frontmatter at the very start of ``content``.

    Returns an empty ``Frontmatter`` when the content does not open with a
    ``---`` line. Duplicate top-level keys are resolved by keeping the last
    declaration; any other YAML problem is fatal.

    Args:
        content: Raw bytes of a markdown file.
        source: Path used in error messages.

    Returns:
        The parsed frontmatter.

    Raises:
        FrontmatterParseError: If the metadata block is not valid.
    """
    opening = next((prefix for prefix in _OPENINGS if content.startswith(prefix)), None)
    if opening is None:
        return Frontmatter()

    try:
        raw = extract_block(content[len(opening):]).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FrontmatterParseError(source, f"frontmatter is not valid UTF-8: {exc}") from exc

    data = _load_with_recovery(raw, source)
    return _to_frontmatter(data, source)


def extract_block(body: bytes) -> bytes:
    """Return the lines of ``body`` before the closing ``---`` line.

    Works on raw bytes so that the markdown after the block is never decoded.
    """
    lines: list[bytes] = []
    for line in body.split(b"\n"):
        line = line.rstrip(b"\r")
        if line == _DELIMITER:
            break
        lines.append(line)
    return b"\n".join(lines)


def dedupe_top_level_keys(raw: str) -> str:
    """Keep only the last block of every repeated top-level key.

    A block starts at a top-level ``key:`` line and runs until the next one.
    Lines before the first key are always kept.

    Example:
        >>> dedupe_top_level_keys("title: A\\nweight: 1\\nweight: 2")
        'title: A\\nweight: 2'
    """
    lines = raw.split("\n")
    starts: list[tuple[int, str]] = []
    for index, line in enumerate(lines):
        key = top_level_key(line)
        if key:
            starts.append((index, key))
    if not starts:
        return raw

    blocks: list[tuple[str, list[str]]] = []
    if starts[0][0] > 0:
        blocks.append(("", lines[: starts[0][0]]))
    for position, (start, key) in enumerate(starts):
        end = starts[position + 1][0] if position + 1 < len(starts) else len(lines)
        blocks.append((key, lines[start:end]))

    last_block = {key: position for position, (key, _) in enumerate(blocks) if key}

    output: list[str] = []
    for position, (key, block_lines) in enumerate(blocks):
        if key and last_block[key] != position:
            continue
        output.extend(block_lines)
    return "\n".join(output)


def top_level_key(line: str) -> str | None:
    """Return the key declared by a non-indented ``key: value`` line."""
    if not line or line[0] in " \t":
        return None
    trimmed = line.strip()
    if not trimmed or trimmed.startswith(("#", "-")):
        return None
    key, separator, _ = trimmed.partition(":")
    key = key.strip()
    if not separator or not key or " " in key or "\t" in key:
        return None
    return key


def _load_with_recovery(raw: str, source: str | Path | None) -> Any:
    try:
        return yaml.load(raw, Loader=_UniqueKeyLoader)  # noqa: S506 - SafeLoader subclass
    except DuplicateKeyError as exc:
        first_error = exc
    except yaml.YAMLError as exc:
        raise FrontmatterParseError(source, f"invalid YAML: {exc}") from exc

    sanitized = dedupe_top_level_keys(raw)
    if sanitized == raw:
        raise FrontmatterParseError(source, f"invalid YAML: {first_error}") from first_error

    try:
        return yaml.load(sanitized, Loader=_UniqueKeyLoader)  # noqa: S506 - SafeLoader subclass
    except yaml.YAMLError as exc:
        raise FrontmatterParseError(source, f"invalid YAML: {exc}") from exc


def _to_frontmatter(data: Any, source: str | Path | None) -> Frontmatter:
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise FrontmatterParseError(source, f"expected a mapping, got {type(data).__name__}")
    try:
        return Frontmatter.model_validate(data)
    except ValidationError as exc:
        raise FrontmatterParseError(source, f"invalid frontmatter fields: {exc}") from exc
