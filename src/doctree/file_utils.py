"""File helpers for reading and copying documentation files."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


def markdown_path_for(markdown_root: Path, version: str, rel_path: str) -> Path:
    """Location of a section's markdown body in a prepared distribution.

    Raises:
        ValueError: If ``rel_path`` escapes the version directory.
    """
    version_root = (markdown_root / version).resolve()
    target = (version_root / rel_path).resolve()
    if not target.is_relative_to(version_root):
        raise ValueError(f"path {rel_path!r} escapes {version_root}")
    return target


def copy_file(source: Path, dest: Path) -> None:
    """Copy ``source`` to ``dest``, creating parent directories."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
