"""Local configuration for doctree."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_INDEX_FILENAME = "_index.md"
DEFAULT_MARKDOWN_EXTENSION = ".md"
DEFAULT_ALIAS_ROOT_PREFIX = "docs/k6/"
DEFAULT_NEXT_VERSION_DIR = "next"
DEFAULT_VERSION_DIR_PATTERN = r"^v(\d+)\.(\d+)\.x$"
DEFAULT_TREE_DEPTH = 1
DEFAULT_MAX_TREE_DEPTH = 5
DEFAULT_DIST_DIR = "dist"
DEFAULT_SECTIONS_FILENAME = "sections.json"
DEFAULT_MARKDOWN_DIRNAME = "markdown"
DEFAULT_LOG_LEVEL = "INFO"

# Reserved filename marking a directory's landing page.
DOCTREE_INDEX_FILENAME = os.getenv("DOCTREE_INDEX_FILENAME", DEFAULT_INDEX_FILENAME)
DOCTREE_MARKDOWN_EXTENSION = os.getenv("DOCTREE_MARKDOWN_EXTENSION", DEFAULT_MARKDOWN_EXTENSION)
# Prefix stripped from aliases declared as site paths (e.g. "/docs/k6/using-k6/").
DOCTREE_ALIAS_ROOT_PREFIX = os.getenv("DOCTREE_ALIAS_ROOT_PREFIX", DEFAULT_ALIAS_ROOT_PREFIX)
DOCTREE_NEXT_VERSION_DIR = os.getenv("DOCTREE_NEXT_VERSION_DIR", DEFAULT_NEXT_VERSION_DIR)
DOCTREE_VERSION_DIR_PATTERN = os.getenv("DOCTREE_VERSION_DIR_PATTERN", DEFAULT_VERSION_DIR_PATTERN)
DOCTREE_DEFAULT_TREE_DEPTH = int(os.getenv("DOCTREE_DEFAULT_TREE_DEPTH", str(DEFAULT_TREE_DEPTH)))
DOCTREE_MAX_TREE_DEPTH = int(os.getenv("DOCTREE_MAX_TREE_DEPTH", str(DEFAULT_MAX_TREE_DEPTH)))

# Build output: <dist>/sections.json and <dist>/markdown/<version>/...
DOCTREE_DIST_PATH = Path(os.getenv("DOCTREE_DIST_PATH", DEFAULT_DIST_DIR)).expanduser()
DOCTREE_INDEX_PATH = Path(
    os.getenv("DOCTREE_INDEX_PATH", str(DOCTREE_DIST_PATH / DEFAULT_SECTIONS_FILENAME))
).expanduser()
DOCTREE_MARKDOWN_PATH = Path(
    os.getenv("DOCTREE_MARKDOWN_PATH", str(DOCTREE_DIST_PATH / DEFAULT_MARKDOWN_DIRNAME))
).expanduser()

DOCTREE_LOG_LEVEL = os.getenv("DOCTREE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
