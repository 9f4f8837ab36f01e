"""Command line interface for doctree."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

from doctree.config import DOCTREE_DIST_PATH, DOCTREE_INDEX_PATH, DOCTREE_MARKDOWN_PATH
from doctree.exceptions import DoctreeError, IndexBuildError
from doctree.finder import Finder
from doctree.index import load_index, write_index
from doctree.indexer import build_multi_version_index, find_available_versions
from doctree.listing import get_documentation, list_sections
from doctree.output_formatter import estimate_tokens, format_tree
from doctree.prepare import prepare_docs
from doctree.schemas import ListSectionsResult
from doctree.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        return args.handler(args)
    except DoctreeError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="doctree", description="Index and browse versioned markdown docs.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    prepare = subparsers.add_parser("prepare", help="Build sections.json and copy markdown into a dist directory")
    prepare.add_argument("docs_dir", type=Path, help="Directory with v<major>.<minor>.x version directories")
    prepare.add_argument("--dist", type=Path, default=DOCTREE_DIST_PATH, help="Output directory")
    prepare.add_argument("--strict", action="store_true", help="Fail on any build warning")
    prepare.set_defaults(handler=_cmd_prepare)

    build = subparsers.add_parser("build", help="Build a section index only")
    build.add_argument("docs_root", type=Path, help="Directory with one subdirectory per version")
    build.add_argument("-o", "--output", type=Path, default=DOCTREE_INDEX_PATH, help="Index file to write")
    build.add_argument(
        "--version",
        dest="versions",
        action="append",
        help="Version to index (repeatable, latest first); discovered when omitted",
    )
    build.add_argument("--strict", action="store_true", help="Fail on any build warning")
    build.set_defaults(handler=_cmd_build)

    listing = subparsers.add_parser("list", help="List sections as a tree")
    _add_index_argument(listing)
    listing.add_argument("--version", default="", help="Version to list, or 'all'")
    listing.add_argument("--category", default="", help="Top-level category filter")
    listing.add_argument("--root-slug", default="", help="List the children of this slug")
    listing.add_argument("--depth", type=int, default=None, help="Tree depth")
    listing.add_argument("--text", action="store_true", help="Print an outline instead of JSON")
    listing.set_defaults(handler=_cmd_list)

    show = subparsers.add_parser("show", help="Print a section and its markdown content")
    _add_index_argument(show)
    show.add_argument("slug", help="Section slug or alias")
    show.add_argument("--version", default="", help="Version (defaults to latest)")
    show.add_argument("--markdown", type=Path, default=DOCTREE_MARKDOWN_PATH, help="Prepared markdown directory")
    show.set_defaults(handler=_cmd_show)

    match = subparsers.add_parser("match", help="Map a client version onto an indexed version")
    _add_index_argument(match)
    match.add_argument("client_version", help="Version reported by the client, e.g. v1.4.0")
    match.add_argument("--strict", action="store_true", help="Fail instead of falling back to latest")
    match.set_defaults(handler=_cmd_match)

    return parser


def _add_index_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--index", type=Path, default=DOCTREE_INDEX_PATH, help="Section index file")


def _cmd_prepare(args: argparse.Namespace) -> int:
    report = prepare_docs(args.docs_dir, args.dist, strict=args.strict)
    _print_json(
        {
            "versions": report.versions,
            "latest": report.latest,
            "index_path": str(report.index_path),
            "markdown_path": str(report.markdown_path),
            "section_counts": report.section_counts,
            "warnings": [asdict(warning) for warning in report.warnings],
        }
    )
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    versions = args.versions or find_available_versions(args.docs_root)
    result = build_multi_version_index(args.docs_root, versions)
    if args.strict and result.warnings:
        raise IndexBuildError(f"build produced {len(result.warnings)} warning(s) in strict mode")
    write_index(result.index, args.output)
    _print_json(
        {
            "output": str(args.output),
            "versions": list(result.index.versions),
            "latest": result.index.latest,
            "warnings": [asdict(warning) for warning in result.warnings],
        }
    )
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    finder = Finder(load_index(args.index))
    result = list_sections(
        finder,
        version=args.version,
        category=args.category,
        root_slug=args.root_slug,
        depth=args.depth,
    )
    if args.text and isinstance(result, ListSectionsResult):
        outline = format_tree(result.tree, header=f"Sections ({result.version}):")
        print(outline)
        tokens = estimate_tokens(outline)
        if tokens:
            print(f"Estimated tokens: {tokens}")
        return 0
    _print_json(result)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    finder = Finder(load_index(args.index))
    result = asyncio.run(
        get_documentation(finder, args.slug, version=args.version, markdown_root=args.markdown)
    )
    _print_json(result)
    return 0


def _cmd_match(args: argparse.Namespace) -> int:
    finder = Finder(load_index(args.index))
    match = finder.match_version(args.client_version, strict=args.strict)
    _print_json({"version": match.version, "exact": match.exact})
    return 0


def _print_json(payload: object) -> None:
    if isinstance(payload, BaseModel):
        print(payload.model_dump_json(indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    raise SystemExit(main())
