"""Entry point for ``python -m doctree``."""

from doctree.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
