"""Shared helpers for doctree."""
