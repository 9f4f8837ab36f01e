"""Persisted index document."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from doctree.schemas.sections import Section


class IndexDocument(BaseModel):
    """On-disk shape of a section index.

    Only the canonical section lists are stored; slug and path lookup tables
    are rebuilt on load.
    """

    versions: list[str]
    latest: str
    sections: dict[str, list[Section]]

    @model_validator(mode="after")
    def _check_latest(self) -> "IndexDocument":
        if self.latest not in self.versions:
            raise ValueError(f"latest version {self.latest!r} is not listed in versions")
        return self
