"""Response models for the listing layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from doctree.schemas.sections import Section, SectionView


class FilterInfo(BaseModel):
    """Filters applied to a section listing."""

    category: str | None = None
    root_slug: str | None = None

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value}


class ListSectionsResult(BaseModel):
    """A depth-limited section tree for one version."""

    tree: list[SectionView] = Field(default_factory=list)
    count: int
    total: int
    version: str
    available_versions: list[str]
    filtered_by: FilterInfo | None = None
    depth: int
    usage: str
    root_slug: str | None = None

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in ("filtered_by", "root_slug"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class VersionsResult(BaseModel):
    """Answer to a ``version="all"`` listing."""

    versions: list[str]
    latest: str
    message: str


class DocumentationResult(BaseModel):
    """A section with its markdown body."""

    section: Section
    content: str
    version: str
    available_versions: list[str]
