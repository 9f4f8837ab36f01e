"""Section and section tree models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer


class Section(BaseModel):
    """One documentation page of one version."""

    model_config = ConfigDict(frozen=True)

    slug: str
    rel_path: str
    title: str = ""
    description: str = ""
    weight: int = 0
    aliases: tuple[str, ...] = ()
    category: str = ""
    hierarchy: tuple[str, ...] = ()
    is_index: bool = False

    @model_serializer(mode="wrap")
    def _omit_empty_aliases(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if not data.get("aliases"):
            data.pop("aliases", None)
        return data


class SectionNode(BaseModel):
    """A section together with its (possibly truncated) children."""

    section: Section
    child_count: int = 0
    has_children: bool = False
    has_more_children: bool = False
    children: list["SectionNode"] | None = None

    @property
    def slug(self) -> str:
        return self.section.slug

    @property
    def title(self) -> str:
        return self.section.title


class SectionView(BaseModel):
    """Lean tree node handed to size-constrained consumers.

    Serialization drops an empty description, a false ``has_more`` flag and
    missing children.
    """

    slug: str
    title: str
    description: str | None = None
    child_count: int = Field(default=0, ge=0)
    has_more: bool | None = None
    children: list["SectionView"] | None = None

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}
