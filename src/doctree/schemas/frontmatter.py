"""Frontmatter model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Frontmatter(BaseModel):
    """Metadata block at the head of a markdown page.

    Numbers are accepted for the text fields, but ``weight`` must be a YAML
    integer; quoted numbers and booleans are rejected.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, populate_by_name=True)

    title: str = ""
    description: str = ""
    weight: int = Field(default=0, strict=True)
    aliases: list[str] = Field(default_factory=list)
    menu_title: str = Field(default="", alias="menuTitle")

    @field_validator("title", "description", "menu_title", "weight", "aliases", mode="before")
    @classmethod
    def _null_is_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat explicit YAML nulls (``title:``) as the field's zero value."""
        if value is not None:
            return value
        if info.field_name == "weight":
            return 0
        if info.field_name == "aliases":
            return []
        return ""
