"""
Content type definitions.

A definition names a content type and lists the parts welded onto items of
that type. Definitions are configuration, not records: they are declared in
YAML or built in code and never persisted by the content manager.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ContentPartDefinition(BaseModel):
    name: str
    settings: dict[str, Any] = Field(default_factory=dict)


class ContentTypeDefinition(BaseModel):
    name: str
    display_name: str = ""
    parts: list[ContentPartDefinition] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)

    def has_part(self, part_name: str) -> bool:
        return any(p.name == part_name for p in self.parts)


class ContentTypeDefinitionBuilder:
    """
    Fluent builder for type definitions.

    Also used by the manager to synthesize an empty definition for a type
    name that was never declared.
    """

    def __init__(self, existing: ContentTypeDefinition | None = None) -> None:
        self._name = existing.name if existing else ""
        self._display_name = existing.display_name if existing else ""
        self._parts: list[ContentPartDefinition] = list(existing.parts) if existing else []
        self._settings: dict[str, Any] = dict(existing.settings) if existing else {}

    def named(self, name: str) -> ContentTypeDefinitionBuilder:
        self._name = name
        return self

    def display_named(self, display_name: str) -> ContentTypeDefinitionBuilder:
        self._display_name = display_name
        return self

    def with_part(self, part_name: str, **settings: Any) -> ContentTypeDefinitionBuilder:
        self._parts = [p for p in self._parts if p.name != part_name]
        self._parts.append(ContentPartDefinition(name=part_name, settings=settings))
        return self

    def with_setting(self, key: str, value: Any) -> ContentTypeDefinitionBuilder:
        self._settings[key] = value
        return self

    def build(self) -> ContentTypeDefinition:
        if not self._name:
            raise ValueError("Content type definition requires a name")
        return ContentTypeDefinition(
            name=self._name,
            display_name=self._display_name or self._name,
            parts=list(self._parts),
            settings=dict(self._settings),
        )
