"""In-memory content definition manager."""

from __future__ import annotations

from collections.abc import Iterable

from folio.domain.definitions import ContentTypeDefinition


class InMemoryContentDefinitionManager:
    """ContentDefinitionPort backed by a dict, usually seeded from config."""

    def __init__(self, definitions: Iterable[ContentTypeDefinition] = ()) -> None:
        self._definitions: dict[str, ContentTypeDefinition] = {}
        for definition in definitions:
            self.store_type_definition(definition)

    def get_type_definition(self, name: str) -> ContentTypeDefinition | None:
        return self._definitions.get(name)

    def list_type_definitions(self) -> list[ContentTypeDefinition]:
        return sorted(self._definitions.values(), key=lambda d: d.name)

    def store_type_definition(self, definition: ContentTypeDefinition) -> None:
        """Add or replace a definition."""
        self._definitions[definition.name] = definition
