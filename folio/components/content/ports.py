"""
Content component port definitions.

The manager consumes storage, type definitions, shapes and index sinks
through these protocols only.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, TypeVar
from uuid import UUID

from folio.domain.definitions import ContentTypeDefinition

T = TypeVar("T")


class RepositoryPort(Protocol[T]):
    """Record repository (types, items and versions each get one)."""

    def get(self, record_id: UUID) -> T | None:
        """Get a record by ID."""
        ...

    def get_one(self, predicate: Callable[[T], bool]) -> T | None:
        """Get the first record matching predicate."""
        ...

    def fetch(self, predicate: Callable[[T], bool]) -> list[T]:
        """Get all records matching predicate."""
        ...

    def create(self, record: T) -> T:
        """Add a new record."""
        ...

    def flush(self) -> None:
        """Push pending changes to the store."""
        ...


class ContentDefinitionPort(Protocol):
    """Lookup of content type definitions."""

    def get_type_definition(self, name: str) -> ContentTypeDefinition | None:
        """Get a type definition by name."""
        ...

    def list_type_definitions(self) -> Sequence[ContentTypeDefinition]:
        """List all known type definitions."""
        ...


class ShapeFactoryPort(Protocol):
    """Creates display/editor shapes."""

    def create_shape(self, shape_type: str, **properties: Any) -> Any:
        """Create a shape of the given type."""
        ...


class UpdateModelPort(Protocol):
    """Source of posted editor values."""

    def try_update_model(self, model: Any, prefix: str) -> bool:
        """Bind posted values onto model. Returns False on binding errors."""
        ...

    def add_model_error(self, key: str, message: str) -> None:
        """Record an editor validation error."""
        ...


class DocumentIndexPort(Protocol):
    """Search document being populated for one content item."""

    def add(
        self,
        name: str,
        value: Any,
        *,
        store: bool = True,
        analyze: bool = False,
    ) -> DocumentIndexPort:
        """Add a field to the document."""
        ...
