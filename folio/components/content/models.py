"""
Content component models.

ContentItem is the transient composite handed to callers and handlers. It
wraps exactly one version record and is rebuilt on every resolution; the
identity session is what makes repeated resolution inside one unit of work
return the same instance.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar
from uuid import UUID

from folio.domain.definitions import ContentPartDefinition, ContentTypeDefinition
from folio.domain.entities import ContentItemRecord, ContentItemVersionRecord

if TYPE_CHECKING:
    from .component import ContentManager

P = TypeVar("P", bound="ContentPart")


# --- Validation Error ---


@dataclass(frozen=True)
class ContentValidationError:
    """Content validation error."""

    code: str
    message: str
    field: str | None = None


# --- Version Options ---


@dataclass(frozen=True)
class VersionOptions:
    """
    Selects which version of a content item a request wants.

    Build instances through the class methods; at most one selector is set.
    """

    is_published: bool = False
    is_latest: bool = False
    is_draft: bool = False
    is_draft_required: bool = False
    version_number: int = 0
    version_record_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.version_number < 0:
            raise ValueError(f"version_number must be positive, got {self.version_number}")

    @classmethod
    def published(cls) -> VersionOptions:
        return cls(is_published=True)

    @classmethod
    def latest(cls) -> VersionOptions:
        return cls(is_latest=True)

    @classmethod
    def draft(cls) -> VersionOptions:
        """Latest version, only when it is not published."""
        return cls(is_draft=True)

    @classmethod
    def draft_required(cls) -> VersionOptions:
        """Latest version; a published latest is forked into a new draft."""
        return cls(is_draft_required=True)

    @classmethod
    def number(cls, version_number: int) -> VersionOptions:
        if version_number <= 0:
            raise ValueError(f"version_number must be positive, got {version_number}")
        return cls(version_number=version_number)

    @classmethod
    def version_record(cls, version_record_id: UUID) -> VersionOptions:
        return cls(version_record_id=version_record_id)

    @classmethod
    def from_name(cls, name: str) -> VersionOptions:
        """Map a configuration keyword to options ("published", "draft", ...)."""
        factories = {
            "published": cls.published,
            "latest": cls.latest,
            "draft": cls.draft,
            "draft_required": cls.draft_required,
        }
        try:
            return factories[name]()
        except KeyError:
            raise ValueError(
                f"Unknown version options '{name}'. Allowed: {sorted(factories)}"
            ) from None


# --- Parts ---


class ContentPart:
    """
    Capability aspect welded onto a content item during activation.

    Subclasses set `part_name`; it defaults to the class name.
    """

    part_name: str = ""

    def __init__(self, definition: ContentPartDefinition | None = None) -> None:
        self.definition = definition
        self.content_item: ContentItem | None = None

    @property
    def name(self) -> str:
        return self.part_name or type(self).__name__

    @property
    def settings(self) -> dict[str, Any]:
        return self.definition.settings if self.definition else {}


# --- Content Item ---


class ContentItem:
    """Transient composite for one version of a content item."""

    def __init__(
        self,
        content_type: str,
        type_definition: ContentTypeDefinition | None = None,
    ) -> None:
        self.content_type = content_type
        self.type_definition = type_definition
        self.version_record: ContentItemVersionRecord | None = None
        self._parts: list[ContentPart] = []
        self._manager_ref: weakref.ReferenceType[ContentManager] | None = None

    def __repr__(self) -> str:
        return (
            f"ContentItem(content_type={self.content_type!r}, id={self.id}, "
            f"version={self.version})"
        )

    # --- record navigation ---

    @property
    def record(self) -> ContentItemRecord | None:
        if self.version_record is None:
            return None
        return self.version_record.content_item_record

    @property
    def id(self) -> UUID | None:
        record = self.record
        return record.id if record else None

    @property
    def version(self) -> int:
        return self.version_record.number if self.version_record else 0

    # --- manager back-reference (non-owning) ---

    @property
    def content_manager(self) -> ContentManager | None:
        return self._manager_ref() if self._manager_ref is not None else None

    @content_manager.setter
    def content_manager(self, manager: ContentManager | None) -> None:
        self._manager_ref = weakref.ref(manager) if manager is not None else None

    # --- parts ---

    @property
    def parts(self) -> list[ContentPart]:
        return list(self._parts)

    def weld(self, part: ContentPart) -> None:
        part.content_item = self
        self._parts.append(part)

    def as_part(self, part_type: type[P]) -> P | None:
        for part in self._parts:
            if isinstance(part, part_type):
                return part
        return None

    def has_part(self, part_type: type[ContentPart]) -> bool:
        return self.as_part(part_type) is not None

    def get_part(self, name: str) -> ContentPart | None:
        return next((p for p in self._parts if p.name == name), None)


class ContentItemBuilder:
    """Collects parts during activation, then produces the item."""

    def __init__(self, definition: ContentTypeDefinition) -> None:
        self.definition = definition
        self._parts: list[ContentPart] = []

    def weld(self, part: ContentPart) -> ContentItemBuilder:
        if part.definition is None:
            part.definition = next(
                (p for p in self.definition.parts if p.name == part.name), None
            )
        self._parts.append(part)
        return self

    def build(self) -> ContentItem:
        item = ContentItem(self.definition.name, self.definition)
        for part in self._parts:
            item.weld(part)
        return item


# --- Metadata ---


@dataclass
class ContentItemMetadata:
    """Display and routing hints for an item, filled in by handlers."""

    content_item: ContentItem
    display_text: str = ""
    identity: dict[str, str] = field(default_factory=dict)
    display_route_values: dict[str, Any] = field(default_factory=dict)
    editor_route_values: dict[str, Any] = field(default_factory=dict)
    create_route_values: dict[str, Any] = field(default_factory=dict)
    remove_route_values: dict[str, Any] = field(default_factory=dict)
