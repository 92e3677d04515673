"""
Context objects passed to content handlers.

Each stage hands every handler the same mutable context instance; handlers
may read it, extend it, or mutate the item it carries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from folio.domain.definitions import ContentTypeDefinition
from folio.domain.entities import ContentItemRecord, ContentItemVersionRecord

from .models import ContentItem, ContentItemBuilder, ContentItemMetadata
from .ports import DocumentIndexPort, ShapeFactoryPort, UpdateModelPort

# --- Activation ---


@dataclass
class ActivatingContentContext:
    content_type: str
    definition: ContentTypeDefinition
    builder: ContentItemBuilder


@dataclass
class ActivatedContentContext:
    content_type: str
    content_item: ContentItem


@dataclass
class InitializingContentContext:
    content_type: str
    content_item: ContentItem


# --- Item lifecycle ---


@dataclass
class ContentContextBase:
    content_item: ContentItem

    @property
    def id(self) -> UUID | None:
        return self.content_item.id

    @property
    def content_type(self) -> str:
        return self.content_item.content_type

    @property
    def content_item_record(self) -> ContentItemRecord | None:
        return self.content_item.record

    @property
    def content_item_version_record(self) -> ContentItemVersionRecord | None:
        return self.content_item.version_record


@dataclass
class LoadContentContext(ContentContextBase):
    pass


@dataclass
class CreateContentContext(ContentContextBase):
    pass


@dataclass
class RemoveContentContext(ContentContextBase):
    pass


@dataclass
class PublishContentContext(ContentContextBase):
    """
    Publish and unpublish share this context.

    For an unpublish, publishing_item_version_record is None and
    previous_item_version_record is the version being taken offline.
    """

    previous_item_version_record: ContentItemVersionRecord | None = None
    publishing_item_version_record: ContentItemVersionRecord | None = None

    @classmethod
    def for_publish(
        cls,
        content_item: ContentItem,
        previous: ContentItemVersionRecord | None,
    ) -> PublishContentContext:
        return cls(
            content_item=content_item,
            previous_item_version_record=previous,
            publishing_item_version_record=content_item.version_record,
        )

    @classmethod
    def for_unpublish(
        cls,
        content_item: ContentItem,
        published: ContentItemVersionRecord,
    ) -> PublishContentContext:
        return cls(
            content_item=content_item,
            previous_item_version_record=published,
            publishing_item_version_record=None,
        )

    @property
    def is_unpublish(self) -> bool:
        return self.publishing_item_version_record is None


@dataclass
class VersionContentContext:
    id: UUID | None
    content_type: str
    content_item_record: ContentItemRecord
    existing_content_item: ContentItem
    building_content_item: ContentItem
    existing_item_version_record: ContentItemVersionRecord
    building_item_version_record: ContentItemVersionRecord


# --- Metadata, shapes, indexing ---


@dataclass
class GetContentItemMetadataContext:
    content_item: ContentItem
    metadata: ContentItemMetadata


@dataclass
class BuildDisplayModelContext:
    content_item: ContentItem
    display_type: str
    model: Any
    shape_factory: ShapeFactoryPort


@dataclass
class BuildEditorModelContext:
    content_item: ContentItem
    model: Any
    shape_factory: ShapeFactoryPort


@dataclass
class UpdateEditorModelContext:
    content_item: ContentItem
    updater: UpdateModelPort
    model: Any
    shape_factory: ShapeFactoryPort


@dataclass
class IndexContentContext:
    content_item: ContentItem
    document_index: DocumentIndexPort
