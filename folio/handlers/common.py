"""
Common part handler.

Welds a CommonPart onto every content item. The part exposes the version's
data payload as a field store and stamps lifecycle timestamps into it:

- created_utc: on create
- modified_utc: on create and whenever a new version is built
- published_utc: on publish (left untouched by unpublish)
"""

from __future__ import annotations

import logging
from typing import Any

from folio.adapters.clock import SystemClock
from folio.components.content import (
    ActivatingContentContext,
    BuildDisplayModelContext,
    ContentHandler,
    ContentPart,
    CreateContentContext,
    GetContentItemMetadataContext,
    IndexContentContext,
    PublishContentContext,
    VersionContentContext,
)
from folio.ports.clock import ClockPort

logger = logging.getLogger(__name__)


class CommonPart(ContentPart):
    part_name = "CommonPart"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        # holds values set before the item has a version record
        self._pending: dict[str, Any] = {}

    @property
    def fields(self) -> dict[str, Any]:
        item = self.content_item
        if item is not None and item.version_record is not None:
            return item.version_record.data
        return self._pending

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.fields[key] = value

    @property
    def title(self) -> str:
        return str(self.fields.get("title", ""))

    @property
    def created_utc(self) -> str | None:
        return self.fields.get("created_utc")

    @property
    def modified_utc(self) -> str | None:
        return self.fields.get("modified_utc")

    @property
    def published_utc(self) -> str | None:
        return self.fields.get("published_utc")

    def take_pending(self) -> dict[str, Any]:
        pending, self._pending = self._pending, {}
        return pending


class CommonPartHandler(ContentHandler):
    def __init__(self, clock: ClockPort | None = None) -> None:
        self._clock = clock or SystemClock()

    def _now(self) -> str:
        return self._clock.now_utc().isoformat()

    def activating(self, context: ActivatingContentContext) -> None:
        context.builder.weld(CommonPart())

    def creating(self, context: CreateContentContext) -> None:
        part = context.content_item.as_part(CommonPart)
        version_record = context.content_item_version_record
        if part is None or version_record is None:
            return
        version_record.data.update(part.take_pending())
        now = self._now()
        version_record.data["created_utc"] = now
        version_record.data["modified_utc"] = now

    def publishing(self, context: PublishContentContext) -> None:
        if context.is_unpublish or context.publishing_item_version_record is None:
            return
        context.publishing_item_version_record.data["published_utc"] = self._now()

    def versioning(self, context: VersionContentContext) -> None:
        context.building_item_version_record.data["modified_utc"] = self._now()

    def get_content_item_metadata(self, context: GetContentItemMetadataContext) -> None:
        part = context.content_item.as_part(CommonPart)
        if part is None:
            return
        context.metadata.display_text = part.title or context.metadata.display_text
        item_id = context.content_item.id
        if item_id is not None:
            context.metadata.identity = {
                "content_type": context.content_item.content_type,
                "id": str(item_id),
            }
            context.metadata.display_route_values = {"action": "display", "id": str(item_id)}
            context.metadata.editor_route_values = {"action": "edit", "id": str(item_id)}
            context.metadata.remove_route_values = {"action": "remove", "id": str(item_id)}
        context.metadata.create_route_values = {
            "action": "create",
            "content_type": context.content_item.content_type,
        }

    def indexing(self, context: IndexContentContext) -> None:
        part = context.content_item.as_part(CommonPart)
        context.document_index.add("type", context.content_item.content_type, analyze=False)
        if part is None:
            return
        if part.title:
            context.document_index.add("title", part.title, analyze=True)
        if part.created_utc:
            context.document_index.add("created", part.created_utc)
        if part.published_utc:
            context.document_index.add("published", part.published_utc)

    def build_display_shape(self, context: BuildDisplayModelContext) -> None:
        part = context.content_item.as_part(CommonPart)
        if part is None:
            return
        metadata_shape = context.shape_factory.create_shape(
            "Parts_Common_Metadata",
            content_part=part,
            display_type=context.display_type,
        )
        context.model.add("meta", metadata_shape)
