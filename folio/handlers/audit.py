"""
Audit handler - records lifecycle transitions.

Key behaviors:
- One audit event per completed transition (create/publish/unpublish/
  remove/version)
- Loads are recorded only when log_reads is enabled
- Events are appended after the transition, never during the pre-stage
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from folio.adapters.clock import SystemClock
from folio.components.content import (
    ContentHandler,
    ContentItem,
    CreateContentContext,
    LoadContentContext,
    PublishContentContext,
    RemoveContentContext,
    VersionContentContext,
)
from folio.config.models import AuditSettings
from folio.ports.clock import ClockPort

logger = logging.getLogger(__name__)

AuditAction = Literal["create", "publish", "unpublish", "remove", "version", "load"]


class AuditEvent(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    timestamp: datetime
    action: AuditAction
    content_item_id: UUID | None = None
    content_type: str
    version_number: int = 0
    description: str = ""


class AuditLog:
    """Append-only, in-memory audit trail."""

    def __init__(self) -> None:
        self._events: list[AuditEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def append(self, event: AuditEvent) -> AuditEvent:
        self._events.append(event)
        return event

    def list_recent(self, limit: int = 100) -> list[AuditEvent]:
        """Newest first."""
        return list(reversed(self._events))[:limit]

    def list_by_item(self, content_item_id: UUID) -> list[AuditEvent]:
        """Oldest first."""
        return [e for e in self._events if e.content_item_id == content_item_id]

    def actions(self) -> list[AuditAction]:
        return [e.action for e in self._events]


class AuditContentHandler(ContentHandler):
    def __init__(
        self,
        audit_log: AuditLog,
        settings: AuditSettings | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        self._log = audit_log
        self._settings = settings or AuditSettings()
        self._clock = clock or SystemClock()

    def _record(
        self,
        action: AuditAction,
        item: ContentItem,
        version_number: int,
        description: str = "",
    ) -> None:
        if not self._settings.enabled:
            return
        event = self._log.append(
            AuditEvent(
                timestamp=self._clock.now_utc(),
                action=action,
                content_item_id=item.id,
                content_type=item.content_type,
                version_number=version_number,
                description=description,
            )
        )
        logger.info(
            "audit: %s %s %s v%d",
            event.action,
            event.content_type,
            event.content_item_id,
            event.version_number,
        )

    def created(self, context: CreateContentContext) -> None:
        self._record("create", context.content_item, context.content_item.version)

    def loaded(self, context: LoadContentContext) -> None:
        if self._settings.log_reads:
            self._record("load", context.content_item, context.content_item.version)

    def published(self, context: PublishContentContext) -> None:
        if context.is_unpublish:
            previous = context.previous_item_version_record
            self._record(
                "unpublish",
                context.content_item,
                previous.number if previous else 0,
            )
            return

        publishing = context.publishing_item_version_record
        previous = context.previous_item_version_record
        self._record(
            "publish",
            context.content_item,
            publishing.number if publishing else 0,
            description=f"replaced version {previous.number}" if previous else "",
        )

    def removed(self, context: RemoveContentContext) -> None:
        self._record("remove", context.content_item, context.content_item.version)

    def versioned(self, context: VersionContentContext) -> None:
        self._record(
            "version",
            context.building_content_item,
            context.building_item_version_record.number,
            description=f"from version {context.existing_item_version_record.number}",
        )
