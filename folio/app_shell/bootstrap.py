from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from folio.adapters.clock import SystemClock
from folio.adapters.definitions import InMemoryContentDefinitionManager
from folio.adapters.memory import InMemoryRepository
from folio.adapters.shapes import DictShapeFactory
from folio.components.content import ContentHandler, ContentManager, VersionOptions
from folio.config.models import FolioConfig
from folio.domain.entities import ContentItemRecord, ContentItemVersionRecord, ContentTypeRecord
from folio.handlers.audit import AuditContentHandler, AuditLog
from folio.handlers.common import CommonPartHandler
from folio.handlers.publish_guard import RequiredFieldsPublishGuard
from folio.ports.clock import ClockPort


def default_handlers(
    config: FolioConfig,
    audit_log: AuditLog,
    clock: ClockPort,
) -> list[ContentHandler]:
    """Bundled handlers in dispatch order: parts first, guards next, audit last."""
    handlers: list[ContentHandler] = [CommonPartHandler(clock)]
    if config.publish_guard.enabled:
        handlers.append(RequiredFieldsPublishGuard(config.publish_guard))
    if config.audit.enabled:
        handlers.append(AuditContentHandler(audit_log, config.audit, clock))
    return handlers


@dataclass
class ManagerContext:
    manager: ContentManager
    type_repo: InMemoryRepository[ContentTypeRecord]
    item_repo: InMemoryRepository[ContentItemRecord]
    version_repo: InMemoryRepository[ContentItemVersionRecord]
    definitions: InMemoryContentDefinitionManager
    audit_log: AuditLog
    config: FolioConfig

    @classmethod
    def create(
        cls,
        config: FolioConfig | None = None,
        handlers: Sequence[ContentHandler] | None = None,
        clock: ClockPort | None = None,
    ) -> ManagerContext:
        config = config or FolioConfig()
        clock = clock or SystemClock()

        # Adapters
        type_repo: InMemoryRepository[ContentTypeRecord] = InMemoryRepository()
        item_repo: InMemoryRepository[ContentItemRecord] = InMemoryRepository()
        version_repo: InMemoryRepository[ContentItemVersionRecord] = InMemoryRepository()
        definitions = InMemoryContentDefinitionManager(config.content.content_types)
        audit_log = AuditLog()

        if handlers is None:
            handlers = default_handlers(config, audit_log, clock)

        manager = ContentManager(
            type_repo=type_repo,
            item_repo=item_repo,
            version_repo=version_repo,
            definitions=definitions,
            handlers=handlers,
            shape_factory=DictShapeFactory(),
            default_create_options=VersionOptions.from_name(config.content.default_create_options),
        )

        return cls(
            manager=manager,
            type_repo=type_repo,
            item_repo=item_repo,
            version_repo=version_repo,
            definitions=definitions,
            audit_log=audit_log,
            config=config,
        )
