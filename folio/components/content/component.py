"""
Content component - content item versioning and lifecycle orchestration.

Each content item record owns an ordered list of version records. At most one
version is latest (the working head) and at most one is published (live).
The manager resolves versions, builds transient ContentItem composites for
them, creates versions, flips publish state, and broadcasts every transition
through the ordered handler pipeline.

Invariants:
- I1: at most one latest and at most one published version per item
- I2: a created item always has exactly one latest version
- I3: version numbers are never reused
- I4: within one unit of work a version record resolves to one item instance

Known gap: content type records are acquired without any guard against two
units of work creating the same type name concurrently. Stores that care
should enforce name uniqueness.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any
from uuid import UUID

from folio.domain.definitions import ContentTypeDefinition, ContentTypeDefinitionBuilder
from folio.domain.entities import (
    ContentItemRecord,
    ContentItemVersionRecord,
    ContentTypeRecord,
)

from .contexts import (
    ActivatedContentContext,
    ActivatingContentContext,
    BuildDisplayModelContext,
    BuildEditorModelContext,
    CreateContentContext,
    GetContentItemMetadataContext,
    IndexContentContext,
    InitializingContentContext,
    LoadContentContext,
    PublishContentContext,
    RemoveContentContext,
    UpdateEditorModelContext,
    VersionContentContext,
)
from .errors import ContentItemNotPersistedError
from .handlers import ContentHandler, HandlerStage, invoke_handlers
from .models import ContentItem, ContentItemBuilder, ContentItemMetadata, VersionOptions
from .ports import (
    ContentDefinitionPort,
    DocumentIndexPort,
    RepositoryPort,
    ShapeFactoryPort,
    UpdateModelPort,
)
from .query import ContentQuery
from .session import ContentManagerSession
from .versions import resolve_version_record

logger = logging.getLogger(__name__)


class ContentManager:
    """Lifecycle orchestrator for versioned content items."""

    def __init__(
        self,
        *,
        type_repo: RepositoryPort[ContentTypeRecord],
        item_repo: RepositoryPort[ContentItemRecord],
        version_repo: RepositoryPort[ContentItemVersionRecord],
        definitions: ContentDefinitionPort,
        handlers: Sequence[ContentHandler] = (),
        session_factory: Callable[[], ContentManagerSession] = ContentManagerSession,
        shape_factory: ShapeFactoryPort | None = None,
        default_create_options: VersionOptions | None = None,
    ) -> None:
        self._type_repo = type_repo
        self._item_repo = item_repo
        self._version_repo = version_repo
        self._definitions = definitions
        self._handlers: tuple[ContentHandler, ...] = tuple(handlers)
        self._session_factory = session_factory
        self._shape_factory = shape_factory
        self._default_create_options = default_create_options or VersionOptions.published()
        self._session: ContentManagerSession | None = None

    @property
    def handlers(self) -> tuple[ContentHandler, ...]:
        return self._handlers

    # --- Unit of work ---

    @contextmanager
    def unit_of_work(self) -> Iterator[ContentManagerSession]:
        """
        Scope one identity session over a block of calls.

        Nested scopes reuse the outer session. Outside any scope, each public
        call gets its own session for the duration of the call.
        """
        if self._session is not None:
            yield self._session
            return

        self._session = self._session_factory()
        try:
            yield self._session
        finally:
            self._session = None

    def _invoke(self, stage: HandlerStage, context: Any) -> None:
        invoke_handlers(self._handlers, stage, context)

    # --- Definitions ---

    def get_content_type_definitions(self) -> list[ContentTypeDefinition]:
        return list(self._definitions.list_type_definitions())

    # --- Item factory ---

    def new(self, content_type: str) -> ContentItem:
        """
        Build an empty, handler-shaped item of content_type.

        Unknown type names get an empty definition rather than an error.
        The result has no version record attached.
        """
        definition = self._definitions.get_type_definition(content_type)
        if definition is None:
            logger.debug("No definition for content type '%s', using empty one", content_type)
            definition = ContentTypeDefinitionBuilder().named(content_type).build()

        activating = ActivatingContentContext(
            content_type=definition.name,
            definition=definition,
            builder=ContentItemBuilder(definition),
        )
        self._invoke("activating", activating)

        activated = ActivatedContentContext(
            content_type=content_type,
            content_item=activating.builder.build(),
        )
        activated.content_item.content_manager = self
        self._invoke("activated", activated)

        initializing = InitializingContentContext(
            content_type=activated.content_type,
            content_item=activated.content_item,
        )
        self._invoke("initializing", initializing)

        return initializing.content_item

    # --- Resolution ---

    def get(self, item_id: UUID, options: VersionOptions | None = None) -> ContentItem | None:
        """
        Resolve one version of an item.

        Defaults to the published version. Returns None when nothing matches.
        """
        options = options or VersionOptions.published()

        with self.unit_of_work() as session:
            version_record: ContentItemVersionRecord | None = None

            if options.version_record_id is not None:
                cached = session.recall(options.version_record_id)
                if cached is not None:
                    return cached
                version_record = self._version_repo.get(options.version_record_id)
            else:
                record = self._item_repo.get(item_id)
                if record is not None:
                    version_record = resolve_version_record(
                        record, options, version_repo=self._version_repo
                    )

            if version_record is None:
                return None

            cached = session.recall(version_record.id)
            if cached is not None:
                logger.debug("Session hit for version record %s", version_record.id)
                return cached

            item = self.new(version_record.content_item_record.content_type.name)
            item.version_record = version_record

            # stored before loading so circular lookups get this instance
            session.store(item)

            context = LoadContentContext(content_item=item)
            self._invoke("loading", context)
            self._invoke("loaded", context)

            if options.is_draft_required and version_record.published:
                return self.build_new_version(context.content_item)

            return context.content_item

    def get_all_versions(self, item_id: UUID) -> list[ContentItem]:
        """Every version of an item, oldest first, each loaded through get()."""
        records = sorted(
            self._version_repo.fetch(lambda v: v.content_item_id == item_id),
            key=lambda v: v.number,
        )
        items: list[ContentItem] = []
        with self.unit_of_work():
            for version_record in records:
                item = self.get(
                    version_record.content_item_id,
                    VersionOptions.version_record(version_record.id),
                )
                if item is not None:
                    items.append(item)
        return items

    # --- Creation ---

    def create(self, item: ContentItem, options: VersionOptions | None = None) -> None:
        """
        Persist a new item with its first version.

        The version is number 1, latest and published unless options ask for
        a draft or an explicit number.
        """
        options = options or self._default_create_options

        record = ContentItemRecord(
            content_type=self._acquire_content_type_record(item.content_type)
        )
        version_record = ContentItemVersionRecord(
            content_item_record=record,
            number=1,
            latest=True,
            published=True,
        )
        record.versions.append(version_record)
        item.version_record = version_record

        if options.version_number:
            version_record.number = options.version_number

        if options.is_draft:
            version_record.published = False

        self._item_repo.create(record)
        self._version_repo.create(version_record)

        with self.unit_of_work():
            context = CreateContentContext(content_item=item)
            self._invoke("creating", context)
            self._invoke("created", context)

            logger.info(
                "Created %s %s (version %d, published=%s)",
                item.content_type,
                record.id,
                version_record.number,
                version_record.published,
            )

            if version_record.published:
                publish_context = PublishContentContext.for_publish(item, None)
                self._invoke("publishing", publish_context)
                self._invoke("published", publish_context)

    def build_new_version(self, existing_item: ContentItem) -> ContentItem:
        """
        Fork a new draft from existing_item's version.

        The draft copies the data payload, becomes the only latest version,
        and is numbered after the current latest (or after the highest
        number when no version is latest).
        """
        existing_version = self._require_version(existing_item, "version")
        record = existing_version.content_item_record

        building_version = ContentItemVersionRecord(
            content_item_record=record,
            latest=True,
            published=False,
            data=copy.deepcopy(existing_version.data),
        )

        latest = next((v for v in record.versions if v.latest), None)
        if latest is not None:
            latest.latest = False
            building_version.number = latest.number + 1
        else:
            building_version.number = max((v.number for v in record.versions), default=0) + 1

        record.versions.append(building_version)
        self._version_repo.create(building_version)

        building_item = self.new(existing_item.content_type)
        building_item.version_record = building_version

        context = VersionContentContext(
            id=existing_item.id,
            content_type=existing_item.content_type,
            content_item_record=record,
            existing_content_item=existing_item,
            building_content_item=building_item,
            existing_item_version_record=existing_version,
            building_item_version_record=building_version,
        )
        with self.unit_of_work():
            self._invoke("versioning", context)
            self._invoke("versioned", context)

        logger.info(
            "Built version %d of %s %s from version %d",
            building_version.number,
            existing_item.content_type,
            record.id,
            existing_version.number,
        )
        return context.building_content_item

    # --- Publish state ---

    def publish(self, item: ContentItem) -> None:
        """Make item's version the published one. No-op if it already is."""
        version_record = self._require_version(item, "publish")
        if version_record.published:
            return

        previous = next(
            (v for v in version_record.content_item_record.versions if v.published), None
        )
        context = PublishContentContext.for_publish(item, previous)

        with self.unit_of_work():
            self._invoke("publishing", context)

            if previous is not None:
                previous.published = False
            version_record.published = True

            self._invoke("published", context)

        logger.info(
            "Published %s %s version %d",
            item.content_type,
            item.id,
            version_record.number,
        )

    def unpublish(self, item: ContentItem) -> None:
        """Take the item's published version offline, whichever version that is."""
        version_record = self._require_version(item, "unpublish")

        with self.unit_of_work():
            if version_record.published:
                published_item: ContentItem | None = item
            else:
                published_item = self.get(version_record.content_item_id, VersionOptions.published())

            if published_item is None or published_item.version_record is None:
                return

            published_version = published_item.version_record
            context = PublishContentContext.for_unpublish(item, published_version)

            self._invoke("publishing", context)
            published_version.published = False
            self._invoke("published", context)

        logger.info(
            "Unpublished %s %s version %d",
            item.content_type,
            item.id,
            published_version.number,
        )

    def remove(self, item: ContentItem) -> None:
        """Clear the published and latest flags on every version. Nothing is deleted."""
        version_record = self._require_version(item, "remove")
        record = version_record.content_item_record

        active_versions = [v for v in record.versions if v.published or v.latest]
        if not active_versions:
            record_id = record.id
            active_versions = self._version_repo.fetch(
                lambda v: v.content_item_id == record_id and (v.published or v.latest)
            )

        context = RemoveContentContext(content_item=item)
        with self.unit_of_work():
            self._invoke("removing", context)

            for version in active_versions:
                version.published = False
                version.latest = False

            self._invoke("removed", context)

        logger.info("Removed %s %s", item.content_type, record.id)

    # --- Metadata, query, persistence ---

    def get_item_metadata(self, item: ContentItem) -> ContentItemMetadata:
        context = GetContentItemMetadataContext(
            content_item=item,
            metadata=ContentItemMetadata(content_item=item),
        )
        self._invoke("get_content_item_metadata", context)
        return context.metadata

    def query(self) -> ContentQuery:
        return ContentQuery(self, version_repo=self._version_repo)

    def flush(self) -> None:
        self._item_repo.flush()

    def index(self, item: ContentItem, document_index: DocumentIndexPort) -> None:
        """Let handlers describe item to a search document."""
        self._require_version(item, "index")
        context = IndexContentContext(content_item=item, document_index=document_index)
        self._invoke("indexing", context)
        self._invoke("indexed", context)

    # --- Shapes ---

    def build_display_model(self, item: ContentItem, display_type: str = "") -> Any:
        shape_factory = self._require_shape_factory()
        shape = shape_factory.create_shape("Items_Content", content_item=item)
        context = BuildDisplayModelContext(
            content_item=item,
            display_type=display_type,
            model=shape,
            shape_factory=shape_factory,
        )
        self._invoke("build_display_shape", context)
        return context.model

    def build_editor_model(self, item: ContentItem) -> Any:
        shape_factory = self._require_shape_factory()
        shape = shape_factory.create_shape("Items_Content", content_item=item)
        context = BuildEditorModelContext(
            content_item=item,
            model=shape,
            shape_factory=shape_factory,
        )
        self._invoke("build_editor_shape", context)
        return context.model

    def update_editor_model(self, item: ContentItem, updater: UpdateModelPort) -> Any:
        shape_factory = self._require_shape_factory()
        shape = shape_factory.create_shape("Items_Content", content_item=item)
        context = UpdateEditorModelContext(
            content_item=item,
            updater=updater,
            model=shape,
            shape_factory=shape_factory,
        )
        self._invoke("update_editor_shape", context)
        return context.model

    # --- Helpers ---

    def _require_version(self, item: ContentItem, operation: str) -> ContentItemVersionRecord:
        if item.version_record is None:
            raise ContentItemNotPersistedError(item, operation)
        return item.version_record

    def _require_shape_factory(self) -> ShapeFactoryPort:
        if self._shape_factory is None:
            raise ValueError("ShapeFactoryPort is required for display and editor models")
        return self._shape_factory

    def _acquire_content_type_record(self, content_type: str) -> ContentTypeRecord:
        # Not safe against concurrent creation of the same name.
        record = self._type_repo.get_one(lambda r: r.name == content_type)
        if record is None:
            record = ContentTypeRecord(name=content_type)
            self._type_repo.create(record)
            logger.info("Registered content type record '%s'", content_type)
        return record
