"""
Content handler pipeline.

Handlers are registered as an explicit, ordered sequence. For each stage the
dispatcher calls every handler in registration order with one shared context.
A handler that raises aborts the operation: the exception reaches the caller
unchanged, later handlers in the stage do not run, and nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Literal

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

logger = logging.getLogger(__name__)

HandlerStage = Literal[
    "activating",
    "activated",
    "initializing",
    "creating",
    "created",
    "loading",
    "loaded",
    "versioning",
    "versioned",
    "publishing",
    "published",
    "removing",
    "removed",
    "indexing",
    "indexed",
    "get_content_item_metadata",
    "build_display_shape",
    "build_editor_shape",
    "update_editor_shape",
]


class ContentHandler:
    """
    Base class for lifecycle observers.

    Override only the stages you care about; every stage is a no-op here.
    """

    def activating(self, context: ActivatingContentContext) -> None:
        pass

    def activated(self, context: ActivatedContentContext) -> None:
        pass

    def initializing(self, context: InitializingContentContext) -> None:
        pass

    def creating(self, context: CreateContentContext) -> None:
        pass

    def created(self, context: CreateContentContext) -> None:
        pass

    def loading(self, context: LoadContentContext) -> None:
        pass

    def loaded(self, context: LoadContentContext) -> None:
        pass

    def versioning(self, context: VersionContentContext) -> None:
        pass

    def versioned(self, context: VersionContentContext) -> None:
        pass

    def publishing(self, context: PublishContentContext) -> None:
        pass

    def published(self, context: PublishContentContext) -> None:
        pass

    def removing(self, context: RemoveContentContext) -> None:
        pass

    def removed(self, context: RemoveContentContext) -> None:
        pass

    def indexing(self, context: IndexContentContext) -> None:
        pass

    def indexed(self, context: IndexContentContext) -> None:
        pass

    def get_content_item_metadata(self, context: GetContentItemMetadataContext) -> None:
        pass

    def build_display_shape(self, context: BuildDisplayModelContext) -> None:
        pass

    def build_editor_shape(self, context: BuildEditorModelContext) -> None:
        pass

    def update_editor_shape(self, context: UpdateEditorModelContext) -> None:
        pass


def invoke_handlers(
    handlers: Iterable[ContentHandler],
    stage: HandlerStage,
    context: Any,
) -> None:
    """Run one stage across all handlers, in order."""
    logger.debug("Dispatching %s to handlers", stage)
    for handler in handlers:
        getattr(handler, stage)(context)
