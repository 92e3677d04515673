"""
Content component - versioned content items and their lifecycle.

Exposes the content manager, its handler pipeline, and the ports it consumes.
"""

from .component import ContentManager
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
from .errors import ContentItemNotPersistedError, ContentManagerError, PublishGuardError
from .handlers import ContentHandler, HandlerStage, invoke_handlers
from .models import (
    ContentItem,
    ContentItemBuilder,
    ContentItemMetadata,
    ContentPart,
    ContentValidationError,
    VersionOptions,
)
from .ports import (
    ContentDefinitionPort,
    DocumentIndexPort,
    RepositoryPort,
    ShapeFactoryPort,
    UpdateModelPort,
)
from .query import ContentQuery
from .session import ContentManagerSession
from .versions import resolve_version_record, version_predicate

__all__ = [
    # Manager
    "ContentManager",
    "ContentManagerSession",
    "ContentQuery",
    "resolve_version_record",
    "version_predicate",
    # Handlers
    "ContentHandler",
    "HandlerStage",
    "invoke_handlers",
    # Contexts
    "ActivatedContentContext",
    "ActivatingContentContext",
    "BuildDisplayModelContext",
    "BuildEditorModelContext",
    "CreateContentContext",
    "GetContentItemMetadataContext",
    "IndexContentContext",
    "InitializingContentContext",
    "LoadContentContext",
    "PublishContentContext",
    "RemoveContentContext",
    "UpdateEditorModelContext",
    "VersionContentContext",
    # Models
    "ContentItem",
    "ContentItemBuilder",
    "ContentItemMetadata",
    "ContentPart",
    "ContentValidationError",
    "VersionOptions",
    # Errors
    "ContentItemNotPersistedError",
    "ContentManagerError",
    "PublishGuardError",
    # Ports
    "ContentDefinitionPort",
    "DocumentIndexPort",
    "RepositoryPort",
    "ShapeFactoryPort",
    "UpdateModelPort",
]
