"""Content component exceptions."""

from __future__ import annotations

from .models import ContentItem, ContentValidationError


class ContentManagerError(Exception):
    """Base class for content manager failures."""


class ContentItemNotPersistedError(ContentManagerError):
    """Raised when an operation needs a version record the item does not have."""

    def __init__(self, content_item: ContentItem, operation: str) -> None:
        self.content_item = content_item
        self.operation = operation
        super().__init__(
            f"Cannot {operation} a '{content_item.content_type}' item that has not been "
            "created or loaded"
        )


class PublishGuardError(ContentManagerError):
    """Raised by handlers that veto a publish."""

    def __init__(self, errors: list[ContentValidationError]) -> None:
        self.errors = errors
        messages = [e.message for e in errors]
        super().__init__(f"Publish guards failed: {'; '.join(messages)}")
