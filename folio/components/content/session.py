"""
Identity session for one unit of work.

Maps version record IDs to the content item built for them. Items are stored
before their load stages run, so a handler that asks for the same version
while it is still loading gets the in-progress item back instead of
recursing.

A session must never outlive its unit of work; stale items would leak into
unrelated requests.
"""

from __future__ import annotations

from uuid import UUID

from .models import ContentItem


class ContentManagerSession:
    def __init__(self) -> None:
        self._items: dict[UUID, ContentItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, version_record_id: object) -> bool:
        return version_record_id in self._items

    def recall(self, version_record_id: UUID) -> ContentItem | None:
        """Get the item built for a version record earlier in this session."""
        return self._items.get(version_record_id)

    def store(self, item: ContentItem) -> None:
        if item.version_record is None:
            raise ValueError("Cannot store a content item without a version record")
        self._items[item.version_record.id] = item

    def clear(self) -> None:
        self._items.clear()
