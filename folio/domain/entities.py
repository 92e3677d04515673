"""
Persisted records for the content manager.

Records are mutated in place by the manager (flags flip on publish, remove and
new versions), so they are plain dataclasses with identity equality rather than
frozen values.

Invariants:
- I1: an item record has at most one version with latest=True
- I2: an item record has at most one version with published=True
- I3: version numbers are positive, increase per item and are never reused
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4


@dataclass(eq=False)
class ContentTypeRecord:
    """Content type row, created lazily the first time a type name is used."""

    name: str
    id: UUID = field(default_factory=uuid4)


@dataclass(eq=False)
class ContentItemRecord:
    """Durable identity of one content item plus its ordered versions."""

    content_type: ContentTypeRecord
    id: UUID = field(default_factory=uuid4)
    versions: list[ContentItemVersionRecord] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class ContentItemVersionRecord:
    """One snapshot of a content item. The data payload is opaque to the manager."""

    content_item_record: ContentItemRecord = field(repr=False)
    number: int = 1
    latest: bool = False
    published: bool = False
    data: dict[str, Any] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)

    @property
    def content_item_id(self) -> UUID:
        return self.content_item_record.id
