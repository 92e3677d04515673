"""
In-memory repository.

Implements RepositoryPort over a dict keyed by record ID, preserving
insertion order. Records are stored by reference, so in-place flag changes
made by the content manager are visible to later lookups without a save.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar
from uuid import UUID

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    def __init__(self, records: list[T] | None = None) -> None:
        self._records: dict[UUID, T] = {}
        self.flush_count = 0
        for record in records or []:
            self.create(record)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: UUID) -> T | None:
        return self._records.get(record_id)

    def get_one(self, predicate: Callable[[T], bool]) -> T | None:
        return next((r for r in self._records.values() if predicate(r)), None)

    def fetch(self, predicate: Callable[[T], bool]) -> list[T]:
        return [r for r in self._records.values() if predicate(r)]

    def create(self, record: T) -> T:
        record_id: UUID = getattr(record, "id")
        if record_id in self._records:
            raise ValueError(f"Record {record_id} already exists")
        self._records[record_id] = record
        return record

    def all(self) -> list[T]:
        return list(self._records.values())

    def flush(self) -> None:
        self.flush_count += 1
