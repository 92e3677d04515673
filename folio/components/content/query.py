"""
Content queries.

A query filters version records, then materialises each match through
ContentManager.get so results share session caching and load handlers with
single-item lookups.

Queries never create versions, so draft_required is rejected.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from folio.domain.entities import ContentItemVersionRecord

from .models import ContentItem, VersionOptions
from .ports import RepositoryPort
from .versions import version_predicate

if TYPE_CHECKING:
    from .component import ContentManager


@dataclass(frozen=True)
class _QueryState:
    content_types: tuple[str, ...] = ()
    options: VersionOptions = field(default_factory=VersionOptions.published)
    predicates: tuple[Callable[[ContentItemVersionRecord], bool], ...] = ()
    ordering: tuple[tuple[Callable[[ContentItemVersionRecord], Any], bool], ...] = ()


class ContentQuery:
    """Immutable query builder; each refinement returns a new query."""

    def __init__(
        self,
        manager: ContentManager,
        *,
        version_repo: RepositoryPort[ContentItemVersionRecord],
        state: _QueryState | None = None,
    ) -> None:
        self._manager = manager
        self._version_repo = version_repo
        self._state = state or _QueryState()

    def _refine(self, **changes: Any) -> ContentQuery:
        return ContentQuery(
            self._manager,
            version_repo=self._version_repo,
            state=replace(self._state, **changes),
        )

    # --- Refinements ---

    def for_type(self, *content_types: str) -> ContentQuery:
        return self._refine(content_types=self._state.content_types + content_types)

    def for_version(self, options: VersionOptions) -> ContentQuery:
        if options.is_draft_required:
            raise ValueError("Queries are read-only; draft_required cannot fork drafts")
        return self._refine(options=options)

    def where(self, predicate: Callable[[ContentItemVersionRecord], bool]) -> ContentQuery:
        return self._refine(predicates=self._state.predicates + (predicate,))

    def order_by(
        self,
        key: Callable[[ContentItemVersionRecord], Any],
        *,
        descending: bool = False,
    ) -> ContentQuery:
        return self._refine(ordering=self._state.ordering + ((key, descending),))

    # --- Execution ---

    def _matching_records(self) -> list[ContentItemVersionRecord]:
        state = self._state
        selects = version_predicate(state.options)
        if selects is None:
            return []

        def matches(v: ContentItemVersionRecord) -> bool:
            type_name = v.content_item_record.content_type.name
            if state.content_types and type_name not in state.content_types:
                return False
            if not selects(v):
                return False
            return all(p(v) for p in state.predicates)

        records = self._version_repo.fetch(matches)
        # apply the last key first so the first order_by wins
        for key, descending in reversed(state.ordering):
            records.sort(key=key, reverse=descending)
        return records

    def count(self) -> int:
        return len(self._matching_records())

    def list(self) -> list[ContentItem]:
        return self._materialise(self._matching_records())

    def slice(self, skip: int, count: int) -> list[ContentItem]:
        if skip < 0 or count < 0:
            raise ValueError("skip and count must not be negative")
        return self._materialise(self._matching_records()[skip : skip + count])

    def _materialise(self, records: list[ContentItemVersionRecord]) -> list[ContentItem]:
        items: list[ContentItem] = []
        with self._manager.unit_of_work():
            for record in records:
                item = self._manager.get(
                    record.content_item_id, VersionOptions.version_record(record.id)
                )
                if item is not None:
                    items.append(item)
        return items
