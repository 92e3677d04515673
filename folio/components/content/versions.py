"""
Version resolution.

Maps version options onto the single version record that satisfies them.
Branch priority (first match wins):

1. explicit version record id (looked up directly, ignoring the item record)
2. published
3. latest, or draft required
4. draft (latest and not published)
5. explicit version number

Versions already loaded on the item record are searched first; the version
repository is only asked when none of them match.
"""

from __future__ import annotations

from collections.abc import Callable

from folio.domain.entities import ContentItemRecord, ContentItemVersionRecord

from .models import VersionOptions
from .ports import RepositoryPort

VersionPredicate = Callable[[ContentItemVersionRecord], bool]


def version_predicate(options: VersionOptions) -> VersionPredicate | None:
    """
    Build the record filter for options.

    Returns None when options select nothing.
    """
    if options.version_record_id is not None:
        record_id = options.version_record_id
        return lambda v: v.id == record_id
    if options.is_published:
        return lambda v: v.published
    if options.is_latest or options.is_draft_required:
        return lambda v: v.latest
    if options.is_draft:
        return lambda v: v.latest and not v.published
    if options.version_number:
        number = options.version_number
        return lambda v: v.number == number
    return None


def resolve_version_record(
    item_record: ContentItemRecord,
    options: VersionOptions,
    *,
    version_repo: RepositoryPort[ContentItemVersionRecord],
) -> ContentItemVersionRecord | None:
    """
    Find the version of item_record selected by options.

    Returns None when no version matches.
    """
    if options.version_record_id is not None:
        return version_repo.get(options.version_record_id)

    predicate = version_predicate(options)
    if predicate is None:
        return None

    loaded = next((v for v in item_record.versions if predicate(v)), None)
    if loaded is not None:
        return loaded

    item_id = item_record.id
    return version_repo.get_one(lambda v: v.content_item_id == item_id and predicate(v))
