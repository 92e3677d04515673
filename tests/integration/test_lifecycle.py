"""
Lifecycle tests for ContentManager against in-memory repositories.

Covers create/publish/unpublish/remove/new-version transitions, version
resolution through get(), session identity, and handler stage counts.
"""

from uuid import uuid4

import pytest

from folio.adapters.index import InMemoryDocumentIndex
from folio.components.content import ContentItemNotPersistedError, VersionOptions
from folio.domain.entities import ContentItemRecord


def _flags(record: ContentItemRecord) -> list[tuple[int, bool, bool]]:
    return sorted((v.number, v.latest, v.published) for v in record.versions)


def _assert_single_heads(record: ContentItemRecord) -> None:
    assert sum(1 for v in record.versions if v.latest) <= 1
    assert sum(1 for v in record.versions if v.published) <= 1


# --- Create ---


def test_create_default_is_single_published_latest_version(manager, recorder):
    item = manager.new("page")
    recorder.reset()

    manager.create(item)

    record = item.record
    assert record is not None
    assert len(record.versions) == 1
    version = record.versions[0]
    assert version.number == 1
    assert version.latest is True
    assert version.published is True
    assert recorder.stages == ["creating", "created", "publishing", "published"]


def test_create_first_publish_has_no_previous_version(manager, recorder):
    item = manager.new("page")
    manager.create(item)

    [context] = recorder.contexts("publishing")
    assert context.previous_item_version_record is None
    assert context.publishing_item_version_record is item.version_record


def test_create_draft_is_latest_but_not_published(manager, recorder):
    item = manager.new("page")
    recorder.reset()

    manager.create(item, VersionOptions.draft())

    assert _flags(item.record) == [(1, True, False)]
    assert recorder.count("publishing") == 0
    assert recorder.count("published") == 0


def test_create_with_explicit_version_number(manager):
    item = manager.new("page")
    manager.create(item, VersionOptions.number(7))

    assert item.version == 7
    assert item.version_record.latest is True


def test_create_persists_records_and_reuses_content_type(
    manager, type_repo, item_repo, version_repo
):
    first = manager.new("page")
    second = manager.new("page")
    manager.create(first)
    manager.create(second)

    assert len(type_repo) == 1
    assert len(item_repo) == 2
    assert len(version_repo) == 2
    assert first.record.content_type is second.record.content_type


def test_create_unknown_type_registers_type_record(manager, type_repo):
    item = manager.new("gadget")
    manager.create(item)

    [type_record] = type_repo.all()
    assert type_record.name == "gadget"
    assert item.record.content_type is type_record


# --- Publish ---


def test_publish_already_published_is_noop(manager, recorder):
    item = manager.new("page")
    manager.create(item)

    manager.publish(item)

    assert recorder.count("publishing") == 1
    assert recorder.count("published") == 1


def test_publish_draft_then_get_published_returns_it(manager):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())

    manager.publish(item)

    published = manager.get(item.id, VersionOptions.published())
    assert published is not None
    assert published.version_record is item.version_record
    assert item.version_record.published is True


def test_publish_new_version_replaces_previous(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    draft = manager.build_new_version(item)
    recorder.reset()

    manager.publish(draft)

    assert _flags(item.record) == [(1, False, False), (2, True, True)]
    [context] = recorder.contexts("publishing")
    assert context.previous_item_version_record is item.version_record
    assert context.publishing_item_version_record is draft.version_record
    _assert_single_heads(item.record)


def test_publishing_stage_sees_pre_publish_state(manager, recorder):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())
    seen = []

    class Snapshot:
        def __getattr__(self, stage):
            return lambda context: seen.append(
                (stage, context.content_item.version_record.published)
            )

    manager._handlers = manager._handlers + (Snapshot(),)
    manager.publish(item)

    assert ("publishing", False) in seen
    assert ("published", True) in seen


# --- Unpublish ---


def test_draft_publish_unpublish_scenario(manager):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())
    manager.publish(item)
    manager.unpublish(item)

    assert manager.get(item.id, VersionOptions.published()) is None
    latest = manager.get(item.id, VersionOptions.latest())
    assert latest is not None
    assert latest.version_record is item.version_record
    assert latest.version_record.published is False


def test_unpublish_context_has_no_publishing_version(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    recorder.reset()

    manager.unpublish(item)

    [context] = recorder.contexts("publishing")
    assert context.is_unpublish
    assert context.publishing_item_version_record is None
    assert context.previous_item_version_record is item.version_record


def test_unpublish_from_unpublished_draft_finds_published_version(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    draft = manager.build_new_version(item)
    recorder.reset()

    manager.unpublish(draft)

    assert item.version_record.published is False
    assert draft.version_record.published is False
    publishing = recorder.contexts("publishing")
    assert len(publishing) == 1
    assert publishing[0].previous_item_version_record is item.version_record


def test_unpublish_without_published_version_is_noop(manager, recorder):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())
    recorder.reset()

    manager.unpublish(item)

    assert recorder.count("publishing") == 0
    assert recorder.count("published") == 0


# --- Remove ---


def test_remove_clears_published_and_latest_flags(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    draft = manager.build_new_version(item)
    assert _flags(item.record) == [(1, False, True), (2, True, False)]

    observed = []

    def snapshot(context):
        observed.append(_flags(context.content_item_record))

    recorder.reset()
    recorder.removing = snapshot
    manager.remove(item)

    assert _flags(item.record) == [(1, False, False), (2, False, False)]
    assert draft.version_record.latest is False
    assert observed == [[(1, False, True), (2, True, False)]]
    assert recorder.count("removed") == 1
    assert manager.get(item.id, VersionOptions.published()) is None
    assert manager.get(item.id, VersionOptions.latest()) is None


def test_remove_keeps_version_rows(manager, version_repo):
    item = manager.new("page")
    manager.create(item)
    manager.remove(item)

    assert len(version_repo) == 1
    assert manager.get(item.id, VersionOptions.number(1)) is not None


# --- New versions ---


def test_build_new_version_increments_and_moves_latest(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    item.version_record.data["title"] = "Hello"
    recorder.reset()

    draft = manager.build_new_version(item)

    assert draft.version == 2
    assert draft.version_record.latest is True
    assert draft.version_record.published is False
    assert item.version_record.latest is False
    assert draft.version_record.data == {"title": "Hello"}
    assert draft.version_record.data is not item.version_record.data
    assert recorder.count("versioning") == 1
    assert recorder.count("versioned") == 1
    [context] = recorder.contexts("versioned")
    assert context.existing_content_item is item
    assert context.building_content_item is draft
    _assert_single_heads(item.record)


def test_build_new_version_after_remove_uses_max_number(manager):
    item = manager.new("page")
    manager.create(item)
    manager.build_new_version(item)
    manager.remove(item)

    restored = manager.build_new_version(item)

    assert restored.version == 3
    assert restored.version_record.latest is True


def test_build_new_version_is_repeatable(manager):
    item = manager.new("page")
    manager.create(item)

    current = item
    for expected in range(2, 6):
        current = manager.build_new_version(current)
        assert current.version == expected
        _assert_single_heads(item.record)


# --- Resolution ---


def test_get_missing_item_returns_none(manager):
    assert manager.get(uuid4()) is None
    assert manager.get(uuid4(), VersionOptions.version_record(uuid4())) is None


def test_get_defaults_to_published(manager):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())

    assert manager.get(item.id) is None
    manager.publish(item)
    assert manager.get(item.id).version_record is item.version_record


def test_get_draft_only_when_latest_unpublished(manager):
    item = manager.new("page")
    manager.create(item)

    assert manager.get(item.id, VersionOptions.draft()) is None

    draft = manager.build_new_version(item)
    found = manager.get(item.id, VersionOptions.draft())
    assert found.version_record is draft.version_record


def test_get_draft_required_forks_published_latest(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    recorder.reset()

    draft = manager.get(item.id, VersionOptions.draft_required())

    assert draft.version == 2
    assert draft.version_record.id != item.version_record.id
    assert draft.version_record.latest is True
    assert draft.version_record.published is False
    assert recorder.stages[-2:] == ["versioning", "versioned"]
    assert recorder.count("loaded") == 1


def test_get_draft_required_returns_existing_draft(manager):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())

    draft = manager.get(item.id, VersionOptions.draft_required())

    assert draft.version_record is item.version_record
    assert len(item.record.versions) == 1


def test_get_runs_load_stages_with_version_attached(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    recorder.reset()

    loaded = manager.get(item.id)

    assert recorder.stages == ["activating", "activated", "initializing", "loading", "loaded"]
    [context] = recorder.contexts("loading")
    assert context.content_item is loaded
    assert context.content_item_version_record is item.version_record


def test_get_by_version_record_id(manager):
    item = manager.new("page")
    manager.create(item)
    draft = manager.build_new_version(item)

    found = manager.get(uuid4(), VersionOptions.version_record(item.version_record.id))

    assert found.version_record is item.version_record
    assert found.version_record is not draft.version_record


def test_same_version_within_unit_of_work_is_same_instance(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    recorder.reset()

    with manager.unit_of_work():
        first = manager.get(item.id)
        second = manager.get(item.id, VersionOptions.version_record(first.version_record.id))
        third = manager.get(item.id, VersionOptions.latest())
        first.marker = "touched"

    assert first is second is third
    assert third.marker == "touched"
    assert recorder.count("loading") == 1


def test_draft_required_after_session_hit_returns_cached_item(manager):
    item = manager.new("page")
    manager.create(item)

    with manager.unit_of_work():
        published = manager.get(item.id)
        same = manager.get(item.id, VersionOptions.draft_required())

    # an item already in the session is returned as-is, without forking
    assert same is published
    assert same.version_record.published is True
    assert same.version == 1
    assert len(item.record.versions) == 1

    draft = manager.get(item.id, VersionOptions.draft_required())
    assert draft.version == 2
    assert draft.version_record.published is False


def test_separate_calls_build_fresh_instances(manager):
    item = manager.new("page")
    manager.create(item)

    first = manager.get(item.id)
    second = manager.get(item.id)

    assert first is not second
    assert first.version_record is second.version_record


def test_circular_lookup_during_load_returns_in_progress_item(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    nested = []

    def loading(context):
        nested.append(manager.get(context.id))

    recorder.loading = loading
    loaded = manager.get(item.id)

    assert nested == [loaded]


def test_get_all_versions_ordered_and_loaded(manager, recorder):
    item = manager.new("page")
    manager.create(item)
    second = manager.build_new_version(item)
    manager.build_new_version(second)
    recorder.reset()

    versions = manager.get_all_versions(item.id)

    assert [v.version for v in versions] == [1, 2, 3]
    assert recorder.count("loaded") == 3
    assert all(v.id == item.id for v in versions)


def test_get_all_versions_unknown_item_is_empty(manager):
    assert manager.get_all_versions(uuid4()) == []


# --- Errors ---


def test_transitions_require_version_record(manager):
    item = manager.new("page")

    with pytest.raises(ContentItemNotPersistedError, match="publish"):
        manager.publish(item)
    with pytest.raises(ContentItemNotPersistedError):
        manager.unpublish(item)
    with pytest.raises(ContentItemNotPersistedError):
        manager.remove(item)
    with pytest.raises(ContentItemNotPersistedError, match="index"):
        manager.index(item, InMemoryDocumentIndex())


def test_handler_failure_propagates_and_skips_flag_flip(manager, recorder):
    item = manager.new("page")
    manager.create(item, VersionOptions.draft())

    def explode(context):
        raise RuntimeError("handler failed")

    recorder.publishing = explode

    with pytest.raises(RuntimeError, match="handler failed"):
        manager.publish(item)

    assert item.version_record.published is False
    assert recorder.count("published") == 0
