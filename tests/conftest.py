from datetime import UTC, datetime
from typing import Any

import pytest

from folio.adapters.clock import FixedClock
from folio.adapters.definitions import InMemoryContentDefinitionManager
from folio.adapters.memory import InMemoryRepository
from folio.adapters.shapes import DictShapeFactory
from folio.components.content import ContentHandler, ContentManager
from folio.domain.definitions import ContentTypeDefinitionBuilder

STAGES = [
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


class RecordingHandler(ContentHandler):
    """Records every stage it sees, with the context passed in."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    @property
    def stages(self) -> list[str]:
        return [stage for stage, _ in self.calls]

    def count(self, stage: str) -> int:
        return self.stages.count(stage)

    def contexts(self, stage: str) -> list[Any]:
        return [ctx for s, ctx in self.calls if s == stage]

    def reset(self) -> None:
        self.calls.clear()


def _make_recorder(stage: str):
    def record(self: RecordingHandler, context: Any) -> None:
        self.calls.append((stage, context))

    return record


for _stage in STAGES:
    setattr(RecordingHandler, _stage, _make_recorder(_stage))


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def recorder():
    return RecordingHandler()


@pytest.fixture
def type_repo():
    return InMemoryRepository()


@pytest.fixture
def item_repo():
    return InMemoryRepository()


@pytest.fixture
def version_repo():
    return InMemoryRepository()


@pytest.fixture
def definitions():
    page = ContentTypeDefinitionBuilder().named("page").display_named("Page").with_part(
        "CommonPart"
    )
    return InMemoryContentDefinitionManager([page.build()])


@pytest.fixture
def manager(type_repo, item_repo, version_repo, definitions, recorder):
    return ContentManager(
        type_repo=type_repo,
        item_repo=item_repo,
        version_repo=version_repo,
        definitions=definitions,
        handlers=[recorder],
        shape_factory=DictShapeFactory(),
    )
