"""In-memory search document used as an index sink."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class IndexField:
    name: str
    value: Any
    store: bool = True
    analyze: bool = False


class InMemoryDocumentIndex:
    """DocumentIndexPort that keeps fields in a dict. Later adds replace earlier ones."""

    def __init__(self, document_id: str = "") -> None:
        self.document_id = document_id
        self.fields: dict[str, IndexField] = {}

    def add(
        self,
        name: str,
        value: Any,
        *,
        store: bool = True,
        analyze: bool = False,
    ) -> InMemoryDocumentIndex:
        self.fields[name] = IndexField(name=name, value=value, store=store, analyze=analyze)
        return self

    def value(self, name: str) -> Any:
        field = self.fields.get(name)
        return field.value if field else None
