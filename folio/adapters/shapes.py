"""
Dict-backed display shapes.

A Shape is a named bag of properties plus ordered zones that handlers fill
with child shapes. Rendering is left to whatever consumes the model.
"""

from __future__ import annotations

from typing import Any


class Shape:
    def __init__(self, shape_type: str, **properties: Any) -> None:
        self.shape_type = shape_type
        self.properties: dict[str, Any] = dict(properties)
        self.zones: dict[str, list[Any]] = {}

    def __repr__(self) -> str:
        return f"Shape({self.shape_type!r}, zones={sorted(self.zones)})"

    def __getitem__(self, key: str) -> Any:
        return self.properties[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.properties[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def add(self, zone: str, child: Any, position: int | None = None) -> Shape:
        """Add child to zone, appended unless position is given."""
        children = self.zones.setdefault(zone, [])
        if position is None:
            children.append(child)
        else:
            children.insert(position, child)
        return self

    def zone(self, name: str) -> list[Any]:
        return list(self.zones.get(name, []))


class DictShapeFactory:
    """ShapeFactoryPort producing Shape instances."""

    def create_shape(self, shape_type: str, **properties: Any) -> Shape:
        return Shape(shape_type, **properties)
