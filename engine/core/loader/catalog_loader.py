"""Room loading and validation utilities.

Separates construction logic from raw JSON (dict) into model dataclasses.
No I/O performed here; caller is responsible for reading JSON from disk.
"""
from __future__ import annotations
from typing import Any, Dict, List

import jsonschema

from ..model.base import EMPTY_MARKER, PLAYER_MARKER, Position, RoomDefinition, RoomObject
from ..schema import ROOM_SCHEMA
from ..state import GRID_SIZE

__all__ = ["CatalogError", "validate_schema", "build_catalog_from_dict", "validate_catalog"]


class CatalogError(ValueError):
    """Raised when room content cannot be turned into a usable catalog."""

    def __init__(self, message: str, issues: List[str] | None = None):
        super().__init__(message)
        self.issues = list(issues or [])


def validate_schema(payload: Dict[str, Any]) -> bool:
    """Validate raw room data against ROOM_SCHEMA."""
    try:
        jsonschema.validate(payload, ROOM_SCHEMA)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise CatalogError(f"Room data invalid at {path}: {e.message}", [e.message]) from e
    return True


def build_catalog_from_dict(data: Dict[str, Any]) -> RoomDefinition:
    validate_schema(data)
    objects = tuple(
        RoomObject(
            id=o["id"],
            label=o["label"],
            description=o["description"],
            position=Position(o["x"], o["y"]),
            marker=o["marker"],
        )
        for o in data["objects"]
    )
    room = RoomDefinition(
        id=data["id"],
        name=data["name"],
        description=data["description"],
        grid_size=data["grid_size"],
        objects=objects,
    )
    issues = validate_catalog(room)
    if issues:
        raise CatalogError(f"Room '{room.id}' failed validation ({len(issues)} issues)", issues)
    return room


def validate_catalog(room: RoomDefinition) -> List[str]:
    """Semantic checks the schema cannot express. Returns a list of issues."""
    issues: List[str] = []
    seen_ids: set[str] = set()
    seen_positions: Dict[Position, str] = {}
    seen_markers: Dict[str, str] = {}
    size = room.grid_size
    # la griglia esplorabile dello stato e' fissa
    if size != GRID_SIZE:
        issues.append(f"Room grid_size {size} does not match the explorable grid {GRID_SIZE}x{GRID_SIZE}")
    for obj in room.objects:
        key = obj.id.lower()
        if key in seen_ids:
            issues.append(f"Duplicate object id '{obj.id}'")
        seen_ids.add(key)
        x, y = obj.position
        if not (0 <= x < size and 0 <= y < size):
            issues.append(f"Object '{obj.id}' at ({x},{y}) is outside the {size}x{size} grid")
        if obj.position in seen_positions:
            issues.append(f"Object '{obj.id}' shares position ({x},{y}) with '{seen_positions[obj.position]}'")
        else:
            seen_positions[obj.position] = obj.id
        if obj.marker in (PLAYER_MARKER, EMPTY_MARKER):
            issues.append(f"Object '{obj.id}' uses reserved marker '{obj.marker}'")
        elif obj.marker in seen_markers:
            issues.append(f"Object '{obj.id}' reuses marker '{obj.marker}' of '{seen_markers[obj.marker]}'")
        else:
            seen_markers[obj.marker] = obj.id
    return issues
