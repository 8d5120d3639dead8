"""Data model definitions for the explorable room (Terminal Link).

This module only contains pure dataclasses without loading or validation logic.
They are intended to be immutable structural representations of room content.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, NamedTuple, Tuple

__all__ = [
    "Position",
    "RoomObject",
    "RoomDefinition",
    "PLAYER_MARKER",
    "EMPTY_MARKER",
]

PLAYER_MARKER = "X"
EMPTY_MARKER = "."


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class RoomObject:
    id: str
    label: str
    description: str
    position: Position
    marker: str


@dataclass(frozen=True)
class RoomDefinition:
    id: str
    name: str
    description: str
    grid_size: int
    # Ordine di definizione preservato (serve per minimap e lista oggetti)
    objects: Tuple[RoomObject, ...]

    def object_index(self) -> Dict[str, RoomObject]:
        return {obj.id.lower(): obj for obj in self.objects}
