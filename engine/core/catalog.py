"""Read-only room catalog.

Acts as an in-memory index over the static room objects for quick lookup
by id or by grid position, plus the minimap renderer used by ``look``.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

from .model.base import EMPTY_MARKER, PLAYER_MARKER, Position, RoomDefinition, RoomObject


class RoomCatalog:
    def __init__(self, room: RoomDefinition):
        self.room = room
        self._index: Dict[str, RoomObject] = room.object_index()
        self._by_position: Dict[Position, RoomObject] = {}
        for obj in room.objects:
            # first definition wins on a shared cell
            self._by_position.setdefault(obj.position, obj)

    @property
    def name(self) -> str:
        return self.room.name

    @property
    def description(self) -> str:
        return self.room.description

    @property
    def grid_size(self) -> int:
        return self.room.grid_size

    @property
    def objects(self) -> Tuple[RoomObject, ...]:
        return self.room.objects

    def get(self, obj_id: str) -> Optional[RoomObject]:
        """Case-insensitive lookup; None when the id is unknown."""
        return self._index.get(obj_id.strip().lower())

    def marker_at(self, x: int, y: int) -> str:
        obj = self._by_position.get(Position(x, y))
        return obj.marker if obj else EMPTY_MARKER

    def render_minimap(self, player: Tuple[int, int]) -> str:
        """Render the grid top row first (highest y), 'X' marking the player."""
        px, py = player
        rows = []
        for y in range(self.grid_size - 1, -1, -1):
            row = []
            for x in range(self.grid_size):
                if (x, y) == (px, py):
                    row.append(PLAYER_MARKER)
                else:
                    row.append(self.marker_at(x, y))
            rows.append("".join(row))
        return "\n".join(rows).rstrip("\n")
