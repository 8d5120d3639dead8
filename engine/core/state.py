"""Game state container for runtime mutable data.

Separated from the static room definition (see ``catalog.py``). A single
``WorldState`` lives for the whole session and owns its ``ExploreState``.
No I/O here: validation of player commands is the router's job.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Set, Tuple

GRID_SIZE = 5
START_POSITION: Tuple[int, int] = (2, 2)
INITIAL_STABILITY = 78
FUSE_ITEM = "fuse"

# n = +y, s = -y, e = +x, w = -x
_DIRECTION_DELTAS: Dict[str, Tuple[int, int]] = {
    "n": (0, 1),
    "s": (0, -1),
    "e": (1, 0),
    "w": (-1, 0),
}


class Mode(Enum):
    TERMINAL = "terminal"
    EXPLORE = "explore"


def patch_cost(option: str) -> int:
    return 5 if option == "C" else 2


@dataclass
class ExploreState:
    position: Tuple[int, int] = START_POSITION
    locker_inspected: bool = False
    fuse_taken: bool = False
    fuse_installed: bool = False
    inventory: Set[str] = field(default_factory=set)
    grid_size: int = GRID_SIZE

    def try_move(self, direction: str) -> Tuple[bool, Tuple[int, int]]:
        """Move one cell; unknown directions and the grid edge both fail."""
        dx, dy = _DIRECTION_DELTAS.get(direction.strip().lower(), (0, 0))
        if (dx, dy) == (0, 0):
            return False, self.position
        x, y = self.position[0] + dx, self.position[1] + dy
        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            return False, self.position
        self.position = (x, y)
        return True, self.position

    def is_near(self, target: Tuple[int, int]) -> bool:
        """Chebyshev distance <= 1 from the player."""
        px, py = self.position
        tx, ty = target
        return abs(px - tx) <= 1 and abs(py - ty) <= 1

    def has_item(self, item: str) -> bool:
        return item in self.inventory

    def mark_locker_inspected(self):
        self.locker_inspected = True

    def take_fuse(self):
        self.fuse_taken = True
        self.inventory.add(FUSE_ITEM)

    def mark_fuse_installed(self):
        self.fuse_installed = True
        self.inventory.discard(FUSE_ITEM)


@dataclass
class WorldState:
    node_id: str = "observer_00"
    identity: str = "UNDEFINED"
    stability: int = INITIAL_STABILITY
    connected_unit: Optional[str] = None
    mode: Mode = Mode.TERMINAL
    power_unstable: bool = False
    door_unlocked: bool = False
    explore: ExploreState = field(default_factory=ExploreState)

    def apply_patch(self, option: str) -> int:
        """Spend stability for a patch (C costs 5, A/B cost 2). Never below 0."""
        self.stability = max(0, self.stability - patch_cost(option))
        return self.stability

    def connect(self, unit_id: str):
        self.connected_unit = unit_id

    def set_mode(self, mode: Mode):
        self.mode = mode

    def flag_power_unstable(self):
        self.power_unstable = True

    def install_fuse(self):
        self.power_unstable = False
        self.door_unlocked = True
        self.explore.mark_fuse_installed()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "node_id": self.node_id,
            "identity": self.identity,
            "stability": self.stability,
            "connected_unit": self.connected_unit,
            "mode": self.mode.value,
            "power_unstable": self.power_unstable,
            "door_unlocked": self.door_unlocked,
            "position": self.explore.position,
            "inventory": sorted(self.explore.inventory),
            "locker_inspected": self.explore.locker_inspected,
            "fuse_taken": self.explore.fuse_taken,
            "fuse_installed": self.explore.fuse_installed,
        }
