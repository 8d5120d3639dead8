"""Command router: the mode-scoped game state machine.

``CommandRouter.handle`` takes one raw input line, dispatches it on the
current mode (terminal or explore), mutates the ``WorldState`` and pushes
the resulting lines to the ``TerminalIO`` sink, in order.

Every rejected command raises ``ActionError`` before touching the state;
the error is caught in ``handle`` and reported as a single line, so no
exception ever crosses the command boundary.
"""
from __future__ import annotations
import logging
from typing import Optional

from .catalog import RoomCatalog
from .model.base import RoomObject
from .state import FUSE_ITEM, Mode, WorldState
from .terminal_io import TerminalIO

REACHABLE_UNIT = "unit_12"
PATCH_OPTIONS = ("A", "B", "C")

# ---------------- Terminal mode texts ----------------
TERMINAL_HELP = (
    "Available commands:\n"
    "help\n"
    "status\n"
    "whoami\n"
    "inbox\n"
    "connect <unit_id>\n"
    "connect terminal\n"
    "patch\n"
    "patch A|B|C\n"
    "disconnect"
)
UNIT_BRIEFING = (
    "CONNECTED: unit_12\n"
    "ROLE: SECURITY\n"
    "STATE: CONFLICTED\n"
    "POLICY:\n"
    "  - PROTECT ZONE\n"
    "  - DO NOT HARM HUMANS\n"
    "EVENT: Human presence detected in restricted zone.\n"
    "Type 'patch' to propose a behavior fix."
)
PATCH_MENU = (
    "PATCH OPTIONS:\n"
    "A) PRIORITIZE: PROTECT HUMANS\n"
    "B) PRIORITIZE: PROTECT ZONE\n"
    "C) STALL: delay + request supervisor (stability -5)"
)
CONNECT_USAGE = "Usage: connect <unit_id>"
PATCH_USAGE = "Usage: patch or patch A|B|C"
POWER_WARNING = "WARNING: Local power grid fluctuating. Node power degraded."
POWER_SUGGESTION = "Suggestion: type 'disconnect' to inspect the node's maintenance room."
LINK_RESTORED = "TERMINAL LINK RESTORED."
DISCONNECTED = (
    "DISCONNECTED. Terminal link suspended.\n"
    "Local node body online. Type 'help' for explore commands."
)
UNKNOWN_TERMINAL = "Unknown command. Type 'help'."

# ---------------- Explore mode texts ----------------
EXPLORE_HELP = (
    "Explore commands:\n"
    "help\n"
    "look\n"
    "move <n|s|e|w>\n"
    "inspect <object>\n"
    "take <item>\n"
    "use <item> <object>\n"
    "inventory\n"
    "terminal"
)
HINT = "Hint: look | move <n|s|e|w> | inspect <object> | take <item> | use <item> <object> | inventory | terminal"
MOVE_USAGE = "Usage: move <n|s|e|w>"
INSPECT_USAGE = "Usage: inspect <object>"
TAKE_USAGE = "Usage: take <item>"
USE_USAGE = "Usage: use <item> <object>"
WALL_BLOCKS = "Wall blocks your path."
NOTHING_HERE = "Nothing like that here."
CANNOT_TAKE = "You can't take that."
NOTHING_TO_TAKE = "You don't see a fuse to take. Maybe look inside something first."
FUSE_ALREADY_TAKEN = "You already took the fuse."
FUSE_TAKEN = "You take the fuse."
NOTHING_HAPPENS = "Nothing happens."
NO_FUSE = "You don't have a fuse."
FUSE_INSTALLED = "You slot the fuse into the panel. It hums back to life."
POWER_RESTORED = "POWER STABLE. A heavy lock clunks open somewhere near the door."
INVENTORY_EMPTY = "Inventory empty."
LOCKER_RATTLE = "Something shifts inside as the hinge gives: a fuse rattles loose."
PANEL_BURNT = "The panel's main fuse is burnt out. The lights stutter with every surge."
PANEL_STEADY = "The panel hums steadily. Power is stable."
DOOR_OPEN = "The door's lock reads OPEN. You could proceed (todo)."
DOOR_SEALED = "The door is sealed. Its lock has no power."
UNKNOWN_EXPLORE = "Unknown command in explore mode. Type 'help'."


class ActionError(Exception):
    pass


class CommandRouter:
    def __init__(self, state: WorldState, io: TerminalIO, catalog: RoomCatalog, sfx: Optional[TerminalIO] = None):
        self.state = state
        self.io = io
        self.catalog = catalog
        # I cue audio vanno di default allo stesso sink delle linee
        self.sfx = sfx if sfx is not None else io

    def handle(self, raw: str):
        command = (raw or "").strip()
        if not command:
            return
        lower = command.lower()
        logging.debug(f"[{self.state.mode.value}] {lower}")
        try:
            if self.state.mode is Mode.TERMINAL:
                self._handle_terminal(command, lower)
            else:
                self._handle_explore(command, lower)
        except ActionError as e:
            self.io.print_line(str(e))

    # ------------------------------------------------------------------
    # Terminal mode
    # ------------------------------------------------------------------
    def _handle_terminal(self, command: str, lower: str):
        if lower == "help":
            self.io.print_block(TERMINAL_HELP)
        elif lower == "status":
            self._print_identity()
            self.io.print_line(f"STABILITY: {self.state.stability}%")
            self.io.print_line(f"CONNECTED: {self.state.connected_unit or 'NONE'}")
        elif lower == "whoami":
            self._print_identity()
        elif lower == "inbox":
            self.io.print_line("INBOX:")
            self.io.print_line(f"1) {REACHABLE_UNIT} request: \"My instructions conflict. Please resolve.\"")
            self.io.print_line(f"Hint: connect {REACHABLE_UNIT}")
        elif lower == "connect terminal":
            self._restore_terminal()
        elif lower.startswith("connect "):
            self._connect(command)
        elif lower == "connect":
            raise ActionError(CONNECT_USAGE)
        elif lower.startswith("patch"):
            self._patch(command)
        elif lower == "disconnect":
            self.state.set_mode(Mode.EXPLORE)
            logging.info("Mode -> explore")
            self.io.print_block(DISCONNECTED)
        else:
            self.io.print_line(UNKNOWN_TERMINAL)
            self.sfx.play_error()

    def _print_identity(self):
        self.io.print_line(f"NODE: {self.state.node_id}")
        self.io.print_line(f"IDENTITY: {self.state.identity}")

    def _connect(self, command: str):
        parts = command.split(" ")
        if len(parts) < 2:
            raise ActionError(CONNECT_USAGE)
        target = parts[1].strip()
        if target != REACHABLE_UNIT:
            raise ActionError(f"Connection failed: {target} not reachable.")
        self.state.connect(target)
        logging.info(f"Connected to {target}")
        self.io.print_block(UNIT_BRIEFING)
        self.sfx.play_beep()

    def _patch(self, command: str):
        parts = command.split(" ")
        if len(parts) == 1:
            self.io.print_block(PATCH_MENU)
            return
        option = parts[1].strip().upper() if len(parts) == 2 else ""
        if option not in PATCH_OPTIONS:
            raise ActionError(PATCH_USAGE)
        stability = self.state.apply_patch(option)
        self.state.flag_power_unstable()
        logging.info(f"Patch {option} applied, stability now {stability}")
        self.io.print_block(
            f"PATCH APPLIED: {option}\n"
            f"STABILITY: {stability}%\n"
            f"{REACHABLE_UNIT} updated.\n"
            "Next: scan for supervisor node (todo)."
        )
        self.io.print_line(POWER_WARNING)
        self.io.print_line(POWER_SUGGESTION)
        self.sfx.play_beep()

    def _restore_terminal(self):
        if self.state.mode is not Mode.TERMINAL:
            logging.info("Mode -> terminal")
        self.state.set_mode(Mode.TERMINAL)
        self.io.print_line(LINK_RESTORED)

    # ------------------------------------------------------------------
    # Explore mode
    # ------------------------------------------------------------------
    def _handle_explore(self, command: str, lower: str):
        parts = lower.split(maxsplit=1)
        verb = parts[0]
        arg = parts[1].strip() if len(parts) > 1 else ""
        if lower == "help":
            self.io.print_block(EXPLORE_HELP)
        elif lower == "look":
            self._look()
        elif verb == "move":
            raw_parts = command.split(maxsplit=1)
            self._move(arg, raw_parts[1].strip() if len(raw_parts) > 1 else "")
        elif verb == "inspect":
            self._inspect(arg)
        elif verb == "take":
            self._take(arg)
        elif verb == "use":
            self._use(arg)
        elif lower == "inventory":
            self._inventory()
        elif lower in ("terminal", "connect terminal"):
            self._restore_terminal()
        else:
            self.io.print_line(UNKNOWN_EXPLORE)
            self.sfx.play_error()

    def _hint(self):
        self.io.print_line(HINT)

    def _require_near(self, obj: RoomObject):
        if not self.state.explore.is_near(obj.position):
            raise ActionError(f"{obj.label} is too far away.")

    def _look(self):
        explore = self.state.explore
        self.io.print_line(self.catalog.name)
        self.io.print_line(self.catalog.description)
        self.io.print_block(self.catalog.render_minimap(explore.position))
        listing = ", ".join(f"{obj.id} [{obj.marker}]" for obj in self.catalog.objects)
        self.io.print_line(f"Objects: {listing}")
        self._hint()

    def _move(self, direction: str, echoed: str):
        if not direction:
            raise ActionError(MOVE_USAGE)
        moved, (x, y) = self.state.explore.try_move(direction)
        if not moved:
            raise ActionError(WALL_BLOCKS)
        self.io.print_line(f"You move {echoed}. Position: ({x}, {y})")
        self._hint()

    def _inspect(self, target: str):
        if not target:
            raise ActionError(INSPECT_USAGE)
        obj = self.catalog.get(target)
        if obj is None:
            raise ActionError(NOTHING_HERE)
        self._require_near(obj)
        explore = self.state.explore
        key = obj.id.lower()
        if key == "locker":
            explore.mark_locker_inspected()
            self.io.print_line(obj.description)
            self.io.print_line(LOCKER_RATTLE)
        elif key == "panel":
            if self.state.power_unstable and not explore.fuse_installed:
                self.io.print_line(PANEL_BURNT)
            elif explore.fuse_installed:
                self.io.print_line(PANEL_STEADY)
            else:
                self.io.print_line(obj.description)
        elif key == "door":
            self.io.print_line(DOOR_OPEN if self.state.door_unlocked else DOOR_SEALED)
        else:
            self.io.print_line(obj.description)
        self._hint()

    def _take(self, item: str):
        if not item:
            raise ActionError(TAKE_USAGE)
        locker = self.catalog.get("locker")
        if item != FUSE_ITEM or locker is None:
            raise ActionError(CANNOT_TAKE)
        self._require_near(locker)
        explore = self.state.explore
        if not explore.locker_inspected:
            raise ActionError(NOTHING_TO_TAKE)
        if explore.fuse_taken:
            raise ActionError(FUSE_ALREADY_TAKEN)
        explore.take_fuse()
        logging.info("Fuse taken")
        self.io.print_line(FUSE_TAKEN)
        self._hint()

    def _use(self, arg: str):
        args = arg.split()
        if len(args) != 2:
            raise ActionError(USE_USAGE)
        item, target = args
        panel = self.catalog.get("panel")
        if item != FUSE_ITEM or target != "panel" or panel is None:
            raise ActionError(NOTHING_HAPPENS)
        self._require_near(panel)
        if not self.state.explore.has_item(FUSE_ITEM):
            raise ActionError(NO_FUSE)
        self.state.install_fuse()
        logging.info("Fuse installed, door unlocked")
        self.io.print_line(FUSE_INSTALLED)
        self.io.print_line(POWER_RESTORED)
        self._hint()

    def _inventory(self):
        items = sorted(self.state.explore.inventory)
        if items:
            self.io.print_line("Inventory: " + ", ".join(items))
        else:
            self.io.print_line(INVENTORY_EMPTY)
        self._hint()
