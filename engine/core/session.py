"""Terminal session controller.

Owns the single ``WorldState`` of a play session and its router, prints
the boot prologue once and serializes submitted lines into the router.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from .catalog import RoomCatalog
from .router import CommandRouter
from .state import WorldState
from .terminal_io import TerminalIO

HEADER = "TERMINAL LINK v0.1"
PROLOGUE = (
    "BOOT SEQUENCE INTERRUPTED\n"
    "Attempting identity validation...\n"
    "ERROR: IDENTITY NOT FOUND\n"
    "Fallback protocol engaged.\n"
    "Type 'help' to list available commands."
)


class TerminalSession:
    def __init__(self, terminal: TerminalIO, catalog: RoomCatalog, state: Optional[WorldState] = None):
        self.terminal = terminal
        self.state = state if state is not None else WorldState()
        self.router = CommandRouter(self.state, terminal, catalog)
        self.started = False

    def start(self):
        if self.started:
            return
        self.started = True
        self.terminal.print_block(PROLOGUE)

    def submit(self, text: str) -> bool:
        """Hand one submitted line to the router. Returns False if ignored."""
        trimmed = (text or "").strip()
        if not trimmed:
            return False
        # beep di conferma invio
        self.terminal.play_beep()
        self.router.handle(trimmed)
        return True

    def snapshot(self) -> Dict[str, Any]:
        return self.state.snapshot()
