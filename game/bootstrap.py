"""Bootstrap utilities: load the room JSON once and create a fresh session."""
from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path

from config import get_room_file
from engine.core.catalog import RoomCatalog
from engine.core.loader.catalog_loader import CatalogError, build_catalog_from_dict
from engine.core.session import TerminalSession
from engine.core.state import WorldState
from engine.core.terminal_io import TerminalIO


def load_catalog(path: Path) -> RoomCatalog:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read room file {path}: {e}") from e
    try:
        room = build_catalog_from_dict(data)
    except CatalogError as e:
        for issue in e.issues:
            logging.warning(f"[ROOM WARNING] {issue}")
        raise
    return RoomCatalog(room)


@lru_cache(maxsize=None)
def _cached_catalog(path: str) -> RoomCatalog:
    return load_catalog(Path(path))


def get_catalog() -> RoomCatalog:
    """Process-wide catalog, loaded on first use and never mutated."""
    return _cached_catalog(str(get_room_file()))


def load_catalog_and_state() -> tuple[RoomCatalog, WorldState]:
    return get_catalog(), WorldState()


def new_session(terminal: TerminalIO) -> TerminalSession:
    catalog, state = load_catalog_and_state()
    return TerminalSession(terminal, catalog, state)
