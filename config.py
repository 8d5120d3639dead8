"""Central configuration for Terminal Link.

Tunable parameters of the console front end and of content loading live
here. Every value has a sensible default and can be overridden through an
environment variable (prefix ``TL_``). Invalid values fall back silently.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw


# ---------------- Logging ----------------
DEFAULT_LOG_LEVEL: str = "WARNING"
ENV_LOG_LEVEL = "TL_LOG_LEVEL"
ENV_LOG_FILE = "TL_LOG_FILE"


def get_log_level() -> int:
    """Return the numeric logging level.

    Order of precedence:
    1. TL_LOG_LEVEL (a level name such as DEBUG or INFO)
    2. DEFAULT_LOG_LEVEL
    """
    name = _get_str_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(DEFAULT_LOG_LEVEL)


def get_log_file() -> str | None:
    """Optional log file path. Var: TL_LOG_FILE (default: log to stderr)."""
    raw = os.getenv(ENV_LOG_FILE)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


# ---------------- Console ----------------
DEFAULT_PROMPT: str = "> "


def get_prompt() -> str:
    """Console prompt. Var: TL_PROMPT."""
    return _get_str_env("TL_PROMPT", DEFAULT_PROMPT)


def get_bell_enabled() -> bool:
    """Emit BEL on beep/error cues in the console (default: False). Var: TL_BELL."""
    return _get_bool_env("TL_BELL", False)


# ---------------- Content ----------------
DEFAULT_ROOM_FILE: Path = Path(__file__).resolve().parent / "game" / "assets" / "room.json"


def get_room_file() -> Path:
    """Room asset path. Var: TL_ROOM_FILE (default: packaged game/assets/room.json)."""
    raw = os.getenv("TL_ROOM_FILE")
    if raw is None or not raw.strip():
        return DEFAULT_ROOM_FILE
    return Path(raw.strip())


__all__ = [
    # Logging
    "DEFAULT_LOG_LEVEL", "get_log_level", "get_log_file",
    # Console
    "DEFAULT_PROMPT", "get_prompt", "get_bell_enabled",
    # Content
    "DEFAULT_ROOM_FILE", "get_room_file",
]
