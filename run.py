"""Minimal console loop for the terminal link.

Usage (example):
    python run.py
Then type commands:
    help
    connect unit_12
    patch A
    disconnect
"""
from __future__ import annotations
import logging
import sys
from typing import Callable, Optional, TextIO

from config import get_bell_enabled, get_log_file, get_log_level, get_prompt
from engine.core.loader.catalog_loader import CatalogError
from engine.core.session import HEADER
from engine.core.terminal_io import ConsoleTerminal
from game.bootstrap import new_session

EXIT_COMMANDS = {"quit", "exit"}


def setup_logging():
    kwargs = {"level": get_log_level(), "format": "%(asctime)s %(levelname)s %(message)s"}
    log_file = get_log_file()
    if log_file:
        kwargs["filename"] = log_file
    logging.basicConfig(**kwargs)


def game_loop(input_fn: Callable[[str], str] = input, stream: Optional[TextIO] = None) -> int:
    terminal = ConsoleTerminal(stream=stream, bell=get_bell_enabled())
    try:
        session = new_session(terminal)
    except CatalogError as e:
        logging.error(f"Room content unavailable: {e}")
        terminal.print_line(f"[FATAL] {e}")
        return 1
    deco = "=" * len(HEADER)
    terminal.print_block(f"{deco}\n{HEADER}\n{deco}")
    session.start()
    prompt = get_prompt()
    while True:
        try:
            cmd = input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            terminal.print_line("")
            break
        if cmd.strip().lower() in EXIT_COMMANDS:
            terminal.print_line("LINK CLOSED.")
            break
        session.submit(cmd)
    logging.info(f"Session closed: {session.snapshot()}")
    return 0


def main():
    try:
        # Forza l'output UTF-8 su Windows per evitare errori 'charmap' durante la stampa
        sys.stdout.reconfigure(encoding='utf-8')
    except (AttributeError, ValueError):
        pass
    setup_logging()
    sys.exit(game_loop())


if __name__ == "__main__":
    main()
