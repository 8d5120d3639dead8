"""Line sinks the core writes to.

The router never renders anything itself: it pushes ordered lines and
advisory cue signals (key / beep / error) to a ``TerminalIO``. Concrete
sinks decide what to do with them (record, queue, print).
"""
from __future__ import annotations
from collections import deque
from typing import Callable, Deque, List, Optional, TextIO, Tuple
import sys

CUE_KEY = "key"
CUE_BEEP = "beep"
CUE_ERROR = "error"

BELL = "\a"


class TerminalIO:
    """Base sink. Subclasses implement ``_emit``; cues are no-ops by default."""

    def print_line(self, text: Optional[str]):
        self._emit(text if text is not None else "")

    def print_block(self, text: str):
        for line in text.replace("\r\n", "\n").split("\n"):
            self.print_line(line)

    def play_key(self):
        pass

    def play_beep(self):
        pass

    def play_error(self):
        pass

    def _emit(self, line: str):
        raise NotImplementedError


class BufferedTerminal(TerminalIO):
    """Records everything; used by tests and headless callers."""

    def __init__(self):
        self.lines: List[str] = []
        self.events: List[Tuple[str, str]] = []

    def _emit(self, line: str):
        self.lines.append(line)
        self.events.append(("line", line))

    def play_key(self):
        self.events.append(("cue", CUE_KEY))

    def play_beep(self):
        self.events.append(("cue", CUE_BEEP))

    def play_error(self):
        self.events.append(("cue", CUE_ERROR))

    @property
    def cues(self) -> List[str]:
        return [name for kind, name in self.events if kind == "cue"]

    def take_lines(self) -> List[str]:
        out = self.lines
        self.lines = []
        self.events = []
        return out


class QueuedTerminal(TerminalIO):
    """FIFO line queue drained into a writer callback.

    Lines are delivered strictly in the order they were queued, so the
    output of one command always precedes the output of the next one.
    """

    def __init__(self, writer: Callable[[str], None], on_cue: Callable[[str], None] | None = None):
        self._writer = writer
        self._on_cue = on_cue
        self._queue: Deque[str] = deque()

    def _emit(self, line: str):
        self._queue.append(line)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def drain(self) -> int:
        delivered = 0
        while self._queue:
            self._writer(self._queue.popleft())
            delivered += 1
        return delivered

    def _cue(self, name: str):
        if self._on_cue is not None:
            self._on_cue(name)

    def play_key(self):
        self._cue(CUE_KEY)

    def play_beep(self):
        self._cue(CUE_BEEP)

    def play_error(self):
        self._cue(CUE_ERROR)


class ConsoleTerminal(TerminalIO):
    """Writes lines straight to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None, bell: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.bell = bell

    def _emit(self, line: str):
        self.stream.write(line + "\n")
        self.stream.flush()

    def _ring(self):
        if self.bell:
            self.stream.write(BELL)
            self.stream.flush()

    def play_beep(self):
        self._ring()

    def play_error(self):
        self._ring()
