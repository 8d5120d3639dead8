"""Line sinks: block splitting, FIFO delivery, console output."""

import io

from engine.core.terminal_io import BufferedTerminal, ConsoleTerminal, QueuedTerminal


def test_print_block_normalizes_crlf():
    term = BufferedTerminal()
    term.print_block("one\r\ntwo\n\nthree")
    assert term.lines == ["one", "two", "", "three"]


def test_print_line_none_is_empty():
    term = BufferedTerminal()
    term.print_line(None)
    assert term.lines == [""]


def test_events_keep_lines_and_cues_in_order():
    term = BufferedTerminal()
    term.print_line("a")
    term.play_beep()
    term.print_line("b")
    term.play_error()
    assert term.events == [("line", "a"), ("cue", "beep"), ("line", "b"), ("cue", "error")]
    assert term.cues == ["beep", "error"]
    assert term.take_lines() == ["a", "b"]
    assert term.lines == [] and term.events == []


def test_queued_terminal_is_fifo():
    delivered = []
    term = QueuedTerminal(delivered.append)
    term.print_block("first\nsecond")
    term.print_line("third")
    assert term.pending == 3
    assert delivered == []
    assert term.drain() == 3
    assert delivered == ["first", "second", "third"]
    assert term.pending == 0


def test_queued_terminal_forwards_cues():
    cues = []
    term = QueuedTerminal(lambda _line: None, on_cue=cues.append)
    term.play_key()
    term.play_beep()
    assert cues == ["key", "beep"]


def test_console_terminal_bell():
    out = io.StringIO()
    term = ConsoleTerminal(stream=out, bell=True)
    term.print_line("hello")
    term.play_error()
    assert out.getvalue() == "hello\n\a"


def test_console_terminal_quiet_by_default():
    out = io.StringIO()
    term = ConsoleTerminal(stream=out)
    term.play_beep()
    assert out.getvalue() == ""
