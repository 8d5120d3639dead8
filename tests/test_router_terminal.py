"""Terminal-mode grammar of the command router."""

import pytest

from engine.core.router import CommandRouter
from engine.core.state import Mode, WorldState
from engine.core.terminal_io import BufferedTerminal
from game.bootstrap import get_catalog


@pytest.fixture()
def game():
    state = WorldState()
    term = BufferedTerminal()
    router = CommandRouter(state, term, get_catalog())
    return router, state, term


def run(router, term, cmd):
    router.handle(cmd)
    return term.take_lines()


def test_help(game):
    router, _state, term = game
    lines = run(router, term, "HELP")
    assert lines[0] == "Available commands:"
    assert "connect <unit_id>" in lines
    assert "patch A|B|C" in lines
    assert lines[-1] == "disconnect"


def test_status_and_whoami(game):
    router, _state, term = game
    assert run(router, term, "status") == [
        "NODE: observer_00",
        "IDENTITY: UNDEFINED",
        "STABILITY: 78%",
        "CONNECTED: NONE",
    ]
    assert run(router, term, "whoami") == ["NODE: observer_00", "IDENTITY: UNDEFINED"]


def test_inbox(game):
    router, _state, term = game
    lines = run(router, term, "inbox")
    assert lines == [
        "INBOX:",
        '1) unit_12 request: "My instructions conflict. Please resolve."',
        "Hint: connect unit_12",
    ]


def test_connect_unit_12(game):
    router, state, term = game
    router.handle("connect unit_12")
    assert state.connected_unit == "unit_12"
    assert term.lines[0] == "CONNECTED: unit_12"
    assert term.lines[1] == "ROLE: SECURITY"
    assert term.lines[-1] == "Type 'patch' to propose a behavior fix."
    assert term.cues == ["beep"]
    assert run(router, term, "status")[-1] == "CONNECTED: unit_12"


def test_connect_unreachable_keeps_state(game):
    router, state, term = game
    assert run(router, term, "connect Unit_99") == ["Connection failed: Unit_99 not reachable."]
    assert state.connected_unit is None


def test_connect_usage(game):
    router, _state, term = game
    assert run(router, term, "connect") == ["Usage: connect <unit_id>"]


def test_connect_terminal_when_already_terminal(game):
    router, state, term = game
    assert run(router, term, "connect terminal") == ["TERMINAL LINK RESTORED."]
    assert state.mode is Mode.TERMINAL


def test_patch_menu(game):
    router, state, term = game
    lines = run(router, term, "patch")
    assert lines[0] == "PATCH OPTIONS:"
    assert len(lines) == 4
    assert state.stability == 78


def test_patch_applied(game):
    router, state, term = game
    router.handle("patch a")
    lines = term.lines
    assert lines[:4] == [
        "PATCH APPLIED: A",
        "STABILITY: 76%",
        "unit_12 updated.",
        "Next: scan for supervisor node (todo).",
    ]
    assert lines[4].startswith("WARNING:")
    assert lines[5].startswith("Suggestion:")
    assert state.power_unstable is True
    assert term.cues == ["beep"]


def test_patch_c_costs_five(game):
    router, state, term = game
    router.handle("patch C")
    assert state.stability == 73
    assert "STABILITY: 73%" in term.lines


@pytest.mark.parametrize("cmd", ["patch D", "patch A B", "patch  A"])
def test_patch_usage(game, cmd):
    router, state, term = game
    assert run(router, term, cmd) == ["Usage: patch or patch A|B|C"]
    assert state.stability == 78
    assert state.power_unstable is False


def test_disconnect_enters_explore(game):
    router, state, term = game
    lines = run(router, term, "disconnect")
    assert lines[0].startswith("DISCONNECTED")
    assert state.mode is Mode.EXPLORE


def test_unknown_command(game):
    router, _state, term = game
    router.handle("look")
    assert term.lines == ["Unknown command. Type 'help'."]
    assert term.cues == ["error"]


@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_blank_input_is_silent(game, blank):
    router, state, term = game
    before = state.snapshot()
    router.handle(blank)
    assert term.events == []
    assert state.snapshot() == before
