import builtins
import io
import json
import sys

import pytest

from hexants import bot as bot_module
from hexants.bot import AntsBot
from hexants.errors import StructuralError

from test_protocol import STAR_INIT

FIRST_TURN = ["0 0", "0 3 0", "10 0 0", "0 0 0", "4 0 0", "0 0 2", "0 0 0", "0 0 0"]
NO_UNITS_TURN = ["0 0", "0 0 0", "10 0 0", "0 0 0", "4 0 0", "0 0 2", "0 0 0", "0 0 0"]


def fake_input_gen(lines):
    it = iter(lines)

    def _input():
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _input


def test_bot_reads_and_plans(monkeypatch):
    monkeypatch.setattr(builtins, "input", fake_input_gen(STAR_INIT + FIRST_TURN))
    bot = AntsBot()

    bot.read_init()
    bot.read_turn()

    assert bot.grid.cell_count == 7
    assert bot.planner.target_goal == 6
    assert bot.aggregates.my_ants == 3
    # The egg (3) is connected first, then the crystal (1).
    assert bot.get_action() == "BEACON 0 1;BEACON 1 1;BEACON 3 1;MESSAGE BALANCE 3"
    assert bot.last_plan.targets == [3, 1]


def test_bot_idles_without_units():
    bot = AntsBot()
    bot._read_init_lines(STAR_INIT)
    bot._read_turn_lines(NO_UNITS_TURN)

    assert bot.get_action() == "WAIT"
    assert bot.turn == 1


def test_debug_init_reports_layout(capsys):
    AntsBot(debug=True)._read_init_lines(STAR_INIT)

    err = capsys.readouterr().err
    assert "hexants init cells=7 reachable=7 goal=6" in err
    assert "hexants layout embedded=7 radius=1" in err


def test_debug_init_warns_on_inconsistent_adjacency(capsys):
    # 0 -> 1 -> 2 goes east twice, but 0 also lists 2 to its south-east.
    lines = ["3", "0 0 1 -1 -1 -1 -1 2", "0 0 2 -1 -1 0 -1 -1", "0 0 -1 -1 -1 1 -1 -1", "1", "0", "2"]

    quiet = AntsBot()
    quiet._read_init_lines(lines)
    assert capsys.readouterr().err == ""

    bot = AntsBot(debug=True)
    bot._read_init_lines(lines)

    assert bot.grid.cell_count == 3
    err = capsys.readouterr().err
    assert "hexants WARNING: inconsistent adjacency" in err
    assert "hexants layout" not in err


def test_main_loop_until_eof(monkeypatch, capsys):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    text = "\n".join(STAR_INIT + FIRST_TURN + NO_UNITS_TURN) + "\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    assert bot_module.main(["--debug"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["BEACON 0 1;BEACON 1 1;BEACON 3 1;MESSAGE BALANCE 3", "WAIT"]
    assert "hexants turn=1 mode=BALANCED" in captured.err


def test_main_answers_wait_on_a_bad_turn(monkeypatch, capsys):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    bad_turn = list(FIRST_TURN)
    bad_turn[2] = "ten 0 0"
    text = "\n".join(STAR_INIT + bad_turn) + "\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    assert bot_module.main([]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["WAIT"]
    assert "hexants ERROR: ValueError" in captured.err


def test_main_params_override(monkeypatch, capsys):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    text = "\n".join(STAR_INIT + FIRST_TURN) + "\n"
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    bot_module.main(["--params", json.dumps({"beacon_strength": 2, "target_goal": 0})])

    # Goal met: harvest mode, only the defensible crystal is a candidate.
    assert capsys.readouterr().out.splitlines() == ["BEACON 0 2;BEACON 1 2;MESSAGE HARVEST 2"]


def test_dump_default_params(capsys):
    assert bot_module.main(["--dump-default-params"]) == 0

    assert json.loads(capsys.readouterr().out)["beacon_strength"] == 1


def test_malformed_startup_aborts(monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    lines = list(STAR_INIT)
    lines[3] = "0 0 -1 -1 -1 -1 9 -1"
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n".join(lines) + "\n"))

    with pytest.raises(StructuralError, match="out of range"):
        bot_module.main([])
