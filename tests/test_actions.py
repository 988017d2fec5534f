import pytest

from hexants.actions import Announce, Connect, Idle, Reinforce, format_actions


def test_format_actions():
    commands = [Reinforce(0, 1), Reinforce(5, 2), Connect(0, 9, 1), Announce("GROW 3")]

    assert format_actions(commands) == "BEACON 0 1;BEACON 5 2;LINE 0 9 1;MESSAGE GROW 3"


def test_empty_and_idle_render_wait():
    assert format_actions([]) == "WAIT"
    assert format_actions([Idle()]) == "WAIT"


def test_message_cannot_split_the_line():
    assert format_actions([Announce("a;b")]) == "MESSAGE a,b"


def test_invalid_commands():
    with pytest.raises(ValueError):
        Reinforce(1, 0)
    with pytest.raises(ValueError):
        Connect(1, 2, -1)
    with pytest.raises(ValueError):
        Connect(3, 3, 1)
