from __future__ import annotations

import curses

from termtris.commands import Command
from termtris.input import CTRL_C, ESCAPE, MAX_KEYS_PER_POLL, InputHandler, translate_key


class FakeWindow:
    def __init__(self, keys) -> None:
        self.keys = list(keys)

    def getch(self) -> int:
        return self.keys.pop(0) if self.keys else -1


def test_arrow_keys():
    assert translate_key(curses.KEY_LEFT) is Command.MOVE_LEFT
    assert translate_key(curses.KEY_RIGHT) is Command.MOVE_RIGHT
    assert translate_key(curses.KEY_UP) is Command.ROTATE_CW
    assert translate_key(curses.KEY_DOWN) is Command.SOFT_DROP


def test_letters_are_case_insensitive():
    for char, command in [
        ("x", Command.ROTATE_CW),
        ("z", Command.ROTATE_CCW),
        ("a", Command.ROTATE_180),
        ("c", Command.HOLD),
        ("p", Command.PAUSE),
        ("r", Command.RESTART),
        ("q", Command.QUIT),
    ]:
        assert translate_key(ord(char)) is command
        assert translate_key(ord(char.upper())) is command


def test_quit_keys_and_unbound_keys():
    assert translate_key(ESCAPE) is Command.QUIT
    assert translate_key(CTRL_C) is Command.QUIT
    assert translate_key(ord(" ")) is Command.HARD_DROP
    assert translate_key(ord("?")) is None


def test_custom_keymap():
    keymap = {ord("j"): Command.MOVE_LEFT}
    assert translate_key(ord("j"), keymap) is Command.MOVE_LEFT
    assert translate_key(curses.KEY_LEFT, keymap) is None


def test_poll_returns_commands_in_order():
    window = FakeWindow([curses.KEY_LEFT, ord("?"), ord(" "), ord("p")])
    handler = InputHandler(window)
    assert handler.poll() == [Command.MOVE_LEFT, Command.HARD_DROP, Command.PAUSE]
    assert handler.poll() == []


def test_poll_is_bounded():
    window = FakeWindow([ord("x")] * (MAX_KEYS_PER_POLL + 5))
    handler = InputHandler(window)
    assert len(handler.poll()) == MAX_KEYS_PER_POLL
    assert len(handler.poll()) == 5
