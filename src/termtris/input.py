"""Keyboard input: terminal key codes to game commands."""

from __future__ import annotations

import curses
from typing import Dict, List, Optional

from .commands import Command


ESCAPE = 27
CTRL_C = 3

# Upper bound on the keys drained in one frame so a flood of input (such as
# a held key with a fast repeat rate) cannot starve gravity and rendering.
MAX_KEYS_PER_POLL = 32


def _letters(chars: str, command: Command) -> Dict[int, Command]:
    keys: Dict[int, Command] = {}
    for char in chars:
        keys[ord(char.lower())] = command
        keys[ord(char.upper())] = command
    return keys


DEFAULT_KEYMAP: Dict[int, Command] = {
    curses.KEY_LEFT: Command.MOVE_LEFT,
    curses.KEY_RIGHT: Command.MOVE_RIGHT,
    curses.KEY_UP: Command.ROTATE_CW,
    curses.KEY_DOWN: Command.SOFT_DROP,
    ord(" "): Command.HARD_DROP,
    ESCAPE: Command.QUIT,
    CTRL_C: Command.QUIT,
    **_letters("x", Command.ROTATE_CW),
    **_letters("z", Command.ROTATE_CCW),
    **_letters("a", Command.ROTATE_180),
    **_letters("ch", Command.HOLD),
    **_letters("p", Command.PAUSE),
    **_letters("r", Command.RESTART),
    **_letters("q", Command.QUIT),
}

HELP_TEXT = (
    "<- -> move  up/x rotate  z ccw  a 180  down soft  "
    "space drop  c hold  p pause  r restart  q quit"
)


def translate_key(key: int, keymap: Optional[Dict[int, Command]] = None) -> Optional[Command]:
    """Return the command bound to ``key`` or ``None`` if it is unbound."""

    return (DEFAULT_KEYMAP if keymap is None else keymap).get(key)


class InputHandler:
    """Read pending keys from a non-blocking curses window.

    The handler only produces :class:`Command` values; applying them is left
    to the game loop.
    """

    def __init__(self, window, keymap: Optional[Dict[int, Command]] = None) -> None:
        self._window = window
        self.keymap = dict(DEFAULT_KEYMAP if keymap is None else keymap)

    def poll(self) -> List[Command]:
        """Drain waiting keys and return their commands in arrival order."""

        commands: List[Command] = []
        for _ in range(MAX_KEYS_PER_POLL):
            key = self._window.getch()
            if key == -1:
                break
            command = translate_key(key, self.keymap)
            if command is not None:
                commands.append(command)
        return commands
