"""Player commands understood by the game loop."""

from __future__ import annotations

from enum import Enum


class Command(str, Enum):
    """Enumeration of everything a player can ask the game to do."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    ROTATE_180 = "rotate_180"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    HOLD = "hold"
    PAUSE = "pause"
    RESTART = "restart"
    QUIT = "quit"


# Commands that act on the falling piece and are ignored while paused or
# after the game has ended.
PIECE_COMMANDS = frozenset(
    {
        Command.MOVE_LEFT,
        Command.MOVE_RIGHT,
        Command.ROTATE_CW,
        Command.ROTATE_CCW,
        Command.ROTATE_180,
        Command.SOFT_DROP,
        Command.HARD_DROP,
        Command.HOLD,
    }
)
