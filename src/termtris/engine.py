"""Game loop transitions: gravity, lock-in, line clears and commands.

All functions take the :class:`~termtris.game_state.GameState` explicitly
and are the only code that mutates it.  Moves are validated against the
board before they are committed; a move that does not fit is dropped
without touching the state.
"""

from __future__ import annotations

import logging

from .commands import Command, PIECE_COMMANDS
from .game_state import GameState, Phase
from .scoring import HARD_DROP_POINTS, SOFT_DROP_POINTS, line_clear_points


LOGGER = logging.getLogger(__name__)

_MOVES = {
    Command.MOVE_LEFT: (-1, 0),
    Command.MOVE_RIGHT: (1, 0),
}

_ROTATIONS = {
    Command.ROTATE_CW: 1,
    Command.ROTATE_CCW: -1,
    Command.ROTATE_180: 2,
}


def _playable(state: GameState) -> bool:
    return (
        state.phase is Phase.FALLING
        and state.active is not None
        and not state.paused
        and state.running
    )


def try_move(state: GameState, dx: int, dy: int) -> bool:
    """Move the active piece by ``dx``/``dy`` if the target is free."""

    if not _playable(state):
        return False
    candidate = state.active.moved(dx, dy)
    if not state.board.can_place(candidate):
        return False
    state.active = candidate
    return True


def try_rotate(state: GameState, direction: int = 1) -> bool:
    """Rotate the active piece in place if the rotated cells are free."""

    if not _playable(state):
        return False
    candidate = state.active.rotated(direction)
    if not state.board.can_place(candidate):
        return False
    state.active = candidate
    return True


def soft_drop(state: GameState) -> bool:
    """Move the piece down one row, awarding soft drop points.

    A soft drop never locks the piece; landing is left to gravity.
    """

    if try_move(state, 0, 1):
        state.score += SOFT_DROP_POINTS
        return True
    return False


def hard_drop(state: GameState) -> int:
    """Drop the piece to its landing row, lock it and spawn the next one.

    Returns the number of rows the piece fell.
    """

    if not _playable(state):
        return 0
    distance = state.board.drop_distance(state.active)
    state.active = state.active.moved(0, distance)
    state.score += HARD_DROP_POINTS * distance
    lock_and_continue(state)
    return distance


def lock_and_continue(state: GameState) -> int:
    """Lock the active piece, clear rows and spawn the next piece.

    Walks the Locking, Clearing and Spawning phases in order and returns the
    number of rows cleared.
    """

    if state.active is None:
        return 0

    state.phase = Phase.LOCKING
    state.board.lock(state.active)
    state.active = None

    state.phase = Phase.CLEARING
    cleared = state.board.clear_completed_rows()
    if cleared:
        points = line_clear_points(cleared, state.level)
        state.score += points
        LOGGER.info(
            "Cleared %d row(s) at level %d for %d points. Score: %d",
            cleared,
            state.level,
            points,
            state.score,
        )
    state.piece_locked(cleared)

    state.spawn_tetromino()
    return cleared


def step_gravity(state: GameState) -> bool:
    """Run one gravity tick.

    Returns ``True`` if the piece moved down, ``False`` if it locked (or the
    game is not in a state where gravity applies).
    """

    if not _playable(state):
        return False
    if try_move(state, 0, 1):
        return True
    lock_and_continue(state)
    return False


def restart(state: GameState) -> None:
    LOGGER.info("Restarting game")
    state.reset_game()


def apply_command(state: GameState, command: Command) -> bool:
    """Apply ``command`` to ``state``.

    Returns ``True`` when the state changed.  Piece commands are ignored
    while paused or after the game is over; Pause, Restart and Quit are
    always honoured (pausing has no effect once the game is over).
    """

    if command is Command.QUIT:
        state.running = False
        return True
    if command is Command.RESTART:
        restart(state)
        return True
    if command is Command.PAUSE:
        if state.game_over:
            return False
        state.paused = not state.paused
        LOGGER.info("Paused" if state.paused else "Resumed")
        return True

    if command not in PIECE_COMMANDS or not _playable(state):
        return False
    if command in _MOVES:
        return try_move(state, *_MOVES[command])
    if command in _ROTATIONS:
        return try_rotate(state, _ROTATIONS[command])
    if command is Command.SOFT_DROP:
        return soft_drop(state)
    if command is Command.HARD_DROP:
        hard_drop(state)
        return True
    return state.swap_hold()
