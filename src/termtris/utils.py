"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


BASE_GRAVITY_MS = 800
MIN_GRAVITY_MS = 50

# Grid value used by ``render_grid`` for the landing preview of the active
# piece.  It sits outside the range of ``PIECE_VALUES``.
GHOST_VALUE = len(PIECE_VALUES) + 1


def gravity_interval_ms(level: int) -> float:
    """Return the fall interval in milliseconds for ``level``.

    The interval decreases as the level rises, speeding up the falling
    pieces, and never drops below ``MIN_GRAVITY_MS``.
    """

    # Exponentially decrease the delay but keep a practical lower bound
    return max(float(MIN_GRAVITY_MS), BASE_GRAVITY_MS * (0.85 ** max(0, level)))


def ghost_piece(board: Board, active: Tetromino) -> Tetromino:
    """Return ``active`` moved to the row where a hard drop would land it."""

    return active.moved(0, board.drop_distance(active))


def render_grid(
    board: Board, active: Optional[Tetromino] = None, ghost: bool = False
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape.  With ``ghost`` enabled, empty cells where
    the piece would land are marked with ``GHOST_VALUE``.
    """

    grid = [[int(v) for v in row] for row in board.grid]
    if active is None:
        return grid
    if ghost:
        for r, c in ghost_piece(board, active).blocks():
            if board.in_bounds(r, c) and grid[r][c] == 0:
                grid[r][c] = GHOST_VALUE
    for r, c in active.blocks():
        if board.in_bounds(r, c):
            grid[r][c] = PIECE_VALUES[active.shape]
    return grid
