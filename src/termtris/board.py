"""Board representation for the Tetris playfield."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino, TetrominoType


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0`` is
# an empty cell, any other value is an occupied cell tagged with its shape.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}

EMPTY = 0


def create_empty_grid(height: int = HEIGHT, width: int = WIDTH) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Tetris board holding the locked cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(height, width)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def cell(self, row: int, col: int) -> Optional[TetrominoType]:
        """Return the shape tag at ``(row, col)`` or ``None`` when empty."""

        return VALUE_PIECES.get(self.get_cell(row, col))

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.  This makes
        collision detection simpler as off-board positions are automatically
        rejected.
        """

        if self.in_bounds(row, col):
            return bool(self.grid[row, col] == EMPTY)
        return False

    def can_place(
        self,
        tetromino: Tetromino,
        position: Optional[Tuple[int, int]] = None,
        rotation: Optional[int] = None,
    ) -> bool:
        """Return ``True`` if ``tetromino`` fits on the board.

        ``position`` and ``rotation`` override the piece's own values, which
        lets callers test a candidate placement without building a new piece.
        Every block must lie inside the grid on an empty cell.
        """

        if position is not None or rotation is not None:
            tetromino = Tetromino(
                tetromino.shape,
                tetromino.rotation if rotation is None else rotation,
                tetromino.position if position is None else position,
            )
        return all(self.is_empty(row, col) for row, col in tetromino.blocks())

    def drop_distance(self, tetromino: Tetromino) -> int:
        """Return how many rows ``tetromino`` can fall before it lands."""

        if not self.can_place(tetromino):
            return 0
        distance = 0
        row, col = tetromino.position
        while self.can_place(tetromino, position=(row + distance + 1, col)):
            distance += 1
        return distance

    def lock(self, tetromino: Tetromino) -> None:
        """Lock the tetromino's blocks into the board grid.

        Blocks outside the grid are skipped so the board never holds cells
        beyond its bounds.
        """

        coordinates = np.asarray(tetromino.blocks(), dtype=np.int16)
        if coordinates.size == 0:
            return

        rows, cols = coordinates.T
        inside = (rows >= 0) & (rows < self.height) & (cols >= 0) & (cols < self.width)
        self.grid[rows[inside], cols[inside]] = np.uint8(PIECE_VALUES[tetromino.shape])

    def clear_completed_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows above a cleared row shift down by the number of cleared rows
        beneath them and the top of the board is refilled with empty rows.
        """

        full_rows = np.all(self.grid != EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def is_clear(self) -> bool:
        return not bool(np.any(self.grid))
