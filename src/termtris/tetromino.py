"""Tetromino definitions and basic behaviour.

Every shape is described by its occupied cells inside a square bounding box
(4x4 for ``I``, 2x2 for ``O`` and 3x3 for the rest).  The four rotation states
are derived once at import time by turning the box clockwise, which yields a
static ``TetrominoType -> [offsets per rotation]`` table.  Pieces themselves
only carry a shape, a rotation index and an anchor position.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

RotationState = Tuple[Tuple[int, int], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _rotate(state: RotationState, size: int) -> RotationState:
    """Return ``state`` turned 90 degrees clockwise inside a ``size`` box.

    Unlike a rotation about the origin, turning inside the bounding box keeps
    the piece roughly in place, so a rotated piece only needs validating at
    the same anchor.
    """

    return tuple(sorted((c, size - 1 - r) for r, c in state))


def _generate_rotations(state: RotationState, size: int) -> List[RotationState]:
    """Generate the four rotation states for a piece starting from ``state``."""

    rotations = [tuple(sorted(state))]
    for _ in range(3):
        state = _rotate(state, size)
        rotations.append(state)
    return rotations


# Spawn orientation of each tetromino and the size of its bounding box.
_BASE_SHAPES: Dict[TetrominoType, Tuple[int, RotationState]] = {
    TetrominoType.I: (4, ((1, 0), (1, 1), (1, 2), (1, 3))),
    TetrominoType.O: (2, ((0, 0), (0, 1), (1, 0), (1, 1))),
    TetrominoType.T: (3, ((0, 1), (1, 0), (1, 1), (1, 2))),
    TetrominoType.S: (3, ((0, 1), (0, 2), (1, 0), (1, 1))),
    TetrominoType.Z: (3, ((0, 0), (0, 1), (1, 1), (1, 2))),
    TetrominoType.J: (3, ((0, 0), (1, 0), (1, 1), (1, 2))),
    TetrominoType.L: (3, ((0, 2), (1, 0), (1, 1), (1, 2))),
}

BOX_SIZES: Dict[TetrominoType, int] = {t: size for t, (size, _) in _BASE_SHAPES.items()}

TETROMINO_SHAPES: Dict[TetrominoType, List[RotationState]] = {
    t_type: _generate_rotations(cells, size) for t_type, (size, cells) in _BASE_SHAPES.items()
}

ROTATIONS = 4


def shape_blocks(shape: TetrominoType, rotation: int) -> RotationState:
    """Return the block offsets for ``shape`` at ``rotation``.

    Parameters
    ----------
    shape:
        The :class:`TetrominoType` to query.
    rotation:
        Index of the desired rotation state.  Values are wrapped so any integer
        is accepted.
    """

    return TETROMINO_SHAPES[shape][rotation % ROTATIONS]


@dataclass(frozen=True)
class Tetromino:
    """Active falling piece in the game.

    Instances are immutable; :meth:`moved` and :meth:`rotated` return the
    candidate piece so callers can check it against the board before
    committing to it.
    """

    shape: TetrominoType
    rotation: int = 0
    position: Tuple[int, int] = (0, 0)  # (row, col)

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy shifted by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        return replace(self, position=(row + dy, col + dx))

    def rotated(self, direction: int = 1) -> "Tetromino":
        """Return a copy rotated by ``direction`` quarter turns.

        Positive values rotate clockwise, negative values counter-clockwise
        and ``2`` is a half turn.
        """

        return replace(self, rotation=(self.rotation + direction) % ROTATIONS)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in shape_blocks(self.shape, self.rotation)]
