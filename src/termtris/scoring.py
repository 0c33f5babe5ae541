"""Scoring and level progression rules."""

from __future__ import annotations

# Points for clearing 1, 2, 3 or 4 rows at once, before the level multiplier.
LINE_CLEAR_POINTS = {0: 0, 1: 100, 2: 300, 3: 500, 4: 800}

SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2

LINES_PER_LEVEL = 10


def line_clear_points(lines: int, level: int) -> int:
    """Return the score for clearing ``lines`` rows simultaneously at ``level``.

    Multi-row clears earn more than the same rows cleared one at a time and
    every level adds another multiple of the base value.
    """

    if lines <= 0:
        return 0
    base = LINE_CLEAR_POINTS.get(lines, LINE_CLEAR_POINTS[4] * lines // 4)
    return base * (level + 1)


def level_for_lines(lines: int, start_level: int = 0) -> int:
    """Return the level reached after clearing ``lines`` rows."""

    return start_level + max(0, lines) // LINES_PER_LEVEL
