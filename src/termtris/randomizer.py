"""Sources of upcoming tetromino shapes."""

from __future__ import annotations

import random
from typing import List, Optional

from .tetromino import TetrominoType


class SevenBag:
    """Shuffled 7-bag randomizer.

    Every consecutive group of seven pieces contains each shape exactly once,
    which bounds droughts of any single shape to twelve pieces.
    """

    name = "bag"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)
        self._bag: List[TetrominoType] = []

    def next(self) -> TetrominoType:
        if not self._bag:
            self._bag = list(TetrominoType)
            self._random.shuffle(self._bag)
        return self._bag.pop()


class UniformRandomizer:
    """Pick every shape independently with equal probability."""

    name = "random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def next(self) -> TetrominoType:
        return self._random.choice(list(TetrominoType))


RANDOMIZERS = {cls.name: cls for cls in (SevenBag, UniformRandomizer)}


def make_randomizer(kind: str = "bag", seed: Optional[int] = None):
    """Return a randomizer instance for ``kind``.

    Raises:
        ValueError: If ``kind`` is not a known randomizer name.
    """

    try:
        factory = RANDOMIZERS[kind]
    except KeyError:
        raise ValueError(f"Unknown randomizer: {kind}") from None
    return factory(seed)


__all__ = ["SevenBag", "UniformRandomizer", "RANDOMIZERS", "make_randomizer"]
