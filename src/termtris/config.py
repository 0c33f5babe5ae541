"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import HEIGHT, WIDTH
from .randomizer import RANDOMIZERS

MAX_PREVIEW = 5


@dataclass(frozen=True)
class GameConfig:
    """Settings for a game session.

    Raises:
        ValueError: From ``__post_init__`` when a value is out of range.
    """

    width: int = WIDTH
    height: int = HEIGHT
    start_level: int = 0
    preview: int = 3
    seed: Optional[int] = None
    randomizer: str = "bag"
    ghost: bool = True
    color: bool = True
    fps: int = 60

    def __post_init__(self) -> None:
        if self.width < 4:
            raise ValueError("width must be at least 4 columns")
        if self.height < 4:
            raise ValueError("height must be at least 4 rows")
        if self.start_level < 0:
            raise ValueError("start level cannot be negative")
        if not 1 <= self.preview <= MAX_PREVIEW:
            raise ValueError(f"preview must be between 1 and {MAX_PREVIEW}")
        if self.randomizer not in RANDOMIZERS:
            raise ValueError(f"unknown randomizer {self.randomizer!r}")
        if self.fps < 1:
            raise ValueError("fps must be positive")

    @property
    def frame_seconds(self) -> float:
        return 1.0 / self.fps


def config_from_args(args) -> GameConfig:
    """Build a :class:`GameConfig` from parsed command line arguments."""

    return GameConfig(
        width=args.width,
        height=args.height,
        start_level=args.level,
        preview=args.preview,
        seed=args.seed,
        randomizer=args.randomizer,
        ghost=not args.no_ghost,
        color=not args.no_color,
        fps=args.fps,
    )
