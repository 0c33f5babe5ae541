"""A terminal implementation of Tetris."""

__version__ = "0.1.0"

from .board import Board
from .commands import Command
from .config import GameConfig
from .engine import apply_command, hard_drop, lock_and_continue, step_gravity
from .game_state import GameState, Phase
from .loop import GameLoop
from .tetromino import Tetromino, TetrominoType, shape_blocks
from .utils import gravity_interval_ms, render_grid

__all__ = [
    "__version__",
    "Board",
    "Command",
    "GameConfig",
    "GameLoop",
    "GameState",
    "Phase",
    "Tetromino",
    "TetrominoType",
    "apply_command",
    "gravity_interval_ms",
    "hard_drop",
    "lock_and_continue",
    "render_grid",
    "shape_blocks",
    "step_gravity",
]
