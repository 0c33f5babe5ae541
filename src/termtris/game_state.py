"""High level game state container."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional
import logging

from .board import Board
from .config import GameConfig
from .randomizer import make_randomizer
from .scoring import level_for_lines
from .tetromino import BOX_SIZES, Tetromino, TetrominoType


LOGGER = logging.getLogger(__name__)


class Phase(str, Enum):
    """States of the game loop."""

    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    CLEARING = "clearing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Mutable state for a Tetris game session.

    The game loop is the only writer.  Renderers and input handlers receive
    the state but never modify it.
    """

    config: GameConfig = field(default_factory=GameConfig)
    board: Board = field(init=False)
    active: Optional[Tetromino] = None
    queue: Deque[TetrominoType] = field(default_factory=deque)
    held: Optional[TetrominoType] = None
    hold_used: bool = False
    score: int = 0
    level: int = 0
    lines: int = 0
    pieces: int = 0
    phase: Phase = Phase.SPAWNING
    paused: bool = False
    running: bool = True

    def __post_init__(self) -> None:
        self.board = Board(self.config.width, self.config.height)
        self.level = self.config.start_level
        self.randomizer = make_randomizer(self.config.randomizer, self.config.seed)

    @property
    def upcoming(self) -> Optional[TetrominoType]:
        """The shape that will spawn next."""

        return self.queue[0] if self.queue else None

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def _fill_queue(self) -> None:
        while len(self.queue) < self.config.preview:
            self.queue.append(self.randomizer.next())

    def _next_type(self) -> TetrominoType:
        self._fill_queue()
        shape = self.queue.popleft()
        self._fill_queue()
        return shape

    def spawn_position(self, shape: TetrominoType) -> tuple[int, int]:
        """Return the top-centre anchor for a new ``shape``."""

        return (0, (self.board.width - BOX_SIZES[shape]) // 2)

    def spawn_tetromino(self) -> Optional[Tetromino]:
        """Spawn and return a new active tetromino.

        The first queued shape becomes active and the queue is topped up from
        the randomizer.  The hold flag is reset so the player may hold again
        for the new piece.  When the spawn position is already occupied the
        game is over, the colliding piece is discarded and ``None`` is
        returned.
        """

        self.phase = Phase.SPAWNING
        shape = self._next_type()
        piece = Tetromino(shape, position=self.spawn_position(shape))
        self.hold_used = False
        if not self.board.can_place(piece):
            self.active = None
            self.phase = Phase.GAME_OVER
            LOGGER.info(
                "Game over: score=%d level=%d lines=%d pieces=%d",
                self.score,
                self.level,
                self.lines,
                self.pieces,
            )
            return None
        self.active = piece
        self.phase = Phase.FALLING
        LOGGER.debug("Spawned %s at %s", shape.value, piece.position)
        return self.active

    def swap_hold(self) -> bool:
        """Swap the active piece with the held one.

        Implements the standard Tetris hold mechanic.  The swap may only happen
        once per spawned piece; additional calls are ignored until another piece
        is spawned.  When nothing is held yet the next queued shape comes in.
        The incoming piece enters at its spawn position; if it does not fit
        there the hold is refused and nothing changes.
        """

        if self.active is None or self.hold_used or self.phase is not Phase.FALLING:
            return False

        incoming = self.held if self.held is not None else self.upcoming
        if incoming is None:
            self._fill_queue()
            incoming = self.queue[0]
        piece = Tetromino(incoming, position=self.spawn_position(incoming))
        if not self.board.can_place(piece):
            return False

        if self.held is None:
            self._next_type()
        self.held = self.active.shape
        self.active = piece
        self.hold_used = True
        return True

    def piece_locked(self, cleared: int = 0) -> None:
        """Record a locked piece and ``cleared`` rows, updating the level."""

        self.pieces += 1
        self.lines += cleared
        level = max(self.level, level_for_lines(self.lines, self.config.start_level))
        if level != self.level:
            LOGGER.info("Level up: %d -> %d", self.level, level)
        self.level = level

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.level = self.config.start_level
        self.lines = 0
        self.pieces = 0
        self.active = None
        self.queue.clear()
        self.held = None
        self.hold_used = False
        self.paused = False
        self.running = True
        self.spawn_tetromino()
