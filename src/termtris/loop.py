"""Single-threaded game loop.

Each iteration polls input, applies the resulting commands, advances the
gravity timer by the elapsed wall-clock time and redraws the frame.  The
loop is the only writer of the :class:`GameState`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .commands import Command
from .engine import apply_command, step_gravity
from .game_state import GameState
from .utils import gravity_interval_ms


LOGGER = logging.getLogger(__name__)


class GameLoop:
    """Drive a game session with an input source and a renderer.

    ``input_handler`` needs a ``poll()`` method returning commands and
    ``renderer`` a ``draw(state)`` method.  ``clock`` returns seconds from a
    monotonic source and ``sleep`` waits out the rest of a frame; both can be
    replaced in tests.
    """

    def __init__(
        self,
        state: GameState,
        input_handler,
        renderer,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.state = state
        self.input = input_handler
        self.renderer = renderer
        self._clock = clock
        self._sleep = sleep
        self.last_ts: Optional[float] = None
        self.drop_accum = 0.0
        self.frames = 0

    def _reset_timers(self) -> None:
        self.last_ts = None
        self.drop_accum = 0.0

    def _advance_gravity(self, now: float) -> None:
        if self.last_ts is None:
            self.last_ts = now
        dt_ms = (now - self.last_ts) * 1000.0
        self.last_ts = now
        state = self.state
        if state.paused or state.game_over:
            return
        self.drop_accum += dt_ms
        # Leftover time carries into the next interval, so a long frame can
        # run several ticks.
        while self.drop_accum >= gravity_interval_ms(state.level):
            self.drop_accum -= gravity_interval_ms(state.level)
            if not step_gravity(state):
                self.drop_accum = 0.0
                break

    def step(self, now: Optional[float] = None) -> None:
        """Run one loop iteration at time ``now`` (seconds)."""

        if now is None:
            now = self._clock()
        for command in self.input.poll():
            pieces_before = self.state.pieces
            changed = apply_command(self.state, command)
            if changed and command is Command.RESTART:
                self._reset_timers()
            elif self.state.pieces != pieces_before or (changed and command is Command.HOLD):
                # A fresh piece gets a full gravity interval.
                self.drop_accum = 0.0
            if not self.state.running:
                return
        self._advance_gravity(now)
        self.renderer.draw(self.state)
        self.frames += 1

    def run(self, frame_seconds: float = 1 / 60) -> GameState:
        """Play until the state stops running and return the final state."""

        if self.state.active is None and not self.state.game_over:
            self.state.reset_game()
        LOGGER.info("Game started")
        self._reset_timers()
        while self.state.running:
            started = self._clock()
            self.step(started)
            remaining = frame_seconds - (self._clock() - started)
            if remaining > 0:
                self._sleep(remaining)
        LOGGER.info(
            "Game stopped after %d frames: score=%d level=%d lines=%d",
            self.frames,
            self.state.score,
            self.state.level,
            self.state.lines,
        )
        return self.state
