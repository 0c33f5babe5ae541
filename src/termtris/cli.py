"""Command line entry point.

Run with: ``termtris`` or ``python -m termtris``.  Pass ``--help`` to see
the options.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .config import MAX_PREVIEW, GameConfig, config_from_args
from .game_state import GameState
from .input import InputHandler
from .loop import GameLoop
from .randomizer import RANDOMIZERS
from .render import CursesRenderer, frame_size, frame_text
from .terminal import TerminalError, terminal_session


LOGGER = logging.getLogger(__name__)

DEFAULTS = GameConfig()
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description="Play Tetris in the terminal.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--level", type=int, default=DEFAULTS.start_level, help="Starting level.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument(
        "--randomizer",
        choices=sorted(RANDOMIZERS),
        default=DEFAULTS.randomizer,
        help="Piece source: shuffled 7-bag or uniform random choice.",
    )
    parser.add_argument(
        "--preview",
        type=int,
        default=DEFAULTS.preview,
        help=f"Number of upcoming pieces shown (1-{MAX_PREVIEW}).",
    )
    parser.add_argument("--width", type=int, default=DEFAULTS.width, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=DEFAULTS.height, help="Board height in cells.")
    parser.add_argument("--fps", type=int, default=DEFAULTS.fps, help="Frames drawn per second.")
    parser.add_argument("--no-ghost", action="store_true", help="Hide the landing preview.")
    parser.add_argument("--no-color", action="store_true", help="Draw without colours.")
    parser.add_argument("--log-file", default=None, help="Write diagnostics to this file.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level for --log-file.",
    )
    parser.add_argument(
        "--snapshot",
        action="store_true",
        help="Print the first frame of a new game as text and exit.",
    )
    args = parser.parse_args(argv)
    try:
        args.config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def configure_logging(log_file: Optional[str], level: str) -> None:
    """Send logs to ``log_file``; without one only errors reach stderr.

    curses owns the screen while the game runs, so anything written to the
    terminal during play would corrupt the frame.
    """

    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=getattr(logging, level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        logging.basicConfig(level=logging.ERROR, format="%(name)s: %(message)s")


def play(config: GameConfig) -> GameState:
    """Run an interactive game in the terminal and return the final state."""

    state = GameState(config)
    state.reset_game()
    with terminal_session(min_size=frame_size(state)) as screen:
        loop = GameLoop(
            state,
            InputHandler(screen),
            CursesRenderer(screen, color=config.color, ghost=config.ghost),
        )
        return loop.run(config.frame_seconds)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    config: GameConfig = args.config

    if args.snapshot:
        state = GameState(config)
        state.reset_game()
        for line in frame_text(state, ghost=config.ghost):
            print(line)
        return 0

    try:
        state = play(config)
    except TerminalError as exc:
        # stderr only shows errors; keep the message to the single print below.
        LOGGER.info("Terminal initialisation failed: %s", exc)
        print(f"termtris: {exc}", file=sys.stderr)
        return 1
    print(f"Final score: {state.score}  level: {state.level}  lines: {state.lines}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution only
    raise SystemExit(main())
