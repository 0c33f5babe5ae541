"""Scoped ownership of the terminal.

:func:`terminal_session` puts the terminal into curses raw mode and hands
out the screen window.  Whatever happens inside the ``with`` block, the
terminal is put back the way it was: cooked mode, echo on, cursor visible.
SIGTERM and SIGHUP are turned into :class:`SystemExit` for the duration of
the session so they unwind through the same cleanup.
"""

from __future__ import annotations

import curses
import logging
import signal
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple


LOGGER = logging.getLogger(__name__)

_EXIT_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class TerminalError(RuntimeError):
    """Raised when the terminal cannot be used for the game."""


def _raise_exit(signum, _frame) -> None:
    raise SystemExit(128 + signum)


def _install_signal_handlers() -> Dict[int, object]:
    previous = {}
    for signum in _EXIT_SIGNALS:
        try:
            previous[signum] = signal.signal(signum, _raise_exit)
        except ValueError:
            # Handlers can only be installed from the main thread.
            break
    return previous


def _restore_signal_handlers(previous: Dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def _restore(screen) -> None:
    """Undo everything the session changed, best effort per step."""

    steps = (
        lambda: screen.keypad(False),
        curses.noraw,
        curses.echo,
        lambda: curses.curs_set(1),
        curses.endwin,
    )
    for step in steps:
        try:
            step()
        except curses.error as exc:
            LOGGER.debug("Terminal restore step failed: %s", exc)


@contextmanager
def terminal_session(min_size: Optional[Tuple[int, int]] = None) -> Iterator[object]:
    """Enter raw mode and yield the curses screen window.

    ``min_size`` is an optional ``(rows, columns)`` requirement checked right
    after initialisation.

    Raises:
        TerminalError: If curses cannot initialise the terminal or the
            terminal is smaller than ``min_size``.
    """

    try:
        screen = curses.initscr()
    except curses.error as exc:
        raise TerminalError(f"cannot initialise terminal: {exc}") from exc

    previous_handlers = _install_signal_handlers()
    try:
        try:
            curses.noecho()
            curses.raw()
            screen.keypad(True)
            screen.nodelay(True)
        except curses.error as exc:
            raise TerminalError(f"cannot enter raw mode: {exc}") from exc
        try:
            curses.curs_set(0)
        except curses.error:
            LOGGER.debug("Terminal cannot hide the cursor")

        if min_size is not None:
            rows, cols = screen.getmaxyx()
            need_rows, need_cols = min_size
            if rows < need_rows or cols < need_cols:
                raise TerminalError(
                    f"terminal too small: need {need_cols}x{need_rows}, have {cols}x{rows}"
                )
        LOGGER.debug("Terminal session started")
        yield screen
    finally:
        _restore(screen)
        _restore_signal_handlers(previous_handlers)
        LOGGER.debug("Terminal restored")
