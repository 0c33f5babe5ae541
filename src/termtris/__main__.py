"""Terminal Tetris.

Run with: `python -m termtris`

``--snapshot`` prints a single frame composed of the board plus the active
tetromino and exits, useful as a minimal smoke test without a terminal.
"""

from __future__ import annotations

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
