"""Terminal renderer for the game state.

Frames are composed as rows of ``(text, style)`` spans by pure functions so
the layout can be inspected without a terminal.  :class:`CursesRenderer`
paints those spans into a curses window.  Nothing in this module modifies
the game state.
"""

from __future__ import annotations

import curses
from typing import Dict, List, Optional, Tuple

from .board import VALUE_PIECES
from .game_state import GameState
from .input import HELP_TEXT
from .tetromino import TetrominoType, shape_blocks
from .utils import GHOST_VALUE, render_grid

Span = Tuple[str, Optional[str]]
Row = List[Span]

BLOCK = "[]"
GHOST = "::"
EMPTY = " ."
BLANK = "  "

FRAME_STYLE = "frame"
GHOST_STYLE = "ghost"
LABEL_STYLE = "label"
OVERLAY_STYLE = "overlay"

PANEL_GAP = "  "
PREVIEW_CELLS = 4


def _cell_span(value: int) -> Span:
    if value == GHOST_VALUE:
        return GHOST, GHOST_STYLE
    shape = VALUE_PIECES.get(value)
    if shape is None:
        return EMPTY, None
    return BLOCK, shape.value


def preview_rows(shape: Optional[TetrominoType]) -> List[Row]:
    """Return two rows drawing ``shape`` in its spawn orientation."""

    rows: List[Row] = [[(BLANK, None)] * PREVIEW_CELLS for _ in range(2)]
    if shape is None:
        return rows
    blocks = shape_blocks(shape, 0)
    top = min(r for r, _ in blocks)
    for r, c in blocks:
        rows[r - top][c] = (BLOCK, shape.value)
    return rows


def _panel(state: GameState) -> List[Row]:
    panel: List[Row] = []

    def stat(label: str, value: int) -> None:
        panel.append([(label, LABEL_STYLE)])
        panel.append([(str(value), None)])
        panel.append([])

    stat("SCORE", state.score)
    stat("LEVEL", state.level)
    stat("LINES", state.lines)
    panel.append([("NEXT", LABEL_STYLE)])
    for shape in list(state.queue)[: state.config.preview]:
        panel.extend(preview_rows(shape))
        panel.append([])
    panel.append([("HOLD", LABEL_STYLE)])
    panel.extend(preview_rows(state.held))
    return panel


def _overlay_text(state: GameState) -> List[str]:
    if state.game_over:
        return ["GAME OVER", "r restart", "q quit"]
    if state.paused:
        return ["PAUSED"]
    return []


def _board_rows(state: GameState, ghost: bool) -> List[Row]:
    board = state.board
    inner = board.width * len(BLOCK)
    grid = render_grid(board, state.active, ghost=ghost and not state.paused)
    rows: List[Row] = [[("+" + "-" * inner + "+", FRAME_STYLE)]]
    for values in grid:
        rows.append([("|", FRAME_STYLE), *(_cell_span(v) for v in values), ("|", FRAME_STYLE)])
    rows.append([("+" + "-" * inner + "+", FRAME_STYLE)])

    messages = _overlay_text(state)
    start = 1 + (board.height - len(messages)) // 2
    for offset, message in enumerate(messages):
        text = message[:inner].center(inner)
        rows[start + offset] = [("|", FRAME_STYLE), (text, OVERLAY_STYLE), ("|", FRAME_STYLE)]
    return rows


def compose_frame(state: GameState, ghost: bool = True, help_line: bool = True) -> List[Row]:
    """Compose the full frame: board, side panel and key help."""

    board_rows = _board_rows(state, ghost)
    board_width = state.board.width * len(BLOCK) + 2
    panel = _panel(state)
    frame: List[Row] = []
    for index in range(max(len(board_rows), len(panel))):
        if index < len(board_rows):
            row = list(board_rows[index])
        else:
            row = [(" " * board_width, None)]
        if index < len(panel) and panel[index]:
            row.append((PANEL_GAP, None))
            row.extend(panel[index])
        frame.append(row)
    if help_line:
        frame.append([(HELP_TEXT, LABEL_STYLE)])
    return frame


def frame_text(state: GameState, ghost: bool = True, help_line: bool = True) -> List[str]:
    """Return the composed frame as plain text lines."""

    return ["".join(text for text, _ in row).rstrip() for row in compose_frame(state, ghost, help_line)]


def frame_size(state: GameState) -> Tuple[int, int]:
    """Return the ``(rows, columns)`` needed to show the frame without help."""

    lines = frame_text(state, help_line=False)
    return len(lines), max(len(line) for line in lines)


_SHAPE_COLORS = {
    TetrominoType.I: curses.COLOR_CYAN,
    TetrominoType.O: curses.COLOR_YELLOW,
    TetrominoType.T: curses.COLOR_MAGENTA,
    TetrominoType.S: curses.COLOR_GREEN,
    TetrominoType.Z: curses.COLOR_RED,
    TetrominoType.J: curses.COLOR_BLUE,
    TetrominoType.L: curses.COLOR_WHITE,
}


class CursesRenderer:
    """Draw composed frames into a curses window."""

    def __init__(self, window, *, color: bool = True, ghost: bool = True) -> None:
        self._window = window
        self.ghost = ghost
        self._attrs: Dict[Optional[str], int] = {
            None: curses.A_NORMAL,
            FRAME_STYLE: curses.A_NORMAL,
            GHOST_STYLE: curses.A_DIM,
            LABEL_STYLE: curses.A_BOLD,
            OVERLAY_STYLE: curses.A_REVERSE | curses.A_BOLD,
        }
        for shape in TetrominoType:
            self._attrs[shape.value] = curses.A_BOLD
        if color and curses.has_colors():
            self._init_colors()

    def _init_colors(self) -> None:
        curses.start_color()
        background = curses.COLOR_BLACK
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            pass
        for pair, shape in enumerate(TetrominoType, start=1):
            curses.init_pair(pair, _SHAPE_COLORS[shape], background)
            self._attrs[shape.value] = curses.color_pair(pair) | curses.A_BOLD

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        try:
            self._window.addstr(y, x, text, attr)
        except curses.error:
            # Text past the window edge is clipped.
            pass

    def draw(self, state: GameState) -> None:
        self._window.erase()
        for y, row in enumerate(compose_frame(state, ghost=self.ghost)):
            x = 0
            for text, style in row:
                self._put(y, x, text, self._attrs.get(style, curses.A_NORMAL))
                x += len(text)
        self._window.refresh()
