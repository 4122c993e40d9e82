# tedit/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders the tedit editor onto a curses window.

Screen layout (top to bottom):
- text rows: a three-cell relative line-number gutter followed by the
  highlighted slice of each visible line, or `~` past the end of the document;
- the status bar: mode, file name, file type, buffer index and cursor position;
- the message log row, which shows the command line while in Command mode.

Redraw is gated by `EditingState.dirty`. A dirty frame erases and repaints
everything and then clears the flag. A clean frame repaints only the gutter
and the status bar, which are the only parts that depend on cursor movement
alone. The physical cursor is positioned last in both cases.

Rendering reads the editor state and never changes it, apart from clearing
the dirty flag. A highlighter failure is raised as `RenderError`; curses write
errors at the screen edges are logged and ignored.
"""

import curses
import logging
from typing import TYPE_CHECKING

from wcwidth import wcwidth

from tedit.core.EditingState import GUTTER_WIDTH, Mode, RESERVED_ROWS
from tedit.core.Errors import RenderError
from tedit.core.Highlighter import CATEGORIES
from tedit.utils.utils import hex_to_xterm

if TYPE_CHECKING:
    from tedit.core.Editor import Editor


UI_ELEMENTS = ("line_number", "status", "message", "eof")
EOF_MARKER = "~"
CURSOR_MARKER = "-> "


def char_width(ch: str) -> int:
    """Returns the width (0-2 cells) of a single code point; control characters count as 1."""
    width = wcwidth(ch)
    return 1 if width < 0 else width


def string_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def truncate_to_width(text: str, max_width: int) -> str:
    """Clips `text` so it occupies at most `max_width` cells, never splitting a wide glyph."""
    if max_width <= 0:
        return ""
    used = 0
    for i, ch in enumerate(text):
        w = char_width(ch)
        if used + w > max_width:
            return text[:i]
        used += w
    return text


class DrawScreen:
    """Renderer for one curses window.

    Attributes:
        editor (Editor): Editor whose state is drawn.
        stdscr (curses.window): Target window.
        colors (dict[str, int]): curses attribute per token category and UI element.
    """

    MIN_WINDOW_HEIGHT = RESERVED_ROWS + 1
    MIN_WINDOW_WIDTH = GUTTER_WIDTH + 10

    def __init__(self, editor: "Editor", stdscr: "curses.window") -> None:
        self.editor = editor
        self.stdscr = stdscr
        self.colors: dict[str, int] = {}
        self._init_colors()

    def _init_colors(self) -> None:
        """Creates one colour pair per category/UI element, degrading to attributes."""
        names = CATEGORIES + UI_ELEMENTS
        if not curses.has_colors():
            logging.warning("Terminal has no colour support. Using monochrome attributes.")
            self.colors = {name: curses.A_NORMAL for name in names}
            self.colors["status"] = curses.A_REVERSE
            self.colors["line_number"] = curses.A_DIM
            return

        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            logging.debug("use_default_colors() unsupported; background stays black")

        palette = dict(self.editor.config.get("colors", {}))
        palette.update(self.editor.state.highlighter.palette)
        basic = {
            "keyword": curses.COLOR_MAGENTA,
            "type": curses.COLOR_YELLOW,
            "operator": curses.COLOR_RED,
            "integer": curses.COLOR_BLUE,
            "string": curses.COLOR_CYAN,
            "line_number": curses.COLOR_YELLOW,
            "eof": curses.COLOR_BLUE,
        }
        use_256 = curses.COLORS >= 256

        for pair_id, name in enumerate(names, start=1):
            if use_256:
                fg = hex_to_xterm(palette.get(name, palette["default"]))
            else:
                fg = basic.get(name, curses.COLOR_WHITE)
            try:
                curses.init_pair(pair_id, fg, -1)
                self.colors[name] = curses.color_pair(pair_id)
            except curses.error as e:
                logging.warning(f"Could not initialise colour pair for '{name}': {e}")
                self.colors[name] = curses.A_NORMAL
        self.colors["status"] |= curses.A_REVERSE

    # ----- helpers -----

    def _safe_addstr(self, y: int, x: int, text: str, attr: int = 0) -> None:
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error as e:
            logging.debug(f"addstr({y}, {x}, {text[:20]!r}) failed: {e}")

    # ----- frame -----

    def draw(self) -> None:
        """Renders one frame: full repaint when dirty, gutter and status bar otherwise."""
        state = self.editor.state
        vp = state.viewport
        if vp.height < self.MIN_WINDOW_HEIGHT or vp.width < self.MIN_WINDOW_WIDTH:
            self._show_small_window_error()
            return

        if state.dirty:
            self.stdscr.erase()
            self._draw_text()
            self._draw_message_line()
            state.dirty = False

        self._draw_gutter()
        self._draw_status_bar()
        self._position_cursor()
        self.stdscr.refresh()

    def _show_small_window_error(self) -> None:
        self.stdscr.erase()
        self._safe_addstr(0, 0, truncate_to_width("Window too small", self.editor.state.viewport.width - 1))
        self.stdscr.refresh()

    def _draw_text(self) -> None:
        state = self.editor.state
        vp = state.viewport
        default_attr = self.colors.get("default", 0)

        for row in range(vp.text_height):
            index = vp.y + row
            if index >= len(state.lines):
                self._safe_addstr(row, GUTTER_WIDTH, EOF_MARKER, self.colors.get("eof", default_attr))
                continue

            segment = state.lines[index][vp.x:vp.x + vp.text_width]
            if not segment:
                continue
            try:
                tokens = state.highlighter.tokenize(segment)
            except Exception as e:
                raise RenderError(f"syntax highlighting has failed on line {index + 1}: {e}") from e

            col = GUTTER_WIDTH
            for token in tokens:
                text = truncate_to_width(token.text, vp.width - col)
                if not text:
                    break
                self._safe_addstr(row, col, text, self.colors.get(token.category, default_attr))
                col += string_width(text)

    def _draw_gutter(self) -> None:
        """Relative line numbers: distance from the cursor line, `->` on the line itself."""
        state = self.editor.state
        vp = state.viewport
        cursor_row = state.cursor.y - vp.y
        attr = self.colors.get("line_number", 0)
        for row in range(vp.text_height):
            if row == cursor_row:
                label = CURSOR_MARKER
            else:
                label = f"{min(abs(row - cursor_row), 99):02} "
            self._safe_addstr(row, 0, label, attr)

    def _draw_status_bar(self) -> None:
        """MODE file.py* [Python]              [1/2]  12:4 """
        editor = self.editor
        state = editor.state
        vp = state.viewport

        name = state.filename or "[No Name]"
        filetype = state.highlighter.filetype if state.highlighter else "Text only"
        left = f"{editor.mode.name} {name}{'*' if state.modified else ''} [{filetype}]"
        buffers = f" [{editor.buffers.current + 1}/{max(1, len(editor.buffers))}] "
        position = f" {state.cursor.y + 1}:{state.cursor.x + 1} "

        padding = vp.width - string_width(left) - len(buffers) - len(position)
        line = left + " " * max(0, padding) + buffers + position
        line = truncate_to_width(line, vp.width)
        self._safe_addstr(vp.height - 2, 0, line, self.colors.get("status", 0))

    def _draw_message_line(self) -> None:
        editor = self.editor
        vp = editor.state.viewport
        text = editor.command if editor.mode is Mode.COMMAND else editor.message
        # The bottom-right cell cannot be written without a curses error.
        self._safe_addstr(vp.height - 1, 0, truncate_to_width(text, vp.width - 1), self.colors.get("message", 0))

    def _position_cursor(self) -> None:
        editor = self.editor
        state = editor.state
        vp = state.viewport
        if editor.mode is Mode.COMMAND:
            y = vp.height - 1
            x = string_width(editor.command)
        else:
            y = state.cursor.y - vp.y
            x = GUTTER_WIDTH + string_width(state.current_line[vp.x:state.cursor.x])
        try:
            self.stdscr.move(y, min(x, vp.width - 1))
        except curses.error as e:
            logging.debug(f"Cursor move to ({y}, {x}) failed: {e}")
