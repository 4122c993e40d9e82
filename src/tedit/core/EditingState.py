# tedit/core/EditingState.py
"""EditingState.py
===================
The live document model of the editor: the lines of text, the logical
cursor, the sticky column and the viewport over the document.

Every editing primitive of the modal state machine lives here as a method
on `EditingState`. Primitives leave the state consistent:

- the document always has at least one line;
- `cursor.y` is a valid line index;
- `cursor.x` is within `[0, len(current line)]` after `clamp_cursor()`;
- `frame_cursor()` puts the cursor line inside the visible band.

Any change that the cheap refresh (gutter + status bar only) would not show
sets `dirty`, so the next `DrawScreen.draw()` repaints everything.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from tedit.core.Highlighter import Highlighter

# Status bar and message log.
RESERVED_ROWS = 2
# Relative line number column: two digits and a space, or "-> ".
GUTTER_WIDTH = 3


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    COMMAND = "command"


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Cursor:
    x: int = 0
    y: int = 0


@dataclass
class Viewport:
    """Visible window in terminal cells; `x`/`y` are the scroll offsets."""

    x: int = 0
    y: int = 0
    height: int = 24
    width: int = 80

    @property
    def text_height(self) -> int:
        return max(1, self.height - RESERVED_ROWS)

    @property
    def text_width(self) -> int:
        return max(1, self.width - GUTTER_WIDTH)


@dataclass
class VisualSelection:
    """Anchor captured when Visual mode was entered."""

    x: int
    y: int
    select_line: bool


@dataclass
class SelectionRange:
    """Half-open `[start, end)` span of lines or of columns on `line`.

    `direction` is DOWN when the anchor was before the cursor, meaning the
    cursor sits past the span and must walk back after a delete.
    """

    start: int
    end: int
    line_mode: bool
    direction: Direction
    line: int = 0


@dataclass
class Clipboard:
    lines: List[str] = field(default_factory=list)
    line_mode: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass
class MatchSet:
    matches: List[Cursor] = field(default_factory=list)
    index: int = 0

    def __bool__(self) -> bool:
        return bool(self.matches)

    def __len__(self) -> int:
        return len(self.matches)


class EditingState:
    """Document, cursor and viewport of the buffer currently being edited.

    Attributes:
        lines (list[str]): Document contents, never empty.
        cursor (Cursor): Logical cursor position in characters.
        viewport (Viewport): Scroll offsets and terminal size.
        clamp (int): Sticky column restored after vertical moves.
        matches (MatchSet): Results of the last search.
        highlighter (Highlighter | None): Tokenizer for the current file type.
        filename (str | None): Path the document is saved to.
        encoding (str): Encoding used to read and write the file.
        modified (bool): Unsaved changes exist.
        dirty (bool): The next draw must repaint the whole screen.
    """

    def __init__(self, viewport: Optional[Viewport] = None,
                 highlighter: Optional["Highlighter"] = None) -> None:
        self.lines: List[str] = [""]
        self.cursor = Cursor()
        self.viewport = viewport or Viewport()
        self.clamp = 0
        self.matches = MatchSet()
        self.highlighter = highlighter
        self.filename: Optional[str] = None
        self.encoding = "utf-8"
        self.modified = False
        self.dirty = True

    # ----- document lifecycle -----

    def load_document(self, filename: Optional[str], lines: List[str], encoding: str,
                      highlighter: "Highlighter") -> None:
        """Replaces the document wholesale and resets the position."""
        self.lines = list(lines) or [""]
        self.filename = filename
        self.encoding = encoding
        self.highlighter = highlighter
        self.modified = False
        self.reset_position()

    def reset_position(self) -> None:
        self.cursor = Cursor()
        self.clamp = 0
        self.viewport.x = 0
        self.viewport.y = 0
        self.matches = MatchSet()
        self.dirty = True

    def resize(self, height: int, width: int) -> None:
        self.viewport.height = height
        self.viewport.width = width
        self.dirty = True

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.y]

    def _set_x(self, x: int) -> None:
        self.cursor.x = x
        self.clamp = x

    def _touch(self) -> None:
        self.modified = True
        self.dirty = True

    # ----- cursor movement -----

    def move_cursor(self, direction: Direction) -> None:
        """Moves the cursor one step, scrolling the viewport by at most one line."""
        if direction is Direction.LEFT:
            if self.cursor.x > 0:
                self.cursor.x -= 1
            self.clamp = self.cursor.x
        elif direction is Direction.RIGHT:
            if self.cursor.x < len(self.current_line):
                self.cursor.x += 1
            self.clamp = self.cursor.x
        elif direction is Direction.UP:
            if self.cursor.y > 0:
                if self.cursor.y <= self.viewport.y:
                    self.viewport.y -= 1
                    self.dirty = True
                self.cursor.y -= 1
                self.clamp_cursor()
        elif direction is Direction.DOWN:
            if self.cursor.y < len(self.lines) - 1:
                if self.cursor.y >= self.viewport.y + self.viewport.text_height - 1:
                    self.viewport.y += 1
                    self.dirty = True
                self.cursor.y += 1
                self.clamp_cursor()

    def clamp_cursor(self) -> None:
        """Restores the sticky column, bounded by the current line length."""
        self.cursor.y = min(max(self.cursor.y, 0), len(self.lines) - 1)
        self.cursor.x = max(0, min(self.clamp, len(self.current_line)))

    def frame_cursor(self) -> None:
        """Scrolls the viewport so the cursor cell is visible."""
        vp = self.viewport
        if self.cursor.y < vp.y:
            vp.y = self.cursor.y
            self.dirty = True
        elif self.cursor.y >= vp.y + vp.text_height:
            vp.y = self.cursor.y - vp.text_height + 1
            self.dirty = True

        if self.cursor.x < vp.x:
            vp.x = self.cursor.x
            self.dirty = True
        elif self.cursor.x >= vp.x + vp.text_width:
            vp.x = self.cursor.x - vp.text_width + 1
            self.dirty = True

    def move_by_paragraph(self, direction: Direction, size: int) -> None:
        if direction is Direction.UP:
            self.cursor.y = max(0, self.cursor.y - size)
        elif direction is Direction.DOWN:
            self.cursor.y = min(len(self.lines) - 1, self.cursor.y + size)
        self.clamp_cursor()
        self.frame_cursor()

    def jump_word(self, direction: Direction) -> None:
        """Moves to the next/previous word start reported by the highlighter."""
        if self.highlighter is None:
            return
        line = self.current_line
        if direction is Direction.RIGHT:
            self._set_x(self.highlighter.word_boundary_forward(line, self.cursor.x))
        elif direction is Direction.LEFT:
            self._set_x(self.highlighter.word_boundary_backward(line, self.cursor.x))

    # ----- text mutation -----

    def insert_char(self, char: str) -> None:
        line = self.current_line
        x = self.cursor.x
        self.lines[self.cursor.y] = line[:x] + char + line[x:]
        self._set_x(x + 1)
        self._touch()

    def insert_tab(self, tab_size: int) -> None:
        for _ in range(tab_size):
            self.insert_char(" ")

    def remove_char_before(self) -> None:
        """Backspace: deletes left of the cursor or joins onto the line above."""
        y, x = self.cursor.y, self.cursor.x
        if x > 0:
            line = self.current_line
            self.lines[y] = line[:x - 1] + line[x:]
            self._set_x(x - 1)
        elif y > 0:
            join_at = len(self.lines[y - 1])
            self.lines[y - 1] += self.lines[y]
            del self.lines[y]
            self.move_cursor(Direction.UP)
            self._set_x(join_at)
        else:
            return
        self._touch()

    def insert_line_break(self, split_at_cursor: bool) -> None:
        """Enter splits the line at the cursor; "open line" adds an indented line below."""
        y = self.cursor.y
        line = self.current_line
        if split_at_cursor:
            self.lines[y] = line[:self.cursor.x]
            self.lines.insert(y + 1, line[self.cursor.x:])
            new_x = 0
        else:
            new_x = len(line) - len(line.lstrip(" "))
            self.lines.insert(y + 1, " " * new_x)
        self.move_cursor(Direction.DOWN)
        self._set_x(new_x)
        self._touch()

    # ----- selections, clipboard -----

    def selection_range(self, visual: VisualSelection) -> SelectionRange:
        """Normalizes the anchor and the live cursor into a half-open range."""
        if visual.select_line:
            anchor, here = visual.y, self.cursor.y
            limit = len(self.lines)
        else:
            anchor, here = visual.x, self.cursor.x
            limit = len(self.current_line)

        if anchor < here:
            start, end, direction = anchor, here, Direction.DOWN
        elif anchor == here:
            start, end, direction = here, here + 1, Direction.UP
        else:
            start, end, direction = here, anchor, Direction.UP

        start = min(start, limit)
        end = min(end, limit)
        return SelectionRange(start, end, visual.select_line, direction, self.cursor.y)

    def copy_range(self, selection: SelectionRange) -> Clipboard:
        if selection.line_mode:
            return Clipboard(self.lines[selection.start:selection.end], True)
        line = self.lines[selection.line]
        return Clipboard([line[selection.start:selection.end]], False)

    def delete_range(self, selection: SelectionRange) -> None:
        """Removes the span and leaves the cursor at its start."""
        count = selection.end - selection.start
        if count <= 0:
            return
        if selection.line_mode:
            del self.lines[selection.start:selection.end]
            if not self.lines:
                self.lines = [""]
            if selection.direction is Direction.DOWN:
                self.cursor.y -= count
            self.cursor.y = min(self.cursor.y, len(self.lines) - 1)
            self.clamp_cursor()
        else:
            line = self.lines[selection.line]
            self.lines[selection.line] = line[:selection.start] + line[selection.end:]
            x = self.cursor.x - count if selection.direction is Direction.DOWN else self.cursor.x
            self._set_x(min(x, len(self.lines[selection.line])))
        logging.debug(f"Deleted {count} {'lines' if selection.line_mode else 'chars'}")
        self._touch()

    def paste_at(self, clipboard: Clipboard) -> None:
        """Line clipboards go below the cursor line; character spans go at the cursor."""
        if clipboard.is_empty:
            return
        if clipboard.line_mode:
            y = self.cursor.y + 1
            self.lines[y:y] = list(clipboard.lines)
            self.move_cursor(Direction.DOWN)
            self._set_x(0)
            self._touch()
        else:
            for char in clipboard.lines[0]:
                self.insert_char(char)
