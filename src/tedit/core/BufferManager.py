# tedit/core/BufferManager.py
"""BufferManager.py
====================
Keeps one `BufferSnapshot` per open file and swaps them in and out of the
editor's single live `EditingState`.

Switching is copy-based: the live state is captured into the current
snapshot, the index moves, and the target snapshot is copied back into the
live state. Every switch captures the live state first, so unsaved edits are
never dropped when moving between buffers. A snapshot with unsaved edits
carries its own lines; a clean snapshot is refreshed from disk when it is
restored.
"""

import copy
import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from tedit.core.EditingState import Cursor, EditingState, MatchSet, Viewport
from tedit.core.Errors import FileIOError
from tedit.utils import fileio

if TYPE_CHECKING:
    from tedit.core.Editor import Editor
    from tedit.core.Highlighter import Highlighter


@dataclass
class BufferSnapshot:
    filename: Optional[str]
    cursor: Cursor
    viewport: Viewport
    matches: MatchSet
    clamp: int
    highlighter: Optional["Highlighter"]
    lines: List[str]
    modified: bool
    encoding: str

    @classmethod
    def capture(cls, state: EditingState) -> "BufferSnapshot":
        return cls(
            filename=state.filename,
            cursor=copy.copy(state.cursor),
            viewport=copy.copy(state.viewport),
            matches=copy.deepcopy(state.matches),
            clamp=state.clamp,
            highlighter=state.highlighter,
            lines=list(state.lines),
            modified=state.modified,
            encoding=state.encoding,
        )

    def restore(self, state: EditingState, lines: Optional[List[str]] = None) -> None:
        """Copies this snapshot into `state`, keeping the current terminal size."""
        state.filename = self.filename
        state.lines = list(lines if lines is not None else self.lines) or [""]
        state.cursor = copy.copy(self.cursor)
        state.viewport.x = self.viewport.x
        state.viewport.y = self.viewport.y
        state.matches = copy.deepcopy(self.matches)
        state.clamp = self.clamp
        state.highlighter = self.highlighter
        state.modified = self.modified
        state.encoding = self.encoding
        state.clamp_cursor()
        state.dirty = True


class BufferManager:
    """Ordered list of open buffers plus the index of the live one."""

    def __init__(self, editor: "Editor") -> None:
        self.editor = editor
        self.buffers: List[BufferSnapshot] = []
        self.current = 0

    def __len__(self) -> int:
        return len(self.buffers)

    def load_buffer(self) -> int:
        """Appends a snapshot of the live state without switching to it."""
        self.buffers.append(BufferSnapshot.capture(self.editor.state))
        logging.debug(f"Loaded buffer {len(self.buffers)}: {self.editor.state.filename!r}")
        return len(self.buffers) - 1

    def save_buffer(self) -> None:
        """Overwrites the current snapshot with the live state (no disk I/O)."""
        if self.buffers:
            self.buffers[self.current] = BufferSnapshot.capture(self.editor.state)

    def close_buffer(self) -> None:
        if len(self.buffers) <= 1:
            self.editor.log("Cannot close the last buffer")
            return
        closed = self.buffers.pop(self.current)
        self.current = max(self.current - 1, 0)
        logging.info(f"Closed buffer {closed.filename!r}")
        self.reload()

    def reload(self) -> None:
        """Copies the current snapshot into the live state.

        Clean buffers are re-read from disk so external changes show up; a
        buffer with unsaved edits keeps the lines stored in its snapshot.
        """
        snapshot = self.buffers[self.current]
        lines = None
        if not snapshot.modified and snapshot.filename and os.path.exists(snapshot.filename):
            try:
                lines, _encoding = fileio.read_lines(snapshot.filename)
            except FileIOError as e:
                logging.warning(f"Reload of {snapshot.filename!r} failed: {e}")
                self.editor.log(f"Failed to open `{snapshot.filename}`")
        snapshot.restore(self.editor.state, lines)

    def switch_to(self, index: int, persist: bool = True) -> None:
        """Makes `index` the live buffer, capturing the outgoing one first."""
        if not self.buffers:
            return
        index = min(max(index, 0), len(self.buffers) - 1)
        if persist:
            self.save_buffer()
        self.current = index
        self.reload()

    def next_buffer(self) -> None:
        self.switch_to(self.current + 1)

    def previous_buffer(self) -> None:
        self.switch_to(self.current - 1)
