# tests/stubs.py
"""Test stubs for tedit editor tests.

`StubEditor` carries only what `SearchEngine` and `BufferManager` touch on
their owning editor: the live state and the message log.
"""

from tedit.core.EditingState import EditingState, Viewport
from tedit.core.Highlighter import Highlighter
from tedit.utils.utils import DEFAULT_CONFIG


class StubEditor:
    """Minimal subset of the tedit `Editor`."""

    def __init__(self, lines: list[str] | None = None, height: int = 24, width: int = 80) -> None:
        self.state = EditingState(Viewport(0, 0, height, width), Highlighter(None, DEFAULT_CONFIG))
        self.state.lines = list(lines) if lines is not None else [""]
        self.state.dirty = False
        self.messages: list[str] = []

    def log(self, message: str) -> None:
        """Record a message-log entry.

        Args:
            message: The text that would be shown in the message row.
        """
        self.messages.append(message)
        self.state.dirty = True
