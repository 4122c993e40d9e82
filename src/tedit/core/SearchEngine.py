# tedit/core/SearchEngine.py
"""Literal substring search over the live document.

A search records at most one match per line (the first occurrence) in line
order. The resulting `MatchSet` belongs to the editing state, so it is saved
and restored together with the buffer it was run in.
"""

import logging
from typing import TYPE_CHECKING

from tedit.core.EditingState import Cursor, MatchSet

if TYPE_CHECKING:
    from tedit.core.Editor import Editor


class SearchEngine:
    def __init__(self, editor: "Editor") -> None:
        self.editor = editor

    def search(self, query: str) -> None:
        """Rebuilds the match set for `query` and jumps to the first match."""
        state = self.editor.state
        if not query:
            state.matches = MatchSet()
            self.editor.log("Empty search pattern")
            return

        found = []
        for y, line in enumerate(state.lines):
            x = line.find(query)
            if x != -1:
                found.append(Cursor(x, y))
        state.matches = MatchSet(found, 0)
        logging.debug(f"Search for {query!r}: {len(found)} matches")

        if not found:
            self.editor.log(f"No matches for `{query}`")
            return
        self.goto_match()

    def next_match(self) -> None:
        matches = self.editor.state.matches
        if not matches:
            return
        matches.index = min(matches.index + 1, len(matches) - 1)
        self.goto_match()

    def previous_match(self) -> None:
        matches = self.editor.state.matches
        if not matches:
            return
        matches.index = max(matches.index - 1, 0)
        self.goto_match()

    def goto_match(self) -> None:
        """Moves the cursor to the current match and scrolls its line to the top."""
        state = self.editor.state
        match = state.matches.matches[state.matches.index]
        state.cursor = Cursor(match.x, match.y)
        state.clamp = match.x
        state.viewport.y = match.y
        state.dirty = True
