# tedit/ui/KeyBinder.py
"""KeyBinder.py
==================
Translates raw curses input into `InputEvent` values for the editor.

Sources of input handled here:
- wide characters from `get_wch()` (printable text, Enter, Tab, Backspace);
- curses key codes (arrows, shifted arrows, KEY_RESIZE);
- extended key codes known only by name (`kLFT5`, `kRIT5`, ... for Ctrl+arrows);
- raw ESC sequences (`ESC [1;2C` and friends) when the terminal bypasses keypad
  translation.

A lone ESC becomes `Key.ESCAPE`. Every decoded event is traced to the
`tedit.keyevents` logger, which is only active when ``TEDIT_KEYTRACE`` is set.
"""

import curses
import logging
from typing import Optional

from tedit.core.EditingState import Direction
from tedit.core.Errors import InputError
from tedit.core.Events import InputEvent, Key
from tedit.utils.logging_config import KEY_LOGGER


_ARROW_LETTERS = {
    "A": Direction.UP,
    "B": Direction.DOWN,
    "C": Direction.RIGHT,
    "D": Direction.LEFT,
}

# xterm modifier parameter: 2 = Shift, 5 = Ctrl.
_MODIFIERS = {"2": Key.SHIFT_ARROW, "5": Key.CTRL_ARROW}

# Curses extended key names for modified arrows.
_KEYNAME_MAP = {
    b"kUP2": (Key.SHIFT_ARROW, Direction.UP),
    b"kDN2": (Key.SHIFT_ARROW, Direction.DOWN),
    b"kLFT2": (Key.SHIFT_ARROW, Direction.LEFT),
    b"kRIT2": (Key.SHIFT_ARROW, Direction.RIGHT),
    b"kUP5": (Key.CTRL_ARROW, Direction.UP),
    b"kDN5": (Key.CTRL_ARROW, Direction.DOWN),
    b"kLFT5": (Key.CTRL_ARROW, Direction.LEFT),
    b"kRIT5": (Key.CTRL_ARROW, Direction.RIGHT),
}


def _build_escape_map() -> dict[str, tuple[Key, Direction]]:
    mapping = {}
    for letter, direction in _ARROW_LETTERS.items():
        mapping[f"[{letter}"] = (Key.ARROW, direction)
        mapping[f"O{letter}"] = (Key.ARROW, direction)
        for modifier, key in _MODIFIERS.items():
            mapping[f"[1;{modifier}{letter}"] = (key, direction)
    return mapping


class KeyBinder:
    """Reads one key (or key sequence) at a time from a curses window.

    Attributes:
        stdscr (curses.window): Window input is read from.
        ESCAPE_SEQUENCE_MAP (dict): Escape sequences, without the leading ESC,
            mapped to `(Key, Direction)`.
    """

    ESCAPE_SEQUENCE_MAP: dict[str, tuple[Key, Direction]] = _build_escape_map()

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self.stdscr.keypad(True)
        self._code_map = {
            curses.KEY_UP: (Key.ARROW, Direction.UP),
            curses.KEY_DOWN: (Key.ARROW, Direction.DOWN),
            curses.KEY_LEFT: (Key.ARROW, Direction.LEFT),
            curses.KEY_RIGHT: (Key.ARROW, Direction.RIGHT),
            curses.KEY_SR: (Key.SHIFT_ARROW, Direction.UP),
            curses.KEY_SF: (Key.SHIFT_ARROW, Direction.DOWN),
            curses.KEY_SLEFT: (Key.SHIFT_ARROW, Direction.LEFT),
            curses.KEY_SRIGHT: (Key.SHIFT_ARROW, Direction.RIGHT),
        }

    def read_event(self) -> InputEvent:
        """Blocks until a key is available and decodes it.

        Raises:
            InputError: curses could not read from the terminal.
        """
        try:
            raw = self.stdscr.get_wch()
        except curses.error as e:
            raise InputError(f"terminal read failed: {e}") from e

        event = self.decode(raw)
        KEY_LOGGER.debug("raw=%r -> %s", raw, event)
        return event

    def decode(self, raw: "str | int") -> InputEvent:
        if isinstance(raw, int):
            return self._decode_code(raw)
        if raw == "\x1b":
            return self._decode_escape(self._read_escape_tail())
        if raw in ("\n", "\r"):
            return InputEvent(Key.ENTER)
        if raw == "\t":
            return InputEvent(Key.TAB)
        if raw in ("\x7f", "\x08"):
            return InputEvent(Key.BACKSPACE)
        if raw.isprintable():
            return InputEvent.char_event(raw)
        return InputEvent(Key.UNKNOWN, char=raw)

    def _decode_code(self, code: int) -> InputEvent:
        if code == curses.KEY_RESIZE:
            return InputEvent(Key.RESIZE, size=self.stdscr.getmaxyx())
        if code == curses.KEY_BACKSPACE:
            return InputEvent(Key.BACKSPACE)
        if code == curses.KEY_ENTER:
            return InputEvent(Key.ENTER)
        if code in self._code_map:
            key, direction = self._code_map[code]
            return InputEvent.arrow(direction, key)
        try:
            name = curses.keyname(code)
        except (ValueError, curses.error):
            name = b""
        if name in _KEYNAME_MAP:
            key, direction = _KEYNAME_MAP[name]
            return InputEvent.arrow(direction, key)
        logging.debug(f"KeyBinder: unmapped key code {code} ({name!r})")
        return InputEvent(Key.UNKNOWN)

    def _read_escape_tail(self) -> str:
        """Collects whatever follows an ESC without blocking."""
        seq = ""
        self.stdscr.nodelay(True)
        try:
            while True:
                try:
                    nxt = self.stdscr.get_wch()
                except curses.error:
                    break
                if not isinstance(nxt, str):
                    break
                seq += nxt
        finally:
            self.stdscr.nodelay(False)
        return seq

    def _decode_escape(self, seq: str) -> InputEvent:
        if not seq:
            return InputEvent(Key.ESCAPE)
        mapped: Optional[tuple[Key, Direction]] = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if mapped:
            key, direction = mapped
            return InputEvent.arrow(direction, key)
        logging.warning(f"KeyBinder: unknown escape sequence ESC + {seq!r}")
        return InputEvent(Key.UNKNOWN, char=seq)
