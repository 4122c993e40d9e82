# tests/ui/test_keybinder.py
"""Unit tests for the `KeyBinder` input decoder.
=================================================

Covers the three input sources handled by `KeyBinder`:

- wide characters returned by `get_wch()` (text, Enter, Tab, Backspace);
- curses key codes, including names resolved through `curses.keyname`;
- raw escape sequences read without blocking after a lone ESC.

`curses` is patched inside `tedit.ui.KeyBinder` with a mock that carries
real integer key codes and a concrete `curses.error` type.
"""

from typing import Generator
from unittest.mock import MagicMock, call, patch

import pytest

from tedit.core.EditingState import Direction
from tedit.core.Errors import InputError
from tedit.core.Events import InputEvent, Key
from tedit.ui.KeyBinder import KeyBinder

KEY_CODES = {
    "KEY_DOWN": 258,
    "KEY_UP": 259,
    "KEY_LEFT": 260,
    "KEY_RIGHT": 261,
    "KEY_BACKSPACE": 263,
    "KEY_SF": 336,
    "KEY_SR": 337,
    "KEY_ENTER": 343,
    "KEY_SLEFT": 393,
    "KEY_SRIGHT": 402,
    "KEY_RESIZE": 410,
}

# Extended codes as reported by an xterm terminfo entry.
KEYNAMES = {
    545: b"kLFT5",
    560: b"kRIT5",
    567: b"kUP5",
    526: b"kDN5",
    999: b"kRIT2",
}


class CursesError(Exception):
    """Minimal replacement for `curses.error` used in tests."""


@pytest.fixture(autouse=True)
def mock_curses() -> Generator[MagicMock, None, None]:
    """Patch `curses` as seen by `tedit.ui.KeyBinder`.

    Yields:
        MagicMock: The patched module, with `keyname()` backed by `KEYNAMES`.
    """
    curses_mock = MagicMock()
    curses_mock.error = CursesError
    for name, val in KEY_CODES.items():
        setattr(curses_mock, name, val)

    def keyname(code: int) -> bytes:
        if code < 0:
            raise ValueError("invalid key number")
        return KEYNAMES.get(code, b"UNKNOWN")

    curses_mock.keyname.side_effect = keyname
    with patch("tedit.ui.KeyBinder.curses", curses_mock):
        yield curses_mock


@pytest.fixture
def binder(mock_stdscr: MagicMock) -> KeyBinder:
    return KeyBinder(mock_stdscr)


def test_keypad_enabled(binder: KeyBinder, mock_stdscr: MagicMock) -> None:
    mock_stdscr.keypad.assert_called_once_with(True)


class TestCharacters:
    @pytest.mark.parametrize("raw", ["a", "Z", ":", " ", "é", "漢"])
    def test_printable_is_char(self, binder: KeyBinder, raw: str) -> None:
        assert binder.decode(raw) == InputEvent.char_event(raw)

    @pytest.mark.parametrize(
        "raw, key",
        [
            ("\n", Key.ENTER),
            ("\r", Key.ENTER),
            ("\t", Key.TAB),
            ("\x7f", Key.BACKSPACE),
            ("\x08", Key.BACKSPACE),
        ],
    )
    def test_control_characters(self, binder: KeyBinder, raw: str, key: Key) -> None:
        assert binder.decode(raw).key is key

    def test_other_control_character_is_unknown(self, binder: KeyBinder) -> None:
        assert binder.decode("\x01").key is Key.UNKNOWN


class TestKeyCodes:
    @pytest.mark.parametrize(
        "code, key, direction",
        [
            (259, Key.ARROW, Direction.UP),
            (258, Key.ARROW, Direction.DOWN),
            (260, Key.ARROW, Direction.LEFT),
            (261, Key.ARROW, Direction.RIGHT),
            (337, Key.SHIFT_ARROW, Direction.UP),
            (336, Key.SHIFT_ARROW, Direction.DOWN),
            (393, Key.SHIFT_ARROW, Direction.LEFT),
            (402, Key.SHIFT_ARROW, Direction.RIGHT),
            (545, Key.CTRL_ARROW, Direction.LEFT),
            (560, Key.CTRL_ARROW, Direction.RIGHT),
            (999, Key.SHIFT_ARROW, Direction.RIGHT),
        ],
    )
    def test_arrow_codes(self, binder: KeyBinder, code: int, key: Key, direction: Direction) -> None:
        assert binder.decode(code) == InputEvent(key, direction=direction)

    def test_backspace_and_enter_codes(self, binder: KeyBinder) -> None:
        assert binder.decode(263).key is Key.BACKSPACE
        assert binder.decode(343).key is Key.ENTER

    def test_resize_reports_new_size(self, binder: KeyBinder, mock_stdscr: MagicMock) -> None:
        mock_stdscr.getmaxyx.return_value = (40, 100)
        assert binder.decode(410) == InputEvent(Key.RESIZE, size=(40, 100))

    def test_unmapped_codes_are_unknown(self, binder: KeyBinder) -> None:
        assert binder.decode(265).key is Key.UNKNOWN
        assert binder.decode(-1).key is Key.UNKNOWN


class TestEscapeSequences:
    def test_lone_escape(self, binder: KeyBinder, mock_stdscr: MagicMock) -> None:
        mock_stdscr.get_wch.side_effect = ["\x1b", CursesError()]
        assert binder.read_event() == InputEvent(Key.ESCAPE)
        assert mock_stdscr.nodelay.call_args_list == [call(True), call(False)]

    @pytest.mark.parametrize(
        "tail, key, direction",
        [
            ("[A", Key.ARROW, Direction.UP),
            ("OD", Key.ARROW, Direction.LEFT),
            ("[1;2B", Key.SHIFT_ARROW, Direction.DOWN),
            ("[1;2C", Key.SHIFT_ARROW, Direction.RIGHT),
            ("[1;5D", Key.CTRL_ARROW, Direction.LEFT),
            ("[1;5C", Key.CTRL_ARROW, Direction.RIGHT),
        ],
    )
    def test_known_sequences(
        self, binder: KeyBinder, mock_stdscr: MagicMock, tail: str, key: Key, direction: Direction
    ) -> None:
        mock_stdscr.get_wch.side_effect = ["\x1b", *tail, CursesError()]
        assert binder.read_event() == InputEvent(key, direction=direction)

    def test_tail_stops_at_key_code(self, binder: KeyBinder, mock_stdscr: MagicMock) -> None:
        mock_stdscr.get_wch.side_effect = ["\x1b", 259]
        assert binder.read_event() == InputEvent(Key.ESCAPE)

    def test_unknown_sequence(self, binder: KeyBinder, mock_stdscr: MagicMock) -> None:
        mock_stdscr.get_wch.side_effect = ["\x1b", "[", "Z", CursesError()]
        event = binder.read_event()
        assert event.key is Key.UNKNOWN
        assert event.char == "[Z"


def test_read_failure_raises_input_error(binder: KeyBinder, mock_stdscr: MagicMock) -> None:
    mock_stdscr.get_wch.side_effect = CursesError("no input")
    with pytest.raises(InputError):
        binder.read_event()


def test_escape_map_covers_all_arrows() -> None:
    sequences = KeyBinder.ESCAPE_SEQUENCE_MAP
    assert len(sequences) == 16
    assert sequences["[1;2A"] == (Key.SHIFT_ARROW, Direction.UP)
    assert sequences["OB"] == (Key.ARROW, Direction.DOWN)
