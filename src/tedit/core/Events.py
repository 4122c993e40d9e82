# tedit/core/Events.py
"""Decoded terminal input, as produced by `KeyBinder` and consumed by `Editor`."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tedit.core.EditingState import Direction


class Key(Enum):
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    TAB = "tab"
    ESCAPE = "escape"
    ARROW = "arrow"
    SHIFT_ARROW = "shift_arrow"
    CTRL_ARROW = "ctrl_arrow"
    RESIZE = "resize"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class InputEvent:
    key: Key
    char: str = ""
    direction: Optional[Direction] = None
    size: Optional[tuple[int, int]] = None

    @classmethod
    def char_event(cls, char: str) -> "InputEvent":
        return cls(Key.CHAR, char=char)

    @classmethod
    def arrow(cls, direction: Direction, key: Key = Key.ARROW) -> "InputEvent":
        return cls(key, direction=direction)
