# src/tedit/core/__init__.py
"""Public facade for tedit.core: re-export main classes from CamelCase modules.

Errors and EditingState are imported first; the utility modules depend on
them, and the later modules depend on the utility modules.
"""

from .Errors import (  # noqa: F401
    CommandError,
    ConfigError,
    EditorError,
    FileIOError,
    InputError,
    RenderError,
)
from .EditingState import EditingState, Mode  # noqa: F401
from .Events import InputEvent, Key  # noqa: F401
from .Highlighter import Highlighter  # noqa: F401
from .SearchEngine import SearchEngine  # noqa: F401
from .BufferManager import BufferManager, BufferSnapshot  # noqa: F401
from .Editor import Editor  # noqa: F401


__all__ = [
    "BufferManager",
    "BufferSnapshot",
    "CommandError",
    "ConfigError",
    "EditingState",
    "Editor",
    "EditorError",
    "FileIOError",
    "Highlighter",
    "InputError",
    "InputEvent",
    "Key",
    "Mode",
    "RenderError",
    "SearchEngine",
]
