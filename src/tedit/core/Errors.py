# tedit/core/Errors.py
"""Errors.py
=============
Exception hierarchy shared by the tedit core, UI and utility layers.

Every error raised on purpose by tedit derives from `EditorError`, so the entry
point can tell expected failures (bad config, unreadable terminal) apart
from programming errors.

Policy:
    - `ConfigError` while building the editor aborts the process.
    - `FileIOError` on open degrades to an empty buffer; on save it is shown
      in the message log and editing continues.
    - `RenderError` and `InputError` escape the main loop and terminate it.
    - `CommandError` never leaves the command-line handler.
"""


class EditorError(Exception):
    """Base class for every error raised by tedit."""


class FileIOError(EditorError):
    """A file could not be opened, created or written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(EditorError):
    """The configuration (colours, syntax tables, TOML file) is malformed."""


class RenderError(EditorError):
    """The highlighter failed while the screen was being redrawn."""


class CommandError(EditorError):
    """A command-line entry could not be understood."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Unknown command: `{command}`")
        self.command = command


class InputError(EditorError):
    """Reading from the terminal failed."""
