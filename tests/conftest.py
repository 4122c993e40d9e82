# tests/conftest.py
"""Pytest configuration with shared fixtures for the tedit editor tests."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from tedit.core.Editor import Editor
from tedit.core.EditingState import EditingState, Viewport
from tedit.core.Highlighter import Highlighter
from tedit.utils.utils import DEFAULT_CONFIG


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr.

    Returns:
        MagicMock: A mocked `stdscr` with terminal size set to (24, 80).
    """
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Provide a private copy of the built-in configuration.

    Returns:
        dict[str, Any]: Configuration safe to mutate inside a test.
    """
    return copy.deepcopy(DEFAULT_CONFIG)


# --- Model fixtures ---
@pytest.fixture
def text_highlighter(mock_config: dict[str, Any]) -> Highlighter:
    """Plain-text highlighter (no file name)."""
    return Highlighter(None, mock_config)


@pytest.fixture
def make_state(text_highlighter: Highlighter):
    """Factory building an `EditingState` from a list of lines.

    Returns:
        Callable: ``make_state(lines, x=0, y=0, height=24, width=80)``.
    """

    def _make(lines: list[str], x: int = 0, y: int = 0,
              height: int = 24, width: int = 80) -> EditingState:
        state = EditingState(Viewport(0, 0, height, width), text_highlighter)
        state.lines = list(lines)
        state.cursor.x = x
        state.cursor.y = y
        state.clamp = x
        state.dirty = False
        return state

    return _make


# --- Editor fixtures ---
@pytest.fixture
def editor(mock_config: dict[str, Any]) -> Editor:
    """Create a real `Editor` with an empty, unnamed document.

    Returns:
        Editor: Editor sized 24x80, in Normal mode.
    """
    return Editor(mock_config, 24, 80)


@pytest.fixture
def sample_text() -> list[str]:
    """Provide a sample code snippet as a list of lines."""
    return [
        "def hello_world():",
        "    # This is a comment",
        "    print('Hello, world!')",
        "    return True",
        "",
    ]


@pytest.fixture
def sample_file(tmp_path: Path, sample_text: list[str]) -> Path:
    """Write `sample_text` to a Python file in a temporary directory."""
    path = tmp_path / "hello.py"
    path.write_text("\n".join(sample_text) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def editor_with_file(editor: Editor, sample_file: Path) -> Editor:
    """Provide an `Editor` that has `sample_file` open as its only buffer."""
    editor.open_initial(str(sample_file))
    return editor
