#!/usr/bin/env python3
# tedit/main.py
"""
tedit Main Entry Point
======================

`start()` is the console-script entry point. It:
1) Checks the command line: exactly one FILE argument is expected.
2) Loads the configuration and initializes logging before anything else.
3) Builds the editor and opens FILE (an unreadable file gives an empty buffer).
4) Runs the editor inside `curses.wrapper`, which restores the terminal even
   when the loop fails.
5) Exits with the status returned by the editor loop.

Construction failures and errors escaping the loop are printed to stderr and
end the process with status 1.
"""

import curses
import locale
import logging
import os
import sys

from tedit.core.Editor import Editor
from tedit.core.Errors import EditorError
from tedit.ui.DrawScreen import DrawScreen
from tedit.ui.KeyBinder import KeyBinder
from tedit.utils.logging_config import setup_logging
from tedit.utils.utils import load_config

logger = logging.getLogger("tedit")

USAGE = "Usage: tedit [FILE]"


def main_app_runner(stdscr: "curses.window", editor: Editor) -> int:
    """
    Target for `curses.wrapper`. Puts the terminal in raw mode and runs the editor.

    Returns:
        int: Exit status chosen by the editor loop.
    """
    # Keep lone ESC responsive; modified arrows arrive as ESC sequences.
    try:
        curses.set_escdelay(25)
    except AttributeError:
        os.environ.setdefault("ESCDELAY", "25")
    curses.raw()
    curses.noecho()

    height, width = stdscr.getmaxyx()
    editor.state.resize(height, width)
    screen = DrawScreen(editor, stdscr)
    keys = KeyBinder(stdscr)
    return editor.run(screen, keys)


def start() -> None:
    """
    Parses argv, builds the editor and runs it via `curses.wrapper`.
    """
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)
    file_to_open = sys.argv[1]

    try:
        config = load_config()
        setup_logging(config)
        editor = Editor(config)
    except EditorError as e:
        print(f"Failed to create new editor instance -> `{e}`", file=sys.stderr)
        sys.exit(1)

    logger.info("tedit starting up...")
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    editor.open_initial(file_to_open)

    try:
        status = curses.wrapper(main_app_runner, editor)
    except Exception as e:
        logger.critical("Main loop terminated by an error.", exc_info=True)
        print(f"Failed to run main loop: `{e}`", file=sys.stderr)
        sys.exit(1)

    logger.info(f"tedit shut down with status {status}.")
    sys.exit(status)


if __name__ == "__main__":
    start()
