# tedit/core/Editor.py
"""Editor.py
=============
The modal input state machine of tedit.

`Editor` owns the live `EditingState`, the process-wide clipboard, the
buffer manager and the search engine. `handle_event()` interprets one decoded
`InputEvent` against the current `Mode` and returns an `Outcome`; the editor
never terminates the process itself. `run()` drives the blocking
render/read/handle loop and turns the final outcome into an exit status.

Modes:
    NORMAL  -- navigation; `v`/`V` select, `d`/`y` start a line selection,
               `i` inserts, `o` opens a line, `:` enters Command, `p` pastes,
               `n`/`b` step through search matches.
    INSERT  -- text entry until Escape.
    VISUAL  -- `y` copies and `d` copies then deletes the selection.
    COMMAND -- edits the `:` line; Enter executes it, Escape discards it.

The terminal (`DrawScreen`, `KeyBinder`) is passed to `run()`, so the state
machine can be driven directly in tests.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

import pyperclip

from tedit.core import Commands
from tedit.core.BufferManager import BufferManager
from tedit.core.Commands import CommandKind, Outcome
from tedit.core.EditingState import (
    Clipboard,
    Direction,
    EditingState,
    Mode,
    Viewport,
    VisualSelection,
)
from tedit.core.Errors import CommandError, FileIOError
from tedit.core.Events import InputEvent, Key
from tedit.core.Highlighter import Highlighter
from tedit.core.SearchEngine import SearchEngine
from tedit.utils import fileio

if TYPE_CHECKING:
    from tedit.ui.DrawScreen import DrawScreen
    from tedit.ui.KeyBinder import KeyBinder


class Editor:
    """Modal editor core.

    Attributes:
        config (dict): Merged application configuration.
        state (EditingState): The live document, cursor and viewport.
        mode (Mode): Active input mode.
        command (str): Command-line text while in Command mode, seeded with ":".
        message (str): Text shown in the message log row.
        clipboard (Clipboard): Last copied region, shared by all buffers.
        visual (VisualSelection | None): Anchor of the active Visual selection.
        buffers (BufferManager): Snapshots of every open file.
        search_engine (SearchEngine): Literal search over the live document.
        pyclip_available (bool): Copies are mirrored to the system clipboard.

    Raises:
        ConfigError: From the constructor, if colours or syntax tables are malformed.
    """

    def __init__(self, config: dict[str, Any], height: int = 24, width: int = 80) -> None:
        self.config = config
        editor_config = config.get("editor", {})
        self.tab_size = int(editor_config.get("tab_size", 4))
        self.paragraph_size = int(editor_config.get("paragraph_size", 47))

        Highlighter.validate_config(config)
        self.state = EditingState(Viewport(0, 0, height, width), Highlighter(None, config))
        self.mode = Mode.NORMAL
        self.command = ""
        self.message = ""
        self.clipboard = Clipboard()
        self.visual: Optional[VisualSelection] = None
        self.buffers = BufferManager(self)
        self.search_engine = SearchEngine(self)
        self.pyclip_available = self._check_pyclip_availability()
        logging.debug(f"Editor initialized ({height}x{width}, tab_size={self.tab_size})")

    def _check_pyclip_availability(self) -> bool:
        if not self.config.get("editor", {}).get("use_system_clipboard", False):
            logging.debug("System clipboard usage is disabled by editor configuration.")
            return False
        try:
            pyperclip.copy("")
        except pyperclip.PyperclipException as e:
            logging.warning(f"System clipboard unavailable via pyperclip: {e}. Using internal clipboard.")
            return False
        return True

    # ----- files -----

    def log(self, message: str) -> None:
        """Shows `message` in the message log row."""
        self.message = message
        self.state.dirty = True
        logging.info(message)

    def open_file(self, path: str) -> bool:
        """Loads `path` into the live state. On failure the state is left untouched."""
        try:
            lines, encoding = fileio.read_lines(path)
        except FileIOError as e:
            logging.warning(f"Open failed: {e}")
            self.log(f"Failed to open `{path}`")
            return False
        self.state.load_document(path, lines, encoding, Highlighter(path, self.config))
        logging.info(f"Opened '{path}' ({len(lines)} lines, {encoding})")
        return True

    def open_initial(self, path: str) -> None:
        """Opens the startup file, or an empty document named `path` if it cannot be read."""
        if not self.open_file(path):
            self.state.load_document(path, [""], "utf-8", Highlighter(path, self.config))
        self.buffers.load_buffer()

    def open_buffer(self, path: str) -> None:
        """`:O` -- opens `path` as a new buffer and switches to it."""
        self._leave_visual()
        self.buffers.save_buffer()
        if not self.open_file(path):
            return
        index = self.buffers.load_buffer()
        self.buffers.switch_to(index, persist=False)

    def save_file(self) -> bool:
        state = self.state
        if not state.filename:
            self.log("No file name")
            return False
        try:
            fileio.write_lines(state.filename, state.lines, state.encoding)
        except FileIOError as e:
            logging.error(f"Save failed: {e}")
            self.log(f"failed to write to `{state.filename}`")
            return False
        state.modified = False
        self.buffers.save_buffer()
        self.log(f"wrote to `{state.filename}`")
        return True

    # ----- clipboard -----

    def _copy_selection(self, delete: bool) -> None:
        if self.visual is None:
            return
        selection = self.state.selection_range(self.visual)
        self.clipboard = self.state.copy_range(selection)
        if self.pyclip_available:
            try:
                pyperclip.copy("\n".join(self.clipboard.lines))
            except pyperclip.PyperclipException as e:
                logging.warning(f"System clipboard copy failed: {e}")
        if delete:
            self.state.delete_range(selection)

    def _enter_mode(self, mode: Mode) -> None:
        logging.debug(f"Mode {self.mode.name} -> {mode.name}")
        self.mode = mode
        if mode is not Mode.VISUAL:
            self.visual = None
        if mode is not Mode.COMMAND:
            self.command = ""
        self.state.dirty = True

    def _leave_visual(self) -> None:
        """Drops a Visual selection; its anchor belongs to the current buffer."""
        if self.mode is Mode.VISUAL:
            self._enter_mode(Mode.NORMAL)

    def _start_visual(self, select_line: bool) -> None:
        cursor = self.state.cursor
        self._enter_mode(Mode.VISUAL)
        self.visual = VisualSelection(cursor.x, cursor.y, select_line)

    # ----- event dispatch -----

    def handle_event(self, event: InputEvent) -> Outcome:
        """Applies one input event and tells the caller whether to keep running."""
        if event.key is Key.RESIZE:
            self.state.resize(*event.size)
            return Outcome.CONTINUE
        if event.key is Key.UNKNOWN:
            return Outcome.CONTINUE

        if self.mode is Mode.COMMAND:
            return self._handle_command_key(event)

        if event.key is Key.SHIFT_ARROW:
            if event.direction in (Direction.LEFT, Direction.RIGHT):
                self.state.jump_word(event.direction)
            else:
                self.state.move_by_paragraph(event.direction, self.paragraph_size)
            return Outcome.CONTINUE
        if event.key is Key.CTRL_ARROW:
            self._leave_visual()
            if event.direction is Direction.LEFT:
                self.buffers.previous_buffer()
            elif event.direction is Direction.RIGHT:
                self.buffers.next_buffer()
            return Outcome.CONTINUE
        if event.key is Key.ARROW:
            self.state.move_cursor(event.direction)
            return Outcome.CONTINUE

        if self.mode is Mode.INSERT:
            self._handle_insert_key(event)
        elif self.mode is Mode.VISUAL:
            self._handle_visual_key(event)
        else:
            self._handle_normal_key(event)
        return Outcome.CONTINUE

    def _handle_normal_key(self, event: InputEvent) -> None:
        if event.key is not Key.CHAR:
            return
        char = event.char
        if char == "v":
            self._start_visual(select_line=False)
        elif char in ("V", "d", "y"):
            self._start_visual(select_line=True)
        elif char == "i":
            self._enter_mode(Mode.INSERT)
        elif char == "o":
            self.state.insert_line_break(split_at_cursor=False)
            self._enter_mode(Mode.INSERT)
        elif char == ":":
            self._enter_mode(Mode.COMMAND)
            self.command = ":"
        elif char == "p":
            self.state.paste_at(self.clipboard)
        elif char == "n":
            self.search_engine.next_match()
        elif char == "b":
            self.search_engine.previous_match()

    def _handle_visual_key(self, event: InputEvent) -> None:
        if event.key is Key.ESCAPE:
            self._enter_mode(Mode.NORMAL)
        elif event.key is Key.CHAR and event.char in ("y", "d"):
            self._copy_selection(delete=event.char == "d")
            self._enter_mode(Mode.NORMAL)

    def _handle_insert_key(self, event: InputEvent) -> None:
        if event.key is Key.ESCAPE:
            self._enter_mode(Mode.NORMAL)
        elif event.key is Key.CHAR:
            self.state.insert_char(event.char)
        elif event.key is Key.ENTER:
            self.state.insert_line_break(split_at_cursor=True)
        elif event.key is Key.BACKSPACE:
            self.state.remove_char_before()
        elif event.key is Key.TAB:
            self.state.insert_tab(self.tab_size)

    def _handle_command_key(self, event: InputEvent) -> Outcome:
        if event.key is Key.ESCAPE:
            self._enter_mode(Mode.NORMAL)
        elif event.key is Key.CHAR:
            self.command += event.char
            self.state.dirty = True
        elif event.key is Key.BACKSPACE:
            if len(self.command) > 1:
                self.command = self.command[:-1]
                self.state.dirty = True
        elif event.key is Key.ENTER:
            text = self.command
            self._enter_mode(Mode.NORMAL)
            return self.execute_command(text)
        return Outcome.CONTINUE

    def execute_command(self, text: str) -> Outcome:
        """Runs a parsed command line. Errors are reported in the message log."""
        try:
            command = Commands.parse(text)
        except CommandError as e:
            self.log(str(e))
            return Outcome.CONTINUE
        logging.debug(f"Executing {command}")

        if command.kind is CommandKind.SAVE:
            self.save_file()
        elif command.kind is CommandKind.SAVE_AND_QUIT:
            return Outcome.QUIT_AND_SAVE
        elif command.kind is CommandKind.QUIT:
            return Outcome.QUIT
        elif command.kind is CommandKind.CLOSE_BUFFER:
            self._leave_visual()
            self.buffers.close_buffer()
        elif command.kind is CommandKind.SEARCH:
            self.search_engine.search(command.argument)
        elif command.kind is CommandKind.OPEN:
            self.open_buffer(command.argument)
        return Outcome.CONTINUE

    # ----- main loop -----

    def run(self, screen: "DrawScreen", keys: "KeyBinder") -> int:
        """Blocking render/read/handle loop. Returns the process exit status.

        `RenderError` and `InputError` are not caught here; they end the loop.
        """
        logging.info("Entering main loop")
        while True:
            self.state.clamp_cursor()
            self.state.frame_cursor()
            screen.draw()
            outcome = self.handle_event(keys.read_event())
            if outcome is Outcome.QUIT:
                return 0
            if outcome is Outcome.QUIT_AND_SAVE:
                if self.save_file():
                    return 0
