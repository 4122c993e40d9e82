# tedit/core/Commands.py
"""Command-line grammar (the text typed after `:`) and loop outcomes."""

from dataclasses import dataclass
from enum import Enum

from tedit.core.Errors import CommandError


class CommandKind(Enum):
    SAVE = "E"
    SAVE_AND_QUIT = "EQ"
    QUIT = "q"
    CLOSE_BUFFER = "qb"
    SEARCH = "/"
    OPEN = "O"


class Outcome(Enum):
    """What the main loop should do after an input event."""

    CONTINUE = "continue"
    QUIT = "quit"
    QUIT_AND_SAVE = "quit_and_save"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    argument: str = ""


_SIMPLE_COMMANDS = {
    ":E": CommandKind.SAVE,
    ":EQ": CommandKind.SAVE_AND_QUIT,
    ":q": CommandKind.QUIT,
    ":qb": CommandKind.CLOSE_BUFFER,
}


def parse(text: str) -> Command:
    """Parses a command line such as `:E`, `:/needle` or `:O notes.txt`.

    Raises:
        CommandError: `text` matches none of the known commands.
    """
    if text in _SIMPLE_COMMANDS:
        return Command(_SIMPLE_COMMANDS[text])
    if text.startswith(":/"):
        return Command(CommandKind.SEARCH, text[2:])
    if text.startswith(":O "):
        path = text[3:].strip()
        if path:
            return Command(CommandKind.OPEN, path)
    raise CommandError(text)
