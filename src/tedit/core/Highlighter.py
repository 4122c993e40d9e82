# tedit/core/Highlighter.py
"""Highlighter.py
==================
Per-file syntax classifier backed by Pygments.

A `Highlighter` is created for every opened file. It picks a Pygments lexer
from the file name, splits single lines into `Token(text, category)` pairs
and answers word-boundary queries for Shift+Left/Right jumps.

Categories are a small closed set (`CATEGORIES`); the renderer maps each one
to a colour from the validated `palette`. Per-filetype keyword, type and
operator lists from `[syntax.<filetype>]` take precedence over the lexer's
own classification.
"""

import functools
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.token import Token as PygmentsToken
from pygments.util import ClassNotFound

from tedit.core.Errors import ConfigError
from tedit.utils import utils

CATEGORIES = ("keyword", "type", "operator", "integer", "string", "default")

# Looked up from the most specific token type upward through `.parent`.
CATEGORY_MAP = {
    PygmentsToken.Keyword.Type: "type",
    PygmentsToken.Name.Class: "type",
    PygmentsToken.Name.Builtin: "type",
    PygmentsToken.Keyword: "keyword",
    PygmentsToken.Operator.Word: "keyword",
    PygmentsToken.Operator: "operator",
    PygmentsToken.Punctuation: "operator",
    PygmentsToken.Literal.Number: "integer",
    PygmentsToken.Literal.String: "string",
}

_WORD_RE = re.compile(r"\w+|[^\w\s]+")


@dataclass(frozen=True)
class Token:
    text: str
    category: str


class Highlighter:
    """Tokenizer and palette for one file type.

    Attributes:
        filename (str | None): The file this highlighter was built for.
        lexer (Lexer): Pygments lexer; `TextLexer` when nothing matches.
        filetype (str): Human readable language name shown in the status bar.
        syntax_key (str): Name of the `[syntax.<key>]` config table consulted.
        palette (dict[str, str]): Validated `#RRGGBB` colour per category.
    """

    def __init__(self, filename: Optional[str], config: dict[str, Any]) -> None:
        self.filename = filename
        self.lexer = self._determine_lexer(filename)
        self.filetype = self.lexer.name
        self.syntax_key = self.lexer.aliases[0] if self.lexer.aliases else "text"

        rules = config.get("syntax", {}).get(self.syntax_key, {})
        if not isinstance(rules, dict):
            raise ConfigError(f"[syntax.{self.syntax_key}] must be a table")
        self.keywords = self._word_list(rules, "keywords")
        self.types = self._word_list(rules, "types")
        self.operators = self._word_list(rules, "operators")
        self.palette = self._load_palette(config.get("colors", {}))
        logging.debug(
            f"Highlighter for {filename!r}: lexer={self.filetype}, "
            f"{len(self.keywords)} keywords, {len(self.types)} types"
        )

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> None:
        """Checks `[colors]` and every `[syntax.*]` table up front.

        Raises:
            ConfigError: A colour or keyword list is malformed.
        """
        colors = config.get("colors", {})
        cls._load_palette(colors)
        for value in colors.values():
            utils.hex_to_xterm(value)
        syntax = config.get("syntax", {})
        if not isinstance(syntax, dict):
            raise ConfigError("[syntax] must be a table")
        for key, rules in syntax.items():
            if not isinstance(rules, dict):
                raise ConfigError(f"[syntax.{key}] must be a table")
            for name in ("keywords", "types", "operators"):
                words = rules.get(name, [])
                if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
                    raise ConfigError(f"[syntax.{key}].{name} must be a list of strings")

    @staticmethod
    def _determine_lexer(filename: Optional[str]) -> Lexer:
        if filename:
            try:
                return get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
            except ClassNotFound:
                logging.debug(f"No lexer for {filename!r}, using plain text")
        return TextLexer(stripnl=False, ensurenl=False)

    def _word_list(self, rules: dict[str, Any], name: str) -> frozenset:
        words = rules.get(name, [])
        if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
            raise ConfigError(f"[syntax.{self.syntax_key}].{name} must be a list of strings")
        return frozenset(words)

    @staticmethod
    def _load_palette(colors: dict[str, Any]) -> dict[str, str]:
        if not isinstance(colors, dict):
            raise ConfigError("[colors] must be a table")
        palette = {}
        for category in CATEGORIES:
            value = colors.get(category, colors.get("default"))
            if value is None:
                raise ConfigError(f"No colour configured for '{category}'")
            utils.hex_to_xterm(value)  # raises ConfigError on a malformed value
            palette[category] = value
        return palette

    def _classify(self, ttype: Any, text: str) -> str:
        word = text.strip()
        if word:
            if word in self.keywords:
                return "keyword"
            if word in self.types:
                return "type"
            if word in self.operators:
                return "operator"
        current = ttype
        while current is not None:
            if current in CATEGORY_MAP:
                return CATEGORY_MAP[current]
            current = current.parent
        return "default"

    @functools.lru_cache(maxsize=4096)
    def tokenize(self, line: str) -> tuple[Token, ...]:
        """Splits `line` into classified tokens.

        The token texts always concatenate back to exactly `line`: whatever
        the lexer appends (a trailing newline, for instance) is cut off and
        anything it drops is returned as a trailing `default` token.
        """
        tokens: list[Token] = []
        consumed = 0
        for ttype, value in lex(line, self.lexer):
            if consumed >= len(line):
                break
            value = value[: len(line) - consumed]
            if not value:
                continue
            tokens.append(Token(value, self._classify(ttype, value)))
            consumed += len(value)
        if consumed < len(line):
            tokens.append(Token(line[consumed:], "default"))
        return tuple(tokens)

    def _word_starts(self, line: str) -> list[int]:
        starts = []
        offset = 0
        for token in self.tokenize(line):
            for match in _WORD_RE.finditer(token.text):
                start = offset + match.start()
                if not starts or starts[-1] != start:
                    starts.append(start)
            offset += len(token.text)
        return starts

    def word_boundary_forward(self, line: str, column: int) -> int:
        """Returns the start of the first word after `column`, or the line end."""
        for start in self._word_starts(line):
            if start > column:
                return start
        return len(line)

    def word_boundary_backward(self, line: str, column: int) -> int:
        """Returns the start of the word containing or preceding `column`."""
        result = 0
        for start in self._word_starts(line):
            if start >= column:
                break
            result = start
        return result
