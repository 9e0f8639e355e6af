"""Shell-like lexer for splitting command lines into tokens."""

import enum
from dataclasses import dataclass, field
from typing import Union

# Characters that separate tokens outside of quotes
SEPARATORS = " \t\n\r"


class ShellTokenException(Exception):
    """Base exception for shelltoken errors."""

    pass


class UnbalancedQuotes(ShellTokenException):
    """Raised when a quote is still open at the end of the input."""

    pass


class QuoteMode(enum.Enum):
    """Quoting context the scanner is currently in."""

    UNQUOTED = "unquoted"
    SINGLE = "single"
    DOUBLE = "double"


class NotStarted:
    """Marker for a position where no token has been opened yet."""

    def __repr__(self) -> str:
        return "NOT_STARTED"


NOT_STARTED = NotStarted()


@dataclass
class Started:
    """A token that has been opened. It may still be empty, e.g. after ``''``."""

    chars: list[str] = field(default_factory=list)

    def text(self) -> str:
        return "".join(self.chars)


TokenSlot = Union[NotStarted, Started]


class Scanner:
    """Single pass scanner holding the state of one tokenize() call."""

    def __init__(self, line: str):
        self.line = line
        self.tokens: list[str] = []
        self.token: TokenSlot = NOT_STARTED
        self.mode = QuoteMode.UNQUOTED
        self.escaped = False

    def _start(self) -> Started:
        if isinstance(self.token, NotStarted):
            self.token = Started()
        return self.token

    def _append(self, char: str) -> None:
        self.escaped = False
        self._start().chars.append(char)

    def _flush(self) -> None:
        if isinstance(self.token, Started):
            self.tokens.append(self.token.text())
            self.token = NOT_STARTED

    def _peek(self, pos: int) -> str:
        """Return the raw character after ``pos``, or "" past the end."""
        if pos + 1 < len(self.line):
            return self.line[pos + 1]
        return ""

    def _backslash(self, pos: int) -> None:
        self.escaped = True

        if self.mode is QuoteMode.SINGLE:
            # Backslashes are kept verbatim in single quotes
            self._append("\\")
        elif self.mode is QuoteMode.DOUBLE:
            # In double quotes only \" and \\ are escapes
            if self._peek(pos) not in ('"', "\\"):
                self._append("\\")

    def _quote(self, char: str, own: QuoteMode, other: QuoteMode) -> None:
        if self.mode is other:
            self._append(char)
            return

        self._start()
        if self.mode is own:
            self.mode = QuoteMode.UNQUOTED
        else:
            self.mode = own

    def _separator(self, char: str) -> None:
        if self.mode is QuoteMode.UNQUOTED:
            self._flush()
        else:
            self._append(char)

    def run(self) -> list[str]:
        """
        Scan the whole line.

        Returns:
            The tokens in scan order, always at least one

        Raises:
            UnbalancedQuotes: If a quote is left open at the end of the line
        """
        for pos, char in enumerate(self.line):
            if self.escaped:
                self._append(char)
            elif char == "\\":
                self._backslash(pos)
            elif char == '"':
                self._quote(char, QuoteMode.DOUBLE, QuoteMode.SINGLE)
            elif char == "'":
                self._quote(char, QuoteMode.SINGLE, QuoteMode.DOUBLE)
            elif char in SEPARATORS:
                self._separator(char)
            else:
                self._append(char)

        if isinstance(self.token, Started):
            self._flush()
        else:
            # Nothing was opened since the last separator
            self.tokens.append("")

        if self.mode is not QuoteMode.UNQUOTED:
            raise UnbalancedQuotes("unbalanced quotes")

        return self.tokens


def tokenize(line: str) -> list[str]:
    """
    Split a command line into tokens, handling quotes and escapes.

    Rules:
    - Space, tab, newline and carriage return separate tokens
    - Single quotes (') and double quotes (") group tokens and are removed
    - Outside quotes a backslash (\\) escapes the next character
    - Inside single quotes a backslash is literal
    - Inside double quotes a backslash only escapes " and \\
    - Empty quotes produce an empty token

    Args:
        line: The line to split

    Returns:
        List of parsed tokens, never empty; a blank line gives [""]

    Raises:
        UnbalancedQuotes: If quotes are unterminated
    """
    return Scanner(line.strip(SEPARATORS)).run()
