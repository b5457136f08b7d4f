# json_scanner.py
# Character-level cursor over JSON text, plus the error type every
# parsing failure is reported with.
#
# =============================================================================
#  SCANNER DESIGN
# =============================================================================
#
# There is no token stream. The parser asks the scanner for one character
# at a time through peek()/advance() and lets the grammar decide what the
# character means. The scanner only knows about positions, whitespace and
# fixed keywords, so a failure can always be pinned to a single offset.
#
# Offsets are indexes into the Python str, i.e. counted in code points.
# Line and column are derived from the offset when an error is built.
# =============================================================================

from enum import Enum
from typing import Optional

# ---------------------------------------------------------------------------
# CONSTANTS
# ---------------------------------------------------------------------------
EOF = ""                          # peek() sentinel once the input is exhausted
WHITESPACE = frozenset(" \t\n\r") # the only insignificant characters JSON allows

# ---------------------------------------------------------------------------
# ERROR KINDS
# ---------------------------------------------------------------------------
class ErrorKind(Enum):
    """Closed set of reasons a parse can fail."""

    UNEXPECTED_EOF = "UnexpectedEof"
    UNEXPECTED_TOKEN = "UnexpectedToken"
    INVALID_ESCAPE = "InvalidEscape"
    CONTROL_CHARACTER_IN_STRING = "ControlCharacterInString"
    INVALID_NUMBER = "InvalidNumber"
    TRAILING_INPUT = "TrailingInput"
    NESTING_TOO_DEEP = "NestingTooDeep"

    def __str__(self) -> str:
        return self.value

# ---------------------------------------------------------------------------
# PARSE ERROR
# ---------------------------------------------------------------------------
class ParseError(SyntaxError):
    """
    A single parse failure, raised at the exact point it was detected.

    Subclasses SyntaxError so code written against the old validator, which
    raised plain SyntaxError, keeps catching it.

    Attributes:
        kind:     the ErrorKind.
        pos:      0-based character offset into the input.
        line:     1-based line of pos.
        column:   1-based column of pos.
        expected: what the grammar wanted (UnexpectedToken only).
        actual:   what was found instead (UnexpectedToken only).
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        pos: int,
        line: int,
        column: int,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        super().__init__(f"{message} at offset {pos}")
        self.kind = kind
        self.message = message
        self.pos = pos
        self.line = line
        self.column = column
        self.expected = expected
        self.actual = actual
        # SyntaxError's own location fields, read by tracebacks
        self.lineno = line
        self.offset = column

    def __str__(self) -> str:
        return self.msg

    def __reduce__(self):
        return (
            self.__class__,
            (self.kind, self.message, self.pos, self.line, self.column, self.expected, self.actual),
        )

    def describe(self) -> str:
        """One-line diagnostic used by the CLI."""
        return f"{self.kind} at line {self.line}, column {self.column}: {self}"


def line_and_column(text: str, pos: int):
    """Translate a character offset into a 1-based (line, column) pair."""
    line = text.count("\n", 0, pos) + 1
    column = pos - text.rfind("\n", 0, pos)
    return line, column


def describe_char(ch: str) -> str:
    if ch == EOF:
        return "end of input"
    if ch < " " or ch == "\x7f":
        return f"U+{ord(ch):04X}"
    return repr(ch)

# ---------------------------------------------------------------------------
# SCANNER
# ---------------------------------------------------------------------------
class Scanner:
    """
    Position-tracked cursor over one input string.

    A Scanner lives for exactly one parse call; pos is the only thing that
    changes after construction.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self._end = len(text)

    def at_end(self) -> bool:
        return self.pos >= self._end

    def peek(self) -> str:
        if self.pos < self._end:
            return self.text[self.pos]
        return EOF

    def advance(self) -> str:
        if self.pos >= self._end:
            raise self.error(ErrorKind.UNEXPECTED_EOF, "unexpected end of input")
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def skip_whitespace(self) -> None:
        text, pos, end = self.text, self.pos, self._end
        while pos < end and text[pos] in WHITESPACE:
            pos += 1
        self.pos = pos

    def expect(self, expected: str) -> None:
        if self.peek() != expected:
            raise self.unexpected(repr(expected))
        self.pos += 1

    def match_literal(self, word: str) -> None:
        """
        Consume the keyword `word` one character at a time.

        On divergence the characters already matched stay consumed and the
        error points at the first character that differs.
        """
        for expected in word:
            if self.peek() != expected:
                raise self.unexpected(f"{expected!r} of literal {word!r}")
            self.pos += 1

    # -----------------------------------------------------------------------
    # ERROR CONSTRUCTION
    # -----------------------------------------------------------------------
    def error(
        self,
        kind: ErrorKind,
        message: str,
        pos: Optional[int] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> ParseError:
        if pos is None:
            pos = self.pos
        line, column = line_and_column(self.text, pos)
        return ParseError(kind, message, pos, line, column, expected, actual)

    def unexpected(self, expected: str) -> ParseError:
        """
        UnexpectedToken for the character under the cursor, or UnexpectedEof
        when there is no character left.
        """
        if self.at_end():
            return self.error(
                ErrorKind.UNEXPECTED_EOF,
                f"unexpected end of input - expected {expected}",
                expected=expected,
            )
        actual = describe_char(self.peek())
        return self.error(
            ErrorKind.UNEXPECTED_TOKEN,
            f"unexpected character {actual} - expected {expected}",
            expected=expected,
            actual=actual,
        )
