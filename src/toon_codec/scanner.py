"""Tokenizer for TOON text.

The scanner is pull-based: each call to ``next_token`` consumes one token.
Which of ``,``, ``|`` and tab act as separators depends on the active
delimiter, which the parser sets once it has read the first array header.
"""

from __future__ import annotations

import math
from enum import Enum, auto
from typing import Any, NamedTuple

from .constants import KEYWORDS, STRUCTURAL_CHARS
from .errors import ParseError, UnexpectedEofError
from .string_utils import UNESCAPE_MAP
from .types import Delimiter

_DIGITS = frozenset("0123456789")
_NUMBER_CHARS = _DIGITS | frozenset(".eE+-")

_STRUCTURAL_KINDS = {
    "[": "LEFT_BRACKET",
    "]": "RIGHT_BRACKET",
    "{": "LEFT_BRACE",
    "}": "RIGHT_BRACE",
    ":": "COLON",
}


class TokenKind(Enum):
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COLON = auto()
    DASH = auto()
    NEWLINE = auto()
    STRING = auto()
    INTEGER = auto()
    NUMBER = auto()
    BOOL = auto()
    NULL = auto()
    DELIMITER = auto()
    EOF = auto()


# Tokens that can make up a bare scalar or key
SCALAR_KINDS = frozenset(
    {TokenKind.STRING, TokenKind.INTEGER, TokenKind.NUMBER, TokenKind.BOOL, TokenKind.NULL}
)


class Token(NamedTuple):
    kind: TokenKind
    value: Any = None
    start: int = 0
    """Offset of the first character in the source."""
    end: int = 0
    """Offset just past the last character."""
    quoted: bool = False

    def describe(self) -> str:
        if self.kind is TokenKind.STRING:
            return f"string {self.value!r}"
        if self.kind in SCALAR_KINDS:
            return f"{self.kind.name.lower()} {self.value!r}"
        if self.kind is TokenKind.DELIMITER:
            return f"delimiter {self.value.char!r}"
        return self.kind.name.lower().replace("_", " ")


class Scanner:
    """Convert TOON text into tokens on demand."""

    def __init__(
        self,
        text: str,
        delimiter: Delimiter | None = None,
        strict_escapes: bool = False,
    ):
        self.text = text
        self.length = len(text)
        self.pos = 0
        self.line = 1
        self.column = 1
        self.delimiter = delimiter
        self.strict_escapes = strict_escapes

        self.line_indent = 0
        """Leading spaces of the line holding the most recent token."""
        self.token_line = 1
        self.token_column = 0
        """Zero-based column of the most recent token."""
        self._line_start = 0

    def peek(self, offset: int = 0) -> str | None:
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.text[pos]

    def advance(self) -> str | None:
        if self.pos >= self.length:
            return None
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 1
            self._line_start = self.pos
        else:
            self.column += 1
        return ch

    def skip_spaces(self) -> None:
        while self.peek() == " ":
            self.advance()

    def count_leading_spaces(self) -> int:
        idx = self.pos
        while idx < self.length and self.text[idx] == " ":
            idx += 1
        return idx - self.pos

    def next_token(self) -> Token:
        """Scan and return the next token."""
        if self.pos == self._line_start:
            self.line_indent = self.count_leading_spaces()

        self.skip_spaces()

        self.token_line = self.line
        self.token_column = self.pos - self._line_start
        start = self.pos
        ch = self.peek()

        if ch is None:
            return Token(TokenKind.EOF, None, start, start)

        if ch == "\n" or (ch == "\r" and self.peek(1) == "\n"):
            if ch == "\r":
                self.advance()
            self.advance()
            return Token(TokenKind.NEWLINE, None, start, self.pos)

        if ch in STRUCTURAL_CHARS:
            self.advance()
            return Token(TokenKind[_STRUCTURAL_KINDS[ch]], ch, start, self.pos)

        if ch == "-":
            following = self.peek(1)
            if following is not None and following in _DIGITS:
                return self._scan_number(start)
            if following in (None, " ", "\n", "\r"):
                self.advance()
                return Token(TokenKind.DASH, "-", start, self.pos)
            return self._scan_unquoted(start)

        if self.delimiter is not None and ch == self.delimiter.char:
            self.advance()
            return Token(TokenKind.DELIMITER, self.delimiter, start, self.pos)

        if ch == '"':
            return self._scan_quoted(start)

        if ch in _DIGITS:
            return self._scan_number(start)

        return self._scan_unquoted(start)

    def _scan_quoted(self, start: int) -> Token:
        self.advance()
        chars: list[str] = []

        while True:
            ch = self.advance()
            if ch is None:
                raise UnexpectedEofError("unterminated string")
            if ch == '"':
                return Token(TokenKind.STRING, "".join(chars), start, self.pos, quoted=True)
            if ch != "\\":
                chars.append(ch)
                continue

            escaped = self.advance()
            if escaped is None:
                raise UnexpectedEofError("unterminated string")
            if escaped in UNESCAPE_MAP:
                chars.append(UNESCAPE_MAP[escaped])
            elif self.strict_escapes:
                raise ParseError(self.line, self.column - 2, f"Invalid escape sequence: \\{escaped}")
            else:
                chars.append("\\" + escaped)

    def _scan_unquoted(self, start: int) -> Token:
        # The first character is always consumed, so a lone '-' or an
        # inactive delimiter still yields text.
        self.advance()
        while True:
            ch = self.peek()
            if ch is None or ch in (" ", "\n", "\r") or ch in STRUCTURAL_CHARS:
                break
            if self.delimiter is not None and ch == self.delimiter.char:
                break
            self.advance()

        value = self.text[start : self.pos].rstrip(" ")
        if value in KEYWORDS:
            if value == "null":
                return Token(TokenKind.NULL, None, start, self.pos)
            return Token(TokenKind.BOOL, value == "true", start, self.pos)
        return Token(TokenKind.STRING, value, start, self.pos)

    def _scan_number(self, start: int) -> Token:
        self.advance()
        while self.peek() is not None and self.peek() in _NUMBER_CHARS:
            self.advance()
        raw = self.text[start : self.pos]
        return Token(*_classify_number(raw), start, self.pos)


def _classify_number(raw: str) -> tuple[TokenKind, Any]:
    """Classify a numeric-looking run, falling back to a string."""
    digits = raw[1:] if raw.startswith("-") else raw
    if len(digits) > 1 and digits[0] == "0" and digits[1] in _DIGITS:
        return TokenKind.STRING, raw

    if not any(c in ".eE" for c in raw):
        try:
            return TokenKind.INTEGER, int(raw)
        except ValueError:
            return TokenKind.STRING, raw

    try:
        value = float(raw)
    except ValueError:
        return TokenKind.STRING, raw
    if math.isinf(value) or math.isnan(value):
        return TokenKind.STRING, raw
    return TokenKind.NUMBER, value
