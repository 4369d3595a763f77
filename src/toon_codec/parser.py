"""Recursive-descent parser over the scanner's token stream.

Nesting follows indentation: a block is every following line indented
deeper than the line that opened it, and its level is fixed by its first
line. Array headers decide the array shape; a field list means tabular
rows, values on the header line mean an inline primitive array, and
otherwise the body is a dash list.
"""

from __future__ import annotations

import logging
import re

from .constants import DELIMITER_CHARS, MAX_DEPTH
from .errors import (
    InvalidCharacterError,
    InvalidDelimiterError,
    InvalidStructureError,
    ParseError,
    UnexpectedEofError,
)
from .scanner import SCALAR_KINDS, Scanner, Token, TokenKind
from .types import ArrayHeaderInfo, DecodeOptions, Delimiter, JsonValue
from .validation import validate_depth, validate_field_name, validate_length

logger = logging.getLogger(__name__)

# Length written with a marker ("#3"), possibly followed by an inactive delimiter
LENGTH_PATTERN = re.compile(r"(?P<marker>[^0-9])?(?P<digits>[0-9]+)(?P<delim>[,|\t])?")

_LINE_END = (TokenKind.NEWLINE, TokenKind.EOF)
_ENTRY_START = (TokenKind.COLON, TokenKind.LEFT_BRACKET)


class Parser:
    """Parse one TOON document. Create a new instance per decode call."""

    def __init__(self, text: str, options: DecodeOptions):
        self.options = options
        self.delimiter = options.delimiter
        self.scanner = Scanner(text, options.delimiter, strict_escapes=options.strict)
        self.token = self.scanner.next_token()

    @property
    def indent(self) -> int:
        """Indentation of the line holding the current token."""
        return self.scanner.line_indent

    def parse(self) -> JsonValue:
        """Parse the whole document and return its root value."""
        self._skip_newlines()

        if self.token.kind is TokenKind.EOF:
            return {}

        base = self.indent
        if self.token.kind is TokenKind.LEFT_BRACKET:
            value = self._parse_array(0, base)
        elif self.token.kind is TokenKind.DASH:
            raise self._error("List item outside of an array")
        else:
            run = self._collect_run()
            if self.token.kind in _ENTRY_START:
                result = {self._key_from_run(run): self._parse_entry_value(0, base)}
                value = self._parse_object(0, -1, result=result, base=base)
            else:
                value = self._scalar_from_run(run)
                self._expect_line_end()

        self._skip_newlines()
        if self.token.kind is not TokenKind.EOF:
            raise self._error(f"Unexpected content after the document root: {self.token.describe()}")
        return value

    # Token helpers

    def _advance(self) -> Token:
        token = self.token
        self.token = self.scanner.next_token()
        return token

    def _error(self, message: str) -> ParseError:
        return ParseError(self.scanner.token_line, self.scanner.token_column + 1, message)

    def _expect(self, kind: TokenKind, what: str) -> Token:
        if self.token.kind is kind:
            return self._advance()
        if self.token.kind is TokenKind.EOF:
            raise UnexpectedEofError(f"expected {what}")
        raise self._error(f"Expected {what}, found {self.token.describe()}")

    def _expect_line_end(self) -> None:
        if self.token.kind not in _LINE_END:
            raise self._error(f"Expected end of line, found {self.token.describe()}")

    def _skip_newlines(self) -> None:
        while self.token.kind is TokenKind.NEWLINE:
            self._advance()
        if self.options.strict and self.token.kind is not TokenKind.EOF:
            unit = self.options.indent
            if self.indent % unit:
                raise ParseError(
                    self.scanner.token_line,
                    1,
                    f"Indentation of {self.indent} spaces is not a multiple of {unit}",
                )

    def _collect_run(self, stop_at_delimiter: bool = False, allow_dash: bool = False) -> list[Token]:
        """Collect the tokens of one bare key or scalar on the current line."""
        run: list[Token] = []
        while True:
            kind = self.token.kind
            if kind in SCALAR_KINDS:
                pass
            elif kind is TokenKind.DASH and (run or allow_dash):
                pass
            elif kind is TokenKind.DELIMITER and not stop_at_delimiter:
                pass
            else:
                return run
            run.append(self._advance())

    def _run_text(self, run: list[Token]) -> str:
        if len(run) == 1 and run[0].quoted:
            return run[0].value
        for token in run:
            if token.quoted:
                raise ParseError(
                    self.scanner.token_line,
                    self._column_of(token),
                    "A quoted string must stand alone",
                )
        return self.scanner.text[run[0].start : run[-1].end]

    def _column_of(self, token: Token) -> int:
        line_start = self.scanner.text.rfind("\n", 0, token.start) + 1
        return token.start - line_start + 1

    def _key_from_run(self, run: list[Token]) -> str:
        if not run:
            raise self._error(f"Expected key, found {self.token.describe()}")
        return self._run_text(run)

    def _scalar_from_run(self, run: list[Token], empty: JsonValue | None = None) -> JsonValue:
        if not run:
            if empty is not None:
                return empty
            if self.token.kind is TokenKind.EOF:
                raise UnexpectedEofError("expected value")
            raise self._error(f"Expected value, found {self.token.describe()}")
        if len(run) > 1:
            return self._run_text(run)
        return self._coerce(run[0])

    def _coerce(self, token: Token) -> JsonValue:
        # Typing is decided by the scanner. Quoted text, bare text it kept
        # as a string ("007", "1e999") and multi-token runs are never
        # converted, whatever coerce_types says.
        if token.kind not in SCALAR_KINDS:
            return self.scanner.text[token.start : token.end]
        return token.value

    # Objects

    def _parse_object(
        self,
        depth: int,
        parent_indent: int,
        result: dict | None = None,
        base: int | None = None,
    ) -> dict:
        """Parse key/value lines indented deeper than parent_indent."""
        validate_depth(depth, MAX_DEPTH)
        obj = {} if result is None else result

        while True:
            self._skip_newlines()
            if self.token.kind is TokenKind.EOF:
                break
            indent = self.indent
            if indent <= parent_indent:
                break
            if base is None:
                base = indent
            elif indent > base:
                raise self._error(f"Unexpected indentation: expected {base} spaces, found {indent}")
            elif indent < base:
                break

            if self.token.kind is TokenKind.DASH:
                raise self._error("Unexpected list item where a key was expected")
            run = self._collect_run()
            if self.token.kind not in _ENTRY_START:
                if self.token.kind is TokenKind.EOF:
                    raise UnexpectedEofError("expected ':' after key")
                raise self._error(f"Expected ':' or '[' after key, found {self.token.describe()}")
            key = self._key_from_run(run)
            obj[key] = self._parse_entry_value(depth, indent)

        return obj

    def _parse_entry_value(self, depth: int, anchor: int) -> JsonValue:
        """Parse what follows a key: an array header, a nested object, or a scalar."""
        if self.token.kind is TokenKind.LEFT_BRACKET:
            return self._parse_array(depth + 1, anchor)

        self._expect(TokenKind.COLON, "':'")
        if self.token.kind in _LINE_END:
            return self._parse_object(depth + 1, anchor)

        value = self._scalar_from_run(self._collect_run(allow_dash=True))
        self._expect_line_end()
        return value

    # Arrays

    def _parse_array(self, depth: int, anchor: int) -> list:
        validate_depth(depth, MAX_DEPTH)
        header = self._parse_array_header(anchor)

        if header.length == 0 and self.token.kind in _LINE_END:
            items: list = []
        elif header.is_tabular:
            items = self._parse_tabular_rows(header, depth)
        elif self.token.kind not in _LINE_END:
            items = self._parse_delimited_values()
        else:
            items = self._parse_list_items(header, depth)

        if self.options.strict:
            validate_length(header.length, len(items))
        return items

    def _parse_array_header(self, anchor: int) -> ArrayHeaderInfo:
        self._expect(TokenKind.LEFT_BRACKET, "'['")
        length, declared = self._parse_array_length()

        token = self.token
        if declared is None and token.kind is TokenKind.DELIMITER:
            declared = token.value
            self._advance()
        elif declared is None and token.kind is TokenKind.STRING and not token.quoted:
            if token.value not in DELIMITER_CHARS:
                raise InvalidCharacterError(token.value[0], token.start)
            declared = Delimiter(token.value)
            self._advance()

        if self.token.kind is not TokenKind.RIGHT_BRACKET:
            self._expect(TokenKind.RIGHT_BRACKET, "']'")
        # Resolve before scanning past ']' so the field list and values
        # are tokenized with the right delimiter.
        self._resolve_delimiter(declared)
        self._advance()

        fields = None
        if self.token.kind is TokenKind.LEFT_BRACE:
            fields = self._parse_field_list()
        self._expect(TokenKind.COLON, "':'")
        return ArrayHeaderInfo(length=length, delimiter=declared, fields=fields, line_indent=anchor)

    def _parse_array_length(self) -> tuple[int, Delimiter | None]:
        token = self.token
        if token.kind is TokenKind.INTEGER and token.value >= 0:
            self._advance()
            return token.value, None
        if token.kind is TokenKind.STRING and not token.quoted:
            match = LENGTH_PATTERN.fullmatch(token.value)
            if match:
                self._advance()
                delim = match.group("delim")
                return int(match.group("digits")), Delimiter(delim) if delim else None
        if token.kind is TokenKind.EOF:
            raise UnexpectedEofError("expected array length")
        raise self._error(f"Expected array length, found {token.describe()}")

    def _resolve_delimiter(self, declared: Delimiter | None) -> None:
        if self.delimiter is None:
            self.delimiter = declared or Delimiter.COMMA
            self.scanner.delimiter = self.delimiter
            logger.debug("Active delimiter resolved to %r", self.delimiter.char)
        elif declared is not None and declared is not self.delimiter and self.options.strict:
            raise InvalidDelimiterError(
                f"array header declares {declared.char!r} but the active delimiter is "
                f"{self.delimiter.char!r}"
            )

    def _parse_field_list(self) -> list[str]:
        self._expect(TokenKind.LEFT_BRACE, "'{'")
        fields: list[str] = []
        while self.token.kind is not TokenKind.RIGHT_BRACE or fields:
            run = self._collect_run(stop_at_delimiter=True)
            name = self._run_text(run) if run else ""
            if self.options.strict:
                validate_field_name(name)
            fields.append(name)
            if self.token.kind is not TokenKind.DELIMITER:
                break
            self._advance()
        self._expect(TokenKind.RIGHT_BRACE, "'}'")
        if not fields:
            raise InvalidStructureError("Tabular array header has no fields")
        return fields

    def _parse_delimited_values(self) -> list:
        """Parse delimiter-separated primitives up to the end of the line."""
        values = [self._scalar_from_run(self._collect_run(True, True), empty="")]
        while self.token.kind is TokenKind.DELIMITER:
            self._advance()
            values.append(self._scalar_from_run(self._collect_run(True, True), empty=""))
        if self.token.kind not in _LINE_END:
            raise self._error(f"Expected delimiter {self.delimiter.char!r}, found {self.token.describe()}")
        return values

    def _parse_tabular_rows(self, header: ArrayHeaderInfo, depth: int) -> list[dict]:
        self._expect_line_end()
        validate_depth(depth + 1, MAX_DEPTH)
        fields = header.fields
        rows: list[dict] = []
        row_indent = None

        while True:
            self._skip_newlines()
            if self.token.kind is TokenKind.EOF:
                break
            indent = self.indent
            if indent <= header.line_indent:
                break
            if row_indent is None:
                row_indent = indent
            elif indent > row_indent:
                raise self._error(f"Unexpected indentation: expected {row_indent} spaces, found {indent}")
            elif indent < row_indent:
                break

            line = self.scanner.token_line
            values = self._parse_delimited_values()
            if len(values) != len(fields):
                raise ParseError(
                    line,
                    indent + 1,
                    f"Expected {len(fields)} values in tabular row, found {len(values)}",
                )
            rows.append(dict(zip(fields, values)))

        return rows

    def _parse_list_items(self, header: ArrayHeaderInfo, depth: int) -> list:
        items: list = []
        item_indent = None

        while True:
            self._skip_newlines()
            if self.token.kind is TokenKind.EOF:
                break
            indent = self.indent
            if indent <= header.line_indent:
                break
            if item_indent is None:
                item_indent = indent
            elif indent > item_indent:
                raise self._error(f"Unexpected indentation: expected {item_indent} spaces, found {indent}")
            elif indent < item_indent:
                break

            self._expect(TokenKind.DASH, "'-' list item")
            items.append(self._parse_list_item(depth + 1, indent, indent - header.line_indent))

        return items

    def _parse_list_item(self, depth: int, dash_indent: int, unit: int) -> JsonValue:
        """Parse the element after a '-' marker.

        unit is the list's own indentation step, item column minus header
        column, so documents written with any indent width nest correctly.
        """
        if self.token.kind in _LINE_END:
            return self._parse_object(depth, dash_indent)

        if self.token.kind is TokenKind.LEFT_BRACKET:
            return self._parse_array(depth, dash_indent)

        run = self._collect_run(allow_dash=True)
        if self.token.kind not in _ENTRY_START:
            value = self._scalar_from_run(run)
            self._expect_line_end()
            return value

        # An object whose first entry shares the dash line. Its remaining
        # entries sit one unit past the dash, so the first entry's own body
        # must be deeper than that.
        key = self._key_from_run(run)
        first = {key: self._parse_entry_value(depth, dash_indent + unit)}
        return self._parse_object(depth, dash_indent, result=first)
