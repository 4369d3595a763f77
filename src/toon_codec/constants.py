"""Immutable constants shared by the encoder and decoder."""

# Characters that always terminate an unquoted token
STRUCTURAL_CHARS = frozenset("[]{}:")

# Characters that force quoting when they appear anywhere in a string
BRACKET_CHARS = frozenset("[]{}")

KEYWORDS = frozenset({"null", "true", "false"})

DELIMITER_CHARS = frozenset(",\t|")

DEFAULT_INDENT = "  "

# Indentation unit assumed by strict-mode decoding
DEFAULT_INDENT_SIZE = 2

# Objects and arrays combined
MAX_DEPTH = 256
