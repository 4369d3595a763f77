"""
Command line interface for toon-codec.

Converts JSON to TOON and back, reading a file or stdin and writing stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .decode import decode
from .encode import encode
from .errors import ToonError
from .types import DecodeOptions, EncodeOptions

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="toon-codec",
        description="Convert between JSON and TOON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output to stderr",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    encode_parser = commands.add_parser("encode", help="Read JSON, write TOON")
    encode_parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )
    encode_parser.add_argument(
        "--delimiter",
        "-d",
        choices=["comma", "tab", "pipe"],
        default="comma",
        help="Delimiter for inline arrays and tabular rows",
    )
    encode_parser.add_argument(
        "--length-marker",
        "-m",
        help="Character written before array lengths (e.g. '#')",
    )
    encode_parser.add_argument(
        "--indent",
        "-i",
        type=int,
        default=2,
        help="Spaces per nesting level",
    )

    decode_parser = commands.add_parser("decode", help="Read TOON, write JSON")
    decode_parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )
    decode_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip length, indentation and header consistency checks",
    )
    decode_parser.add_argument(
        "--no-coerce",
        action="store_false",
        dest="coerce_types",
        default=True,
        help="Never coerce ambiguous bare text (scanned literals stay typed)",
    )
    decode_parser.add_argument(
        "--indent",
        "-i",
        type=int,
        default=2,
        help="Indentation unit expected in strict mode",
    )

    return parser.parse_args(args)


def read_input(path: str | None) -> str:
    """Read from a file path or stdin."""
    if path is None:
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def run_encode(parsed: argparse.Namespace, text: str) -> str:
    options = EncodeOptions(
        delimiter=parsed.delimiter,
        length_marker=parsed.length_marker,
        indent=parsed.indent,
    )
    return encode(json.loads(text), options)


def run_decode(parsed: argparse.Namespace, text: str) -> str:
    options = DecodeOptions(
        strict=not parsed.lenient,
        coerce_types=parsed.coerce_types,
        indent=parsed.indent,
    )
    return json.dumps(decode(text, options), indent=2, ensure_ascii=False)


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        text = read_input(parsed.file)
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        if parsed.command == "encode":
            output = run_encode(parsed, text)
        else:
            output = run_decode(parsed, text)
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON input: {e}", file=sys.stderr)
        return 1
    except ToonError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
