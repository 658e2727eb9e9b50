"""
Command line interface: convert JSON to TOON and back.

    python -m toon_codec encode data.json
    python -m toon_codec decode data.toon --delimiter pipe -o data.json
    cat data.json | python -m toon_codec encode --length-marker
"""

import argparse
import logging
import sys
from pathlib import Path

import orjson

from . import __version__
from .constants import DELIMITER_NAMES
from .decode import decode
from .encode import encode
from .errors import ToonError
from .types import Options

logger = logging.getLogger("toon_codec")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the encode/decode commands.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(prog="toon_codec", description="Convert between JSON and TOON")
    parser.add_argument("--version", "-V", action="version", version=f"toon_codec {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    encode_parser = subparsers.add_parser("encode", help="Encode JSON input as TOON")
    decode_parser = subparsers.add_parser("decode", help="Decode TOON input to JSON")

    for sub in (encode_parser, decode_parser):
        sub.add_argument("input_file", nargs="?", help="Input file (default: stdin)")
        sub.add_argument("--output", "--out", "-o", help="Output file path (default: stdout)")
        sub.add_argument("--indent", type=int, default=2, help="Spaces per indentation level (default: 2)")
        sub.add_argument("--delimiter", choices=sorted(DELIMITER_NAMES), default="comma", help="Array delimiter (default: comma)")
        sub.add_argument("--length-marker", action="store_true", help="Prefix array counts with '#'")
        sub.add_argument("--no-strict", action="store_true", help="Recover from structural errors while decoding")
        sub.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    encode_parser.set_defaults(func=encode_command)
    decode_parser.set_defaults(func=decode_command)
    return parser


def build_options(args: argparse.Namespace) -> Options:
    """Translate parsed arguments into codec options."""
    return Options(
        indent=args.indent,
        delimiter=DELIMITER_NAMES[args.delimiter],
        length_marker=args.length_marker,
        strict=not args.no_strict,
        logger=logger if args.verbose else None,
    )


def _read_input(args: argparse.Namespace) -> str:
    if args.input_file:
        return Path(args.input_file).read_text(encoding="utf-8")
    return sys.stdin.read()


def _write_output(args: argparse.Namespace, text: str) -> None:
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(text + "\n")


def encode_command(args: argparse.Namespace) -> None:
    """Read JSON, write TOON."""
    data = orjson.loads(_read_input(args))
    _write_output(args, encode(data, build_options(args)))


def decode_command(args: argparse.Namespace) -> None:
    """Read TOON, write JSON."""
    value = decode(_read_input(args), build_options(args))
    _write_output(args, orjson.dumps(value, option=orjson.OPT_INDENT_2).decode())


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except orjson.JSONDecodeError as e:
        print(f"error: invalid JSON input: {e}", file=sys.stderr)
        return 1
    except orjson.JSONEncodeError as e:
        print(f"error: cannot write JSON output: {e}", file=sys.stderr)
        return 1
    except (ToonError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
