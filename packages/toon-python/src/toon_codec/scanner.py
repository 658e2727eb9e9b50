"""Split TOON text into logical lines annotated with depth."""

from collections.abc import Iterable, Iterator

from .errors import ScanError
from .types import LogicalLine, Options


def scan(text: str, options: Options | None = None) -> list[LogicalLine]:
    """Scan a whole document."""
    return list(scan_lines(text.split("\n"), options))


def scan_lines(lines: Iterable[str], options: Options | None = None) -> Iterator[LogicalLine]:
    """
    Turn raw lines into LogicalLine objects.

    Strict mode rejects tabs in indentation and indentation that is not a
    multiple of the indent width. Otherwise a tab counts as one full indent
    level and a partial level is rounded down. Blank lines are kept so the
    decoder can tell where they occur; their indentation is not checked.

    Raises:
        ScanError: For malformed indentation in strict mode.
    """
    opts = options or Options()
    indent_size = opts.indent

    for i, raw in enumerate(lines, start=1):
        raw = raw.removesuffix("\r")
        stripped = raw.lstrip(" \t")
        leading = raw[: len(raw) - len(stripped)]
        content = stripped.rstrip()

        if not content:
            yield LogicalLine(raw=raw, content="", indent=0, depth=0, line_number=i)
            continue

        if "\t" in leading:
            if opts.strict:
                raise ScanError("Tab in indentation (use spaces)", i)
            indent = sum(indent_size if c == "\t" else 1 for c in leading)
        else:
            indent = len(leading)

        if indent % indent_size != 0 and opts.strict:
            raise ScanError(f"Indentation {indent} is not a multiple of {indent_size}", i)

        yield LogicalLine(
            raw=raw,
            content=content,
            indent=indent,
            depth=indent // indent_size,
            line_number=i,
        )
