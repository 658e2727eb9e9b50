"""Type definitions for TOON encoder/decoder."""

import logging
from dataclasses import dataclass, field
from typing import Literal

from .constants import DELIMITERS

# JSON type aliases
JsonPrimitive = str | int | float | bool | None
JsonArray = list["JsonValue"]
JsonObject = dict[str, "JsonValue"]
JsonValue = JsonPrimitive | JsonArray | JsonObject

# Delimiter options
Delimiter = Literal[",", "\t", "|"]

# Array representations, in classification priority order
ArrayKind = Literal["tabular", "inline", "list"]


@dataclass(frozen=True)
class Options:
    """Options shared by a matching pair of encode/decode calls."""

    indent: int = 2
    """Number of spaces per indentation level."""

    delimiter: Delimiter = ","
    """Delimiter for inline arrays, tabular rows and field lists."""

    length_marker: bool = False
    """Prefix array counts with '#' when encoding."""

    strict: bool = True
    """Reject structural deviations eagerly when decoding."""

    logger: logging.Logger | None = field(default=None, compare=False, repr=False)
    """Optional logger receiving diagnostics; nothing is logged without one."""

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 1:
            raise ValueError(f"indent must be a positive integer, got {self.indent!r}")
        if self.delimiter not in DELIMITERS:
            raise ValueError(f"delimiter must be one of ',', '\\t', '|', got {self.delimiter!r}")


# Encode and decode take the same configuration
EncodeOptions = Options
DecodeOptions = Options


@dataclass
class LogicalLine:
    """A scanned line with indentation info."""

    raw: str
    """Original line content."""

    content: str
    """Content after stripping indentation and trailing whitespace."""

    indent: int
    """Number of leading indentation columns."""

    depth: int
    """Indentation level (indent / indent_size)."""

    line_number: int
    """1-based line number."""

    @property
    def blank(self) -> bool:
        return not self.content


@dataclass
class ArrayHeaderInfo:
    """Parsed array header information."""

    count: int
    """Declared array length."""

    kind: ArrayKind = "list"
    """Representation announced by the header."""

    fields: list[str] = field(default_factory=list)
    """Field names for tabular format (empty for non-tabular)."""

    inline: str = ""
    """Raw values following the colon for inline arrays."""

    has_marker: bool = False
    """Whether the count carried the '#' length marker."""
