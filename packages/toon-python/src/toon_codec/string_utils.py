"""String utilities for TOON encoding/decoding."""

from typing import TYPE_CHECKING

from .constants import (
    BACKSLASH,
    CONTROL_CHARS,
    ESCAPE_MAP,
    LIST_ITEM_MARKER,
    NUMBER_PATTERN,
    QUOTE,
    RESERVED_LITERALS,
    STRUCTURAL_CHARS,
    UNESCAPE_MAP,
)
from .errors import QuotingError

if TYPE_CHECKING:
    from .types import Delimiter


def escape_string(value: str) -> str:
    """
    Escape a string for use in TOON quoted strings.

    Only the 5 valid TOON escape sequences are produced:
    - \\\\ (backslash)
    - \\" (double quote)
    - \\n (newline)
    - \\r (carriage return)
    - \\t (tab)

    Args:
        value: The string to escape.

    Returns:
        The escaped string (without surrounding quotes).
    """
    return "".join(ESCAPE_MAP.get(char, char) for char in value)


def quote_string(value: str) -> str:
    """Wrap a string in quotes, escaping its content."""
    return f"{QUOTE}{escape_string(value)}{QUOTE}"


def unescape_string(value: str, line_number: int | None = None) -> str:
    """
    Unescape a TOON string that was inside quotes.

    Args:
        value: The string content (without surrounding quotes).
        line_number: Source line, reported on failure.

    Returns:
        The unescaped string.

    Raises:
        QuotingError: If an invalid escape sequence is found or backslash at end.
    """
    result = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == BACKSLASH:
            if i + 1 >= len(value):
                raise QuotingError("Backslash at end of string", line_number)
            next_char = value[i + 1]
            if next_char not in UNESCAPE_MAP:
                raise QuotingError(f"Invalid escape sequence: \\{next_char}", line_number)
            result.append(UNESCAPE_MAP[next_char])
            i += 2
        else:
            result.append(char)
            i += 1
    return "".join(result)


def looks_like_number(value: str) -> bool:
    """Check if a string matches the TOON number grammar."""
    return bool(NUMBER_PATTERN.match(value))


def _is_safe_token(value: str, delimiter: "Delimiter") -> bool:
    """Rules shared by keys and scalar strings."""
    if not value:
        return False

    # Check for leading/trailing whitespace
    if value != value.strip():
        return False

    # Check for structural characters
    if any(c in STRUCTURAL_CHARS for c in value):
        return False

    # Check for quotes and backslashes
    if QUOTE in value or BACKSLASH in value:
        return False

    # Check for control characters
    if any(c in CONTROL_CHARS for c in value):
        return False

    # Check for delimiter
    if delimiter in value:
        return False

    # Can't look like a list marker
    if value == LIST_ITEM_MARKER:
        return False
    if value[0] == LIST_ITEM_MARKER and value[1].isspace():
        return False

    return True


def is_safe_unquoted(value: str, delimiter: "Delimiter" = ",") -> bool:
    """
    Check if a string value can be safely represented without quotes.

    A string can be unquoted if:
    - Non-empty
    - No leading/trailing whitespace
    - Not a boolean/null literal and not shaped like a number
    - No structural chars (: [ ] { })
    - No quotes or backslashes
    - No control chars (newline, carriage return, tab)
    - No active delimiter
    - Doesn't look like a list marker ('-' alone or '-' plus whitespace)

    Args:
        value: The string to check.
        delimiter: The active delimiter character.

    Returns:
        True if the string can be unquoted.
    """
    if value in RESERVED_LITERALS:
        return False
    if looks_like_number(value):
        return False
    return _is_safe_token(value, delimiter)


def is_safe_key(key: str, delimiter: "Delimiter" = ",") -> bool:
    """
    Check if an object key or tabular field name can be written bare.

    Keys are never classified on decode, so a key may look like a number
    or a literal and still stay unquoted.
    """
    return _is_safe_token(key, delimiter)


def find_closing_quote(s: str, start: int) -> int:
    """
    Find the closing quote in a string.

    Args:
        s: The string to search.
        start: The position of the opening quote.

    Returns:
        Index of the closing quote, or -1 if not found.
    """
    i = start + 1
    while i < len(s):
        char = s[i]
        if char == BACKSLASH:
            # Skip escape sequence
            i += 2
            continue
        if char == QUOTE:
            return i
        i += 1
    return -1


def find_unquoted_colon(line: str) -> int:
    """
    Find the position of the first unquoted colon in a line.

    Args:
        line: The line to search.

    Returns:
        Index of the colon, or -1 if not found.
    """
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == BACKSLASH and in_quotes and i + 1 < len(line):
            # Skip escape sequence
            i += 2
            continue
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == ":" and not in_quotes:
            return i
        i += 1
    return -1


def split_by_delimiter(value: str, delimiter: "Delimiter") -> list[str]:
    """
    Split a string by delimiter, respecting quoted sections.

    Args:
        value: The string to split.
        delimiter: The delimiter character.

    Returns:
        List of values (still containing quotes if originally quoted).
    """
    result = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(value):
        char = value[i]
        if char == BACKSLASH and in_quotes and i + 1 < len(value):
            # Keep escape sequence intact
            current.append(char)
            current.append(value[i + 1])
            i += 2
            continue
        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
        elif char == delimiter and not in_quotes:
            result.append("".join(current).strip(" "))
            current = []
        else:
            current.append(char)
        i += 1

    # Add the last segment
    result.append("".join(current).strip(" "))
    return result
