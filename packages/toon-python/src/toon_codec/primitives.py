"""Primitive value encoding and parsing for TOON."""

from decimal import Decimal
from typing import TYPE_CHECKING

from .constants import (
    COMMA,
    FALSE_LITERAL,
    LENGTH_MARKER,
    NULL_LITERAL,
    PLAIN_FLOAT_MAX,
    PLAIN_FLOAT_MIN,
    QUOTE,
    TRUE_LITERAL,
)
from .errors import QuotingError, UnsupportedValueError
from .string_utils import (
    find_closing_quote,
    is_safe_key,
    is_safe_unquoted,
    looks_like_number,
    quote_string,
    unescape_string,
)

if TYPE_CHECKING:
    from .types import Delimiter, JsonPrimitive


def encode_primitive(value: "JsonPrimitive", delimiter: "Delimiter" = ",") -> str:
    """
    Encode a primitive value to TOON format.

    Args:
        value: The primitive value (str, int, float, bool, or None).
        delimiter: The active delimiter for quoting checks.

    Returns:
        The encoded string representation.

    Raises:
        UnsupportedValueError: For non-finite floats or non-primitive values.
    """
    if value is None:
        return NULL_LITERAL

    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL

    if isinstance(value, (int, float)):
        return _encode_number(value)

    if isinstance(value, str):
        return encode_string_literal(value, delimiter)

    raise UnsupportedValueError(f"Cannot encode value of type {type(value).__name__}")


def _encode_number(value: int | float) -> str:
    """Encode a number to TOON format."""
    if isinstance(value, int):
        return str(value)

    if value != value or value in (float("inf"), float("-inf")):
        raise UnsupportedValueError(f"Non-finite number {value!r} has no TOON form")

    # Normalize -0 to 0
    if value == 0.0:
        return "0"

    # repr is the shortest text that round-trips
    s = repr(value)
    if "e" in s and PLAIN_FLOAT_MIN <= abs(value) < PLAIN_FLOAT_MAX:
        s = format(Decimal(s), "f")

    # Remove unnecessary .0 for whole numbers
    if s.endswith(".0"):
        return s[:-2]
    return s


def encode_string_literal(value: str, delimiter: "Delimiter" = ",") -> str:
    """
    Encode a string value, with or without quotes.

    Args:
        value: The string to encode.
        delimiter: The active delimiter for quoting checks.

    Returns:
        The encoded string (quoted if necessary).
    """
    if is_safe_unquoted(value, delimiter):
        return value
    return quote_string(value)


def encode_key(key: str, delimiter: "Delimiter" = ",") -> str:
    """
    Encode an object key or tabular field name for TOON format.

    Args:
        key: The key string.
        delimiter: The active delimiter.

    Returns:
        The encoded key (quoted if necessary).
    """
    if is_safe_key(key, delimiter):
        return key
    return quote_string(key)


def classify_token(token: str) -> "JsonPrimitive":
    """
    Classify a bare token into a typed scalar.

    Precedence is fixed: null, then booleans, then numbers, then string.
    Integers stay ``int``; tokens with a fraction or exponent become ``float``.
    """
    if token == NULL_LITERAL:
        return None
    if token == TRUE_LITERAL:
        return True
    if token == FALSE_LITERAL:
        return False

    if looks_like_number(token):
        if "." not in token and "e" not in token and "E" not in token:
            return int(token)
        return float(token)

    return token


def parse_primitive(token: str, line_number: int | None = None) -> "JsonPrimitive":
    """
    Parse a primitive token to a Python value.

    Handles: null, true, false, numbers, quoted strings, unquoted strings.

    Args:
        token: The token string (trimmed).
        line_number: Source line, reported on failure.

    Returns:
        The parsed Python value.

    Raises:
        QuotingError: For malformed quoted strings.
    """
    # Quoted string bypasses classification
    if token.startswith(QUOTE):
        return parse_string_literal(token, line_number)

    return classify_token(token)


def parse_string_literal(token: str, line_number: int | None = None) -> str:
    """
    Parse a quoted string literal.

    Args:
        token: The token starting with '"'.
        line_number: Source line, reported on failure.

    Returns:
        The unescaped string content.

    Raises:
        QuotingError: If the string is malformed.
    """
    end = find_closing_quote(token, 0)
    if end == -1:
        raise QuotingError(f"Unterminated string: {token}", line_number)
    if end != len(token) - 1:
        raise QuotingError(f"Unexpected characters after closing quote: {token}", line_number)

    return unescape_string(token[1:end], line_number)


def parse_key(token: str, line_number: int | None = None) -> str:
    """Parse a key or field name, unquoting it when quoted."""
    token = token.strip()
    if token.startswith(QUOTE):
        return parse_string_literal(token, line_number)
    return token


def format_array_header(
    length: int,
    key: str | None = None,
    fields: list[str] | None = None,
    delimiter: "Delimiter" = ",",
    length_marker: bool = False,
) -> str:
    """
    Format an array header line.

    Args:
        length: The array length.
        key: Optional key name (None for root arrays or list items).
        fields: Optional field names for tabular format.
        delimiter: The delimiter used between field names.
        length_marker: Whether to prefix the count with '#'.

    Returns:
        The formatted header string, e.g. ``users[#2]:{name|age}``.
    """
    marker = LENGTH_MARKER if length_marker else ""
    bracket = f"[{marker}{length}]"

    fields_part = ""
    if fields:
        fields_part = "{" + delimiter.join(encode_key(f, delimiter) for f in fields) + "}"

    key_part = encode_key(key, delimiter) if key is not None else ""
    return f"{key_part}{bracket}:{fields_part}"


def inline_separator(delimiter: "Delimiter") -> str:
    """Separator placed between values of an inline array."""
    if delimiter == COMMA:
        return ", "
    return delimiter
