"""TOON encoder implementation."""

from typing import Any

from .constants import LIST_ITEM_MARKER, LIST_ITEM_PREFIX
from .normalize import normalize
from .primitives import encode_key, encode_primitive, format_array_header, inline_separator
from .types import ArrayKind, JsonValue, Options
from .writer import LineWriter


def encode(value: Any, options: Options | None = None) -> str:
    """
    Encode a Python value to TOON format.

    Args:
        value: The value to encode (dict, list, or primitive).
        options: Encoding options.

    Returns:
        The TOON-formatted string.

    Raises:
        UnsupportedValueError: If the value has no TOON representation.
    """
    return "\n".join(encode_lines(value, options))


def encode_lines(value: Any, options: Options | None = None) -> list[str]:
    """
    Encode a Python value to TOON format, returning the lines.

    Args:
        value: The value to encode.
        options: Encoding options.

    Returns:
        Lines of TOON output, without trailing newlines.
    """
    opts = options or Options()
    normalized = normalize(value)
    writer = LineWriter(opts.indent)

    # Root form detection
    if isinstance(normalized, dict):
        _encode_object(normalized, writer, opts, 0)
    elif isinstance(normalized, list):
        _encode_array(None, normalized, writer, opts, 0, child_depth=1)
    else:
        writer.push(0, encode_primitive(normalized, opts.delimiter))

    return writer.lines


def classify_array(arr: list) -> ArrayKind:
    """
    Choose the representation for an array.

    Tabular wins when every element is an object with the same ordered,
    non-empty key list and only primitive values. Inline is used when every
    element is a primitive (including the empty array). Anything else falls
    back to the list form.
    """
    if _is_tabular_array(arr):
        return "tabular"
    if all(_is_primitive(v) for v in arr):
        return "inline"
    return "list"


def _encode_object(obj: dict, writer: LineWriter, opts: Options, depth: int) -> None:
    """Encode an object's key-value pairs."""
    for key, value in obj.items():
        _encode_entry(key, value, writer, opts, depth, child_depth=depth + 1)


def _encode_entry(
    key: str,
    value: JsonValue,
    writer: LineWriter,
    opts: Options,
    depth: int,
    child_depth: int,
    prefix: str = "",
) -> None:
    """Encode one key with its value; nested content goes to child_depth."""
    if isinstance(value, dict):
        writer.push(depth, f"{prefix}{encode_key(key, opts.delimiter)}:")
        _encode_object(value, writer, opts, child_depth)
    elif isinstance(value, list):
        _encode_array(key, value, writer, opts, depth, child_depth, prefix)
    else:
        encoded_value = encode_primitive(value, opts.delimiter)
        writer.push(depth, f"{prefix}{encode_key(key, opts.delimiter)}: {encoded_value}")


def _encode_array(
    key: str | None,
    arr: list,
    writer: LineWriter,
    opts: Options,
    depth: int,
    child_depth: int,
    prefix: str = "",
) -> None:
    """Encode an array with the best format."""
    kind = classify_array(arr)
    if opts.logger is not None:
        opts.logger.debug("Array %r with %d items encoded as %s", key, len(arr), kind)

    if kind == "tabular":
        fields = list(arr[0].keys())
        header = format_array_header(len(arr), key, fields, opts.delimiter, opts.length_marker)
        writer.push(depth, prefix + header)
        for row in arr:
            _encode_tabular_row(row, fields, writer, opts, child_depth)
    elif kind == "inline":
        header = format_array_header(len(arr), key, None, opts.delimiter, opts.length_marker)
        if arr:
            values = [encode_primitive(v, opts.delimiter) for v in arr]
            header += " " + inline_separator(opts.delimiter).join(values)
        writer.push(depth, prefix + header)
    else:
        header = format_array_header(len(arr), key, None, opts.delimiter, opts.length_marker)
        writer.push(depth, prefix + header)
        for item in arr:
            _encode_list_item(item, writer, opts, child_depth)


def _encode_list_item(item: JsonValue, writer: LineWriter, opts: Options, depth: int) -> None:
    """Encode a list item (after the - marker)."""
    if isinstance(item, dict):
        if not item:
            # Empty object as list item
            writer.push(depth, LIST_ITEM_MARKER)
            return

        # First field shares the hyphen line, the rest align under it
        entries = iter(item.items())
        first_key, first_value = next(entries)
        _encode_entry(
            first_key, first_value, writer, opts, depth, child_depth=depth + 2, prefix=LIST_ITEM_PREFIX
        )
        for key, value in entries:
            _encode_entry(key, value, writer, opts, depth + 1, child_depth=depth + 2)
    elif isinstance(item, list):
        # Nested array as list item
        _encode_array(None, item, writer, opts, depth, child_depth=depth + 1, prefix=LIST_ITEM_PREFIX)
    else:
        writer.push(depth, LIST_ITEM_PREFIX + encode_primitive(item, opts.delimiter))


def _encode_tabular_row(
    row: dict, fields: list[str], writer: LineWriter, opts: Options, depth: int
) -> None:
    """Encode a single tabular row."""
    values = [encode_primitive(row[f], opts.delimiter) for f in fields]
    writer.push(depth, opts.delimiter.join(values))


def _is_tabular_array(arr: list) -> bool:
    """Check if array can use tabular format."""
    if not arr:
        return False

    # All elements must be objects
    if not all(isinstance(v, dict) for v in arr):
        return False

    # All objects must have the same keys in the same order
    first_keys = list(arr[0].keys())
    if not first_keys:
        return False

    for item in arr[1:]:
        if list(item.keys()) != first_keys:
            return False

    # All values must be primitives
    return all(_is_primitive(v) for item in arr for v in item.values())


def _is_primitive(value: JsonValue) -> bool:
    """Check if value is a primitive (not dict or list)."""
    return not isinstance(value, (dict, list))
