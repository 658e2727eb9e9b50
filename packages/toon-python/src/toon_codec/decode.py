"""TOON decoder implementation."""

from collections.abc import Iterable

from .errors import StructureError
from .parser import (
    ArrayHeaderNode,
    KeyValueNode,
    ListItemNode,
    Node,
    ObjectHeaderNode,
    ScalarNode,
    is_list_item,
    parse_line,
    parse_row,
)
from .primitives import parse_primitive
from .scanner import scan_lines
from .types import ArrayHeaderInfo, JsonValue, LogicalLine, Options
from .validate import ArrayBlock, Validator


def decode(text: str, options: Options | None = None) -> JsonValue:
    """
    Decode TOON text to a Python value.

    Args:
        text: The TOON-formatted string.
        options: Decoding options.

    Returns:
        The decoded Python value. An empty document is an empty object.

    Raises:
        ScanError: For malformed indentation.
        StructureError: For count mismatches, depth jumps and stray content.
        QuotingError: For malformed quoted tokens.
    """
    return decode_lines(text.split("\n"), options)


def decode_lines(lines: Iterable[str], options: Options | None = None) -> JsonValue:
    """
    Decode TOON from pre-split lines.

    Args:
        lines: Iterable of line strings, without newlines.
        options: Decoding options.

    Returns:
        The decoded Python value.
    """
    opts = options or Options()
    scanned = list(scan_lines(lines, opts))
    if opts.logger is not None:
        opts.logger.debug("Decoding %d lines (strict=%s)", len(scanned), opts.strict)

    cursor = _Cursor(scanned, opts)
    return _decode_root(cursor)


class _Cursor:
    """Cursor for iterating through scanned lines."""

    def __init__(self, lines: list[LogicalLine], options: Options):
        self.lines = lines
        self.options = options
        self.validator = Validator(options.strict, options.logger)
        self.pos = 0
        # Item depths of the array blocks currently being read
        self.block_depths: list[int] = []

    @property
    def delimiter(self) -> str:
        return self.options.delimiter

    def peek(self) -> LogicalLine | None:
        """Look at the next non-blank line without advancing."""
        if self.pos < len(self.lines) and self.lines[self.pos].blank:
            self._skip_blank_lines()
        if self.pos < len(self.lines):
            return self.lines[self.pos]
        return None

    def advance(self) -> LogicalLine | None:
        """Get the next non-blank line and advance past it."""
        line = self.peek()
        if line:
            self.pos += 1
        return line

    def _skip_blank_lines(self) -> None:
        """
        Move past a run of blank lines.

        Only blanks that split an open array block are violations, including
        blanks inside an object that is itself a list item. Outside array
        blocks, blank lines may separate object entries at any depth.
        """
        first_blank = self.lines[self.pos]
        while self.pos < len(self.lines) and self.lines[self.pos].blank:
            self.pos += 1
        if self.pos == len(self.lines) or not self.block_depths:
            return
        # Still inside the outermost open block: the blank split its items
        if self.lines[self.pos].depth >= self.block_depths[0]:
            self.validator.check_blank_line(first_blank.line_number)

    def open_block(self, item_depth: int) -> None:
        self.block_depths.append(item_depth)

    def close_block(self) -> None:
        self.block_depths.pop()


def _decode_root(cursor: _Cursor) -> JsonValue:
    """Decode the root value."""
    line = cursor.peek()
    if not line:
        # A document with no entries is an empty object
        return {}

    node = parse_line(line, cursor.delimiter)

    if isinstance(node, ArrayHeaderNode) and node.key is None:
        cursor.validator.check_sibling_depth(0, line.depth, line.line_number)
        cursor.advance()
        value = _decode_array(cursor, node.header, line, line.depth + 1)
        _expect_end(cursor)
        return value

    if isinstance(node, ScalarNode):
        cursor.validator.check_sibling_depth(0, line.depth, line.line_number)
        cursor.advance()
        value = parse_primitive(node.token, line.line_number)
        _expect_end(cursor)
        return value

    return _decode_object(cursor, 0)


def _expect_end(cursor: _Cursor) -> None:
    """Anything after a root array or primitive is stray content."""
    line = cursor.peek()
    if line is not None:
        cursor.validator.violation("Unexpected content after root value", line.line_number)


def _decode_object(cursor: _Cursor, depth: int, result: dict | None = None) -> dict:
    """Decode the entries of an object at the given depth."""
    if result is None:
        result = {}

    while True:
        line = cursor.peek()
        if not line or line.depth < depth:
            break

        # Deeper lines here are stray; non-strict decoding keeps them as siblings
        cursor.validator.check_sibling_depth(depth, line.depth, line.line_number)
        cursor.advance()

        node = parse_line(line, cursor.delimiter)
        key, value = _decode_entry(cursor, node, line, child_depth=depth + 1)
        cursor.validator.check_duplicate_key(result, key, line.line_number)
        result[key] = value

    return result


def _decode_entry(
    cursor: _Cursor, node: Node, line: LogicalLine, child_depth: int
) -> tuple[str, JsonValue]:
    """Decode a keyed entry; nested content is expected at child_depth."""
    if isinstance(node, KeyValueNode):
        return node.key, parse_primitive(node.token, line.line_number)

    if isinstance(node, ObjectHeaderNode):
        next_line = cursor.peek()
        if next_line and next_line.depth >= child_depth:
            cursor.validator.check_child_depth(child_depth - 1, next_line.depth, next_line.line_number)
            # Deeper lines collapse onto child_depth when not strict
            return node.key, _decode_object(cursor, child_depth)
        # No nested lines: empty object
        return node.key, {}

    if isinstance(node, ArrayHeaderNode) and node.key is not None:
        return node.key, _decode_array(cursor, node.header, line, child_depth)

    if isinstance(node, ListItemNode):
        raise StructureError("Unexpected list item outside an array", line.line_number)

    raise StructureError(f"Expected key:value or array header: {line.content}", line.line_number)


def _decode_array(
    cursor: _Cursor, header: ArrayHeaderInfo, line: LogicalLine, item_depth: int
) -> list:
    """Decode the block announced by an array header."""
    block = ArrayBlock(header, cursor.validator, line.line_number)

    if header.kind == "inline":
        result = [
            parse_primitive(token, line.line_number)
            for token in parse_row(header.inline, cursor.delimiter)
            if block.accept(line.line_number)
        ]
        block.finish()
        return result

    cursor.open_block(item_depth)
    if header.kind == "tabular":
        result = _decode_tabular_rows(cursor, block, header.fields, item_depth)
    else:
        result = _decode_list_items(cursor, block, item_depth)
    cursor.close_block()

    block.finish()
    return result


def _decode_tabular_rows(
    cursor: _Cursor, block: ArrayBlock, fields: list[str], depth: int
) -> list[dict]:
    """Decode tabular array rows."""
    result = []

    while True:
        line = cursor.peek()
        if not line or line.depth < depth:
            break

        cursor.validator.check_sibling_depth(depth, line.depth, line.line_number)
        cursor.advance()
        if not block.accept(line.line_number):
            continue

        values = parse_row(line.content, cursor.delimiter)
        # Short rows keep only the fields present, extra values are dropped
        cursor.validator.check_row_width(fields, values, line.line_number)
        result.append(
            {field: parse_primitive(value, line.line_number) for field, value in zip(fields, values)}
        )

    return result


def _decode_list_items(cursor: _Cursor, block: ArrayBlock, depth: int) -> list:
    """Decode list items (lines starting with -)."""
    result = []

    while True:
        line = cursor.peek()
        if not line or line.depth < depth:
            break

        if not is_list_item(line.content):
            # Let the enclosing block deal with the line
            cursor.validator.violation(f"Expected list item: {line.content}", line.line_number)
            break

        cursor.validator.check_sibling_depth(depth, line.depth, line.line_number)
        cursor.advance()
        keep = block.accept(line.line_number)
        item = _decode_list_item(cursor, line)
        if keep:
            result.append(item)

    return result


def _decode_list_item(cursor: _Cursor, line: LogicalLine) -> JsonValue:
    """Decode a single list item and the lines nested under it."""
    depth = line.depth
    node = parse_line(line, cursor.delimiter)
    inner = node.inner if isinstance(node, ListItemNode) else None

    if inner is None:
        # Bare hyphen - check for nested content
        next_line = cursor.peek()
        if next_line and next_line.depth > depth:
            cursor.validator.check_child_depth(depth, next_line.depth, next_line.line_number)
            return _decode_object(cursor, depth + 1)
        return {}

    if isinstance(inner, ScalarNode):
        return parse_primitive(inner.token, line.line_number)

    if isinstance(inner, ArrayHeaderNode) and inner.key is None:
        # Bare array as list item
        return _decode_array(cursor, inner.header, line, depth + 1)

    # Object with first field on the hyphen line, the rest one level down
    key, value = _decode_entry(cursor, inner, line, child_depth=depth + 2)
    return _decode_object(cursor, depth + 1, {key: value})
