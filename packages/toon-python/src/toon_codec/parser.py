"""Parse a single logical line into its structural parts."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .constants import (
    ARRAY_HEADER_PATTERN,
    CLOSE_BRACE,
    CLOSE_BRACKET,
    LIST_ITEM_MARKER,
    LIST_ITEM_PREFIX,
    OPEN_BRACE,
    OPEN_BRACKET,
    QUOTE,
)
from .errors import StructureError
from .primitives import parse_key
from .string_utils import find_closing_quote, find_unquoted_colon, split_by_delimiter
from .types import ArrayHeaderInfo

if TYPE_CHECKING:
    from .types import Delimiter, LogicalLine


@dataclass
class ScalarNode:
    """A bare value: a root primitive or a primitive list item."""

    token: str


@dataclass
class KeyValueNode:
    """``key: value`` with a primitive value."""

    key: str
    token: str


@dataclass
class ObjectHeaderNode:
    """``key:`` followed by a nested block (or nothing, for ``{}``)."""

    key: str


@dataclass
class ArrayHeaderNode:
    """``key[N]:...``; key is None for root arrays and nested list arrays."""

    key: str | None
    header: ArrayHeaderInfo


@dataclass
class ListItemNode:
    """A ``- `` prefixed entry; inner is None for a bare ``-``."""

    inner: Union[ScalarNode, KeyValueNode, ObjectHeaderNode, ArrayHeaderNode, None]


Node = Union[ScalarNode, KeyValueNode, ObjectHeaderNode, ArrayHeaderNode, ListItemNode]


def is_list_item(content: str) -> bool:
    """Check whether content starts with a list item marker."""
    return content == LIST_ITEM_MARKER or content.startswith(LIST_ITEM_PREFIX)


def parse_line(line: "LogicalLine", delimiter: "Delimiter" = ",") -> Node:
    """
    Parse a non-blank logical line.

    Args:
        line: The scanned line.
        delimiter: The configured delimiter, used for field lists.

    Returns:
        The structural node the line represents.

    Raises:
        StructureError: For malformed array headers.
        QuotingError: For malformed quoted keys.
    """
    content = line.content
    if is_list_item(content):
        item_content = content[len(LIST_ITEM_MARKER):].strip()
        if not item_content:
            return ListItemNode(inner=None)
        return ListItemNode(inner=_parse_content(item_content, line.line_number, delimiter))
    return _parse_content(content, line.line_number, delimiter)


def _parse_content(
    content: str, line_number: int, delimiter: "Delimiter"
) -> Union[ScalarNode, KeyValueNode, ObjectHeaderNode, ArrayHeaderNode]:
    colon_pos = find_unquoted_colon(content)
    if colon_pos == -1:
        return ScalarNode(token=content)

    head = content[:colon_pos].strip()
    rest = content[colon_pos + 1:].strip()

    # A quoted token spanning the whole head is a plain key
    if head.startswith(QUOTE) and find_closing_quote(head, 0) == len(head) - 1:
        return _key_node(parse_key(head, line_number), rest)

    if head.endswith(CLOSE_BRACKET):
        match = ARRAY_HEADER_PATTERN.match(head)
        if match is None:
            raise StructureError(f"Invalid array header: {content}", line_number)
        raw_key = match.group("key").strip()
        key = parse_key(raw_key, line_number) if raw_key else None
        header = parse_array_header(
            int(match.group("count")),
            rest,
            delimiter,
            line_number,
            has_marker=bool(match.group("marker")),
        )
        return ArrayHeaderNode(key=key, header=header)

    if OPEN_BRACKET in head and not head.startswith(QUOTE):
        raise StructureError(f"Invalid array header: {content}", line_number)

    return _key_node(parse_key(head, line_number), rest)


def _key_node(key: str, rest: str) -> KeyValueNode | ObjectHeaderNode:
    if rest:
        return KeyValueNode(key=key, token=rest)
    return ObjectHeaderNode(key=key)


def parse_array_header(
    count: int,
    rest: str,
    delimiter: "Delimiter",
    line_number: int,
    has_marker: bool = False,
) -> ArrayHeaderInfo:
    """
    Interpret what follows the colon of an array header.

    Nothing means list items follow (or an empty array), ``{f1,f2}`` means
    tabular rows follow, anything else is the inline values.
    """
    if not rest:
        return ArrayHeaderInfo(count=count, kind="list", has_marker=has_marker)

    if rest.startswith(OPEN_BRACE):
        if not rest.endswith(CLOSE_BRACE):
            raise StructureError(f"Unterminated field list: {rest}", line_number)
        fields = [parse_key(f, line_number) for f in parse_row(rest[1:-1], delimiter)]
        return ArrayHeaderInfo(count=count, kind="tabular", fields=fields, has_marker=has_marker)

    return ArrayHeaderInfo(count=count, kind="inline", inline=rest, has_marker=has_marker)


def parse_row(content: str, delimiter: "Delimiter") -> list[str]:
    """Split a tabular row or inline value list into raw tokens."""
    if not content.strip():
        return []
    return split_by_delimiter(content, delimiter)
