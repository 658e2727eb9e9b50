"""Strict-mode structural rules and the array block state machine."""

import enum
import logging

from .errors import StructureError
from .types import ArrayHeaderInfo


class Validator:
    """
    Apply the structural rule set during decode.

    In strict mode every violation raises StructureError. In non-strict
    mode each check reports that the violation happened and the decoder
    applies the documented recovery; the event is logged at WARNING when a
    logger was injected.
    """

    def __init__(self, strict: bool = True, logger: logging.Logger | None = None):
        self.strict = strict
        self.logger = logger

    def violation(self, message: str, line_number: int | None) -> None:
        """Raise in strict mode, otherwise record and continue."""
        if self.strict:
            raise StructureError(message, line_number)
        if self.logger is not None:
            if line_number is None:
                self.logger.warning("%s (recovered)", message)
            else:
                self.logger.warning("line %d: %s (recovered)", line_number, message)

    def check_child_depth(self, parent_depth: int, depth: int, line_number: int) -> None:
        """A nested block must start exactly one level below its parent."""
        if depth != parent_depth + 1:
            self.violation(
                f"Expected indentation depth {parent_depth + 1}, found {depth}", line_number
            )

    def check_sibling_depth(self, depth: int, found: int, line_number: int) -> None:
        """Lines of one block share a depth; deeper lines are stray content."""
        if found != depth:
            self.violation(f"Unexpected indentation depth {found}, expected {depth}", line_number)

    def check_blank_line(self, line_number: int) -> None:
        """Blank lines may not separate the items of an array block."""
        self.violation("Blank line inside array block", line_number)

    def check_row_width(self, fields: list[str], values: list[str], line_number: int) -> bool:
        """Return True when a tabular row has one value per field."""
        if len(values) == len(fields):
            return True
        self.violation(f"Expected {len(fields)} values, got {len(values)}", line_number)
        return False

    def check_duplicate_key(self, obj: dict, key: str, line_number: int) -> None:
        if key in obj:
            self.violation(f"Duplicate key: {key}", line_number)


class BlockState(enum.Enum):
    """States while consuming a declared array block."""

    EXPECT_TABULAR_ROWS = "expect_tabular_rows"
    EXPECT_INLINE_LINE = "expect_inline_line"
    EXPECT_LIST_ITEMS = "expect_list_items"
    DONE = "done"


_INITIAL_STATES = {
    "tabular": BlockState.EXPECT_TABULAR_ROWS,
    "inline": BlockState.EXPECT_INLINE_LINE,
    "list": BlockState.EXPECT_LIST_ITEMS,
}


class ArrayBlock:
    """
    Count the items of one array block against its header.

    The decoder calls accept() for every item it finds and finish() when the
    block ends. accept() returns False for items past the declared count,
    which non-strict decoding drops.
    """

    def __init__(self, header: ArrayHeaderInfo, validator: Validator, line_number: int):
        self.header = header
        self.validator = validator
        self.line_number = line_number
        self.remaining = header.count
        self.consumed = 0
        self.state = _INITIAL_STATES[header.kind] if header.count > 0 else BlockState.DONE

    @property
    def done(self) -> bool:
        return self.state is BlockState.DONE

    def accept(self, line_number: int) -> bool:
        """Register one item; return whether it belongs to the array."""
        self.consumed += 1
        if self.state is BlockState.DONE:
            self.validator.violation(
                f"Array declares {self.header.count} items, found more", line_number
            )
            return False
        self.remaining -= 1
        if self.remaining == 0:
            self.state = BlockState.DONE
        return True

    def finish(self) -> None:
        """Close the block, checking that no declared item is missing."""
        if self.remaining > 0:
            self.validator.violation(
                f"Array length mismatch: expected {self.header.count}, got {self.header.count - self.remaining}",
                self.line_number,
            )
        self.state = BlockState.DONE
