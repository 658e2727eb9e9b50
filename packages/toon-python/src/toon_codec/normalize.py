"""Map arbitrary host values onto the TOON data model."""

import enum
import math
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .errors import UnsupportedValueError
from .types import JsonValue


def normalize(value: Any) -> JsonValue:
    """
    Normalize a value for JSON compatibility.

    Converts:
    - Date, datetime and time objects to ISO-8601 strings
    - Tuples to lists, sets to lists sorted by string form
    - Any mapping with string keys to a dict
    - Enum members to their value
    - Decimals to int/float when that is exact

    Args:
        value: The value to normalize.

    Returns:
        A JSON-compatible value.

    Raises:
        UnsupportedValueError: For non-finite numbers, cycles, non-string keys
            and types with no defined mapping. The error carries the path
            to the offending value.
    """
    return _normalize(value, "$", set())


def _normalize(value: Any, path: str, active: set[int]) -> JsonValue:
    if value is None:
        return None

    if isinstance(value, bool):
        return value

    if isinstance(value, enum.Enum):
        return _normalize(value.value, path, active)

    if isinstance(value, int):
        return int(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise UnsupportedValueError(f"Non-finite number {value!r} has no TOON form", path)
        # Normalize -0 to 0
        if value == 0.0:
            return 0
        return float(value)

    if isinstance(value, Decimal):
        return _normalize_decimal(value, path)

    if isinstance(value, str):
        return str(value)

    # datetime is a date subclass, both render through isoformat()
    if isinstance(value, (date, datetime, time)):
        return value.isoformat()

    if isinstance(value, (bytes, bytearray, memoryview)):
        raise UnsupportedValueError(f"Binary value of type {type(value).__name__} is not supported", path)

    if isinstance(value, Mapping):
        with _visiting(value, path, active):
            result = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise UnsupportedValueError(
                        f"Object keys must be strings, got {type(key).__name__}", path
                    )
                result[key] = _normalize(item, f"{path}.{key}", active)
            return result

    if isinstance(value, (list, tuple)):
        with _visiting(value, path, active):
            return [_normalize(item, f"{path}[{i}]", active) for i, item in enumerate(value)]

    if isinstance(value, (set, frozenset)):
        ordered = sorted(value, key=str)
        return [_normalize(item, f"{path}[{i}]", active) for i, item in enumerate(ordered)]

    raise UnsupportedValueError(f"Cannot represent value of type {type(value).__name__}", path)


def _normalize_decimal(value: Decimal, path: str) -> int | float:
    if not value.is_finite():
        raise UnsupportedValueError(f"Non-finite number {value} has no TOON form", path)
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    if Decimal(repr(as_float)) != value:
        raise UnsupportedValueError(f"Decimal {value} cannot be represented exactly", path)
    return as_float


@contextmanager
def _visiting(container: Any, path: str, active: set[int]) -> Iterator[None]:
    """Track containers on the current path to reject cycles."""
    key = id(container)
    if key in active:
        raise UnsupportedValueError("Cyclic reference", path)
    active.add(key)
    try:
        yield
    finally:
        active.discard(key)
