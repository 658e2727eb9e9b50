"""
TOON (Token-Oriented Object Notation) - Python Implementation

A token-dense, round-trip compatible alternative to JSON. Objects nest by
indentation, arrays carry their length in a header and are written in one of
three forms: tabular rows, a single inline line, or '-' list items.

Usage:
    import toon_codec

    # Encode Python data to TOON
    data = {"name": "Alice", "age": 30}
    encoded = toon_codec.encode(data)

    # Decode TOON to Python data
    decoded = toon_codec.decode(encoded)

    # With options (use the same options for both directions)
    from toon_codec import Options

    opts = Options(indent=4, delimiter="|", length_marker=True)
    decoded = toon_codec.decode(toon_codec.encode(data, opts), opts)
"""

__version__ = "1.2.0"

from .decode import decode, decode_lines
from .encode import classify_array, encode, encode_lines
from .errors import (
    DecodeError,
    QuotingError,
    ScanError,
    StructureError,
    ToonError,
    UnsupportedValueError,
)
from .normalize import normalize
from .types import DecodeOptions, EncodeOptions, JsonValue, Options

__all__ = [
    # Version
    "__version__",
    # Main API
    "encode",
    "encode_lines",
    "decode",
    "decode_lines",
    "normalize",
    "classify_array",
    # Options
    "Options",
    "EncodeOptions",
    "DecodeOptions",
    # Types
    "JsonValue",
    # Errors
    "ToonError",
    "DecodeError",
    "ScanError",
    "StructureError",
    "QuotingError",
    "UnsupportedValueError",
]
