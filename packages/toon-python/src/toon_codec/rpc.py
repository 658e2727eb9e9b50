"""
Remote-call adapter around encode/decode.

A host platform forwards a method name and a parameter mapping to
handle_call() and gets a string back: the TOON text, the decoded value as
JSON, or an error prefixed with ERROR_MARKER. The calling side passes that
string to unwrap_result() or decode_result() to tell success from failure.

Example:
    >>> result = handle_call("encode", {"value": {"tags": ["a", "b"]}})
    >>> unwrap_result(result)
    'tags[2]: a, b'
    >>> handle_call("decode", {"text": "n: 1"})
    '{"n":1}'
"""

from collections.abc import Mapping
from typing import Any

import orjson

from .constants import DELIMITER_NAMES
from .decode import decode
from .encode import encode
from .errors import ToonError
from .types import JsonValue, Options

ERROR_MARKER = "ERROR: "

# Remote parameter name -> Options field
_OPTION_PARAMS = {
    "indent": "indent",
    "delimiter": "delimiter",
    "lengthMarker": "length_marker",
    "strict": "strict",
}


class RemoteCallError(Exception):
    """The remote side reported a failure."""


def options_from_params(params: Mapping[str, Any]) -> Options:
    """
    Build Options from remote-call parameters.

    Delimiters may be given as the character itself or by name
    ("comma", "tab", "pipe").

    Raises:
        ValueError: For unknown delimiters or invalid values.
    """
    kwargs: dict[str, Any] = {}
    for param, field_name in _OPTION_PARAMS.items():
        if param in params and params[param] is not None:
            kwargs[field_name] = params[param]
    if "delimiter" in kwargs:
        kwargs["delimiter"] = DELIMITER_NAMES.get(kwargs["delimiter"], kwargs["delimiter"])
    return Options(**kwargs)


def handle_call(name: str, params: Mapping[str, Any]) -> str:
    """
    Dispatch a remote call to the codec.

    Args:
        name: "encode" or "decode".
        params: For encode, "value" holds the data, or a JSON document when
            "json" is true. For decode, "text" holds the TOON document.
            Option keys: indent, delimiter, lengthMarker, strict.

    Returns:
        The result string, or ERROR_MARKER followed by the failure message.
        This function never raises for bad input.
    """
    try:
        opts = options_from_params(params)
        if name == "encode":
            if "value" not in params:
                return f"{ERROR_MARKER}missing parameter 'value'"
            value = params["value"]
            if params.get("json"):
                value = orjson.loads(value)
            return encode(value, opts)
        if name == "decode":
            text = params.get("text")
            if not isinstance(text, str):
                return f"{ERROR_MARKER}parameter 'text' must be a string"
            return orjson.dumps(decode(text, opts)).decode()
        return f"{ERROR_MARKER}unknown method '{name}'"
    except orjson.JSONDecodeError as e:
        return f"{ERROR_MARKER}invalid JSON: {e}"
    except (ToonError, ValueError, TypeError) as e:
        return f"{ERROR_MARKER}{e}"


def unwrap_result(result: str) -> str:
    """
    Check a remote result for the error marker.

    Raises:
        RemoteCallError: If the result reports a failure.
    """
    if result.startswith(ERROR_MARKER):
        raise RemoteCallError(result[len(ERROR_MARKER):])
    return result


def decode_result(result: str) -> JsonValue:
    """Unwrap the result of a remote decode call and parse its JSON payload."""
    return orjson.loads(unwrap_result(result))
