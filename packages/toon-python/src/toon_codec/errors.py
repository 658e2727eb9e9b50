"""Error hierarchy for the TOON codec."""


class ToonError(Exception):
    """Base class for every error raised by the codec."""


class DecodeError(ToonError, ValueError):
    """A document could not be decoded.

    Attributes:
        line_number: 1-based source line the problem was found on, or None
            when the problem is not tied to a single line.
        message: Short description without the line prefix.
    """

    def __init__(self, message: str, line_number: int | None = None):
        self.message = message
        self.line_number = line_number
        if line_number is None:
            super().__init__(message)
        else:
            super().__init__(f"line {line_number}: {message}")


class ScanError(DecodeError):
    """Malformed indentation: tabs used for indentation or a width mismatch."""


class StructureError(DecodeError):
    """Header/count mismatch, illegal depth jump or stray content."""


class QuotingError(DecodeError):
    """Unterminated quoted token or invalid escape sequence."""


class UnsupportedValueError(ToonError, ValueError):
    """A host value has no representation in the TOON data model.

    Attributes:
        path: Location of the offending value, e.g. ``$.users[2].joined``.
        message: Short description without the path prefix.
    """

    def __init__(self, message: str, path: str = "$"):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}")
