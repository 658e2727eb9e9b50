"""Line accumulator used by the encoder."""


class LineWriter:
    """Collects encoded lines, applying indentation per depth."""

    def __init__(self, indent: int = 2):
        self._indent_unit = " " * indent
        self._lines: list[str] = []

    def push(self, depth: int, content: str) -> None:
        """Append one line at the given nesting depth."""
        self._lines.append(self._indent_unit * depth + content)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)
