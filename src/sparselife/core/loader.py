"""Plain-text coordinate list format.

Each line holds one living cell as two decimal integers separated by a
comma, ``x,y``. There is no header.
"""

import re
from pathlib import Path
from typing import Iterable, Optional, Union

from .grid import Coordinate, Grid

# Plain ASCII decimal, optionally signed and padded with spaces
INTEGER_FIELD = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)


class ParseError(ValueError):
    """Raised when a coordinate list cannot be parsed."""

    def __init__(self, message: str, line_number: int, line: str, path: Optional[str] = None) -> None:
        self.line_number = line_number
        self.line = line
        self.path = path

        location = f"{path}, line {line_number}" if path else f"line {line_number}"
        super().__init__(f"{location}: {message} ({line!r})")


def parse_line(line: str, line_number: int, path: Optional[str] = None) -> Coordinate:
    """Parse a single ``x,y`` line.

    Raises:
        ParseError: If the line does not hold exactly two integers
    """
    fields = line.split(",")
    if len(fields) != 2:
        raise ParseError(f"expected 2 fields, got {len(fields)}", line_number, line, path)

    if not all(INTEGER_FIELD.fullmatch(field) for field in fields):
        raise ParseError("coordinates must be integers", line_number, line, path)

    return (int(fields[0]), int(fields[1]))


def loads(text: str, path: Optional[str] = None) -> Grid:
    """Build a grid from coordinate list text.

    Args:
        text: File contents
        path: Source name used in error messages

    Returns:
        New Grid holding every listed cell

    Raises:
        ParseError: On the first malformed line; nothing is returned
    """
    cells = [parse_line(line, number, path) for number, line in enumerate(text.splitlines(), start=1)]
    return Grid(cells)


def load(path: Union[str, Path]) -> Grid:
    """Load a grid from a coordinate list file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is malformed
    """
    with open(path, "r") as f:
        return loads(f.read(), str(path))


def dumps(cells: Iterable[Coordinate]) -> str:
    """Format cells as coordinate list text, sorted by (x, y)."""
    lines = [f"{x},{y}" for x, y in sorted(cells)]
    return "\n".join(lines) + "\n" if lines else ""


def dump(grid: Grid, path: Union[str, Path]) -> None:
    """Write the living cells of a grid to a coordinate list file."""
    with open(path, "w") as f:
        f.write(dumps(grid.cells))
