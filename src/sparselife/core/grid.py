"""Sparse grid data structure for Conway's Game of Life on an unbounded plane."""

from typing import FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple
import numpy as np

Coordinate = Tuple[int, int]

# Moore neighbourhood offsets
NEIGHBOR_OFFSETS: Tuple[Coordinate, ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class Grid:
    """Holds the alive cells of an unbounded Game of Life plane.

    Only living cells are stored, as a set of (x, y) coordinates. Absence
    from the set means the cell is dead, so the plane has no edges and the
    cost of a generation depends on the number of living cells rather than
    on any area.
    """

    def __init__(self, cells: Optional[Iterable[Coordinate]] = None) -> None:
        """Initialize a new grid.

        Args:
            cells: Optional initial living cells
        """
        self._cells: Set[Coordinate] = set()
        self._previous_cells: FrozenSet[Coordinate] = frozenset()
        self._generation = 0

        if cells is not None:
            self.add_all(cells)

    @property
    def cells(self) -> FrozenSet[Coordinate]:
        """Snapshot of the living cells."""
        return frozenset(self._cells)

    @property
    def previous_cells(self) -> FrozenSet[Coordinate]:
        """Living cells recorded by the last save_state()."""
        return self._previous_cells

    @property
    def generation(self) -> int:
        """Number of completed iterations."""
        return self._generation

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.cells)

    def add(self, coord: Coordinate) -> None:
        """Bring a cell to life. Adding a living cell does nothing."""
        self._cells.add((coord[0], coord[1]))

    def remove(self, coord: Coordinate) -> None:
        """Kill a cell. Removing a dead cell does nothing."""
        self._cells.discard((coord[0], coord[1]))

    def add_all(self, coords: Iterable[Coordinate]) -> None:
        """Add every coordinate, in order."""
        for coord in coords:
            self.add(coord)

    def remove_all(self, coords: Iterable[Coordinate]) -> None:
        """Remove every coordinate, in order."""
        for coord in coords:
            self.remove(coord)

    def clear(self) -> None:
        """Kill all cells. The generation counter is kept."""
        self._cells = set()

    def reset_generation(self, generation: int = 0) -> None:
        """Set the generation counter, back to zero by default."""
        if generation < 0:
            raise ValueError(f"Generation must not be negative, got {generation}")
        self._generation = generation

    def merge(self, other: "Grid", offset: Coordinate = (0, 0)) -> None:
        """Stamp the living cells of another grid into this one.

        Args:
            other: Source grid, left unchanged
            offset: Translation applied to every source cell
        """
        dx, dy = offset
        for x, y in other.cells:
            self.add((x + dx, y + dy))

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead
        """
        return (x, y) in self._cells

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate
            alive: Whether the cell should be alive
        """
        if alive:
            self.add((x, y))
        else:
            self.remove((x, y))

    def toggle_cell(self, x: int, y: int) -> bool:
        """Toggle the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            New state of the cell
        """
        new_state = not self.get_cell(x, y)
        self.set_cell(x, y, new_state)
        return new_state

    @staticmethod
    def neighbors_of(coord: Coordinate) -> List[Coordinate]:
        """Get the eight Moore neighbours of a coordinate."""
        x, y = coord
        return [(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]

    def count_living_neighbors(self, coord: Coordinate) -> int:
        """Count living neighbors of a cell.

        Returns:
            Number of living neighbors (0-8)
        """
        cells = self._cells
        return sum(1 for neighbor in self.neighbors_of(coord) if neighbor in cells)

    def should_survive(self, coord: Coordinate) -> bool:
        """Whether a cell is alive in the next generation.

        A living cell survives with 2 or 3 living neighbors, a dead cell is
        born with exactly 3. Evaluated against the current generation.
        """
        count = self.count_living_neighbors(coord)
        if coord in self._cells:
            return count == 2 or count == 3
        return count == 3

    def iterate(self) -> None:
        """Advance the simulation by one generation.

        Only living cells and their neighbours are candidates. Each distinct
        candidate is marked visited right before it is tested, so it is
        evaluated exactly once however many living cells border it.
        """
        cells = self._cells
        next_cells: Set[Coordinate] = set()
        visited: Set[Coordinate] = set()

        for cell in cells:
            for neighbor in self.neighbors_of(cell):
                # Living neighbours are handled by the outer loop
                if neighbor in cells or neighbor in visited:
                    continue

                visited.add(neighbor)
                if self.should_survive(neighbor):
                    next_cells.add(neighbor)

            if cell in visited:
                continue

            visited.add(cell)
            if self.should_survive(cell):
                next_cells.add(cell)

        self._cells = next_cells
        self._generation += 1

    def randomize(
        self,
        probability: float,
        width: int,
        height: int,
        origin: Coordinate = (0, 0),
    ) -> None:
        """Randomly populate a rectangular window of the plane.

        Cells inside the window are replaced, cells outside it are kept.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            width: Window width in cells
            height: Window height in cells
            origin: Top-left cell of the window

        Raises:
            ValueError: If probability or window size is invalid
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0 and 1, got {probability}")
        if width < 0 or height < 0:
            raise ValueError(f"Window size must not be negative, got {width}x{height}")

        ox, oy = origin
        self._cells = {
            (x, y)
            for x, y in self._cells
            if not (ox <= x < ox + width and oy <= y < oy + height)
        }

        mask = np.random.random((width, height)) < probability
        xs, ys = np.nonzero(mask)
        for x, y in zip(xs, ys):
            self._cells.add((int(x) + ox, int(y) + oy))

    def copy(self) -> "Grid":
        """Return an independent grid with the same cells and generation."""
        other = Grid(self._cells)
        other._generation = self._generation
        return other

    def save_state(self) -> None:
        """Save current cells as the previous state."""
        self._previous_cells = frozenset(self._cells)

    def get_changed_cells(self) -> Iterator[Coordinate]:
        """Get coordinates of cells that changed since last save_state().

        Yields:
            Tuples of (x, y) coordinates for changed cells
        """
        for coord in self._previous_cells.symmetric_difference(self._cells):
            yield coord

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        if not self._cells:
            return None

        xs = [x for x, _ in self._cells]
        ys = [y for _, y in self._cells]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_array(self, bbox: Optional[Tuple[int, int, int, int]] = None) -> np.ndarray:
        """Rasterize living cells inside a box.

        Args:
            bbox: (min_x, min_y, max_x, max_y), defaults to the bounding box

        Returns:
            int8 array indexed [x - min_x, y - min_y]
        """
        if bbox is None:
            bbox = self.get_bounding_box()
            if bbox is None:
                return np.zeros((0, 0), dtype=np.int8)

        min_x, min_y, max_x, max_y = bbox
        arr = np.zeros((max_x - min_x + 1, max_y - min_y + 1), dtype=np.int8)
        for x, y in self._cells:
            if min_x <= x <= max_x and min_y <= y <= max_y:
                arr[x - min_x, y - min_y] = 1
        return arr

    def to_list(self) -> list:
        """Convert living cells to a sorted list of [x, y] pairs."""
        return [[x, y] for x, y in sorted(self._cells)]

    def from_list(self, data: list) -> None:
        """Replace living cells with [x, y] pairs from a list.

        Raises:
            ValueError: If an entry is not a pair of integers
        """
        cells = set()
        for entry in data:
            if len(entry) != 2:
                raise ValueError(f"Expected [x, y] pair, got {entry!r}")
            cells.add((int(entry[0]), int(entry[1])))
        self._cells = cells

    def __eq__(self, other: object) -> bool:
        """Check if two grids have the same living cells."""
        if not isinstance(other, Grid):
            return False
        return self._cells == other._cells

    def __str__(self) -> str:
        """Bounding box of the grid with living cells as '*' and dead as '.'."""
        bbox = self.get_bounding_box()
        if bbox is None:
            return ""

        min_x, min_y, max_x, max_y = bbox
        result = []
        for y in range(min_y, max_y + 1):
            row = []
            for x in range(min_x, max_x + 1):
                row.append("*" if (x, y) in self._cells else ".")
            result.append("".join(row))
        return "\n".join(result)

    def __repr__(self) -> str:
        return f"Grid(population={len(self._cells)}, generation={self._generation})"
