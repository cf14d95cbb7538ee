"""Tests for the Grid class."""

from collections import Counter
from unittest.mock import patch

import numpy as np
import pytest
from sparselife.core.grid import Grid


def shift(cells, dx, dy):
    return {(x + dx, y + dy) for x, y in cells}


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid()
        assert grid.population == 0
        assert grid.generation == 0
        assert grid.cells == frozenset()
        assert grid.get_bounding_box() is None

    def test_initialization_with_cells(self):
        """Test grid initialization from an iterable of cells."""
        grid = Grid([(0, 0), (1, 1), (0, 0)])
        assert grid.cells == {(0, 0), (1, 1)}
        assert len(grid) == 2

    def test_add_is_idempotent(self):
        """Adding a living cell twice changes nothing."""
        grid = Grid()
        grid.add((3, -4))
        once = grid.cells
        grid.add((3, -4))
        assert grid.cells == once == {(3, -4)}

    def test_remove_is_idempotent(self):
        """Removing a dead cell does nothing."""
        grid = Grid([(1, 1), (2, 2)])
        grid.remove((1, 1))
        grid.remove((1, 1))
        grid.remove((50, 50))
        assert grid.cells == {(2, 2)}

    def test_add_all_and_remove_all(self):
        """Test bulk mutation."""
        grid = Grid()
        grid.add_all([(0, 0), (1, 0), (2, 0), (1, 0)])
        assert grid.population == 3

        grid.remove_all(iter([(0, 0), (9, 9)]))
        assert grid.cells == {(1, 0), (2, 0)}

    def test_unbounded_coordinates(self):
        """Cells can live anywhere on the plane."""
        grid = Grid()
        far = 10 ** 12
        grid.add((-far, far))
        assert grid.get_cell(-far, far)
        assert (-far, far) in grid

    def test_clear_keeps_generation(self):
        """Test grid clearing."""
        grid = Grid([(0, 0), (0, 1), (1, 0), (1, 1)])
        grid.iterate()
        grid.iterate()

        grid.clear()
        assert grid.population == 0
        assert grid.generation == 2

    def test_reset_generation(self):
        """Test resetting and setting the generation counter."""
        grid = Grid()
        grid.iterate()
        grid.reset_generation()
        assert grid.generation == 0

        grid.reset_generation(7)
        assert grid.generation == 7

        with pytest.raises(ValueError):
            grid.reset_generation(-1)

    def test_cell_operations(self):
        """Test basic cell get/set operations."""
        grid = Grid()
        assert not grid.get_cell(0, 0)

        grid.set_cell(1, 1, True)
        grid.set_cell(-2, 3, True)
        assert grid.get_cell(1, 1)
        assert grid.get_cell(-2, 3)

        grid.set_cell(1, 1, False)
        assert not grid.get_cell(1, 1)

    def test_toggle_cell(self):
        """Test cell toggling."""
        grid = Grid()

        assert grid.toggle_cell(2, 2) is True
        assert grid.get_cell(2, 2) is True

        assert grid.toggle_cell(2, 2) is False
        assert grid.get_cell(2, 2) is False

    def test_merge(self):
        """Merging stamps the other grid's cells at an offset."""
        glider = Grid([(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)])
        grid = Grid()

        grid.merge(glider, (10, -5))

        assert grid.cells == shift(glider.cells, 10, -5)
        assert glider.cells == {(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)}

    def test_merge_default_offset_and_overlap(self):
        """Merging without offset unions the cells."""
        grid = Grid([(0, 0), (5, 5)])
        grid.merge(Grid([(0, 0), (1, 1)]))
        assert grid.cells == {(0, 0), (1, 1), (5, 5)}

    def test_merge_empty_is_noop(self):
        """Merging an empty grid changes nothing."""
        grid = Grid([(4, 4)])
        grid.merge(Grid(), (3, 3))
        assert grid.cells == {(4, 4)}

    def test_merge_into_itself(self):
        """A grid can be merged into itself."""
        grid = Grid([(0, 0), (1, 0)])
        grid.merge(grid, (0, 1))
        assert grid.cells == {(0, 0), (1, 0), (0, 1), (1, 1)}

    def test_neighbors_of(self):
        """The Moore neighbourhood has eight distinct cells."""
        neighbors = Grid.neighbors_of((5, -2))
        assert len(neighbors) == 8
        assert set(neighbors) == {
            (4, -3), (5, -3), (6, -3),
            (4, -2), (6, -2),
            (4, -1), (5, -1), (6, -1),
        }

    def test_count_living_neighbors(self):
        """Test neighbor counting for individual cells."""
        grid = Grid([(1, 1), (1, 2), (2, 1)])

        assert grid.count_living_neighbors((0, 0)) == 1
        assert grid.count_living_neighbors((2, 2)) == 3
        assert grid.count_living_neighbors((1, 1)) == 2  # cell itself doesn't count
        assert grid.count_living_neighbors((3, 3)) == 0

    def test_count_living_neighbors_full(self):
        """A cell surrounded on all sides has eight neighbors."""
        grid = Grid(Grid.neighbors_of((0, 0)))
        assert grid.count_living_neighbors((0, 0)) == 8

    def test_should_survive(self):
        """Test Conway's rule for living and dead cells."""
        grid = Grid([(0, 0), (1, 0), (2, 0)])

        assert grid.should_survive((1, 0))  # alive, 2 neighbors
        assert not grid.should_survive((0, 0))  # alive, 1 neighbor
        assert grid.should_survive((1, 1))  # dead, 3 neighbors
        assert not grid.should_survive((0, 1))  # dead, 2 neighbors

    def test_should_survive_overcrowding(self):
        """A living cell with four neighbors dies."""
        grid = Grid([(0, 0), (-1, -1), (1, -1), (-1, 1), (1, 1)])
        assert not grid.should_survive((0, 0))

    def test_still_life_block(self):
        """A 2x2 block is unchanged by an iteration."""
        block = {(0, 0), (1, 0), (0, 1), (1, 1)}
        grid = Grid(block)

        grid.iterate()

        assert grid.cells == block
        assert grid.generation == 1

    def test_blinker_oscillates(self):
        """A vertical blinker turns horizontal and back."""
        vertical = {(0, -1), (0, 0), (0, 1)}
        horizontal = {(-1, 0), (0, 0), (1, 0)}
        grid = Grid(vertical)

        grid.iterate()
        assert grid.cells == horizontal

        grid.iterate()
        assert grid.cells == vertical
        assert grid.generation == 2

    def test_glider_translation(self):
        """A glider reappears shifted by (1, 1) after four generations."""
        glider = {(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)}
        grid = Grid(glider)

        for _ in range(4):
            grid.iterate()

        assert grid.cells == shift(glider, 1, 1)

    def test_glider_crosses_negative_coordinates(self):
        """Movement through negative coordinates works the same way."""
        glider = shift({(1, 0), (2, 1), (0, 2), (1, 2), (2, 2)}, -20, -20)
        grid = Grid(glider)

        for _ in range(40):
            grid.iterate()

        assert grid.cells == shift(glider, 10, 10)

    def test_birth_with_three_neighbors(self):
        """A dead cell with exactly three living neighbors is born."""
        grid = Grid([(-1, -1), (1, -1), (0, 1)])
        grid.iterate()
        assert (0, 0) in grid

    @pytest.mark.parametrize(
        "cells",
        [
            [(-1, -1), (1, 1)],
            [(-1, -1), (1, -1), (-1, 1), (1, 1)],
        ],
    )
    def test_no_birth_with_two_or_four_neighbors(self, cells):
        """A dead cell with two or four living neighbors stays dead."""
        grid = Grid(cells)
        grid.iterate()
        assert (0, 0) not in grid

    def test_empty_grid_iteration(self):
        """An empty grid stays empty but still counts the generation."""
        grid = Grid()
        grid.iterate()
        assert grid.population == 0
        assert grid.generation == 1

    def test_single_cell_dies(self):
        """Test pattern that goes extinct."""
        grid = Grid([(5, 5)])
        grid.iterate()
        assert grid.population == 0

    def test_iterate_evaluates_each_candidate_once(self):
        """Every living cell and bordering dead cell is tested exactly once."""
        grid = Grid([(0, -1), (0, 0), (0, 1)])
        expected = set(grid.cells)
        for cell in grid.cells:
            expected.update(Grid.neighbors_of(cell))

        calls = []
        original = Grid.should_survive

        def recording(self, coord):
            calls.append(coord)
            return original(self, coord)

        with patch.object(Grid, "should_survive", recording):
            grid.iterate()

        counts = Counter(calls)
        assert set(counts) == expected
        assert all(count == 1 for count in counts.values())

    def test_iterate_uses_current_generation_only(self):
        """Births in this step do not influence other cells in the same step."""
        # An L-tromino becomes a block; the newborn corner must not
        # count as a neighbour while the step is computed
        grid = Grid([(0, 0), (1, 0), (0, 1)])
        grid.iterate()
        assert grid.cells == {(0, 0), (1, 0), (0, 1), (1, 1)}

    def test_cells_is_snapshot(self):
        """The cells property does not change with the grid."""
        grid = Grid([(0, -1), (0, 0), (0, 1)])
        snapshot = grid.cells
        grid.iterate()
        assert snapshot == {(0, -1), (0, 0), (0, 1)}
        assert grid.cells != snapshot

    def test_iteration_over_grid_is_snapshot(self):
        """Mutating the grid while iterating over it is safe."""
        grid = Grid([(0, 0), (1, 1)])
        for x, y in grid:
            grid.add((x + 10, y))
        assert grid.population == 4

    def test_randomize(self):
        """Test random population of a window."""
        grid = Grid([(-5, -5), (2, 2)])

        grid.randomize(0.0, 10, 10)
        assert grid.cells == {(-5, -5)}

        grid.randomize(1.0, 10, 10)
        assert grid.population == 101

        grid.randomize(1.0, 3, 2, origin=(100, 200))
        assert {(100, 200), (102, 201)} <= grid.cells

    def test_randomize_intermediate(self):
        """Intermediate probability fills roughly that share of the window."""
        np.random.seed(0)
        grid = Grid()
        grid.randomize(0.5, 10, 10)
        assert 30 <= grid.population <= 70
        bbox = grid.get_bounding_box()
        assert bbox[0] >= 0 and bbox[1] >= 0 and bbox[2] <= 9 and bbox[3] <= 9

    def test_randomize_invalid(self):
        """Invalid probabilities and windows are rejected."""
        grid = Grid()
        with pytest.raises(ValueError):
            grid.randomize(1.5, 10, 10)
        with pytest.raises(ValueError):
            grid.randomize(0.5, -1, 10)

    def test_copy(self):
        """A copy is independent of the original."""
        grid = Grid([(0, 0)])
        grid.iterate()
        grid.add((1, 1))

        other = grid.copy()
        other.add((2, 2))

        assert other.generation == grid.generation
        assert (2, 2) not in grid
        assert (1, 1) in other

    def test_save_and_get_changed_cells(self):
        """Test state saving and change detection."""
        grid = Grid([(1, 1), (2, 2)])
        grid.save_state()

        grid.remove((1, 1))
        grid.add((3, 3))

        changed = set(grid.get_changed_cells())
        assert changed == {(1, 1), (3, 3)}
        assert grid.previous_cells == {(1, 1), (2, 2)}

    def test_get_bounding_box(self):
        """Test bounding box calculation."""
        grid = Grid()
        grid.add((5, 3))
        assert grid.get_bounding_box() == (5, 3, 5, 3)

        grid.add((-2, 1))
        grid.add((7, 8))
        assert grid.get_bounding_box() == (-2, 1, 7, 8)

    def test_to_array(self):
        """Test rasterizing the bounding box."""
        grid = Grid([(-1, 0), (1, 2)])
        arr = grid.to_array()

        assert arr.shape == (3, 3)
        assert arr.dtype == np.int8
        assert arr[0, 0] == 1
        assert arr[2, 2] == 1
        assert arr.sum() == 2

        window = grid.to_array((0, 0, 1, 1))
        assert window.shape == (2, 2)
        assert window.sum() == 0

        assert Grid().to_array().shape == (0, 0)

    def test_to_list_and_from_list(self):
        """Test serialization to/from lists."""
        grid = Grid([(2, 2), (0, 0), (-1, 5)])
        data = grid.to_list()
        assert data == [[-1, 5], [0, 0], [2, 2]]

        other = Grid([(9, 9)])
        other.from_list(data)
        assert other == grid

        with pytest.raises(ValueError):
            other.from_list([[1, 2, 3]])

    def test_equality(self):
        """Test grid equality comparison."""
        assert Grid() == Grid()
        assert Grid([(1, 1)]) == Grid([(1, 1)])
        assert Grid([(1, 1)]) != Grid([(1, 1), (2, 2)])
        assert Grid() != "not a grid"

    def test_string_representation(self):
        """Test string representation."""
        assert str(Grid()) == ""

        grid = Grid([(0, 0), (1, 1), (2, 2)])
        assert str(grid) == "*..\n.*.\n..*"

        grid = Grid([(-1, 0), (0, 0), (1, 0)])
        assert str(grid) == "***"
