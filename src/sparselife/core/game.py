"""Conway's Game of Life simulation driver."""

from typing import Deque, Dict, FrozenSet, Tuple
from collections import deque
import numpy as np

from .grid import Coordinate, Grid


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Steps a sparse Grid and keeps track of what happens to it:
    population history and repetition of earlier states (cycles).
    The grid holds the generation counter; this class only reads it.
    """

    def __init__(self, grid: Grid) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The sparse grid to simulate
        """
        self.grid = grid
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[FrozenSet[Coordinate]] = deque(maxlen=1000)
        self._seen_states: Dict[FrozenSet[Coordinate], int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        # Track initial population
        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self.grid.generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self.grid.save_state()
        self._check_for_cycles()
        self.grid.iterate()
        self._update_population_history()

    def _update_population_history(self) -> None:
        """Update the population history."""
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current state has been seen before (cycle detection)."""
        if self._cycle_detected:
            return

        current_state = self.grid.previous_cells
        generation = self.generation

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            return

        # Forget the oldest state once the history window is full
        if len(self._state_history) == self._state_history.maxlen:
            old_state = self._state_history[0]
            if self._seen_states.get(old_state) == generation - len(self._state_history):
                del self._seen_states[old_state]

        self._seen_states[current_state] = generation
        self._state_history.append(current_state)

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self.grid.reset_generation()
        self._population_history.clear()
        self.clear_cycle_detection()

        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Clear cycle detection state while preserving generation and population history.

        Call this after the grid is edited by hand, since earlier states no
        longer lead to the current one.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it becomes stable or cycles.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self.generation, "cycle"

            if self.population == 0:
                return self.generation, "extinction"

        return self.generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Calculate recent population change rate.

        Args:
            window_size: Number of recent generations to consider

        Returns:
            Average population change per generation
        """
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        changes = np.diff(recent_history)
        return float(np.mean(changes))

    def save_state(self) -> Dict:
        """Save complete game state for serialization.

        Returns:
            Dictionary containing all game state
        """
        return {
            "generation": self.generation,
            "cells": self.grid.to_list(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

    def load_state(self, state: Dict) -> None:
        """Load complete game state from serialization.

        Args:
            state: Dictionary containing game state

        Raises:
            KeyError: If a required field is missing
            ValueError: If the cell list is malformed
        """
        self.grid.from_list(state["cells"])
        self.grid.reset_generation(int(state["generation"]))

        self._population_history = deque(state.get("population_history", [self.population]), maxlen=100)
        self._cycle_detected = state.get("cycle_detected", False)
        self._cycle_length = state.get("cycle_length", 0)
        self._cycle_start_generation = state.get("cycle_start_generation", 0)

        # State history is not serialized
        self._state_history.clear()
        self._seen_states.clear()

    def get_statistics(self) -> Dict:
        """Get comprehensive simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.grid.get_bounding_box()

        stats = {
            "generation": self.generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_width = bbox[2] - bbox[0] + 1
            box_height = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
