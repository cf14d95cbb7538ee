"""Fixed-cadence iteration clock."""

import time
from typing import Callable


class IterationClock:
    """Turns elapsed wall time into simulation ticks.

    The owner calls update() once per frame; it returns True when the
    simulation is due one generation. The clock never touches the grid.
    """

    def __init__(
        self,
        iterations_per_second: float = 5.0,
        time_source: Callable[[], float] = time.monotonic,
        slower_factor: float = 0.8,
        faster_factor: float = 1.25,
    ) -> None:
        """Initialize the clock.

        Args:
            iterations_per_second: Simulation speed
            time_source: Returns the current time in seconds
            slower_factor: Rate multiplier applied by slower()
            faster_factor: Rate multiplier applied by faster()

        Raises:
            ValueError: If the rate is not positive
        """
        self._time_source = time_source
        self._iterations_per_second = 0.0
        self.iterations_per_second = iterations_per_second
        self.slower_factor = slower_factor
        self.faster_factor = faster_factor

        self._start_time = time_source()
        self._last_update_time = 0.0
        self._last_iterate_time = 0.0

    @property
    def iterations_per_second(self) -> float:
        """Current simulation speed."""
        return self._iterations_per_second

    @iterations_per_second.setter
    def iterations_per_second(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"Iterations per second must be positive, got {value}")
        self._iterations_per_second = float(value)

    @property
    def interval(self) -> float:
        """Seconds between two iterations."""
        return 1.0 / self._iterations_per_second

    @property
    def elapsed_seconds(self) -> float:
        """Seconds since the clock was started."""
        return self._time_source() - self._start_time

    @property
    def delta_time(self) -> float:
        """Seconds since the last update() call."""
        return self.elapsed_seconds - self._last_update_time

    def start(self) -> None:
        """Restart timing from zero."""
        self._start_time = self._time_source()
        self._last_update_time = 0.0
        self._last_iterate_time = 0.0

    def update(self) -> bool:
        """Record a frame and report whether an iteration is due."""
        now = self.elapsed_seconds
        self._last_update_time = now

        if now - self._last_iterate_time > self.interval:
            self._last_iterate_time = now
            return True
        return False

    def slower(self) -> float:
        """Slow the simulation down and return the new rate."""
        self.iterations_per_second = self._iterations_per_second * self.slower_factor
        return self._iterations_per_second

    def faster(self) -> float:
        """Speed the simulation up and return the new rate."""
        self.iterations_per_second = self._iterations_per_second * self.faster_factor
        return self._iterations_per_second
