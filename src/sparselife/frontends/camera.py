"""Pan and zoom for viewing an unbounded grid."""

import math
from typing import Optional, Tuple


class Camera:
    """Maps screen pixels to grid cells and back.

    ``position`` is the screen location of the world origin in pixels and
    ``scale`` the zoom factor; one cell covers ``unit_size * scale`` pixels.
    """

    def __init__(self, unit_size: float = 10.0, zoom_multiplier: float = 1.2) -> None:
        """Initialize the camera.

        Args:
            unit_size: Cell size in pixels at scale 1
            zoom_multiplier: Scale change per wheel notch
        """
        if unit_size <= 0:
            raise ValueError(f"Unit size must be positive, got {unit_size}")
        if zoom_multiplier <= 1:
            raise ValueError(f"Zoom multiplier must be greater than 1, got {zoom_multiplier}")

        self.unit_size = unit_size
        self.zoom_multiplier = zoom_multiplier
        self.position: Tuple[float, float] = (0.0, 0.0)
        self.scale = 1.0

    @property
    def cell_size(self) -> float:
        """On-screen size of one cell in pixels."""
        return self.unit_size * self.scale

    def screen_to_world(self, px: float, py: float) -> Tuple[int, int]:
        """Get the cell under a screen pixel."""
        size = self.cell_size
        return (
            math.floor((px - self.position[0]) / size),
            math.floor((py - self.position[1]) / size),
        )

    def world_to_screen(self, x: int, y: int) -> Tuple[float, float]:
        """Get the screen position of a cell's top-left corner."""
        size = self.cell_size
        return (self.position[0] + x * size, self.position[1] + y * size)

    def pan(self, dx: float, dy: float) -> None:
        """Move the view by a pixel offset."""
        self.position = (self.position[0] + dx, self.position[1] + dy)

    def center_on(self, x: float, y: float, width: int, height: int) -> None:
        """Put a world point at the middle of a width x height view."""
        size = self.cell_size
        self.position = (width / 2 - x * size, height / 2 - y * size)

    def zoom(self, delta: int, anchor: Optional[Tuple[float, float]] = None) -> None:
        """Zoom by whole wheel notches.

        Args:
            delta: Positive zooms in, negative zooms out
            anchor: Screen pixel that stays over the same world point
        """
        if delta == 0:
            return

        old_scale = self.scale
        self.scale = old_scale * self.zoom_multiplier ** delta

        if anchor is not None:
            ratio = self.scale / old_scale
            ax, ay = anchor
            self.position = (
                ax - (ax - self.position[0]) * ratio,
                ay - (ay - self.position[1]) * ratio,
            )

    def visible_range(self, width: int, height: int) -> Tuple[int, int, int, int]:
        """Cells visible in a width x height view, with a one-cell margin.

        Returns:
            Inclusive (min_x, min_y, max_x, max_y)
        """
        size = self.cell_size
        min_x = math.floor(-self.position[0] / size) - 1
        min_y = math.floor(-self.position[1] / size) - 1
        max_x = math.floor((width - self.position[0]) / size) + 1
        max_y = math.floor((height - self.position[1]) / size) + 1
        return (min_x, min_y, max_x, max_y)

    def is_visible(self, x: int, y: int, width: int, height: int) -> bool:
        """Whether a cell falls inside visible_range()."""
        min_x, min_y, max_x, max_y = self.visible_range(width, height)
        return min_x <= x <= max_x and min_y <= y <= max_y
