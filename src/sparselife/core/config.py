"""Run and display settings."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""
    iterations_per_second: float = 5.0
    max_generations: int = 1000
    pattern: Optional[str] = None
    pattern_x: int = 0
    pattern_y: int = 0
    load_path: Optional[str] = None
    population_rate: float = 0.3
    random_width: int = 0
    random_height: int = 0
    seed: Optional[int] = None


@dataclass
class ViewConfig:
    """Configuration for the interactive viewer."""
    width: int = 640
    height: int = 400
    unit_size: float = 10.0
    zoom_multiplier: float = 1.2
    active_color: str = "#00FF00"
    background: str = "black"
    slower_factor: float = 0.8
    faster_factor: float = 1.25
    frame_delay_ms: int = 16
