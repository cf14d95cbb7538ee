"""Core Game of Life logic."""

from .grid import Grid, Coordinate
from .game import GameOfLife
from .clock import IterationClock
from .config import SimulationConfig, ViewConfig
from .loader import ParseError, load, loads, dump, dumps
from .patterns import Pattern, PatternLibrary, load_grid_file

__all__ = [
    "Grid",
    "Coordinate",
    "GameOfLife",
    "IterationClock",
    "SimulationConfig",
    "ViewConfig",
    "ParseError",
    "load",
    "loads",
    "dump",
    "dumps",
    "Pattern",
    "PatternLibrary",
    "load_grid_file",
]
