"""Conway's Game of Life on an unbounded plane, with a sparse cell set."""

__version__ = "0.1.0"

from .core.grid import Grid
from .core.game import GameOfLife
from .core.loader import ParseError
from .core.patterns import Pattern, PatternLibrary

__all__ = ["Grid", "GameOfLife", "ParseError", "Pattern", "PatternLibrary"]
