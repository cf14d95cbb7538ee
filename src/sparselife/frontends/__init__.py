"""Frontend interfaces for the Game of Life."""

from .camera import Camera
from .cli import CLIGameOfLife

__all__ = ["Camera", "CLIGameOfLife"]
