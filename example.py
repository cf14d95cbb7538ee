#!/usr/bin/env python3
"""
Example usage of the sparselife package.
"""

from sparselife import Grid, GameOfLife, PatternLibrary
from sparselife.core import dumps


def main():
    """Demonstrate programmatic usage of the sparselife package."""
    # The grid has no edges, so place the glider anywhere
    grid = Grid()
    game = GameOfLife(grid)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        glider.apply_to_grid(grid, offset_x=-5, offset_y=-5)

        print("Initial state:")
        print(grid)
        print(f"Population: {game.population}")
        print()

        # Run simulation for 12 generations
        for i in range(12):
            game.step()
            print(f"Generation {game.generation}, bounding box {grid.get_bounding_box()}:")
            print(grid)

            if game.cycle_detected:
                print(f"Cycle detected! Length: {game.cycle_length}")
                break

            print()

    print("Coordinate list:")
    print(dumps(grid.cells), end="")

    # Show statistics
    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
