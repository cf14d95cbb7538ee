"""Command-line interface for Conway's Game of Life."""

import argparse
import sys
import time
from typing import Callable, Optional, Tuple

import numpy as np

from ..core import loader
from ..core.clock import IterationClock
from ..core.config import SimulationConfig
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import PatternLibrary, load_grid_file


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize CLI interface.

        Args:
            storage_dir: Directory with saved patterns (defaults to 'patterns')
        """
        self.pattern_library = PatternLibrary(storage_dir)
        self.pattern_library.load_all_patterns()

    def build_grid(self, config: SimulationConfig, verbose: bool = False) -> Grid:
        """Create the starting grid described by a configuration.

        A load file takes precedence over a named pattern, which takes
        precedence over a random window.

        Raises:
            FileNotFoundError: If the load file doesn't exist
            ParseError: If a coordinate list file is malformed
        """
        grid = Grid()

        if config.load_path:
            if verbose:
                print(f"Loading cells from {config.load_path}")
            source = load_grid_file(config.load_path)
            grid.merge(source, (config.pattern_x, config.pattern_y))
            return grid

        if config.pattern:
            pattern = self.pattern_library.get_pattern(config.pattern)
            if pattern:
                if verbose:
                    print(f"Loading pattern '{config.pattern}' at ({config.pattern_x}, {config.pattern_y})")
                pattern.apply_to_grid(grid, config.pattern_x, config.pattern_y)
                return grid
            print(f"Warning: Pattern '{config.pattern}' not found, using random population")

        if config.seed is not None:
            np.random.seed(config.seed)

        if verbose:
            print(
                f"Generating random {config.random_width}x{config.random_height} window "
                f"(rate: {config.population_rate:.2%})"
            )
        grid.randomize(config.population_rate, config.random_width, config.random_height)
        return grid

    def run_simulation(
        self,
        config: SimulationConfig,
        generations: Optional[int] = None,
        verbose: bool = False,
        show_grid: bool = False,
        animate: bool = False,
        save_path: Optional[str] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Tuple[int, str, dict]:
        """Run a Game of Life simulation.

        Args:
            config: What to load and how far to run
            generations: Run exactly this many steps instead of until stable
            verbose: Print progress updates
            show_grid: Show initial and final grid states
            animate: Print every generation at config.iterations_per_second
            save_path: Write the final cells to this coordinate list file
            sleep: Pause function used between animation frames

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        grid = self.build_grid(config, verbose)
        game = GameOfLife(grid)

        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(grid))

        start_time = time.time()

        if animate:
            steps = generations if generations is not None else config.max_generations
            clock = IterationClock(config.iterations_per_second)
            final_generation, reason = self._animate(game, steps, clock, sleep)
        elif generations is not None:
            if verbose:
                print(f"\nRunning simulation for {generations} generations...")
            final_generation, reason = self._run_generations(game, generations)
        else:
            if verbose:
                print(f"\nRunning simulation (max {config.max_generations} generations)...")
            final_generation, reason = game.run_until_stable(config.max_generations)

        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(self._format_grid(grid))

        if save_path:
            loader.dump(grid, save_path)
            if verbose:
                print(f"Saved {grid.population} cells to {save_path}")

        return final_generation, reason, stats

    def _run_generations(self, game: GameOfLife, generations: int) -> Tuple[int, str]:
        """Step a fixed number of times, stopping early on extinction."""
        for _ in range(generations):
            game.step()
            if game.population == 0:
                return game.generation, "extinction"
        return game.generation, "generations"

    def _animate(
        self,
        game: GameOfLife,
        generations: int,
        clock: IterationClock,
        sleep: Callable[[float], None],
    ) -> Tuple[int, str]:
        """Print one frame per clock tick until the step budget runs out."""
        clock.start()
        steps = 0
        while steps < generations:
            if not clock.update():
                sleep(clock.interval / 10)
                continue

            game.step()
            steps += 1
            print(f"\nGeneration {game.generation} (population {game.population}):")
            print(self._format_grid(game.grid))

            if game.population == 0:
                return game.generation, "extinction"

        return game.generation, "generations"

    def _format_grid(self, grid: Grid, max_size: int = 50) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        bbox = grid.get_bounding_box()
        if bbox is None:
            return "(empty)"

        width = bbox[2] - bbox[0] + 1
        height = bbox[3] - bbox[1] + 1
        if width > max_size or height > max_size:
            return f"Grid too large to display ({width}x{height})"

        return f"Origin ({bbox[0]}, {bbox[1]}):\n{grid}"

    def list_patterns(self) -> None:
        """List available patterns by category."""
        categories = self.pattern_library.get_patterns_by_category()

        print("Available patterns:")
        for category, patterns in categories.items():
            print(f"\n{category}:")
            for pattern_name in patterns:
                pattern = self.pattern_library.get_pattern(pattern_name)
                if pattern:
                    size = pattern.get_size()
                    print(f"  {pattern_name}: {size[0]}x{size[1]}, {len(pattern.cells)} cells")
                    if pattern.description:
                        print(f"    {pattern.description}")


def parse_random_size(value: str) -> Tuple[int, int]:
    """Parse a WIDTHxHEIGHT window size.

    Raises:
        ValueError: If the value is not two positive integers
    """
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Random window must look like WIDTHxHEIGHT, got '{value}'")

    width, height = int(parts[0]), int(parts[1])
    if width <= 0 or height <= 0:
        raise ValueError(f"Random window must be positive, got '{value}'")
    return width, height


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on an unbounded plane",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a glider for 40 generations and print it
  sparselife --pattern Glider -g 40 --show-grid

  # Load a coordinate list (one "x,y" per line) and run until stable
  sparselife --load glider.txt --verbose

  # Random 60x40 soup with 25% population, reproducible
  sparselife --random 60x40 --population 0.25 --seed 7

  # Animate a blinker at 2 generations per second
  sparselife --pattern Blinker -g 6 --animate --rate 2

  # List available patterns
  sparselife --list-patterns
        """,
    )

    # Starting cells
    parser.add_argument(
        "--load",
        type=str,
        help="Coordinate list (.txt) or pattern (.json) file to start from",
    )

    parser.add_argument(
        "-p",
        "--pattern",
        type=str,
        help="Load a library pattern instead of random population",
    )

    parser.add_argument(
        "--pattern-x",
        type=int,
        default=0,
        help="X offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--pattern-y",
        type=int,
        default=0,
        help="Y offset for pattern placement (default: 0)",
    )

    parser.add_argument(
        "--random",
        type=str,
        default="50x50",
        help="Window filled at random when no pattern is given (default: 50x50)",
    )

    parser.add_argument(
        "--population",
        type=float,
        default=0.3,
        help="Initial random population rate 0.0-1.0 (default: 0.3)",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible populations",
    )

    # Simulation configuration
    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        help="Run exactly this many generations",
    )

    parser.add_argument(
        "-m",
        "--max-generations",
        type=int,
        default=1000,
        help="Maximum generations when running until stable (default: 1000)",
    )

    parser.add_argument(
        "-r",
        "--rate",
        type=float,
        default=5.0,
        help="Generations per second when animating (default: 5)",
    )

    # Output configuration
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Print every generation at --rate generations per second",
    )

    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Display initial and final grid states (small patterns only)",
    )

    parser.add_argument(
        "--save",
        type=str,
        help="Write the final cells to a coordinate list file",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print detailed progress information",
    )

    parser.add_argument(
        "--list-patterns",
        action="store_true",
        help="List all available patterns and exit",
    )

    return parser


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display.

    Args:
        reason: Finish reason from a simulation run
        stats: Statistics dictionary

    Returns:
        Formatted reason string
    """
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "generations":
        return f"Requested generations completed ({stats.get('generation', 0)})"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results.

    Args:
        final_generation: Final generation number
        reason: Finish reason
        stats: Statistics dictionary
        verbose: Whether to show detailed statistics
    """
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        if "duration_seconds" in stats:
            print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
            print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        initial_pop = stats["initial_population"]
        final_pop = stats["population"]
        duration = stats.get("duration_seconds", 0)
        speed = stats.get("generations_per_second", 0)

        print(f"Population: {initial_pop} -> {final_pop}, Duration: {duration:.3f}s, Speed: {speed:.0f} gen/s")


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.max_generations <= 0:
        errors.append("Max generations must be positive")

    if args.generations is not None and args.generations < 0:
        errors.append("Generations must not be negative")

    if args.rate <= 0:
        errors.append("Rate must be positive")

    if args.load and args.pattern:
        errors.append("Use either --load or --pattern, not both")

    try:
        parse_random_size(args.random)
    except ValueError as e:
        errors.append(str(e))

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Build a SimulationConfig from validated arguments."""
    random_width, random_height = parse_random_size(args.random)
    return SimulationConfig(
        iterations_per_second=args.rate,
        max_generations=args.max_generations,
        pattern=args.pattern,
        pattern_x=args.pattern_x,
        pattern_y=args.pattern_y,
        load_path=args.load,
        population_rate=args.population,
        random_width=random_width,
        random_height=random_height,
        seed=args.seed,
    )


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args()

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.pattern and not cli.pattern_library.get_pattern(args.pattern):
        available = cli.pattern_library.list_patterns()
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(available)}")
        print("Use --list-patterns to see detailed information")
        return 1

    config = config_from_args(args)

    try:
        final_generation, reason, stats = cli.run_simulation(
            config,
            generations=args.generations,
            verbose=args.verbose,
            show_grid=args.show_grid,
            animate=args.animate,
            save_path=args.save,
        )
        print_results(final_generation, reason, stats, args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (OSError, ValueError, KeyError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
