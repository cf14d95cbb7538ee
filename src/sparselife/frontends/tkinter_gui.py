"""Tkinter viewer for Conway's Game of Life on an unbounded plane."""

import argparse
import json
import os
import sys
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from typing import Any, Dict, List, Optional
from collections import deque

from ..core import loader
from ..core.clock import IterationClock
from ..core.config import ViewConfig
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.patterns import Pattern, PatternLibrary, load_grid_file
from .camera import Camera

# Pixels the pointer may move before a press counts as a drag
DRAG_THRESHOLD = 3


class TkinterLifeViewer:
    """Tkinter-based viewer for an unbounded Game of Life grid.

    Left drag pans, left click toggles a cell, right click adds one, the
    mouse wheel zooms and the Left/Right arrow keys change the speed.
    """

    def __init__(
        self,
        master: tk.Tk,
        grid: Optional[Grid] = None,
        config: Optional[ViewConfig] = None,
        iterations_per_second: float = 5.0,
        pattern_library: Optional[PatternLibrary] = None,
    ) -> None:
        """Initialize the viewer.

        Args:
            master: Root Tkinter window
            grid: Grid to show, a new empty one by default
            config: Display settings
            iterations_per_second: Initial simulation speed
            pattern_library: Patterns offered for stamping
        """
        self.master = master
        self.config = config or ViewConfig()
        self.master.title("Conway's Game of Life")
        self.master.configure(bg="#333333")

        self.canvas_width = self.config.width
        self.canvas_height = self.config.height

        self.grid = grid if grid is not None else Grid()
        self.game = GameOfLife(self.grid)
        self.pattern_library = pattern_library or PatternLibrary()

        self.camera = Camera(self.config.unit_size, self.config.zoom_multiplier)
        self.camera.center_on(0, 0, self.canvas_width, self.canvas_height)

        self.clock = IterationClock(
            iterations_per_second,
            slower_factor=self.config.slower_factor,
            faster_factor=self.config.faster_factor,
        )

        self.running = False
        self._press_position: Optional[tuple] = None
        self._last_drag_position: Optional[tuple] = None
        self._dragged = False

        # Performance tracking
        self.frame_times: deque = deque(maxlen=30)

        self.setup_ui()
        self.redraw()
        self.clock.start()
        self.update_loop()

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master, bg="#333333")
        control_frame.pack(pady=5)
        self._create_control_buttons(control_frame)

        main_frame = tk.Frame(self.master, bg="#333333")
        main_frame.pack(fill=tk.BOTH, expand=True)

        self._create_canvas(main_frame)
        self._create_control_panel(main_frame)

        self.master.bind("<Left>", lambda event: self.slower())
        self.master.bind("<Right>", lambda event: self.faster())
        self.master.bind("<space>", lambda event: self.toggle_running())

    def _create_button(self, parent: tk.Frame, text: str, command: Any, bg: str = "#555555") -> tk.Button:
        button = tk.Button(parent, text=text, command=command, bg=bg, fg="white", font=("Arial", 9))
        button.pack(side=tk.LEFT, padx=3)
        return button

    def _create_control_buttons(self, parent: tk.Frame) -> None:
        """Create the main control buttons."""
        self.toggle_btn = self._create_button(parent, "Toggle Run", self.toggle_running)
        self.step_btn = self._create_button(parent, "Step", self.step_once)
        self.clear_btn = self._create_button(parent, "Clear", self.clear_grid)
        self.load_btn = self._create_button(parent, "Load", self.load_file, bg="#444444")
        self.save_btn = self._create_button(parent, "Save", self.save_file, bg="#444444")
        self.center_btn = self._create_button(parent, "Center", self.center_view, bg="#666666")

    def _create_canvas(self, parent: tk.Frame) -> None:
        """Create the game canvas."""
        canvas_frame = tk.Frame(parent, bg="#333333")
        canvas_frame.pack(side=tk.LEFT, padx=5)

        self.canvas = tk.Canvas(
            canvas_frame,
            width=self.canvas_width,
            height=self.canvas_height,
            bg=self.config.background,
            highlightthickness=1,
            highlightbackground="white",
        )
        self.canvas.pack()
        self.canvas.bind("<ButtonPress-1>", self.on_press)
        self.canvas.bind("<B1-Motion>", self.on_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_release)
        self.canvas.bind("<Button-3>", self.on_right_click)
        self.canvas.bind("<MouseWheel>", self.on_wheel)
        # X11 reports the wheel as buttons 4 and 5
        self.canvas.bind("<Button-4>", self.on_wheel)
        self.canvas.bind("<Button-5>", self.on_wheel)

    def _create_control_panel(self, parent: tk.Frame) -> None:
        """Create the pattern selector and statistics panel."""
        controls_frame = tk.Frame(parent, bg="#333333")
        controls_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=10, pady=5)

        self._create_pattern_selector(controls_frame)
        self._create_statistics_display(controls_frame)

    def _create_pattern_selector(self, parent: tk.Frame) -> None:
        """Create pattern selection controls."""
        tk.Label(
            parent,
            text="Patterns:",
            bg="#333333",
            fg="white",
            font=("Arial", 10, "bold"),
        ).pack(anchor="w", pady=(0, 5))

        categories = list(self.pattern_library.get_patterns_by_category().keys())

        self.pattern_category_var = tk.StringVar()
        self.pattern_category_combo = ttk.Combobox(
            parent,
            textvariable=self.pattern_category_var,
            values=categories,
            state="readonly",
            width=25,
        )
        self.pattern_category_combo.pack(pady=2)
        self.pattern_category_combo.bind("<<ComboboxSelected>>", self.on_category_selected)

        self.pattern_var = tk.StringVar()
        self.pattern_combo = ttk.Combobox(parent, textvariable=self.pattern_var, state="readonly", width=25)
        self.pattern_combo.pack(pady=2)

        stamp_btn = tk.Button(
            parent,
            text="Stamp at Center",
            command=self.stamp_selected_pattern,
            bg="#006400",
            fg="white",
            font=("Arial", 8),
        )
        stamp_btn.pack(pady=5)

        if categories:
            self.pattern_category_var.set(categories[0])
            self.on_category_selected(None)

    def _create_statistics_display(self, parent: tk.Frame) -> None:
        """Create the statistics display area."""
        tk.Label(
            parent,
            text="Statistics:",
            bg="#333333",
            fg="white",
            font=("Arial", 10, "bold"),
        ).pack(anchor="w", pady=(20, 5))

        self.stats_labels: Dict[str, tk.Label] = {}
        for stat in ["Running", "Generation", "Population", "Speed", "Zoom", "FPS"]:
            label = tk.Label(
                parent,
                text=f"{stat}: ",
                bg="#333333",
                fg="white",
                font=("Arial", 9),
                anchor="w",
            )
            label.pack(anchor="w", pady=1)
            self.stats_labels[stat] = label

    def on_category_selected(self, event: Optional[Any]) -> None:
        """Handle pattern category selection."""
        category = self.pattern_category_var.get()
        if not category:
            return

        patterns: List[str] = self.pattern_library.get_patterns_by_category().get(category, [])
        self.pattern_combo["values"] = patterns
        if patterns:
            self.pattern_var.set(patterns[0])

    def stamp_selected_pattern(self) -> None:
        """Merge the selected pattern into the grid at the view center."""
        pattern = self.pattern_library.get_pattern(self.pattern_var.get())
        if pattern is None:
            return

        normalized = pattern.normalize()
        width, height = normalized.get_size()
        center_x, center_y = self.camera.screen_to_world(self.canvas_width / 2, self.canvas_height / 2)

        normalized.apply_to_grid(self.grid, center_x - width // 2, center_y - height // 2, clear=False)
        self.game.clear_cycle_detection()
        self.redraw()

    def toggle_running(self) -> None:
        """Toggle the simulation running state."""
        self.running = not self.running

    def step_once(self) -> None:
        """Advance one generation by hand."""
        self.game.step()
        self.redraw()

    def clear_grid(self) -> None:
        """Kill every cell and restart the generation count."""
        self.running = False
        self.game.reset(clear_grid=True)
        self.redraw()

    def center_view(self) -> None:
        """Move the camera to the middle of the living cells."""
        bbox = self.grid.get_bounding_box()
        if bbox is None:
            center = (0.0, 0.0)
        else:
            center = ((bbox[0] + bbox[2] + 1) / 2, (bbox[1] + bbox[3] + 1) / 2)
        self.camera.center_on(center[0], center[1], self.canvas_width, self.canvas_height)
        self.redraw()

    def slower(self) -> None:
        """Decrease the iteration rate."""
        self.clock.slower()

    def faster(self) -> None:
        """Increase the iteration rate."""
        self.clock.faster()

    def on_press(self, event: tk.Event) -> None:
        """Start a click or a drag."""
        self._press_position = (event.x, event.y)
        self._last_drag_position = (event.x, event.y)
        self._dragged = False

    def on_drag(self, event: tk.Event) -> None:
        """Pan the view while the left button is held."""
        if self._last_drag_position is None:
            return

        if not self._dragged:
            px, py = self._press_position
            if abs(event.x - px) < DRAG_THRESHOLD and abs(event.y - py) < DRAG_THRESHOLD:
                return
            self._dragged = True

        last_x, last_y = self._last_drag_position
        self.camera.pan(event.x - last_x, event.y - last_y)
        self._last_drag_position = (event.x, event.y)
        self.redraw()

    def on_release(self, event: tk.Event) -> None:
        """Toggle the clicked cell unless the press turned into a drag."""
        if self._press_position is not None and not self._dragged:
            self.toggle_cell_at_position(event.x, event.y)
        self._press_position = None
        self._last_drag_position = None
        self._dragged = False

    def on_right_click(self, event: tk.Event) -> None:
        """Bring the cell under the pointer to life."""
        self.add_cell_at_position(event.x, event.y)

    def on_wheel(self, event: tk.Event) -> None:
        """Zoom around the pointer."""
        if getattr(event, "num", None) == 4:
            delta = 1
        elif getattr(event, "num", None) == 5:
            delta = -1
        else:
            delta = 1 if event.delta > 0 else -1
        self.camera.zoom(delta, anchor=(event.x, event.y))
        self.redraw()

    def toggle_cell_at_position(self, canvas_x: float, canvas_y: float) -> bool:
        """Toggle cell at canvas coordinates.

        Returns:
            New state of the cell
        """
        x, y = self.camera.screen_to_world(canvas_x, canvas_y)
        alive = self.grid.toggle_cell(x, y)
        self.game.clear_cycle_detection()
        self.redraw()
        return alive

    def add_cell_at_position(self, canvas_x: float, canvas_y: float) -> None:
        """Add cell at canvas coordinates."""
        self.grid.add(self.camera.screen_to_world(canvas_x, canvas_y))
        self.game.clear_cycle_detection()
        self.redraw()

    def visible_cells(self) -> List[tuple]:
        """Living cells inside the current view, from a snapshot of the grid."""
        min_x, min_y, max_x, max_y = self.camera.visible_range(self.canvas_width, self.canvas_height)
        return [(x, y) for x, y in self.grid.cells if min_x <= x <= max_x and min_y <= y <= max_y]

    def redraw(self) -> None:
        """Redraw all visible cells on the canvas."""
        self.canvas.delete("cell")
        size = self.camera.cell_size
        color = self.config.active_color

        for x, y in self.visible_cells():
            x1, y1 = self.camera.world_to_screen(x, y)
            self.canvas.create_rectangle(x1, y1, x1 + size, y1 + size, fill=color, outline="", tags="cell")

    def update_statistics(self) -> None:
        """Update the statistics display."""
        current_time = self.master.tk.call("clock", "milliseconds")
        self.frame_times.append(current_time)
        if len(self.frame_times) > 1 and self.frame_times[-1] != self.frame_times[0]:
            fps = 1000 * (len(self.frame_times) - 1) / (self.frame_times[-1] - self.frame_times[0])
        else:
            fps = 0

        display_stats = {
            "Running": "Yes" if self.running else "No",
            "Generation": str(self.game.generation),
            "Population": str(self.game.population),
            "Speed": f"{self.clock.iterations_per_second:.2f} gen/s",
            "Zoom": f"{self.camera.scale:.2f}x",
            "FPS": f"{fps:.1f}",
        }

        for stat, value in display_stats.items():
            self.stats_labels[stat].config(text=f"{stat}: {value}")

    def update_loop(self) -> None:
        """Main update loop."""
        if self.running and self.clock.update():
            self.game.step()
            self.redraw()

        self.update_statistics()
        self.master.after(self.config.frame_delay_ms, self.update_loop)

    def load_file(self) -> None:
        """Replace the grid with cells from a file."""
        filename = filedialog.askopenfilename(
            title="Load Cells",
            filetypes=[("Coordinate lists", "*.txt"), ("JSON patterns", "*.json"), ("All files", "*.*")],
            initialdir=str(self.pattern_library.storage_dir),
        )
        if not filename:
            return

        try:
            loaded = load_grid_file(filename)
        except (OSError, ValueError, KeyError) as e:
            messagebox.showerror("Error", f"Failed to load cells: {e}")
            return

        self.running = False
        self.grid.clear()
        self.grid.merge(loaded)
        self.game.reset(clear_grid=False)
        self.center_view()
        messagebox.showinfo("Loaded", f"Loaded {loaded.population} cells from {os.path.basename(filename)}")

    def save_file(self) -> None:
        """Write the current cells to a file."""
        filename = filedialog.asksaveasfilename(
            title="Save Cells",
            defaultextension=".txt",
            filetypes=[("Coordinate lists", "*.txt"), ("JSON patterns", "*.json"), ("All files", "*.*")],
            initialdir=str(self.pattern_library.storage_dir),
        )
        if not filename:
            return

        try:
            if filename.endswith(".json"):
                name = os.path.splitext(os.path.basename(filename))[0]
                with open(filename, "w") as f:
                    json.dump(Pattern.from_grid(self.grid, name).to_dict(), f, indent=2)
            else:
                loader.dump(self.grid, filename)
        except OSError as e:
            messagebox.showerror("Error", f"Failed to save cells: {e}")
            return

        messagebox.showinfo("Saved", f"Saved {self.grid.population} cells to {os.path.basename(filename)}")


def create_parser() -> argparse.ArgumentParser:
    """Create the viewer's argument parser."""
    parser = argparse.ArgumentParser(description="Interactive Game of Life viewer")
    parser.add_argument("--load", type=str, help="Coordinate list (.txt) or pattern (.json) to open")
    parser.add_argument("-p", "--pattern", type=str, help="Library pattern to stamp at the origin")
    parser.add_argument("-r", "--rate", type=float, default=5.0, help="Generations per second (default: 5)")
    parser.add_argument("--test", action="store_true", help="Run for three seconds and exit")
    return parser


def main() -> int:
    """Main entry point for the Tkinter viewer.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = create_parser().parse_args()

    if args.rate <= 0:
        print(f"Error: Rate must be positive, got {args.rate}")
        return 1

    grid = Grid()
    library = PatternLibrary()
    library.load_all_patterns()
    if args.load:
        try:
            grid.merge(load_grid_file(args.load))
        except (OSError, ValueError, KeyError) as e:
            print(f"Error: {e}")
            return 1
    elif args.pattern:
        pattern = library.get_pattern(args.pattern)
        if pattern is None:
            print(f"Warning: Pattern '{args.pattern}' not found, starting empty")
        else:
            pattern.apply_to_grid(grid)

    root = tk.Tk()
    root.resizable(False, False)

    app = TkinterLifeViewer(root, grid=grid, iterations_per_second=args.rate, pattern_library=library)
    app.center_view()

    if args.test:
        print("Running in test mode...")
        app.running = True

        def auto_exit() -> None:
            print(f"Test completed. Ran {app.game.generation} generations.")
            root.quit()
            root.destroy()

        root.after(3000, auto_exit)

    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
