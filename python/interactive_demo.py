"""
Interactive demo for termgrid.
Display a grid in a live panel and resize/update it with keyboard commands.
"""

import logging
import sys
import time

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from demo import LAYOUTS
from termgrid import Grid, GridChange


class InteractiveDemo:
    """Live view of a grid; every change notification refreshes the display."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.console = Console()
        self.status_message = "Ready"
        self.changes = 0
        self.live: Live | None = None
        grid.subscribe(self.on_change)

    def on_change(self, change: GridChange) -> None:
        self.changes += 1
        if change.row is not None:
            self.status_message = f"Updated cell ({change.row}, {change.col})"
        else:
            width, height = self.grid.size
            self.status_message = f"Resized to {width}x{height}"
        if self.live is not None:
            self.live.update(self.generate_display())

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        width, height = self.grid.size
        status = Text()
        status.append("Viewport: ", style="bold")
        status.append(f"{width}x{height}   ")
        status.append("Changes: ", style="bold")
        status.append(f"{self.changes}\n\n")

        # Convert ANSI-colored grid text to Rich Text properly
        status.append(Text.from_ansi(self.grid.serialize()))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  W/S - Shrink/grow height\n")
        status.append("  A/D - Shrink/grow width\n")
        status.append("  U   - Update the first cell\n")
        status.append("  Q   - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        return Panel(status, title="termgrid Interactive Demo", border_style="green", width=max(width + 4, 44))

    def nudge(self, d_width: int, d_height: int) -> None:
        width, height = self.grid.size
        self.grid.resize(max(width + d_width, 1), max(height + d_height, 1))

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            self.live = live
            try:
                while True:
                    key = readchar.readkey().lower()

                    if key == 'q':
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key == 'w':
                        self.nudge(0, -1)
                    elif key == 's':
                        self.nudge(0, 1)
                    elif key == 'a':
                        self.nudge(-2, 0)
                    elif key == 'd':
                        self.nudge(2, 0)
                    elif key == 'u':
                        self.grid.update(0, 0, f"updated at {time.strftime('%H:%M:%S')}")
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"
                        live.update(self.generate_display())

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())
            finally:
                self.live = None


def main(layout: str) -> None:
    grid = Grid(LAYOUTS[layout](), 60, 12)
    InteractiveDemo(grid).run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == 'sublime':
        # Running from IDE - just render the initial state
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')
        print(Grid(LAYOUTS['dashboard'](), 60, 12))
    else:
        main(sys.argv[1] if len(sys.argv) > 1 else 'dashboard')
