"""
Demonstration scripts for the termgrid layout engine.
"""

import logging
import sys

import simple_chalk as chalk  # type: ignore[import-untyped]

from termgrid import Grid


LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua."
)


def dashboard_declaration() -> list[list[dict[str, object]]]:
    """A header, a two-column body with a sidebar, and a one-line status bar."""
    return [
        [{"height": 1, "text": chalk.blueBright("termgrid") + " demo", "padding": [0, 1]}],
        [
            {"width": "30%", "text": "\n".join(chalk.cyan(f"item {i}") for i in range(1, 8)), "padding": 1},
            {"text": LOREM, "padding": [1, 2]},
        ],
        [
            {"height": 1, "text": chalk.green("ready"), "wrap": False},
            {"height": 1, "width": 12, "text": "q: quit", "wrap": False},
        ],
    ]


LAYOUTS = dict(
    dashboard=dashboard_declaration,
    thirds=lambda: [["one", "two", "three"], [{"text": LOREM, "height": "50%"}]],
    columns=lambda: [[{"text": LOREM, "width": "25%"}, {"text": LOREM, "wrap": False}, {"width": 10, "text": LOREM}]],
)


def build_dashboard(width: int, height: int) -> Grid:
    return Grid(dashboard_declaration(), width, height)


def demo(layout: str = "dashboard") -> None:
    """Render a layout at a few viewport sizes, then update a cell."""
    grid = Grid(LAYOUTS[layout](), 60, 12)
    grid.subscribe(lambda change: print(f"-- {change.kind.value} --"))

    def show() -> None:
        width, height = grid.size
        print(chalk.yellow(f"{width}x{height}"))
        print(grid)
        print()

    show()
    for width, height in [(40, 10), (80, 14)]:
        grid.resize(width, height)
        show()

    if layout == "dashboard":
        grid.update(2, 0, chalk.red("busy") + " re-rendering one cell")
        show()

    snapshot = grid.cell_at(0, 0)
    print(f"cell (0, 0): {snapshot.width}x{snapshot.height} at ({snapshot.x}, {snapshot.y})")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')
    demo(sys.argv[1] if len(sys.argv) > 1 else "dashboard")
