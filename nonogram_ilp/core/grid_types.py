"""
Core grid types and rendering for the nonogram ILP solver.

Grid: always shape (rows, cols), dtype=int
Cells: value UNCOLORED (0) when empty, otherwise a palette color
"""

import numpy as np
from typing import Iterable, TypeAlias


Grid: TypeAlias = np.ndarray  # shape: (rows, cols), dtype: int

# Reserved "no color" value; never a palette color
UNCOLORED = 0

# Glyphs used when every palette color is in 1..4
_GLYPHS = {0: "⬜", 1: "⬛", 2: "🟩", 3: "🟦", 4: "🟪"}


def empty_grid(num_rows: int, num_cols: int) -> Grid:
    """Return a (num_rows, num_cols) grid with every cell UNCOLORED."""
    return np.full((num_rows, num_cols), UNCOLORED, dtype=int)


def render_grid(grid: Grid, palette: Iterable[int]) -> str:
    """
    Render a solved grid as text, one line per row.

    Palettes drawn from {1, 2, 3, 4} use square glyphs (white for
    UNCOLORED, then black, green, blue, purple). Any other palette falls
    back to space-separated integers.

    Args:
        grid: 2D integer grid
        palette: colors that may appear in the grid

    Returns:
        Multi-line string (no trailing newline)

    Example:
        >>> render_grid(np.array([[0, 1], [1, 0]]), palette=(1,))
        '⬜⬛\\n⬛⬜'
    """
    assert grid.ndim == 2, f"Grid must be 2D, got {grid.ndim}D"

    if set(palette) <= {1, 2, 3, 4}:
        return "\n".join(
            "".join(_GLYPHS[int(val)] for val in row) for row in grid
        )
    return "\n".join(" ".join(str(int(val)) for val in row) for row in grid)


def print_grid(grid: Grid, palette: Iterable[int] = (1,)) -> None:
    """Print render_grid(grid, palette) for human inspection."""
    print(render_grid(grid, palette))


if __name__ == "__main__":
    grid = np.array([[0, 1, 2], [3, 4, 0]], dtype=int)
    print_grid(grid, palette=(1, 2, 3, 4))
    print()
    print_grid(grid * 5, palette=(5, 10, 15, 20))
