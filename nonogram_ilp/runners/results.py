"""
Result structures and solution checks for the nonogram solver.

Key components:
  - PuzzleSolution: outcome of one solve attempt (status, grid, palette,
    solver diagnostics)
  - grid_line_clues: derive the block clues a grid actually shows
  - compute_clue_mismatches: lines of a grid that violate the puzzle's clues
  - compute_grid_mismatches: per-cell diff between two grids
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Tuple

import numpy as np

from nonogram_ilp.core.grid_types import Grid, UNCOLORED, render_grid
from nonogram_ilp.core.puzzle import Block, Clue, Puzzle, ORIENTATIONS


SolveStatus = Literal["optimal", "infeasible", "other"]


@dataclass
class PuzzleSolution:
    """
    Outcome of one solve attempt.

    Attributes:
        status: "optimal" when a coloring was found, "infeasible" when no
            coloring satisfies both row and column clues, "other" for any
            other solver outcome (time limit, unbounded, not solved)
        grid: (num_rows, num_cols) int array of colors. When status is not
            "optimal" it is all UNCOLORED and carries no information; it
            must not be compared against an all-empty puzzle's solution
        palette: The puzzle's palette (UNCOLORED excluded)
        solver_status: Raw status string from PuLP (e.g. "Optimal")
        num_variables: Binary placement variables in the model
        num_constraints: Constraints in the model
        solve_seconds: Wall-clock time spent in encoding, solving and decoding
    """
    status: SolveStatus
    grid: Grid
    palette: Tuple[int, ...]
    solver_status: str = "Not Solved"
    num_variables: int = 0
    num_constraints: int = 0
    solve_seconds: float = 0.0

    @property
    def is_solved(self) -> bool:
        return self.status == "optimal"

    def render(self) -> str:
        """Text rendering of the grid (see render_grid)."""
        return render_grid(self.grid, self.palette)

    def __str__(self) -> str:
        return f"PuzzleSolution(status={self.status})\n{self.render()}"


def line_clue(cells) -> Clue:
    """
    Blocks shown by one line of cells.

    Example:
        >>> line_clue([0, 1, 1, 2, 0, 1])
        (Block(length=2, color=1), Block(length=1, color=2), Block(length=1, color=1))
    """
    blocks: List[Block] = []
    prev = UNCOLORED
    run = 0
    for value in list(cells) + [UNCOLORED]:
        value = int(value)
        if value == prev and value != UNCOLORED:
            run += 1
            continue
        if prev != UNCOLORED:
            blocks.append(Block(length=run, color=prev))
        prev = value
        run = 1
    return tuple(blocks)


def grid_line_clues(grid: Grid) -> Tuple[Tuple[Clue, ...], Tuple[Clue, ...]]:
    """Return (row_clues, col_clues) shown by `grid`."""
    rows = tuple(line_clue(grid[i, :]) for i in range(grid.shape[0]))
    cols = tuple(line_clue(grid[:, j]) for j in range(grid.shape[1]))
    return rows, cols


def compute_clue_mismatches(puzzle: Puzzle, grid: Grid) -> List[Dict]:
    """
    Lines of `grid` whose blocks differ from the puzzle's clues.

    Returns:
        Empty list if the grid solves the puzzle. Otherwise one record per
        offending line:
            {"orientation": "row"|"col", "line": i, "expected": Clue, "actual": Clue}
        or a single {"shape_mismatch": True, ...} record when the grid has
        the wrong shape.
    """
    if tuple(grid.shape) != puzzle.shape:
        return [{
            "shape_mismatch": True,
            "expected_shape": puzzle.shape,
            "actual_shape": tuple(grid.shape),
        }]

    actual = dict(zip(ORIENTATIONS, grid_line_clues(grid)))

    mismatches = []
    for orientation in ORIENTATIONS:
        for line, (expected, shown) in enumerate(zip(puzzle.clues(orientation), actual[orientation])):
            if expected != shown:
                mismatches.append({
                    "orientation": orientation,
                    "line": line,
                    "expected": expected,
                    "actual": shown,
                })
    return mismatches


def compute_grid_mismatches(
    true_grid: Grid,
    pred_grid: Grid
) -> List[Dict[str, int]]:
    """
    Compute per-cell mismatches between true and predicted grids.

    Returns:
        Empty list if identical, a single shape-mismatch record if shapes
        differ, otherwise one {"r", "c", "true", "pred"} record per
        differing cell.

    Example:
        >>> true = np.array([[0, 1], [2, 3]])
        >>> pred = np.array([[0, 9], [2, 3]])
        >>> compute_grid_mismatches(true, pred)
        [{'r': 0, 'c': 1, 'true': 1, 'pred': 9}]
    """
    if true_grid.shape != pred_grid.shape:
        return [{
            "shape_mismatch": True,
            "true_shape": tuple(true_grid.shape),
            "pred_shape": tuple(pred_grid.shape),
        }]

    diff_cells = []
    for coord in np.argwhere(true_grid != pred_grid):
        r, c = int(coord[0]), int(coord[1])
        diff_cells.append({
            "r": r,
            "c": c,
            "true": int(true_grid[r, c]),
            "pred": int(pred_grid[r, c]),
        })
    return diff_cells
