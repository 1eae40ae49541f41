"""
Solution decoding from placement-variable values to a Grid.

For each cell (i, j) and palette color p the row evidence is

    E[i, j, p] = sum_{t in color_groups[p] of row i} sum_{k in cover_sets[t][j]} y[i, t, k]

Under a feasible assignment E is 0 or 1 and at most one color has E = 1
for a given cell. Decoding reads the color whose evidence is 1 (within
tolerance) and leaves the cell UNCOLORED when no color has it.

Only row variables are read; the consistency constraints make the column
evidence identical.
"""

from typing import Mapping

import numpy as np

from nonogram_ilp.core.grid_types import Grid, empty_grid
from nonogram_ilp.core.puzzle import Puzzle
from nonogram_ilp.constraints.aux_quantities import AuxiliaryQuantities
from nonogram_ilp.constraints.encoder import cover_terms
from nonogram_ilp.constraints.indexing import PlacementKey


DEFAULT_TOLERANCE = 1e-6


def row_evidence(
    puzzle: Puzzle,
    aux: AuxiliaryQuantities,
    values: Mapping[PlacementKey, float],
) -> np.ndarray:
    """
    Row evidence for every cell and color.

    Args:
        puzzle: The solved puzzle
        aux: eval_aux_quantities(puzzle)
        values: Placement key -> solved value; missing keys count as 0

    Returns:
        Float array of shape (num_rows, num_cols, len(palette)); the last
        axis follows puzzle.palette order
    """
    evidence = np.zeros((puzzle.num_rows, puzzle.num_cols, len(puzzle.palette)), dtype=float)
    for i, q in enumerate(aux.rows):
        for j in range(puzzle.num_cols):
            for p, color in enumerate(puzzle.palette):
                evidence[i, j, p] = sum(
                    values.get(key, 0.0) for key in cover_terms("row", i, q, j, color)
                )
    return evidence


def decode_grid(
    puzzle: Puzzle,
    aux: AuxiliaryQuantities,
    values: Mapping[PlacementKey, float],
    tolerance: float = DEFAULT_TOLERANCE,
) -> Grid:
    """
    Decode solved placement values into a grid of colors.

    Args:
        puzzle: The solved puzzle
        aux: eval_aux_quantities(puzzle)
        values: Placement key -> solved value
        tolerance: Absolute tolerance when comparing evidence with 1

    Returns:
        grid: (num_rows, num_cols) int array of palette colors and UNCOLORED

    Example:
        >>> puzzle = Puzzle.monochrome([[1]], [[1]])
        >>> aux = eval_aux_quantities(puzzle)
        >>> decode_grid(puzzle, aux, {("y", 0, 0, 0): 1.0})
        array([[1]])
    """
    evidence = row_evidence(puzzle, aux, values)
    grid = empty_grid(puzzle.num_rows, puzzle.num_cols)

    for p, color in enumerate(puzzle.palette):
        grid[np.isclose(evidence[:, :, p], 1.0, rtol=0.0, atol=tolerance)] = color

    return grid


def colors_per_cell(evidence: np.ndarray, tolerance: float = DEFAULT_TOLERANCE) -> np.ndarray:
    """
    Number of colors claiming each cell (evidence within tolerance of 1).

    A correct encoding gives 0 or 1 everywhere.
    """
    claims = np.isclose(evidence, 1.0, rtol=0.0, atol=tolerance)
    return claims.sum(axis=2)
