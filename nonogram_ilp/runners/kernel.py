"""
Core kernel runner for the nonogram ILP solver.

The complete pipeline:
  1. Validate the puzzle (done by the Puzzle constructors)
  2. Compute auxiliary quantities (start ranges, cover sets, ...)
  3. Encode placement variables and constraints
  4. Solve the ILP with PuLP
  5. Decode placement values into a grid
  6. Return a PuzzleSolution, infeasibility included
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from nonogram_ilp.core.grid_types import empty_grid
from nonogram_ilp.core.puzzle import Puzzle
from nonogram_ilp.constraints.aux_quantities import AuxiliaryQuantities, eval_aux_quantities
from nonogram_ilp.constraints.encoder import encode_puzzle
from nonogram_ilp.solver.lp_solver import SolverConfig, solve_placement_model
from nonogram_ilp.solver.decoding import DEFAULT_TOLERANCE, decode_grid
from nonogram_ilp.runners.results import PuzzleSolution


logger = logging.getLogger(__name__)


def solve_puzzle(
    puzzle: Puzzle,
    aux: Optional[AuxiliaryQuantities] = None,
    config: Optional[SolverConfig] = None,
    tolerance: float = DEFAULT_TOLERANCE,
    verbosity: int = 1,
) -> PuzzleSolution:
    """
    Solve a nonogram and return one coloring, or report that none exists.

    The puzzle is encoded with one binary variable per admissible block
    start (Khan, 2022) and solved as a feasibility ILP.

    Args:
        puzzle: Puzzle to solve
        aux: Precomputed eval_aux_quantities(puzzle); computed when None
        config: Solver backend and options (defaults to silent CBC)
        tolerance: Absolute tolerance used when decoding evidence
        verbosity: 0 for silence, > 0 to log a solution summary at INFO

    Returns:
        PuzzleSolution. Infeasible puzzles are not errors: they come back
        with status "infeasible" and an all-UNCOLORED grid.

    Raises:
        SolverError: If the solver backend is unknown, unavailable or fails

    Example:
        >>> puzzle = Puzzle.monochrome([[1, 1], [1, 1], [], [1, 2], [3]],
        ...                            [[1], [2, 1], [1], [2, 2], [1]])
        >>> solution = solve_puzzle(puzzle, verbosity=0)
        >>> solution.status
        'optimal'
    """
    start = time.perf_counter()

    if aux is None:
        aux = eval_aux_quantities(puzzle)

    builder = encode_puzzle(puzzle, aux)
    result = solve_placement_model(builder, config)

    if result.status == "optimal":
        grid = decode_grid(puzzle, aux, result.values, tolerance=tolerance)
    else:
        grid = empty_grid(puzzle.num_rows, puzzle.num_cols)

    solution = PuzzleSolution(
        status=result.status,
        grid=grid,
        palette=puzzle.palette,
        solver_status=result.solver_status,
        num_variables=result.num_variables,
        num_constraints=result.num_constraints,
        solve_seconds=time.perf_counter() - start,
    )

    if verbosity > 0:
        logger.info(
            "Solved %dx%d puzzle: status=%s (solver: %s), %d variables, %d constraints, %.3fs",
            puzzle.num_rows,
            puzzle.num_cols,
            solution.status,
            solution.solver_status,
            solution.num_variables,
            solution.num_constraints,
            solution.solve_seconds,
        )

    return solution


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    print("Testing kernel runner with full solver integration...")
    print("=" * 70)

    puzzle = Puzzle.monochrome(
        [[1, 1], [1, 1], [], [1, 2], [3]],
        [[1], [2, 1], [1], [2, 2], [1]],
    )
    solution = solve_puzzle(puzzle)
    print(solution)

    print("\n" + "=" * 70)
    print("✓ Kernel runner self-test complete.")
