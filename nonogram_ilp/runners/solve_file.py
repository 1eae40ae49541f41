"""
Solve a nonogram stored on disk and print the result.

Usage:
    # Solve a Web Paint-by-Number export with the default CBC backend
    python -m nonogram_ilp.runners.solve_file puzzles/dragon.cwc

    # JSON puzzle, HiGHS backend, 60 second limit, debug logging
    python -m nonogram_ilp.runners.solve_file puzzle.json \
        --backend HiGHS_CMD --time-limit 60 --verbose

Exit status is 0 when a coloring was found and 1 otherwise.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from nonogram_ilp.core.puzzle_io import load_puzzle
from nonogram_ilp.solver.lp_solver import DEFAULT_BACKEND, SolverConfig
from nonogram_ilp.runners.kernel import solve_puzzle


# Logger for this module
logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Solve a nonogram (.cwc or .json) with an integer linear program."
    )
    parser.add_argument(
        "puzzle",
        type=Path,
        help="Path to the puzzle file (.cwc or .json).",
    )
    parser.add_argument(
        "--backend",
        default=DEFAULT_BACKEND,
        help="PuLP solver name, e.g. PULP_CBC_CMD, HiGHS_CMD, GLPK_CMD.",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Optional solver time limit in seconds.",
    )
    parser.add_argument(
        "--solver-msg",
        action="store_true",
        help="Show the solver backend's own console output.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log encoding and solver details at DEBUG level.",
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    puzzle = load_puzzle(args.puzzle)
    logger.info(
        "Loaded %s: %dx%d, %d color(s)",
        args.puzzle,
        puzzle.num_rows,
        puzzle.num_cols,
        len(puzzle.palette),
    )

    config = SolverConfig(
        backend=args.backend,
        msg=args.solver_msg,
        time_limit=args.time_limit,
    )
    solution = solve_puzzle(puzzle, config=config)

    if not solution.is_solved:
        logger.warning("No coloring found: status=%s (solver: %s)", solution.status, solution.solver_status)
        return 1

    print(solution.render())
    return 0


if __name__ == "__main__":
    sys.exit(main())
