"""
Nonogram solver built on an integer linear program.

Pipeline:
  - core/: puzzle model, grid type, puzzle file IO
  - constraints/: auxiliary quantities, placement variables, encoder
  - solver/: PuLP adapter and solution decoding
  - runners/: end-to-end solve_puzzle, results, CLI
"""

from nonogram_ilp.core.grid_types import UNCOLORED, Grid, render_grid
from nonogram_ilp.core.puzzle import Block, Puzzle, ValidationError
from nonogram_ilp.core.puzzle_io import (
    load_puzzle,
    load_puzzle_json,
    read_puzzle_from_cwc,
    save_puzzle_json,
    write_puzzle_to_cwc,
)
from nonogram_ilp.constraints.aux_quantities import (
    AuxiliaryQuantities,
    LineQuantities,
    eval_aux_quantities,
    recover_aux_data,
)
from nonogram_ilp.constraints.encoder import encode_puzzle
from nonogram_ilp.solver.lp_solver import SolverConfig, SolverError
from nonogram_ilp.runners.kernel import solve_puzzle
from nonogram_ilp.runners.results import PuzzleSolution

__all__ = [
    "UNCOLORED",
    "Grid",
    "render_grid",
    "Block",
    "Puzzle",
    "ValidationError",
    "load_puzzle",
    "load_puzzle_json",
    "read_puzzle_from_cwc",
    "save_puzzle_json",
    "write_puzzle_to_cwc",
    "AuxiliaryQuantities",
    "LineQuantities",
    "eval_aux_quantities",
    "recover_aux_data",
    "encode_puzzle",
    "SolverConfig",
    "SolverError",
    "solve_puzzle",
    "PuzzleSolution",
]
