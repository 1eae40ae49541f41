"""
Constraint encoder: Puzzle + AuxiliaryQuantities -> ConstraintBuilder.

Variables (binary), one per admissible start only:
    y[i, t, k] = 1 iff block t of row i starts at column k, k in start_ranges
    x[j, t, k] = 1 iff block t of column j starts at row k,  k in start_ranges

Constraints:
    begin_once   sum_k v[., t, k] = 1                                per block
    order        s_t + sigma_t + sum_k k*v[., t, k]
                     <= sum_k k*v[., t+1, k]                        per block pair
    consistency  sum_{t of color p} sum_{k in cover(t, j)} y[i, t, k]
                 = sum_{t of color p} sum_{k in cover(t, i)} x[j, t, k]
                                                                    per cell, color

The consistency family is the only coupling between rows and columns and
never references a cell-color variable. There is no objective.
"""

import logging
from typing import List

from nonogram_ilp.core.puzzle import Orientation, Puzzle, ORIENTATIONS
from nonogram_ilp.constraints.aux_quantities import AuxiliaryQuantities, LineQuantities
from nonogram_ilp.constraints.builder import ConstraintBuilder
from nonogram_ilp.constraints.indexing import PlacementKey, placement_key


logger = logging.getLogger(__name__)


def cover_terms(
    orientation: Orientation,
    line: int,
    q: LineQuantities,
    cell: int,
    color: int,
) -> List[PlacementKey]:
    """
    Placement keys of line `line` that would paint `cell` with `color`.

    Summing their values gives the line's evidence that the cell has that
    color (0 or 1 under a feasible assignment).
    """
    return [
        placement_key(orientation, line, t, k)
        for t in q.color_groups.get(color, ())
        for k in q.cover_sets[t][cell]
    ]


def add_placement_variables(builder: ConstraintBuilder, orientation: Orientation, aux: AuxiliaryQuantities) -> None:
    """Declare one variable per (line, block, admissible start)."""
    for line, q in enumerate(aux.lines(orientation)):
        for t, starts in enumerate(q.start_ranges):
            for k in starts:
                builder.add_variable(placement_key(orientation, line, t, k))


def add_begin_once_constraints(builder: ConstraintBuilder, orientation: Orientation, aux: AuxiliaryQuantities) -> None:
    """
    Every block starts exactly once within its range.

    Emitted even for empty ranges, where it reads 0 = 1 and makes the
    model infeasible.
    """
    for line, q in enumerate(aux.lines(orientation)):
        for t, starts in enumerate(q.start_ranges):
            keys = [placement_key(orientation, line, t, k) for k in starts]
            builder.add_eq(keys, [1.0] * len(keys), 1.0, name=f"begin_once[{orientation},{line},{t}]")


def add_order_constraints(builder: ConstraintBuilder, orientation: Orientation, aux: AuxiliaryQuantities) -> None:
    """
    Consecutive blocks keep their order and required gap.

    Written as  sum k*v[t,k] - sum k*v[t+1,k] <= -(s_t + sigma_t).
    """
    for line, q in enumerate(aux.lines(orientation)):
        for t in range(q.num_blocks - 1):
            keys = []
            coeffs = []
            for k in q.start_ranges[t]:
                keys.append(placement_key(orientation, line, t, k))
                coeffs.append(float(k))
            for k in q.start_ranges[t + 1]:
                keys.append(placement_key(orientation, line, t + 1, k))
                coeffs.append(-float(k))
            gap = q.lengths[t] + q.penalties[t]
            builder.add_le(keys, coeffs, -float(gap), name=f"order[{orientation},{line},{t}]")


def add_consistency_constraints(builder: ConstraintBuilder, puzzle: Puzzle, aux: AuxiliaryQuantities) -> None:
    """
    Row and column evidence agree for every cell and color.

    Cells where neither the row nor the column has a block of the color
    that could cover them give 0 = 0 and are skipped.
    """
    for i, row_q in enumerate(aux.rows):
        for j, col_q in enumerate(aux.cols):
            for color in puzzle.palette:
                row_keys = cover_terms("row", i, row_q, j, color)
                col_keys = cover_terms("col", j, col_q, i, color)
                if not row_keys and not col_keys:
                    continue
                builder.add_eq(
                    row_keys + col_keys,
                    [1.0] * len(row_keys) + [-1.0] * len(col_keys),
                    0.0,
                    name=f"consistency[{i},{j},{color}]",
                )


def encode_puzzle(puzzle: Puzzle, aux: AuxiliaryQuantities) -> ConstraintBuilder:
    """
    Build the placement-variable ILP for `puzzle`.

    Args:
        puzzle: Puzzle to encode
        aux: eval_aux_quantities(puzzle)

    Returns:
        ConstraintBuilder with all variables and constraints declared
    """
    builder = ConstraintBuilder()

    for orientation in ORIENTATIONS:
        add_placement_variables(builder, orientation, aux)
    for orientation in ORIENTATIONS:
        add_begin_once_constraints(builder, orientation, aux)
    for orientation in ORIENTATIONS:
        add_order_constraints(builder, orientation, aux)
    add_consistency_constraints(builder, puzzle, aux)

    logger.debug(
        "Encoded %dx%d puzzle: %d variables, constraints by family %s",
        puzzle.num_rows,
        puzzle.num_cols,
        len(builder.variables),
        builder.count_by_family(),
    )
    return builder
