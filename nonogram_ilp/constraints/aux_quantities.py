"""
Auxiliary quantities for the placement-variable ILP encoding.

For every line (row or column) of a puzzle this module derives the index
sets the encoder needs, without ever reasoning about individual cell colors:

  - penalties[t]:       1 iff block t and block t+1 share a color (they then
                        need at least one empty cell between them), else 0
  - start_ranges[t]:    inclusive interval of cell positions where block t
                        may begin, as a Python range
  - cover_sets[t][j]:   the starts in start_ranges[t] that make block t cover
                        cell j
  - color_groups[c]:    indices of the blocks of color c

Quantities are named after Khan (2022, doi:10.1109/TG.2020.3036687):
penalties are sigma, start ranges the first-position sets, cover sets the
overlap-checking sets and color groups the monochrome index sets.

Positions are 0-based. A line of length L whose blocks have lengths s_t and
penalties sigma_t has the same slack for every block:

    slack = L - sum(s) - sum(sigma)

and block t may start anywhere in [l_t, l_t + slack], where l_t is the
leftmost start left by packing all earlier blocks tightly. A negative slack
yields empty ranges; the begin-once constraint over an empty range is then
unsatisfiable, which is how overfull lines surface as infeasibility.

Rows and columns run through the same routine, line_quantities().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from nonogram_ilp.core.puzzle import Block, Orientation, Puzzle, ORIENTATIONS


@dataclass(frozen=True)
class LineQuantities:
    """
    Auxiliary quantities for a single row or column.

    Attributes:
        line_length: Number of cells in the line
        lengths: Block lengths, in clue order
        penalties: Adjacency penalty per block (last block always 0)
        start_ranges: Admissible start positions per block
        cover_sets: cover_sets[t][j] = starts of block t that cover cell j
        color_groups: palette color -> indices of blocks of that color
    """
    line_length: int
    lengths: Tuple[int, ...]
    penalties: Tuple[int, ...]
    start_ranges: Tuple[range, ...]
    cover_sets: Tuple[Tuple[range, ...], ...]
    color_groups: Dict[int, Tuple[int, ...]]

    @property
    def num_blocks(self) -> int:
        return len(self.lengths)

    @property
    def slack(self) -> int:
        """Free cells left after packing all blocks tightly (may be negative)."""
        return self.line_length - sum(self.lengths) - sum(self.penalties)


@dataclass(frozen=True)
class AuxiliaryQuantities:
    """
    Auxiliary quantities for a whole puzzle.

    Attributes:
        rows: One LineQuantities per row, top to bottom
        cols: One LineQuantities per column, left to right
        max_blocks_per_row: Largest block count over all rows
        max_blocks_per_col: Largest block count over all columns
    """
    rows: Tuple[LineQuantities, ...]
    cols: Tuple[LineQuantities, ...]
    max_blocks_per_row: int
    max_blocks_per_col: int

    def lines(self, orientation: Orientation) -> Tuple[LineQuantities, ...]:
        return self.rows if orientation == "row" else self.cols

    @property
    def adjacency_penalty_rows(self) -> np.ndarray:
        """Penalties as a (num_rows, max_blocks_per_row) array, zero-padded."""
        return _padded_penalties(self.rows, self.max_blocks_per_row)

    @property
    def adjacency_penalty_cols(self) -> np.ndarray:
        """Penalties as a (num_cols, max_blocks_per_col) array, zero-padded."""
        return _padded_penalties(self.cols, self.max_blocks_per_col)


def adjacency_penalties(blocks: Sequence[Block]) -> Tuple[int, ...]:
    """
    Penalty of each block: 1 if the next block has the same color, else 0.

    Example:
        >>> adjacency_penalties([Block(1, 1), Block(2, 1), Block(1, 2)])
        (1, 0, 0)
    """
    penalties = [
        int(blocks[t].color == blocks[t + 1].color)
        for t in range(len(blocks) - 1)
    ]
    if blocks:
        penalties.append(0)
    return tuple(penalties)


def line_quantities(
    blocks: Sequence[Block],
    line_length: int,
    palette: Sequence[int],
) -> LineQuantities:
    """
    Compute penalties, start ranges, cover sets and color groups for one line.

    Start ranges come from one left-to-right sweep over a window [l, u]:
    l starts at 0 and u at the line's slack; after assigning block t the
    window advances by s_t + sigma_t.

    Args:
        blocks: The line's clue
        line_length: Number of cells in the line
        palette: Puzzle palette (every color gets a color group)

    Returns:
        LineQuantities for the line

    Example:
        >>> q = line_quantities([Block(1, 1), Block(2, 1)], 5, palette=(1,))
        >>> q.start_ranges
        (range(0, 2), range(2, 4))
        >>> q.cover_sets[1][3]
        range(2, 4)
    """
    lengths = tuple(block.length for block in blocks)
    penalties = adjacency_penalties(blocks)

    lo = 0
    hi = line_length - sum(lengths) - sum(penalties)

    start_ranges = []
    cover_sets = []
    for s, sigma in zip(lengths, penalties):
        start_ranges.append(range(lo, hi + 1))
        # starts k with k <= j <= k + s - 1, clipped to [lo, hi]
        cover_sets.append(tuple(
            range(max(lo, j - s + 1), min(hi, j) + 1)
            for j in range(line_length)
        ))
        lo += s + sigma
        hi += s + sigma

    color_groups = {
        color: tuple(t for t, block in enumerate(blocks) if block.color == color)
        for color in palette
    }

    return LineQuantities(
        line_length=line_length,
        lengths=lengths,
        penalties=penalties,
        start_ranges=tuple(start_ranges),
        cover_sets=tuple(cover_sets),
        color_groups=color_groups,
    )


def eval_aux_quantities(puzzle: Puzzle) -> AuxiliaryQuantities:
    """
    Construct the auxiliary quantities describing `puzzle`.

    Pure: calling it twice on the same puzzle gives equal results.
    """
    per_orientation = {}
    for orientation in ORIENTATIONS:
        length = puzzle.line_length(orientation)
        per_orientation[orientation] = tuple(
            line_quantities(clue, length, puzzle.palette)
            for clue in puzzle.clues(orientation)
        )

    rows = per_orientation["row"]
    cols = per_orientation["col"]
    return AuxiliaryQuantities(
        rows=rows,
        cols=cols,
        max_blocks_per_row=max(q.num_blocks for q in rows),
        max_blocks_per_col=max(q.num_blocks for q in cols),
    )


def recover_aux_data(aux: AuxiliaryQuantities) -> tuple:
    """
    Unpack auxiliary quantities into a flat tuple:

        (sigma_rows, sigma_cols, start_rows, start_cols,
         cover_rows, cover_cols, groups_rows, groups_cols,
         max_blocks_per_row, max_blocks_per_col)

    The sigma entries are padded numpy arrays; the others are per-line lists.
    """
    return (
        aux.adjacency_penalty_rows,
        aux.adjacency_penalty_cols,
        [q.start_ranges for q in aux.rows],
        [q.start_ranges for q in aux.cols],
        [q.cover_sets for q in aux.rows],
        [q.cover_sets for q in aux.cols],
        [q.color_groups for q in aux.rows],
        [q.color_groups for q in aux.cols],
        aux.max_blocks_per_row,
        aux.max_blocks_per_col,
    )


def _padded_penalties(lines: Sequence[LineQuantities], width: int) -> np.ndarray:
    out = np.zeros((len(lines), width), dtype=int)
    for i, q in enumerate(lines):
        out[i, :q.num_blocks] = q.penalties
    return out


if __name__ == "__main__":
    puzzle = Puzzle.monochrome(
        [[1, 1], [1, 1], [], [1, 2], [3]],
        [[1], [2, 1], [1], [2, 2], [1]],
    )
    aux = eval_aux_quantities(puzzle)
    for i, q in enumerate(aux.rows):
        print(f"row {i}: slack={q.slack} starts={[ (r.start, r.stop - 1) for r in q.start_ranges]}")
    assert eval_aux_quantities(puzzle) == aux
    print("✓ aux_quantities self-test passed.")
