"""
Smoke tests for solution decoding (placement values -> Grid).

Pure decoding checks with hand-written placement values; no solver.
"""

import numpy as np

from nonogram_ilp.core.grid_types import UNCOLORED
from nonogram_ilp.core.puzzle import Puzzle
from nonogram_ilp.constraints.aux_quantities import eval_aux_quantities
from nonogram_ilp.solver.decoding import colors_per_cell, decode_grid, row_evidence


# Solution:
#   [[1, 1, 2],
#    [0, 2, 2]]
MULTICOLOR = Puzzle(
    palette=(1, 2),
    row_clues=[[(2, 1), (1, 2)], [(2, 2)]],
    col_clues=[[(1, 1)], [(1, 1), (1, 2)], [(2, 2)]],
)

MULTICOLOR_VALUES = {
    ("y", 0, 0, 0): 1.0,  # row 0, block [2 of color 1] starts at column 0
    ("y", 0, 1, 2): 1.0,  # row 0, block [1 of color 2] starts at column 2
    ("y", 1, 0, 0): 0.0,
    ("y", 1, 0, 1): 1.0,  # row 1, block [2 of color 2] starts at column 1
}


def test_decode_multicolor():
    print("\n" + "=" * 70)
    print("TEST: decode a 2x3 two-color grid")
    print("=" * 70)

    aux = eval_aux_quantities(MULTICOLOR)
    grid = decode_grid(MULTICOLOR, aux, MULTICOLOR_VALUES)

    expected = np.array([[1, 1, 2],
                         [0, 2, 2]], dtype=int)

    print(f"  Output grid:\n{grid}")
    assert grid.shape == (2, 3)
    assert np.array_equal(grid, expected), f"Grid mismatch:\nGot:\n{grid}\nExpected:\n{expected}"

    print("  ✓ test_decode_multicolor: PASSED")


def test_row_evidence_one_color_per_cell():
    print("\n" + "=" * 70)
    print("TEST: row evidence is one-hot or empty per cell")
    print("=" * 70)

    aux = eval_aux_quantities(MULTICOLOR)
    evidence = row_evidence(MULTICOLOR, aux, MULTICOLOR_VALUES)

    assert evidence.shape == (2, 3, 2)
    assert np.array_equal(evidence[0, 2], [0.0, 1.0])
    assert np.array_equal(evidence[1, 0], [0.0, 0.0])
    assert np.array_equal(colors_per_cell(evidence), [[1, 1, 1], [0, 1, 1]])

    print("  ✓ test_row_evidence_one_color_per_cell: PASSED")


def test_decode_with_floats():
    """
    Solver output may carry float noise, e.g. 0.9999999 instead of 1.0.
    """
    print("\n" + "=" * 70)
    print("TEST: decoding tolerates solver noise")
    print("=" * 70)

    aux = eval_aux_quantities(MULTICOLOR)
    noisy = {key: (value - 1e-9 if value else 1e-9) for key, value in MULTICOLOR_VALUES.items()}

    grid = decode_grid(MULTICOLOR, aux, noisy)
    assert np.array_equal(grid, [[1, 1, 2], [0, 2, 2]])

    # Far from 1 is not evidence
    fractional = {key: 0.3 for key in MULTICOLOR_VALUES}
    assert not decode_grid(MULTICOLOR, aux, fractional).any()

    print("  ✓ test_decode_with_floats: PASSED")


def test_missing_values_give_empty_grid():
    print("\n" + "=" * 70)
    print("TEST: no values -> all UNCOLORED")
    print("=" * 70)

    aux = eval_aux_quantities(MULTICOLOR)
    grid = decode_grid(MULTICOLOR, aux, {})

    assert grid.shape == (2, 3)
    assert (grid == UNCOLORED).all()

    print("  ✓ test_missing_values_give_empty_grid: PASSED")


if __name__ == "__main__":
    print("\n" + "=" * 70)
    print("DECODING SMOKE TEST SUITE")
    print("=" * 70)

    test_decode_multicolor()
    test_row_evidence_one_color_per_cell()
    test_decode_with_floats()
    test_missing_values_give_empty_grid()

    print("\n" + "=" * 70)
    print("✓ ALL DECODING TESTS PASSED")
    print("=" * 70)
