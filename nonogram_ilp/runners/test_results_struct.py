"""
Tests for result structures and solution checking helpers.
"""

import numpy as np

from nonogram_ilp.core.grid_types import empty_grid
from nonogram_ilp.core.puzzle import Block, Puzzle
from nonogram_ilp.runners.results import (
    PuzzleSolution,
    compute_clue_mismatches,
    compute_grid_mismatches,
    grid_line_clues,
    line_clue,
)


SCENARIO_A = Puzzle.monochrome(
    [[1, 1], [1, 1], [], [1, 2], [3]],
    [[1], [2, 1], [1], [2, 2], [1]],
)

SCENARIO_A_GRID = np.array([
    [0, 1, 0, 1, 0],
    [0, 1, 0, 1, 0],
    [0, 0, 0, 0, 0],
    [1, 0, 0, 1, 1],
    [0, 1, 1, 1, 0],
], dtype=int)


def test_line_clue():
    print("\n" + "=" * 70)
    print("TEST: line_clue")
    print("=" * 70)

    assert line_clue([0, 0, 0]) == ()
    assert line_clue([1, 1, 1]) == (Block(3, 1),)
    assert line_clue([0, 1, 1, 2, 0, 1]) == (Block(2, 1), Block(1, 2), Block(1, 1))
    assert line_clue(np.array([2, 2, 3, 3, 0])) == (Block(2, 2), Block(2, 3))

    print("  ✓ test_line_clue: PASSED")


def test_clue_mismatches():
    print("\n" + "=" * 70)
    print("TEST: compute_clue_mismatches")
    print("=" * 70)

    rows, cols = grid_line_clues(SCENARIO_A_GRID)
    assert rows == SCENARIO_A.row_clues
    assert cols == SCENARIO_A.col_clues
    assert compute_clue_mismatches(SCENARIO_A, SCENARIO_A_GRID) == []

    broken = SCENARIO_A_GRID.copy()
    broken[2, 2] = 1
    mismatches = compute_clue_mismatches(SCENARIO_A, broken)
    print(f"  Mismatches: {mismatches}")
    assert [(m["orientation"], m["line"]) for m in mismatches] == [("row", 2), ("col", 2)]
    assert mismatches[0]["actual"] == (Block(1, 1),)

    shape = compute_clue_mismatches(SCENARIO_A, np.zeros((2, 2), dtype=int))
    assert shape == [{"shape_mismatch": True, "expected_shape": (5, 5), "actual_shape": (2, 2)}]

    print("  ✓ test_clue_mismatches: PASSED")


def test_grid_mismatches():
    print("\n" + "=" * 70)
    print("TEST: compute_grid_mismatches")
    print("=" * 70)

    g1 = np.array([[0, 1], [2, 3]], dtype=int)
    assert compute_grid_mismatches(g1, g1.copy()) == []

    g2 = np.array([[0, 9], [2, 3]], dtype=int)
    assert compute_grid_mismatches(g1, g2) == [{"r": 0, "c": 1, "true": 1, "pred": 9}]

    g3 = np.array([[0, 1]], dtype=int)
    diff = compute_grid_mismatches(g1, g3)
    assert diff == [{"shape_mismatch": True, "true_shape": (2, 2), "pred_shape": (1, 2)}]

    print("  ✓ test_grid_mismatches: PASSED")


def test_puzzle_solution_surface():
    print("\n" + "=" * 70)
    print("TEST: PuzzleSolution")
    print("=" * 70)

    solved = PuzzleSolution(status="optimal", grid=SCENARIO_A_GRID, palette=(1,), solver_status="Optimal")
    assert solved.is_solved
    assert solved.render().splitlines()[2] == "⬜⬜⬜⬜⬜"
    assert str(solved).startswith("PuzzleSolution(status=optimal)")

    failed = PuzzleSolution(status="infeasible", grid=empty_grid(5, 5), palette=(1,))
    assert not failed.is_solved
    assert failed.grid.shape == (5, 5)

    print("  ✓ test_puzzle_solution_surface: PASSED")


if __name__ == "__main__":
    print("\n" + "=" * 70)
    print("RESULTS TEST SUITE")
    print("=" * 70)

    test_line_clue()
    test_clue_mismatches()
    test_grid_mismatches()
    test_puzzle_solution_surface()

    print("\n" + "=" * 70)
    print("✓ ALL RESULTS TESTS PASSED")
    print("=" * 70)
