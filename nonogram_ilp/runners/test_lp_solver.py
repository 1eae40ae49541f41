"""
Smoke test for the PuLP solver adapter.

These tests drive solve_placement_model with tiny hand-built constraint
systems (no puzzle involved):
  - a feasible 2-variable system with a unique solution
  - an infeasible system the solver must detect
  - a constant 0 = 1 constraint detected without calling the solver
  - an empty model
  - an unknown backend
"""

import logging

from nonogram_ilp.constraints.builder import ConstraintBuilder
from nonogram_ilp.solver.lp_solver import (
    SolverConfig,
    SolverError,
    build_lp_problem,
    solve_placement_model,
)


A = ("y", 0, 0, 0)
B = ("y", 0, 0, 1)


def build_simple_test_constraints() -> ConstraintBuilder:
    """
    Two binaries a, b with:
      a + b = 1
      a - b <= -1   (b must exceed a)
    Unique solution: a = 0, b = 1.
    """
    builder = ConstraintBuilder()
    builder.add_variable(A)
    builder.add_variable(B)
    builder.add_eq([A, B], [1.0, 1.0], 1.0, name="begin_once[row,0,0]")
    builder.add_le([A, B], [1.0, -1.0], -1.0, name="order[row,0,0]")
    return builder


def test_simple_ilp():
    print("\n" + "=" * 70)
    print("TEST: Simple ILP (2 binaries)")
    print("=" * 70)

    result = solve_placement_model(build_simple_test_constraints())

    print(f"  Status: {result.status} ({result.solver_status})")
    print(f"  Values: {result.values}")

    assert result.status == "optimal"
    assert result.solver_status == "Optimal"
    assert result.num_variables == 2
    assert result.num_constraints == 2
    assert round(result.values[A]) == 0
    assert round(result.values[B]) == 1

    print("  ✓ test_simple_ilp: PASSED")


def test_infeasible_constraints():
    print("\n" + "=" * 70)
    print("TEST: Infeasible constraints detection")
    print("=" * 70)

    builder = ConstraintBuilder()
    builder.add_variable(A)
    builder.add_variable(B)
    builder.add_eq([A, B], [1.0, 1.0], 1.0)
    builder.add_le([A, B], [1.0, 1.0], 0.0)

    result = solve_placement_model(builder)

    print(f"  Status: {result.status} ({result.solver_status})")
    assert result.status == "infeasible"
    assert result.values == {}

    print("  ✓ test_infeasible_constraints: PASSED")


def test_constant_constraint_short_circuits():
    print("\n" + "=" * 70)
    print("TEST: 0 = 1 makes the model infeasible without a solver")
    print("=" * 70)

    builder = build_simple_test_constraints()
    builder.add_eq([], [], 1.0, name="begin_once[row,1,0]")

    # An unknown backend proves the solver is never instantiated
    result = solve_placement_model(builder, SolverConfig(backend="NO_SUCH_SOLVER"))

    assert result.status == "infeasible"
    assert result.solver_status == "Infeasible"

    print("  ✓ test_constant_constraint_short_circuits: PASSED")


def test_empty_model_is_optimal():
    print("\n" + "=" * 70)
    print("TEST: empty model")
    print("=" * 70)

    builder = ConstraintBuilder()
    builder.add_le([], [], 0.0)

    result = solve_placement_model(builder)
    assert result.status == "optimal"
    assert result.values == {}
    assert result.num_variables == 0

    print("  ✓ test_empty_model_is_optimal: PASSED")


def test_build_lp_problem_skips_constants():
    print("\n" + "=" * 70)
    print("TEST: PuLP translation")
    print("=" * 70)

    builder = build_simple_test_constraints()
    builder.add_le([], [], 3.0)

    prob, variables = build_lp_problem(builder)

    assert prob.numConstraints() == 2
    assert sorted(v.name for v in variables.values()) == ["y_0_0_0", "y_0_0_1"]

    print("  ✓ test_build_lp_problem_skips_constants: PASSED")


def test_debug_log_counts_solver_constraints():
    print("\n" + "=" * 70)
    print("TEST: debug log reports the constraints handed to the solver")
    print("=" * 70)

    class ListHandler(logging.Handler):
        def __init__(self):
            super().__init__(level=logging.DEBUG)
            self.messages = []

        def emit(self, record):
            self.messages.append(record.getMessage())

    builder = build_simple_test_constraints()
    builder.add_le([], [], 3.0)

    solver_logger = logging.getLogger("nonogram_ilp.solver.lp_solver")
    handler = ListHandler()
    old_level = solver_logger.level
    solver_logger.addHandler(handler)
    solver_logger.setLevel(logging.DEBUG)
    try:
        result = solve_placement_model(builder)
    finally:
        solver_logger.removeHandler(handler)
        solver_logger.setLevel(old_level)

    print(f"  Logged: {handler.messages}")
    assert result.status == "optimal"
    assert result.num_constraints == 3
    assert any("2 variables, 2 constraints" in m for m in handler.messages)

    print("  ✓ test_debug_log_counts_solver_constraints: PASSED")


def test_unknown_backend_raises():
    print("\n" + "=" * 70)
    print("TEST: unknown backend raises SolverError")
    print("=" * 70)

    try:
        solve_placement_model(build_simple_test_constraints(), SolverConfig(backend="NO_SUCH_SOLVER"))
        raise AssertionError("Expected SolverError")
    except SolverError as e:
        print(f"  ✓ Caught expected error: {e}")

    print("  ✓ test_unknown_backend_raises: PASSED")


def test_time_limit_config():
    print("\n" + "=" * 70)
    print("TEST: time limit is accepted by the default backend")
    print("=" * 70)

    config = SolverConfig(time_limit=30)
    result = solve_placement_model(build_simple_test_constraints(), config)
    assert result.status == "optimal"

    print("  ✓ test_time_limit_config: PASSED")


if __name__ == "__main__":
    print("\n" + "=" * 70)
    print("LP SOLVER SMOKE TEST SUITE")
    print("=" * 70)

    test_simple_ilp()
    test_infeasible_constraints()
    test_constant_constraint_short_circuits()
    test_empty_model_is_optimal()
    test_build_lp_problem_skips_constants()
    test_debug_log_counts_solver_constraints()
    test_unknown_backend_raises()
    test_time_limit_config()

    print("\n" + "=" * 70)
    print("✓ ALL TESTS PASSED")
    print("=" * 70)
