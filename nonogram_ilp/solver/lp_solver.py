"""
LP/ILP solver wrapper for the placement-variable model.

This module is the only place that talks to PuLP:
  - Takes the variables and constraints collected by ConstraintBuilder
  - Creates one binary pulp.LpVariable per placement key
  - Adds all constraints with a zero objective (feasibility problem)
  - Solves with the configured PuLP backend (CBC by default)
  - Returns the outcome as "optimal" | "infeasible" | "other" plus the
    value of every placement variable

Uses standard pulp library (no custom solver implementation). Solver
failures (unknown or unavailable backend, crashes) surface as PuLP's own
PulpSolverError, re-exported here as SolverError, and are not caught.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

import pulp

from nonogram_ilp.constraints.builder import ConstraintBuilder
from nonogram_ilp.constraints.indexing import PlacementKey, key_name


logger = logging.getLogger(__name__)

SolverError = pulp.PulpSolverError

Outcome = Literal["optimal", "infeasible", "other"]

DEFAULT_BACKEND = "PULP_CBC_CMD"


@dataclass
class SolverConfig:
    """
    Which PuLP backend to run and how.

    Attributes:
        backend: PuLP solver name as accepted by pulp.getSolver
                 (e.g. "PULP_CBC_CMD", "HiGHS_CMD", "GLPK_CMD")
        msg: Let the backend print its own log to the console
        time_limit: Wall-clock limit in seconds, or None for no limit
        options: Extra keyword arguments passed to pulp.getSolver

    Example:
        >>> config = SolverConfig(backend="HiGHS_CMD", time_limit=30)
    """
    backend: str = DEFAULT_BACKEND
    msg: bool = False
    time_limit: Optional[float] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def make_solver(self) -> pulp.LpSolver:
        """
        Instantiate the configured backend.

        Raises:
            SolverError: If PuLP does not know the backend or it is not
                installed on this machine
        """
        kwargs = dict(self.options)
        kwargs["msg"] = self.msg
        if self.time_limit is not None:
            kwargs["timeLimit"] = self.time_limit

        solver = pulp.getSolver(self.backend, **kwargs)
        if not solver.available():
            raise SolverError(f"Solver backend {self.backend!r} is not available")
        return solver


@dataclass
class PlacementSolveResult:
    """
    Outcome of one solver call.

    Attributes:
        status: "optimal", "infeasible" or "other"
        solver_status: Raw PuLP status string (e.g. "Optimal", "Infeasible")
        values: Placement key -> solved value (empty unless status is optimal)
        num_variables: Number of binary variables in the model
        num_constraints: Number of constraints in the model
    """
    status: Outcome
    solver_status: str
    values: Dict[PlacementKey, float]
    num_variables: int
    num_constraints: int


def _outcome(pulp_status: int) -> Outcome:
    if pulp_status == pulp.LpStatusOptimal:
        return "optimal"
    if pulp_status == pulp.LpStatusInfeasible:
        return "infeasible"
    return "other"


def build_lp_problem(builder: ConstraintBuilder, name: str = "nonogram_ilp"):
    """
    Translate a ConstraintBuilder into a PuLP problem.

    Constant constraints (no variables) are not added; callers must check
    them first with LinearConstraint.constant_holds().

    Returns:
        (prob, variables): the pulp.LpProblem and a map key -> pulp.LpVariable
    """
    prob = pulp.LpProblem(name, pulp.LpMinimize)

    variables = {
        key: pulp.LpVariable(key_name(key), lowBound=0, upBound=1, cat=pulp.LpBinary)
        for key in builder.variables
    }

    for lc in builder.constraints:
        if lc.is_constant:
            continue
        expr = pulp.lpSum(coeff * variables[key] for key, coeff in zip(lc.keys, lc.coeffs))
        if lc.sense == "==":
            prob += (expr == lc.rhs)
        elif lc.sense == "<=":
            prob += (expr <= lc.rhs)
        else:
            raise ValueError(f"Unknown constraint sense: {lc.sense!r}")

    # Zero objective (feasibility only)
    prob += 0

    return prob, variables


def solve_placement_model(
    builder: ConstraintBuilder,
    config: Optional[SolverConfig] = None,
) -> PlacementSolveResult:
    """
    Solve the placement-variable ILP collected in `builder`.

    A constant constraint that does not hold (e.g. a begin-once constraint
    over an empty start range, 0 = 1) makes the model infeasible without a
    solver call. A model whose every constraint is constant and holds is
    trivially optimal.

    Args:
        builder: ConstraintBuilder filled by encode_puzzle
        config: Backend choice and options (defaults to silent CBC)

    Returns:
        PlacementSolveResult

    Raises:
        SolverError: If the backend is unknown, unavailable or fails
    """
    if config is None:
        config = SolverConfig()

    num_variables = len(builder.variables)
    num_constraints = len(builder.constraints)

    for lc in builder.constraints:
        if lc.is_constant and not lc.constant_holds():
            logger.info("Constraint %s cannot hold; model is infeasible", lc.name)
            return PlacementSolveResult(
                status="infeasible",
                solver_status=pulp.LpStatus[pulp.LpStatusInfeasible],
                values={},
                num_variables=num_variables,
                num_constraints=num_constraints,
            )

    if num_variables == 0:
        return PlacementSolveResult(
            status="optimal",
            solver_status=pulp.LpStatus[pulp.LpStatusOptimal],
            values={},
            num_variables=0,
            num_constraints=num_constraints,
        )

    prob, variables = build_lp_problem(builder)
    solver = config.make_solver()

    logger.debug(
        "Solving with %s: %d variables, %d constraints",
        config.backend,
        num_variables,
        sum(1 for lc in builder.constraints if not lc.is_constant),
    )
    status = prob.solve(solver)
    solver_status = pulp.LpStatus[status]
    outcome = _outcome(status)
    logger.debug("Solver status: %s (%s)", solver_status, outcome)

    values: Dict[PlacementKey, float] = {}
    if outcome == "optimal":
        for key, var in variables.items():
            val = pulp.value(var)
            values[key] = float(val) if val is not None else 0.0

    return PlacementSolveResult(
        status=outcome,
        solver_status=solver_status,
        values=values,
        num_variables=num_variables,
        num_constraints=num_constraints,
    )
