"""
Linear constraint builder for the constraint system.

This module defines the data structures that collect binary placement
variables and linear constraints over them:

    sum_i coeffs[i] * v[keys[i]]  (== or <=)  rhs

It is the solver-independent half of the ILP: the encoder fills a
ConstraintBuilder and the solver adapter translates it into a PuLP model.
No solver logic or puzzle-specific code here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Literal

from nonogram_ilp.constraints.indexing import PlacementKey


Sense = Literal["==", "<="]


@dataclass
class LinearConstraint:
    """
    A single linear constraint over placement variables:

        sum_i coeffs[i] * v[keys[i]]  sense  rhs

    Attributes:
        keys: Placement variable keys
        coeffs: Coefficients (same length as keys)
        sense: "==" or "<="
        rhs: Right-hand side value
        name: Label, e.g. "begin_once[row,2,0]"

    Example:
        # y[0,0,0] + y[0,0,1] = 1 (block 0 of row 0 starts once)
        LinearConstraint(keys=[("y", 0, 0, 0), ("y", 0, 0, 1)],
                         coeffs=[1.0, 1.0], sense="==", rhs=1.0)
    """
    keys: List[PlacementKey]
    coeffs: List[float]
    sense: Sense
    rhs: float
    name: str = ""

    @property
    def is_constant(self) -> bool:
        """True when no variable appears, so the constraint reads 0 sense rhs."""
        return len(self.keys) == 0

    def constant_holds(self) -> bool:
        """Evaluate a constant constraint (left-hand side 0)."""
        assert self.is_constant, f"Constraint {self.name!r} has variables"
        if self.sense == "==":
            return self.rhs == 0
        return 0 <= self.rhs


@dataclass
class ConstraintBuilder:
    """
    Collects placement variables and linear constraints.

    Attributes:
        variables: Declared binary variable keys, in declaration order
        constraints: LinearConstraint objects
    """
    variables: List[PlacementKey] = field(default_factory=list)
    constraints: List[LinearConstraint] = field(default_factory=list)
    _declared: Dict[PlacementKey, int] = field(default_factory=dict, repr=False)

    def add_variable(self, key: PlacementKey) -> None:
        """Declare a binary variable; declaring the same key twice is a no-op."""
        if key not in self._declared:
            self._declared[key] = len(self.variables)
            self.variables.append(key)

    def has_variable(self, key: PlacementKey) -> bool:
        return key in self._declared

    def add_eq(self, keys: List[PlacementKey], coeffs: List[float], rhs: float, name: str = "") -> None:
        """
        Add sum_i coeffs[i] * v[keys[i]] = rhs.

        Raises:
            AssertionError: If keys and coeffs differ in length or a key was
                never declared
        """
        self._add(keys, coeffs, "==", rhs, name)

    def add_le(self, keys: List[PlacementKey], coeffs: List[float], rhs: float, name: str = "") -> None:
        """
        Add sum_i coeffs[i] * v[keys[i]] <= rhs.

        Raises:
            AssertionError: If keys and coeffs differ in length or a key was
                never declared
        """
        self._add(keys, coeffs, "<=", rhs, name)

    def count_by_family(self) -> Dict[str, int]:
        """Number of constraints per family (name up to the first "[")."""
        counts: Dict[str, int] = {}
        for lc in self.constraints:
            family = lc.name.split("[")[0]
            counts[family] = counts.get(family, 0) + 1
        return counts

    def _add(self, keys, coeffs, sense, rhs, name) -> None:
        assert len(keys) == len(coeffs), \
            f"keys and coeffs must have same length, got {len(keys)} != {len(coeffs)}"
        for key in keys:
            assert key in self._declared, f"Constraint {name!r} uses undeclared variable {key}"

        self.constraints.append(
            LinearConstraint(keys=list(keys), coeffs=list(coeffs), sense=sense, rhs=rhs, name=name)
        )
