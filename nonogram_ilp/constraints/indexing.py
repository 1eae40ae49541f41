"""
Placement-variable keys for the constraint system.

Every binary variable of the ILP says "block t of line i starts at cell k":

  - rows use the prefix "y":    y[i, t, k], k a column index
  - columns use the prefix "x": x[j, t, k], k a row index

Keys are plain tuples (prefix, line, block, position) so they can be used
directly as dictionary keys by the builder, the solver adapter and the
decoder. All indices are 0-based.

This is pure indexing with no dependencies on constraints or solver.
"""

from typing import Tuple

from nonogram_ilp.core.puzzle import Orientation


PlacementKey = Tuple[str, int, int, int]

_PREFIX = {"row": "y", "col": "x"}


def placement_key(orientation: Orientation, line: int, block: int, position: int) -> PlacementKey:
    """
    Key of the variable "block `block` of line `line` starts at `position`".

    Example:
        >>> placement_key("row", 3, 0, 2)
        ('y', 3, 0, 2)
        >>> placement_key("col", 1, 2, 4)
        ('x', 1, 2, 4)
    """
    return (_PREFIX[orientation], line, block, position)


def key_name(key: PlacementKey) -> str:
    """
    Solver-facing variable name for a key.

    Example:
        >>> key_name(("y", 3, 0, 2))
        'y_3_0_2'
    """
    prefix, line, block, position = key
    return f"{prefix}_{line}_{block}_{position}"
