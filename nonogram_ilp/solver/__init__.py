"""
Solver module for the nonogram ILP.

This module provides the PuLP wrapper that solves a ConstraintBuilder and
the decoder that turns placement values back into a grid.
"""
