"""
ILP encoding: auxiliary quantities, placement-variable keys, constraints.
"""
