"""
Puzzle model, grid type and puzzle file IO.
"""
