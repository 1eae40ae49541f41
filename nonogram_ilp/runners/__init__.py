"""
End-to-end runners: solve_puzzle, result structures and the CLI.
"""
