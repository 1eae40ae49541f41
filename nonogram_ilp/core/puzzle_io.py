"""
Puzzle import/export utilities.

Two on-disk formats are supported:

.cwc (Web Paint-by-Number export, https://webpbn.com/export.cgi):

    <number of rows>
    <number of columns>
    <number of colors>
    <block lengths of row 0>          one line per row, blank for an empty row
    ...
    <separator line>
    <block colors of row 0>           one line per row
    ...
    <separator line>
    <block lengths of column 0>       one line per column
    ...
    <separator line>
    <block colors of column 0>        one line per column
    ...

  Colors are numbered 1..n and the palette is (1, ..., n).

JSON:

    {
      "palette": [1, 2],
      "rows": [[[length, color], ...], ...],
      "cols": [[[length, color], ...], ...]
    }
"""

from pathlib import Path
from typing import List
import json

from nonogram_ilp.core.puzzle import Puzzle, ValidationError


def read_puzzle_from_cwc(path: Path) -> Puzzle:
    """
    Import a puzzle exported from Web Paint-by-Number as a .cwc file.

    Args:
        path: Path to the .cwc file

    Returns:
        Puzzle with palette (1, ..., n_colors)

    Raises:
        ValidationError: If the file is truncated or holds non-integer fields
    """
    with open(path, 'r') as f:
        lines = [line.rstrip("\n") for line in f]

    cursor = 0

    def next_ints() -> List[int]:
        nonlocal cursor
        if cursor >= len(lines):
            raise ValidationError(f"{path}: unexpected end of file at line {cursor + 1}")
        text = lines[cursor]
        cursor += 1
        try:
            return [int(tok) for tok in text.split()]
        except ValueError:
            raise ValidationError(f"{path}: line {cursor} is not integers: {text!r}")

    def next_count() -> int:
        values = next_ints()
        if len(values) != 1:
            raise ValidationError(f"{path}: line {cursor} should hold one integer")
        return values[0]

    n_rows = next_count()
    n_cols = next_count()
    n_colors = next_count()

    row_lengths = [next_ints() for _ in range(n_rows)]
    next_ints()  # separator
    row_colors = [next_ints() for _ in range(n_rows)]
    next_ints()
    col_lengths = [next_ints() for _ in range(n_cols)]
    next_ints()
    col_colors = [next_ints() for _ in range(n_cols)]

    return Puzzle.from_clues(
        row_lengths,
        row_colors,
        col_lengths,
        col_colors,
        palette=range(1, n_colors + 1),
    )


def write_puzzle_to_cwc(puzzle: Puzzle, path: Path) -> None:
    """
    Write a puzzle in .cwc format.

    Raises:
        ValueError: If the palette is not (1, ..., n), which .cwc cannot express
    """
    n_colors = len(puzzle.palette)
    if tuple(puzzle.palette) != tuple(range(1, n_colors + 1)):
        raise ValueError(f"CWC palettes must be 1..n, got {puzzle.palette}")

    def fmt(values) -> str:
        return " ".join(str(v) for v in values)

    out = [str(puzzle.num_rows), str(puzzle.num_cols), str(n_colors)]
    out += [fmt(b.length for b in clue) for clue in puzzle.row_clues]
    out.append("")
    out += [fmt(b.color for b in clue) for clue in puzzle.row_clues]
    out.append("")
    out += [fmt(b.length for b in clue) for clue in puzzle.col_clues]
    out.append("")
    out += [fmt(b.color for b in clue) for clue in puzzle.col_clues]

    with open(path, 'w') as f:
        f.write("\n".join(out) + "\n")


def load_puzzle_json(path: Path) -> Puzzle:
    """
    Load a puzzle from the JSON layout described in the module docstring.

    Raises:
        ValidationError: If required keys are missing or clues are malformed
    """
    with open(path, 'r', encoding="utf-8") as f:
        data = json.load(f)

    try:
        return Puzzle(
            palette=tuple(data["palette"]),
            row_clues=data["rows"],
            col_clues=data["cols"],
        )
    except (KeyError, TypeError) as e:
        raise ValidationError(f"{path}: malformed puzzle JSON ({type(e).__name__}: {e})")


def save_puzzle_json(puzzle: Puzzle, path: Path) -> None:
    """Save a puzzle as JSON, creating parent directories if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "palette": list(puzzle.palette),
        "rows": [[[b.length, b.color] for b in clue] for clue in puzzle.row_clues],
        "cols": [[[b.length, b.color] for b in clue] for clue in puzzle.col_clues],
    }

    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_puzzle(path: Path) -> Puzzle:
    """Load a .cwc or .json puzzle, dispatching on the file suffix."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_puzzle_json(path)
    if path.suffix.lower() == ".cwc":
        return read_puzzle_from_cwc(path)
    raise ValueError(f"Unsupported puzzle file type: {path.suffix!r} (expected .cwc or .json)")
