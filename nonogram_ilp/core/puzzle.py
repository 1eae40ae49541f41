"""
Puzzle model for nonogram (paint-by-number) instances.

A puzzle is a palette plus, for every row and every column, an ordered
sequence of blocks. Each block is a run of `length` consecutive cells of a
single palette color. An empty sequence denotes an entirely uncolored line.

Conventions:
  - Rows are listed top to bottom, columns left to right
  - Blocks within a row are listed left to right, within a column top down
  - Colors are non-zero integers; 0 (UNCOLORED) is reserved for empty cells

Puzzles are immutable once constructed and are validated eagerly: any
malformed clue raises ValidationError naming the offending line and block.
"""

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral
from typing import List, Literal, Optional, Sequence, Tuple

from nonogram_ilp.core.grid_types import UNCOLORED


Orientation = Literal["row", "col"]
ORIENTATIONS: Tuple[Orientation, Orientation] = ("row", "col")


class ValidationError(ValueError):
    """Raised when puzzle clues or palette are malformed."""
    pass


@dataclass(frozen=True)
class Block:
    """
    One clue entry: a run of `length` cells of color `color`.

    Attributes:
        length: Number of consecutive cells (>= 1)
        color: Palette color of the run
    """
    length: int
    color: int


Clue = Tuple[Block, ...]


@dataclass(frozen=True)
class Puzzle:
    """
    Holds one nonogram instance.

    Attributes:
        palette: Distinct non-zero colors permitted in the puzzle
        row_clues: Blocks of each row, top to bottom
        col_clues: Blocks of each column, left to right

    Example:
        >>> p = Puzzle.monochrome([[1, 1], [3]], [[1], [1], [2], [1]])
        >>> p.shape
        (2, 4)
        >>> p.row_clues[0]
        (Block(length=1, color=1), Block(length=1, color=1))
    """
    palette: Tuple[int, ...]
    row_clues: Tuple[Clue, ...]
    col_clues: Tuple[Clue, ...]

    def __post_init__(self) -> None:
        # Freeze caller-supplied lists so the instance is hashable
        object.__setattr__(self, "palette", tuple(
            _as_int(color) for color in _as_list(self.palette, "palette: expected a sequence of colors")
        ))
        object.__setattr__(self, "row_clues", _freeze_clues(self.row_clues, "row"))
        object.__setattr__(self, "col_clues", _freeze_clues(self.col_clues, "col"))
        self._validate()

    @classmethod
    def monochrome(
        cls,
        row_lengths: Sequence[Sequence[int]],
        col_lengths: Sequence[Sequence[int]],
    ) -> Puzzle:
        """
        Build a black-and-white puzzle from block lengths only.

        The single block color is 1 and the palette is (1,).
        """
        row_lengths = [
            _line_items(lengths, "row", i)
            for i, lengths in enumerate(_as_list(row_lengths, "row lengths: expected a sequence of lines"))
        ]
        col_lengths = [
            _line_items(lengths, "col", j)
            for j, lengths in enumerate(_as_list(col_lengths, "col lengths: expected a sequence of lines"))
        ]
        return cls.from_clues(
            row_lengths,
            [[1] * len(lengths) for lengths in row_lengths],
            col_lengths,
            [[1] * len(lengths) for lengths in col_lengths],
            palette=(1,),
        )

    @classmethod
    def from_clues(
        cls,
        row_lengths: Sequence[Sequence[int]],
        row_colors: Sequence[Sequence[int]],
        col_lengths: Sequence[Sequence[int]],
        col_colors: Sequence[Sequence[int]],
        palette: Optional[Sequence[int]] = None,
    ) -> Puzzle:
        """
        Build a puzzle from parallel length and color sequences.

        When `palette` is omitted it is the union of all clue colors, in
        order of first appearance (rows first, then columns).

        Raises:
            ValidationError: If a lengths line and its colors line differ
                in size, or on any Puzzle validation failure
        """
        row_clues = _zip_clues(row_lengths, row_colors, "row")
        col_clues = _zip_clues(col_lengths, col_colors, "col")

        if palette is None:
            seen: List[int] = []
            for clue in row_clues + col_clues:
                for block in clue:
                    if block.color not in seen and block.color != UNCOLORED:
                        seen.append(block.color)
            palette = seen

        return cls(palette=tuple(palette), row_clues=row_clues, col_clues=col_clues)

    @property
    def num_rows(self) -> int:
        return len(self.row_clues)

    @property
    def num_cols(self) -> int:
        return len(self.col_clues)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.num_rows, self.num_cols)

    def clues(self, orientation: Orientation) -> Tuple[Clue, ...]:
        """Return row_clues or col_clues."""
        return self.row_clues if orientation == "row" else self.col_clues

    def line_length(self, orientation: Orientation) -> int:
        """Number of cells in each line of the given orientation."""
        return self.num_cols if orientation == "row" else self.num_rows

    def _validate(self) -> None:
        if len(set(self.palette)) != len(self.palette):
            raise ValidationError(f"Palette has duplicate colors: {self.palette}")
        for color in self.palette:
            if not _is_int(color) or color == UNCOLORED:
                raise ValidationError(
                    f"Palette colors must be non-zero integers, got {color!r}"
                )

        if self.num_rows == 0 or self.num_cols == 0:
            raise ValidationError(
                f"Puzzle needs at least one row and one column, got shape {self.shape}"
            )

        for orientation in ORIENTATIONS:
            for line, clue in enumerate(self.clues(orientation)):
                for t, block in enumerate(clue):
                    if not _is_int(block.length) or block.length < 1:
                        raise ValidationError(
                            f"{orientation} {line}, block {t}: length must be an "
                            f"integer >= 1, got {block.length!r}"
                        )
                    if block.color not in self.palette:
                        raise ValidationError(
                            f"{orientation} {line}, block {t}: color {block.color!r} "
                            f"is not in palette {self.palette}"
                        )


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _as_int(value):
    """Plain int for any integral value (numpy included); anything else unchanged."""
    return int(value) if _is_int(value) else value


def _as_list(value, description: str) -> list:
    if isinstance(value, (str, bytes)):
        raise ValidationError(f"{description}, got {value!r}")
    try:
        return list(value)
    except TypeError:
        raise ValidationError(f"{description}, got {value!r}") from None


def _line_items(clue, orientation: str, line: int) -> list:
    return _as_list(clue, f"{orientation} {line}: expected a sequence of blocks")


def _freeze_clues(clues, orientation: str) -> Tuple[Clue, ...]:
    frozen = []
    lines = _as_list(clues, f"{orientation} clues: expected a sequence of lines")
    for line, clue in enumerate(lines):
        blocks = []
        for t, block in enumerate(_line_items(clue, orientation, line)):
            if isinstance(block, Block):
                length, color = block.length, block.color
            elif isinstance(block, (tuple, list)) and len(block) == 2:
                length, color = block
            else:
                raise ValidationError(
                    f"{orientation} {line}, block {t}: expected Block or "
                    f"(length, color) pair, got {block!r}"
                )
            blocks.append(Block(length=_as_int(length), color=_as_int(color)))
        frozen.append(tuple(blocks))
    return tuple(frozen)


def _zip_clues(
    lengths: Sequence[Sequence[int]],
    colors: Sequence[Sequence[int]],
    orientation: str,
) -> Tuple[Clue, ...]:
    lengths = _as_list(lengths, f"{orientation} lengths: expected a sequence of lines")
    colors = _as_list(colors, f"{orientation} colors: expected a sequence of lines")
    if len(lengths) != len(colors):
        raise ValidationError(
            f"{orientation} lengths and colors differ in line count: "
            f"{len(lengths)} != {len(colors)}"
        )
    clues = []
    for line, (line_lengths, line_colors) in enumerate(zip(lengths, colors)):
        line_lengths = _line_items(line_lengths, orientation, line)
        line_colors = _line_items(line_colors, orientation, line)
        if len(line_lengths) != len(line_colors):
            raise ValidationError(
                f"{orientation} {line}: {len(line_lengths)} lengths but "
                f"{len(line_colors)} colors"
            )
        clues.append(tuple(
            Block(_as_int(s), _as_int(c)) for s, c in zip(line_lengths, line_colors)
        ))
    return tuple(clues)


if __name__ == "__main__":
    puzzle = Puzzle.monochrome(
        [[1, 1], [1, 1], [], [1, 2], [3]],
        [[1], [2, 1], [1], [2, 2], [1]],
    )
    print(f"Shape: {puzzle.shape}, palette: {puzzle.palette}")
    for i, clue in enumerate(puzzle.row_clues):
        print(f"  row {i}: {[(b.length, b.color) for b in clue]}")

    try:
        Puzzle.monochrome([[0]], [[]])
    except ValidationError as e:
        print(f"✓ Rejected zero-length block: {e}")
