"""Grid representation and helper utilities."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.constants import Bounds, CellKind, ORTHOGONAL_STEPS
from ..core.exceptions import CellConflictError, OutOfBoundsError
from ..core.models import Cell, Coord


class GridBuffer:
    """A fixed ``rows x cols`` grid of tagged cells.

    Placers work on square grids (``cols`` defaults to ``size``); cropping a
    finished crossword may leave a rectangle, and ``size`` is then the longer
    edge.

    Every accessor is bounds checked; reaching outside ``[0, size)`` raises
    :class:`OutOfBoundsError`. Placers are expected to query
    :meth:`in_bounds` first, so the exception marks a programming error
    rather than a routine rejection.
    """

    def __init__(self, size: int, cols: Optional[int] = None) -> None:
        cols = size if cols is None else cols
        if size <= 0 or cols <= 0:
            raise ValueError(f"Grid size must be positive, got {size}x{cols}")
        self.rows = size
        self.cols = cols
        self.size = max(size, cols)
        self.bounds = Bounds(rows=size, cols=cols)
        self.cells: List[List[Cell]] = [[Cell.empty() for _ in range(cols)] for _ in range(size)]
        self._occupied = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def in_bounds(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def cell(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.cell(row, col).is_empty()

    def is_open(self, row: int, col: int) -> bool:
        """True when the cell is off-grid or empty."""
        return not self.in_bounds(row, col) or self.cells[row][col].is_empty()

    def letter_at(self, row: int, col: int) -> Optional[str]:
        return self.cell(row, col).letter

    def has_letter(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self.cells[row][col].kind == CellKind.LETTER

    def neighbors(self, row: int, col: int) -> Iterable[Coord]:
        for dr, dc in ORTHOGONAL_STEPS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                yield nr, nc

    def path(self, row: int, col: int, step: Tuple[int, int], length: int) -> List[Coord]:
        dr, dc = step
        return [(row + dr * i, col + dc * i) for i in range(length)]

    def path_in_bounds(self, row: int, col: int, step: Tuple[int, int], length: int) -> bool:
        dr, dc = step
        end_row = row + dr * (length - 1)
        end_col = col + dc * (length - 1)
        return self.in_bounds(row, col) and self.in_bounds(end_row, end_col)

    def read(self, coords: Sequence[Coord], blank: str = ".") -> str:
        return "".join(self.cell(r, c).symbol(blank) for r, c in coords)

    def iter_cells(self) -> Iterator[Tuple[int, int, Cell]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                yield r, c, cell

    @property
    def occupied_count(self) -> int:
        return self._occupied

    @property
    def density(self) -> float:
        return self._occupied / (self.rows * self.cols)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set(self, row: int, col: int, cell: Cell) -> None:
        current = self.cell(row, col)
        if current.is_empty() and not cell.is_empty():
            self._occupied += 1
        elif not current.is_empty() and cell.is_empty():
            self._occupied -= 1
        self.cells[row][col] = cell

    def clear(self, row: int, col: int) -> None:
        self.set(row, col, Cell.empty())

    def can_write(self, coords: Sequence[Coord], values: Sequence[Cell]) -> bool:
        """Return True if every cell is in bounds and empty or identical."""
        for (row, col), value in zip(coords, values):
            if not self.in_bounds(row, col):
                return False
            current = self.cells[row][col]
            if not current.is_empty() and current != value:
                return False
        return True

    def write(self, coords: Sequence[Coord], values: Sequence[Cell]) -> int:
        """Write ``values`` along ``coords`` and return the number of shared cells.

        The whole span is checked before anything is mutated, so a rejected
        write leaves the grid untouched.
        """
        if len(coords) != len(values):
            raise ValueError("Coordinate and value counts differ")
        shared = 0
        for (row, col), value in zip(coords, values):
            current = self.cell(row, col)
            if current.is_empty():
                continue
            if current != value:
                raise CellConflictError(
                    f"Cell {(row, col)} holds {current.symbol()!r}, cannot write {value.symbol()!r}"
                )
            shared += 1
        for (row, col), value in zip(coords, values):
            self.set(row, col, value)
        return shared

    def write_word(self, coords: Sequence[Coord], word: str) -> int:
        return self.write(coords, [Cell.letter_of(ch) for ch in word])

    # ------------------------------------------------------------------
    # Snapshots & serialization
    # ------------------------------------------------------------------
    def copy(self) -> "GridBuffer":
        clone = GridBuffer(self.rows, self.cols)
        clone.cells = [list(row) for row in self.cells]
        clone._occupied = self._occupied
        return clone

    def occupied_bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """``(min_row, min_col, max_row, max_col)`` of non-empty cells, or None."""
        coords = [(r, c) for r, c, cell in self.iter_cells() if not cell.is_empty()]
        if not coords:
            return None
        rows = [r for r, _ in coords]
        cols = [c for _, c in coords]
        return min(rows), min(cols), max(rows), max(cols)

    def cropped(self, min_row: int, min_col: int, max_row: int, max_col: int) -> "GridBuffer":
        """Return a new grid holding the inclusive window, rebased to ``(0, 0)``."""
        self._check(min_row, min_col)
        self._check(max_row, max_col)
        if min_row > max_row or min_col > max_col:
            raise ValueError(f"Empty crop window {(min_row, min_col)}..{(max_row, max_col)}")
        window = GridBuffer(max_row - min_row + 1, max_col - min_col + 1)
        window.cells = [list(row[min_col:max_col + 1]) for row in self.cells[min_row:max_row + 1]]
        window._occupied = sum(
            1 for row in window.cells for cell in row if not cell.is_empty()
        )
        return window

    def to_rows(self, blank: Optional[str] = None) -> List[List[Optional[str]]]:
        return [[cell.value if cell.value is not None else blank for cell in row] for row in self.cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridBuffer):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self.cells == other.cells

    def __repr__(self) -> str:
        return f"GridBuffer(rows={self.rows}, cols={self.cols}, occupied={self._occupied})"

    def _check(self, row: int, col: int) -> None:
        if not self.bounds.contains(row, col):
            raise OutOfBoundsError(f"Coordinate {(row, col)} outside {self.rows}x{self.cols} grid")
