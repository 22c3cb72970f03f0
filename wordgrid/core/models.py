"""Data models supporting the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from .constants import WATER, CellKind, Compass, Direction, Orientation, PuzzleKind
from .exceptions import EmptyPoolError, PuzzleError, QualityNotMetError

if TYPE_CHECKING:
    from ..engine.grid import GridBuffer


Coord = Tuple[int, int]


@dataclass(frozen=True)
class WordEntry:
    """A candidate word and its clue.

    ``word`` is the normalized form used for placement and matching, while
    ``display`` keeps the caller's spelling (uppercased) for presentation.
    """

    word: str
    clue: Optional[str] = None
    display: Optional[str] = None

    def __len__(self) -> int:
        return len(self.word)


@dataclass(frozen=True)
class Cell:
    """Tagged cell value: empty, a letter, or a ship marker."""

    kind: CellKind = CellKind.EMPTY
    value: Optional[str] = None

    @classmethod
    def empty(cls) -> "Cell":
        return _EMPTY_CELL

    @classmethod
    def letter_of(cls, char: str) -> "Cell":
        if len(char) != 1:
            raise ValueError(f"Letter cells hold a single character, got {char!r}")
        return cls(CellKind.LETTER, char)

    @classmethod
    def ship(cls, code: str) -> "Cell":
        return cls(CellKind.SHIP, code)

    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def letter(self) -> Optional[str]:
        return self.value if self.kind == CellKind.LETTER else None

    def symbol(self, blank: str = ".") -> str:
        return self.value if self.value is not None else blank


_EMPTY_CELL = Cell()


@dataclass(frozen=True)
class PlacedWord:
    """A word committed to the grid together with its path."""

    word: str
    start_row: int
    start_col: int
    direction: Union[Direction, Compass]
    clue: Optional[str] = None
    display: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.word)

    @property
    def cells(self) -> List[Coord]:
        dr, dc = self.direction.step
        return [(self.start_row + dr * i, self.start_col + dc * i) for i in range(self.length)]

    @property
    def start(self) -> Coord:
        return (self.start_row, self.start_col)

    @property
    def end(self) -> Coord:
        dr, dc = self.direction.step
        offset = self.length - 1
        return (self.start_row + dr * offset, self.start_col + dc * offset)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "display": self.display or self.word,
            "clue": self.clue,
            "start": [self.start_row, self.start_col],
            "end": list(self.end),
            "direction": self.direction.value,
            "length": self.length,
        }


@dataclass(frozen=True)
class Clue:
    """A numbered crossword clue."""

    number: int
    direction: Direction
    start_row: int
    start_col: int
    answer: str
    text: Optional[str] = None

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "direction": self.direction.value,
            "start": [self.start_row, self.start_col],
            "answer": self.answer,
            "text": self.text,
        }


@dataclass(frozen=True)
class ClueSet:
    across: Tuple[Clue, ...] = ()
    down: Tuple[Clue, ...] = ()

    def all(self) -> List[Clue]:
        return sorted(self.across + self.down, key=lambda clue: (clue.number, clue.direction.value))

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "across": [clue.to_jsonable() for clue in self.across],
            "down": [clue.to_jsonable() for clue in self.down],
        }


@dataclass(frozen=True)
class ShipSpec:
    """Fleet entry: a ship name, its board marker and its length."""

    name: str
    code: str
    size: int


@dataclass(frozen=True)
class Ship:
    name: str
    code: str
    cells: Tuple[Coord, ...]

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def orientation(self) -> Orientation:
        if len(self.cells) > 1 and self.cells[0][0] != self.cells[1][0]:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "code": self.code,
            "size": self.size,
            "orientation": self.orientation.value,
            "cells": [list(cell) for cell in self.cells],
        }


DEFAULT_FLEET: Tuple[ShipSpec, ...] = (
    ShipSpec("Carrier", "A", 5),
    ShipSpec("Battleship", "B", 4),
    ShipSpec("Cruiser", "C", 3),
    ShipSpec("Submarine", "S", 3),
    ShipSpec("Patrol boat", "P", 2),
)


@dataclass
class FleetLayout:
    """Result of a fleet placement run."""

    grid: GridBuffer
    ships: List[Ship] = field(default_factory=list)
    unplaced: List[ShipSpec] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.unplaced

    @property
    def occupied_count(self) -> int:
        return sum(ship.size for ship in self.ships)

    def to_jsonable(self) -> Dict[str, Any]:
        return {
            "kind": PuzzleKind.FLEET.value,
            "grid": self.grid.to_rows(blank=WATER),
            "ships": [ship.to_jsonable() for ship in self.ships],
            "unplaced": [spec.name for spec in self.unplaced],
        }


@dataclass(frozen=True)
class PuzzleResult:
    """One accepted puzzle. Produced once per successful attempt."""

    kind: PuzzleKind
    grid: GridBuffer
    placed: Tuple[PlacedWord, ...]
    quality_score: int
    clues: Optional[ClueSet] = None
    stats: Dict[str, float] = field(default_factory=dict)
    seed: Optional[int] = None
    attempts: int = 1

    def to_jsonable(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "kind": self.kind.value,
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "grid": self.grid.to_rows(),
            "words": [word.to_jsonable() for word in self.placed],
            "quality_score": self.quality_score,
            "stats": dict(self.stats),
            "seed": self.seed,
            "attempts": self.attempts,
        }
        if self.clues is not None:
            payload["clues"] = self.clues.to_jsonable()
        return payload


class FailureReason(str, Enum):
    EMPTY_POOL = "empty_pool"
    QUALITY_NOT_MET = "quality_not_met"


@dataclass(frozen=True)
class GenerationFailure:
    """Explicit "no quality puzzle" signal returned instead of a partial grid."""

    reason: FailureReason
    message: str
    attempts: int = 0
    best_score: int = 0

    def to_exception(self) -> PuzzleError:
        if self.reason == FailureReason.EMPTY_POOL:
            return EmptyPoolError(self.message)
        return QualityNotMetError(self.message)


GenerationOutcome = Union[PuzzleResult, GenerationFailure]
