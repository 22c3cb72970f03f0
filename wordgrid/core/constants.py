"""Shared constants and enumerations for the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class PuzzleKind(str, Enum):
    """Puzzle families produced by the engine."""

    CROSSWORD = "crossword"
    WORD_SEARCH = "wordsearch"
    FLEET = "fleet"


class CellKind(str, Enum):
    """All supported cell states in a grid."""

    EMPTY = "EMPTY"
    LETTER = "LETTER"
    SHIP = "SHIP"


class Direction(str, Enum):
    """Crossword entry directions."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)

    @property
    def perpendicular(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class Compass(str, Enum):
    """The eight reading directions of a word-search grid."""

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @property
    def step(self) -> Tuple[int, int]:
        return COMPASS_STEPS[self]


COMPASS_STEPS = {
    Compass.N: (-1, 0),
    Compass.NE: (-1, 1),
    Compass.E: (0, 1),
    Compass.SE: (1, 1),
    Compass.S: (1, 0),
    Compass.SW: (1, -1),
    Compass.W: (0, -1),
    Compass.NW: (-1, -1),
}


class Orientation(str, Enum):
    """Ship orientations on a fleet board."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Word length windows per puzzle kind (inclusive).
CROSSWORD_MIN_LENGTH = 3
CROSSWORD_MAX_LENGTH = 10
WORD_SEARCH_MIN_LENGTH = 6
WORD_SEARCH_MAX_LENGTH = 10

DEFAULT_GRID_SIZE = 15
DEFAULT_FLEET_GRID_SIZE = 10
DEFAULT_MAX_POOL = 100
DEFAULT_TARGET_WORDS = 10
DEFAULT_MIN_QUALITY = 6
DEFAULT_MAX_ATTEMPTS = 5
WORD_SEARCH_POSITION_ATTEMPTS = 50
FLEET_PLACEMENT_ATTEMPTS = 80

FILLER_LETTERS = "AAAEEEOOIISRNDMUTCLPVGHQBFZJXK"
WATER = "~"


@dataclass(frozen=True)
class Bounds:
    """Simple square/rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
