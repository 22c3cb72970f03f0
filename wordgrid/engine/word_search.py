"""Directional word-search placement and selection checking."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.constants import (
    COMPASS_STEPS,
    DEFAULT_GRID_SIZE,
    DEFAULT_TARGET_WORDS,
    FILLER_LETTERS,
    WORD_SEARCH_MAX_LENGTH,
    WORD_SEARCH_MIN_LENGTH,
    WORD_SEARCH_POSITION_ATTEMPTS,
    Compass,
    PuzzleKind,
)
from ..core.models import Cell, Coord, PlacedWord, PuzzleResult, WordEntry
from ..utils.logger import get_logger
from .grid import GridBuffer


LOGGER = get_logger(__name__)

_STEP_TO_COMPASS = {step: compass for compass, step in COMPASS_STEPS.items()}


@dataclass
class WordSearchConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    target_words: int = DEFAULT_TARGET_WORDS
    min_length: int = WORD_SEARCH_MIN_LENGTH
    max_length: int = WORD_SEARCH_MAX_LENGTH
    position_attempts: int = WORD_SEARCH_POSITION_ATTEMPTS
    fill_empty: bool = True
    filler_letters: str = FILLER_LETTERS


class WordSearchPlacer:
    """Hides words along the eight compass directions.

    Words may cross each other when the shared cell holds the same letter.
    Longer words are placed first since they have fewer valid positions.
    """

    def __init__(self, config: Optional[WordSearchConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or WordSearchConfig()
        self.rng = rng or random.Random()

    def generate(self, words: Sequence[WordEntry], target_word_count: Optional[int] = None) -> PuzzleResult:
        target = target_word_count if target_word_count is not None else self.config.target_words
        grid = GridBuffer(self.config.grid_size)
        placed: List[PlacedWord] = []
        shared_cells = 0

        for entry in sorted(words, key=lambda item: len(item.word), reverse=True):
            if len(placed) >= target:
                break
            if not entry.word or len(entry.word) > grid.size:
                continue
            located = self._locate(grid, entry.word)
            if located is None:
                LOGGER.debug("Skipping '%s': no free path found", entry.word)
                continue
            row, col, direction = located
            word = PlacedWord(
                word=entry.word,
                start_row=row,
                start_col=col,
                direction=direction,
                clue=entry.clue,
                display=entry.display,
            )
            shared_cells += grid.write_word(word.cells, word.word)
            placed.append(word)

        stats = {
            "shared_cells": shared_cells,
            "density": round(grid.density, 3),
        }
        if self.config.fill_empty:
            self._fill_empty(grid)
        LOGGER.debug("Word-search attempt placed %d/%d words", len(placed), target)
        return PuzzleResult(
            kind=PuzzleKind.WORD_SEARCH,
            grid=grid.copy(),
            placed=tuple(placed),
            quality_score=len(placed),
            stats=stats,
        )

    def _locate(self, grid: GridBuffer, word: str) -> Optional[Tuple[int, int, Compass]]:
        letters = [Cell.letter_of(ch) for ch in word]
        directions = list(Compass)
        self.rng.shuffle(directions)
        for _ in range(self.config.position_attempts):
            row = self.rng.randrange(grid.size)
            col = self.rng.randrange(grid.size)
            for direction in directions:
                if not grid.path_in_bounds(row, col, direction.step, len(word)):
                    continue
                if grid.can_write(grid.path(row, col, direction.step, len(word)), letters):
                    return row, col, direction
        return None

    def _fill_empty(self, grid: GridBuffer) -> None:
        for row, col, cell in list(grid.iter_cells()):
            if cell.is_empty():
                grid.set(row, col, Cell.letter_of(self.rng.choice(self.config.filler_letters)))


# ----------------------------------------------------------------------
# Selection helpers
# ----------------------------------------------------------------------
def selection_direction(start: Coord, end: Coord) -> Optional[Compass]:
    """Return the compass direction of a straight drag, or ``None``."""

    d_row = end[0] - start[0]
    d_col = end[1] - start[1]
    if d_row == 0 and d_col == 0:
        return None
    if d_row != 0 and d_col != 0 and abs(d_row) != abs(d_col):
        return None
    step = ((d_row > 0) - (d_row < 0), (d_col > 0) - (d_col < 0))
    return _STEP_TO_COMPASS[step]


def validate_selection(grid: GridBuffer, start: Coord, end: Coord) -> Tuple[str, Optional[Compass]]:
    """Read the letters under a drag from ``start`` to ``end``.

    Returns ``("", None)`` when the selection is not a straight line along
    one of the eight directions or leaves the grid.
    """

    direction = selection_direction(start, end)
    if direction is None:
        return "", None
    if not (grid.in_bounds(*start) and grid.in_bounds(*end)):
        return "", None
    length = max(abs(end[0] - start[0]), abs(end[1] - start[1])) + 1
    coords = grid.path(start[0], start[1], direction.step, length)
    return grid.read(coords, blank=""), direction


def find_selected_word(placed: Iterable[PlacedWord], start: Coord, end: Coord) -> Optional[PlacedWord]:
    """Match a selection against placed words in either reading order."""

    for word in placed:
        if (word.start, word.end) in ((start, end), (end, start)):
            return word
    return None


__all__ = [
    "WordSearchConfig",
    "WordSearchPlacer",
    "find_selected_word",
    "selection_direction",
    "validate_selection",
]
