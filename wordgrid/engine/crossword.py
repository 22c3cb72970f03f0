"""Intersecting-word crossword placement and clue numbering.

Layout is greedy: the longest candidate is seeded across the centre row,
then every further candidate is threaded perpendicularly through a letter it
shares with an already placed entry. A placement is only committed when the
grid keeps reading as exactly the placed entries:

* each cell is empty or already holds the same letter from a perpendicular
  entry;
* the cells just before and after the span are empty or off-grid;
* the perpendicular neighbours of every newly written cell are empty.

The finished grid is cropped to its letters plus a one-cell margin.
"""

from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.constants import (
    CROSSWORD_MAX_LENGTH,
    CROSSWORD_MIN_LENGTH,
    DEFAULT_GRID_SIZE,
    DEFAULT_TARGET_WORDS,
    Direction,
    PuzzleKind,
)
from ..core.models import Clue, ClueSet, Coord, PlacedWord, PuzzleResult, WordEntry
from ..utils.logger import get_logger
from .grid import GridBuffer


LOGGER = get_logger(__name__)


@dataclass
class CrosswordConfig:
    """Configuration values driving a crossword attempt."""

    grid_size: int = DEFAULT_GRID_SIZE
    target_words: int = DEFAULT_TARGET_WORDS
    min_length: int = CROSSWORD_MIN_LENGTH
    max_length: int = CROSSWORD_MAX_LENGTH
    trim: bool = True
    trim_padding: int = 1


@dataclass
class _Candidate:
    row: int
    col: int
    direction: Direction
    intersections: int


class CrosswordPlacer:
    """Builds one crossword grid from a word subset."""

    def __init__(self, config: Optional[CrosswordConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or CrosswordConfig()
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, words: Sequence[WordEntry], target_word_count: Optional[int] = None) -> PuzzleResult:
        target = target_word_count if target_word_count is not None else self.config.target_words
        grid = GridBuffer(self.config.grid_size)
        occupancy: Dict[Coord, Set[Direction]] = {}
        placed: List[PlacedWord] = []
        intersections = 0

        seed_index = self._pick_seed(words)
        if seed_index is None or target <= 0:
            LOGGER.debug("No candidate fits a %dx%d grid", grid.size, grid.size)
            return self._build_result(grid, placed, intersections)

        seed = words[seed_index]
        row = grid.size // 2
        col = (grid.size - len(seed.word)) // 2
        self._commit(grid, occupancy, placed, seed, row, col, Direction.ACROSS)

        for index, entry in enumerate(words):
            if len(placed) >= target:
                break
            if index == seed_index:
                continue
            candidate = self._best_placement(grid, occupancy, placed, entry.word)
            if candidate is None:
                LOGGER.debug("Skipping '%s': no valid intersection", entry.word)
                continue
            self._commit(grid, occupancy, placed, entry, candidate.row, candidate.col, candidate.direction)
            intersections += candidate.intersections

        LOGGER.debug("Crossword attempt placed %d/%d words", len(placed), target)
        return self._build_result(grid, placed, intersections)

    # ------------------------------------------------------------------
    # Placement search
    # ------------------------------------------------------------------
    def _pick_seed(self, words: Sequence[WordEntry]) -> Optional[int]:
        best: Optional[int] = None
        for index, entry in enumerate(words):
            if not entry.word or len(entry.word) > self.config.grid_size:
                continue
            if best is None or len(entry.word) > len(words[best].word):
                best = index
        return best

    def _best_placement(
        self,
        grid: GridBuffer,
        occupancy: Dict[Coord, Set[Direction]],
        placed: Sequence[PlacedWord],
        word: str,
    ) -> Optional[_Candidate]:
        """Pick the valid placement with the most intersections.

        Ties are broken with the placer's RNG so retries explore different
        layouts from the same candidate order.
        """
        best: List[_Candidate] = []
        tried: Set[Tuple[int, int, Direction]] = set()
        for other in placed:
            direction = other.direction.perpendicular
            dr, dc = direction.step
            for j, (cross_row, cross_col) in enumerate(other.cells):
                shared = other.word[j]
                for i, letter in enumerate(word):
                    if letter != shared:
                        continue
                    row, col = cross_row - dr * i, cross_col - dc * i
                    key = (row, col, direction)
                    if key in tried:
                        continue
                    tried.add(key)
                    score = self._score_placement(grid, occupancy, word, row, col, direction)
                    if score is None:
                        continue
                    candidate = _Candidate(row, col, direction, score)
                    if not best or score > best[0].intersections:
                        best = [candidate]
                    elif score == best[0].intersections:
                        best.append(candidate)
        if not best:
            return None
        return best[0] if len(best) == 1 else self.rng.choice(best)

    def _score_placement(
        self,
        grid: GridBuffer,
        occupancy: Dict[Coord, Set[Direction]],
        word: str,
        row: int,
        col: int,
        direction: Direction,
    ) -> Optional[int]:
        """Return the intersection count of a valid placement, else ``None``."""
        dr, dc = direction.step
        if not grid.path_in_bounds(row, col, direction.step, len(word)):
            return None
        if not grid.is_open(row - dr, col - dc):
            return None
        if not grid.is_open(row + dr * len(word), col + dc * len(word)):
            return None

        pr, pc = direction.perpendicular.step
        intersections = 0
        for index, letter in enumerate(word):
            r, c = row + dr * index, col + dc * index
            cell = grid.cell(r, c)
            if cell.is_empty():
                if not grid.is_open(r + pr, c + pc) or not grid.is_open(r - pr, c - pc):
                    return None
                continue
            if cell.letter != letter or direction in occupancy.get((r, c), ()):
                return None
            intersections += 1
        if intersections == 0:
            return None
        return intersections

    def _commit(
        self,
        grid: GridBuffer,
        occupancy: Dict[Coord, Set[Direction]],
        placed: List[PlacedWord],
        entry: WordEntry,
        row: int,
        col: int,
        direction: Direction,
    ) -> None:
        word = PlacedWord(
            word=entry.word,
            start_row=row,
            start_col=col,
            direction=direction,
            clue=entry.clue,
            display=entry.display,
        )
        grid.write_word(word.cells, word.word)
        for coord in word.cells:
            occupancy.setdefault(coord, set()).add(direction)
        placed.append(word)

    def _build_result(self, grid: GridBuffer, placed: List[PlacedWord], intersections: int) -> PuzzleResult:
        if self.config.trim:
            grid, placed = trim_grid(grid, placed, self.config.trim_padding)
        count = len(placed)
        stats = {
            "intersections": intersections,
            "avg_intersections": round(intersections / count, 3) if count else 0.0,
            "density": round(grid.density, 3),
        }
        return PuzzleResult(
            kind=PuzzleKind.CROSSWORD,
            grid=grid.copy(),
            placed=tuple(placed),
            quality_score=count,
            clues=number_clues(grid, placed),
            stats=stats,
        )


# ----------------------------------------------------------------------
# Trimming
# ----------------------------------------------------------------------
def trim_grid(
    grid: GridBuffer, placed: Sequence[PlacedWord], padding: int = 1
) -> Tuple[GridBuffer, List[PlacedWord]]:
    """Crop ``grid`` to its letters plus ``padding`` empty cells per side.

    Placed words are shifted by the same offset so they keep reading back.
    A grid without letters is returned unchanged.
    """

    found = grid.occupied_bounds()
    if found is None:
        return grid, list(placed)
    min_row, min_col, max_row, max_col = found
    min_row = max(0, min_row - padding)
    min_col = max(0, min_col - padding)
    max_row = min(grid.rows - 1, max_row + padding)
    max_col = min(grid.cols - 1, max_col + padding)
    shifted = [
        dataclasses.replace(word, start_row=word.start_row - min_row, start_col=word.start_col - min_col)
        for word in placed
    ]
    return grid.cropped(min_row, min_col, max_row, max_col), shifted


# ----------------------------------------------------------------------
# Clue numbering
# ----------------------------------------------------------------------
def run_starts(grid: GridBuffer) -> List[Tuple[int, int, List[Direction]]]:
    """Scan top-to-bottom, left-to-right for cells starting an entry."""

    starts: List[Tuple[int, int, List[Direction]]] = []
    for row in range(grid.rows):
        for col in range(grid.cols):
            if not grid.has_letter(row, col):
                continue
            directions = []
            for direction in (Direction.ACROSS, Direction.DOWN):
                dr, dc = direction.step
                if grid.has_letter(row - dr, col - dc):
                    continue
                if grid.has_letter(row + dr, col + dc):
                    directions.append(direction)
            if directions:
                starts.append((row, col, directions))
    return starts


def read_run(grid: GridBuffer, row: int, col: int, direction: Direction) -> str:
    dr, dc = direction.step
    letters = []
    while grid.has_letter(row, col):
        letters.append(grid.letter_at(row, col))
        row += dr
        col += dc
    return "".join(letters)


def number_clues(grid: GridBuffer, placed: Sequence[PlacedWord] = ()) -> ClueSet:
    """Assign ascending numbers to distinct start cells in scan order.

    A cell starting both an across and a down entry shares one number. Clue
    text is looked up from ``placed`` by start cell and direction.
    """

    texts = {(word.start_row, word.start_col, word.direction): word.clue for word in placed}
    across: List[Clue] = []
    down: List[Clue] = []
    for number, (row, col, directions) in enumerate(run_starts(grid), start=1):
        for direction in directions:
            clue = Clue(
                number=number,
                direction=direction,
                start_row=row,
                start_col=col,
                answer=read_run(grid, row, col, direction),
                text=texts.get((row, col, direction)),
            )
            (across if direction == Direction.ACROSS else down).append(clue)
    return ClueSet(across=tuple(across), down=tuple(down))


__all__ = ["CrosswordConfig", "CrosswordPlacer", "number_clues", "read_run", "run_starts", "trim_grid"]
