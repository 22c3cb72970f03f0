"""Deterministic rule validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Set

from ..core.constants import PuzzleKind
from ..core.exceptions import ValidationError
from ..core.models import Cell, Coord, FleetLayout, PuzzleResult
from ..utils.logger import get_logger
from .crossword import number_clues, run_starts


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Runs deterministic validation over a finished grid."""

    def validate(self, result: PuzzleResult) -> ValidationResult:
        try:
            self._check_placed_words(result)
            self._check_shared_cells(result)
            if result.kind == PuzzleKind.CROSSWORD:
                self._check_clue_numbering(result)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def validate_fleet(self, layout: FleetLayout) -> ValidationResult:
        try:
            self._check_fleet(layout)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    def _check_placed_words(self, result: PuzzleResult) -> None:
        grid = result.grid
        for word in result.placed:
            for row, col in word.cells:
                if not grid.in_bounds(row, col):
                    raise ValidationError(f"'{word.word}' leaves the grid at {(row, col)}")
            text = grid.read(word.cells)
            if text != word.word:
                raise ValidationError(
                    f"'{word.word}' at {word.start} {word.direction.value} reads '{text}'"
                )

    def _check_shared_cells(self, result: PuzzleResult) -> None:
        letters: Dict[Coord, str] = {}
        for word in result.placed:
            for (row, col), letter in zip(word.cells, word.word):
                existing = letters.setdefault((row, col), letter)
                if existing != letter:
                    raise ValidationError(
                        f"Words disagree at {(row, col)}: '{existing}' vs '{letter}'"
                    )

    def _check_clue_numbering(self, result: PuzzleResult) -> None:
        if result.clues is None:
            raise ValidationError("Crossword result has no clue list")
        expected = number_clues(result.grid, result.placed)
        if expected != result.clues:
            raise ValidationError("Clue list does not match the grid's run starts")

        numbers = [number for number, _ in enumerate(run_starts(result.grid), start=1)]
        recorded = sorted({clue.number for clue in result.clues.all()})
        if recorded != numbers:
            raise ValidationError(f"Clue numbers {recorded} are not consecutive in scan order")

        entries = {(c.start_row, c.start_col, c.direction, c.answer) for c in result.clues.all()}
        for word in result.placed:
            key = (word.start_row, word.start_col, word.direction, word.word)
            if key not in entries:
                raise ValidationError(f"Placed word '{word.word}' has no matching clue")
        if len(entries) != len(result.placed):
            raise ValidationError(
                f"{len(entries)} grid entries for {len(result.placed)} placed words"
            )

    def _check_fleet(self, layout: FleetLayout) -> None:
        grid = layout.grid
        seen: Set[Coord] = set()
        for ship in layout.ships:
            for row, col in ship.cells:
                if not grid.in_bounds(row, col):
                    raise ValidationError(f"{ship.name} leaves the board at {(row, col)}")
                if (row, col) in seen:
                    raise ValidationError(f"{ship.name} overlaps another ship at {(row, col)}")
                if grid.cell(row, col) != Cell.ship(ship.code):
                    raise ValidationError(f"{ship.name} is not marked on the board at {(row, col)}")
                seen.add((row, col))
            rows = {r for r, _ in ship.cells}
            cols = {c for _, c in ship.cells}
            if len(rows) > 1 and len(cols) > 1:
                raise ValidationError(f"{ship.name} is neither horizontal nor vertical")
        if grid.occupied_count != len(seen):
            raise ValidationError(
                f"Board has {grid.occupied_count} occupied cells, ships cover {len(seen)}"
            )
