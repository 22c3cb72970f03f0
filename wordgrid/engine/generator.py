"""Main puzzle generation orchestration.

Filter the pool once, then let the retry orchestrator run placement attempts
against fresh grids:
  1. Normalize and length-filter the candidate pool (empty pool -> failure).
  2. Per attempt: reshuffle, place, validate.
  3. Return the first attempt meeting the quality bar, or a failure value.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..core.constants import (
    CROSSWORD_MAX_LENGTH,
    CROSSWORD_MIN_LENGTH,
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_POOL,
    DEFAULT_MIN_QUALITY,
    DEFAULT_TARGET_WORDS,
    WORD_SEARCH_MAX_LENGTH,
    WORD_SEARCH_MIN_LENGTH,
    WORD_SEARCH_POSITION_ATTEMPTS,
    PuzzleKind,
)
from ..core.exceptions import ValidationError
from ..core.models import (
    DEFAULT_FLEET,
    FailureReason,
    FleetLayout,
    GenerationFailure,
    GenerationOutcome,
    PuzzleResult,
    ShipSpec,
    WordEntry,
)
from ..data.word_pool import RawEntry, filter_pool, normalize_pool
from ..utils.logger import get_logger
from .crossword import CrosswordConfig, CrosswordPlacer
from .fleet import FleetConfig, FleetPlacer
from .retry import RetryOrchestrator
from .validator import GridValidator
from .word_search import WordSearchConfig, WordSearchPlacer


LOGGER = get_logger(__name__)

_LENGTH_WINDOWS = {
    PuzzleKind.CROSSWORD: (CROSSWORD_MIN_LENGTH, CROSSWORD_MAX_LENGTH),
    PuzzleKind.WORD_SEARCH: (WORD_SEARCH_MIN_LENGTH, WORD_SEARCH_MAX_LENGTH),
}


@dataclass
class GeneratorConfig:
    kind: PuzzleKind = PuzzleKind.CROSSWORD
    grid_size: int = DEFAULT_GRID_SIZE
    target_words: int = DEFAULT_TARGET_WORDS
    min_quality: int = DEFAULT_MIN_QUALITY
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_pool: int = DEFAULT_MAX_POOL
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    seed: Optional[int] = None
    fill_empty: bool = True
    position_attempts: int = WORD_SEARCH_POSITION_ATTEMPTS

    def __post_init__(self) -> None:
        if self.kind == PuzzleKind.FLEET:
            raise ValueError("Use FleetPlacer / generate_fleet for fleet boards")
        if self.target_words < self.min_quality:
            raise ValueError(
                f"target_words ({self.target_words}) is below min_quality ({self.min_quality}); "
                "no attempt could be accepted"
            )
        default_min, default_max = _LENGTH_WINDOWS[self.kind]
        if self.min_length is None:
            self.min_length = default_min
        if self.max_length is None:
            self.max_length = default_max

    def to_crossword_config(self) -> CrosswordConfig:
        return CrosswordConfig(
            grid_size=self.grid_size,
            target_words=self.target_words,
            min_length=self.min_length,
            max_length=self.max_length,
        )

    def to_word_search_config(self) -> WordSearchConfig:
        return WordSearchConfig(
            grid_size=self.grid_size,
            target_words=self.target_words,
            min_length=self.min_length,
            max_length=self.max_length,
            position_attempts=self.position_attempts,
            fill_empty=self.fill_empty,
        )


class PuzzleGenerator:
    """High-level orchestrator: filter, retry placement, validate."""

    def __init__(self, config: GeneratorConfig, validator: Optional[GridValidator] = None) -> None:
        self.config = config
        self.validator = validator or GridValidator()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, pool: Iterable[RawEntry]) -> GenerationOutcome:
        entries = normalize_pool(pool)
        candidates = self.select_candidates(entries, random.Random(self.config.seed))
        if not candidates:
            message = (
                f"No candidate words of {self.config.min_length}-{self.config.max_length} "
                f"letters in a pool of {len(entries)}"
            )
            LOGGER.warning("%s", message)
            return GenerationFailure(reason=FailureReason.EMPTY_POOL, message=message)

        LOGGER.info(
            "Generating %s from %d candidates (grid %d, target %d)",
            self.config.kind.value, len(candidates), self.config.grid_size, self.config.target_words,
        )
        orchestrator = RetryOrchestrator(
            max_attempts=self.config.max_attempts,
            min_quality=self.config.min_quality,
            seed=self.config.seed,
        )
        outcome = orchestrator.run(lambda attempt_seed: self._attempt(entries, attempt_seed))
        if isinstance(outcome, GenerationFailure):
            LOGGER.warning("%s", outcome.message)
        return outcome

    def select_candidates(self, entries: Sequence[WordEntry], rng: random.Random) -> List[WordEntry]:
        return filter_pool(
            entries,
            self.config.min_length,
            self.config.max_length,
            self.config.max_pool,
            rng=rng,
        )

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def _attempt(self, entries: Sequence[WordEntry], attempt_seed: int) -> Optional[PuzzleResult]:
        rng = random.Random(attempt_seed)
        candidates = self.select_candidates(entries, rng)
        if self.config.kind == PuzzleKind.CROSSWORD:
            placer = CrosswordPlacer(self.config.to_crossword_config(), rng=rng)
        else:
            placer = WordSearchPlacer(self.config.to_word_search_config(), rng=rng)
        result = placer.generate(candidates, self.config.target_words)

        validation = self.validator.validate(result)
        if not validation.ok:
            raise ValidationError(f"Grid validation failed: {validation.messages}")
        return result


# ----------------------------------------------------------------------
# Convenience wrappers
# ----------------------------------------------------------------------
def generate_crossword(
    pool: Iterable[RawEntry],
    target_words: int = DEFAULT_TARGET_WORDS,
    grid_size: int = DEFAULT_GRID_SIZE,
    **options,
) -> GenerationOutcome:
    config = GeneratorConfig(
        kind=PuzzleKind.CROSSWORD, target_words=target_words, grid_size=grid_size, **options
    )
    return PuzzleGenerator(config).generate(pool)


def generate_word_search(
    pool: Iterable[RawEntry],
    target_words: int = DEFAULT_TARGET_WORDS,
    grid_size: int = DEFAULT_GRID_SIZE,
    **options,
) -> GenerationOutcome:
    config = GeneratorConfig(
        kind=PuzzleKind.WORD_SEARCH, target_words=target_words, grid_size=grid_size, **options
    )
    return PuzzleGenerator(config).generate(pool)


def generate_fleet(
    fleet: Sequence[ShipSpec] = DEFAULT_FLEET,
    config: Optional[FleetConfig] = None,
    seed: Optional[int] = None,
) -> FleetLayout:
    """Auto-place ``fleet`` and validate the resulting board."""

    layout = FleetPlacer(config, rng=random.Random(seed)).auto_place(fleet)
    validation = GridValidator().validate_fleet(layout)
    if not validation.ok:
        raise ValidationError(f"Fleet validation failed: {validation.messages}")
    return layout
