"""Bounded retry loop around a single placement attempt."""

from __future__ import annotations

import dataclasses
import random
from typing import Callable, Optional

from ..core.constants import DEFAULT_MAX_ATTEMPTS, DEFAULT_MIN_QUALITY
from ..core.exceptions import PlacementError, ValidationError
from ..core.models import FailureReason, GenerationFailure, GenerationOutcome, PuzzleResult
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

AttemptFn = Callable[[int], Optional[PuzzleResult]]


class RetryOrchestrator:
    """Re-runs an attempt with fresh randomness until one meets the bar.

    ``attempt_fn`` receives a per-attempt seed drawn from the orchestrator's
    RNG and must build its own grid and shuffle from it. A seeded
    orchestrator therefore replays the exact same sequence of attempts.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        min_quality: int = DEFAULT_MIN_QUALITY,
        seed: Optional[int] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts
        self.min_quality = min_quality
        self.rng = random.Random(seed)

    def run(self, attempt_fn: AttemptFn) -> GenerationOutcome:
        best_score = 0
        for attempt in range(1, self.max_attempts + 1):
            attempt_seed = self.rng.randint(0, 1_000_000)
            LOGGER.info("Generation attempt %s/%s (seed %s)", attempt, self.max_attempts, attempt_seed)
            try:
                result = attempt_fn(attempt_seed)
            except (PlacementError, ValidationError) as exc:
                LOGGER.warning("Generation attempt failed: %s", exc)
                continue
            if result is None:
                LOGGER.warning("Generation attempt produced no puzzle")
                continue
            best_score = max(best_score, result.quality_score)
            if result.quality_score < self.min_quality:
                LOGGER.warning(
                    "Attempt rejected: quality %d < %d", result.quality_score, self.min_quality
                )
                continue
            LOGGER.info("Accepted attempt %d with quality %d", attempt, result.quality_score)
            return dataclasses.replace(result, seed=attempt_seed, attempts=attempt)

        return GenerationFailure(
            reason=FailureReason.QUALITY_NOT_MET,
            message=(
                f"Could not generate a quality puzzle after {self.max_attempts} attempts "
                f"(best {best_score}, need {self.min_quality})"
            ),
            attempts=self.max_attempts,
            best_score=best_score,
        )


def with_retries(
    attempt_fn: AttemptFn,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_quality: int = DEFAULT_MIN_QUALITY,
    seed: Optional[int] = None,
) -> GenerationOutcome:
    """Functional shortcut for :class:`RetryOrchestrator`."""

    return RetryOrchestrator(max_attempts, min_quality, seed).run(attempt_fn)
