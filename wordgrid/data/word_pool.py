"""Candidate pool normalization, filtering and shuffling."""

from __future__ import annotations

import random
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.constants import DEFAULT_MAX_POOL
from ..core.models import WordEntry
from ..utils.logger import get_logger
from .normalization import clean_word, display_word


LOGGER = get_logger(__name__)

RawEntry = Union[WordEntry, str, Tuple[str, Optional[str]], Mapping[str, Any]]


def make_entry(word: str, clue: Optional[str] = None) -> WordEntry:
    """Build a :class:`WordEntry` from a raw spelling."""

    return WordEntry(word=clean_word(word), clue=clue or None, display=display_word(word))


def _coerce(raw: RawEntry) -> WordEntry:
    if isinstance(raw, WordEntry):
        if raw.word == clean_word(raw.word):
            return raw
        return WordEntry(word=clean_word(raw.word), clue=raw.clue, display=raw.display or display_word(raw.word))
    if isinstance(raw, str):
        return make_entry(raw)
    if isinstance(raw, Mapping):
        clue = raw.get("clue", raw.get("definition"))
        return make_entry(str(raw.get("word", "")), clue)
    word, clue = raw
    return make_entry(word, clue)


def normalize_pool(pool: Iterable[RawEntry]) -> List[WordEntry]:
    """Coerce raw pool items into normalized entries.

    Accepts entries, plain strings, ``(word, clue)`` pairs and mappings with
    ``word`` and ``clue``/``definition`` keys. Entries whose normalized word
    is empty are dropped. Duplicates are kept; deduplication belongs to the
    caller.
    """

    entries: List[WordEntry] = []
    for raw in pool:
        entry = _coerce(raw)
        if not entry.word:
            LOGGER.debug("Dropping pool entry without letters: %r", raw)
            continue
        entries.append(entry)
    return entries


def filter_pool(
    pool: Sequence[WordEntry],
    min_len: int,
    max_len: int,
    max_count: int = DEFAULT_MAX_POOL,
    rng: Optional[random.Random] = None,
) -> List[WordEntry]:
    """Keep entries within ``[min_len, max_len]``, shuffle, and truncate.

    The shuffle is uniform and driven by ``rng``; a seeded generator makes the
    selection reproducible. An empty list is returned when nothing qualifies.
    """

    if min_len > max_len:
        raise ValueError(f"min_len {min_len} exceeds max_len {max_len}")
    rng = rng or random.Random()
    selected = [entry for entry in pool if min_len <= len(entry.word) <= max_len]
    rng.shuffle(selected)
    if max_count >= 0:
        selected = selected[:max_count]
    LOGGER.debug(
        "Filtered pool: %d of %d entries within %d-%d letters",
        len(selected), len(pool), min_len, max_len,
    )
    return selected


__all__ = ["filter_pool", "make_entry", "normalize_pool"]
