"""Word list loading from plain-text and TSV files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..core.exceptions import WordListError
from ..core.models import WordEntry
from ..data.word_pool import make_entry
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def parse_word_spec(raw: str) -> WordEntry:
    """Parse ``WORD`` or ``WORD:Clue`` into an entry."""

    word, _, clue = raw.partition(":")
    return make_entry(word.strip(), clue.strip() or None)


def parse_word_lines(lines: Iterable[str]) -> List[WordEntry]:
    """Parse word list lines.

    Each line is ``WORD``, ``WORD:Clue`` or ``WORD<TAB>Clue``. Blank lines and
    ``#`` comments are skipped, as are lines without any letters.
    """

    entries: List[WordEntry] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "\t" in line:
            word, _, clue = line.partition("\t")
            entry = make_entry(word.strip(), clue.strip() or None)
        else:
            entry = parse_word_spec(line)
        if not entry.word:
            LOGGER.debug("Skipping word list line without letters: %r", line)
            continue
        entries.append(entry)
    return entries


def load_word_list(path: Path | str) -> List[WordEntry]:
    source = Path(path)
    if not source.exists():
        raise WordListError(f"Missing word list: {source}")
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise WordListError(f"Cannot read word list {source}: {exc}") from exc
    entries = parse_word_lines(text.splitlines())
    LOGGER.info("Loaded %d words from %s", len(entries), source)
    return entries


__all__ = ["load_word_list", "parse_word_lines", "parse_word_spec"]
