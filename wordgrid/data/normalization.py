"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

WORD_RE = re.compile(r"[^A-Z]")


def strip_diacritics(text: str) -> str:
    """Decompose ``text`` and drop combining marks (``ÇÃO`` -> ``CAO``)."""

    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    return WORD_RE.sub("", strip_diacritics(text).upper())


def display_word(text: str) -> str:
    """Uppercase letters-only form that keeps accented characters."""

    if not text:
        return ""
    return "".join(ch for ch in text.upper() if ch.isalpha())


__all__ = ["clean_word", "display_word", "strip_diacritics"]
