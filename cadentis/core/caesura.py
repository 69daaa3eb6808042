"""Locate a caesura at a word boundary near half or two thirds of the line."""

from __future__ import annotations

from typing import Optional

from .phonology import DEFAULT_TABLES, PhonologyTables
from .syllabifier import split_into_syllables


def detect_caesura(
    text: Optional[str],
    pattern: str,
    tables: PhonologyTables = DEFAULT_TABLES,
) -> Optional[int]:
    """Return the syllable index of the first matching word boundary, else ``None``.

    Each word is syllabified on its own, so the running count can drift from
    the line-level syllabification when syllables straddle word boundaries.
    """

    words = (text or "").split()
    if len(words) < 2:
        return None

    length = len(pattern)
    targets = {length // 2, (length * 2) // 3}
    running = 0
    for word in words[:-1]:
        running += len(split_into_syllables(word, tables))
        if running in targets:
            return running
    return None


__all__ = ["detect_caesura"]
