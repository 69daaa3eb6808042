"""Approximate stress contour: word-initial primary stress over the line."""

from __future__ import annotations

from typing import Optional

from .models import STRESSED_MARK, UNSTRESSED_MARK
from .phonology import DEFAULT_TABLES, PhonologyTables
from .syllabifier import split_into_syllables

SECONDARY_STRESS_MIN_SYLLABLES = 5
SECONDARY_STRESS_INTERVAL = 3


def is_stressed(index: int, total: int) -> bool:
    if index == 0:
        return True
    return total >= SECONDARY_STRESS_MIN_SYLLABLES and index % SECONDARY_STRESS_INTERVAL == 0


def stress_pattern(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> str:
    """Return an ``S``/``u`` string aligned with the line's syllables."""

    total = len(split_into_syllables(text, tables))
    return "".join(
        STRESSED_MARK if is_stressed(index, total) else UNSTRESSED_MARK
        for index in range(total)
    )


__all__ = ["is_stressed", "stress_pattern"]
