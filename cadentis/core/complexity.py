"""Score how far a line's quantity pattern drifts from its stress contour."""

from __future__ import annotations

from .models import LONG_MARK, SHORT_MARK, STRESSED_MARK, UNSTRESSED_MARK

VARIATION_WEIGHT = 0.2
MISALIGNMENT_WEIGHT = 0.3
MAX_COMPLEXITY = 5.0


def calculate_complexity(pattern: str, stress: str) -> float:
    """Return a score in ``[0, 5]``.

    Long+stressed and short+unstressed positions are aligned; every other
    position up to the shorter of the two strings adds a penalty.
    """

    score = VARIATION_WEIGHT * min(len(set(pattern)), 2)
    for quantity, accent in zip(pattern, stress):
        aligned = (quantity == LONG_MARK and accent == STRESSED_MARK) or (
            quantity == SHORT_MARK and accent == UNSTRESSED_MARK
        )
        if not aligned:
            score += MISALIGNMENT_WEIGHT
    return min(score, MAX_COMPLEXITY)


__all__ = ["calculate_complexity", "MAX_COMPLEXITY"]
