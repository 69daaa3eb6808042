"""Recognition of dactylic hexameter, pentameter and elegiac distichs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .models import LineAnalysis

_TRAILING_UNCERTAIN = re.compile(r"[x?]$")
_QUANTITIES_ONLY = re.compile(r"^[-U]+$")
_DACTYL_OR_SPONDEE_FEET = re.compile(r"^(-UU|--)+$")
_PENTAMETER_FIRST_HALF = re.compile(r"^(-UU|--)(-UU|--)-$")
_PENTAMETER_SECOND_HALF = "-UU-UU-"


class VerseForm(str, Enum):
    HEXAMETER = "hexameter"
    PENTAMETER = "pentameter"
    DISTICH_HEXAMETER = "distich (hexameter)"
    DISTICH_PENTAMETER = "distich (pentameter)"
    UNKNOWN = "unknown"


class MeterDirection(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    MIXED = "mixed"


def _main_pattern(pattern: str) -> str:
    return _TRAILING_UNCERTAIN.sub("", pattern)


def is_hexameter(pattern: str) -> bool:
    """Five dactyl/spondee feet with a dactylic fifth foot, then a final disyllable."""

    main = _main_pattern(pattern)
    if not 13 <= len(main) <= 17 or not _QUANTITIES_ONLY.match(main):
        return False
    if not _DACTYL_OR_SPONDEE_FEET.match(main[:-5]):
        return False
    return main[-5:-2] == "-UU" and main[-2:] in ("--", "-U")


def is_pentameter(pattern: str) -> bool:
    main = _main_pattern(pattern)
    if not 12 <= len(main) <= 14:
        return False
    if main[-7:] != _PENTAMETER_SECOND_HALF:
        return False
    return bool(_PENTAMETER_FIRST_HALF.match(main[:-7]))


def meter_direction(pattern: str) -> MeterDirection:
    rising = pattern.count("U-")
    falling = pattern.count("-U")
    if rising > falling:
        return MeterDirection.RISING
    if falling > rising:
        return MeterDirection.FALLING
    return MeterDirection.MIXED


@dataclass
class VerseFormMatch:
    text: str
    pattern: str
    verse_form: VerseForm
    direction: MeterDirection
    is_distich_part: bool = False
    rhyme_scheme: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "pattern": self.pattern,
            "verseForm": self.verse_form.value,
            "meterDirection": self.direction.value,
            "isDistichPart": self.is_distich_part,
            "rhymeScheme": self.rhyme_scheme,
        }


def _single_line_form(pattern: str) -> VerseForm:
    if is_hexameter(pattern):
        return VerseForm.HEXAMETER
    if is_pentameter(pattern):
        return VerseForm.PENTAMETER
    return VerseForm.UNKNOWN


def classify_verse_forms(
    lines: Sequence[LineAnalysis],
    rhyme_labels: Optional[Sequence[str]] = None,
) -> List[VerseFormMatch]:
    """Classify each line, then mark hexameter+pentameter pairs as distichs.

    Pairs are taken at even offsets only (lines 1-2, 3-4, ...). ``rhyme_labels``
    is aligned with ``lines``; a missing label leaves ``rhyme_scheme`` empty.
    """

    labels = list(rhyme_labels or ())
    matches = [
        VerseFormMatch(
            text=line.text,
            pattern=line.pattern,
            verse_form=_single_line_form(line.pattern),
            direction=meter_direction(line.pattern),
            rhyme_scheme=labels[index] if index < len(labels) else "",
        )
        for index, line in enumerate(lines)
    ]

    for index in range(0, len(matches) - 1, 2):
        first, second = matches[index], matches[index + 1]
        if is_hexameter(first.pattern) and is_pentameter(second.pattern):
            first.verse_form = VerseForm.DISTICH_HEXAMETER
            second.verse_form = VerseForm.DISTICH_PENTAMETER
            first.is_distich_part = second.is_distich_part = True

    return matches


__all__ = [
    "MeterDirection",
    "VerseForm",
    "VerseFormMatch",
    "classify_verse_forms",
    "is_hexameter",
    "is_pentameter",
    "meter_direction",
]
