"""Dataclasses describing syllables, analysed lines and rhyme clusters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

LONG_MARK = "-"
SHORT_MARK = "U"
STRESSED_MARK = "S"
UNSTRESSED_MARK = "u"


class SyllableLength(str, Enum):
    """Metrical weight of a syllable."""

    SHORT = "short"
    LONG = "long"

    @property
    def mark(self) -> str:
        return LONG_MARK if self is SyllableLength.LONG else SHORT_MARK

    @property
    def morae(self) -> int:
        return 2 if self is SyllableLength.LONG else 1


@dataclass(frozen=True)
class Syllable:
    """A syllable span together with its weight and source word."""

    text: str
    length: SyllableLength
    word: str
    position: int

    @property
    def is_long(self) -> bool:
        return self.length is SyllableLength.LONG

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "length": self.length.value,
            "word": self.word,
            "position": self.position,
        }


@dataclass
class LineAnalysis:
    """Quantitative analysis of a single line of verse."""

    text: str
    syllables: List[Syllable]
    pattern: str
    syllable_count: int
    mora_count: int
    stress_pattern: Optional[str] = None
    caesura_position: Optional[int] = None
    complexity: Optional[float] = None

    @property
    def long_count(self) -> int:
        return self.pattern.count(LONG_MARK)

    @property
    def short_count(self) -> int:
        return self.pattern.count(SHORT_MARK)

    def as_count_dict(self) -> Dict[str, Any]:
        return {
            "syllables": self.syllable_count,
            "moras": self.mora_count,
            "text": self.text,
        }

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "pattern": self.pattern,
            "syllableCount": self.syllable_count,
            "moraCount": self.mora_count,
            "stressPattern": self.stress_pattern,
            "caesuraPosition": self.caesura_position,
            "complexity": self.complexity,
        }


@dataclass(frozen=True)
class RhymeGroup:
    """A rhyming tail and the scheme label assigned to it."""

    ending: str
    label: str


@dataclass
class RhymeAnalysis:
    """Rhyme scheme labels, a scheme description and a confidence score."""

    pattern: List[str]
    analysis: str
    confidence: float
    groups: Tuple[RhymeGroup, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pattern": list(self.pattern),
            "analysis": self.analysis,
            "confidence": self.confidence,
        }


class RhymeType(str, Enum):
    """Kind of rhyme joining two line endings."""

    CLEAN = "clean"
    ASSONANCE = "assonance"
    CONSONANT_ASSONANCE = "consonant assonance"
    CROOKED = "crooked"
    GOAT = "goat"
    TORTURE = "torture"
    MASCULINE = "masculine"
    FEMININE = "feminine"
    NONE = "none"


@dataclass(frozen=True)
class RhymePair:
    """Two lines (0-based, over non-blank lines) sharing a scheme label."""

    first_line: int
    second_line: int
    label: str
    rhyme_type: RhymeType

    def as_dict(self) -> Dict[str, Any]:
        return {
            "lines": [self.first_line, self.second_line],
            "label": self.label,
            "rhymeType": self.rhyme_type.value,
        }


@dataclass
class StanzaRhymeAnalysis:
    """Stanza-aware rhyme scheme with unpaired lines marked ``x``."""

    pattern: List[str]
    analysis: str
    stanzas: List[List[str]] = field(default_factory=list)
    pairs: List[RhymePair] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pattern": list(self.pattern),
            "analysis": self.analysis,
            "stanzas": [list(stanza) for stanza in self.stanzas],
            "rhymeTypes": [pair.as_dict() for pair in self.pairs],
        }


@dataclass
class AnalysisResult:
    """Per-line results and totals for one text submission."""

    lines: List[LineAnalysis] = field(default_factory=list)
    total_syllables: int = 0
    total_moras: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "totalSyllables": self.total_syllables,
            "totalMoras": self.total_moras,
            "lines": [line.as_count_dict() for line in self.lines],
        }


__all__ = [
    "LONG_MARK",
    "SHORT_MARK",
    "STRESSED_MARK",
    "UNSTRESSED_MARK",
    "SyllableLength",
    "Syllable",
    "LineAnalysis",
    "RhymeGroup",
    "RhymeAnalysis",
    "RhymePair",
    "RhymeType",
    "StanzaRhymeAnalysis",
    "AnalysisResult",
]
