"""Text-level analyses built from the prosody core.

Each function takes the raw submitted text (``None`` is treated as empty) and
returns a JSON-ready structure in the shape callers receive.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ...core import (
    DEFAULT_TABLES,
    PhonologyTables,
    analyze_rhyme,
    analyze_stanza_rhyme,
    calculate_complexity,
    classify_verse_forms,
    detect_caesura,
    parse_line,
    stress_pattern,
    summarize,
)
from ...core.models import LineAnalysis
from ..protocol import AnalysisType

Analyzer = Callable[[Optional[str], PhonologyTables], Any]


def _non_blank_lines(text: Optional[str]) -> List[str]:
    return [line.strip() for line in (text or "").split("\n") if line.strip()]


def analyze_line(line: str, tables: PhonologyTables = DEFAULT_TABLES) -> LineAnalysis:
    """Full verse-level analysis of one line: quantity, stress, caesura, complexity."""

    analysis = parse_line(line, tables)
    analysis.stress_pattern = stress_pattern(analysis.text, tables)
    analysis.caesura_position = detect_caesura(analysis.text, analysis.pattern, tables)
    analysis.complexity = calculate_complexity(analysis.pattern, analysis.stress_pattern)
    return analysis


def analyze_syllables(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> Dict[str, Any]:
    """Syllable and mora counts for every line, blank lines included."""

    lines = [parse_line(line, tables) for line in (text or "").split("\n")]
    return summarize(lines).as_dict()


def analyze_verse(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> List[Dict[str, Any]]:
    return [analyze_line(line, tables).as_dict() for line in _non_blank_lines(text)]


def analyze_rhyme_text(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> Dict[str, Any]:
    return analyze_rhyme(_non_blank_lines(text), tables).as_dict()


def analyze_stanza_rhyme_text(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> Dict[str, Any]:
    """Stanza-aware scheme with rhyme types; blank lines separate stanzas."""

    return analyze_stanza_rhyme((text or "").split("\n"), tables).as_dict()


def analyze_verse_forms(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> List[Dict[str, Any]]:
    texts = _non_blank_lines(text)
    lines = [parse_line(line, tables) for line in texts]
    rhyme_labels = analyze_stanza_rhyme((text or "").split("\n"), tables).pattern
    return [match.as_dict() for match in classify_verse_forms(lines, rhyme_labels)]


ANALYZERS: Dict[AnalysisType, Analyzer] = {
    AnalysisType.SYLLABLE_COUNT: analyze_syllables,
    AnalysisType.VERSE_ANALYSIS: analyze_verse,
    AnalysisType.RHYME_ANALYSIS: analyze_rhyme_text,
    AnalysisType.VERSE_FORM: analyze_verse_forms,
    AnalysisType.STANZA_RHYME: analyze_stanza_rhyme_text,
}


__all__ = [
    "ANALYZERS",
    "analyze_line",
    "analyze_rhyme_text",
    "analyze_stanza_rhyme_text",
    "analyze_syllables",
    "analyze_verse",
    "analyze_verse_forms",
]
