"""Per-line long/short signatures, mora totals and whole-text aggregation."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .models import AnalysisResult, LineAnalysis, Syllable
from .phonology import DEFAULT_TABLES, PhonologyTables
from .syllabifier import syllabify


def build_pattern(syllables: Sequence[Syllable]) -> str:
    return "".join(syllable.length.mark for syllable in syllables)


def count_morae(syllables: Sequence[Syllable]) -> int:
    return sum(syllable.length.morae for syllable in syllables)


def parse_line(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> LineAnalysis:
    """Syllabify one line and derive its pattern, syllable and mora counts."""

    raw = (text or "").strip()
    syllables = syllabify(raw, tables)
    return LineAnalysis(
        text=raw,
        syllables=syllables,
        pattern=build_pattern(syllables),
        syllable_count=len(syllables),
        mora_count=count_morae(syllables),
    )


def summarize(lines: Iterable[LineAnalysis]) -> AnalysisResult:
    collected: List[LineAnalysis] = list(lines)
    return AnalysisResult(
        lines=collected,
        total_syllables=sum(line.syllable_count for line in collected),
        total_moras=sum(line.mora_count for line in collected),
    )


__all__ = ["build_pattern", "count_morae", "parse_line", "summarize"]
