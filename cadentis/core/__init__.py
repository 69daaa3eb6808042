"""Rule-based quantitative prosody core for Cadentis."""

from .caesura import detect_caesura
from .complexity import calculate_complexity
from .meter import (
    MeterDirection,
    VerseForm,
    VerseFormMatch,
    classify_verse_forms,
    is_hexameter,
    is_pentameter,
    meter_direction,
)
from .models import (
    AnalysisResult,
    LineAnalysis,
    RhymeAnalysis,
    RhymeGroup,
    RhymePair,
    RhymeType,
    StanzaRhymeAnalysis,
    Syllable,
    SyllableLength,
)
from .pattern import build_pattern, count_morae, parse_line, summarize
from .phonology import DEFAULT_TABLES, PhonologyTables, normalize_stream
from .quantity import classify_syllable, is_long_syllable
from .rhyme import (
    analyze_rhyme,
    analyze_stanza_rhyme,
    cluster_rhymes,
    describe_scheme,
    describe_stanza_scheme,
    detect_rhyme_type,
    extract_rhyming_part,
    is_strong_rhyme,
    next_rhyme_label,
    split_stanzas,
)
from .stress import stress_pattern
from .syllabifier import split_into_syllables, syllabify

__all__ = [
    "DEFAULT_TABLES",
    "PhonologyTables",
    "normalize_stream",
    "Syllable",
    "SyllableLength",
    "LineAnalysis",
    "RhymeGroup",
    "RhymeAnalysis",
    "RhymePair",
    "RhymeType",
    "StanzaRhymeAnalysis",
    "AnalysisResult",
    "split_into_syllables",
    "syllabify",
    "classify_syllable",
    "is_long_syllable",
    "build_pattern",
    "count_morae",
    "parse_line",
    "summarize",
    "stress_pattern",
    "detect_caesura",
    "calculate_complexity",
    "analyze_rhyme",
    "analyze_stanza_rhyme",
    "cluster_rhymes",
    "describe_scheme",
    "describe_stanza_scheme",
    "detect_rhyme_type",
    "extract_rhyming_part",
    "is_strong_rhyme",
    "next_rhyme_label",
    "split_stanzas",
    "MeterDirection",
    "VerseForm",
    "VerseFormMatch",
    "classify_verse_forms",
    "is_hexameter",
    "is_pentameter",
    "meter_direction",
]
