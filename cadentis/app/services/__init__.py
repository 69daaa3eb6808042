"""Service layer wrapping the prosody core for request handling."""

from .analysis_service import (
    ANALYZERS,
    analyze_line,
    analyze_rhyme_text,
    analyze_stanza_rhyme_text,
    analyze_syllables,
    analyze_verse,
    analyze_verse_forms,
)

__all__ = [
    "ANALYZERS",
    "analyze_line",
    "analyze_rhyme_text",
    "analyze_stanza_rhyme_text",
    "analyze_syllables",
    "analyze_verse",
    "analyze_verse_forms",
]
