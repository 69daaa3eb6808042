"""Phonological lookup tables and character classes used by the prosody core.

The tables are immutable configuration. Every core function accepts a
:class:`PhonologyTables` instance (defaulting to :data:`DEFAULT_TABLES`) so
alternative inventories can be injected without touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class PhonologyTables:
    """Vowel, consonant-unit and cluster inventories for one orthography."""

    long_vowels: str = "áéíóőúű"
    short_vowels: str = "aeiouöü"
    # trigraphs are matched before digraphs wherever units are counted
    multi_letter_consonants: Tuple[str, ...] = (
        "sz", "cs", "ty", "gy", "ny", "zs", "dz", "dzs", "ly",
    )
    diphthongs: Tuple[str, ...] = ("ai", "au", "ei", "eu", "oi", "ou", "ui")
    # aspirated pairs that never lengthen a syllable on their own
    aspirated_pairs: Tuple[str, ...] = ("kh", "ph", "th")
    stops: FrozenSet[str] = field(default_factory=lambda: frozenset("ptkbdg"))
    liquids: FrozenSet[str] = field(default_factory=lambda: frozenset("rl"))
    unsplit_clusters: Tuple[str, ...] = ("ng",)
    long_article: str = "a"

    @property
    def vowels(self) -> str:
        return self.long_vowels + self.short_vowels

    def is_vowel(self, char: Optional[str]) -> bool:
        return bool(char) and len(char) == 1 and char in self.vowels

    def is_long_vowel(self, char: Optional[str]) -> bool:
        return bool(char) and len(char) == 1 and char in self.long_vowels

    def is_consonant(self, char: Optional[str]) -> bool:
        """ASCII letters that are not vowels count as consonants."""

        if not char or len(char) != 1 or self.is_vowel(char):
            return False
        return ("a" <= char <= "z") or ("A" <= char <= "Z")

    def is_recognized(self, char: str) -> bool:
        return self.is_vowel(char) or self.is_consonant(char)

    def multi_letter_unit_at(self, text: str, index: int) -> int:
        """Length of the multi-letter consonant starting at ``index`` (0 if none)."""

        for size in (3, 2):
            chunk = text[index : index + size]
            if len(chunk) == size and chunk in self.multi_letter_consonants:
                return size
        return 0

    def consonant_unit_at(self, text: str, index: int) -> int:
        """Characters spanned by the consonant unit starting at ``index``."""

        return self.multi_letter_unit_at(text, index) or 1


DEFAULT_TABLES = PhonologyTables()


def extract_vowels(text: str, tables: PhonologyTables = DEFAULT_TABLES) -> List[str]:
    return [char for char in text if tables.is_vowel(char)]


def normalize_words(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> List[str]:
    """Fold case and keep only recognised letters of each whitespace-separated word.

    Words that lose every character are dropped.
    """

    if not text:
        return []
    words: List[str] = []
    for token in str(text).lower().split():
        cleaned = "".join(char for char in token if tables.is_recognized(char))
        if cleaned:
            words.append(cleaned)
    return words


def normalize_stream(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> str:
    """Return the line as one continuous phoneme stream without word breaks."""

    return "".join(normalize_words(text, tables))


__all__ = [
    "PhonologyTables",
    "DEFAULT_TABLES",
    "extract_vowels",
    "normalize_words",
    "normalize_stream",
]
