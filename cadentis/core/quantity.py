"""Long/short classification of single syllables."""

from __future__ import annotations

from .models import SyllableLength
from .phonology import DEFAULT_TABLES, PhonologyTables


def contains_diphthong(syllable: str, tables: PhonologyTables = DEFAULT_TABLES) -> bool:
    return any(diphthong in syllable for diphthong in tables.diphthongs)


def _first_vowel_index(syllable: str, tables: PhonologyTables) -> int:
    for index, char in enumerate(syllable):
        if tables.is_vowel(char):
            return index
    return -1


def closing_consonant_units(syllable: str, tables: PhonologyTables = DEFAULT_TABLES) -> int:
    """Count the consonant units that follow the syllable's first vowel.

    Aspirated pairs (``kh``, ``ph``, ``th``) are skipped, multi-letter
    consonants count once and a stop followed by a liquid counts once
    (muta cum liquida).
    """

    vowel_index = _first_vowel_index(syllable, tables)
    if vowel_index == -1:
        return 0

    tail = syllable[vowel_index + 1 :].lower()
    units = 0
    index = 0
    while index < len(tail):
        if tail[index : index + 2] in tables.aspirated_pairs:
            index += 2
            continue

        multi = tables.multi_letter_unit_at(tail, index)
        if multi:
            units += 1
            index += multi
            continue

        if (
            index + 1 < len(tail)
            and tail[index] in tables.stops
            and tail[index + 1] in tables.liquids
        ):
            units += 1
            index += 2
            continue

        if tables.is_consonant(tail[index]):
            units += 1
        index += 1

    return units


def is_lengthened_by_cluster(syllable: str, tables: PhonologyTables = DEFAULT_TABLES) -> bool:
    return closing_consonant_units(syllable, tables) >= 2


def is_long_syllable(syllable: str, tables: PhonologyTables = DEFAULT_TABLES) -> bool:
    """Apply the weight rules in priority order.

    1. the article ``a`` is always long;
    2. a long first vowel;
    3. a diphthong anywhere in the syllable;
    4. two or more closing consonant units.
    """

    if not syllable:
        return False
    if syllable == tables.long_article:
        return True

    vowel_index = _first_vowel_index(syllable, tables)
    if vowel_index != -1 and tables.is_long_vowel(syllable[vowel_index]):
        return True
    if contains_diphthong(syllable, tables):
        return True
    return is_lengthened_by_cluster(syllable, tables)


def classify_syllable(syllable: str, tables: PhonologyTables = DEFAULT_TABLES) -> SyllableLength:
    if is_long_syllable(syllable, tables):
        return SyllableLength.LONG
    return SyllableLength.SHORT


__all__ = [
    "classify_syllable",
    "closing_consonant_units",
    "contains_diphthong",
    "is_lengthened_by_cluster",
    "is_long_syllable",
]
