"""Prosodic syllabification of a line treated as one continuous phoneme stream."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .models import Syllable
from .phonology import DEFAULT_TABLES, PhonologyTables, normalize_words
from .quantity import classify_syllable

Span = Tuple[int, int]


def _cluster_take(stream: str, start: int, tables: PhonologyTables) -> int:
    """Characters of a multi-consonant cluster that stay with the open syllable."""

    if stream[start : start + 1] == stream[start + 1 : start + 2]:
        return 2
    if stream[start : start + 2] in tables.unsplit_clusters:
        return 2
    return tables.multi_letter_unit_at(stream, start) or 1


def _scan_spans(stream: str, tables: PhonologyTables) -> List[Span]:
    spans: List[Span] = []
    length = len(stream)
    start = 0
    index = 0

    while index < length:
        if not tables.is_vowel(stream[index]):
            index += 1
            continue

        if stream[index : index + 2] in tables.diphthongs:
            index += 1

        following = index + 1
        if following >= length or tables.is_vowel(stream[following]):
            spans.append((start, following))
            start = index = following
            continue

        units = 0
        cursor = following
        while cursor < length and not tables.is_vowel(stream[cursor]):
            cursor += tables.consonant_unit_at(stream, cursor)
            units += 1

        if cursor >= length:
            spans.append((start, length))
            start = length
            break

        if units == 1:
            spans.append((start, following))
            start = index = following
            continue

        end = following + _cluster_take(stream, following, tables)
        spans.append((start, end))
        start = index = end

    if start < length:
        spans.append((start, length))

    return [
        (begin, end)
        for begin, end in spans
        if any(tables.is_vowel(char) for char in stream[begin:end])
    ]


def split_into_syllables(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> List[str]:
    """Split ``text`` into syllable strings, ignoring word boundaries.

    ``None``, empty input and text without recognised vowels yield ``[]``.
    """

    stream = "".join(normalize_words(text, tables))
    if not stream:
        return []
    return [stream[begin:end] for begin, end in _scan_spans(stream, tables)]


def syllabify(
    text: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> List[Syllable]:
    """Syllabify ``text`` and attach weight, source word and in-word position.

    A syllable that straddles a word boundary is attributed to the word
    holding its first vowel.
    """

    words = normalize_words(text, tables)
    stream = "".join(words)
    if not stream:
        return []

    owners: List[int] = []
    for word_index, word in enumerate(words):
        owners.extend([word_index] * len(word))

    syllables: List[Syllable] = []
    positions = [0] * len(words)
    for begin, end in _scan_spans(stream, tables):
        nucleus = next(
            offset for offset in range(begin, end) if tables.is_vowel(stream[offset])
        )
        owner = owners[nucleus]
        positions[owner] += 1
        chunk = stream[begin:end]
        syllables.append(
            Syllable(
                text=chunk,
                length=classify_syllable(chunk, tables),
                word=words[owner],
                position=positions[owner],
            )
        )
    return syllables


__all__ = ["split_into_syllables", "syllabify"]
