"""Line-ending extraction, rhyme matching and rhyme scheme naming.

Two analyses live here. :func:`analyze_rhyme` clusters endings by strong
rhyme over the whole text. :func:`analyze_stanza_rhyme` works stanza by stanza
with the looser typed rhyme of :func:`detect_rhyme_type` and marks unpaired
lines ``x``.
"""

from __future__ import annotations

import string
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import (
    RhymeAnalysis,
    RhymeGroup,
    RhymePair,
    RhymeType,
    StanzaRhymeAnalysis,
)
from .phonology import DEFAULT_TABLES, PhonologyTables

STRIPPED_PUNCTUATION = "!?.(),{}'\":;«»-"
_STRIP_TABLE = str.maketrans("", "", STRIPPED_PUNCTUATION)
ALPHABET: Tuple[str, ...] = tuple(string.ascii_lowercase)
OVERFLOW_LABEL = "aa"
UNPAIRED_LABEL = "x"

_FOUR_LINE_SCHEMES: Dict[str, str] = {
    "abab": "Alternate rhyme (ABAB)",
    "abba": "Enclosed rhyme (ABBA)",
    "aabb": "Coupled rhyme (AABB)",
    "aaaa": "Monorhyme (AAAA)",
}

_STANZA_SCHEMES: Dict[str, str] = {
    "xaxa": "Half rhyme (xAxA)",
    "axax": "Half rhyme (AxAx)",
    **_FOUR_LINE_SCHEMES,
}
UNKNOWN_STANZA_SCHEME = "Unknown rhyme scheme"

_LAST_WORD_STRIP_TABLE = str.maketrans("", "", "!?.,:;")
_VOWEL_RHYME_GROUPS: Tuple[Tuple[str, str], ...] = (
    ("a", "á"), ("e", "é"), ("i", "í"), ("o", "ó"), ("ö", "ő"), ("u", "ú"), ("ü", "ű"),
)


def extract_rhyming_part(line: Optional[str], tables: PhonologyTables = DEFAULT_TABLES) -> str:
    """Return the tail of ``line`` from its last vowel onwards.

    The whole cleaned line is returned when it contains no vowel.
    """

    cleaned = (line or "").lower().translate(_STRIP_TABLE)
    for index in range(len(cleaned) - 1, -1, -1):
        if tables.is_vowel(cleaned[index]):
            return cleaned[index:]
    return cleaned


def _vowel_skeleton(ending: str, tables: PhonologyTables) -> str:
    return "".join(char for char in ending if tables.is_vowel(char))


def _coda(ending: str, skeleton: str) -> str:
    if not skeleton:
        return ending
    return ending[ending.rfind(skeleton[-1]) + 1 :]


def is_strong_rhyme(
    first: Optional[str],
    second: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> bool:
    """Vowel sequences and the consonants after the final vowel must both match."""

    if not first or not second:
        return False

    skeleton_first = _vowel_skeleton(first, tables)
    skeleton_second = _vowel_skeleton(second, tables)
    if skeleton_first != skeleton_second:
        return False
    return _coda(first, skeleton_first) == _coda(second, skeleton_second)


def next_rhyme_label(current: Optional[str]) -> str:
    """Advance ``a`` .. ``z`` and then overflow to the literal ``aa``.

    Labels outside the single-letter range restart at ``a``.
    """

    if not current:
        return ALPHABET[0]
    index = ALPHABET.index(current) if current in ALPHABET else -1
    if index < len(ALPHABET) - 1:
        return ALPHABET[index + 1]
    return OVERFLOW_LABEL


def cluster_rhymes(
    endings: Sequence[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> Tuple[List[str], Tuple[RhymeGroup, ...]]:
    """Greedily assign a label to each ending in a single forward pass.

    Each ending is compared with the distinct endings seen so far, in
    first-seen order; the first strong rhyme reuses that ending's label.
    """

    labels: List[str] = []
    seen: Dict[str, str] = {}
    current = ""

    for ending in endings:
        label = next(
            (
                existing_label
                for existing, existing_label in seen.items()
                if is_strong_rhyme(ending, existing, tables)
            ),
            None,
        )
        if label is None:
            current = next_rhyme_label(current)
            label = current
            seen[ending] = label
        labels.append(label)

    groups = tuple(RhymeGroup(ending=ending, label=label) for ending, label in seen.items())
    return labels, groups


def suffix_similarity(first: str, second: str) -> float:
    """Share of trailing characters two endings have in common."""

    if not first or not second:
        return 0.0
    longest = max(len(first), len(second))
    matches = 0
    for char_first, char_second in zip(reversed(first), reversed(second)):
        if char_first != char_second:
            break
        matches += 1
    return matches / longest


def rhyme_confidence(endings: Sequence[str], labels: Sequence[str]) -> float:
    total = 0.0
    pairs = 0
    for i in range(len(labels)):
        for j in range(i + 1, len(labels)):
            if labels[i] == labels[j] and labels[i] != UNPAIRED_LABEL:
                total += suffix_similarity(endings[i], endings[j])
                pairs += 1
    return total / pairs if pairs else 0.0


def describe_scheme(labels: Sequence[str]) -> str:
    if not labels:
        return "No rhyme detected"

    joined = "".join(labels)
    if len(labels) == 4 and joined in _FOUR_LINE_SCHEMES:
        return _FOUR_LINE_SCHEMES[joined]

    distinct = len({label for label in labels if label != UNPAIRED_LABEL})
    total = len(labels)
    if distinct == 1:
        return "Monorhyme"
    if distinct == total:
        return "No consistent rhyme"
    if distinct / total < 0.5:
        return "Complex rhyme scheme"
    return f"Custom rhyme scheme ({joined})"


def analyze_rhyme(
    lines: Iterable[Optional[str]],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> RhymeAnalysis:
    """Cluster the endings of the non-blank ``lines`` into a rhyme scheme."""

    cleaned = [line.strip() for line in lines if line and line.strip()]
    endings = [extract_rhyming_part(line, tables) for line in cleaned]
    labels, groups = cluster_rhymes(endings, tables)
    return RhymeAnalysis(
        pattern=labels,
        analysis=describe_scheme(labels),
        confidence=rhyme_confidence(endings, labels),
        groups=groups,
    )


def last_word(line: Optional[str]) -> str:
    words = (line or "").translate(_LAST_WORD_STRIP_TABLE).split()
    return words[-1] if words else ""


def _vowels(text: str, tables: PhonologyTables) -> str:
    return "".join(char for char in text if tables.is_vowel(char))


def _consonants(text: str, tables: PhonologyTables) -> str:
    return "".join(char for char in text if tables.is_consonant(char))


def _is_goat_rhyme(first: str, second: str) -> bool:
    """Same letters except for exactly one swapped pair of positions."""

    if len(first) != len(second):
        return False
    differences = [index for index, (a, b) in enumerate(zip(first, second)) if a != b]
    if len(differences) != 2:
        return False
    left, right = differences
    return first[left] == second[right] and first[right] == second[left]


def _is_torture_rhyme(first: str, second: str) -> bool:
    """Identical sounds split across different word boundaries."""

    joined_first = "".join(first.split())
    joined_second = "".join(second.split())
    return joined_first == joined_second and (" " in first) != (" " in second)


def _vowel_closed_syllables(word: str, tables: PhonologyTables) -> List[str]:
    # coarse split used only for rhyme rhythm: every syllable ends on its vowel
    syllables: List[str] = []
    current = ""
    for char in word:
        current += char
        if tables.is_vowel(char):
            syllables.append(current)
            current = ""
    if current:
        if syllables:
            syllables[-1] += current
        else:
            syllables.append(current)
    return syllables


def _rhyme_rhythm(word: str, tables: PhonologyTables) -> str:
    syllables = _vowel_closed_syllables(word, tables)
    if not syllables:
        return ""
    last = syllables[-1]
    vowels = _vowels(last, tables)
    if not vowels:
        return ""
    heavy = tables.is_long_vowel(vowels[-1]) or not tables.is_vowel(last[-1])
    if heavy:
        return "U-" if len(syllables) > 1 else "-"
    return "-U" if len(syllables) > 1 else "U"


def _vowels_rhyme(first: str, second: str) -> bool:
    if first == second:
        return True
    return any(first in group and second in group for group in _VOWEL_RHYME_GROUPS)


def _last_syllables_rhyme(first: str, second: str, tables: PhonologyTables) -> bool:
    syllables_first = _vowel_closed_syllables(first, tables)
    syllables_second = _vowel_closed_syllables(second, tables)
    vowels_first = _vowels(syllables_first[-1], tables) if syllables_first else ""
    vowels_second = _vowels(syllables_second[-1], tables) if syllables_second else ""
    if not vowels_first or not vowels_second:
        return False
    return _vowels_rhyme(vowels_first[-1], vowels_second[-1])


def detect_rhyme_type(
    first: Optional[str],
    second: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> RhymeType:
    """Classify how two endings (or whole words) rhyme.

    Checks run in order: clean (identical), goat (one swapped pair), torture
    (same sounds, different word breaks), crooked (same consonants, different
    vowels), consonant assonance and assonance (same vowels), and finally
    masculine or feminine when only the last syllables' vowels agree.
    """

    if not first or not second:
        return RhymeType.NONE
    first, second = first.lower(), second.lower()
    if first == second:
        return RhymeType.CLEAN
    if _is_goat_rhyme(first, second):
        return RhymeType.GOAT
    if _is_torture_rhyme(first, second):
        return RhymeType.TORTURE

    same_consonants = _consonants(first, tables) == _consonants(second, tables)
    same_vowels = _vowels(first, tables) == _vowels(second, tables)
    if same_consonants and not same_vowels:
        return RhymeType.CROOKED
    if same_vowels:
        return RhymeType.CONSONANT_ASSONANCE if same_consonants else RhymeType.ASSONANCE

    if not _last_syllables_rhyme(first, second, tables):
        return RhymeType.NONE
    rhythm_first = _rhyme_rhythm(first, tables)
    rhythm_second = _rhyme_rhythm(second, tables)
    if rhythm_first == rhythm_second == "U-":
        return RhymeType.MASCULINE
    if rhythm_first == rhythm_second == "-U":
        return RhymeType.FEMININE
    return RhymeType.ASSONANCE


def is_typed_rhyme(
    first: Optional[str],
    second: Optional[str],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> bool:
    return detect_rhyme_type(first, second, tables) is not RhymeType.NONE


def split_stanzas(lines: Iterable[Optional[str]]) -> List[List[str]]:
    """Group trimmed lines into stanzas separated by blank lines."""

    stanzas: List[List[str]] = []
    current: List[str] = []
    for line in lines:
        stripped = (line or "").strip()
        if stripped:
            current.append(stripped)
        elif current:
            stanzas.append(current)
            current = []
    if current:
        stanzas.append(current)
    return stanzas


def _stanza_labels(endings: Sequence[str], tables: PhonologyTables) -> List[str]:
    # the first two lines always open a group; later lines only when a
    # following line of the same stanza rhymes with them
    labels: List[str] = []
    seen: Dict[str, str] = {}
    current = ""
    for index, ending in enumerate(endings):
        label = next(
            (
                existing_label
                for existing, existing_label in seen.items()
                if is_typed_rhyme(ending, existing, tables)
            ),
            None,
        )
        if label is None:
            opens_group = index < 2 or any(
                is_typed_rhyme(ending, later, tables) for later in endings[index + 1 :]
            )
            if opens_group:
                current = next_rhyme_label(current)
                label = current
                seen[ending] = label
            else:
                label = UNPAIRED_LABEL
        labels.append(label)

    counts = Counter(labels)
    return [label if counts[label] > 1 else UNPAIRED_LABEL for label in labels]


def _reassign_labels(keyed: Sequence[Tuple[int, str]]) -> List[str]:
    """Relabel ``(stanza, label)`` keys in first-seen order, keeping ``x``."""

    mapping: Dict[Tuple[int, str], str] = {}
    current = ""
    pattern: List[str] = []
    for key in keyed:
        if key[1] == UNPAIRED_LABEL:
            pattern.append(UNPAIRED_LABEL)
            continue
        if key not in mapping:
            current = next_rhyme_label(current)
            mapping[key] = current
        pattern.append(mapping[key])
    return pattern


def describe_stanza_scheme(labels: Sequence[str]) -> str:
    if not labels:
        return "No rhyme detected"
    return _STANZA_SCHEMES.get("".join(labels), UNKNOWN_STANZA_SCHEME)


def _rhyme_pairs(
    pattern: Sequence[str],
    endings: Sequence[str],
    tables: PhonologyTables,
) -> List[RhymePair]:
    pairs: List[RhymePair] = []
    previous: Dict[str, int] = {}
    for index, label in enumerate(pattern):
        if label == UNPAIRED_LABEL:
            continue
        if label in previous:
            earlier = previous[label]
            pairs.append(
                RhymePair(
                    first_line=earlier,
                    second_line=index,
                    label=label,
                    rhyme_type=detect_rhyme_type(endings[earlier], endings[index], tables),
                )
            )
        previous[label] = index
    return pairs


def analyze_stanza_rhyme(
    lines: Iterable[Optional[str]],
    tables: PhonologyTables = DEFAULT_TABLES,
) -> StanzaRhymeAnalysis:
    """Label each stanza's line endings, then relabel the whole poem.

    Lines that rhyme with no other line of their stanza are marked ``x``.
    Groups never span stanzas, so every stanza's groups get letters of
    their own.
    """

    stanzas = split_stanzas(lines)
    keyed: List[Tuple[int, str]] = []
    endings: List[str] = []
    for stanza_index, stanza in enumerate(stanzas):
        stanza_endings = [extract_rhyming_part(last_word(line), tables) for line in stanza]
        keyed.extend(
            (stanza_index, label) for label in _stanza_labels(stanza_endings, tables)
        )
        endings.extend(stanza_endings)

    pattern = _reassign_labels(keyed)
    stanza_patterns: List[List[str]] = []
    offset = 0
    for stanza in stanzas:
        stanza_patterns.append(pattern[offset : offset + len(stanza)])
        offset += len(stanza)

    return StanzaRhymeAnalysis(
        pattern=pattern,
        analysis=describe_stanza_scheme(pattern),
        stanzas=stanza_patterns,
        pairs=_rhyme_pairs(pattern, endings, tables),
    )


__all__ = [
    "ALPHABET",
    "STRIPPED_PUNCTUATION",
    "UNPAIRED_LABEL",
    "analyze_rhyme",
    "analyze_stanza_rhyme",
    "cluster_rhymes",
    "describe_scheme",
    "describe_stanza_scheme",
    "detect_rhyme_type",
    "extract_rhyming_part",
    "is_strong_rhyme",
    "is_typed_rhyme",
    "last_word",
    "next_rhyme_label",
    "rhyme_confidence",
    "split_stanzas",
    "suffix_similarity",
]
