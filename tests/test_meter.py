from cadentis.core import (
    MeterDirection,
    VerseForm,
    classify_verse_forms,
    is_hexameter,
    is_pentameter,
    meter_direction,
)
from cadentis.core.models import LineAnalysis

HEXAMETER = "-UU-UU-UU-UU-UU--"
SPONDAIC_HEXAMETER = "---------UU-U"
PENTAMETER = "-UU-UU--UU-UU-"
SHORT_PENTAMETER = "------UU-UU-"


def _line(pattern: str) -> LineAnalysis:
    return LineAnalysis(
        text=f"line {pattern}",
        syllables=[],
        pattern=pattern,
        syllable_count=len(pattern),
        mora_count=0,
    )


def test_hexameter_recognition():
    assert is_hexameter(HEXAMETER)
    assert is_hexameter(SPONDAIC_HEXAMETER)
    assert is_hexameter(HEXAMETER + "x")
    assert not is_hexameter("-UU-UU-UU-UU--U--")
    assert not is_hexameter("-UU--")


def test_pentameter_recognition():
    assert is_pentameter(PENTAMETER)
    assert is_pentameter(SHORT_PENTAMETER)
    assert not is_pentameter(HEXAMETER)
    assert not is_pentameter("-UU-UU-UU-UU-U")


def test_meter_direction():
    assert meter_direction("U-U-") is MeterDirection.RISING
    assert meter_direction("-UU-UU") is MeterDirection.FALLING
    assert meter_direction("") is MeterDirection.MIXED


def test_distich_pairs_are_marked():
    matches = classify_verse_forms(
        [_line(HEXAMETER), _line(PENTAMETER), _line("-U"), _line(PENTAMETER)]
    )

    assert [match.verse_form for match in matches] == [
        VerseForm.DISTICH_HEXAMETER,
        VerseForm.DISTICH_PENTAMETER,
        VerseForm.UNKNOWN,
        VerseForm.PENTAMETER,
    ]
    assert matches[0].is_distich_part and matches[1].is_distich_part
    assert not matches[3].is_distich_part
    assert matches[0].as_dict()["verseForm"] == "distich (hexameter)"


def test_pentameter_before_hexameter_is_not_a_distich():
    matches = classify_verse_forms([_line(PENTAMETER), _line(HEXAMETER)])

    assert [match.verse_form for match in matches] == [
        VerseForm.PENTAMETER,
        VerseForm.HEXAMETER,
    ]


def test_rhyme_labels_are_attached_by_position():
    matches = classify_verse_forms([_line(HEXAMETER), _line(PENTAMETER), _line("-U")], ["a", "a"])

    assert [match.rhyme_scheme for match in matches] == ["a", "a", ""]
    assert matches[1].as_dict()["rhymeScheme"] == "a"
