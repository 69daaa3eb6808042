import pytest

from cadentis.app.services.analysis_service import analyze_line
from cadentis.core import (
    calculate_complexity,
    detect_caesura,
    parse_line,
    stress_pattern,
    summarize,
)

from conftest import HEXAMETER_LINE

SAMPLE_LINES = [
    HEXAMETER_LINE,
    "S most Pannónia is ontja a szép dalokat",
    "Sokra becsülnek már, a hazám is büszke lehet rám",
    "Arma virumque cano, Troiae qui primus ab oris",
    "aurum",
    "",
]


@pytest.mark.parametrize("line", SAMPLE_LINES)
def test_pattern_and_mora_invariants(line):
    analysis = parse_line(line)

    assert len(analysis.pattern) == analysis.syllable_count
    assert analysis.syllable_count == len(analysis.syllables)
    assert analysis.mora_count == 2 * analysis.long_count + analysis.short_count


def test_parse_line_builds_pattern_and_morae():
    analysis = parse_line("aurum")

    assert analysis.pattern == "-U"
    assert analysis.mora_count == 3


def test_hungarian_line_pattern():
    analysis = parse_line(HEXAMETER_LINE)

    assert analysis.syllable_count == 15
    assert analysis.pattern == "-UU-U-U-U-UUUUU"
    assert analysis.mora_count == 20


def test_summarize_adds_line_totals():
    result = summarize([parse_line("aurum"), parse_line("mons"), parse_line("")])

    assert result.total_syllables == 3
    assert result.total_moras == 5


def test_stress_marks_first_syllable_only_on_short_lines():
    assert stress_pattern("aurum") == "Su"
    assert stress_pattern("kasza tollat") == "Suuu"


def test_stress_adds_secondary_accents_on_long_lines():
    assert stress_pattern(HEXAMETER_LINE) == "SuuSuuSuuSuuSuu"
    assert stress_pattern("") == ""


def test_caesura_at_half_of_the_line():
    # 2 + 2 syllables, pattern of 4: boundary after the first word
    assert detect_caesura("kasza tollat", "UU-U") == 2


def test_caesura_needs_two_words():
    assert detect_caesura("tollat", "-U") is None
    assert detect_caesura("", "") is None


def test_caesura_absent_when_no_boundary_matches():
    assert detect_caesura(HEXAMETER_LINE, parse_line(HEXAMETER_LINE).pattern) is None


def test_complexity_scores_misaligned_positions():
    assert calculate_complexity("-U", "Su") == pytest.approx(0.4)
    assert calculate_complexity("U-", "Su") == pytest.approx(1.0)
    assert calculate_complexity("--", "Su") == pytest.approx(0.5)
    assert calculate_complexity("", "") == 0


def test_complexity_is_capped():
    assert calculate_complexity("U" * 40, "S" * 40) == 5


def test_complexity_uses_shorter_length():
    assert calculate_complexity("-UUU", "S") == pytest.approx(0.4)


def test_analyze_line_fills_verse_fields():
    analysis = analyze_line(HEXAMETER_LINE)

    assert analysis.stress_pattern == "SuuSuuSuuSuuSuu"
    assert analysis.caesura_position is None
    assert analysis.complexity == pytest.approx(1.6)
    assert set(analysis.as_dict()) == {
        "text",
        "pattern",
        "syllableCount",
        "moraCount",
        "stressPattern",
        "caesuraPosition",
        "complexity",
    }
