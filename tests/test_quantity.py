import pytest

from cadentis.core import SyllableLength, classify_syllable
from cadentis.core.phonology import PhonologyTables
from cadentis.core.quantity import closing_consonant_units, contains_diphthong


def test_article_a_is_always_long():
    assert classify_syllable("a") is SyllableLength.LONG


def test_long_first_vowel_makes_syllable_long():
    assert classify_syllable("tá") is SyllableLength.LONG
    assert classify_syllable("kő") is SyllableLength.LONG


def test_diphthong_makes_syllable_long():
    assert contains_diphthong("au")
    assert classify_syllable("au") is SyllableLength.LONG


def test_consonant_cluster_lengthens_closed_syllable():
    assert classify_syllable("mons") is SyllableLength.LONG
    assert classify_syllable("toll") is SyllableLength.LONG


def test_open_and_singly_closed_syllables_are_short():
    assert classify_syllable("ka") is SyllableLength.SHORT
    assert classify_syllable("rum") is SyllableLength.SHORT


@pytest.mark.parametrize("syllable", ["patr", "ebl", "agr"])
def test_muta_cum_liquida_counts_as_single_unit(syllable):
    assert closing_consonant_units(syllable) == 1
    assert classify_syllable(syllable) is SyllableLength.SHORT


def test_aspirated_pairs_do_not_lengthen():
    assert closing_consonant_units("ath") == 0
    assert classify_syllable("arth") is SyllableLength.SHORT


def test_multi_letter_consonants_count_once():
    assert closing_consonant_units("asz") == 1
    assert closing_consonant_units("köny") == 1
    assert closing_consonant_units("adzs") == 1
    assert classify_syllable("aszt") is SyllableLength.LONG


def test_injected_tables_change_classification():
    tables = PhonologyTables(long_article="")

    assert classify_syllable("a", tables) is SyllableLength.SHORT
