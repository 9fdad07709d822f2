"""
Unit tests for Arabic text helpers.
"""

import pytest
from nutq.core.arabic import (
    FATHA,
    arabic_letters,
    count_letter,
    first_arabic_letter,
    is_single_letter,
    normalize_arabic,
    remove_diacritics,
)


class TestArabicNormalization:
    """Test Arabic text normalization functions."""

    @pytest.mark.parametrize("input_text,expected", [
        ("أَسَدٌ", "اسد"),
        ("قطة  صغيرة!", "قطه صغيره"),
        ("إِيمَان", "ايمان"),
        ("مُوسَى", "موسي"),
    ])
    def test_normalize(self, input_text, expected):
        """Diacritics, alef variants, alef maqsura and ta marbuta are normalized."""
        assert normalize_arabic(input_text) == expected

    @pytest.mark.parametrize("variant", ["أ", "إ", "آ", "ٱ"])
    def test_normalize_hamza_to_alif(self, variant):
        """Test normalization of hamza variants to alif."""
        assert normalize_arabic(variant) == "ا"

    def test_normalize_hamza_carriers(self):
        """Hamza on waw and ya become the bare carrier."""
        assert normalize_arabic("سؤال") == "سوال"
        assert normalize_arabic("بئر") == "بير"

    def test_normalize_empty_string(self):
        """Test normalization of empty string."""
        assert normalize_arabic("") == ""


class TestDiacritics:
    """Test diacritic removal."""

    def test_remove_diacritics(self):
        """Tashkeel is removed, letters are kept as written."""
        assert remove_diacritics("بَابُ البَيْتِ") == "باب البيت"

    def test_remove_keeps_hamza_forms(self):
        """Unlike normalization, hamza forms are not folded."""
        assert remove_diacritics("أَسَد") == "أسد"

    def test_fatha_is_a_diacritic(self):
        assert remove_diacritics("ب" + FATHA) == "ب"


class TestLetterScanning:
    """Test letter extraction and counting."""

    def test_arabic_letters(self):
        """Letters are returned in order with diacritics skipped."""
        assert arabic_letters("بَاب") == ["ب", "ا", "ب"]

    def test_arabic_letters_ignores_latin(self):
        assert arabic_letters("abc 12") == []

    @pytest.mark.parametrize("text,expected", [
        ("123 قط", "ق"),
        ("تُفَّاح", "ت"),
        ("hello", None),
        ("", None),
    ])
    def test_first_arabic_letter(self, text, expected):
        assert first_arabic_letter(text) == expected

    @pytest.mark.parametrize("text,letter,expected", [
        ("بَابُ البَيْتِ", "ب", 3),
        ("تمر وتين", "ت", 2),
        ("قمر", "ت", 0),
        ("قمر", "", 0),
    ])
    def test_count_letter(self, text, letter, expected):
        """Occurrences are counted after diacritics are removed."""
        assert count_letter(text, letter) == expected

    @pytest.mark.parametrize("text,expected", [
        ("ب", True),
        ("بَ", True),
        (" ت ", True),
        ("تا", False),
        ("a", False),
        ("", False),
    ])
    def test_is_single_letter(self, text, expected):
        assert is_single_letter(text) is expected
