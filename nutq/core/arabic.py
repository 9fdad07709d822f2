"""
Arabic text utilities.

Helpers for scanning option and practice text for letters. Option texts
may carry diacritics or alef/hamza variants, so comparisons go through
``normalize_arabic`` or ``remove_diacritics`` first.
"""

import re

# Arabic letters from hamza (U+0621) to ya (U+064A)
ARABIC_LETTER_PATTERN = re.compile(r"[\u0621-\u064A]")

_DIACRITICS_PATTERN = re.compile(r"[\u064B-\u0652]")

FATHA = "\u064E"


def normalize_arabic(text: str) -> str:
    """
    Normalize Arabic text for comparison.

    Performs the following normalizations:
    - Replace all alef variants (أ إ آ ا ٱ) with plain alef (ا)
    - Replace alef maqsura (ى) with ya (ي)
    - Replace ta marbuta (ة) with ha (ه)
    - Remove diacritics and punctuation
    - Collapse multiple spaces

    Args:
        text: Arabic text to normalize

    Returns:
        Normalized text string

    Examples:
        >>> normalize_arabic("أَسَدٌ")
        'اسد'
        >>> normalize_arabic("قطة  صغيرة!")
        'قطه صغيره'
    """
    if not text:
        return ""

    text = re.sub(r"[أإآاٱ]", "ا", text)
    text = re.sub(r"ى", "ي", text)
    text = re.sub(r"ة", "ه", text)

    # Hamza carriers: ؤ → و, ئ → ي
    text = re.sub(r"ؤ", "و", text)
    text = re.sub(r"ئ", "ي", text)

    # Diacritics (tashkeel): U+064B-U+065F, U+0670
    text = re.sub(r"[\u064B-\u065F\u0670]", "", text)

    # Remove punctuation (keeping letters and spaces)
    text = re.sub(r"[^\w\s]", "", text)
    text = re.sub(r"\s+", " ", text).strip()

    return text


def remove_diacritics(text: str) -> str:
    """
    Remove Arabic diacritics (tashkeel) from text.

    Removes: fatha, kasra, damma, shadda, sukun, tanween.
    """
    return _DIACRITICS_PATTERN.sub("", text)


def arabic_letters(text: str) -> list[str]:
    """Return every Arabic letter in `text`, in order, diacritics skipped."""
    return ARABIC_LETTER_PATTERN.findall(text or "")


def first_arabic_letter(text: str) -> str | None:
    """Return the first Arabic letter in `text`, or None."""
    match = ARABIC_LETTER_PATTERN.search(text or "")
    return match.group(0) if match else None


def count_letter(text: str, letter: str) -> int:
    """
    Count occurrences of `letter` in `text`, ignoring diacritics.

    Examples:
        >>> count_letter("بَابُ البَيْتِ", "ب")
        3
    """
    if not letter:
        return 0
    return remove_diacritics(text or "").count(letter)


def is_single_letter(text: str) -> bool:
    """True when `text` is exactly one Arabic letter once diacritics are removed."""
    bare = remove_diacritics((text or "").strip())
    return len(bare) == 1 and ARABIC_LETTER_PATTERN.fullmatch(bare) is not None
