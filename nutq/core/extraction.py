"""
Guess which phoneme a multiple-choice option stands for.

Generated questions carry the answer directly in
``AuditoryQuestion.option_sounds``. Hand-authored questions may not, and for
those the option text is scanned instead. The scan is kept here, apart from
the judge's scoring, so it can be removed once all content carries
``option_sounds``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from nutq.core.arabic import first_arabic_letter, remove_diacritics
from nutq.core.phonetic import PhonemeTable, get_table

logger = logging.getLogger(__name__)


def extract_main_sound(
    option: str,
    target_sound: str,
    table: PhonemeTable | None = None,
) -> Optional[str]:
    """
    Scan option text for the letter it most likely represents.

    Preference order:
    1. the option itself when it is a single character
    2. the target letter, if it appears in the text
    3. the first of the target's similar sounds that appears in the text
    4. the first Arabic letter in the text

    Args:
        option: Option text (letter, syllable, word or phrase)
        target_sound: Letter of the sound under test
        table: Phoneme table used for the similar-sound lookup

    Returns:
        A single letter, or None when the text has no Arabic letter

    Examples:
        >>> extract_main_sound("ط", "ت")
        'ط'
        >>> extract_main_sound("قطة", "ت")
        'ط'
    """
    text = remove_diacritics((option or "").strip())
    if len(text) == 1:
        return text

    if target_sound and target_sound in text:
        return target_sound

    table = table if table is not None else get_table()
    for similar in table.get_similar(target_sound):
        if similar in text:
            return similar

    return first_arabic_letter(text)


def representative_sound(
    options: Sequence[str],
    index: int,
    target_sound: str,
    option_sounds: Sequence[Optional[str]] | None = None,
    table: PhonemeTable | None = None,
) -> Optional[str]:
    """
    Phoneme represented by ``options[index]``.

    When `option_sounds` is given it is authoritative: a ``None`` entry means
    the option stands for no phoneme. The text scan only runs for questions
    that carry no `option_sounds` at all.
    """
    if option_sounds is not None:
        return option_sounds[index] if index < len(option_sounds) else None
    sound = extract_main_sound(options[index], target_sound, table)
    logger.debug("Scanned option %r for target %s -> %s", options[index], target_sound, sound)
    return sound
