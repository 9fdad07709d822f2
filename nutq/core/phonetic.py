"""
Arabic phoneme feature table and similarity scoring.

Scores how confusable two letters are from their articulation features.
The score is a coarse weighted union of shared features, not an acoustic
measure:

- same place of articulation (makhraj): +0.4
- registered voiced/voiceless pair: +0.3
- registered emphatic/plain pair: +0.3
- listed as a similar sound: +0.2

Identical letters score 1.0; anything else is capped at 0.9.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache
from typing import Optional

from nutq.data import load_sounds
from nutq.models.result import ConfusionType
from nutq.models.sound import ArabicSound, ArticulationPoint

# ---------------------------------------------------------------------------
# Feature pair tables
# ---------------------------------------------------------------------------

# Voiced / voiceless counterparts (mahjur / mahmus)
VOICED_VOICELESS_PAIRS: frozenset[frozenset[str]] = frozenset({
    frozenset({"ب", "ف"}),
    frozenset({"د", "ت"}),
    frozenset({"ذ", "ث"}),
    frozenset({"ز", "س"}),
    frozenset({"ج", "ش"}),
    frozenset({"ظ", "ث"}),
    frozenset({"ض", "ص"}),
    frozenset({"غ", "خ"}),
})

# Emphatic / plain counterparts (mufakham / muraqqaq)
EMPHATIC_PAIRS: frozenset[frozenset[str]] = frozenset({
    frozenset({"ط", "ت"}),
    frozenset({"ظ", "ذ"}),
    frozenset({"ص", "س"}),
    frozenset({"ض", "د"}),
    frozenset({"ق", "ك"}),
})

SAME_ARTICULATION_WEIGHT = 0.4
VOICING_PAIR_WEIGHT = 0.3
EMPHATIC_PAIR_WEIGHT = 0.3
SIMILAR_LIST_WEIGHT = 0.2
MAX_SIMILARITY = 0.9


# ---------------------------------------------------------------------------
# Phoneme table
# ---------------------------------------------------------------------------

class PhonemeTable:
    """
    Read-only ``ArabicSound`` lookup by letter or by id.

    Misses return ``None`` / empty lists; callers treat them as "no
    classification available".
    """

    def __init__(self, sounds: Iterable[ArabicSound]):
        sounds = list(sounds)
        self._by_letter: dict[str, ArabicSound] = {s.letter: s for s in sounds}
        self._by_id: dict[str, ArabicSound] = {s.id: s for s in sounds}

    @classmethod
    def default(cls) -> "PhonemeTable":
        """The table built from the bundled content."""
        return get_table()

    def get_by_letter(self, letter: str) -> Optional[ArabicSound]:
        return self._by_letter.get(letter)

    def get_by_id(self, sound_id: str) -> Optional[ArabicSound]:
        return self._by_id.get(sound_id)

    def get_similar(self, letter: str) -> list[str]:
        """Letters listed as confusable with `letter`, in authored order."""
        sound = self._by_letter.get(letter)
        return list(sound.similar_sounds) if sound else []

    @property
    def letters(self) -> list[str]:
        return list(self._by_letter)

    def __contains__(self, letter: object) -> bool:
        return letter in self._by_letter

    def __iter__(self) -> Iterator[ArabicSound]:
        return iter(self._by_letter.values())

    def __len__(self) -> int:
        return len(self._by_letter)


@lru_cache(maxsize=1)
def get_table() -> PhonemeTable:
    """Shared table over the bundled sounds (built once)."""
    return PhonemeTable(load_sounds())


# ---------------------------------------------------------------------------
# Feature checks
# ---------------------------------------------------------------------------

def are_same_articulation_point(a: str, b: str, table: PhonemeTable | None = None) -> bool:
    """True when both letters are known and share a makhraj."""
    table = table if table is not None else get_table()
    sound_a = table.get_by_letter(a)
    sound_b = table.get_by_letter(b)
    if sound_a is None or sound_b is None:
        return False
    return sound_a.articulation_point == sound_b.articulation_point


def are_voiced_voiceless_pair(a: str, b: str) -> bool:
    return frozenset({a, b}) in VOICED_VOICELESS_PAIRS


def are_emphatic_pair(a: str, b: str) -> bool:
    return frozenset({a, b}) in EMPHATIC_PAIRS


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def similarity(a: str, b: str, table: PhonemeTable | None = None) -> float:
    """
    Compute how confusable two letters are.

    Args:
        a: Target letter
        b: Letter it is compared with
        table: Phoneme table, defaults to the bundled one

    Returns:
        1.0 for identical letters, otherwise a score in [0.0, 0.9].
        Unknown letters share no features and score 0.0.

    Examples:
        >>> similarity("ت", "ط")
        0.9
        >>> similarity("ح", "خ")
        0.2
    """
    if a == b:
        return 1.0

    table = table if table is not None else get_table()
    score = 0.0

    if are_same_articulation_point(a, b, table):
        score += SAME_ARTICULATION_WEIGHT

    if are_voiced_voiceless_pair(a, b):
        score += VOICING_PAIR_WEIGHT

    if are_emphatic_pair(a, b):
        score += EMPHATIC_PAIR_WEIGHT

    if b in table.get_similar(a):
        score += SIMILAR_LIST_WEIGHT

    # Rounded so that 0.4 + 0.3 reads back as 0.7
    return round(min(score, MAX_SIMILARITY), 2)


def classify_confusion(a: str, b: str, table: PhonemeTable | None = None) -> ConfusionType:
    """
    Name the feature two confused letters share.

    Checked in priority order: articulation point, voicing pair, emphatic
    pair. Anything else is ``ConfusionType.OTHER``.
    """
    if are_same_articulation_point(a, b, table):
        return ConfusionType.ARTICULATION
    if are_voiced_voiceless_pair(a, b):
        return ConfusionType.VOICING
    if are_emphatic_pair(a, b):
        return ConfusionType.EMPHASIS
    return ConfusionType.OTHER


def articulation_groups(table: PhonemeTable | None = None) -> dict[ArticulationPoint, list[str]]:
    """Group the table's letters by articulation point, in table order."""
    table = table if table is not None else get_table()
    groups: dict[ArticulationPoint, list[str]] = {}
    for sound in table:
        groups.setdefault(sound.articulation_point, []).append(sound.letter)
    return groups
