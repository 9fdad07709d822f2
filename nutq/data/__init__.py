"""
Bundled sound content.

The phoneme table and its practice material live in ``sounds.json`` next to
this module and are loaded once per process. Lookups that may miss return
``None`` so callers can degrade gracefully; ``require_sound`` is the strict
variant for entry points that want an error instead.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Optional

from pydantic import ValidationError

from nutq.exceptions import ContentError, UnknownSoundError
from nutq.models.question import TrainingLevel, next_level
from nutq.models.sound import ArabicSound

logger = logging.getLogger(__name__)

CONTENT_PACKAGE = "nutq.data"
CONTENT_FILE = "sounds.json"

# Consonants used as the second letter of derived nonsense syllables
_NONSENSE_FILLERS = ("م", "ن", "ل", "د")


def _derive_drills(letter: str, examples: dict[str, Any]) -> dict[str, Any]:
    """Fill in syllable drills the content file leaves out."""
    examples = dict(examples)
    examples.setdefault("isolation", letter)
    examples.setdefault("cv", [f"{letter}ا", f"{letter}ي", f"{letter}و"])
    examples.setdefault("vc", [f"آ{letter}", f"إي{letter}", f"أو{letter}"])
    examples.setdefault(
        "vcv",
        [
            [f"{lead}{letter}{tail}" for tail in ("ا", "ي", "و")]
            for lead in ("آ", "إي", "أو")
        ],
    )
    fillers = [c for c in _NONSENSE_FILLERS if c != letter][:3]
    examples.setdefault("nonsense_words", [f"{letter}ا{c}ي" for c in fillers])
    return examples


def parse_sounds(raw: dict[str, Any], source: str = CONTENT_FILE) -> tuple[ArabicSound, ...]:
    """
    Build and validate the sound table from decoded JSON content.

    Args:
        raw: Decoded content document with a ``sounds`` list
        source: Name used in error messages

    Returns:
        Sounds in content order

    Raises:
        ContentError: If an entry is invalid, an id or letter is duplicated,
            or a similar-sound letter is not in the table
    """
    entries = raw.get("sounds")
    if not isinstance(entries, list) or not entries:
        raise ContentError("content has no 'sounds' list", source)

    sounds: list[ArabicSound] = []
    for index, entry in enumerate(entries):
        try:
            entry = dict(entry)
            entry["examples"] = _derive_drills(entry.get("letter", ""), entry.get("examples", {}))
            sounds.append(ArabicSound.model_validate(entry))
        except (TypeError, ValueError, ValidationError) as exc:
            raise ContentError(f"invalid sound entry #{index}: {exc}", source) from exc

    ids = [s.id for s in sounds]
    letters = [s.letter for s in sounds]
    for label, values in (("id", ids), ("letter", letters)):
        duplicates = sorted({v for v in values if values.count(v) > 1})
        if duplicates:
            raise ContentError(f"duplicate sound {label}s: {', '.join(duplicates)}", source)

    known = set(letters)
    for sound in sounds:
        for other in sound.similar_sounds:
            if other == sound.letter:
                raise ContentError(f"{sound.id} lists itself as a similar sound", source)
            if other not in known:
                raise ContentError(f"{sound.id} lists unknown similar sound {other!r}", source)

    return tuple(sounds)


@lru_cache(maxsize=1)
def load_sounds() -> tuple[ArabicSound, ...]:
    """
    Load the bundled sound table.

    Returns:
        All sounds, in alphabetical (content) order

    Raises:
        ContentError: If the bundled file is missing or malformed
    """
    try:
        text = resources.files(CONTENT_PACKAGE).joinpath(CONTENT_FILE).read_text(encoding="utf-8")
        raw = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise ContentError(f"cannot read content: {exc}", CONTENT_FILE) from exc

    sounds = parse_sounds(raw)
    logger.debug("Loaded %d sounds from %s", len(sounds), CONTENT_FILE)
    return sounds


@lru_cache(maxsize=1)
def _index() -> tuple[dict[str, ArabicSound], dict[str, ArabicSound]]:
    sounds = load_sounds()
    return {s.id: s for s in sounds}, {s.letter: s for s in sounds}


def get_sound_by_id(sound_id: str) -> Optional[ArabicSound]:
    """Look up a sound by id; None when it does not exist."""
    return _index()[0].get(sound_id)


def get_sound_by_letter(letter: str) -> Optional[ArabicSound]:
    """Look up a sound by its letter; None when it does not exist."""
    return _index()[1].get(letter)


def require_sound(key: str) -> ArabicSound:
    """
    Strict lookup by id or letter.

    Raises:
        UnknownSoundError: If neither an id nor a letter matches
    """
    sound = get_sound_by_id(key) or get_sound_by_letter(key)
    if sound is None:
        logger.warning("Unknown sound requested: %r", key)
        raise UnknownSoundError(key)
    return sound


def get_similar_sounds(letter: str) -> list[ArabicSound]:
    """Sounds listed as confusable with `letter`, in content order; empty if unknown."""
    sound = get_sound_by_letter(letter)
    if sound is None:
        return []
    return [s for s in map(get_sound_by_letter, sound.similar_sounds) if s is not None]


def get_next_level(level: TrainingLevel | str) -> Optional[TrainingLevel]:
    """The curriculum level after `level`, or None after the last level."""
    return next_level(level)


def get_available_sounds() -> list[ArabicSound]:
    """Sounds that have practice material for real words, the trainable set."""
    return [s for s in load_sounds() if s.examples.real_words.initial.all()]
