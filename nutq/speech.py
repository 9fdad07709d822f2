"""
Speech playback boundary.

The library never synthesizes audio itself. A ``Speaker`` wraps a backend
callable (a TTS engine, a browser bridge, a test double) and keeps one
"is something playing" gate: a request made while an utterance is active
is ignored, not queued. The backend reports completion or failure through
the callbacks it is handed, and either one reopens the gate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from nutq.config import NutqSettings, get_settings
from nutq.core.arabic import FATHA, is_single_letter, remove_diacritics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Utterance:
    """Text handed to the speech backend, with its voice parameters."""

    text: str
    lang: str
    rate: float


# backend(utterance, on_complete, on_error); must not block until playback ends
SpeechBackend = Callable[[Utterance, Callable[[], None], Callable[[Exception], None]], None]


def prepare_text(text: str) -> str:
    """
    Make `text` pronounceable by a TTS engine.

    A bare letter is read out by name ("ba") instead of as a sound, so a
    fatha is added to single letters.

    Examples:
        >>> prepare_text("ب") == "ب" + FATHA
        True
        >>> prepare_text("باب")
        'باب'
    """
    text = (text or "").strip()
    if is_single_letter(text):
        return remove_diacritics(text) + FATHA
    return text


class Speaker:
    """
    Fire-and-forget speech with a single playback gate.

    Args:
        backend: Callable that starts playback and later calls one of the
            two callbacks it receives
        settings: Voice language and rate, defaults to get_settings()

    Example:
        >>> spoken = []
        >>> speaker = Speaker(lambda u, done, fail: spoken.append(u.text))
        >>> speaker.speak("باب")
        True
        >>> speaker.speak("بيت")  # still playing
        False
    """

    def __init__(self, backend: SpeechBackend, settings: NutqSettings | None = None):
        self.backend = backend
        self.settings = settings or get_settings()
        self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    def speak(self, text: str) -> bool:
        """
        Start speaking `text`.

        Returns:
            True if playback was started, False if the text was empty or
            another utterance is still active
        """
        prepared = prepare_text(text)
        if not prepared:
            return False
        if self._speaking:
            logger.debug("Speech busy, ignoring %r", prepared)
            return False

        utterance = Utterance(text=prepared, lang=self.settings.speech_lang, rate=self.settings.speech_rate)
        self._speaking = True
        try:
            self.backend(utterance, self._on_complete, self._on_error)
        except Exception as exc:
            logger.warning("Speech backend failed to start: %s", exc)
            self._speaking = False
            return False
        return True

    def reset(self) -> None:
        """Reopen the gate without waiting for the backend."""
        self._speaking = False

    def _on_complete(self) -> None:
        self._speaking = False

    def _on_error(self, error: Exception) -> None:
        logger.warning("Speech playback error: %s", error)
        self._speaking = False
