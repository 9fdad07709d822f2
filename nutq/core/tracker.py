"""
Progress tracker.

Holds one learner profile's progress in memory (a ``sound_id ->
SoundProgress`` mapping), mirrors it to a storage backend after every
change, and exposes the operations the exercise UI calls: judge and
record answers, read mastery status, get recommendations, reset.

Persistence is best effort. A stored blob that cannot be read or parsed
is discarded and the tracker starts empty; a failed save is logged and
the in-memory state is kept.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from nutq.config import NutqSettings, get_settings
from nutq.core.judge import judge, judge_question
from nutq.core.mastery import LevelUpdate, apply_answer, initialize_sound_progress, update_positions
from nutq.core.phonetic import PhonemeTable, get_table, similarity
from nutq.core.recommender import compute_statistics, recommend
from nutq.exceptions import StorageError
from nutq.models.progress import (
    MasteryStatus,
    NextExercise,
    SoundProgress,
    SoundRecommendation,
    SoundStatistics,
)
from nutq.models.question import AuditoryQuestion, TrainingLevel, next_level
from nutq.models.result import JudgeResult
from nutq.models.sound import SoundPosition
from nutq.storage import MemoryStorage, StorageBackend

logger = logging.getLogger(__name__)

_STATE_ADAPTER = TypeAdapter(dict[str, SoundProgress])

# Levels where a weak position steers the next exercise
_POSITIONAL_LEVELS = frozenset({TrainingLevel.REAL_WORDS, TrainingLevel.PHRASES, TrainingLevel.SENTENCES})


class ProgressTracker:
    """
    Progress store for one learner profile.

    Args:
        storage: Backend the state is mirrored to, defaults to MemoryStorage
        settings: Thresholds and storage key, defaults to get_settings()
        rng: Random source for feedback variety, seeded from
            ``settings.random_seed`` when not given
        table: Phoneme table, defaults to the bundled one

    Example:
        >>> tracker = ProgressTracker()
        >>> update = tracker.record_answer("ba", "isolation", True)
        >>> tracker.get_sound_progress("ba").levels["isolation"].questions_attempted
        1
    """

    def __init__(
        self,
        storage: StorageBackend | None = None,
        settings: NutqSettings | None = None,
        rng: random.Random | None = None,
        table: PhonemeTable | None = None,
    ):
        self.settings = settings or get_settings()
        self.storage = storage if storage is not None else MemoryStorage()
        self.rng = rng if rng is not None else random.Random(self.settings.random_seed)
        self.table = table if table is not None else get_table()

        self._progress: dict[str, SoundProgress] = {}
        # Per-session answers by word position; not persisted
        self._position_samples: dict[str, dict[SoundPosition, list[bool]]] = {}

        self.load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @property
    def storage_key(self) -> str:
        return self.settings.storage_key

    def load(self) -> None:
        """Replace the in-memory state with what the backend holds."""
        self._progress = {}
        self._position_samples = {}

        try:
            blob = self.storage.load(self.storage_key)
        except StorageError as exc:
            logger.warning("Could not read stored progress, starting empty: %s", exc)
            return

        if not blob:
            return

        try:
            self._progress = _STATE_ADAPTER.validate_json(blob)
        except ValidationError as exc:
            logger.warning(
                "Discarding corrupted progress under %s (%d errors)",
                self.storage_key, exc.error_count(),
            )
            return

        logger.debug("Loaded progress for %d sounds", len(self._progress))

    def save(self) -> bool:
        """
        Write the current state to the backend.

        Returns:
            True on success, False when the backend failed
        """
        try:
            blob = _STATE_ADAPTER.dump_json(self._progress).decode("utf-8")
            self.storage.save(self.storage_key, blob)
        except StorageError as exc:
            logger.warning("Failed to save progress: %s", exc)
            return False
        except Exception:
            logger.error("Unexpected failure while saving progress", exc_info=True)
            return False
        return True

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def sound_progress(self) -> Mapping[str, SoundProgress]:
        """Read-only view of the tracked progress."""
        return MappingProxyType(self._progress)

    def get_sound_progress(self, sound_id: str) -> Optional[SoundProgress]:
        return self._progress.get(sound_id)

    def get_sound_mastery_status(self, sound_id: str, level: TrainingLevel | str) -> MasteryStatus:
        """
        Status of one sound at one level.

        Untracked sounds report the initial status: ``available`` for
        isolation (or for every level when ``unlock_all_levels`` is set),
        ``locked`` otherwise.
        """
        level = TrainingLevel(level)
        progress = self._progress.get(sound_id)
        if progress is None:
            if self.settings.unlock_all_levels or level == TrainingLevel.ISOLATION:
                return MasteryStatus.AVAILABLE
            return MasteryStatus.LOCKED
        return progress.levels[level].status

    def get_recommendations(self, sound_id: Optional[str] = None) -> list[SoundRecommendation]:
        return recommend(self._progress, sound_id, self.settings, self.table)

    def get_statistics(self) -> SoundStatistics:
        return compute_statistics(self._progress, self.settings, self.table)

    def get_next_exercise(self, sound_id: str) -> NextExercise:
        """
        Where to practise next for one sound.

        A weak position is targeted while the current level is word, phrase
        or sentence based; a mastered current level moves on to the next.
        """
        progress = self._progress.get(sound_id)
        if progress is None:
            return NextExercise(level=TrainingLevel.ISOLATION)

        if progress.weak_positions and progress.current_level in _POSITIONAL_LEVELS:
            return NextExercise(level=progress.current_level, position=progress.weak_positions[0])

        if progress.levels[progress.current_level].status == MasteryStatus.MASTERED:
            following = next_level(progress.current_level)
            if following is not None:
                return NextExercise(level=following)

        return NextExercise(level=progress.current_level)

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def evaluate_answer(
        self,
        target_sound: str,
        selected_answer: int,
        correct_answer: int,
        options: Sequence[str],
        level: TrainingLevel | str,
        position: SoundPosition | str | None = None,
        option_sounds: Sequence[Optional[str]] | None = None,
    ) -> JudgeResult:
        """Judge an answer without recording it."""
        return judge(
            target_sound,
            selected_answer,
            correct_answer,
            options,
            level,
            position,
            option_sounds=option_sounds,
            rng=self.rng,
            settings=self.settings,
            table=self.table,
        )

    def record_answer(
        self,
        sound_id: str,
        level: TrainingLevel | str,
        is_correct: bool,
        position: SoundPosition | str | None = None,
        selected_sound: Optional[str] = None,
    ) -> LevelUpdate:
        """
        Fold one answer into a sound's progress and save.

        A wrong answer whose `selected_sound` is similar enough to the
        target (``confusion_threshold``) is counted in the confusion matrix.

        Args:
            sound_id: Sound the question was about
            level: Curriculum level of the question
            is_correct: Whether the answer was right
            position: Word position of the target sound, if any
            selected_sound: Letter the learner picked, if known

        Returns:
            LevelUpdate describing the level transition
        """
        confused_with = None
        sound = self.table.get_by_id(sound_id)
        if not is_correct and selected_sound and sound is not None and selected_sound != sound.letter:
            if similarity(sound.letter, selected_sound, self.table) >= self.settings.confusion_threshold:
                confused_with = selected_sound
        return self._record(sound_id, level, is_correct, position, confused_with)

    def record_result(
        self,
        sound_id: str,
        result: JudgeResult,
        level: TrainingLevel | str,
        position: SoundPosition | str | None = None,
    ) -> LevelUpdate:
        """Record an answer the judge has already evaluated."""
        return self._record(sound_id, level, result.is_correct, position, result.confused_with)

    def answer_question(
        self,
        sound_id: str,
        question: AuditoryQuestion,
        selected_answer: int,
    ) -> JudgeResult:
        """Judge an answer to `question` and record it."""
        result = judge_question(
            question, selected_answer, rng=self.rng, settings=self.settings, table=self.table
        )
        self.record_result(sound_id, result, question.level, question.sound_position)
        return result

    def _record(
        self,
        sound_id: str,
        level: TrainingLevel | str,
        is_correct: bool,
        position: SoundPosition | str | None,
        confused_with: Optional[str],
    ) -> LevelUpdate:
        progress = self._progress.get(sound_id)
        if progress is None:
            sound = self.table.get_by_id(sound_id)
            if sound is None:
                logger.warning("Recording answer for unknown sound %r", sound_id)
            progress = initialize_sound_progress(sound_id, sound.letter if sound else "", self.settings)
            self._progress[sound_id] = progress

        update = apply_answer(
            progress, level, is_correct, confused_with=confused_with, settings=self.settings
        )

        if position is not None:
            samples = self._position_samples.setdefault(sound_id, {})
            samples.setdefault(SoundPosition(position), []).append(is_correct)
            update_positions(progress, samples, self.settings)

        self.save()
        return update

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def reset_sound_progress(self, sound_id: str) -> None:
        """Forget everything recorded for one sound."""
        self._progress.pop(sound_id, None)
        self._position_samples.pop(sound_id, None)
        logger.info("Reset progress for %s", sound_id)
        self.save()

    def reset_all_progress(self) -> None:
        """Forget the whole profile."""
        self._progress = {}
        self._position_samples = {}
        logger.info("Reset all progress")
        self.save()
