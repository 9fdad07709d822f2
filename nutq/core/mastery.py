"""
Mastery state machine.

Per (sound, level) status moves ``locked -> available -> in_progress ->
mastered``. Status is recomputed from the cumulative counters after every
answer, so a mastered level whose accuracy later drops below the threshold
goes back to ``in_progress``. ``mastered_at`` keeps the first mastery time.

All functions here operate on the models passed in and do no I/O; the
progress tracker owns persistence.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from nutq.config import NutqSettings, get_settings
from nutq.models.progress import MasteryStatus, SoundLevelProgress, SoundProgress
from nutq.models.question import TRAINING_LEVEL_ORDER, TrainingLevel, next_level
from nutq.models.sound import SoundPosition

logger = logging.getLogger(__name__)


@dataclass
class LevelUpdate:
    """What changed after recording one answer."""

    level: TrainingLevel
    status: MasteryStatus
    newly_mastered: bool = False
    unlocked: Optional[TrainingLevel] = None


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def calculate_accuracy(correct: int, attempted: int) -> int:
    """
    Percentage of correct answers, rounded half up; 0 when nothing was attempted.

    Examples:
        >>> calculate_accuracy(1, 8)
        13
        >>> calculate_accuracy(0, 0)
        0
    """
    if attempted <= 0:
        return 0
    # Integer form of floor(100 * correct / attempted + 0.5)
    return (200 * correct + attempted) // (2 * attempted)


def determine_mastery_status(
    attempted: int,
    accuracy: int,
    settings: NutqSettings | None = None,
) -> MasteryStatus:
    """
    Status implied by a level's counters.

    A level with no attempts is ``available``; callers keep ``locked`` for
    levels that were never unlocked.
    """
    settings = settings or get_settings()
    if attempted == 0:
        return MasteryStatus.AVAILABLE
    if attempted < settings.min_questions_for_mastery:
        return MasteryStatus.IN_PROGRESS
    if accuracy >= settings.mastery_threshold:
        return MasteryStatus.MASTERED
    return MasteryStatus.IN_PROGRESS


def initialize_sound_progress(
    sound_id: str,
    letter: str = "",
    settings: NutqSettings | None = None,
) -> SoundProgress:
    """
    Fresh progress for one sound.

    Only ``isolation`` starts available, unless ``unlock_all_levels`` is set,
    in which case every level does.
    """
    settings = settings or get_settings()
    levels = {}
    for level in TRAINING_LEVEL_ORDER:
        unlocked = settings.unlock_all_levels or level == TrainingLevel.ISOLATION
        levels[level] = SoundLevelProgress(
            level=level,
            status=MasteryStatus.AVAILABLE if unlocked else MasteryStatus.LOCKED,
        )
    return SoundProgress(sound_id=sound_id, letter=letter, levels=levels)


def calculate_overall_accuracy(progress: SoundProgress) -> int:
    """Accuracy over the summed counters of every level."""
    attempted = sum(lp.questions_attempted for lp in progress.levels.values())
    correct = sum(lp.questions_correct for lp in progress.levels.values())
    return calculate_accuracy(correct, attempted)


def apply_answer(
    progress: SoundProgress,
    level: TrainingLevel | str,
    is_correct: bool,
    *,
    confused_with: Optional[str] = None,
    now: Optional[str] = None,
    settings: NutqSettings | None = None,
) -> LevelUpdate:
    """
    Fold one answer into a sound's progress, in place.

    Updates the level counters, accuracy and status; on mastery unlocks the
    next level and moves ``current_level`` forward to it; counts the
    confusion when `confused_with` is given.

    The caller is responsible for not recording answers against locked
    levels; this is not re-checked here.

    Returns:
        LevelUpdate describing the transition
    """
    settings = settings or get_settings()
    level = TrainingLevel(level)
    now = now or utc_now()
    lp = progress.levels[level]

    lp.questions_attempted += 1
    if is_correct:
        lp.questions_correct += 1
    lp.accuracy = calculate_accuracy(lp.questions_correct, lp.questions_attempted)
    lp.last_attempt_at = now

    previous = lp.status
    lp.status = determine_mastery_status(lp.questions_attempted, lp.accuracy, settings)
    update = LevelUpdate(level=level, status=lp.status)

    if lp.status == MasteryStatus.MASTERED:
        if lp.mastered_at is None:
            lp.mastered_at = now
            update.newly_mastered = True
            logger.info("Sound %s mastered level %s", progress.sound_id, level.value)

        following = next_level(level)
        if following is not None:
            next_progress = progress.levels[following]
            if next_progress.status == MasteryStatus.LOCKED:
                next_progress.status = MasteryStatus.AVAILABLE
                update.unlocked = following
                logger.info("Sound %s unlocked level %s", progress.sound_id, following.value)
            if TRAINING_LEVEL_ORDER.index(following) > TRAINING_LEVEL_ORDER.index(progress.current_level):
                progress.current_level = following
    elif previous == MasteryStatus.MASTERED:
        logger.debug("Sound %s dropped below mastery at %s", progress.sound_id, level.value)

    progress.overall_accuracy = calculate_overall_accuracy(progress)

    if confused_with:
        matrix = dict(progress.confusion_matrix)
        matrix[confused_with] = matrix.get(confused_with, 0) + 1
        progress.confusion_matrix = matrix

    logger.debug(
        "Recorded %s answer for %s at %s: %d/%d (%d%%) -> %s",
        "correct" if is_correct else "wrong", progress.sound_id, level.value,
        lp.questions_correct, lp.questions_attempted, lp.accuracy, lp.status.value,
    )
    return update


def classify_positions(
    samples: Mapping[SoundPosition, Sequence[bool]],
    settings: NutqSettings | None = None,
) -> tuple[list[SoundPosition], list[SoundPosition]]:
    """
    Split positions into strong and weak from per-answer samples.

    Positions with fewer than ``position_min_samples`` answers are left out.

    Returns:
        (strong, weak), each in initial/medial/final order
    """
    settings = settings or get_settings()
    strong: list[SoundPosition] = []
    weak: list[SoundPosition] = []
    for position in SoundPosition:
        results = samples.get(position, ())
        if len(results) < settings.position_min_samples:
            continue
        accuracy = calculate_accuracy(sum(1 for r in results if r), len(results))
        if accuracy >= settings.strong_position_accuracy:
            strong.append(position)
        elif accuracy < settings.weak_position_accuracy:
            weak.append(position)
    return strong, weak


def update_positions(
    progress: SoundProgress,
    samples: Mapping[SoundPosition, Sequence[bool]],
    settings: NutqSettings | None = None,
) -> None:
    """Merge newly strong positions in and replace weak ones when any are found."""
    strong, weak = classify_positions(samples, settings)
    if strong:
        merged = set(progress.strong_positions) | set(strong)
        progress.strong_positions = [p for p in SoundPosition if p in merged]
    if weak:
        progress.weak_positions = weak
