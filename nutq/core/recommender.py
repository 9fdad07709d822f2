"""
Recommendations and statistics derived from learner progress.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Optional

from nutq.config import NutqSettings, get_settings
from nutq.core.phonetic import PhonemeTable, get_table
from nutq.models.progress import (
    MasteryStatus,
    RecommendationType,
    SoundProgress,
    SoundRecommendation,
    SoundStatistics,
)
from nutq.models.question import TRAINING_LEVEL_NAMES, next_level
from nutq.models.sound import POSITION_NAMES

logger = logging.getLogger(__name__)

# Overall accuracy below which articulation review is suggested
LOW_OVERALL_ACCURACY = 50
# Sounds below this accuracy (and above zero) are the current focus
FOCUS_ACCURACY = 60
TOP_N = 3


def _letter_for(sound_id: str, progress: SoundProgress, table: PhonemeTable) -> Optional[str]:
    sound = table.get_by_id(sound_id)
    if sound is None:
        return None
    return progress.letter or sound.letter


def _recommend_for(
    sound_id: str,
    progress: SoundProgress,
    settings: NutqSettings,
    table: PhonemeTable,
) -> list[SoundRecommendation]:
    letter = _letter_for(sound_id, progress, table)
    if letter is None:
        logger.debug("Skipping recommendations for unknown sound %s", sound_id)
        return []

    recommendations: list[SoundRecommendation] = []
    current = progress.levels[progress.current_level]

    if (
        progress.overall_accuracy < LOW_OVERALL_ACCURACY
        and current.questions_attempted >= settings.review_min_attempts
    ):
        recommendations.append(SoundRecommendation(
            type=RecommendationType.REVIEW_ARTICULATION,
            sound_id=sound_id,
            message=f"راجع مخرج صوت {letter}",
            reason=f"دقتك {progress.overall_accuracy}% - مراجعة المخرج ستساعدك",
            priority=1,
        ))

    if progress.weak_positions:
        position = progress.weak_positions[0]
        recommendations.append(SoundRecommendation(
            type=RecommendationType.PRACTICE_POSITION,
            sound_id=sound_id,
            position=position,
            message=f"تدرب على {letter} في {POSITION_NAMES[position]}",
            reason="موقع ضعيف يحتاج تعزيز",
            priority=2,
        ))

    confused = sorted(
        ((other, count) for other, count in progress.confusion_matrix.items()
         if count >= settings.confusion_repeat_count),
        key=lambda item: item[1],
        reverse=True,
    )
    if confused:
        other, count = confused[0]
        recommendations.append(SoundRecommendation(
            type=RecommendationType.REVIEW_SIMILAR_SOUNDS,
            sound_id=sound_id,
            similar_sound=other,
            message=f"راجع الفرق بين {letter} و {other}",
            reason=f"خلطت بينهما {count} مرات",
            priority=2,
        ))

    if current.status == MasteryStatus.MASTERED:
        following = next_level(progress.current_level)
        if following is not None:
            recommendations.append(SoundRecommendation(
                type=RecommendationType.ADVANCE_LEVEL,
                sound_id=sound_id,
                level=following,
                message=f"انتقل للمستوى التالي: {TRAINING_LEVEL_NAMES[following]}",
                reason=f"أتقنت المستوى الحالي بدقة {current.accuracy}%",
                priority=3,
            ))

    return recommendations


def recommend(
    progress_by_sound: Mapping[str, SoundProgress],
    sound_id: Optional[str] = None,
    settings: NutqSettings | None = None,
    table: PhonemeTable | None = None,
) -> list[SoundRecommendation]:
    """
    Build prioritised recommendations.

    Args:
        progress_by_sound: Tracked progress keyed by sound id
        sound_id: Restrict to one sound; untracked sounds yield nothing
        settings: Thresholds, defaults to get_settings()
        table: Phoneme table resolving sound ids, defaults to the bundled one

    Returns:
        Recommendations sorted by priority, most urgent first
    """
    settings = settings or get_settings()
    table = table if table is not None else get_table()
    if sound_id is not None:
        progress = progress_by_sound.get(sound_id)
        selected = {sound_id: progress} if progress is not None else {}
    else:
        selected = dict(progress_by_sound)

    recommendations: list[SoundRecommendation] = []
    for sid, progress in selected.items():
        recommendations.extend(_recommend_for(sid, progress, settings, table))

    return sorted(recommendations, key=lambda r: r.priority)


def compute_statistics(
    progress_by_sound: Mapping[str, SoundProgress],
    settings: NutqSettings | None = None,
    table: PhonemeTable | None = None,
) -> SoundStatistics:
    """
    Summarise progress across every tracked sound.

    A sound counts as mastered once ``mastered_sound_levels`` of its levels
    are mastered; confusion pairs are unordered and sum both directions.
    """
    settings = settings or get_settings()
    table = table if table is not None else get_table()
    all_progress = list(progress_by_sound.values())

    mastered = sum(1 for p in all_progress if p.mastered_level_count >= settings.mastered_sound_levels)
    in_progress = sum(
        1 for p in all_progress
        if p.has_attempts and p.mastered_level_count < settings.mastered_sound_levels
    )

    scored = [p for p in all_progress if p.overall_accuracy > 0]
    average = 0
    if scored:
        total = sum(p.overall_accuracy for p in scored)
        average = (2 * total + len(scored)) // (2 * len(scored))

    by_accuracy = sorted(scored, key=lambda p: p.overall_accuracy, reverse=True)
    strongest = [p.letter for p in by_accuracy[:TOP_N]]
    weakest = [p.letter for p in reversed(by_accuracy[-TOP_N:])]

    pair_counts: Counter[tuple[str, str]] = Counter()
    for p in all_progress:
        for confused, count in p.confusion_matrix.items():
            pair_counts[tuple(sorted((p.letter, confused)))] += count
    most_confused = [pair for pair, _ in sorted(pair_counts.items(), key=lambda item: item[1], reverse=True)[:TOP_N]]

    focus = sorted(
        (p for p in all_progress if 0 < p.overall_accuracy < FOCUS_ACCURACY),
        key=lambda p: p.overall_accuracy,
    )

    return SoundStatistics(
        total_sounds=len(table),
        mastered_sounds=mastered,
        in_progress_sounds=in_progress,
        average_accuracy=average,
        strongest_sounds=strongest,
        weakest_sounds=weakest,
        most_confused_pairs=most_confused,
        current_focus=[p.letter for p in focus[:TOP_N]],
    )
