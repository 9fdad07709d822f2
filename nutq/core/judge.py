"""
Answer judge.

Evaluates one multiple-choice answer against the question's target sound,
classifies wrong answers as plain mistakes or sound confusions, and builds
the feedback shown to the learner. Also hosts the batch analyses that run
over a learner's recent answers.

Two similarity cutoffs are used:
- ``confusion_threshold`` (0.3): a wrong answer counts as a confusion error
- ``remedial_threshold`` (0.5): a confusion error sends the learner to
  similar-sound practice instead of a plain review
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from nutq.config import NutqSettings, get_settings
from nutq.core.extraction import representative_sound
from nutq.core.phonetic import PhonemeTable, classify_confusion, get_table, similarity
from nutq.models.question import EARLY_LEVELS, TRAINING_LEVEL_ORDER, AuditoryQuestion, TrainingLevel
from nutq.models.result import (
    AnswerRecord,
    ConfusionType,
    DetailedFeedback,
    ErrorPattern,
    JudgeResult,
    NextAction,
    NextExerciseSuggestion,
    RecentResult,
)
from nutq.models.sound import POSITION_NAMES, ArabicSound, SoundCharacteristic, SoundPosition

logger = logging.getLogger(__name__)

POSITIVE_MESSAGES: tuple[str, ...] = (
    "أحسنت! إجابة صحيحة",
    "ممتاز! استمر في التقدم",
    "رائع! أداء متميز",
    "صحيح! عمل جيد",
    "بارك الله فيك! إجابة موفقة",
)

WRONG_MESSAGE = "إجابة خاطئة"
CONFUSION_MESSAGE = "إجابة خاطئة - خلط بين أصوات متشابهة"

_CONFUSION_REASONS: dict[ConfusionType, str] = {
    ConfusionType.ARTICULATION: " - كلاهما من نفس المخرج",
    ConfusionType.VOICING: " - أحدهما مجهور والآخر مهموس",
    ConfusionType.EMPHASIS: " - أحدهما مفخم والآخر مرقق",
}

# Recent accuracy (percent) below which the next exercise restarts at isolation
LOW_RECENT_ACCURACY = 40
# Recent accuracy (percent) from which moving on is praised
HIGH_RECENT_ACCURACY = 80
# Wrong answers at one position before it is suggested for practice
POSITION_ERROR_COUNT = 2
# Errors at one position before it is reported as a pattern
POSITION_PATTERN_COUNT = 3

# Levels the next-exercise suggestion walks through; it stops at sentences
_SUGGESTION_LEVELS = TRAINING_LEVEL_ORDER[: TRAINING_LEVEL_ORDER.index(TrainingLevel.SENTENCES) + 1]


def _voicing_label(sound: Optional[ArabicSound]) -> str:
    if sound is not None and SoundCharacteristic.VOICED in sound.characteristics:
        return "مجهور"
    return "مهموس"


def _emphasis_label(sound: ArabicSound) -> str:
    return "مفخم" if SoundCharacteristic.EMPHATIC in sound.characteristics else "مرقق"


def _confusion_feedback(
    sound: ArabicSound,
    selected: str,
    selected_data: Optional[ArabicSound],
    confusion_type: ConfusionType,
) -> DetailedFeedback:
    target = sound.letter
    explanation = f"خلطت بين صوت {target} وصوت {selected}" + _CONFUSION_REASONS.get(confusion_type, "")

    if confusion_type == ConfusionType.ARTICULATION:
        tip = f"الفرق: {sound.training_tip}"
    elif confusion_type == ConfusionType.VOICING:
        tip = f"{target} {_voicing_label(sound)}، بينما {selected} {_voicing_label(selected_data)}"
    elif confusion_type == ConfusionType.EMPHASIS:
        tip = f"{target} {_emphasis_label(sound)}، لاحظ ضخامة الصوت"
    elif selected_data is not None:
        tip = (
            f"مخرج {target}: {sound.articulation_description}، "
            f"ومخرج {selected}: {selected_data.articulation_description}"
        )
    else:
        tip = f"ركز على: {sound.training_tip}"

    return DetailedFeedback(
        message=CONFUSION_MESSAGE,
        explanation=explanation,
        tip=tip,
        practice_words=sound.examples.real_words.initial.bi[:3],
    )


def build_feedback(
    is_correct: bool,
    target_sound: str,
    selected_sound: Optional[str],
    level: TrainingLevel,
    confusion_type: Optional[ConfusionType] = None,
    rng: random.Random | None = None,
    table: PhonemeTable | None = None,
) -> DetailedFeedback:
    """
    Build the feedback block for one answer.

    Args:
        is_correct: Whether the answer was right
        target_sound: Letter under test
        selected_sound: Letter the chosen option represents, if known
        level: Curriculum level of the question
        confusion_type: Set when the answer was a confusion error
        rng: Random source for the affirmative message
        table: Phoneme table

    Returns:
        DetailedFeedback with message, explanation, tip and practice words
    """
    table = table if table is not None else get_table()
    sound = table.get_by_letter(target_sound)

    if is_correct:
        rng = rng if rng is not None else random.Random()
        tip = None
        if level == TrainingLevel.ISOLATION and sound is not None:
            tip = f"تذكر: {sound.letter} مخرجه {sound.articulation_description}"
        return DetailedFeedback(message=rng.choice(POSITIVE_MESSAGES), tip=tip)

    if not selected_sound or sound is None:
        return DetailedFeedback(
            message=WRONG_MESSAGE,
            explanation=f"الإجابة الصحيحة تحتوي على صوت {target_sound}",
            tip=f"ركز على: {sound.training_tip}" if sound is not None else None,
        )

    if confusion_type is not None:
        return _confusion_feedback(sound, selected_sound, table.get_by_letter(selected_sound), confusion_type)

    return DetailedFeedback(
        message=WRONG_MESSAGE,
        explanation=f"الصوت الصحيح هو {target_sound} ({sound.name})",
        tip=f"مخرج صوت {target_sound}: {sound.articulation_description}",
        practice_words=sound.examples.real_words.initial.mono[:2],
    )


def judge(
    target_sound: str,
    selected_answer: int,
    correct_answer: int,
    options: Sequence[str],
    level: TrainingLevel | str,
    position: SoundPosition | str | None = None,
    *,
    option_sounds: Sequence[Optional[str]] | None = None,
    rng: random.Random | None = None,
    settings: NutqSettings | None = None,
    table: PhonemeTable | None = None,
) -> JudgeResult:
    """
    Evaluate one answer.

    `selected_answer` must index into `options`; it is not range-checked.

    Args:
        target_sound: Letter of the sound under test
        selected_answer: Index of the option the learner chose
        correct_answer: Index of the correct option
        options: Option texts, in display order
        level: Curriculum level of the question
        position: Word position of the target sound, if the question has one
        option_sounds: Representative letter per option; scanned from the
            option text where missing
        rng: Random source for the affirmative message
        settings: Thresholds, defaults to get_settings()
        table: Phoneme table, defaults to the bundled one

    Returns:
        JudgeResult

    Examples:
        >>> result = judge("ت", 1, 0, ["ت", "ط", "م"], "isolation")
        >>> result.is_confusion_error, result.confusion_type.value
        (True, 'articulation')
    """
    settings = settings or get_settings()
    table = table if table is not None else get_table()
    level = TrainingLevel(level)
    rng = rng if rng is not None else random.Random(settings.random_seed)
    position = SoundPosition(position) if position is not None else None

    is_correct = selected_answer == correct_answer

    selected_option: Optional[str] = None
    selected_sound: Optional[str] = None
    is_confusion_error = False
    confused_with: Optional[str] = None
    confusion_type: Optional[ConfusionType] = None
    similarity_score = 0.0

    if not is_correct:
        selected_option = options[selected_answer]
        selected_sound = representative_sound(options, selected_answer, target_sound, option_sounds, table)

        if selected_sound and selected_sound != target_sound:
            similarity_score = similarity(target_sound, selected_sound, table)
            if similarity_score >= settings.confusion_threshold:
                is_confusion_error = True
                confused_with = selected_sound
                confusion_type = classify_confusion(target_sound, selected_sound, table)

    detailed = build_feedback(is_correct, target_sound, selected_sound, level, confusion_type, rng, table)

    next_action = NextAction.CONTINUE
    should_repeat = False
    if not is_correct:
        if is_confusion_error and similarity_score >= settings.remedial_threshold:
            next_action = NextAction.PRACTICE_SIMILAR
            should_repeat = True
        elif level in EARLY_LEVELS:
            next_action = NextAction.REVIEW
            should_repeat = True
        else:
            next_action = NextAction.REPEAT

    logger.debug(
        "Judged %s at %s: correct=%s selected=%s score=%.2f action=%s",
        target_sound, level.value, is_correct, selected_sound, similarity_score, next_action.value,
    )

    return JudgeResult(
        is_correct=is_correct,
        target_sound=target_sound,
        selected_option=selected_option,
        selected_sound=selected_sound,
        is_confusion_error=is_confusion_error,
        confused_with=confused_with,
        confusion_type=confusion_type,
        position_struggle=position if not is_correct else None,
        feedback=detailed.message,
        suggestion=detailed.tip,
        similarity_score=similarity_score,
        detailed_feedback=detailed,
        should_repeat=should_repeat,
        next_action=next_action,
    )


def judge_question(
    question: AuditoryQuestion,
    selected_answer: int,
    *,
    rng: random.Random | None = None,
    settings: NutqSettings | None = None,
    table: PhonemeTable | None = None,
) -> JudgeResult:
    """Judge an answer to a generated question, using its option sounds."""
    return judge(
        question.target_sound,
        selected_answer,
        question.correct_answer,
        question.options,
        question.level,
        question.sound_position,
        option_sounds=question.option_sounds,
        rng=rng,
        settings=settings,
        table=table,
    )


# ---------------------------------------------------------------------------
# Batch analysis
# ---------------------------------------------------------------------------

def analyze_error_patterns(errors: Iterable[AnswerRecord]) -> list[ErrorPattern]:
    """
    Find recurring mistakes in a batch of wrong answers.

    Confusions are counted per unordered letter pair; a pair seen twice or
    more is a ``confusion`` pattern. The position with the most errors is a
    ``position`` pattern once it reaches three errors.

    Returns:
        Patterns sorted by frequency, most frequent first
    """
    pair_counts: Counter[tuple[str, str]] = Counter()
    position_counts: dict[SoundPosition, int] = {p: 0 for p in SoundPosition}

    for error in errors:
        if error.selected_sound and error.selected_sound != error.target_sound:
            pair = tuple(sorted((error.target_sound, error.selected_sound)))
            pair_counts[pair] += 1
        if error.position is not None:
            position_counts[error.position] += 1

    patterns: list[ErrorPattern] = []
    for (first, second), count in pair_counts.items():
        if count >= 2:
            patterns.append(ErrorPattern(
                type="confusion",
                description=f"خلط متكرر بين {first} و {second}",
                frequency=count,
                recommendation=f"تدرب على التمييز بين صوت {first} وصوت {second}",
            ))

    worst_position, worst_count = max(position_counts.items(), key=lambda item: item[1])
    if worst_count >= POSITION_PATTERN_COUNT:
        name = POSITION_NAMES[worst_position]
        patterns.append(ErrorPattern(
            type="position",
            description=f"صعوبة في موقع {name}",
            frequency=worst_count,
            recommendation=f"ركز على تدريبات الأصوات في {name}",
        ))

    return sorted(patterns, key=lambda p: p.frequency, reverse=True)


def suggest_next_exercise(
    sound_letter: str,
    recent_results: Sequence[RecentResult],
    confusion_matrix: Mapping[str, int],
    settings: NutqSettings | None = None,
    table: PhonemeTable | None = None,
) -> NextExerciseSuggestion:
    """
    Suggest what to practise after a run of answers for one sound.

    Checked in order: unknown sound, low recent accuracy, a repeated
    confusion, a position with repeated errors, then the level after the
    last one practised (never beyond ``sentences``).
    """
    settings = settings or get_settings()
    table = table if table is not None else get_table()

    sound = table.get_by_letter(sound_letter)
    if sound is None:
        return NextExerciseSuggestion(
            sound_id="hamza",
            level=TrainingLevel.ISOLATION,
            reason="ابدأ من البداية",
            priority="medium",
        )

    recent_correct = sum(1 for r in recent_results if r.is_correct)
    recent_accuracy = 100 * recent_correct / len(recent_results) if recent_results else 0

    if recent_accuracy < LOW_RECENT_ACCURACY:
        return NextExerciseSuggestion(
            sound_id=sound.id,
            level=TrainingLevel.ISOLATION,
            reason="تحتاج مراجعة أساسيات الصوت",
            priority="high",
        )

    confused = sorted(
        ((letter, count) for letter, count in confusion_matrix.items()
         if count >= settings.confusion_repeat_count),
        key=lambda item: item[1],
        reverse=True,
    )
    if confused:
        return NextExerciseSuggestion(
            sound_id=sound.id,
            level=TrainingLevel.ISOLATION,
            reason=f"تدرب على التمييز بين {sound_letter} و {confused[0][0]}",
            priority="high",
        )

    position_errors: dict[SoundPosition, int] = {p: 0 for p in SoundPosition}
    for r in recent_results:
        if not r.is_correct and r.position is not None:
            position_errors[r.position] += 1

    weak_position, weak_count = max(position_errors.items(), key=lambda item: item[1])
    if weak_count >= POSITION_ERROR_COUNT:
        return NextExerciseSuggestion(
            sound_id=sound.id,
            level=TrainingLevel.REAL_WORDS,
            position=weak_position,
            reason=f"تعزيز الصوت في {POSITION_NAMES[weak_position]}",
            priority="medium",
        )

    last_level = recent_results[-1].level if recent_results else TrainingLevel.ISOLATION
    if last_level in _SUGGESTION_LEVELS:
        index = min(_SUGGESTION_LEVELS.index(last_level) + 1, len(_SUGGESTION_LEVELS) - 1)
    else:
        index = len(_SUGGESTION_LEVELS) - 1

    return NextExerciseSuggestion(
        sound_id=sound.id,
        level=_SUGGESTION_LEVELS[index],
        reason="أداء ممتاز! انتقل للمستوى التالي" if recent_accuracy >= HIGH_RECENT_ACCURACY else "استمر في التدريب",
        priority="low",
    )
