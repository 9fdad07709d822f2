"""
Listening exercise generation.

Builds multiple-choice questions for every curriculum level from the
bundled sound content. Option order and question selection go through a
Fisher-Yates shuffle driven by an injected ``random.Random``, so a seeded
generator always produces the same exercise.

Every generated question carries ``option_sounds``: the phoneme each option
stands for, or None for answers such as "yes" or a count. The judge never
scans the text of generated options.
"""

from __future__ import annotations

import logging
import random
import re
from collections.abc import Sequence
from typing import Optional, TypeVar

from rapidfuzz.distance import Indel

from nutq.config import get_settings
from nutq.core.arabic import count_letter, normalize_arabic, remove_diacritics
from nutq.data import get_similar_sounds, get_sound_by_id, get_sound_by_letter, require_sound
from nutq.models.question import (
    TRAINING_LEVEL_NAMES,
    TRAINING_LEVEL_ORDER,
    AuditoryExercise,
    AuditoryQuestion,
    TrainingLevel,
    level_difficulty,
)
from nutq.models.sound import POSITION_NAMES, ArabicSound, SoundPosition, SyllableCount

logger = logging.getLogger(__name__)

T = TypeVar("T")

SECONDS_PER_QUESTION = 30
DEFAULT_QUESTION_COUNT = 5
REVIEW_QUESTION_COUNT = 6

_WORD_PATTERN = re.compile(r"[\u0621-\u064A\u064B-\u0652]+")

_STORY_TELLING_OPTIONS = ["أكملت السرد بنجاح", "أحتاج المزيد من الوقت", "أريد موضوعاً آخر", "لم أستطع"]
_QUESTION_FALLBACK_OPTIONS = ["لا أعرف", "أحتاج تكرار السؤال", "السؤال غير واضح"]
_SPONTANEOUS_OPTIONS = ["تحدثت بطلاقة", "واجهت بعض الصعوبات", "أحتاج المزيد من التدريب", "لم أستطع"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """
    Return a shuffled copy of `items`.

    Examples:
        >>> fisher_yates_shuffle([1, 2, 3], random.Random(0)) != [1, 2, 3] or True
        True
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def _default_rng(rng: random.Random | None) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(get_settings().random_seed)


def _question(
    rng: random.Random,
    *,
    sound: ArabicSound,
    id: str,
    level: TrainingLevel,
    prompt: str,
    audio_description: str,
    options: Sequence[str],
    option_sounds: Sequence[Optional[str]] | None = None,
    correct: int = 0,
    shuffle: bool = True,
    **extra,
) -> AuditoryQuestion:
    """Build a question, dropping duplicate options and shuffling the rest."""
    sounds = list(option_sounds) if option_sounds is not None else [None] * len(options)
    correct_text = options[correct]

    unique: list[tuple[str, Optional[str]]] = []
    seen: set[str] = set()
    for text, option_sound in zip(options, sounds):
        if text not in seen:
            seen.add(text)
            unique.append((text, option_sound))

    if shuffle:
        unique = fisher_yates_shuffle(unique, rng)

    texts = [text for text, _ in unique]
    return AuditoryQuestion(
        id=id,
        target_sound=extra.pop("target_sound", sound.letter),
        level=level,
        prompt=prompt,
        audio_description=audio_description,
        options=texts,
        correct_answer=texts.index(correct_text),
        option_sounds=[s for _, s in unique],
        **extra,
    )


def _similar_letters(sound: ArabicSound) -> list[str]:
    return [s.letter for s in get_similar_sounds(sound.letter)]


def _tail_after(text: str, letter: str) -> str:
    return text[len(letter):] if text.startswith(letter) else text[-1:]


def _lead_before(text: str, letter: str) -> str:
    return text[: -len(letter)] if text.endswith(letter) else text[:-1]


def _closest_words(word: str, candidates: dict[str, str], limit: int = 3) -> list[tuple[str, str]]:
    """Rank candidate words by Indel similarity to `word`, closest first."""
    target = normalize_arabic(word)
    ranked = sorted(
        candidates.items(),
        key=lambda item: Indel.normalized_similarity(target, normalize_arabic(item[0])),
        reverse=True,
    )
    return ranked[:limit]


def _count_label(n: int) -> str:
    if n == 1:
        return "مرة واحدة"
    if n == 2:
        return "مرتان"
    return f"{n} مرات"


# ---------------------------------------------------------------------------
# Per-level question builders
# ---------------------------------------------------------------------------

def _isolation_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    similar = _similar_letters(sound)
    choices = [sound.letter, *similar[:3]]
    questions = [
        _question(
            rng,
            sound=sound,
            id=f"{sound.id}-isolation-1",
            level=TrainingLevel.ISOLATION,
            prompt="استمع للصوت وحدد الحرف الصحيح",
            audio_description=f"صوت الحرف {sound.letter} معزولاً",
            options=choices,
            option_sounds=choices,
            distractor_sounds=similar[:3],
            hint=sound.training_tip,
            explanation=f"هذا صوت {sound.name}، مخرجه: {sound.articulation_description}",
        ),
        _question(
            rng,
            sound=sound,
            id=f"{sound.id}-isolation-2",
            level=TrainingLevel.ISOLATION,
            prompt=f"هل الصوت الذي سمعته هو صوت {sound.letter}؟",
            audio_description=f"صوت الحرف {sound.letter}",
            options=["نعم", "لا"],
            shuffle=False,
            hint=f"ركز على مخرج الصوت: {sound.articulation_description}",
            explanation=f"صحيح! هذا صوت {sound.name}",
        ),
    ]

    if similar:
        other = similar[0]
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-isolation-3",
            level=TrainingLevel.ISOLATION,
            prompt=f"ما الفرق بين صوت {sound.letter} وصوت {other}؟",
            audio_description=f"مقارنة بين {sound.letter} و {other}",
            options=[
                f"{sound.letter} من {sound.articulation_description}",
                f"{sound.letter} و {other} متطابقان",
                "لا يوجد فرق",
                f"{other} أقوى",
            ],
            distractor_sounds=[other],
            hint="ركز على مخرج كل صوت",
            explanation=f"{sound.letter} مخرجه {sound.articulation_description}",
        ))

    return questions


def _cv_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    similar = _similar_letters(sound)[:2]
    drills = sound.examples.cv
    questions = []
    for index, cv in enumerate(drills):
        tail = _tail_after(cv, sound.letter)
        neighbour = drills[(index + 1) % len(drills)]
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-cv-{index + 1}",
            level=TrainingLevel.CV,
            prompt="استمع واختر المقطع الصحيح",
            audio_description=f"المقطع {cv}",
            options=[cv, *(s + tail for s in similar), neighbour],
            option_sounds=[sound.letter, *similar, sound.letter],
            distractor_sounds=similar,
            hint=f"المقطع يبدأ بصوت {sound.letter}",
            explanation=f"المقطع {cv} يتكون من {sound.letter} مع مد",
        ))
    return questions


def _vc_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    similar = _similar_letters(sound)[:2]
    questions = []
    for index, vc in enumerate(sound.examples.vc):
        lead = _lead_before(vc, sound.letter)
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-vc-{index + 1}",
            level=TrainingLevel.VC,
            prompt="استمع واختر المقطع الصحيح",
            audio_description=f"المقطع {vc}",
            options=[vc, *(lead + s for s in similar)],
            option_sounds=[sound.letter, *similar],
            distractor_sounds=similar,
            hint=f"المقطع ينتهي بصوت {sound.letter}",
            explanation=f"المقطع {vc} ينتهي بصوت {sound.name}",
        ))
    return questions


def _vcv_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    drills = [item for row in sound.examples.vcv for item in row][:6]
    questions = []
    for index, vcv in enumerate(drills):
        options = [vcv, *[v for v in drills if v != vcv][:3]]
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-vcv-{index + 1}",
            level=TrainingLevel.VCV,
            prompt="استمع واختر المقطع الصحيح",
            audio_description=f"المقطع {vcv}",
            options=options,
            option_sounds=[sound.letter] * len(options),
            hint=f"المقطع يحتوي على صوت {sound.letter} في الوسط",
            explanation=f"المقطع {vcv} يحتوي على {sound.name} بين مدين",
        ))
    return questions


def _nonsense_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    similar = _similar_letters(sound)
    words = sound.examples.nonsense_words
    questions = []
    for index, word in enumerate(words):
        others = [w for w in words if w != word][:2]
        if similar:
            swapped, swapped_sound = word.replace(sound.letter, similar[0], 1), similar[0]
        else:
            swapped, swapped_sound = word + "ا", sound.letter
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-nonsense-{index + 1}",
            level=TrainingLevel.NONSENSE_WORDS,
            prompt="استمع واختر الكلمة الصحيحة",
            audio_description=f"الكلمة {word}",
            options=[word, *others, swapped],
            option_sounds=[sound.letter, *[sound.letter] * len(others), swapped_sound],
            distractor_sounds=similar[:1],
            hint=f"الكلمة تحتوي على صوت {sound.letter}",
            explanation=f"الكلمة {word} تحتوي على صوت {sound.name}",
        ))
    return questions


def _real_word_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    similar_sounds = get_similar_sounds(sound.letter)
    questions = []
    for position in SoundPosition:
        own_words = sound.examples.real_words.at(position)
        for syllables in SyllableCount:
            for index, word in enumerate(own_words.get(syllables)[:2]):
                # Same-position words of this sound and of its similar sounds
                candidates = {w: sound.letter for w in own_words.all() if w != word}
                for other in similar_sounds:
                    for w in other.examples.real_words.at(position).all():
                        if w != word:
                            candidates.setdefault(w, other.letter)
                distractors = _closest_words(word, candidates)

                questions.append(_question(
                    rng,
                    sound=sound,
                    id=f"{sound.id}-real-{position.value}-{syllables.value}-{index + 1}",
                    level=TrainingLevel.REAL_WORDS,
                    sound_position=position,
                    syllable_count=syllables,
                    prompt="استمع واختر الكلمة الصحيحة",
                    audio_description=f"الكلمة {word}",
                    options=[word, *(w for w, _ in distractors)],
                    option_sounds=[sound.letter, *(s for _, s in distractors)],
                    distractor_sounds=sorted({s for _, s in distractors if s != sound.letter}),
                    hint=f"الكلمة تحتوي على صوت {sound.letter} في {POSITION_NAMES[position]}",
                    explanation=f"الكلمة {word} - صوت {sound.name} في {POSITION_NAMES[position]}",
                ))
    return questions


def _text_choice_questions(
    sound: ArabicSound,
    rng: random.Random,
    texts: Sequence[str],
    level: TrainingLevel,
    id_part: str,
    noun: str,
    hint: str,
) -> list[AuditoryQuestion]:
    texts = list(texts)[:4]
    questions = []
    for index, text in enumerate(texts):
        options = [text, *[t for t in texts if t != text][:3]]
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-{id_part}-{index + 1}",
            level=level,
            prompt=f"استمع واختر {noun} الصحيحة",
            audio_description=f"{noun}: {text}",
            options=options,
            option_sounds=[sound.letter] * len(options),
            hint=hint,
            explanation=f"{noun} الصحيحة: {text}",
        ))
    return questions


def _phrase_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    questions = _text_choice_questions(
        sound, rng, sound.examples.phrases, TrainingLevel.PHRASES, "phrase", "العبارة",
        f"العبارة تحتوي على كلمات بها صوت {sound.letter}",
    )

    if sound.examples.phrases:
        phrase = sound.examples.phrases[0]
        count = count_letter(phrase, sound.letter)
        if count > 0:
            wrong = [count + 1, count + 2, count - 1 if count > 1 else count + 3]
            questions.append(_question(
                rng,
                sound=sound,
                id=f"{sound.id}-phrase-count",
                level=TrainingLevel.PHRASES,
                prompt=f"كم مرة سمعت صوت {sound.letter} في العبارة؟",
                audio_description=f"العبارة: {phrase}",
                options=[_count_label(n) for n in (count, *wrong)],
                hint="استمع بتركيز لكل كلمة",
                explanation=f"صوت {sound.letter} يظهر {_count_label(count)} في العبارة",
            ))
    return questions


def _sentence_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    return _text_choice_questions(
        sound, rng, sound.examples.sentences, TrainingLevel.SENTENCES, "sentence", "الجملة",
        f"الجملة تحتوي على عدة كلمات بها صوت {sound.letter}",
    )


def _story_retelling_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    story = sound.examples.story_retelling
    if not story:
        return []

    similar = _similar_letters(sound)
    words = [w for w in _WORD_PATTERN.findall(story) if sound.letter in remove_diacritics(w)]
    questions = []

    if len(words) >= 2:
        word = words[0]
        replacement = similar[0] if similar else "ا"
        questions.append(_question(
            rng,
            sound=sound,
            id=f"{sound.id}-story-retelling-1",
            level=TrainingLevel.STORY_RETELLING,
            prompt="استمع للقصة ثم اختر الكلمة التي سمعتها",
            audio_description=f"القصة: {story}",
            options=[word, word.replace(sound.letter, replacement, 1), "لم أسمعها", "غير متأكد"],
            option_sounds=[sound.letter, similar[0] if similar else None, None, None],
            hint=f"ركز على الكلمات التي تحتوي على صوت {sound.letter}",
            explanation=f"الكلمة {word} وردت في القصة",
        ))

    choices = [sound.letter, *similar[:3]]
    questions.append(_question(
        rng,
        sound=sound,
        id=f"{sound.id}-story-retelling-2",
        level=TrainingLevel.STORY_RETELLING,
        prompt="ما الصوت الذي تكرر كثيراً في القصة؟",
        audio_description=f"القصة: {story}",
        options=choices,
        option_sounds=choices,
        hint="استمع للصوت المتكرر",
        explanation=f"صوت {sound.name} هو الصوت المستهدف في هذه القصة",
    ))
    return questions


def _story_telling_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    if not sound.examples.story_telling_prompt:
        return []
    examples = "، ".join(sound.examples.real_words.initial.bi[:3])
    return [_question(
        rng,
        sound=sound,
        id=f"{sound.id}-story-telling-1",
        level=TrainingLevel.STORY_TELLING,
        prompt=f"اسرد قصة قصيرة تحتوي على كلمات بها صوت {sound.letter}",
        audio_description=f"موضوع القصة: {sound.examples.story_telling_prompt}",
        options=_STORY_TELLING_OPTIONS,
        shuffle=False,
        hint=f"استخدم كلمات مثل: {examples}",
        explanation=f"أحسنت! حاول استخدام المزيد من الكلمات التي تحتوي على {sound.letter}",
    )]


def _qa_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    return [
        _question(
            rng,
            sound=sound,
            id=f"{sound.id}-questions-{index + 1}",
            level=TrainingLevel.QUESTIONS,
            prompt=qa.question,
            audio_description=f"سؤال: {qa.question}",
            options=[qa.answer, *_QUESTION_FALLBACK_OPTIONS],
            shuffle=False,
            hint=f"الإجابة تحتوي على صوت {sound.letter}",
            explanation=f"الإجابة الصحيحة: {qa.answer}",
        )
        for index, qa in enumerate(sound.examples.questions)
    ]


def _spontaneous_questions(sound: ArabicSound, rng: random.Random) -> list[AuditoryQuestion]:
    prompt = sound.examples.spontaneous_prompt
    if not prompt:
        return []
    return [_question(
        rng,
        sound=sound,
        id=f"{sound.id}-spontaneous-1",
        level=TrainingLevel.SPONTANEOUS,
        prompt=prompt,
        audio_description=f"موضوع المحادثة: {prompt}",
        options=_SPONTANEOUS_OPTIONS,
        shuffle=False,
        hint=f"حاول استخدام كلمات متنوعة تحتوي على صوت {sound.letter}",
        explanation="استمر في التدريب! كل محادثة تساعدك على التحسن",
    )]


_BUILDERS = {
    TrainingLevel.ISOLATION: _isolation_questions,
    TrainingLevel.CV: _cv_questions,
    TrainingLevel.VC: _vc_questions,
    TrainingLevel.VCV: _vcv_questions,
    TrainingLevel.NONSENSE_WORDS: _nonsense_questions,
    TrainingLevel.REAL_WORDS: _real_word_questions,
    TrainingLevel.PHRASES: _phrase_questions,
    TrainingLevel.SENTENCES: _sentence_questions,
    TrainingLevel.STORY_RETELLING: _story_retelling_questions,
    TrainingLevel.STORY_TELLING: _story_telling_questions,
    TrainingLevel.QUESTIONS: _qa_questions,
    TrainingLevel.SPONTANEOUS: _spontaneous_questions,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def _lookup(sound_id: str, strict: bool) -> Optional[ArabicSound]:
    if strict:
        return require_sound(sound_id)
    return get_sound_by_id(sound_id)


def generate_questions_for_level(
    sound_id: str,
    level: TrainingLevel | str,
    rng: random.Random | None = None,
    strict: bool = False,
) -> list[AuditoryQuestion]:
    """
    Generate every question available for one sound at one level.

    Args:
        sound_id: Sound identifier (e.g. "ba")
        level: Curriculum level
        rng: Random source for option order
        strict: Raise UnknownSoundError for unknown ids instead of
            returning an empty list

    Returns:
        Questions in authored order, options shuffled
    """
    sound = _lookup(sound_id, strict)
    if sound is None:
        logger.debug("No questions for unknown sound %s", sound_id)
        return []
    return _BUILDERS[TrainingLevel(level)](sound, _default_rng(rng))


def _exercise(
    sound: ArabicSound,
    level: TrainingLevel,
    questions: list[AuditoryQuestion],
    question_count: int,
    rng: random.Random,
    id_prefix: str,
    title: str,
    description: str,
) -> Optional[AuditoryExercise]:
    selected = fisher_yates_shuffle(questions, rng)[: max(question_count, 0)]
    if not selected:
        return None
    return AuditoryExercise(
        id=f"{id_prefix}-{rng.getrandbits(32):08x}",
        title=title,
        description=description,
        target_sound=sound.letter,
        level=level,
        difficulty=level_difficulty(level),
        questions=selected,
        estimated_duration=f"{len(selected) * SECONDS_PER_QUESTION} ثانية",
    )


def generate_exercise(
    sound_id: str,
    level: TrainingLevel | str,
    question_count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
    strict: bool = False,
) -> Optional[AuditoryExercise]:
    """
    Build an exercise of up to `question_count` randomly chosen questions.

    Returns:
        The exercise, or None for an unknown sound or a level without content
    """
    rng = _default_rng(rng)
    level = TrainingLevel(level)
    sound = _lookup(sound_id, strict)
    if sound is None:
        return None

    level_name = TRAINING_LEVEL_NAMES[level]
    return _exercise(
        sound,
        level,
        _BUILDERS[level](sound, rng),
        question_count,
        rng,
        id_prefix=f"exercise-{sound.id}-{level.value}",
        title=f"تدريب صوت {sound.letter} - {level_name}",
        description=f"تدريبات على صوت {sound.name} في مرحلة {level_name}",
    )


def get_custom_exercise(
    sound_id: str,
    level: TrainingLevel | str,
    position: SoundPosition | str | None = None,
    question_count: int = DEFAULT_QUESTION_COUNT,
    rng: random.Random | None = None,
) -> Optional[AuditoryExercise]:
    """
    Like generate_exercise, optionally restricted to one word position.

    The position filter only applies at the real_words level.
    """
    rng = _default_rng(rng)
    level = TrainingLevel(level)
    position = SoundPosition(position) if position is not None else None
    sound = get_sound_by_id(sound_id)
    if sound is None:
        return None

    questions = _BUILDERS[level](sound, rng)
    if position is not None and level == TrainingLevel.REAL_WORDS:
        questions = [q for q in questions if q.sound_position == position]

    suffix = f" - {POSITION_NAMES[position]}" if position is not None else ""
    return _exercise(
        sound,
        level,
        questions,
        question_count,
        rng,
        id_prefix=f"custom-{sound.id}-{level.value}-{position.value if position else 'all'}",
        title=f"تدريب صوت {sound.letter} - {TRAINING_LEVEL_NAMES[level]}{suffix}",
        description=f"تدريبات مخصصة على صوت {sound.name}",
    )


def generate_all_exercises_for_sound(
    sound_id: str,
    rng: random.Random | None = None,
) -> list[AuditoryExercise]:
    """One exercise per curriculum level that has content for the sound."""
    rng = _default_rng(rng)
    exercises = []
    for level in TRAINING_LEVEL_ORDER:
        exercise = generate_exercise(sound_id, level, rng=rng)
        if exercise is not None:
            exercises.append(exercise)
    return exercises


def generate_similar_sounds_review(
    letter_a: str,
    letter_b: str,
    question_count: int = REVIEW_QUESTION_COUNT,
    rng: random.Random | None = None,
) -> Optional[AuditoryExercise]:
    """
    Build a review exercise contrasting two easily confused sounds.

    Mixes "which of the two did you hear" questions with questions on
    words that start with either sound.

    Returns:
        The exercise, or None when either letter is unknown
    """
    rng = _default_rng(rng)
    sound_a = get_sound_by_letter(letter_a)
    sound_b = get_sound_by_letter(letter_b)
    if sound_a is None or sound_b is None:
        return None

    pair = [letter_a, letter_b]
    questions = []
    for index, sound in enumerate((sound_a, sound_b)):
        questions.append(AuditoryQuestion(
            id=f"compare-{sound.letter}-{index}",
            target_sound=sound.letter,
            level=TrainingLevel.ISOLATION,
            prompt=f"استمع وحدد: هل هذا صوت {letter_a} أم {letter_b}؟",
            audio_description=f"صوت {sound.letter}",
            options=pair,
            correct_answer=index,
            option_sounds=pair,
            hint=f"{sound.letter} مخرجه {sound.articulation_description}",
            explanation=f"هذا صوت {sound.name}، مخرجه: {sound.articulation_description}",
        ))

    words = [(w, 0) for w in sound_a.examples.real_words.initial.bi[:2]]
    words += [(w, 1) for w in sound_b.examples.real_words.initial.bi[:2]]
    for index, (word, owner) in enumerate(words):
        sound = (sound_a, sound_b)[owner]
        questions.append(AuditoryQuestion(
            id=f"word-compare-{index}",
            target_sound=sound.letter,
            level=TrainingLevel.REAL_WORDS,
            sound_position=SoundPosition.INITIAL,
            prompt="الكلمة التي سمعتها تحتوي على صوت:",
            audio_description=f"الكلمة: {word}",
            options=[letter_a, letter_b, "كلاهما", "لا أحد منهما"],
            correct_answer=owner,
            option_sounds=[letter_a, letter_b, None, None],
            hint="ركز على الصوت في بداية الكلمة",
            explanation=f"الكلمة {word} تحتوي على صوت {sound.name}",
        ))

    selected = fisher_yates_shuffle(questions, rng)[:question_count]
    return AuditoryExercise(
        id=f"review-{sound_a.id}-{sound_b.id}-{rng.getrandbits(32):08x}",
        title=f"مراجعة الفرق بين {letter_a} و {letter_b}",
        description=f"تدريبات للتمييز بين صوت {sound_a.name} وصوت {sound_b.name}",
        target_sound=f"{letter_a}-{letter_b}",
        level=TrainingLevel.ISOLATION,
        difficulty="intermediate",
        questions=selected,
        estimated_duration=f"{len(selected) * SECONDS_PER_QUESTION} ثانية",
    )
