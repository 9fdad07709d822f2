"""
Training level, question and exercise data models.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from nutq.models.sound import SoundPosition, SyllableCount


class TrainingLevel(str, Enum):
    """The twelve curriculum levels, from isolated sound to free speech."""

    ISOLATION = "isolation"
    CV = "cv"
    VC = "vc"
    VCV = "vcv"
    NONSENSE_WORDS = "nonsense_words"
    REAL_WORDS = "real_words"
    PHRASES = "phrases"
    SENTENCES = "sentences"
    STORY_RETELLING = "story_retelling"
    STORY_TELLING = "story_telling"
    QUESTIONS = "questions"
    SPONTANEOUS = "spontaneous"


# Enum definition order is the curriculum order
TRAINING_LEVEL_ORDER: list[TrainingLevel] = list(TrainingLevel)

TRAINING_LEVEL_NAMES: dict[TrainingLevel, str] = {
    TrainingLevel.ISOLATION: "الصوت معزول",
    TrainingLevel.CV: "الصوت مع مد بعدي",
    TrainingLevel.VC: "الصوت مع مد قبلي",
    TrainingLevel.VCV: "الصوت مع مد قبلي وبعدي",
    TrainingLevel.NONSENSE_WORDS: "الكلمات الغير مفهومة",
    TrainingLevel.REAL_WORDS: "الكلمات الحقيقية",
    TrainingLevel.PHRASES: "العبارات",
    TrainingLevel.SENTENCES: "الجمل",
    TrainingLevel.STORY_RETELLING: "إعادة سرد القصص",
    TrainingLevel.STORY_TELLING: "سرد القصص",
    TrainingLevel.QUESTIONS: "الإجابة على الأسئلة",
    TrainingLevel.SPONTANEOUS: "الكلام المسترسل",
}

# Levels where a wrong answer sends the learner back to review
EARLY_LEVELS: frozenset[TrainingLevel] = frozenset(
    {TrainingLevel.ISOLATION, TrainingLevel.CV, TrainingLevel.VC}
)

Difficulty = Literal["beginner", "intermediate", "advanced"]

_BEGINNER_LEVELS = {TrainingLevel.ISOLATION, TrainingLevel.CV, TrainingLevel.VC, TrainingLevel.VCV}
_INTERMEDIATE_LEVELS = {TrainingLevel.NONSENSE_WORDS, TrainingLevel.REAL_WORDS, TrainingLevel.PHRASES}


def next_level(level: TrainingLevel | str) -> TrainingLevel | None:
    """Return the level after `level` in curriculum order, or None for the last one."""
    index = TRAINING_LEVEL_ORDER.index(TrainingLevel(level))
    if index + 1 < len(TRAINING_LEVEL_ORDER):
        return TRAINING_LEVEL_ORDER[index + 1]
    return None


def level_difficulty(level: TrainingLevel | str) -> Difficulty:
    """Map a training level to the difficulty band shown to learners."""
    level = TrainingLevel(level)
    if level in _BEGINNER_LEVELS:
        return "beginner"
    if level in _INTERMEDIATE_LEVELS:
        return "intermediate"
    return "advanced"


class AuditoryQuestion(BaseModel):
    """
    One multiple-choice listening question.

    Attributes:
        id: Question identifier
        target_sound: Letter of the sound under test
        level: Curriculum level the question belongs to
        options: Candidate answers (letters, syllables, words or phrases)
        correct_answer: Index of the correct option
        option_sounds: Representative phoneme of each option, when known
    """

    id: str = Field(..., min_length=1)
    target_sound: str = Field(..., description="Letter of the sound under test", min_length=1)
    level: TrainingLevel
    sound_position: Optional[SoundPosition] = None
    syllable_count: Optional[SyllableCount] = None

    prompt: str = Field(..., description="Question text")
    audio_description: str = Field(default="", description="Text spoken to the learner")
    options: list[str] = Field(..., min_length=1)
    correct_answer: int = Field(..., ge=0)
    option_sounds: Optional[list[Optional[str]]] = Field(
        default=None,
        description="Representative phoneme letter per option (None where unknown)",
    )

    distractor_sounds: list[str] = Field(default_factory=list)
    hint: Optional[str] = None
    explanation: Optional[str] = None

    model_config = {"frozen": True}

    @field_validator("correct_answer")
    @classmethod
    def answer_in_range(cls, v: int, info) -> int:
        """Ensure the correct answer points at an option."""
        options = info.data.get("options")
        if options is not None and v >= len(options):
            raise ValueError("correct_answer must index into options")
        return v

    @model_validator(mode="after")
    def option_sounds_match_options(self) -> "AuditoryQuestion":
        if self.option_sounds is not None and len(self.option_sounds) != len(self.options):
            raise ValueError("option_sounds must have one entry per option")
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer]


class AuditoryExercise(BaseModel):
    """A generated set of questions for one sound at one level."""

    id: str
    title: str
    description: str = ""
    target_sound: str
    level: TrainingLevel
    difficulty: Difficulty
    questions: list[AuditoryQuestion] = Field(default_factory=list)
    estimated_duration: str = ""

    model_config = {"frozen": True}
