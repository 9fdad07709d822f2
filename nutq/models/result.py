"""
Answer evaluation result models.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field

from nutq.models.question import TrainingLevel
from nutq.models.sound import SoundPosition


class ConfusionType(str, Enum):
    """Why two sounds were confused, checked in this priority order."""

    ARTICULATION = "articulation"
    VOICING = "voicing"
    EMPHASIS = "emphasis"
    OTHER = "other"


class NextAction(str, Enum):
    """What the exercise UI should do after an answer."""

    CONTINUE = "continue"
    REVIEW = "review"
    PRACTICE_SIMILAR = "practice_similar"
    REPEAT = "repeat"


class DetailedFeedback(BaseModel):
    """Feedback text shown under an answered question."""

    message: str
    explanation: Optional[str] = None
    tip: Optional[str] = None
    practice_words: list[str] = Field(default_factory=list)


class JudgeResult(BaseModel):
    """
    Evaluation of a single answer.

    Attributes:
        is_correct: Whether the selected option is the correct one
        target_sound: Letter of the sound under test
        selected_option: Text of the chosen option (only for wrong answers)
        selected_sound: Phoneme the chosen option represents, if one was found
        is_confusion_error: Wrong answer whose phoneme is similar to the target
        confused_with: The similar phoneme (only for confusion errors)
        confusion_type: Shared feature behind the confusion
        position_struggle: Word position of the target sound, for wrong answers
        similarity_score: Confusability of target and selected phoneme (0.0-1.0)
    """

    is_correct: bool
    target_sound: str
    selected_option: Optional[str] = None
    selected_sound: Optional[str] = None
    is_confusion_error: bool = False
    confused_with: Optional[str] = None
    confusion_type: Optional[ConfusionType] = None
    position_struggle: Optional[SoundPosition] = None

    feedback: str
    suggestion: Optional[str] = None

    similarity_score: float = Field(default=0.0, ge=0.0, le=1.0)
    detailed_feedback: DetailedFeedback
    should_repeat: bool = False
    next_action: NextAction = NextAction.CONTINUE

    model_config = {"frozen": True}

    def __str__(self) -> str:
        verdict = "correct" if self.is_correct else "wrong"
        if self.is_confusion_error:
            verdict = f"confused {self.target_sound}/{self.confused_with} ({self.confusion_type.value})"
        return f"JudgeResult({verdict}, {self.next_action.value})"


class AnswerRecord(BaseModel):
    """A wrong answer kept for error-pattern analysis."""

    target_sound: str
    selected_sound: Optional[str] = None
    position: Optional[SoundPosition] = None
    level: TrainingLevel


class RecentResult(BaseModel):
    """A recent answer used to suggest the next exercise."""

    is_correct: bool
    level: TrainingLevel
    position: Optional[SoundPosition] = None


class ErrorPattern(BaseModel):
    """A recurring kind of mistake found in a batch of wrong answers."""

    type: Literal["confusion", "position", "level", "random"]
    description: str
    frequency: int = Field(..., ge=1)
    recommendation: str


class NextExerciseSuggestion(BaseModel):
    """Suggested follow-up drill after a run of answers."""

    sound_id: str
    level: TrainingLevel
    position: Optional[SoundPosition] = None
    reason: str
    priority: Literal["high", "medium", "low"]
