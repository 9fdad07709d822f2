"""
Learner progress data models.

These records are persisted as a whole ``sound_id -> SoundProgress`` mapping
and mutated in place by the progress tracker, so they validate on assignment.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from nutq.models.question import TrainingLevel
from nutq.models.sound import SoundPosition


class MasteryStatus(str, Enum):
    """Status of one sound at one curriculum level."""

    LOCKED = "locked"
    AVAILABLE = "available"
    IN_PROGRESS = "in_progress"
    MASTERED = "mastered"


class SoundLevelProgress(BaseModel):
    """
    Attempt counters and status for one (sound, level) pair.

    Attributes:
        level: Curriculum level
        questions_attempted: Answers recorded at this level
        questions_correct: Correct answers recorded at this level
        accuracy: Rounded percentage of correct answers (0 when nothing attempted)
        status: Mastery status
        last_attempt_at: ISO timestamp of the most recent answer
        mastered_at: ISO timestamp of the first time the level was mastered
    """

    level: TrainingLevel
    questions_attempted: int = Field(default=0, ge=0)
    questions_correct: int = Field(default=0, ge=0)
    accuracy: int = Field(default=0, ge=0, le=100)
    status: MasteryStatus = MasteryStatus.LOCKED
    last_attempt_at: Optional[str] = None
    mastered_at: Optional[str] = None

    model_config = {"validate_assignment": True}

    @model_validator(mode="after")
    def correct_within_attempted(self) -> "SoundLevelProgress":
        if self.questions_correct > self.questions_attempted:
            raise ValueError("questions_correct cannot exceed questions_attempted")
        return self


class SoundProgress(BaseModel):
    """
    Aggregate progress for one sound across all curriculum levels.

    The confusion matrix maps a confused letter to the number of times the
    learner picked it while this sound was the target.
    """

    sound_id: str = Field(..., min_length=1)
    letter: str = ""
    levels: dict[TrainingLevel, SoundLevelProgress]
    overall_accuracy: int = Field(default=0, ge=0, le=100)
    current_level: TrainingLevel = TrainingLevel.ISOLATION
    confusion_matrix: dict[str, int] = Field(default_factory=dict)
    strong_positions: list[SoundPosition] = Field(default_factory=list)
    weak_positions: list[SoundPosition] = Field(default_factory=list)

    model_config = {"validate_assignment": True}

    @model_validator(mode="after")
    def all_levels_present(self) -> "SoundProgress":
        missing = [level.value for level in TrainingLevel if level not in self.levels]
        if missing:
            raise ValueError(f"missing level progress for: {', '.join(missing)}")
        return self

    @property
    def has_attempts(self) -> bool:
        return any(lp.questions_attempted > 0 for lp in self.levels.values())

    @property
    def mastered_level_count(self) -> int:
        return sum(1 for lp in self.levels.values() if lp.status == MasteryStatus.MASTERED)


class RecommendationType(str, Enum):
    """Kind of guidance surfaced to the learner."""

    REVIEW_ARTICULATION = "review_articulation"
    PRACTICE_POSITION = "practice_position"
    ADVANCE_LEVEL = "advance_level"
    REVIEW_SIMILAR_SOUNDS = "review_similar_sounds"


class SoundRecommendation(BaseModel):
    """One prioritised suggestion; lower priority means more urgent."""

    type: RecommendationType
    sound_id: str
    level: Optional[TrainingLevel] = None
    position: Optional[SoundPosition] = None
    similar_sound: Optional[str] = None
    message: str
    reason: str
    priority: int = Field(..., ge=1)


class SoundStatistics(BaseModel):
    """Profile-wide summary across every tracked sound."""

    total_sounds: int = 0
    mastered_sounds: int = 0
    in_progress_sounds: int = 0
    average_accuracy: int = 0
    strongest_sounds: list[str] = Field(default_factory=list)
    weakest_sounds: list[str] = Field(default_factory=list)
    most_confused_pairs: list[tuple[str, str]] = Field(default_factory=list)
    current_focus: list[str] = Field(default_factory=list)


class NextExercise(BaseModel):
    """Where the learner should practise next for one sound."""

    level: TrainingLevel
    position: Optional[SoundPosition] = None
