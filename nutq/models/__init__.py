"""
Pydantic data models for Nutq library.

These models represent the core data structures used throughout the library:
- ArabicSound: A phoneme with its articulation features and practice material
- AuditoryQuestion / AuditoryExercise: Generated listening drills
- SoundProgress / SoundLevelProgress: Learner mastery state
- JudgeResult: Result of evaluating one answer
"""

from nutq.models.sound import (
    POSITION_NAMES,
    ArabicSound,
    ArticulationPoint,
    QuestionAnswer,
    RealWords,
    SoundCharacteristic,
    SoundExamples,
    SoundPosition,
    SyllableCount,
    SyllableWords,
)
from nutq.models.question import (
    EARLY_LEVELS,
    TRAINING_LEVEL_NAMES,
    TRAINING_LEVEL_ORDER,
    AuditoryExercise,
    AuditoryQuestion,
    TrainingLevel,
    level_difficulty,
    next_level,
)
from nutq.models.progress import (
    MasteryStatus,
    NextExercise,
    RecommendationType,
    SoundLevelProgress,
    SoundProgress,
    SoundRecommendation,
    SoundStatistics,
)
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

__all__ = [
    "ArabicSound",
    "ArticulationPoint",
    "SoundCharacteristic",
    "SoundPosition",
    "SyllableCount",
    "SyllableWords",
    "RealWords",
    "QuestionAnswer",
    "SoundExamples",
    "POSITION_NAMES",
    "TrainingLevel",
    "TRAINING_LEVEL_ORDER",
    "TRAINING_LEVEL_NAMES",
    "EARLY_LEVELS",
    "next_level",
    "level_difficulty",
    "AuditoryQuestion",
    "AuditoryExercise",
    "MasteryStatus",
    "SoundLevelProgress",
    "SoundProgress",
    "RecommendationType",
    "SoundRecommendation",
    "SoundStatistics",
    "NextExercise",
    "ConfusionType",
    "NextAction",
    "DetailedFeedback",
    "JudgeResult",
    "AnswerRecord",
    "RecentResult",
    "ErrorPattern",
    "NextExerciseSuggestion",
]
