"""
Nutq - Arabic pronunciation training engine.

Judges answers to listening drills, tells sound confusions apart from
plain mistakes, and tracks per-sound mastery across a twelve-level
curriculum.

Quick start:
    from nutq import ProgressTracker, generate_exercise

    tracker = ProgressTracker()
    exercise = generate_exercise("ta", "isolation")
    question = exercise.questions[0]
    result = tracker.answer_question("ta", question, selected_answer=0)
    print(result.feedback)
"""

__version__ = "0.1.0"

from nutq.config import NutqSettings, configure, get_settings
from nutq.exceptions import ContentError, NutqError, StorageError, UnknownSoundError
from nutq.models import (
    ArabicSound,
    AuditoryExercise,
    AuditoryQuestion,
    ConfusionType,
    JudgeResult,
    MasteryStatus,
    NextAction,
    SoundPosition,
    SoundProgress,
    SoundRecommendation,
    SoundStatistics,
    TrainingLevel,
)
from nutq.data import (
    get_available_sounds,
    get_similar_sounds,
    get_sound_by_id,
    get_sound_by_letter,
    load_sounds,
    require_sound,
)
from nutq.core import (
    ProgressTracker,
    analyze_error_patterns,
    classify_confusion,
    judge,
    judge_question,
    similarity,
    suggest_next_exercise,
)
from nutq.exercises import (
    generate_all_exercises_for_sound,
    generate_exercise,
    generate_similar_sounds_review,
    get_custom_exercise,
)
from nutq.storage import JsonFileStorage, MemoryStorage, StorageBackend
from nutq.speech import Speaker, prepare_text

__all__ = [
    "__version__",
    # Configuration
    "NutqSettings",
    "get_settings",
    "configure",
    # Errors
    "NutqError",
    "ContentError",
    "UnknownSoundError",
    "StorageError",
    # Models
    "ArabicSound",
    "AuditoryQuestion",
    "AuditoryExercise",
    "TrainingLevel",
    "SoundPosition",
    "MasteryStatus",
    "SoundProgress",
    "SoundRecommendation",
    "SoundStatistics",
    "JudgeResult",
    "ConfusionType",
    "NextAction",
    # Content
    "load_sounds",
    "get_sound_by_id",
    "get_sound_by_letter",
    "get_similar_sounds",
    "get_available_sounds",
    "require_sound",
    # Judge & progress
    "judge",
    "judge_question",
    "similarity",
    "classify_confusion",
    "analyze_error_patterns",
    "suggest_next_exercise",
    "ProgressTracker",
    # Exercises
    "generate_exercise",
    "get_custom_exercise",
    "generate_all_exercises_for_sound",
    "generate_similar_sounds_review",
    # Boundaries
    "StorageBackend",
    "MemoryStorage",
    "JsonFileStorage",
    "Speaker",
    "prepare_text",
]
