"""
Listening exercise generation for the twelve curriculum levels.
"""

from nutq.exercises.generator import (
    fisher_yates_shuffle,
    generate_all_exercises_for_sound,
    generate_exercise,
    generate_questions_for_level,
    generate_similar_sounds_review,
    get_custom_exercise,
)

__all__ = [
    "fisher_yates_shuffle",
    "generate_questions_for_level",
    "generate_exercise",
    "get_custom_exercise",
    "generate_all_exercises_for_sound",
    "generate_similar_sounds_review",
]
