"""
Core modules for Nutq library.

This package contains the core business logic for:
- Phoneme feature lookups and similarity scoring
- Judging answers and classifying sound confusions
- The per-level mastery state machine and recommendations

Primary API:
    from nutq.core import ProgressTracker, judge

    # Judge a single answer
    result = judge("ت", selected_answer=1, correct_answer=0, options=["ت", "ط"], level="isolation")

    # Judge and record through a tracker
    tracker = ProgressTracker()
    tracker.record_answer("ta", "isolation", result.is_correct, selected_sound=result.selected_sound)
"""

# Primary API - what most users need
from nutq.core.judge import judge, judge_question, analyze_error_patterns, suggest_next_exercise
from nutq.core.tracker import ProgressTracker

# Phonetics - commonly used
from nutq.core.phonetic import PhonemeTable, classify_confusion, similarity
from nutq.core.arabic import normalize_arabic, remove_diacritics

# State machine pieces - for callers managing progress themselves
from nutq.core.mastery import (
    LevelUpdate,
    apply_answer,
    calculate_accuracy,
    determine_mastery_status,
    initialize_sound_progress,
)
from nutq.core.recommender import compute_statistics, recommend

__all__ = [
    # Primary API
    "judge",
    "judge_question",
    "analyze_error_patterns",
    "suggest_next_exercise",
    "ProgressTracker",
    # Phonetics
    "PhonemeTable",
    "classify_confusion",
    "similarity",
    "normalize_arabic",
    "remove_diacritics",
    # State machine
    "LevelUpdate",
    "apply_answer",
    "calculate_accuracy",
    "determine_mastery_status",
    "initialize_sound_progress",
    "compute_statistics",
    "recommend",
]
