"""
Shared fixtures and test configuration for Nutq tests.
"""

import random

import pytest

from nutq.config import NutqSettings
from nutq.core.tracker import ProgressTracker
from nutq.models import AnswerRecord, SoundPosition, TrainingLevel
from nutq.storage import MemoryStorage


@pytest.fixture
def settings():
    """Settings with explicit defaults, independent of the environment."""
    return NutqSettings(
        _env_file=None,
        unlock_all_levels=False,
        mastery_threshold=80,
        min_questions_for_mastery=5,
        confusion_threshold=0.3,
        remedial_threshold=0.5,
        storage_key="nutq-test-progress-v1",
        random_seed=None,
    )


@pytest.fixture
def unlocked_settings(settings):
    """Settings with every level available from the start."""
    return settings.model_copy(update={"unlock_all_levels": True})


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def storage():
    """Empty in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def tracker(storage, settings, rng):
    """Progress tracker over in-memory storage."""
    return ProgressTracker(storage=storage, settings=settings, rng=rng)


@pytest.fixture
def sample_errors():
    """Wrong answers with a repeated ت/ط confusion and medial-position errors."""
    return [
        AnswerRecord(target_sound="ت", selected_sound="ط", position=SoundPosition.MEDIAL, level=TrainingLevel.REAL_WORDS),
        AnswerRecord(target_sound="ط", selected_sound="ت", position=SoundPosition.MEDIAL, level=TrainingLevel.REAL_WORDS),
        AnswerRecord(target_sound="ت", selected_sound="ط", position=SoundPosition.MEDIAL, level=TrainingLevel.REAL_WORDS),
        AnswerRecord(target_sound="س", selected_sound="ص", position=SoundPosition.INITIAL, level=TrainingLevel.REAL_WORDS),
    ]
