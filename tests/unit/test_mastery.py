"""
Unit tests for the mastery state machine.
"""

import pytest
from nutq.core.mastery import (
    apply_answer,
    calculate_accuracy,
    calculate_overall_accuracy,
    classify_positions,
    determine_mastery_status,
    initialize_sound_progress,
    update_positions,
)
from nutq.models import MasteryStatus, SoundPosition, TrainingLevel

NOW = "2026-01-01T00:00:00+00:00"
LATER = "2026-01-02T00:00:00+00:00"


class TestAccuracy:
    """Test accuracy rounding."""

    @pytest.mark.parametrize("correct,attempted,expected", [
        (0, 0, 0),
        (5, 5, 100),
        (1, 8, 13),     # 12.5 rounds up
        (1, 200, 1),    # 0.5 rounds up
        (1, 3, 33),
        (2, 3, 67),
        (4, 5, 80),
    ])
    def test_calculate_accuracy(self, correct, attempted, expected):
        assert calculate_accuracy(correct, attempted) == expected


class TestMasteryStatus:
    """Test status derivation from counters."""

    @pytest.mark.parametrize("attempted,accuracy,expected", [
        (0, 0, MasteryStatus.AVAILABLE),
        (4, 100, MasteryStatus.IN_PROGRESS),
        (5, 80, MasteryStatus.MASTERED),
        (5, 79, MasteryStatus.IN_PROGRESS),
        (20, 95, MasteryStatus.MASTERED),
    ])
    def test_status(self, settings, attempted, accuracy, expected):
        assert determine_mastery_status(attempted, accuracy, settings) == expected

    def test_custom_threshold(self, settings):
        lenient = settings.model_copy(update={"mastery_threshold": 60, "min_questions_for_mastery": 2})
        assert determine_mastery_status(2, 60, lenient) == MasteryStatus.MASTERED


class TestInitialize:
    """Test fresh progress."""

    def test_only_isolation_available(self, settings):
        progress = initialize_sound_progress("ta", "ت", settings)

        assert progress.current_level == TrainingLevel.ISOLATION
        assert progress.levels[TrainingLevel.ISOLATION].status == MasteryStatus.AVAILABLE
        for level in list(TrainingLevel)[1:]:
            assert progress.levels[level].status == MasteryStatus.LOCKED

    def test_unlock_all(self, unlocked_settings):
        progress = initialize_sound_progress("ta", "ت", unlocked_settings)
        assert all(lp.status == MasteryStatus.AVAILABLE for lp in progress.levels.values())


class TestApplyAnswer:
    """Test folding answers into progress."""

    def test_five_correct_at_cv(self, settings):
        """Mastering cv unlocks vc."""
        progress = initialize_sound_progress("ta", "ت", settings)
        for _ in range(5):
            update = apply_answer(progress, "cv", True, now=NOW, settings=settings)

        cv = progress.levels[TrainingLevel.CV]
        assert (cv.questions_attempted, cv.questions_correct, cv.accuracy) == (5, 5, 100)
        assert cv.status == MasteryStatus.MASTERED
        assert cv.mastered_at == NOW
        assert progress.levels[TrainingLevel.VC].status == MasteryStatus.AVAILABLE
        assert update.newly_mastered
        assert update.unlocked == TrainingLevel.VC
        assert progress.current_level == TrainingLevel.VC

    def test_progress_before_mastery(self, settings):
        progress = initialize_sound_progress("ta", "ت", settings)
        update = apply_answer(progress, "isolation", False, now=NOW, settings=settings)

        lp = progress.levels[TrainingLevel.ISOLATION]
        assert lp.status == MasteryStatus.IN_PROGRESS
        assert lp.last_attempt_at == NOW
        assert lp.accuracy == 0
        assert update.unlocked is None
        assert not update.newly_mastered

    def test_mastery_can_revert(self, settings):
        """Status follows accuracy; mastered_at and the unlock are kept."""
        progress = initialize_sound_progress("ta", "ت", settings)
        for _ in range(5):
            apply_answer(progress, "isolation", True, now=NOW, settings=settings)
        for _ in range(2):
            update = apply_answer(progress, "isolation", False, now=LATER, settings=settings)

        lp = progress.levels[TrainingLevel.ISOLATION]
        assert lp.accuracy == 71
        assert lp.status == MasteryStatus.IN_PROGRESS
        assert update.status == MasteryStatus.IN_PROGRESS
        assert lp.mastered_at == NOW
        assert progress.levels[TrainingLevel.CV].status == MasteryStatus.AVAILABLE
        assert progress.current_level == TrainingLevel.CV

    def test_remastering_keeps_first_timestamp(self, settings):
        progress = initialize_sound_progress("ta", "ت", settings)
        for _ in range(5):
            apply_answer(progress, "isolation", True, now=NOW, settings=settings)
        for _ in range(2):
            apply_answer(progress, "isolation", False, now=LATER, settings=settings)
        for _ in range(3):
            update = apply_answer(progress, "isolation", True, now=LATER, settings=settings)

        lp = progress.levels[TrainingLevel.ISOLATION]
        assert lp.accuracy == 80
        assert lp.status == MasteryStatus.MASTERED
        assert lp.mastered_at == NOW
        assert not update.newly_mastered
        assert update.unlocked is None

    def test_current_level_never_moves_back(self, settings):
        """Mastering an earlier level does not pull current_level back."""
        progress = initialize_sound_progress("ta", "ت", settings)
        progress.current_level = TrainingLevel.PHRASES
        for _ in range(5):
            apply_answer(progress, "isolation", True, settings=settings)
        assert progress.current_level == TrainingLevel.PHRASES

    def test_last_level_mastery(self, unlocked_settings):
        progress = initialize_sound_progress("ta", "ت", unlocked_settings)
        for _ in range(5):
            update = apply_answer(progress, "spontaneous", True, settings=unlocked_settings)
        assert update.newly_mastered
        assert update.unlocked is None

    def test_confusion_matrix(self, settings):
        progress = initialize_sound_progress("ta", "ت", settings)
        apply_answer(progress, "isolation", False, confused_with="ط", settings=settings)
        apply_answer(progress, "isolation", False, confused_with="ط", settings=settings)
        apply_answer(progress, "isolation", False, confused_with="د", settings=settings)
        apply_answer(progress, "isolation", False, settings=settings)

        assert progress.confusion_matrix == {"ط": 2, "د": 1}

    def test_overall_accuracy(self, unlocked_settings):
        progress = initialize_sound_progress("ta", "ت", unlocked_settings)
        apply_answer(progress, "isolation", True, settings=unlocked_settings)
        apply_answer(progress, "cv", True, settings=unlocked_settings)
        apply_answer(progress, "vc", False, settings=unlocked_settings)

        assert progress.overall_accuracy == 67
        assert calculate_overall_accuracy(progress) == 67


class TestPositions:
    """Test strong/weak position classification."""

    def test_classify(self, settings):
        samples = {
            SoundPosition.INITIAL: [True, True, True],
            SoundPosition.MEDIAL: [False, False, True],
            SoundPosition.FINAL: [False, False],
        }
        strong, weak = classify_positions(samples, settings)
        assert strong == [SoundPosition.INITIAL]
        assert weak == [SoundPosition.MEDIAL]

    def test_middle_band_is_neither(self, settings):
        samples = {SoundPosition.FINAL: [True, True, False, False]}
        assert classify_positions(samples, settings) == ([], [])

    def test_update_merges_strong_and_replaces_weak(self, settings):
        progress = initialize_sound_progress("ta", "ت", settings)
        update_positions(progress, {SoundPosition.FINAL: [True] * 3, SoundPosition.MEDIAL: [False] * 3}, settings)
        update_positions(progress, {SoundPosition.INITIAL: [True] * 3, SoundPosition.FINAL: [False] * 3}, settings)

        assert progress.strong_positions == [SoundPosition.INITIAL, SoundPosition.FINAL]
        assert progress.weak_positions == [SoundPosition.FINAL]

    def test_weak_kept_when_none_found(self, settings):
        progress = initialize_sound_progress("ta", "ت", settings)
        update_positions(progress, {SoundPosition.MEDIAL: [False] * 3}, settings)
        update_positions(progress, {SoundPosition.MEDIAL: [True] * 3}, settings)

        assert progress.weak_positions == [SoundPosition.MEDIAL]
        assert progress.strong_positions == [SoundPosition.MEDIAL]
