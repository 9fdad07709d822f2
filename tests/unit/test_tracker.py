"""
Unit tests for the progress tracker.
"""

import json

import pytest
from nutq.core.phonetic import PhonemeTable
from nutq.core.tracker import ProgressTracker
from nutq.data import get_sound_by_id, load_sounds
from nutq.exceptions import StorageError
from nutq.exercises import generate_questions_for_level
from nutq.models import (
    AuditoryQuestion,
    MasteryStatus,
    NextAction,
    RecommendationType,
    SoundPosition,
    TrainingLevel,
)
from nutq.storage import MemoryStorage


class FailingStorage(MemoryStorage):
    """Storage whose writes always fail."""

    def __init__(self, error=None, **kwargs):
        super().__init__(**kwargs)
        self.error = error or StorageError("k", "disk full")

    def save(self, key, value):
        raise self.error


class UnreadableStorage(MemoryStorage):
    """Storage whose reads always fail."""

    def load(self, key):
        raise StorageError(key, "permission denied")


class TestRecordAnswer:
    """Test recording answers."""

    def test_first_answer_initializes_progress(self, tracker):
        tracker.record_answer("ba", "isolation", True)

        progress = tracker.get_sound_progress("ba")
        assert progress.letter == "ب"
        assert progress.levels[TrainingLevel.ISOLATION].questions_attempted == 1

    def test_five_correct_unlocks_next_level(self, tracker):
        for _ in range(5):
            update = tracker.record_answer("ta", "isolation", True)

        assert update.newly_mastered
        assert update.unlocked == TrainingLevel.CV
        assert tracker.get_sound_mastery_status("ta", "isolation") == MasteryStatus.MASTERED
        assert tracker.get_sound_mastery_status("ta", "cv") == MasteryStatus.AVAILABLE

    def test_confusion_recorded_when_similar(self, tracker):
        tracker.record_answer("ta", "isolation", False, selected_sound="ط")
        tracker.record_answer("ta", "isolation", False, selected_sound="ح")

        assert tracker.get_sound_progress("ta").confusion_matrix == {"ط": 1}

    def test_correct_answer_never_confused(self, tracker):
        tracker.record_answer("ta", "isolation", True, selected_sound="ط")
        assert tracker.get_sound_progress("ta").confusion_matrix == {}

    def test_unknown_sound_still_tracked(self, tracker):
        tracker.record_answer("nope", "isolation", True)
        assert tracker.get_sound_progress("nope").letter == ""

    def test_weak_position(self, tracker):
        for _ in range(3):
            tracker.record_answer("ta", "isolation", False, position="final")
        assert tracker.get_sound_progress("ta").weak_positions == [SoundPosition.FINAL]

    def test_custom_table_resolves_ids(self, storage, settings, rng):
        """Sound ids resolve through the tracker's own table."""
        custom = get_sound_by_id("ta").model_copy(update={"id": "ta-drill"})
        table = PhonemeTable([*load_sounds(), custom])
        tracker = ProgressTracker(storage=storage, settings=settings, rng=rng, table=table)

        for _ in range(3):
            tracker.record_answer("ta-drill", "isolation", False, selected_sound="ط")

        progress = tracker.get_sound_progress("ta-drill")
        assert progress.letter == "ت"
        assert progress.confusion_matrix == {"ط": 3}
        assert [r.type for r in tracker.get_recommendations()][0] == RecommendationType.REVIEW_ARTICULATION
        assert tracker.get_statistics().total_sounds == len(table)

    def test_sound_progress_is_read_only(self, tracker):
        tracker.record_answer("ta", "isolation", True)
        with pytest.raises(TypeError):
            tracker.sound_progress["ta"] = None


class TestAnswerQuestion:
    """Test the judge-then-record flow."""

    def test_confusion_flows_into_progress(self, tracker):
        question = AuditoryQuestion(
            id="q", target_sound="ت", level="isolation", prompt="?",
            options=["ت", "ط"], correct_answer=0, option_sounds=["ت", "ط"],
        )
        result = tracker.answer_question("ta", question, 1)

        assert result.next_action == NextAction.PRACTICE_SIMILAR
        progress = tracker.get_sound_progress("ta")
        assert progress.confusion_matrix == {"ط": 1}
        assert progress.levels[TrainingLevel.ISOLATION].questions_correct == 0

    def test_yes_no_answer_is_not_a_confusion(self, tracker, rng):
        """Answering "لا" is a plain mistake, not a confusion with ل."""
        questions = generate_questions_for_level("ra", "isolation", rng=rng)
        question = next(q for q in questions if q.id == "ra-isolation-2")
        no = question.options.index("لا")

        result = tracker.answer_question("ra", question, no)

        assert result.selected_sound is None
        assert not result.is_confusion_error
        assert result.next_action == NextAction.REVIEW
        assert tracker.get_sound_progress("ra").confusion_matrix == {}

    def test_count_answer_is_not_a_confusion(self, tracker, rng):
        """A count label such as "مرتان" does not stand for م."""
        questions = generate_questions_for_level("ba", "phrases", rng=rng)
        question = next(q for q in questions if q.id == "ba-phrase-count")
        assert all(sound is None for sound in question.option_sounds)
        wrong = next(i for i in range(len(question.options)) if i != question.correct_answer)

        result = tracker.answer_question("ba", question, wrong)

        assert not result.is_correct
        assert not result.is_confusion_error
        assert result.next_action == NextAction.REPEAT
        assert tracker.get_sound_progress("ba").confusion_matrix == {}

    def test_evaluate_does_not_record(self, tracker):
        result = tracker.evaluate_answer("ت", 0, 0, ["ت", "ط"], "isolation")
        assert result.is_correct
        assert tracker.get_sound_progress("ta") is None


class TestMasteryStatus:
    """Test status of untracked sounds."""

    def test_untracked_defaults(self, tracker):
        assert tracker.get_sound_mastery_status("ta", "isolation") == MasteryStatus.AVAILABLE
        assert tracker.get_sound_mastery_status("ta", "cv") == MasteryStatus.LOCKED

    def test_untracked_unlocked(self, storage, unlocked_settings, rng):
        tracker = ProgressTracker(storage=storage, settings=unlocked_settings, rng=rng)
        assert tracker.get_sound_mastery_status("ta", "spontaneous") == MasteryStatus.AVAILABLE


class TestPersistence:
    """Test load and save through the storage backend."""

    def test_saved_after_every_answer(self, tracker, storage, settings):
        tracker.record_answer("ta", "isolation", True)

        data = json.loads(storage.load(settings.storage_key))
        assert data["ta"]["levels"]["isolation"]["questions_attempted"] == 1

    def test_reload(self, tracker, storage, settings, rng):
        tracker.record_answer("ta", "cv", True, selected_sound=None)
        tracker.record_answer("ta", "isolation", False, selected_sound="ط")

        restored = ProgressTracker(storage=storage, settings=settings, rng=rng)
        assert restored.get_sound_progress("ta") == tracker.get_sound_progress("ta")

    @pytest.mark.parametrize("blob", ["not json", "[]", '{"ta": {"sound_id": "ta"}}'])
    def test_corrupted_state_is_discarded(self, settings, rng, blob):
        storage = MemoryStorage({settings.storage_key: blob})
        tracker = ProgressTracker(storage=storage, settings=settings, rng=rng)
        assert dict(tracker.sound_progress) == {}

    def test_unreadable_storage(self, settings, rng):
        tracker = ProgressTracker(storage=UnreadableStorage(), settings=settings, rng=rng)
        assert dict(tracker.sound_progress) == {}

    def test_failed_save_keeps_state(self, settings, rng):
        tracker = ProgressTracker(storage=FailingStorage(), settings=settings, rng=rng)
        tracker.record_answer("ta", "isolation", True)

        assert tracker.save() is False
        assert tracker.get_sound_progress("ta").levels[TrainingLevel.ISOLATION].questions_attempted == 1

    def test_unexpected_save_error(self, settings, rng):
        tracker = ProgressTracker(storage=FailingStorage(error=RuntimeError("boom")), settings=settings, rng=rng)
        assert tracker.save() is False

    def test_other_keys_untouched(self, settings, rng):
        storage = MemoryStorage({"nutq-sound-progress-v0": "old format"})
        tracker = ProgressTracker(storage=storage, settings=settings, rng=rng)
        tracker.record_answer("ta", "isolation", True)
        assert storage.load("nutq-sound-progress-v0") == "old format"


class TestReset:
    """Test resetting progress."""

    def test_reset_sound(self, tracker):
        tracker.record_answer("ta", "isolation", True)
        tracker.record_answer("ba", "isolation", True)
        tracker.reset_sound_progress("ta")

        assert tracker.get_sound_progress("ta") is None
        assert tracker.get_sound_progress("ba") is not None

    def test_reset_all_returns_to_defaults(self, tracker, storage, settings, rng):
        for _ in range(5):
            tracker.record_answer("ta", "isolation", True)
        tracker.reset_all_progress()

        assert tracker.get_sound_mastery_status("ta", "isolation") == MasteryStatus.AVAILABLE
        assert tracker.get_sound_mastery_status("ta", "cv") == MasteryStatus.LOCKED
        assert ProgressTracker(storage=storage, settings=settings, rng=rng).sound_progress == {}


class TestNextExercise:
    """Test where the learner should practise next."""

    def test_untracked(self, tracker):
        assert tracker.get_next_exercise("ta").level == TrainingLevel.ISOLATION

    def test_after_mastery(self, tracker):
        for _ in range(5):
            tracker.record_answer("ta", "isolation", True)
        # current level moved to cv, which is not mastered yet
        assert tracker.get_next_exercise("ta").level == TrainingLevel.CV

    def test_weak_position_at_word_levels(self, storage, unlocked_settings, rng):
        tracker = ProgressTracker(storage=storage, settings=unlocked_settings, rng=rng)
        tracker.record_answer("ta", "real_words", True)
        tracker.get_sound_progress("ta").current_level = TrainingLevel.REAL_WORDS
        for _ in range(3):
            tracker.record_answer("ta", "real_words", False, position="medial")

        exercise = tracker.get_next_exercise("ta")
        assert exercise.level == TrainingLevel.REAL_WORDS
        assert exercise.position == SoundPosition.MEDIAL
