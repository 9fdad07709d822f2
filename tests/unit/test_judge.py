"""
Unit tests for the answer judge and batch analyses.
"""

import random

import pytest
from nutq.core.judge import (
    CONFUSION_MESSAGE,
    POSITIVE_MESSAGES,
    WRONG_MESSAGE,
    analyze_error_patterns,
    judge,
    judge_question,
    suggest_next_exercise,
)
from nutq.models import (
    AuditoryQuestion,
    ConfusionType,
    NextAction,
    RecentResult,
    SoundPosition,
    TrainingLevel,
)


class TestJudgeCorrect:
    """Test judging correct answers."""

    def test_correct_answer(self, settings, rng):
        result = judge("ت", 0, 0, ["ت", "ط"], "isolation", settings=settings, rng=rng)

        assert result.is_correct
        assert not result.is_confusion_error
        assert result.selected_option is None
        assert result.similarity_score == 0.0
        assert result.next_action == NextAction.CONTINUE
        assert not result.should_repeat
        assert result.feedback in POSITIVE_MESSAGES

    def test_isolation_tip(self, settings, rng):
        """Correct isolation answers remind the learner of the makhraj."""
        result = judge("ت", 0, 0, ["ت", "ط"], "isolation", settings=settings, rng=rng)
        assert result.suggestion.startswith("تذكر")

    def test_no_tip_beyond_isolation(self, settings, rng):
        result = judge("ت", 0, 0, ["تين", "طين"], "real_words", settings=settings, rng=rng)
        assert result.suggestion is None

    def test_position_not_reported_when_correct(self, settings, rng):
        result = judge("ت", 0, 0, ["تين", "طين"], "real_words", "medial", settings=settings, rng=rng)
        assert result.position_struggle is None

    def test_message_is_deterministic_with_seed(self, settings):
        first = judge("ت", 0, 0, ["ت"], "cv", settings=settings, rng=random.Random(3))
        second = judge("ت", 0, 0, ["ت"], "cv", settings=settings, rng=random.Random(3))
        assert first.feedback == second.feedback


class TestJudgeConfusion:
    """Test confusion classification of wrong answers."""

    def test_ta_tta_confusion(self, settings, rng):
        result = judge("ت", 1, 0, ["ت", "ط", "م"], "isolation", settings=settings, rng=rng)

        assert not result.is_correct
        assert result.selected_option == "ط"
        assert result.selected_sound == "ط"
        assert result.is_confusion_error
        assert result.confused_with == "ط"
        assert result.confusion_type == ConfusionType.ARTICULATION
        assert result.similarity_score == 0.9
        assert result.next_action == NextAction.PRACTICE_SIMILAR
        assert result.should_repeat
        assert result.feedback == CONFUSION_MESSAGE
        assert "ط" in result.detailed_feedback.explanation

    def test_confusion_below_remedial_threshold_early_level(self, settings, rng):
        """A 0.4 confusion at an early level sends the learner to review."""
        result = judge("ز", 1, 0, ["ز", "ث"], "isolation", settings=settings, rng=rng)

        assert result.is_confusion_error
        assert result.similarity_score == 0.4
        assert result.next_action == NextAction.REVIEW
        assert result.should_repeat

    def test_confusion_below_remedial_threshold_late_level(self, settings, rng):
        result = judge("ز", 1, 0, ["زر", "ثر"], "real_words", settings=settings, rng=rng,
                       option_sounds=["ز", "ث"])

        assert result.is_confusion_error
        assert result.next_action == NextAction.REPEAT
        assert not result.should_repeat

    def test_remedial_threshold_from_settings(self, settings, rng):
        strict = settings.model_copy(update={"remedial_threshold": 0.95})
        result = judge("ت", 1, 0, ["ت", "ط"], "isolation", settings=strict, rng=rng)
        assert result.is_confusion_error
        assert result.next_action == NextAction.REVIEW

    @pytest.mark.parametrize("target,selected,expected", [
        ("ب", "ف", ConfusionType.VOICING),
        ("د", "ض", ConfusionType.EMPHASIS),
    ])
    def test_confusion_types(self, settings, rng, target, selected, expected):
        result = judge(target, 1, 0, [target, selected], "cv", settings=settings, rng=rng)
        assert result.confusion_type == expected
        assert result.next_action == NextAction.PRACTICE_SIMILAR

    def test_voicing_tip_names_both_sounds(self, settings, rng):
        result = judge("ب", 1, 0, ["ب", "ف"], "cv", settings=settings, rng=rng)
        assert "مجهور" in result.suggestion
        assert "مهموس" in result.suggestion

    def test_other_confusion_compares_articulation(self, settings, rng):
        """With a lower cutoff ح/خ is a confusion of type other."""
        loose = settings.model_copy(update={"confusion_threshold": 0.2})
        result = judge("ح", 1, 0, ["ح", "خ"], "isolation", settings=loose, rng=rng)

        assert result.confusion_type == ConfusionType.OTHER
        assert "مخرج ح" in result.suggestion
        assert "مخرج خ" in result.suggestion
        assert result.next_action == NextAction.REVIEW


class TestJudgeWrong:
    """Test plain wrong answers."""

    def test_hha_kha_is_not_a_confusion(self, settings, rng):
        result = judge("ح", 1, 0, ["ح", "خ"], "isolation", settings=settings, rng=rng)

        assert not result.is_correct
        assert result.selected_sound == "خ"
        assert result.similarity_score == 0.2
        assert not result.is_confusion_error
        assert result.confused_with is None
        assert result.confusion_type is None
        assert result.feedback == WRONG_MESSAGE
        assert result.next_action == NextAction.REVIEW

    def test_wrong_at_late_level_repeats(self, settings, rng):
        result = judge("ب", 1, 0, ["باب", "كتاب"], "sentences", settings=settings, rng=rng,
                       option_sounds=["ب", "ك"])
        assert result.next_action == NextAction.REPEAT
        assert not result.should_repeat

    def test_position_struggle(self, settings, rng):
        result = judge("ت", 1, 0, ["تين", "بين"], "real_words", "medial", settings=settings, rng=rng)
        assert result.position_struggle == SoundPosition.MEDIAL

    def test_unknown_target_degrades(self, settings, rng):
        """Unknown letters get generic feedback instead of an error."""
        result = judge("x", 1, 0, ["x", "ب"], "isolation", settings=settings, rng=rng)

        assert not result.is_correct
        assert result.similarity_score == 0.0
        assert not result.is_confusion_error
        assert result.feedback == WRONG_MESSAGE
        assert result.suggestion is None

    def test_option_without_letters(self, settings, rng):
        result = judge("ت", 1, 0, ["ت", "123"], "isolation", settings=settings, rng=rng)
        assert result.selected_sound is None
        assert not result.is_confusion_error
        assert result.feedback == WRONG_MESSAGE

    def test_option_sounds_override_scan(self, settings, rng):
        """The explicit phoneme is used even when the text suggests another."""
        result = judge("ت", 1, 0, ["تين", "طين"], "real_words", settings=settings, rng=rng,
                       option_sounds=["ت", "ب"])
        assert result.selected_sound == "ب"
        assert not result.is_confusion_error


class TestJudgeQuestion:
    """Test judging a generated question."""

    def test_uses_question_fields(self, settings, rng):
        question = AuditoryQuestion(
            id="q", target_sound="س", level="real_words", sound_position="initial",
            prompt="?", options=["سيف", "صيف"], correct_answer=0, option_sounds=["س", "ص"],
        )
        result = judge_question(question, 1, rng=rng, settings=settings)

        assert result.confused_with == "ص"
        assert result.position_struggle == SoundPosition.INITIAL
        assert result.next_action == NextAction.PRACTICE_SIMILAR


class TestAnalyzeErrorPatterns:
    """Test error pattern detection."""

    def test_patterns(self, sample_errors):
        patterns = analyze_error_patterns(sample_errors)

        assert [p.type for p in patterns] == ["confusion", "position"]
        assert patterns[0].frequency == 3
        assert "ت" in patterns[0].description and "ط" in patterns[0].description
        assert patterns[1].frequency == 3

    def test_single_confusions_ignored(self, sample_errors):
        patterns = analyze_error_patterns(sample_errors[3:])
        assert patterns == []

    def test_empty(self):
        assert analyze_error_patterns([]) == []


def _results(level, outcomes, position=None):
    return [RecentResult(is_correct=ok, level=level, position=position) for ok in outcomes]


class TestSuggestNextExercise:
    """Test the next-exercise suggestion rules."""

    def test_unknown_sound(self, settings):
        suggestion = suggest_next_exercise("x", [], {}, settings)
        assert suggestion.sound_id == "hamza"
        assert suggestion.level == TrainingLevel.ISOLATION
        assert suggestion.priority == "medium"

    def test_low_accuracy_restarts(self, settings):
        results = _results("cv", [True, False, False, False, False])
        suggestion = suggest_next_exercise("ت", results, {}, settings)
        assert suggestion.level == TrainingLevel.ISOLATION
        assert suggestion.priority == "high"

    def test_repeated_confusion(self, settings):
        results = _results("cv", [True] * 5)
        suggestion = suggest_next_exercise("ت", results, {"ط": 2, "د": 1}, settings)
        assert suggestion.sound_id == "ta"
        assert suggestion.level == TrainingLevel.ISOLATION
        assert suggestion.priority == "high"
        assert "ط" in suggestion.reason

    def test_weak_position(self, settings):
        results = _results("real_words", [True] * 3) + _results("real_words", [False] * 2, "medial")
        suggestion = suggest_next_exercise("ت", results, {}, settings)
        assert suggestion.level == TrainingLevel.REAL_WORDS
        assert suggestion.position == SoundPosition.MEDIAL
        assert suggestion.priority == "medium"

    def test_advance(self, settings):
        suggestion = suggest_next_exercise("ت", _results("cv", [True] * 5), {}, settings)
        assert suggestion.level == TrainingLevel.VC
        assert suggestion.priority == "low"
        assert "ممتاز" in suggestion.reason

    @pytest.mark.parametrize("last_level", ["sentences", "story_telling", "spontaneous"])
    def test_capped_at_sentences(self, settings, last_level):
        suggestion = suggest_next_exercise("ت", _results(last_level, [True] * 5), {}, settings)
        assert suggestion.level == TrainingLevel.SENTENCES
