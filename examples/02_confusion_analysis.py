"""
Confusion Analysis Example

This example shows how the judge tells sound confusions apart from plain
mistakes, and how a batch of wrong answers is turned into error patterns
and a follow-up suggestion.
"""

from nutq import analyze_error_patterns, judge, similarity, suggest_next_exercise
from nutq.models import AnswerRecord, RecentResult


PAIRS = [
    ("ت", "ط"),  # same makhraj, emphatic counterpart
    ("ب", "ف"),  # voiced / voiceless
    ("ز", "ث"),  # same makhraj only
    ("ح", "خ"),  # listed as similar, nothing shared
    ("ب", "ك"),  # unrelated
]


def main():
    print("Similarity and judge decisions")
    print("=" * 60)
    for target, selected in PAIRS:
        result = judge(target, 1, 0, [target, selected], "isolation")
        kind = result.confusion_type.value if result.confusion_type else "-"
        print(f"{target} / {selected}: score={similarity(target, selected):.1f} "
              f"confusion={result.is_confusion_error} type={kind} "
              f"next={result.next_action.value}")

    errors = [
        AnswerRecord(target_sound="ت", selected_sound="ط", position="medial", level="real_words"),
        AnswerRecord(target_sound="ت", selected_sound="ط", position="medial", level="real_words"),
        AnswerRecord(target_sound="ت", selected_sound="د", position="medial", level="real_words"),
    ]

    print("\nError patterns")
    print("=" * 60)
    for pattern in analyze_error_patterns(errors):
        print(f"[{pattern.type}] x{pattern.frequency}: {pattern.description}")
        print(f"    {pattern.recommendation}")

    recent = [RecentResult(is_correct=ok, level="real_words") for ok in (True, True, False, True)]
    suggestion = suggest_next_exercise("ت", recent, {"ط": 2, "د": 1})
    print(f"\nSuggested next: {suggestion.sound_id} at {suggestion.level.value} "
          f"({suggestion.priority}) - {suggestion.reason}")


if __name__ == "__main__":
    main()
