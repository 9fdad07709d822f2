"""
Basic Usage Example for Nutq

This example demonstrates the simplest way to use Nutq:
1. Generate a listening exercise for one sound
2. Answer its questions through a progress tracker
3. Inspect the judge's feedback
4. Read the learner's mastery status
"""

import random

from nutq import ProgressTracker, generate_exercise


def main():
    sound_id = "ta"
    rng = random.Random(1)

    print(f"Training sound {sound_id}...\n")

    # Step 1: Build an isolation exercise
    print("Step 1: Generating exercise...")
    exercise = generate_exercise(sound_id, "isolation", question_count=3, rng=rng)
    print(f"  {exercise.title} ({exercise.estimated_duration})\n")

    # Step 2: Answer every question, picking the first option each time
    print("Step 2: Answering questions...")
    tracker = ProgressTracker(rng=rng)
    for question in exercise.questions:
        result = tracker.answer_question(sound_id, question, selected_answer=0)

        print(f"  {question.prompt}")
        print(f"    chose: {question.options[0]}  ->  {result}")
        print(f"    {result.feedback}")
        if result.suggestion:
            print(f"    {result.suggestion}")

    # Step 3: Mastery status
    print("\n" + "=" * 60)
    print("Progress:")
    print("=" * 60)
    progress = tracker.get_sound_progress(sound_id)
    isolation = progress.levels["isolation"]
    print(f"Isolation: {isolation.questions_correct}/{isolation.questions_attempted} "
          f"({isolation.accuracy}%) - {isolation.status.value}")
    print(f"Next: {tracker.get_next_exercise(sound_id).level.value}")


if __name__ == "__main__":
    main()
