"""
Advanced Configuration Example

This example demonstrates advanced usage:
- Custom configuration settings
- Persisting progress to JSON files
- Recommendations and statistics
- A similar-sounds review exercise
"""

import logging
import random

from nutq import JsonFileStorage, ProgressTracker, configure, generate_similar_sounds_review


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("Advanced Nutq Configuration Example")
    print("=" * 60)

    # Step 1: Configure global settings
    print("\nStep 1: Configuring Nutq...")
    settings = configure(
        mastery_threshold=75,
        min_questions_for_mastery=4,
        storage_dir="./.nutq-example",
        random_seed=11,
    )
    print(f"  Mastery: {settings.mastery_threshold}% over {settings.min_questions_for_mastery} answers")

    # Step 2: A tracker that survives restarts
    print("\nStep 2: Recording answers...")
    tracker = ProgressTracker(storage=JsonFileStorage(), settings=settings)
    rng = random.Random(settings.random_seed)
    for _ in range(12):
        correct = rng.random() < 0.6
        tracker.record_answer("sad", "isolation", correct, selected_sound=None if correct else "س")
    for _ in range(4):
        tracker.record_answer("ta", "isolation", True)

    # Step 3: Recommendations
    print("\nStep 3: Recommendations")
    for recommendation in tracker.get_recommendations():
        print(f"  [{recommendation.priority}] {recommendation.type.value}: {recommendation.message}")

    # Step 4: Statistics
    stats = tracker.get_statistics()
    print("\nStep 4: Statistics")
    print(f"  Average accuracy: {stats.average_accuracy}%")
    print(f"  Most confused: {stats.most_confused_pairs}")
    print(f"  Current focus: {stats.current_focus}")

    # Step 5: Review the most confused pair
    if stats.most_confused_pairs:
        first, second = stats.most_confused_pairs[0]
        review = generate_similar_sounds_review(first, second, rng=rng)
        print(f"\nStep 5: {review.title} - {len(review.questions)} questions")


if __name__ == "__main__":
    main()
