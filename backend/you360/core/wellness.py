"""
Wellness Scoring Engine.

Maps today's sleep, steps and glucose reading to a 0-100 score shown on the
dashboard. Pure and deterministic; recomputed on every input change.
"""

import math

from ..models.wellness import WellnessSample

BASE_SCORE = 55
MAX_STEP_BONUS = 20
STEPS_PER_POINT = 120
MAX_SLEEP_BONUS = 20
SLEEP_BASELINE_HOURS = 6
SLEEP_POINTS_PER_HOUR = 4
GLUCOSE_THRESHOLD = 120
GLUCOSE_PER_POINT = 5


def compute_score(sample: WellnessSample) -> int:
    """
    Compute the wellness score for a sample.

    Args:
        sample: Current sleep hours, step count and glucose reading

    Returns:
        int: Score clamped to [0, 100]
    """
    score = float(BASE_SCORE)
    score += min(sample.steps_today / STEPS_PER_POINT, MAX_STEP_BONUS)
    score += min(max(sample.sleep_hours - SLEEP_BASELINE_HOURS, 0) * SLEEP_POINTS_PER_HOUR, MAX_SLEEP_BONUS)
    score -= max(sample.glucose_reading - GLUCOSE_THRESHOLD, 0) / GLUCOSE_PER_POINT

    # Half-up rounding
    rounded = math.floor(score + 0.5)
    return max(0, min(100, rounded))
