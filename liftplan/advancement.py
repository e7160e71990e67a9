"""
Liftplan: Training Advancement

Determines a lifter's training level from, in order of confidence:
1. Strength percentiles from workout history (high)
2. Self-reported training years (medium)
3. Default to beginner (low, the safest assumption)

The level then selects the fatigue-management rules in programming.py.
"""
import logging

from liftplan.config import LBS, MIN_PERCENTILE_SAMPLES, PERCENTILE_WINDOW
from liftplan.history import workouts_to_sets_dataframe
from liftplan.strength import convert_weight, has_strength_standard, percentile_for

logger = logging.getLogger(__name__)

LEVELS = ("beginner", "intermediate", "advanced")


def percentile_to_advancement(percentile: float) -> str:
    """
    <40th: still building foundational strength
    40-70th: significant strength, needs structured programming
    >=70th: high absolute loads, recovery is the limiting factor
    """
    if percentile < 40:
        return "beginner"
    if percentile < 70:
        return "intermediate"
    return "advanced"


def years_to_advancement(years: float) -> str:
    if years < 1:
        return "beginner"
    if years < 3:
        return "intermediate"
    return "advanced"


def _body_weight(user_profile: dict | None) -> tuple[float, str]:
    weight = (user_profile or {}).get("weight") or {}
    value = weight.get("value") if isinstance(weight, dict) else weight
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
        return 0.0, LBS
    unit = weight.get("unit", LBS) if isinstance(weight, dict) else LBS
    return float(value), unit


def calculate_percentiles(workout_history: list[dict], user_profile: dict) -> list[float]:
    """
    One percentile sample per logged exercise (with a published standard)
    in the most recent PERCENTILE_WINDOW workouts.

    Samples use the heaviest completed set by raw weight: the standards are
    keyed by weight moved, not by estimated max.
    """
    gender = user_profile.get("gender") or "male"
    body_weight, bw_unit = _body_weight(user_profile)
    recent = list(workout_history)[-PERCENTILE_WINDOW:]

    df = workouts_to_sets_dataframe(recent)
    if df.empty:
        return []
    df = df[df["completed"] & (df["weight"] > 0)]
    df = df[df["exercise_id"].map(lambda ex_id: has_strength_standard(ex_id, gender))]
    if df.empty:
        return []

    best = df.loc[df.groupby("entry", sort=False)["weight"].idxmax()]
    percentiles = []
    for _, row in best.iterrows():
        weight = convert_weight(row["weight"], row["unit"], bw_unit)
        percentiles.append(percentile_for(weight, body_weight, gender, row["exercise_id"]))
    return percentiles


def determine_training_advancement(
    workout_history: list[dict],
    user_profile: dict | None,
) -> dict:
    """Training level with its source and confidence. Never cached."""
    workout_history = workout_history or []
    body_weight, _ = _body_weight(user_profile)

    # 1. Percentile-based (actual performance data)
    if body_weight > 0 and workout_history:
        percentiles = calculate_percentiles(workout_history, user_profile)
        if len(percentiles) >= MIN_PERCENTILE_SAMPLES:
            avg = sum(percentiles) / len(percentiles)
            return {
                "level": percentile_to_advancement(avg),
                "source": "percentile",
                "confidence": "high",
                "percentile": round(avg),
            }
        logger.debug("Only %d percentile samples, falling back", len(percentiles))

    # 2. Self-reported training years
    years = (user_profile or {}).get("training_years")
    if isinstance(years, (int, float)) and not isinstance(years, bool):
        return {
            "level": years_to_advancement(years),
            "source": "training_years",
            "confidence": "medium",
            "training_years": years,
        }

    # 3. Default
    return {"level": "beginner", "source": "default", "confidence": "low"}
