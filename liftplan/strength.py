"""
Liftplan: Strength Estimator and population strength standards

Standards are bodyweight multipliers at the 10th/25th/50th/75th/90th
percentile of drug-tested, unequipped lifters (van den Hoek et al. 2024
for squat/bench/deadlift, estimated for the rest).
"""
from liftplan.config import KG_PER_LB, LBS, KG, MAX_ESTIMATE_REPS, get_strength_standard_key


# ═════════════════════════════════════════════════════════════════════
# 1. ONE-REP MAX ESTIMATION
# ═════════════════════════════════════════════════════════════════════

# %1RM conventionally used for a rep target
REP_PERCENTAGES = {
    1: 100,
    2: 95,
    3: 93,
    4: 90,
    5: 87,
    6: 85,
    7: 83,
    8: 80,
    9: 77,
    10: 75,
    11: 73,
    12: 70,
}
HIGH_REP_PERCENTAGE = 70


def epley(weight: float, reps: int) -> float:
    return weight * (1 + reps / 30)


def brzycki(weight: float, reps: int) -> float:
    return weight * (36 / (37 - reps))


def lombardi(weight: float, reps: int) -> float:
    return weight * reps ** 0.1


def estimate_1rm(weight: float, reps: int) -> float:
    """
    Estimated one-rep max: mean of Epley, Brzycki and Lombardi.

    Zero reps or zero weight estimate to 0. Reps beyond MAX_ESTIMATE_REPS
    are capped so the estimate never drops as reps climb.
    """
    weight = float(weight or 0)
    reps = int(reps or 0)
    if weight <= 0 or reps <= 0:
        return 0.0
    if reps == 1:
        return round(weight, 1)
    reps = min(reps, MAX_ESTIMATE_REPS)
    mean = (epley(weight, reps) + brzycki(weight, reps) + lombardi(weight, reps)) / 3
    return round(mean, 1)


def percentage_for_reps(reps: int) -> float:
    """%1RM for a rep target, in (0, 100]. Fewer reps means a higher %."""
    reps = int(reps or 0)
    if reps < 1:
        return 100.0
    return float(REP_PERCENTAGES.get(reps, HIGH_REP_PERCENTAGE))


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return value
    if from_unit == LBS and to_unit == KG:
        return round(value * KG_PER_LB, 1)
    if from_unit == KG and to_unit == LBS:
        return round(value / KG_PER_LB, 1)
    return value


# ═════════════════════════════════════════════════════════════════════
# 2. STRENGTH STANDARDS (bodyweight ratios)
# ═════════════════════════════════════════════════════════════════════

MALE_STANDARDS = {
    "squat": {"beginner": 0.75, "intermediate": 1.25, "advanced": 1.5, "elite": 2.2, "god": 2.8},
    "bench-press": {"beginner": 0.671, "intermediate": 0.75, "advanced": 1.201, "elite": 1.532, "god": 2.169},
    "deadlift": {"beginner": 1.069, "intermediate": 1.415, "advanced": 1.832, "elite": 2.504, "god": 3.227},
    "overhead-press": {"beginner": 0.414, "intermediate": 0.58, "advanced": 0.783, "elite": 1.018, "god": 1.463},
    "dumbbell-bench-press": {"beginner": 0.225, "intermediate": 0.348, "advanced": 0.507, "elite": 0.695, "god": 0.904},
    "dumbbell-curl": {"beginner": 0.091, "intermediate": 0.175, "advanced": 0.292, "elite": 0.439, "god": 0.699},
    "barbell-curl": {"beginner": 0.108, "intermediate": 0.213, "advanced": 0.362, "elite": 0.55, "god": 0.884},
    "leg-press": {"beginner": 1.0, "intermediate": 1.75, "advanced": 2.75, "elite": 4.0, "god": 5.25},
    "barbell-row": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 1.75},
    "incline-bench-press": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 1.75},
    "lat-pulldown": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 1.75},
    "leg-extension": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.25, "elite": 1.75, "god": 2.5},
    "romanian-deadlift": {"beginner": 0.75, "intermediate": 1.0, "advanced": 1.5, "elite": 2.0, "god": 2.75},
    "incline-dumbbell-chest-press": {"beginner": 0.25, "intermediate": 0.35, "advanced": 0.5, "elite": 0.65, "god": 0.85},
    "dumbbell-shoulder-press": {"beginner": 0.15, "intermediate": 0.25, "advanced": 0.4, "elite": 0.6, "god": 0.75},
    "front-squat": {"beginner": 0.75, "intermediate": 1.0, "advanced": 1.25, "elite": 1.75, "god": 2.25},
    "barbell-hip-thrust": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.75, "elite": 2.5, "god": 3.5},
    "lateral-raise": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.2, "elite": 0.3, "god": 0.45},
    "seated-cable-row": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 2.0},
    "hack-squat": {"beginner": 0.75, "intermediate": 1.25, "advanced": 2.0, "elite": 2.75, "god": 4.0},
    "preacher-curl": {"beginner": 0.2, "intermediate": 0.35, "advanced": 0.6, "elite": 0.85, "god": 1.1},
    "machine-shoulder-press": {"beginner": 0.25, "intermediate": 0.5, "advanced": 1.0, "elite": 1.5, "god": 2.0},
    # Keyed directly by exercise id
    "tricep-pushdown-cables": {"beginner": 0.25, "intermediate": 0.5, "advanced": 0.75, "elite": 1.0, "god": 1.5},
    "hammer-curl-dumbbells": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.3, "elite": 0.45, "god": 0.6},
    "bicep-curl-cables": {"beginner": 0.15, "intermediate": 0.35, "advanced": 0.65, "elite": 1.05, "god": 1.5},
    "row-dumbbells": {"beginner": 0.2, "intermediate": 0.35, "advanced": 0.55, "elite": 0.8, "god": 1.05},
    "seated-row-machine": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 2.0},
    "leg-curl-machine": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 2.0},
    "calf-raise-machine": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.75, "elite": 2.75, "god": 4.0},
    "chest-fly-cables": {"beginner": 0.05, "intermediate": 0.25, "advanced": 0.5, "elite": 0.85, "god": 1.35},
    "flyes-dumbbells": {"beginner": 0.1, "intermediate": 0.15, "advanced": 0.3, "elite": 0.5, "god": 0.7},
    "sumo-deadlift-barbell": {"beginner": 1.25, "intermediate": 1.5, "advanced": 2.25, "elite": 2.75, "god": 3.5},
    "bench-press-machine": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.25, "elite": 1.75, "god": 2.25},
    "bench-press-smith-machine": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.25, "elite": 1.75, "god": 2.25},
    "squat-smith-machine": {"beginner": 0.75, "intermediate": 1.0, "advanced": 1.5, "elite": 2.25, "god": 3.0},
    "tricep-extension-dumbbells": {"beginner": 0.15, "intermediate": 0.35, "advanced": 0.65, "elite": 1.0, "god": 1.4},
    "walking-lunge-dumbbells": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.4, "elite": 0.6, "god": 0.85},
    "lunges-barbell": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 2.0},
    "romanian-deadlift-dumbbells": {"beginner": 0.15, "intermediate": 0.3, "advanced": 0.55, "elite": 0.8, "god": 1.1},
    "goblet-squat-dumbbells": {"beginner": 0.2, "intermediate": 0.35, "advanced": 0.55, "elite": 0.85, "god": 1.15},
    "goblet-squat-kettlebell": {"beginner": 0.2, "intermediate": 0.35, "advanced": 0.55, "elite": 0.85, "god": 1.15},
    "bulgarian-split-squat-dumbbells": {"beginner": 0.25, "intermediate": 0.5, "advanced": 0.75, "elite": 1.25, "god": 1.75},
    "rear-delt-fly-dumbbells": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.25, "elite": 0.4, "god": 0.6},
    "rear-delt-fly-cables": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.25, "elite": 0.4, "god": 0.6},
    "arnold-press-dumbbells": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.3, "elite": 0.45, "god": 0.65},
    "lateral-raise-cables": {"beginner": 0.0, "intermediate": 0.1, "advanced": 0.25, "elite": 0.45, "god": 0.75},
    "skull-crushers-dumbbells": {"beginner": 0.2, "intermediate": 0.35, "advanced": 0.55, "elite": 0.8, "god": 1.1},
    "overhead-tricep-extension-cables": {"beginner": 0.15, "intermediate": 0.35, "advanced": 0.65, "elite": 1.0, "god": 1.4},
    "crossover-cables": {"beginner": 0.05, "intermediate": 0.25, "advanced": 0.5, "elite": 0.85, "god": 1.35},
    "chest-fly-machine": {"beginner": 0.25, "intermediate": 0.5, "advanced": 0.85, "elite": 1.25, "god": 1.75},
    "hip-thrust-machine": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.75, "elite": 2.5, "god": 3.5},
}

FEMALE_STANDARDS = {
    "squat": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.25, "elite": 1.5, "god": 2.0},
    "bench-press": {"beginner": 0.25, "intermediate": 0.5, "advanced": 0.8, "elite": 1.0, "god": 1.5},
    "deadlift": {"beginner": 0.594, "intermediate": 0.887, "advanced": 1.261, "elite": 1.698, "god": 2.504},
    "overhead-press": {"beginner": 0.204, "intermediate": 0.328, "advanced": 0.49, "elite": 0.686, "god": 1.04},
    "dumbbell-bench-press": {"beginner": 0.095, "intermediate": 0.183, "advanced": 0.305, "elite": 0.461, "god": 0.641},
    "dumbbell-curl": {"beginner": 0.058, "intermediate": 0.116, "advanced": 0.2, "elite": 0.306, "god": 0.494},
    "barbell-curl": {"beginner": 0.108, "intermediate": 0.213, "advanced": 0.362, "elite": 0.55, "god": 0.884},
    "leg-press": {"beginner": 0.5, "intermediate": 1.25, "advanced": 2.0, "elite": 3.25, "god": 4.5},
    "barbell-row": {"beginner": 0.25, "intermediate": 0.4, "advanced": 0.65, "elite": 0.9, "god": 1.2},
    "incline-bench-press": {"beginner": 0.2, "intermediate": 0.4, "advanced": 0.65, "elite": 1.0, "god": 1.4},
    "lat-pulldown": {"beginner": 0.3, "intermediate": 0.45, "advanced": 0.7, "elite": 0.95, "god": 1.3},
    "leg-extension": {"beginner": 0.25, "intermediate": 0.5, "advanced": 1.0, "elite": 1.25, "god": 2.0},
    "romanian-deadlift": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 1.75},
    "incline-dumbbell-chest-press": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.3, "elite": 0.45, "god": 0.6},
    "dumbbell-shoulder-press": {"beginner": 0.1, "intermediate": 0.15, "advanced": 0.25, "elite": 0.35, "god": 0.5},
    "front-squat": {"beginner": 0.5, "intermediate": 0.75, "advanced": 1.0, "elite": 1.25, "god": 1.5},
    "barbell-hip-thrust": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.5, "elite": 2.25, "god": 3.0},
    "lateral-raise": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.15, "elite": 0.2, "god": 0.3},
    "seated-cable-row": {"beginner": 0.3, "intermediate": 0.5, "advanced": 0.75, "elite": 1.0, "god": 1.35},
    "hack-squat": {"beginner": 0.25, "intermediate": 0.75, "advanced": 1.5, "elite": 2.25, "god": 3.25},
    "preacher-curl": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.4, "elite": 0.6, "god": 0.85},
    "machine-shoulder-press": {"beginner": 0.1, "intermediate": 0.25, "advanced": 0.5, "elite": 0.85, "god": 1.2},
    # Keyed directly by exercise id
    "tricep-pushdown-cables": {"beginner": 0.15, "intermediate": 0.25, "advanced": 0.5, "elite": 0.75, "god": 1.05},
    "hammer-curl-dumbbells": {"beginner": 0.05, "intermediate": 0.15, "advanced": 0.2, "elite": 0.3, "god": 0.4},
    "bicep-curl-cables": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.4, "elite": 0.7, "god": 1.0},
    "row-dumbbells": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.35, "elite": 0.5, "god": 0.65},
    "seated-row-machine": {"beginner": 0.3, "intermediate": 0.5, "advanced": 0.75, "elite": 1.0, "god": 1.35},
    "leg-curl-machine": {"beginner": 0.25, "intermediate": 0.45, "advanced": 0.75, "elite": 1.05, "god": 1.45},
    "calf-raise-machine": {"beginner": 0.25, "intermediate": 0.75, "advanced": 1.25, "elite": 2.25, "god": 3.25},
    "chest-fly-cables": {"beginner": 0.05, "intermediate": 0.15, "advanced": 0.3, "elite": 0.55, "god": 0.8},
    "flyes-dumbbells": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.2, "elite": 0.3, "god": 0.45},
    "sumo-deadlift-barbell": {"beginner": 0.75, "intermediate": 1.0, "advanced": 1.5, "elite": 2.0, "god": 2.5},
    "bench-press-machine": {"beginner": 0.15, "intermediate": 0.3, "advanced": 0.55, "elite": 0.9, "god": 1.25},
    "bench-press-smith-machine": {"beginner": 0.25, "intermediate": 0.5, "advanced": 0.75, "elite": 1.25, "god": 1.5},
    "squat-smith-machine": {"beginner": 0.25, "intermediate": 0.75, "advanced": 1.0, "elite": 1.5, "god": 2.25},
    "tricep-extension-dumbbells": {"beginner": 0.05, "intermediate": 0.2, "advanced": 0.35, "elite": 0.6, "god": 0.85},
    "walking-lunge-dumbbells": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.3, "elite": 0.45, "god": 0.65},
    "lunges-barbell": {"beginner": 0.25, "intermediate": 0.5, "advanced": 0.75, "elite": 1.25, "god": 1.5},
    "romanian-deadlift-dumbbells": {"beginner": 0.15, "intermediate": 0.25, "advanced": 0.4, "elite": 0.6, "god": 0.8},
    "goblet-squat-dumbbells": {"beginner": 0.15, "intermediate": 0.25, "advanced": 0.4, "elite": 0.6, "god": 0.85},
    "goblet-squat-kettlebell": {"beginner": 0.15, "intermediate": 0.25, "advanced": 0.4, "elite": 0.6, "god": 0.85},
    "bulgarian-split-squat-dumbbells": {"beginner": 0.15, "intermediate": 0.3, "advanced": 0.55, "elite": 0.85, "god": 1.25},
    "rear-delt-fly-dumbbells": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.15, "elite": 0.25, "god": 0.4},
    "rear-delt-fly-cables": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.15, "elite": 0.25, "god": 0.4},
    "arnold-press-dumbbells": {"beginner": 0.1, "intermediate": 0.15, "advanced": 0.2, "elite": 0.3, "god": 0.35},
    "lateral-raise-cables": {"beginner": 0.05, "intermediate": 0.1, "advanced": 0.15, "elite": 0.25, "god": 0.35},
    "skull-crushers-dumbbells": {"beginner": 0.1, "intermediate": 0.2, "advanced": 0.35, "elite": 0.55, "god": 0.75},
    "overhead-tricep-extension-cables": {"beginner": 0.05, "intermediate": 0.2, "advanced": 0.35, "elite": 0.6, "god": 0.85},
    "crossover-cables": {"beginner": 0.05, "intermediate": 0.15, "advanced": 0.3, "elite": 0.55, "god": 0.8},
    "chest-fly-machine": {"beginner": 0.1, "intermediate": 0.25, "advanced": 0.5, "elite": 0.8, "god": 1.15},
    "hip-thrust-machine": {"beginner": 0.5, "intermediate": 1.0, "advanced": 1.5, "elite": 2.25, "god": 3.0},
}

# Exercise ids that share a row above but have no catalog entry
STANDARD_ALIASES = {
    "row-cables": "seated-cable-row",
    "preacher-curl-dumbbells": "preacher-curl",
    "shoulder-press-dumbbells": "dumbbell-shoulder-press",
    "overhead-press-machine": "machine-shoulder-press",
}

# Strength typically peaks in the 20s-30s
AGE_ADJUSTMENT_FACTORS = [
    (35, 1.0),
    (45, 0.95),
    (55, 0.90),
    (65, 0.85),
]
AGE_ADJUSTMENT_FLOOR = 0.80

# (threshold key, percentile at threshold)
_PERCENTILE_BANDS = [
    ("beginner", 10),
    ("intermediate", 25),
    ("advanced", 50),
    ("elite", 75),
    ("god", 90),
]


def get_standards(gender: str) -> dict:
    return FEMALE_STANDARDS if gender == "female" else MALE_STANDARDS


def resolve_standard(exercise_id: str, gender: str) -> dict | None:
    """Standard thresholds for an exercise id (direct key or catalog alias)."""
    standards = get_standards(gender)
    if exercise_id in standards:
        return standards[exercise_id]
    key = get_strength_standard_key(exercise_id) or STANDARD_ALIASES.get(exercise_id)
    return standards.get(key) if key else None


def has_strength_standard(exercise_id: str, gender: str = "male") -> bool:
    return resolve_standard(exercise_id, gender) is not None


def age_factor(age: int | None) -> float:
    if not age:
        return 1.0
    for upper, factor in AGE_ADJUSTMENT_FACTORS:
        if age <= upper:
            return factor
    return AGE_ADJUSTMENT_FLOOR


def percentile_for(
    weight: float,
    body_weight: float,
    gender: str,
    exercise_id: str,
    age: int | None = None,
) -> float:
    """
    Percentile rank (0-99) of a lift relative to bodyweight.

    Linear interpolation between the published thresholds. `weight` and
    `body_weight` must share a unit. Exercises without a table get 50.
    """
    std = resolve_standard(exercise_id, gender)
    if std is None:
        return 50.0
    if not body_weight or body_weight <= 0:
        return 0.0

    ratio = (weight / body_weight) / age_factor(age)

    lower_ratio, lower_pct = 0.0, 0
    for key, pct in _PERCENTILE_BANDS:
        upper_ratio = std[key]
        if ratio <= upper_ratio:
            span = upper_ratio - lower_ratio
            progress = (ratio - lower_ratio) / span if span > 0 else 1.0
            return max(0.0, lower_pct + progress * (pct - lower_pct))
        lower_ratio, lower_pct = upper_ratio, pct

    # Above the 90th percentile: +9 per extra 20 % of the top threshold, capped at 99
    top = std["god"]
    return min(99.0, 90 + (ratio - top) / (top * 0.2) * 9)


def strength_level_name(percentile: float) -> str:
    if percentile >= 90:
        return "God"
    if percentile >= 75:
        return "Elite"
    if percentile >= 50:
        return "Advanced"
    if percentile >= 25:
        return "Intermediate"
    if percentile >= 10:
        return "Beginner"
    return "Untrained"
