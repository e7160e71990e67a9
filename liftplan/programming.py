"""
Liftplan: Programming rules by training advancement

Beginners move low absolute loads and recover fast, so rules are loose.
Advanced lifters move high absolute loads and recovery becomes the
limiting factor, so same-day pattern combinations and per-session volume
are held tighter.
"""
import copy
import logging
from types import MappingProxyType

from liftplan.advancement import determine_training_advancement

logger = logging.getLogger(__name__)

PROGRAMMING_RULES = MappingProxyType({
    "beginner": {
        "allow_heavy_squat_and_deadlift_same_day": True,  # fine at low weights
        "allow_heavy_light_same_day": True,
        "max_sets_per_pattern_per_session": 12,
        "min_rest_days_between_heavy_same_pattern": 1,
        "suggested_frequency": {"squat": 3, "bench": 3, "deadlift": 2},
        "heavy_threshold": 0.85,  # %1RM considered heavy
        "volume_range": {"min": 10, "max": 20},  # sets per pattern per week
    },
    "intermediate": {
        "allow_heavy_squat_and_deadlift_same_day": False,
        "allow_heavy_light_same_day": True,  # heavy squat + light RDL is fine
        "max_sets_per_pattern_per_session": 10,
        "min_rest_days_between_heavy_same_pattern": 1,
        "suggested_frequency": {"squat": 2, "bench": 3, "deadlift": 1.5},
        "heavy_threshold": 0.80,
        "volume_range": {"min": 12, "max": 22},
    },
    "advanced": {
        "allow_heavy_squat_and_deadlift_same_day": False,
        "allow_heavy_light_same_day": True,
        "max_sets_per_pattern_per_session": 8,
        "min_rest_days_between_heavy_same_pattern": 2,
        "suggested_frequency": {"squat": 2, "bench": 2, "deadlift": 1},
        "heavy_threshold": 0.75,
        "volume_range": {"min": 12, "max": 20},
    },
})

# Patterns that conflict when both are heavy on the same day
HEAVY_PATTERN_CONFLICTS = [
    ("squat", "hinge"),  # both tax lower back, glutes, legs
]


def resolve_level(level: str) -> str:
    if level in PROGRAMMING_RULES:
        return level
    logger.warning("Unknown advancement level %r, using beginner rules", level)
    return "beginner"


def get_programming_config(level: str) -> dict:
    """Rules for a level. Returns a copy; the table itself is never handed out."""
    return copy.deepcopy(PROGRAMMING_RULES[resolve_level(level)])


def get_programming_config_for_user(
    workout_history: list[dict], user_profile: dict | None
) -> tuple[dict, dict]:
    advancement = determine_training_advancement(workout_history, user_profile)
    return get_programming_config(advancement["level"]), advancement


def patterns_conflict(pattern1: str, pattern2: str) -> bool:
    return any(
        (pattern1 == a and pattern2 == b) or (pattern1 == b and pattern2 == a)
        for a, b in HEAVY_PATTERN_CONFLICTS
    )
