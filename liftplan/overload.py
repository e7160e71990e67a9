"""
Liftplan: Progressive-Overload Calculator

Target weights for a routine exercise from workout history:
1. Best estimated 1RM across every retained session (not just the latest)
2. Working sets at the %1RM for their rep target, scaled by intensity
3. Warmups at a flat 60 % of 1RM
4. Progression signal against the most recent session's weight

Input routines and history are never mutated; every result is a new dict.
"""
import logging

import numpy as np

from liftplan.config import (
    DEFAULT_INTENSITY,
    INTENSITY_MODIFIERS,
    LBS,
    LEGACY_DEFAULT_REPS,
    LEGACY_DEFAULT_SETS,
    PROGRESSION_TOLERANCE,
    WARMUP_1RM_PERCENTAGE,
    WEIGHT_INCREMENT,
    get_exercise_name,
)
from liftplan.history import get_exercise_history
from liftplan.strength import convert_weight, estimate_1rm, percentage_for_reps

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def round_weight(weight: float, unit: str) -> float:
    """Nearest plate increment (5 lbs / 2.5 kg); halves round up, never negative."""
    increment = WEIGHT_INCREMENT.get(unit, WEIGHT_INCREMENT[LBS])
    steps = max(0, _round_half_up(weight / increment))
    return float(steps * increment)


def normalize_routine_exercise(exercise: dict) -> dict:
    """
    Return the exercise with `sets` as an explicit list of set dicts.

    Older routines stored `sets` as a plain count with one shared `reps`
    value; those are expanded here, once, at the boundary.
    """
    exercise = exercise or {}
    sets = exercise.get("sets")
    if isinstance(sets, (list, tuple)):
        return {**exercise, "sets": [dict(s) for s in sets]}

    if isinstance(sets, int) and not isinstance(sets, bool) and sets >= 0:
        n_sets = sets
    else:
        n_sets = LEGACY_DEFAULT_SETS
    reps = exercise.get("reps")
    if not isinstance(reps, int) or isinstance(reps, bool) or reps <= 0:
        reps = LEGACY_DEFAULT_REPS
    return {
        **exercise,
        "sets": [{"reps": reps, "is_warmup": False} for _ in range(n_sets)],
    }


def calculate_estimated_1rm(sessions: list[dict]) -> float:
    """Best 1RM estimate (in lbs) across all sessions; 0 without history."""
    best = 0.0
    for s in sessions:
        weight_lbs = convert_weight(s["weight"], s["unit"], LBS)
        best = max(best, estimate_1rm(weight_lbs, s["reps"]))
    return best


def _progression(working_weight: float, last_weight: float | None) -> str:
    if last_weight is None or working_weight <= 0:
        return "maintain"
    if working_weight > last_weight + PROGRESSION_TOLERANCE:
        return "increase"
    if working_weight < last_weight - PROGRESSION_TOLERANCE:
        return "decrease"
    return "maintain"


def calculate_exercise_weights(
    exercise: dict,
    workout_history: list[dict],
    weight_unit: str,
) -> dict:
    """Calculate target weights for a single routine exercise."""
    exercise = normalize_routine_exercise(exercise)
    sets = exercise["sets"]

    exercise_id = exercise.get("exercise_id")
    if not exercise_id:
        logger.warning("Routine exercise without exercise_id; returning zero targets")
        return {
            **exercise,
            "sets": [{**s, "target_weight": 0.0, "unit": weight_unit} for s in sets],
            "exercise_name": "Unknown Exercise",
            "working_weight": 0.0,
            "estimated_1rm": 0,
            "progression": "maintain",
            "unit": weight_unit,
        }

    sessions = get_exercise_history(exercise_id, workout_history)
    estimated_1rm = convert_weight(calculate_estimated_1rm(sessions), LBS, weight_unit)

    exercise_name = (
        get_exercise_name(exercise_id) or exercise.get("exercise_name") or exercise_id
    )

    modifier = exercise.get("intensity_modifier") or DEFAULT_INTENSITY
    if modifier not in INTENSITY_MODIFIERS:
        logger.warning("Unknown intensity modifier %r for %s, using %s",
                       modifier, exercise_id, DEFAULT_INTENSITY)
        modifier = DEFAULT_INTENSITY
    intensity = INTENSITY_MODIFIERS[modifier]

    calculated_sets = []
    for s in sets:
        if estimated_1rm <= 0:
            target = 0.0
        elif s.get("is_warmup"):
            target = round_weight(estimated_1rm * WARMUP_1RM_PERCENTAGE, weight_unit)
        else:
            pct = percentage_for_reps(s.get("reps")) / 100
            target = round_weight(estimated_1rm * pct * intensity, weight_unit)
        calculated_sets.append({**s, "target_weight": target, "unit": weight_unit})

    working = [s["target_weight"] for s in calculated_sets if not s.get("is_warmup")]
    working_weight = max(working) if working else 0.0

    result = {
        **exercise,
        "sets": calculated_sets,
        "exercise_name": exercise_name,
        "working_weight": working_weight,
        "estimated_1rm": _round_half_up(estimated_1rm),
        "unit": weight_unit,
    }

    last_weight = None
    if sessions:
        last = sessions[0]
        last_weight = _round_half_up(convert_weight(last["weight"], last["unit"], weight_unit))
        result["last_performed"] = {
            "weight": last_weight,
            "reps": last["reps"],
            "date": last["date"],
            "completed": last["completed_all_sets"],
        }

    result["progression"] = _progression(working_weight, last_weight)
    return result


def calculate_routine(routine: dict, workout_history: list[dict], weight_unit: str) -> dict:
    """Calculate every exercise in a routine; other routine fields pass through."""
    routine = routine or {}
    exercises = routine.get("exercises") or []
    return {
        **routine,
        "exercises": [
            calculate_exercise_weights(ex, workout_history, weight_unit) for ex in exercises
        ],
    }


def calculate_all_routines(
    routines: list[dict], workout_history: list[dict], weight_unit: str
) -> list[dict]:
    if not isinstance(routines, list):
        return []
    return [calculate_routine(r, workout_history, weight_unit) for r in routines]
