"""
Liftplan: Movement-Pattern Validator

Checks a proposed training day against the programming rules for a level.
Validation is advisory: every current rule produces a warning, never an
error, so a routine is always saveable.
"""
import logging
import re

from liftplan.config import DEFAULT_PLANNED_SETS, PUSH_PULL_MAX_RATIO, get_movement_pattern
from liftplan.programming import HEAVY_PATTERN_CONFLICTS, get_programming_config, resolve_level
from liftplan.telemetry import emit

logger = logging.getLogger(__name__)

MOVEMENT_PATTERNS = (
    "squat",
    "hinge",
    "horizontal_push",
    "horizontal_pull",
    "vertical_push",
    "vertical_pull",
    "carry",
    "isolation",
)
PUSH_PATTERNS = ("horizontal_push", "vertical_push")
PULL_PATTERNS = ("horizontal_pull", "vertical_pull")


def _set_count(sets) -> int:
    if isinstance(sets, (list, tuple)):
        return len(sets)
    if isinstance(sets, (int, float)) and not isinstance(sets, bool):
        return max(0, int(sets))
    return DEFAULT_PLANNED_SETS


def exercise_name_to_id(name: str) -> str:
    """'Bench Press (Barbell)' -> 'bench-press-barbell'"""
    return re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")


def check_routine_day(exercises: list[dict], level: str, day_label: str = None) -> dict:
    """Pure validation of one day; no events are emitted."""
    level = resolve_level(level)
    config = get_programming_config(level)
    label = day_label or "routine"
    warnings = []
    errors = []

    exercise_counts = {p: 0 for p in MOVEMENT_PATTERNS}
    set_counts = {p: 0 for p in MOVEMENT_PATTERNS}
    for ex in exercises or []:
        pattern = get_movement_pattern(ex.get("exercise_id"))
        exercise_counts[pattern] += 1
        set_counts[pattern] += _set_count(ex.get("sets"))

    # 1. Heavy pattern conflicts (squat + hinge)
    has_conflict = any(set_counts[a] > 0 and set_counts[b] > 0 for a, b in HEAVY_PATTERN_CONFLICTS)
    if has_conflict and not config["allow_heavy_squat_and_deadlift_same_day"]:
        warnings.append(
            f"Squat and hinge patterns on same day ({label}) - "
            f"may cause excessive fatigue for {level} level"
        )

    # 2. Sets per pattern per session
    max_sets = config["max_sets_per_pattern_per_session"]
    exceeding = [
        (p, n) for p, n in set_counts.items() if p != "isolation" and n > max_sets
    ]
    if exceeding:
        listed = ", ".join(f"{p}: {n} sets" for p, n in exceeding)
        warnings.append(f"Exceeds recommended {max_sets} sets/pattern/session: {listed}")

    # 3. Push/pull balance
    total_push = sum(set_counts[p] for p in PUSH_PATTERNS)
    total_pull = sum(set_counts[p] for p in PULL_PATTERNS)
    if total_push > 0 and total_pull > 0 and total_push / total_pull > PUSH_PULL_MAX_RATIO:
        warnings.append(f"Push-heavy session ({total_push} push sets vs {total_pull} pull sets)")

    return {
        "is_valid": not errors,
        "warnings": warnings,
        "errors": errors,
        "details": {
            "has_conflicting_patterns_same_day": has_conflict,
            "max_sets_exceeded": bool(exceeding),
            "pattern_set_counts": set_counts,
            "pattern_exercise_counts": exercise_counts,
        },
    }


def validate_routine_day(
    exercises: list[dict],
    level: str,
    day_label: str = None,
    sink=None,
) -> dict:
    """Validate one day and report the outcome to the analytics sink."""
    level = resolve_level(level)
    result = check_routine_day(exercises, level, day_label)
    label = day_label or "Routine"
    context = {
        "day_name": label,
        "advancement_level": level,
        "is_valid": result["is_valid"],
        "warning_count": len(result["warnings"]),
        "error_count": len(result["errors"]),
        "warnings": result["warnings"],
        "errors": result["errors"],
        "pattern_balance": result["details"]["pattern_set_counts"],
    }

    if result["is_valid"] and not result["warnings"]:
        emit(sink, "info", "ai", "routine_validation_passed",
             f"{label} valid for {level}", context)
    elif result["is_valid"]:
        emit(sink, "warn", "ai", "routine_validation_warnings",
             f"{label} valid with {len(result['warnings'])} warnings", context)
    else:
        emit(sink, "error", "ai", "routine_validation_failed",
             f"{label} invalid for {level}", context)
    return result


def validate_program(program: dict, level: str, sink=None) -> dict:
    """
    Validate every day of a multi-day program.

    Days list exercises by name; ids are derived from names unless an
    explicit `exercise_id` is supplied.
    """
    level = resolve_level(level)
    routines = (program or {}).get("routines") or []

    day_results = []
    for day in routines:
        exercises = [
            {
                "exercise_id": ex.get("exercise_id") or exercise_name_to_id(ex.get("name")),
                "sets": ex.get("sets"),
            }
            for ex in day.get("exercises") or []
        ]
        day_results.append(validate_routine_day(exercises, level, day.get("name"), sink=sink))

    is_valid = all(r["is_valid"] for r in day_results)
    total_warnings = sum(len(r["warnings"]) for r in day_results)
    total_errors = sum(len(r["errors"]) for r in day_results)
    context = {
        "advancement_level": level,
        "is_valid": is_valid,
        "day_count": len(day_results),
        "total_warnings": total_warnings,
        "total_errors": total_errors,
        "routine_names": [day.get("name") for day in routines],
    }

    if is_valid:
        emit(sink, "info", "ai", "program_validation_complete",
             f"Program valid: {len(day_results)} days, {total_warnings} warnings", context)
    else:
        emit(sink, "error", "ai", "program_validation_failed",
             f"Program invalid: {total_errors} errors, {total_warnings} warnings", context)

    logger.debug("Validated %d days at %s: %d warnings", len(day_results), level, total_warnings)
    return {"is_valid": is_valid, "day_results": day_results}
