"""
Liftplan: Configuration

ALL exercise matching uses the exercise id (e.g. "bench-press-barbell").
Names are only used for display, never for lookup.
"""
import logging
import os
from types import MappingProxyType

# ── Environment ──────────────────────────────────────────────────────
ANALYTICS_URL = os.environ.get("LIFTPLAN_ANALYTICS_URL", "")
ANALYTICS_KEY = os.environ.get("LIFTPLAN_ANALYTICS_KEY", "")
ANALYTICS_TIMEOUT = float(os.environ.get("LIFTPLAN_ANALYTICS_TIMEOUT", "5"))
LOG_LEVEL = os.environ.get("LIFTPLAN_LOG_LEVEL", "WARNING")


def configure_logging(level: str = None) -> None:
    """Attach a stream handler to the package logger (opt-in for scripts)."""
    logger = logging.getLogger("liftplan")
    logger.setLevel((level or LOG_LEVEL).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)


# ── Units ────────────────────────────────────────────────────────────
LBS = "lbs"
KG = "kg"
KG_PER_LB = 0.453592
WEIGHT_INCREMENT = {LBS: 5.0, KG: 2.5}

# ── Progressive overload ─────────────────────────────────────────────
WARMUP_1RM_PERCENTAGE = 0.60
INTENSITY_MODIFIERS = {
    "heavy": 1.0,
    "moderate": 0.90,
    "light": 0.80,
}
DEFAULT_INTENSITY = "heavy"
PROGRESSION_TOLERANCE = 2  # display units, absorbs rounding noise
LEGACY_DEFAULT_SETS = 3
LEGACY_DEFAULT_REPS = 10
MAX_ESTIMATE_REPS = 15  # rep formulas stop being reliable past this

# ── Advancement ──────────────────────────────────────────────────────
PERCENTILE_WINDOW = 20  # most recent workouts scanned for percentile samples
MIN_PERCENTILE_SAMPLES = 3

# ── Routine validation ───────────────────────────────────────────────
DEFAULT_PLANNED_SETS = 3
PUSH_PULL_MAX_RATIO = 1.5

# ═════════════════════════════════════════════════════════════════════
# EXERCISE DATABASE: keyed by exercise id
#
# This is the SINGLE SOURCE OF TRUTH for exercise metadata.
# "movement_pattern" drives fatigue tracking; "strength_std" points into
# the population tables in strength.py for exercises that have one.
# ═════════════════════════════════════════════════════════════════════

EXERCISE_DB = MappingProxyType({
    # ── Squat ───────────────────────────────────────────────────────
    "squat-barbell": {
        "name": "Squat (Barbell)",
        "movement_pattern": "squat",
        "strength_std": "squat",
    },
    "front-squat-barbell": {
        "name": "Front Squat (Barbell)",
        "movement_pattern": "squat",
        "strength_std": "front-squat",
    },
    "goblet-squat-dumbbell": {
        "name": "Goblet Squat (Dumbbell)",
        "movement_pattern": "squat",
        "strength_std": "goblet-squat-dumbbells",
    },
    "leg-press-machine": {
        "name": "Leg Press (Machine)",
        "movement_pattern": "squat",
        "strength_std": "leg-press",
    },
    "hack-squat-machine": {
        "name": "Hack Squat (Machine)",
        "movement_pattern": "squat",
        "strength_std": "hack-squat",
    },
    "bulgarian-split-squat-dumbbells": {
        "name": "Bulgarian Split Squat (Dumbbells)",
        "movement_pattern": "squat",
    },

    # ── Hinge ───────────────────────────────────────────────────────
    "deadlift-barbell": {
        "name": "Deadlift (Barbell)",
        "movement_pattern": "hinge",
        "strength_std": "deadlift",
    },
    "deadlift-conventional-barbell": {
        "name": "Conventional Deadlift (Barbell)",
        "movement_pattern": "hinge",
        "strength_std": "deadlift",
    },
    "deadlift-sumo-barbell": {
        "name": "Sumo Deadlift (Barbell)",
        "movement_pattern": "hinge",
        "strength_std": "sumo-deadlift-barbell",
    },
    "romanian-deadlift-barbell": {
        "name": "Romanian Deadlift (Barbell)",
        "movement_pattern": "hinge",
        "strength_std": "romanian-deadlift",
    },
    "romanian-deadlift-dumbbells": {
        "name": "Romanian Deadlift (Dumbbells)",
        "movement_pattern": "hinge",
    },
    "good-morning-barbell": {
        "name": "Good Morning (Barbell)",
        "movement_pattern": "hinge",
    },
    "hip-thrust-barbell": {
        "name": "Hip Thrust (Barbell)",
        "movement_pattern": "hinge",
        "strength_std": "barbell-hip-thrust",
    },
    "kettlebell-swing": {
        "name": "Kettlebell Swing",
        "movement_pattern": "hinge",
    },

    # ── Horizontal push ─────────────────────────────────────────────
    "bench-press-barbell": {
        "name": "Bench Press (Barbell)",
        "movement_pattern": "horizontal_push",
        "strength_std": "bench-press",
    },
    "bench-press-dumbbells": {
        "name": "Bench Press (Dumbbells)",
        "movement_pattern": "horizontal_push",
        "strength_std": "dumbbell-bench-press",
    },
    "incline-bench-press-barbell": {
        "name": "Incline Bench Press (Barbell)",
        "movement_pattern": "horizontal_push",
        "strength_std": "incline-bench-press",
    },
    "incline-bench-press-dumbbells": {
        "name": "Incline Bench Press (Dumbbells)",
        "movement_pattern": "horizontal_push",
        "strength_std": "incline-dumbbell-chest-press",
    },
    "decline-bench-press-barbell": {
        "name": "Decline Bench Press (Barbell)",
        "movement_pattern": "horizontal_push",
    },
    "chest-fly-dumbbells": {
        "name": "Chest Fly (Dumbbells)",
        "movement_pattern": "horizontal_push",
    },
    "chest-fly-cables": {
        "name": "Chest Fly (Cables)",
        "movement_pattern": "horizontal_push",
    },
    "push-up-bodyweight": {
        "name": "Push Up",
        "movement_pattern": "horizontal_push",
    },
    "dip-bodyweight": {
        "name": "Dip",
        "movement_pattern": "horizontal_push",
    },

    # ── Horizontal pull ─────────────────────────────────────────────
    "row-barbell": {
        "name": "Bent Over Row (Barbell)",
        "movement_pattern": "horizontal_pull",
        "strength_std": "barbell-row",
    },
    "row-dumbbells": {
        "name": "Row (Dumbbells)",
        "movement_pattern": "horizontal_pull",
    },
    "cable-row-cables": {
        "name": "Cable Row",
        "movement_pattern": "horizontal_pull",
    },
    "seated-row-cables": {
        "name": "Seated Cable Row",
        "movement_pattern": "horizontal_pull",
        "strength_std": "seated-cable-row",
    },
    "t-bar-row-barbell": {
        "name": "T-Bar Row (Barbell)",
        "movement_pattern": "horizontal_pull",
    },
    "pendlay-row-barbell": {
        "name": "Pendlay Row (Barbell)",
        "movement_pattern": "horizontal_pull",
    },
    "chest-supported-row-dumbbells": {
        "name": "Chest Supported Row (Dumbbells)",
        "movement_pattern": "horizontal_pull",
    },

    # ── Vertical push ───────────────────────────────────────────────
    "overhead-press-barbell": {
        "name": "Overhead Press (Barbell)",
        "movement_pattern": "vertical_push",
        "strength_std": "overhead-press",
    },
    "overhead-press-dumbbells": {
        "name": "Overhead Press (Dumbbells)",
        "movement_pattern": "vertical_push",
        "strength_std": "dumbbell-shoulder-press",
    },
    "arnold-press-dumbbells": {
        "name": "Arnold Press (Dumbbells)",
        "movement_pattern": "vertical_push",
    },
    "push-press-barbell": {
        "name": "Push Press (Barbell)",
        "movement_pattern": "vertical_push",
    },
    "lateral-raise-dumbbells": {
        "name": "Lateral Raise (Dumbbells)",
        "movement_pattern": "vertical_push",
        "strength_std": "lateral-raise",
    },
    "shoulder-press-machine": {
        "name": "Shoulder Press (Machine)",
        "movement_pattern": "vertical_push",
        "strength_std": "machine-shoulder-press",
    },

    # ── Vertical pull ───────────────────────────────────────────────
    "pull-up-bodyweight": {
        "name": "Pull Up",
        "movement_pattern": "vertical_pull",
    },
    "chin-up-bodyweight": {
        "name": "Chin Up",
        "movement_pattern": "vertical_pull",
    },
    "lat-pulldown-cables": {
        "name": "Lat Pulldown (Cable)",
        "movement_pattern": "vertical_pull",
        "strength_std": "lat-pulldown",
    },
    "lat-pulldown-machine": {
        "name": "Lat Pulldown (Machine)",
        "movement_pattern": "vertical_pull",
        "strength_std": "lat-pulldown",
    },

    # ── Carry ───────────────────────────────────────────────────────
    "farmers-walk-dumbbells": {
        "name": "Farmer's Walk (Dumbbells)",
        "movement_pattern": "carry",
    },
    "suitcase-carry-dumbbell": {
        "name": "Suitcase Carry (Dumbbell)",
        "movement_pattern": "carry",
    },

    # ── Isolation (less systemic fatigue) ───────────────────────────
    "bicep-curl-dumbbells": {
        "name": "Bicep Curl (Dumbbells)",
        "movement_pattern": "isolation",
        "strength_std": "dumbbell-curl",
    },
    "bicep-curl-barbell": {
        "name": "Bicep Curl (Barbell)",
        "movement_pattern": "isolation",
        "strength_std": "barbell-curl",
    },
    "preacher-curl-barbell": {
        "name": "Preacher Curl (Barbell)",
        "movement_pattern": "isolation",
        "strength_std": "preacher-curl",
    },
    "tricep-pushdown-cables": {
        "name": "Triceps Pushdown (Cable)",
        "movement_pattern": "isolation",
    },
    "tricep-extension-dumbbells": {
        "name": "Triceps Extension (Dumbbells)",
        "movement_pattern": "isolation",
    },
    "leg-curl-machine": {
        "name": "Leg Curl (Machine)",
        "movement_pattern": "isolation",
    },
    "leg-extension-machine": {
        "name": "Leg Extension (Machine)",
        "movement_pattern": "isolation",
        "strength_std": "leg-extension",
    },
    "calf-raise-machine": {
        "name": "Calf Raise (Machine)",
        "movement_pattern": "isolation",
    },
    "face-pull-cables": {
        "name": "Face Pull (Cable)",
        "movement_pattern": "isolation",
    },
    "rear-delt-fly-dumbbells": {
        "name": "Rear Delt Fly (Dumbbells)",
        "movement_pattern": "isolation",
    },
})


# ═════════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS: derive lookups from EXERCISE_DB
# ═════════════════════════════════════════════════════════════════════

def get_exercise_name(exercise_id: str) -> str | None:
    """Display name for an exercise id, or None for custom/unknown ids."""
    entry = EXERCISE_DB.get(exercise_id)
    return entry["name"] if entry else None


def get_movement_pattern(exercise_id: str) -> str:
    """
    Movement pattern for an exercise id.

    Unknown ids are treated as isolation work, the least fatiguing
    assumption, so classification never fails.
    """
    entry = EXERCISE_DB.get(exercise_id)
    return entry["movement_pattern"] if entry else "isolation"


def get_strength_standard_key(exercise_id: str) -> str | None:
    """Key into the strength-standard tables, if the exercise has one."""
    entry = EXERCISE_DB.get(exercise_id)
    return entry.get("strength_std") if entry else None
