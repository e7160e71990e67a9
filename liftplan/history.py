"""
Liftplan: History Aggregator

Flattens raw workout records into a set-level DataFrame and reduces it to
one best set per exercise per workout.
"""
import logging

import pandas as pd

from liftplan.config import LBS
from liftplan.strength import convert_weight, estimate_1rm

logger = logging.getLogger(__name__)

SET_COLUMNS = [
    "workout_index",
    "workout_id",
    "date",
    "entry",
    "exercise_id",
    "planned_sets",
    "set_number",
    "weight",
    "reps",
    "unit",
    "completed",
    "weight_lbs",
]


def _planned_set_count(planned) -> int:
    """Planned sets may be a count or an explicit list of sets; 0 if unknown."""
    if isinstance(planned, (list, tuple)):
        return len(planned)
    if isinstance(planned, (int, float)) and not isinstance(planned, bool) and planned > 0:
        return int(planned)
    return 0


def workouts_to_sets_dataframe(workouts: list[dict], exercise_id: str = None) -> pd.DataFrame:
    """
    Convert raw workout records to a flat DataFrame.
    One row per logged set; `entry` numbers each exercise occurrence so the
    same exercise logged twice in one workout stays two sessions.
    """
    rows = []
    entry = 0
    for w_idx, w in enumerate(workouts or []):
        date = pd.to_datetime(w.get("created_at"), utc=True, errors="coerce")
        if date is None:
            date = pd.NaT
        for ex in w.get("exercises", []) or []:
            ex_id = ex.get("id", "")
            if exercise_id is not None and ex_id != exercise_id:
                continue
            entry += 1
            planned = _planned_set_count(ex.get("sets"))
            for s_idx, s in enumerate(ex.get("completed_sets", []) or []):
                weight = float(s.get("weight", 0) or 0)
                unit = s.get("unit") or LBS
                rows.append(
                    {
                        "workout_index": w_idx,
                        "workout_id": w.get("id", ""),
                        "date": date,
                        "entry": entry,
                        "exercise_id": ex_id,
                        "planned_sets": planned,
                        "set_number": s.get("set_number", s_idx + 1),
                        "weight": weight,
                        "reps": int(s.get("reps", 0) or 0),
                        "unit": unit,
                        "completed": bool(s.get("completed", False)),
                        "weight_lbs": convert_weight(weight, unit, LBS),
                    }
                )

    return pd.DataFrame(rows, columns=SET_COLUMNS)


def qualifying_sets(df: pd.DataFrame) -> pd.DataFrame:
    """Completed sets with a load on the bar."""
    if df.empty:
        return df
    return df[df["completed"] & (df["weight"] > 0)]


def get_exercise_history(exercise_id: str, workouts: list[dict]) -> list[dict]:
    """
    Per-session best sets for one exercise, most recent first.

    The best set is chosen by estimated 1RM on pound-normalized weight, not
    raw weight. Exact ties keep the first set logged. Sessions without a
    completed, loaded set are skipped entirely.
    """
    if not exercise_id or not workouts:
        return []

    df = qualifying_sets(workouts_to_sets_dataframe(workouts, exercise_id=exercise_id))
    if df.empty:
        return []

    df = df.copy()
    df["e1rm"] = [estimate_1rm(w, r) for w, r in zip(df["weight_lbs"], df["reps"])]

    rows = []
    for _, grp in df.groupby("entry", sort=False):
        best = grp.loc[grp["e1rm"].idxmax()]
        n_done = len(grp)
        target = int(grp["planned_sets"].iloc[0]) or n_done
        rows.append(
            {
                "weight": float(best["weight"]),
                "reps": int(best["reps"]),
                "sets_completed": n_done,
                "date": best["date"],
                "unit": best["unit"],
                "completed_all_sets": n_done >= target,
            }
        )

    order = pd.DataFrame(rows).sort_values(
        "date", ascending=False, kind="stable", na_position="last"
    ).index
    logger.debug("History for %s: %d sessions", exercise_id, len(rows))
    return [rows[i] for i in order]
