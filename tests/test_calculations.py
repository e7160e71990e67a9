"""
Tests for the weight calculation path: strength estimator, history
aggregation and progressive-overload targets.
Run: pytest tests/ -v
"""
import copy

import pandas as pd
import pytest


def _sets(weight_reps: list[tuple], unit: str = "lbs") -> list[dict]:
    """Helper: [(weight, reps[, completed]), ...] → logged set dicts."""
    out = []
    for i, wr in enumerate(weight_reps, start=1):
        weight, reps = wr[0], wr[1]
        completed = wr[2] if len(wr) > 2 else True
        out.append({"set_number": i, "weight": weight, "reps": reps,
                    "unit": unit, "completed": completed})
    return out


def _workout(created_at: str, exercise_id: str, weight_reps: list[tuple],
             unit: str = "lbs", planned_sets=None, wid: str = None) -> dict:
    """Helper: one workout holding a single logged exercise."""
    return {
        "id": wid or f"w-{created_at}",
        "title": "Session",
        "created_at": created_at,
        "exercises": [
            {"id": exercise_id, "sets": planned_sets,
             "completed_sets": _sets(weight_reps, unit)},
        ],
    }


def _routine_exercise(exercise_id="bench-press-barbell", reps=(8,), warmups=(), **extra) -> dict:
    sets = [{"reps": r, "is_warmup": True} for r in warmups]
    sets += [{"reps": r, "is_warmup": False} for r in reps]
    return {"exercise_id": exercise_id, "sets": sets, **extra}


BENCH_135x8 = [_workout("2026-03-01T10:00:00Z", "bench-press-barbell", [(135, 8)])]


# ═══════════════════════════════════════════════════════════════════════
# STRENGTH ESTIMATOR
# ═══════════════════════════════════════════════════════════════════════

class TestEstimate1rm:

    def test_single_rep_is_the_weight(self):
        from liftplan.strength import estimate_1rm
        assert estimate_1rm(100, 1) == 100.0

    def test_zero_reps_or_weight(self):
        from liftplan.strength import estimate_1rm
        assert estimate_1rm(100, 0) == 0.0
        assert estimate_1rm(0, 5) == 0.0
        assert estimate_1rm(None, None) == 0.0

    def test_five_reps_in_expected_range(self):
        from liftplan.strength import estimate_1rm
        assert 115 < estimate_1rm(100, 5) < 116

    def test_monotonic_in_reps_and_weight(self):
        from liftplan.strength import estimate_1rm
        by_reps = [estimate_1rm(100, r) for r in range(1, 25)]
        assert by_reps == sorted(by_reps)
        by_weight = [estimate_1rm(w, 5) for w in range(45, 400, 5)]
        assert by_weight == sorted(by_weight)

    def test_high_reps_capped(self):
        from liftplan.strength import estimate_1rm
        assert estimate_1rm(100, 30) == estimate_1rm(100, 15)


class TestPercentageForReps:

    def test_table_values(self):
        from liftplan.strength import percentage_for_reps
        assert percentage_for_reps(1) == 100
        assert percentage_for_reps(5) == 87
        assert percentage_for_reps(8) == 80
        assert percentage_for_reps(12) == 70

    def test_high_reps_floor_and_zero(self):
        from liftplan.strength import percentage_for_reps
        assert percentage_for_reps(20) == 70
        assert percentage_for_reps(0) == 100

    def test_decreasing(self):
        from liftplan.strength import percentage_for_reps
        pcts = [percentage_for_reps(r) for r in range(1, 20)]
        assert pcts == sorted(pcts, reverse=True)
        assert all(0 < p <= 100 for p in pcts)


class TestConvertWeight:

    def test_kg_lbs(self):
        from liftplan.strength import convert_weight
        assert convert_weight(100, "kg", "lbs") == 220.5
        assert convert_weight(100, "lbs", "kg") == 45.4
        assert convert_weight(100, "kg", "kg") == 100


class TestPercentileFor:

    def test_threshold_points(self):
        from liftplan.strength import percentile_for
        # Male squat: intermediate 1.25 = 25th, advanced 1.5 = 50th
        assert percentile_for(125, 100, "male", "squat") == pytest.approx(25)
        assert percentile_for(150, 100, "male", "squat") == pytest.approx(50)

    def test_catalog_alias(self):
        from liftplan.strength import percentile_for
        assert percentile_for(150, 100, "male", "squat-barbell") == pytest.approx(50)

    def test_gender_tables_differ(self):
        from liftplan.strength import percentile_for
        assert percentile_for(100, 100, "female", "bench-press") > percentile_for(
            100, 100, "male", "bench-press"
        )

    def test_capped_at_99(self):
        from liftplan.strength import percentile_for
        assert percentile_for(500, 100, "male", "squat") == 99

    def test_unknown_exercise_is_median(self):
        from liftplan.strength import percentile_for
        assert percentile_for(100, 100, "male", "face-pull-cables") == 50

    def test_both_genders_cover_same_exercises(self):
        from liftplan.strength import MALE_STANDARDS, FEMALE_STANDARDS
        assert set(MALE_STANDARDS) == set(FEMALE_STANDARDS)
        assert len(MALE_STANDARDS) == 51

    def test_standards_resolve_by_id_and_alias(self):
        from liftplan.strength import has_strength_standard, resolve_standard
        for ex_id in ["rear-delt-fly-dumbbells", "tricep-pushdown-cables", "leg-curl-machine",
                      "sumo-deadlift-barbell", "hammer-curl-dumbbells", "row-cables",
                      "deadlift-sumo-barbell", "goblet-squat-dumbbell"]:
            assert has_strength_standard(ex_id, "male")
            assert has_strength_standard(ex_id, "female")
        assert resolve_standard("leg-curl-machine", "female")["advanced"] == 0.75
        assert resolve_standard("row-cables", "male") == resolve_standard("seated-row-cables", "male")

    def test_age_adjustment_raises_percentile(self):
        from liftplan.strength import percentile_for
        assert percentile_for(140, 100, "male", "squat", age=60) > percentile_for(
            140, 100, "male", "squat", age=30
        )

    def test_level_name(self):
        from liftplan.strength import strength_level_name
        assert strength_level_name(5) == "Untrained"
        assert strength_level_name(50) == "Advanced"
        assert strength_level_name(95) == "God"


# ═══════════════════════════════════════════════════════════════════════
# HISTORY AGGREGATOR
# ═══════════════════════════════════════════════════════════════════════

class TestSetsDataframe:

    def test_one_row_per_set(self):
        from liftplan.history import workouts_to_sets_dataframe
        workouts = [_workout("2026-03-01", "squat-barbell", [(225, 5), (225, 5), (225, 4)])]
        df = workouts_to_sets_dataframe(workouts)
        assert len(df) == 3
        assert (df["exercise_id"] == "squat-barbell").all()

    def test_empty(self):
        from liftplan.history import workouts_to_sets_dataframe, SET_COLUMNS
        df = workouts_to_sets_dataframe([])
        assert df.empty
        assert list(df.columns) == SET_COLUMNS

    def test_kg_normalized_to_lbs(self):
        from liftplan.history import workouts_to_sets_dataframe
        df = workouts_to_sets_dataframe([_workout("2026-03-01", "squat-barbell", [(100, 5)], unit="kg")])
        assert df["weight_lbs"].iloc[0] == 220.5


class TestExerciseHistory:

    def test_empty_inputs(self):
        from liftplan.history import get_exercise_history
        assert get_exercise_history("bench-press-barbell", []) == []
        assert get_exercise_history("", BENCH_135x8) == []
        assert get_exercise_history("squat-barbell", BENCH_135x8) == []

    def test_skips_incomplete_and_unloaded(self):
        from liftplan.history import get_exercise_history
        workouts = [_workout("2026-03-01", "pull-up-bodyweight", [(0, 10), (25, 5, False)])]
        assert get_exercise_history("pull-up-bodyweight", workouts) == []

    def test_best_set_by_estimated_max_not_weight(self):
        from liftplan.history import get_exercise_history
        workouts = [_workout("2026-03-01", "bench-press-barbell", [(225, 1), (185, 8)])]
        sessions = get_exercise_history("bench-press-barbell", workouts)
        assert len(sessions) == 1
        assert sessions[0]["weight"] == 185
        assert sessions[0]["reps"] == 8

    def test_kg_set_compared_in_lbs(self):
        from liftplan.history import get_exercise_history
        workout = _workout("2026-03-01", "squat-barbell", [(200, 5)])
        workout["exercises"][0]["completed_sets"] += _sets([(100, 5)], unit="kg")
        sessions = get_exercise_history("squat-barbell", [workout])
        assert sessions[0]["weight"] == 100
        assert sessions[0]["unit"] == "kg"

    def test_sorted_most_recent_first(self):
        from liftplan.history import get_exercise_history
        workouts = [
            _workout("2026-03-05", "squat-barbell", [(230, 5)]),
            _workout("2026-03-01", "squat-barbell", [(225, 5)]),
            _workout("2026-03-09", "squat-barbell", [(235, 5)]),
        ]
        sessions = get_exercise_history("squat-barbell", workouts)
        assert [s["weight"] for s in sessions] == [235, 230, 225]
        dates = [s["date"] for s in sessions]
        assert dates == sorted(dates, reverse=True)
        assert all(s["weight"] > 0 for s in sessions)

    def test_completed_all_sets_flag(self):
        from liftplan.history import get_exercise_history
        workouts = [
            _workout("2026-03-01", "squat-barbell", [(225, 5), (225, 5), (225, 3, False)], planned_sets=3),
            _workout("2026-03-03", "squat-barbell", [(225, 5), (225, 5)]),
        ]
        sessions = get_exercise_history("squat-barbell", workouts)
        assert sessions[0]["completed_all_sets"] is True   # no plan known
        assert sessions[1]["completed_all_sets"] is False  # 2 of 3
        assert sessions[1]["sets_completed"] == 2

    def test_input_not_mutated(self):
        from liftplan.history import get_exercise_history
        workouts = copy.deepcopy(BENCH_135x8)
        get_exercise_history("bench-press-barbell", workouts)
        assert workouts == BENCH_135x8


# ═══════════════════════════════════════════════════════════════════════
# PROGRESSIVE OVERLOAD
# ═══════════════════════════════════════════════════════════════════════

class TestRoundWeight:

    def test_increments(self):
        from liftplan.overload import round_weight
        assert round_weight(134.6, "lbs") == 135
        assert round_weight(61.04, "kg") == 60

    def test_half_rounds_up(self):
        from liftplan.overload import round_weight
        assert round_weight(2.5, "lbs") == 5
        assert round_weight(1.25, "kg") == 2.5

    def test_never_negative(self):
        from liftplan.overload import round_weight
        assert round_weight(-3, "lbs") == 0


class TestNormalizeRoutineExercise:

    def test_legacy_count(self):
        from liftplan.overload import normalize_routine_exercise
        ex = normalize_routine_exercise({"exercise_id": "squat-barbell", "sets": 4})
        assert ex["sets"] == [{"reps": 10, "is_warmup": False}] * 4

    def test_legacy_count_keeps_reps(self):
        from liftplan.overload import normalize_routine_exercise
        ex = normalize_routine_exercise({"exercise_id": "squat-barbell", "sets": 2, "reps": 5})
        assert [s["reps"] for s in ex["sets"]] == [5, 5]

    def test_missing_sets_defaults_to_three(self):
        from liftplan.overload import normalize_routine_exercise
        assert len(normalize_routine_exercise({"exercise_id": "x"})["sets"]) == 3

    def test_explicit_list_copied(self):
        from liftplan.overload import normalize_routine_exercise
        original = _routine_exercise(reps=(8, 8))
        ex = normalize_routine_exercise(original)
        ex["sets"][0]["reps"] = 1
        assert original["sets"][0]["reps"] == 8


class TestCalculateExerciseWeights:

    def test_bench_135_for_8(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(_routine_exercise(reps=(8,)), BENCH_135x8, "lbs")
        assert result["sets"][0]["target_weight"] == 135
        assert result["sets"][0]["unit"] == "lbs"
        assert result["working_weight"] == 135
        assert result["progression"] == "maintain"
        assert result["estimated_1rm"] == 168
        assert result["exercise_name"] == "Bench Press (Barbell)"
        assert result["last_performed"]["weight"] == 135
        assert result["last_performed"]["reps"] == 8
        assert result["last_performed"]["completed"] is True
        assert result["last_performed"]["date"] == pd.Timestamp("2026-03-01T10:00:00Z")

    def test_no_history_zero_targets(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(_routine_exercise(reps=(8, 8, 8)), [], "lbs")
        assert [s["target_weight"] for s in result["sets"]] == [0, 0, 0]
        assert result["progression"] == "maintain"
        assert result["estimated_1rm"] == 0
        assert result["working_weight"] == 0
        assert "last_performed" not in result

    def test_missing_exercise_id_guard(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights({"sets": 3}, BENCH_135x8, "kg")
        assert len(result["sets"]) == 3
        assert all(s["target_weight"] == 0 for s in result["sets"])
        assert result["progression"] == "maintain"
        assert result["exercise_name"] == "Unknown Exercise"
        assert result["unit"] == "kg"

    def test_missing_exercise_id_ignores_stored_name(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(
            {"exercise_name": "Zercher Squat", "sets": 2}, BENCH_135x8, "lbs"
        )
        assert result["exercise_name"] == "Unknown Exercise"

    def test_none_exercise_guard(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(None, [], "lbs")
        assert result["progression"] == "maintain"

    def test_warmup_at_sixty_percent(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(
            _routine_exercise(warmups=(10,), reps=(8,)), BENCH_135x8, "lbs"
        )
        warmup, working = result["sets"]
        assert warmup["target_weight"] == 100  # 168.3 × 0.60 = 101
        assert working["target_weight"] == 135
        assert result["working_weight"] == 135

    def test_only_warmups_working_weight_zero(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(
            _routine_exercise(warmups=(10, 10), reps=()), BENCH_135x8, "lbs"
        )
        assert result["working_weight"] == 0
        assert result["progression"] == "maintain"

    def test_intensity_modifier(self):
        from liftplan.overload import calculate_exercise_weights
        light = calculate_exercise_weights(
            _routine_exercise(reps=(8,), intensity_modifier="light"), BENCH_135x8, "lbs"
        )
        assert light["sets"][0]["target_weight"] == 110
        assert light["progression"] == "decrease"

    def test_unknown_intensity_treated_as_heavy(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(
            _routine_exercise(reps=(8,), intensity_modifier="brutal"), BENCH_135x8, "lbs"
        )
        assert result["sets"][0]["target_weight"] == 135

    def test_progression_increase_and_decrease(self):
        from liftplan.overload import calculate_exercise_weights
        fives = calculate_exercise_weights(_routine_exercise(reps=(5,)), BENCH_135x8, "lbs")
        assert fives["working_weight"] == 145
        assert fives["progression"] == "increase"
        twelves = calculate_exercise_weights(_routine_exercise(reps=(12,)), BENCH_135x8, "lbs")
        assert twelves["working_weight"] == 120
        assert twelves["progression"] == "decrease"

    def test_kg_display_unit(self):
        from liftplan.overload import calculate_exercise_weights
        result = calculate_exercise_weights(_routine_exercise(reps=(8,)), BENCH_135x8, "kg")
        assert result["sets"][0]["target_weight"] == 60
        assert result["last_performed"]["weight"] == 61
        assert result["progression"] == "maintain"
        assert result["unit"] == "kg"

    def test_targets_are_increment_multiples(self):
        from liftplan.overload import calculate_exercise_weights
        history = [_workout("2026-03-01", "squat-barbell", [(102.5, 6)], unit="kg")]
        ex = _routine_exercise("squat-barbell", warmups=(10,), reps=(1, 3, 5, 7, 9, 11, 15))
        for unit, inc in (("lbs", 5), ("kg", 2.5)):
            result = calculate_exercise_weights(ex, history, unit)
            for s in result["sets"]:
                assert s["target_weight"] >= 0
                assert s["target_weight"] % inc == 0

    def test_best_session_informs_target(self):
        from liftplan.overload import calculate_exercise_weights
        history = [
            _workout("2026-02-01", "bench-press-barbell", [(185, 5)]),
            _workout("2026-03-01", "bench-press-barbell", [(135, 5)]),
        ]
        result = calculate_exercise_weights(_routine_exercise(reps=(5,)), history, "lbs")
        assert result["working_weight"] == 185
        assert result["last_performed"]["weight"] == 135
        assert result["progression"] == "increase"

    def test_monotonic_in_logged_weight(self):
        from liftplan.overload import calculate_exercise_weights
        ex = _routine_exercise(reps=(5, 8, 12))
        previous = None
        for weight in range(95, 320, 10):
            history = [_workout("2026-03-01", "bench-press-barbell", [(weight, 8)])]
            result = calculate_exercise_weights(ex, history, "lbs")
            targets = [s["target_weight"] for s in result["sets"]]
            if previous is not None:
                assert all(t >= p for t, p in zip(targets, previous))
            previous = targets

    def test_idempotent_and_pure(self):
        from liftplan.overload import calculate_exercise_weights
        ex = _routine_exercise(reps=(8, 8), warmups=(10,), notes="paused reps")
        ex_before = copy.deepcopy(ex)
        history = copy.deepcopy(BENCH_135x8)
        first = calculate_exercise_weights(ex, history, "lbs")
        second = calculate_exercise_weights(ex, history, "lbs")
        assert first == second
        assert ex == ex_before
        assert history == BENCH_135x8
        assert first["notes"] == "paused reps"

    def test_exercise_name_fallbacks(self):
        from liftplan.overload import calculate_exercise_weights
        custom = calculate_exercise_weights(
            {"exercise_id": "custom_abc", "sets": 1}, [], "lbs"
        )
        assert custom["exercise_name"] == "custom_abc"
        named = calculate_exercise_weights(
            {"exercise_id": "custom_abc", "exercise_name": "Sled Push", "sets": 1}, [], "lbs"
        )
        assert named["exercise_name"] == "Sled Push"


class TestCalculateRoutine:

    def test_preserves_routine_fields(self):
        from liftplan.overload import calculate_routine
        routine = {
            "id": "r1",
            "name": "Push Day",
            "split_type": "push",
            "exercises": [_routine_exercise(reps=(8,)), {"exercise_id": "dip-bodyweight", "sets": 2}],
        }
        before = copy.deepcopy(routine)
        result = calculate_routine(routine, BENCH_135x8, "lbs")
        assert result["id"] == "r1"
        assert result["name"] == "Push Day"
        assert result["split_type"] == "push"
        assert len(result["exercises"]) == 2
        assert result["exercises"][0]["working_weight"] == 135
        assert result["exercises"][1]["working_weight"] == 0
        assert routine == before

    def test_empty_routine(self):
        from liftplan.overload import calculate_routine
        assert calculate_routine({"id": "r2"}, [], "lbs") == {"id": "r2", "exercises": []}

    def test_all_routines(self):
        from liftplan.overload import calculate_all_routines
        assert calculate_all_routines(None, [], "lbs") == []
        results = calculate_all_routines([{"id": "a", "exercises": []}, {"id": "b", "exercises": []}], [], "lbs")
        assert [r["id"] for r in results] == ["a", "b"]
