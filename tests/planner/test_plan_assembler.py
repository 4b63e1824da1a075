"""Tests for plan assembly and time reporting."""

import pytest

from liftplan.planner.enums import ExperienceLevel, FitnessGoal, PlanFailure
from liftplan.planner.models import PlannedExercise, TimeBudget, TrainingParameters
from liftplan.planner.parameters import resolve_training_parameters
from liftplan.planner.plan_assembler import (
    assemble_plan,
    build_breakdown,
    estimate_work_seconds,
    merge_unique,
)
from liftplan.planner.time_budget import plan_time_budget


def _exercise(exercise_id: int, muscle: str = "Chest", compound: bool = True, sets: int = 3, reps: int = 10, rest: int = 75) -> PlannedExercise:
    return PlannedExercise(
        exercise_id=exercise_id,
        name=f"Exercise {exercise_id}",
        muscle_group=muscle,
        is_compound=compound,
        sets=sets,
        reps=reps,
        rest_seconds=rest,
    )


@pytest.fixture
def general_params() -> TrainingParameters:
    return resolve_training_parameters(FitnessGoal.GENERAL, ExperienceLevel.INTERMEDIATE)


@pytest.fixture
def budget_45(general_params: TrainingParameters) -> TimeBudget:
    return plan_time_budget(45, 2, general_params)


def test_merge_unique_keeps_first_occurrence():
    chest = [_exercise(1), _exercise(2)]
    back = [_exercise(2, "Back"), _exercise(3, "Back")]

    merged = merge_unique([chest, back])

    assert [e.exercise_id for e in merged] == [1, 2, 3]
    assert merged[1].muscle_group == "Chest"


def test_merge_unique_updates_used_ids():
    used: set[int] = {1}
    merged = merge_unique([[_exercise(1), _exercise(4)]], used)

    assert [e.exercise_id for e in merged] == [4]
    assert used == {1, 4}


def test_work_seconds_skip_last_transition(general_params: TrainingParameters):
    exercises = [
        _exercise(1, compound=True, sets=3, reps=10, rest=75),
        _exercise(2, compound=False, sets=3, reps=12, rest=68),
    ]
    # (3*10*3 + 2*75 + 20 + 15) + (3*12*3 + 2*68 + 7)
    assert estimate_work_seconds(exercises, general_params) == 526
    assert estimate_work_seconds([], general_params) == 0


def test_breakdown_values(budget_45: TimeBudget):
    with_cooldown = build_breakdown(budget_45, 1200, cool_down=True)
    without_cooldown = build_breakdown(budget_45, 1200, cool_down=False)

    assert with_cooldown.warmup == 300
    assert with_cooldown.cooldown == 300
    assert with_cooldown.buffer == 81
    assert with_cooldown.total == 300 + 1200 + 300 + 81
    assert without_cooldown.cooldown == 0
    assert build_breakdown(budget_45, -5, cool_down=False).work == 0


def test_assemble_plan_totals(general_params: TrainingParameters, budget_45: TimeBudget):
    per_muscle = [[_exercise(1), _exercise(2, compound=False)], [_exercise(3, "Back")]]
    plan = assemble_plan(per_muscle, general_params, budget_45, ["Chest", "Back"])

    assert not plan.is_empty
    assert plan.failure is None
    assert [e.exercise_id for e in plan.ordered_exercises] == [1, 2, 3]
    assert plan.estimated_total_seconds == plan.breakdown.total
    assert plan.breakdown.work == estimate_work_seconds(plan.ordered_exercises, general_params)
    assert plan.muscle_groups == ("Chest", "Back")
    assert plan.requested_duration_minutes == 45
    assert plan.warm_up_exercises is None
    assert plan.cool_down_exercises is None


def test_flexibility_blocks_deduplicated_and_capped(general_params: TrainingParameters, budget_45: TimeBudget):
    per_muscle = [[_exercise(1)], [_exercise(2, "Back")]]
    warm_up = [_exercise(1, "warmup", sets=1, reps=8, rest=15)] + [
        _exercise(i, "warmup", sets=1, reps=8, rest=15) for i in range(10, 15)
    ]
    cool_down = [
        _exercise(10, "cooldown", sets=1, reps=1, rest=15),
        _exercise(13, "cooldown", sets=1, reps=1, rest=15),
        _exercise(20, "cooldown", sets=1, reps=1, rest=15),
    ]

    plan = assemble_plan(per_muscle, general_params, budget_45, ["Chest", "Back"], warm_up=warm_up, cool_down=cool_down)

    assert [e.exercise_id for e in plan.warm_up_exercises] == [10, 11, 12]
    assert [e.exercise_id for e in plan.cool_down_exercises] == [13, 20]
    assert plan.breakdown.cooldown == plan.breakdown.warmup


def test_empty_selection_is_no_candidates(general_params: TrainingParameters, budget_45: TimeBudget):
    plan = assemble_plan([[], []], general_params, budget_45, ["Chest", "Back"], warm_up=[_exercise(9)])

    assert plan.is_empty
    assert plan.failure == PlanFailure.NO_CANDIDATES
    assert plan.estimated_total_seconds == 0
    assert plan.breakdown.total == 0
