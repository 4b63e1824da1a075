"""Plan assembly and time reporting.

Builds the final ordered exercise list from per-muscle selections,
attaches flexibility blocks, and computes the time breakdown that is
reported alongside the plan.
"""

from collections.abc import Sequence

from loguru import logger

from liftplan.planner.constants import MAX_FLEXIBILITY_EXERCISES, TIME_BUFFER_FRACTION
from liftplan.planner.enums import PlanFailure
from liftplan.planner.models import (
    PlannedExercise,
    TimeBreakdown,
    TimeBudget,
    TrainingParameters,
    WorkoutPlan,
)


def merge_unique(per_muscle: Sequence[Sequence[PlannedExercise]], used_ids: set[int] | None = None) -> list[PlannedExercise]:
    """Concatenate lists in order, dropping repeated exercise ids.

    Args:
        per_muscle: Exercise lists in muscle-group priority order
        used_ids: Ids already taken elsewhere in the plan (updated in place)

    Returns:
        Flat list with unique ids, original order preserved
    """
    seen = used_ids if used_ids is not None else set()
    merged: list[PlannedExercise] = []
    for exercises in per_muscle:
        for exercise in exercises:
            if exercise.exercise_id in seen:
                logger.debug("Dropping duplicate exercise", exercise_id=exercise.exercise_id, muscle_group=exercise.muscle_group)
                continue
            seen.add(exercise.exercise_id)
            merged.append(exercise)
    return merged


def estimate_work_seconds(exercises: Sequence[PlannedExercise], params: TrainingParameters) -> int:
    """Estimated execution time of the work exercises.

    Per exercise: reps x sets x rep duration midpoint, rest between sets,
    setup by movement type, and a transition to the next exercise (none
    after the last one).
    """
    rep_duration = params.rep_duration_seconds.midpoint
    total = 0.0
    last_index = len(exercises) - 1
    for index, exercise in enumerate(exercises):
        total += exercise.reps * exercise.sets * rep_duration
        total += (exercise.sets - 1) * exercise.rest_seconds
        total += params.setup_seconds(exercise.is_compound)
        if index < last_index:
            total += params.transition_seconds
    return round(total)


def build_breakdown(budget: TimeBudget, work_seconds: int, cool_down: bool) -> TimeBreakdown:
    return TimeBreakdown(
        warmup=budget.warmup_seconds,
        work=max(0, work_seconds),
        cooldown=budget.warmup_seconds if cool_down else 0,
        buffer=round(budget.duration_minutes * 60 * TIME_BUFFER_FRACTION),
    )


def _flexibility_block(block: Sequence[PlannedExercise] | None, used_ids: set[int]) -> tuple[PlannedExercise, ...] | None:
    if block is None:
        return None
    kept = merge_unique([block], set(used_ids))[:MAX_FLEXIBILITY_EXERCISES]
    used_ids.update(e.exercise_id for e in kept)
    return tuple(kept)


def assemble_plan(
    per_muscle: Sequence[Sequence[PlannedExercise]],
    params: TrainingParameters,
    budget: TimeBudget,
    muscle_groups: Sequence[str],
    warm_up: Sequence[PlannedExercise] | None = None,
    cool_down: Sequence[PlannedExercise] | None = None,
) -> WorkoutPlan:
    """Assemble the final plan.

    Args:
        per_muscle: Resolved exercises per muscle group, in priority order
        params: Training parameters in effect
        budget: Time budget the selections were made against
        muscle_groups: Target muscle groups, in priority order
        warm_up: Warm-up block (None = block disabled)
        cool_down: Cool-down block (None = block disabled)

    Returns:
        WorkoutPlan, or the empty plan when nothing was selected
    """
    used_ids: set[int] = set()
    ordered = merge_unique(per_muscle, used_ids)
    if not ordered:
        return WorkoutPlan.empty(PlanFailure.NO_CANDIDATES, budget.duration_minutes, tuple(muscle_groups))

    warm_up_block = _flexibility_block(warm_up, used_ids)
    cool_down_block = _flexibility_block(cool_down, used_ids)

    work_seconds = estimate_work_seconds(ordered, params)
    breakdown = build_breakdown(budget, work_seconds, cool_down=cool_down is not None)

    plan = WorkoutPlan(
        ordered_exercises=tuple(ordered),
        estimated_total_seconds=breakdown.total,
        breakdown=breakdown,
        warm_up_exercises=warm_up_block,
        cool_down_exercises=cool_down_block,
        muscle_groups=tuple(muscle_groups),
        requested_duration_minutes=budget.duration_minutes,
    )
    logger.info(
        "Assembled workout plan",
        exercises=len(ordered),
        warm_up=len(warm_up_block or ()),
        cool_down=len(cool_down_block or ()),
        estimated_minutes=plan.estimated_minutes,
        requested_minutes=budget.duration_minutes,
    )
    return plan
