"""Time budget planning.

Converts a requested session duration into a target exercise count.
This is a single-pass estimate: the engine commits to the per-muscle
counts computed here and only measures the realized time afterwards.

Rest is deliberately under-estimated (efficiency factor 0.5, and 0.85 on
top for short sessions) so the estimate leans towards more exercises;
rest is the most compressible dimension at execution time.
"""

import math

from loguru import logger

from liftplan.planner.constants import (
    MAX_EXERCISES_PER_MUSCLE,
    MAX_TOTAL_EXERCISES,
    MIN_EXERCISES_PER_MUSCLE,
    MIN_TOTAL_EXERCISES,
    REST_EFFICIENCY_FACTOR,
    SHORT_WORKOUT_MAX_MINUTES,
    SHORT_WORKOUT_REST_FACTOR,
    WARMUP_SECONDS_LONG,
    WARMUP_STEPS,
)
from liftplan.planner.errors import InvalidInputError
from liftplan.planner.models import TimeBudget, TrainingParameters

# Last minute of every band in which the estimate is non-decreasing
_BAND_EDGES = tuple(sorted({max_minutes for max_minutes, _ in WARMUP_STEPS} | {SHORT_WORKOUT_MAX_MINUTES}))


def warmup_seconds_for(duration_minutes: int) -> int:
    """Warm-up overhead for a session length (step function)."""
    for max_minutes, seconds in WARMUP_STEPS:
        if duration_minutes <= max_minutes:
            return seconds
    return WARMUP_SECONDS_LONG


def estimate_seconds_per_exercise(duration_minutes: int, params: TrainingParameters) -> float:
    """Estimate one exercise's duration from parameter midpoints.

    Args:
        duration_minutes: Requested session length (short sessions compress rest further)
        params: Training parameters in effect

    Returns:
        Estimated seconds including setup and transition
    """
    sets = params.sets_per_exercise.midpoint
    working = sets * params.rep_range.midpoint * params.rep_duration_seconds.midpoint

    rest = max(0.0, sets - 1) * params.rest_between_sets_seconds.midpoint * REST_EFFICIENCY_FACTOR
    if duration_minutes <= SHORT_WORKOUT_MAX_MINUTES:
        rest *= SHORT_WORKOUT_REST_FACTOR

    return working + rest + params.compound_setup_seconds + params.transition_seconds


def _raw_exercise_estimate(duration_minutes: int, params: TrainingParameters) -> int:
    available = duration_minutes * 60 - warmup_seconds_for(duration_minutes)
    if available <= 0:
        return 0
    return round(available / estimate_seconds_per_exercise(duration_minutes, params))


def target_total_exercises(duration_minutes: int, params: TrainingParameters) -> int:
    """Target exercise count for a session, clamped to [4, 12].

    The warm-up step and the short-session rest factor both change at band
    edges, where the raw estimate can drop by one. Taking the maximum over
    the edges below the requested duration keeps the count non-decreasing
    in duration.
    """
    estimate = _raw_exercise_estimate(duration_minutes, params)
    for edge in _BAND_EDGES:
        if edge < duration_minutes:
            estimate = max(estimate, _raw_exercise_estimate(edge, params))
    return min(MAX_TOTAL_EXERCISES, max(MIN_TOTAL_EXERCISES, estimate))


def distribute_exercises(total: int, muscle_group_count: int, per_muscle_cap: int) -> tuple[int, ...]:
    """Split a total across muscle groups; earlier groups absorb the remainder.

    Args:
        total: Total exercises to distribute
        muscle_group_count: Number of muscle groups (priority order)
        per_muscle_cap: Maximum exercises for a single group

    Returns:
        Count per muscle group, each in [1, per_muscle_cap]
    """
    base, remainder = divmod(total, muscle_group_count)
    counts = []
    for index in range(muscle_group_count):
        count = base + (1 if index < remainder else 0)
        counts.append(min(per_muscle_cap, max(MIN_EXERCISES_PER_MUSCLE, count)))
    return tuple(counts)


def plan_time_budget(duration_minutes: int, muscle_group_count: int, params: TrainingParameters) -> TimeBudget:
    """Plan the exercise budget for a session.

    Args:
        duration_minutes: Requested session length
        muscle_group_count: Number of target muscle groups
        params: Training parameters in effect

    Returns:
        TimeBudget with total and per-muscle targets

    Raises:
        InvalidInputError: If there are no muscle groups or the duration is not positive
    """
    if muscle_group_count <= 0:
        raise InvalidInputError("Cannot plan a time budget without muscle groups")
    if duration_minutes <= 0:
        raise InvalidInputError(f"Duration must be positive, got {duration_minutes}")

    warmup = warmup_seconds_for(duration_minutes)
    per_exercise = estimate_seconds_per_exercise(duration_minutes, params)
    total = target_total_exercises(duration_minutes, params)
    per_muscle = min(
        MAX_EXERCISES_PER_MUSCLE,
        max(MIN_EXERCISES_PER_MUSCLE, math.ceil(total / muscle_group_count)),
    )

    budget = TimeBudget(
        duration_minutes=duration_minutes,
        warmup_seconds=warmup,
        available_exercise_seconds=max(0, duration_minutes * 60 - warmup),
        seconds_per_exercise=per_exercise,
        target_total_exercises=total,
        target_per_muscle=per_muscle,
        per_muscle_counts=distribute_exercises(total, muscle_group_count, per_muscle),
    )
    logger.debug(
        "Planned time budget",
        duration_minutes=duration_minutes,
        warmup_seconds=warmup,
        seconds_per_exercise=round(per_exercise, 1),
        total=total,
        per_muscle=per_muscle,
        counts=list(budget.per_muscle_counts),
    )
    return budget
