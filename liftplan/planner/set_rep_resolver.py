"""Set, rep and rest resolution.

Turns continuous parameter ranges into values lifters actually use.
Reps are never the arithmetic midpoint of a range (9, 14, 21 are not
prescriptions anyone writes); they come from a curated scheme per goal
range, or from the conventional rep list.

All randomness goes through `choose_conventional_reps`, which takes the
random source as an argument.
"""

import random
from typing import Protocol

from liftplan.planner.constants import (
    COMPOUND_KEYWORDS,
    COMPOUND_REST_PERCENTILE,
    CONVENTIONAL_REP_COUNTS,
    CONVENTIONAL_REP_SCHEMES,
    ISOLATION_REST_PERCENTILE,
    REST_DURATION_FACTORS,
)
from liftplan.planner.enums import FlexibilityMode, MovementPattern
from liftplan.planner.models import ExerciseRef, IntRange, PlannedExercise, TrainingParameters


class ChoiceSource(Protocol):
    """Anything with `random.Random.choice` semantics."""

    def choice(self, seq): ...


def is_compound_exercise(exercise: ExerciseRef) -> bool:
    """Classify an exercise as compound or isolation.

    The catalog's movement pattern tag wins; names are only consulted
    when the tag is absent.
    """
    if exercise.movement_pattern is not None:
        return exercise.movement_pattern == MovementPattern.COMPOUND
    name = exercise.name.lower()
    return any(keyword in name for keyword in COMPOUND_KEYWORDS)


def resolve_sets(sets_range: IntRange, target_per_muscle: int) -> int:
    """Lower bound of the set range, +1 when a muscle gets more than two exercises."""
    bonus = 1 if target_per_muscle > 2 else 0
    return min(sets_range.upper, sets_range.lower + bonus)


def nearest_conventional_reps(active_range: IntRange) -> int:
    """Conventional rep count closest to the range midpoint, clamped into range."""
    in_range = [reps for reps in CONVENTIONAL_REP_COUNTS if active_range.contains(reps)]
    candidates = in_range or list(CONVENTIONAL_REP_COUNTS)
    midpoint = active_range.midpoint
    best = min(candidates, key=lambda reps: (abs(reps - midpoint), reps))
    return active_range.clamp(best)


def choose_conventional_reps(
    active_range: IntRange,
    goal_range: IntRange,
    is_compound: bool,
    rng: ChoiceSource,
) -> int:
    """Pick a rep count for one exercise.

    Args:
        active_range: Experience-adjusted rep range
        goal_range: Unadjusted goal rep range (selects the curated scheme)
        is_compound: Compound or isolation movement
        rng: Random source; only `choice` is used

    Returns:
        Rep count inside `active_range`
    """
    scheme = CONVENTIONAL_REP_SCHEMES.get((goal_range.lower, goal_range.upper))
    if scheme is not None:
        compound_choices, isolation_choices = scheme
        pool = compound_choices if is_compound else isolation_choices
        allowed = [reps for reps in pool if active_range.contains(reps)]
        if allowed:
            return rng.choice(allowed)
    return nearest_conventional_reps(active_range)


def rest_duration_factor(available_minutes: int) -> float:
    for max_minutes, factor in REST_DURATION_FACTORS:
        if available_minutes < max_minutes:
            return factor
    return 1.0


def resolve_rest_seconds(rest_range: IntRange, is_compound: bool, available_minutes: int | None = None) -> int:
    """Efficient rest: 50th percentile for compounds, 25th for isolation.

    Args:
        rest_range: Rest range in effect
        is_compound: Compound or isolation movement
        available_minutes: Optional session length; shorter sessions scale rest down

    Returns:
        Rest in seconds, never below the range's lower bound
    """
    percentile = COMPOUND_REST_PERCENTILE if is_compound else ISOLATION_REST_PERCENTILE
    rest = rest_range.percentile(percentile)
    if available_minutes is not None:
        rest *= rest_duration_factor(available_minutes)
    return max(rest_range.lower, round(rest))


def resolve_planned_exercise(
    exercise: ExerciseRef,
    muscle_group: str,
    params: TrainingParameters,
    target_per_muscle: int,
    available_minutes: int | None = None,
    rng: ChoiceSource | None = None,
) -> PlannedExercise:
    """Build the prescription for a selected work exercise."""
    compound = is_compound_exercise(exercise)
    return PlannedExercise(
        exercise_id=exercise.id,
        name=exercise.name,
        muscle_group=muscle_group,
        is_compound=compound,
        sets=resolve_sets(params.sets_per_exercise, target_per_muscle),
        reps=choose_conventional_reps(params.rep_range, params.goal_rep_range, compound, rng or random.Random()),
        rest_seconds=resolve_rest_seconds(params.rest_between_sets_seconds, compound, available_minutes),
    )


def _flexibility_prescription(name: str, mode: FlexibilityMode) -> tuple[int, int, int]:
    if mode == FlexibilityMode.WARMUP:
        if "activation" in name or "primer" in name:
            return 2, 8, 15
        if "dynamic" in name or "swing" in name or "circle" in name:
            return 2, 10, 10
        return 1, 8, 15
    if "hold" in name or "static" in name:
        return 1, 1, 20
    return 1, 1, 15


def resolve_flexibility_exercise(exercise: ExerciseRef, mode: FlexibilityMode) -> PlannedExercise:
    """Prescription for a warm-up or cool-down block entry (sets, reps, rest)."""
    sets, reps, rest = _flexibility_prescription(exercise.name.lower(), mode)
    return PlannedExercise(
        exercise_id=exercise.id,
        name=exercise.name,
        muscle_group=exercise.muscle_groups[0] if exercise.muscle_groups else mode.value,
        is_compound=is_compound_exercise(exercise),
        sets=sets,
        reps=reps,
        rest_seconds=rest,
    )
