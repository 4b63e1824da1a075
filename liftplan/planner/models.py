"""Core immutable data models for workout planning.

This module defines the canonical data structures that represent:
- Training parameters (per-goal, experience-adjusted ranges)
- Catalog references and planned exercises
- The time budget derived from a requested duration
- The final workout plan and its time breakdown
- The generation request (input value type)

Planning models are frozen dataclasses; the request is a frozen pydantic
model so that it can be built from loosely-typed caller input.
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from liftplan.planner.enums import (
    ExperienceLevel,
    FitnessGoal,
    MovementPattern,
    PlanFailure,
)


# -----------------------------
# Ranges & Parameters
# -----------------------------
@dataclass(frozen=True)
class IntRange:
    """Closed integer range [lower, upper]."""

    lower: int
    upper: int

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"Inverted range: {self.lower}..{self.upper}")

    @property
    def midpoint(self) -> float:
        return (self.lower + self.upper) / 2

    def contains(self, value: int) -> bool:
        return self.lower <= value <= self.upper

    def percentile(self, fraction: float) -> float:
        """Value at the given fraction (0.0-1.0) of the range."""
        return self.lower + (self.upper - self.lower) * fraction

    def clamp(self, value: int) -> int:
        return min(self.upper, max(self.lower, value))

    def shifted(self, lower_delta: int, upper_delta: int, ceiling: int | None = None) -> "IntRange":
        """Shift both bounds, keeping lower >= 1 and never inverting the range.

        Args:
            lower_delta: Amount added to the lower bound
            upper_delta: Amount added to the upper bound
            ceiling: Optional hard cap applied to both bounds

        Returns:
            New IntRange
        """
        new_lower = max(1, self.lower + lower_delta)
        if ceiling is not None:
            new_lower = min(new_lower, ceiling)
        new_upper = max(new_lower, self.upper + upper_delta)
        if ceiling is not None:
            new_upper = min(new_upper, ceiling)
        return IntRange(new_lower, new_upper)

    def __str__(self) -> str:
        return f"{self.lower}-{self.upper}"


@dataclass(frozen=True)
class TrainingParameters:
    """Immutable training parameters for one generation run.

    Attributes:
        goal: Goal the parameters were resolved for
        experience_level: Experience level applied on top of the goal table
        percent_one_rep_max: Intensity range (% of 1RM)
        rep_range: Experience-adjusted rep range
        goal_rep_range: Unadjusted rep range of the goal (keys the conventional rep scheme)
        rep_duration_seconds: Seconds per repetition
        sets_per_exercise: Set count range
        rest_between_sets_seconds: Rest range between sets
        compound_setup_seconds: Setup overhead for compound movements
        isolation_setup_seconds: Setup overhead for isolation movements
        transition_seconds: Time to move between exercises
    """

    goal: FitnessGoal
    experience_level: ExperienceLevel
    percent_one_rep_max: IntRange
    rep_range: IntRange
    goal_rep_range: IntRange
    rep_duration_seconds: IntRange
    sets_per_exercise: IntRange
    rest_between_sets_seconds: IntRange
    compound_setup_seconds: int
    isolation_setup_seconds: int
    transition_seconds: int

    def setup_seconds(self, is_compound: bool) -> int:
        return self.compound_setup_seconds if is_compound else self.isolation_setup_seconds


# -----------------------------
# Catalog & Exercises
# -----------------------------
@dataclass(frozen=True)
class ExerciseRef:
    """Catalog exercise reference as returned by the catalog adapter.

    Attributes:
        id: Catalog exercise id
        name: Display name
        movement_pattern: Explicit compound/isolation tag (None = unknown, fall back to name)
        equipment: Equipment required by the exercise
        muscle_groups: Muscle groups the exercise targets
    """

    id: int
    name: str
    movement_pattern: MovementPattern | None = None
    equipment: tuple[str, ...] = ()
    muscle_groups: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlannedExercise:
    """Exercise placed in a plan with its prescription."""

    exercise_id: int
    name: str
    muscle_group: str
    is_compound: bool
    sets: int
    reps: int
    rest_seconds: int

    def __post_init__(self) -> None:
        if self.sets < 1 or self.reps < 1 or self.rest_seconds < 0:
            raise ValueError(
                f"Invalid prescription for exercise {self.exercise_id}: "
                f"sets={self.sets} reps={self.reps} rest={self.rest_seconds}"
            )


# -----------------------------
# Time Budget
# -----------------------------
@dataclass(frozen=True)
class TimeBudget:
    """Capacity plan derived from a requested duration.

    Attributes:
        duration_minutes: Requested session duration
        warmup_seconds: Warm-up overhead outside the optimizer's control
        available_exercise_seconds: Duration left for working exercises
        seconds_per_exercise: Estimated seconds per exercise (midpoint based)
        target_total_exercises: Exercise count for the whole session (4-12)
        target_per_muscle: Upper bound on exercises per muscle group (1-4)
        per_muscle_counts: Exercises requested per muscle group, in priority order
    """

    duration_minutes: int
    warmup_seconds: int
    available_exercise_seconds: int
    seconds_per_exercise: float
    target_total_exercises: int
    target_per_muscle: int
    per_muscle_counts: tuple[int, ...]


# -----------------------------
# Plan Output
# -----------------------------
@dataclass(frozen=True)
class TimeBreakdown:
    """Estimated time split in seconds."""

    warmup: int = 0
    work: int = 0
    cooldown: int = 0
    buffer: int = 0

    @property
    def total(self) -> int:
        return self.warmup + self.work + self.cooldown + self.buffer


@dataclass(frozen=True)
class WorkoutPlan:
    """Immutable generated workout plan.

    A plan with no exercises is the explicit failure value; `failure` then
    names the reason and every time figure is zero.
    """

    ordered_exercises: tuple[PlannedExercise, ...]
    estimated_total_seconds: int
    breakdown: TimeBreakdown
    warm_up_exercises: tuple[PlannedExercise, ...] | None = None
    cool_down_exercises: tuple[PlannedExercise, ...] | None = None
    muscle_groups: tuple[str, ...] = ()
    requested_duration_minutes: int = 0
    failure: PlanFailure | None = None

    @classmethod
    def empty(cls, reason: PlanFailure, duration_minutes: int = 0, muscle_groups: tuple[str, ...] = ()) -> "WorkoutPlan":
        return cls(
            ordered_exercises=(),
            estimated_total_seconds=0,
            breakdown=TimeBreakdown(),
            muscle_groups=muscle_groups,
            requested_duration_minutes=duration_minutes,
            failure=reason,
        )

    @property
    def is_empty(self) -> bool:
        return not self.ordered_exercises

    @property
    def exercise_ids(self) -> set[int]:
        return {e.exercise_id for e in self.ordered_exercises}

    @property
    def estimated_minutes(self) -> int:
        return round(self.estimated_total_seconds / 60)


# -----------------------------
# Request
# -----------------------------
class FlexibilityFlags(BaseModel):
    """Which flexibility blocks to attach to the plan."""

    model_config = ConfigDict(frozen=True)

    warm_up: bool = False
    cool_down: bool = False


class GenerationRequest(BaseModel):
    """Full tuple of inputs for one generation run.

    Attributes:
        duration_minutes: Requested session length
        muscle_groups: Custom muscle selection (None = let the selector choose; [] is invalid)
        goal: Training goal
        experience_level: Lifter experience
        equipment_filter: Available equipment (None = no restriction)
        avoided_exercise_ids: Exercise ids never to select
        flexibility: Warm-up / cool-down toggles
    """

    model_config = ConfigDict(frozen=True)

    duration_minutes: int
    muscle_groups: tuple[str, ...] | None = None
    goal: FitnessGoal = FitnessGoal.GENERAL
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    equipment_filter: tuple[str, ...] | None = None
    avoided_exercise_ids: frozenset[int] = frozenset()
    flexibility: FlexibilityFlags = FlexibilityFlags()
