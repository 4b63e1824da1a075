"""Training parameter resolution (goal x experience).

Base ranges per goal are hand-tuned from strength-training practice and
represent an intermediate lifter. Experience levels shift those ranges;
shifting never produces an inverted range or a bound below 1.
"""

from dataclasses import replace

from loguru import logger

from liftplan.planner.constants import (
    EXPERIENCE_OVERHEAD_ADJUSTMENTS,
    EXPERIENCE_RANGE_ADJUSTMENTS,
    MAX_PERCENT_ONE_REP_MAX,
    MIN_TRANSITION_SECONDS,
)
from liftplan.planner.enums import ExperienceLevel, FitnessGoal
from liftplan.planner.models import IntRange, TrainingParameters


def _base(
    goal: FitnessGoal,
    percent: tuple[int, int],
    reps: tuple[int, int],
    rep_duration: tuple[int, int],
    sets: tuple[int, int],
    rest: tuple[int, int],
    compound_setup: int,
    isolation_setup: int,
    transition: int,
) -> TrainingParameters:
    rep_range = IntRange(*reps)
    return TrainingParameters(
        goal=goal,
        experience_level=ExperienceLevel.INTERMEDIATE,
        percent_one_rep_max=IntRange(*percent),
        rep_range=rep_range,
        goal_rep_range=rep_range,
        rep_duration_seconds=IntRange(*rep_duration),
        sets_per_exercise=IntRange(*sets),
        rest_between_sets_seconds=IntRange(*rest),
        compound_setup_seconds=compound_setup,
        isolation_setup_seconds=isolation_setup,
        transition_seconds=transition,
    )


BASE_PARAMETERS: dict[FitnessGoal, TrainingParameters] = {
    # ATP-PC dominant: heavy, low reps, long rest
    FitnessGoal.STRENGTH: _base(FitnessGoal.STRENGTH, (80, 90), (1, 6), (4, 6), (3, 5), (80, 120), 20, 7, 20),
    # Time under tension, moderate rest
    FitnessGoal.HYPERTROPHY: _base(FitnessGoal.HYPERTROPHY, (60, 80), (6, 12), (3, 5), (3, 5), (30, 90), 20, 7, 15),
    FitnessGoal.TONE: _base(FitnessGoal.TONE, (50, 70), (12, 15), (2, 4), (2, 4), (30, 60), 15, 7, 10),
    FitnessGoal.ENDURANCE: _base(FitnessGoal.ENDURANCE, (40, 60), (15, 25), (2, 4), (2, 4), (20, 45), 15, 7, 10),
    FitnessGoal.POWERLIFTING: _base(FitnessGoal.POWERLIFTING, (85, 100), (1, 3), (4, 6), (3, 6), (120, 180), 25, 7, 25),
    FitnessGoal.GENERAL: _base(FitnessGoal.GENERAL, (60, 75), (8, 12), (2, 4), (3, 4), (60, 90), 20, 7, 15),
}


def adjust_for_experience(params: TrainingParameters, experience_level: ExperienceLevel) -> TrainingParameters:
    """Apply the experience adjustment to base parameters.

    Intermediate returns the parameters unchanged (apart from the level tag).
    The goal rep range is never adjusted; it keys the conventional rep scheme.

    Args:
        params: Base (intermediate) parameters for a goal
        experience_level: Target experience level

    Returns:
        Adjusted TrainingParameters
    """
    range_deltas = EXPERIENCE_RANGE_ADJUSTMENTS[experience_level]
    compound_delta, isolation_delta, transition_delta = EXPERIENCE_OVERHEAD_ADJUSTMENTS[experience_level]

    changes: dict[str, object] = {"experience_level": experience_level}
    for field_name, (lower_delta, upper_delta) in range_deltas.items():
        current: IntRange = getattr(params, field_name)
        ceiling = MAX_PERCENT_ONE_REP_MAX if field_name == "percent_one_rep_max" else None
        changes[field_name] = current.shifted(lower_delta, upper_delta, ceiling=ceiling)

    changes["compound_setup_seconds"] = max(1, params.compound_setup_seconds + compound_delta)
    changes["isolation_setup_seconds"] = max(1, params.isolation_setup_seconds + isolation_delta)
    transition = params.transition_seconds + transition_delta
    if transition_delta < 0:
        transition = max(MIN_TRANSITION_SECONDS, transition)
    changes["transition_seconds"] = transition

    return replace(params, **changes)


def resolve_training_parameters(goal: FitnessGoal, experience_level: ExperienceLevel) -> TrainingParameters:
    """Resolve training parameters for a goal and experience level.

    Args:
        goal: Training goal
        experience_level: Lifter experience

    Returns:
        Immutable TrainingParameters for one generation run
    """
    params = adjust_for_experience(BASE_PARAMETERS[FitnessGoal(goal)], ExperienceLevel(experience_level))
    logger.debug(
        "Resolved training parameters",
        goal=params.goal.value,
        experience=params.experience_level.value,
        reps=str(params.rep_range),
        sets=str(params.sets_per_exercise),
        rest=str(params.rest_between_sets_seconds),
    )
    return params
