"""Workout plan generation engine.

Public entry points:
- WorkoutPlanEngine: one generation run per request
- GenerationOrchestrator: last-request-wins publication of the current plan
"""

from liftplan.planner.engine import WorkoutPlanEngine
from liftplan.planner.enums import ExperienceLevel, FitnessGoal, FlexibilityMode, MovementPattern, PlanFailure
from liftplan.planner.models import (
    ExerciseRef,
    FlexibilityFlags,
    GenerationRequest,
    PlannedExercise,
    TimeBreakdown,
    WorkoutPlan,
)
from liftplan.planner.orchestrator import GenerationOrchestrator

__all__ = [
    "ExerciseRef",
    "ExperienceLevel",
    "FitnessGoal",
    "FlexibilityFlags",
    "FlexibilityMode",
    "GenerationOrchestrator",
    "GenerationRequest",
    "MovementPattern",
    "PlanFailure",
    "PlannedExercise",
    "TimeBreakdown",
    "WorkoutPlan",
    "WorkoutPlanEngine",
]
