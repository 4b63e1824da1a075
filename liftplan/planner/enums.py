"""Canonical enums for workout planning dimensions.

All enums are string-based to ensure JSON serialization compatibility
with stored preferences and catalog files.
"""

from enum import StrEnum


# -----------------------------
# Training Goal
# -----------------------------
class FitnessGoal(StrEnum):
    """User's training goal for the session."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    TONE = "tone"
    ENDURANCE = "endurance"
    POWERLIFTING = "powerlifting"
    GENERAL = "general"


# -----------------------------
# Experience
# -----------------------------
class ExperienceLevel(StrEnum):
    """Lifter experience level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# -----------------------------
# Exercise Classification
# -----------------------------
class MovementPattern(StrEnum):
    """Movement classification driving setup time and rest policy."""

    COMPOUND = "compound"
    ISOLATION = "isolation"


class FlexibilityMode(StrEnum):
    """Query mode for flexibility blocks."""

    WARMUP = "warmup"
    COOLDOWN = "cooldown"


class ExerciseCategory(StrEnum):
    """Catalog category of an exercise entry."""

    STRENGTH = "strength"
    WARMUP = "warmup"
    COOLDOWN = "cooldown"


# -----------------------------
# Outcomes
# -----------------------------
class PlanFailure(StrEnum):
    """Reason attached to the empty-plan value."""

    INVALID_INPUT = "invalid_input"
    CATALOG_UNAVAILABLE = "catalog_unavailable"
    NO_CANDIDATES = "no_candidates"


class GenerationState(StrEnum):
    """Orchestrator state for one logical plan target."""

    IDLE = "idle"
    GENERATING = "generating"
