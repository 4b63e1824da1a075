"""Tests for target muscle group selection precedence."""

from liftplan.planner.enums import FitnessGoal
from liftplan.planner.muscle_selector import fallback_muscle_groups, select_muscle_groups


class StaticAdvisor:
    def __init__(self, groups: list[str]) -> None:
        self.groups = groups
        self.requested: list[int] = []

    def recommend_muscle_groups(self, count: int) -> list[str]:
        self.requested.append(count)
        return list(self.groups)


class BrokenAdvisor:
    def recommend_muscle_groups(self, count: int) -> list[str]:
        raise RuntimeError("recovery service offline")


def test_custom_selection_wins_over_advisor():
    advisor = StaticAdvisor(["Glutes", "Hamstrings", "Abs"])
    selected = select_muscle_groups(FitnessGoal.STRENGTH, custom=["Biceps", "Triceps"], recovery_advisor=advisor)

    assert selected == ["Biceps", "Triceps"]
    assert advisor.requested == []


def test_custom_selection_deduplicated_and_truncated():
    selected = select_muscle_groups(
        FitnessGoal.GENERAL,
        custom=["Chest", "Back", "Chest", "Abs", "Glutes", "Biceps"],
    )
    assert selected == ["Chest", "Back", "Abs", "Glutes"]


def test_recovery_recommendation_used_with_three_groups():
    advisor = StaticAdvisor(["Glutes", "Hamstrings", "Abs"])
    selected = select_muscle_groups(FitnessGoal.HYPERTROPHY, recovery_advisor=advisor)

    assert selected == ["Glutes", "Hamstrings", "Abs"]
    assert advisor.requested == [4]


def test_short_recovery_recommendation_falls_back_to_goal():
    advisor = StaticAdvisor(["Glutes", "Glutes", "Abs"])
    selected = select_muscle_groups(FitnessGoal.ENDURANCE, recovery_advisor=advisor)

    assert selected == ["Chest", "Back", "Quadriceps", "Abs"]


def test_failing_advisor_falls_back_to_goal():
    selected = select_muscle_groups(FitnessGoal.HYPERTROPHY, recovery_advisor=BrokenAdvisor())
    assert selected == ["Chest", "Back", "Shoulders", "Biceps"]


def test_goal_fallback_tables():
    assert fallback_muscle_groups(FitnessGoal.STRENGTH) == ["Chest", "Back", "Shoulders", "Quadriceps", "Glutes"]
    assert fallback_muscle_groups(FitnessGoal.POWERLIFTING) == fallback_muscle_groups(FitnessGoal.STRENGTH)
    assert fallback_muscle_groups(FitnessGoal.TONE) == ["Chest", "Back", "Shoulders", "Quadriceps"]
    assert fallback_muscle_groups(FitnessGoal.GENERAL) == ["Chest", "Back", "Shoulders", "Quadriceps"]


def test_fallback_is_a_copy():
    groups = fallback_muscle_groups(FitnessGoal.STRENGTH)
    groups.append("Calves")
    assert "Calves" not in fallback_muscle_groups(FitnessGoal.STRENGTH)


def test_limit_applies_to_every_source():
    assert len(select_muscle_groups(FitnessGoal.STRENGTH)) == 4
    assert select_muscle_groups(FitnessGoal.STRENGTH, limit=2) == ["Chest", "Back"]
