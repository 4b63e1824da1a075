"""Target muscle group selection.

Precedence, first match wins:
1. Explicit custom selection (non-empty)
2. Recovery-optimized recommendation (at least 3 groups)
3. Goal-based static fallback
"""

from collections.abc import Sequence
from typing import Protocol

from loguru import logger

from liftplan.planner.constants import (
    DEFAULT_FALLBACK_MUSCLE_GROUPS,
    GOAL_FALLBACK_MUSCLE_GROUPS,
    MAX_MUSCLE_GROUPS,
    MIN_RECOVERY_MUSCLE_GROUPS,
)
from liftplan.planner.enums import FitnessGoal


class RecoveryAdvisor(Protocol):
    """Muscle-recovery collaborator: ranked list of recovered muscle groups."""

    def recommend_muscle_groups(self, count: int) -> list[str]: ...


def _dedupe(groups: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for group in groups:
        if group not in seen:
            seen.add(group)
            ordered.append(group)
    return ordered


def fallback_muscle_groups(goal: FitnessGoal) -> list[str]:
    return list(GOAL_FALLBACK_MUSCLE_GROUPS.get(goal, DEFAULT_FALLBACK_MUSCLE_GROUPS))


def select_muscle_groups(
    goal: FitnessGoal,
    custom: Sequence[str] | None = None,
    recovery_advisor: RecoveryAdvisor | None = None,
    limit: int = MAX_MUSCLE_GROUPS,
) -> list[str]:
    """Choose the ordered target muscle groups for a session.

    Args:
        goal: Training goal (drives the static fallback)
        custom: User's explicit selection, if any
        recovery_advisor: Optional recovery collaborator
        limit: Maximum number of groups to plan for

    Returns:
        Ordered muscle group list, truncated to `limit`
    """
    if custom:
        selected = _dedupe(custom)
        source = "custom"
    else:
        recommended: list[str] = []
        if recovery_advisor is not None:
            try:
                recommended = _dedupe(recovery_advisor.recommend_muscle_groups(limit))
            except Exception as e:
                logger.warning(f"Recovery recommendation failed, using goal fallback: {e}")
                recommended = []

        if len(recommended) >= MIN_RECOVERY_MUSCLE_GROUPS:
            selected = recommended
            source = "recovery"
        else:
            selected = fallback_muscle_groups(goal)
            source = "goal_fallback"

    truncated = selected[:limit]
    logger.debug("Selected muscle groups", source=source, muscle_groups=truncated)
    return truncated
