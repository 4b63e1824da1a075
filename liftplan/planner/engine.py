"""Workout plan generation pipeline.

One call to `WorkoutPlanEngine.generate` is one generation run:

    muscle selection -> training parameters -> time budget
    -> per-muscle catalog query -> set/rep/rest resolution
    -> flexibility blocks -> plan assembly

Runs share nothing mutable; each works from its own immutable request
and produces its own plan. Catalog calls are the only await points, so a
run can be cancelled there.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from loguru import logger

from liftplan.config.settings import Settings
from liftplan.planner.catalog import ExerciseCatalogAdapter
from liftplan.planner.constants import MAX_FLEXIBILITY_EXERCISES, MAX_MUSCLE_GROUPS
from liftplan.planner.enums import FlexibilityMode, PlanFailure
from liftplan.planner.errors import CatalogUnavailableError, InvalidInputError
from liftplan.planner.models import (
    ExerciseRef,
    GenerationRequest,
    PlannedExercise,
    TimeBudget,
    TrainingParameters,
    WorkoutPlan,
)
from liftplan.planner.muscle_selector import RecoveryAdvisor, select_muscle_groups
from liftplan.planner.parameters import resolve_training_parameters
from liftplan.planner.plan_assembler import assemble_plan
from liftplan.planner.set_rep_resolver import (
    ChoiceSource,
    resolve_flexibility_exercise,
    resolve_planned_exercise,
)
from liftplan.planner.time_budget import plan_time_budget

T = TypeVar("T")


class WorkoutPlanEngine:
    """Generates a WorkoutPlan for a GenerationRequest.

    Attributes:
        catalog: Exercise catalog adapter
        recovery_advisor: Optional muscle-recovery collaborator
        catalog_timeout_seconds: Per-call catalog timeout (None = no deadline)
        max_muscle_groups: Muscle groups planned for at most
        flexibility_block_size: Exercises requested per flexibility block
    """

    def __init__(
        self,
        catalog: ExerciseCatalogAdapter,
        recovery_advisor: RecoveryAdvisor | None = None,
        *,
        rep_seed: int | None = None,
        rng_factory: Callable[[], ChoiceSource] | None = None,
        catalog_timeout_seconds: float | None = None,
        max_muscle_groups: int = MAX_MUSCLE_GROUPS,
        flexibility_block_size: int = MAX_FLEXIBILITY_EXERCISES,
    ) -> None:
        self.catalog = catalog
        self.recovery_advisor = recovery_advisor
        self.catalog_timeout_seconds = catalog_timeout_seconds
        self.max_muscle_groups = min(max_muscle_groups, MAX_MUSCLE_GROUPS)
        self.flexibility_block_size = min(flexibility_block_size, MAX_FLEXIBILITY_EXERCISES)
        self._rep_seed = rep_seed
        self._rng_factory = rng_factory

    @classmethod
    def from_settings(
        cls,
        catalog: ExerciseCatalogAdapter,
        app_settings: Settings,
        recovery_advisor: RecoveryAdvisor | None = None,
    ) -> "WorkoutPlanEngine":
        return cls(
            catalog,
            recovery_advisor,
            rep_seed=app_settings.rep_seed,
            catalog_timeout_seconds=app_settings.catalog_timeout_seconds,
            max_muscle_groups=app_settings.max_muscle_groups,
            flexibility_block_size=app_settings.flexibility_block_size,
        )

    def _new_rng(self) -> ChoiceSource:
        if self._rng_factory is not None:
            return self._rng_factory()
        return random.Random(self._rep_seed)

    def resolve_muscle_groups(self, request: GenerationRequest) -> list[str]:
        """Validate the request and pick its target muscle groups.

        Raises:
            InvalidInputError: Non-positive duration or an explicit empty selection
        """
        if request.duration_minutes <= 0:
            raise InvalidInputError(f"Duration must be positive, got {request.duration_minutes}")
        if request.muscle_groups is not None and not request.muscle_groups:
            raise InvalidInputError("Explicit muscle group selection is empty")
        return select_muscle_groups(
            request.goal,
            custom=request.muscle_groups,
            recovery_advisor=self.recovery_advisor,
            limit=self.max_muscle_groups,
        )

    async def _query(self, call: Awaitable[T], muscle_group: str) -> T:
        try:
            if self.catalog_timeout_seconds is not None:
                return await asyncio.wait_for(call, timeout=self.catalog_timeout_seconds)
            return await call
        except Exception as e:
            raise CatalogUnavailableError(muscle_group, e) from e

    async def _select_work_exercises(
        self,
        request: GenerationRequest,
        muscle_groups: Sequence[str],
        params: TrainingParameters,
        budget: TimeBudget,
        rng: ChoiceSource,
    ) -> tuple[list[list[PlannedExercise]], int]:
        """Query the catalog muscle by muscle, in priority order.

        Ids picked for earlier muscles join the avoid set for later ones.

        Returns:
            (exercises per muscle group, number of failed catalog queries)
        """
        selected_ids: set[int] = set()
        per_muscle: list[list[PlannedExercise]] = []
        failures = 0

        for muscle_group, count in zip(muscle_groups, budget.per_muscle_counts, strict=True):
            avoid = frozenset(request.avoided_exercise_ids | selected_ids)
            try:
                refs: list[ExerciseRef] = await self._query(
                    self.catalog.fetch_candidates(muscle_group, count, request.equipment_filter, avoid),
                    muscle_group,
                )
            except CatalogUnavailableError as e:
                failures += 1
                logger.warning(f"Catalog query failed, skipping muscle group: {e}")
                per_muscle.append([])
                continue

            accepted = [ref for ref in refs if ref.id not in avoid][:count]
            logger.debug(
                "Catalog candidates",
                muscle_group=muscle_group,
                requested=count,
                returned=len(refs),
                accepted=len(accepted),
            )
            exercises = [
                resolve_planned_exercise(ref, muscle_group, params, budget.target_per_muscle, request.duration_minutes, rng)
                for ref in accepted
            ]
            selected_ids.update(ref.id for ref in accepted)
            per_muscle.append(exercises)

        return per_muscle, failures

    async def _flexibility_block(self, muscle_groups: Sequence[str], mode: FlexibilityMode) -> list[PlannedExercise]:
        if self.flexibility_block_size <= 0:
            return []
        try:
            refs = await self._query(
                self.catalog.fetch_flexibility_candidates(list(muscle_groups), mode, self.flexibility_block_size),
                mode.value,
            )
        except CatalogUnavailableError as e:
            logger.warning(f"Flexibility block unavailable, continuing without it: {e}")
            return []
        return [resolve_flexibility_exercise(ref, mode) for ref in refs[: self.flexibility_block_size]]

    async def generate(self, request: GenerationRequest) -> WorkoutPlan:
        """Run the pipeline once.

        Args:
            request: Immutable generation inputs

        Returns:
            WorkoutPlan, or the empty plan (with `failure` set) on invalid input
            or when every catalog query failed
        """
        try:
            muscle_groups = self.resolve_muscle_groups(request)
            params = resolve_training_parameters(request.goal, request.experience_level)
            budget = plan_time_budget(request.duration_minutes, len(muscle_groups), params)
        except InvalidInputError as e:
            logger.warning(f"Invalid generation request: {e}")
            return WorkoutPlan.empty(PlanFailure.INVALID_INPUT, max(0, request.duration_minutes))

        logger.info(
            "Generating workout plan",
            duration_minutes=request.duration_minutes,
            goal=params.goal.value,
            experience=params.experience_level.value,
            muscle_groups=muscle_groups,
            target_total=budget.target_total_exercises,
        )

        rng = self._new_rng()
        per_muscle, failures = await self._select_work_exercises(request, muscle_groups, params, budget, rng)
        if failures == len(muscle_groups):
            logger.error("Catalog unavailable for every muscle group", muscle_groups=muscle_groups)
            return WorkoutPlan.empty(PlanFailure.CATALOG_UNAVAILABLE, request.duration_minutes, tuple(muscle_groups))

        warm_up = None
        cool_down = None
        if request.flexibility.warm_up:
            warm_up = await self._flexibility_block(muscle_groups, FlexibilityMode.WARMUP)
        if request.flexibility.cool_down:
            cool_down = await self._flexibility_block(muscle_groups, FlexibilityMode.COOLDOWN)

        return assemble_plan(
            per_muscle,
            params,
            budget,
            muscle_groups,
            warm_up=warm_up,
            cool_down=cool_down,
        )
