"""Generation orchestration for one logical plan target (e.g. "today").

The current plan is a single-slot mailbox guarded by a monotonically
increasing request sequence:

- every submitted request gets the next sequence number and cancels the
  in-flight run;
- a run first waits out the debounce window, so a burst of configuration
  changes collapses into one run using the final state;
- a finished run publishes only if its sequence is still the latest
  (last request wins); stale results are dropped without surfacing;
- empty plans are never published, the previous plan stays visible.
"""

import asyncio
import threading
from collections.abc import Callable

from loguru import logger

from liftplan.config.settings import Settings
from liftplan.planner.engine import WorkoutPlanEngine
from liftplan.planner.enums import GenerationState
from liftplan.planner.errors import SupersededError
from liftplan.planner.models import GenerationRequest, WorkoutPlan

PublishCallback = Callable[[WorkoutPlan, int], None]


class GenerationOrchestrator:
    """Serializes regeneration requests for one plan target.

    Attributes:
        engine: Pipeline used for every run
        target: Logical target name (used in logs)
        debounce_seconds: Coalescing window before a run starts
    """

    def __init__(
        self,
        engine: WorkoutPlanEngine,
        *,
        target: str = "today",
        debounce_seconds: float = 0.0,
        on_publish: PublishCallback | None = None,
    ) -> None:
        self.engine = engine
        self.target = target
        self.debounce_seconds = debounce_seconds
        self._on_publish = on_publish

        self._lock = threading.Lock()
        self._latest_sequence = 0
        self._published_sequence = 0
        self._current_plan: WorkoutPlan | None = None
        self._last_failure: WorkoutPlan | None = None
        self._task: asyncio.Task[WorkoutPlan | None] | None = None

    @classmethod
    def from_settings(
        cls,
        engine: WorkoutPlanEngine,
        app_settings: Settings,
        *,
        target: str = "today",
        on_publish: PublishCallback | None = None,
    ) -> "GenerationOrchestrator":
        return cls(engine, target=target, debounce_seconds=app_settings.debounce_seconds, on_publish=on_publish)

    # -----------------------------
    # Read side
    # -----------------------------
    @property
    def current_plan(self) -> WorkoutPlan | None:
        with self._lock:
            return self._current_plan

    @property
    def last_failure(self) -> WorkoutPlan | None:
        with self._lock:
            return self._last_failure

    @property
    def published_sequence(self) -> int:
        with self._lock:
            return self._published_sequence

    @property
    def latest_sequence(self) -> int:
        with self._lock:
            return self._latest_sequence

    @property
    def state(self) -> GenerationState:
        task = self._task
        if task is not None and not task.done():
            return GenerationState.GENERATING
        return GenerationState.IDLE

    # -----------------------------
    # Write side
    # -----------------------------
    def submit(self, request: GenerationRequest) -> "asyncio.Task[WorkoutPlan | None]":
        """Start a run for `request`, superseding any in-flight run.

        Must be called from a running event loop.

        Returns:
            Task resolving to the published plan, or None if the run was
            superseded or produced the empty plan
        """
        with self._lock:
            self._latest_sequence += 1
            sequence = self._latest_sequence

        previous = self._task
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Cancelled in-flight generation", target=self.target, superseded_by=sequence)

        self._task = asyncio.get_running_loop().create_task(self._run(sequence, request))
        logger.debug("Submitted generation request", target=self.target, sequence=sequence, duration_minutes=request.duration_minutes)
        return self._task

    async def regenerate(self, request: GenerationRequest) -> WorkoutPlan | None:
        """Submit and wait for the run.

        Cancelling the caller (or a caller-side timeout) stops the wait only;
        the run keeps going and still publishes if it stays the latest.

        Returns:
            The published plan, or None if superseded or failed
        """
        task = self.submit(request)
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if self._superseded(task):
                return None
            raise

    async def wait_idle(self) -> WorkoutPlan | None:
        """Wait until no run is in flight; returns the current plan.

        Waiting never cancels generation.
        """
        while True:
            task = self._task
            if task is None or task.done():
                return self.current_plan
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not self._superseded(task):
                    raise

    @staticmethod
    def _superseded(task: "asyncio.Task[WorkoutPlan | None]") -> bool:
        """True when `task` was cancelled by a newer request, not the waiting caller."""
        current = asyncio.current_task()
        caller_cancelled = current is not None and current.cancelling() > 0
        return task.cancelled() and not caller_cancelled

    def _commit(self, sequence: int, plan: WorkoutPlan) -> None:
        """Publish `plan` only if `sequence` is still the latest request.

        Raises:
            SupersededError: A newer request was submitted meanwhile
        """
        with self._lock:
            if sequence != self._latest_sequence or sequence <= self._published_sequence:
                raise SupersededError(sequence, self._latest_sequence)
            self._current_plan = plan
            self._published_sequence = sequence
            self._last_failure = None

    async def _run(self, sequence: int, request: GenerationRequest) -> WorkoutPlan | None:
        if self.debounce_seconds > 0:
            await asyncio.sleep(self.debounce_seconds)

        if sequence != self.latest_sequence:
            logger.debug("Skipping superseded request before generation", target=self.target, sequence=sequence)
            return None

        plan = await self.engine.generate(request)

        if plan.is_empty:
            with self._lock:
                if sequence == self._latest_sequence:
                    self._last_failure = plan
            logger.warning(
                "Generation produced no plan, keeping previous plan",
                target=self.target,
                sequence=sequence,
                reason=plan.failure.value if plan.failure else None,
            )
            return None

        try:
            self._commit(sequence, plan)
        except SupersededError as e:
            logger.debug(f"Discarding stale generation result: {e}", target=self.target)
            return None

        logger.info(
            "Published workout plan",
            target=self.target,
            sequence=sequence,
            exercises=len(plan.ordered_exercises),
            estimated_minutes=plan.estimated_minutes,
        )
        if self._on_publish is not None:
            self._on_publish(plan, sequence)
        return plan
