"""Domain-specific errors for workout plan generation.

Only InvalidInputError and "every muscle group failed" are reportable to the
caller, and both are reported as the empty-plan value rather than raised out
of the engine. CatalogUnavailableError is absorbed per muscle group and
SupersededError never leaves the orchestrator.
"""


class PlannerError(Exception):
    """Base exception for all planning errors."""

    pass


class InvalidInputError(PlannerError):
    """Raised when a request cannot be planned (e.g., zero muscle groups, non-positive duration)."""

    pass


class CatalogUnavailableError(PlannerError):
    """Raised when the exercise catalog fails or times out for a muscle group.

    Attributes:
        muscle_group: Muscle group whose query failed
        original_error: Underlying exception, if any
    """

    def __init__(self, muscle_group: str, original_error: BaseException | None = None) -> None:
        self.muscle_group = muscle_group
        self.original_error = original_error
        detail = f": {original_error!r}" if original_error is not None else ""
        super().__init__(f"Catalog unavailable for '{muscle_group}'{detail}")


class SupersededError(PlannerError):
    """Raised when a stale generation run reaches the publish point.

    Attributes:
        sequence: Sequence number of the stale run
        latest: Latest sequence number seen by the orchestrator
    """

    def __init__(self, sequence: int, latest: int) -> None:
        self.sequence = sequence
        self.latest = latest
        super().__init__(f"Generation run {sequence} superseded by run {latest}")
