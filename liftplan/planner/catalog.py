"""Exercise catalog boundary.

The engine only depends on this protocol. Implementations live in
`liftplan.catalog`; any object with these two coroutines will do.
Results are ordered by relevance and may be shorter than `count`.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from liftplan.planner.enums import FlexibilityMode
from liftplan.planner.models import ExerciseRef


@runtime_checkable
class ExerciseCatalogAdapter(Protocol):
    async def fetch_candidates(
        self,
        muscle_group: str,
        count: int,
        equipment_filter: Sequence[str] | None,
        avoid: frozenset[int],
    ) -> list[ExerciseRef]: ...

    async def fetch_flexibility_candidates(
        self,
        muscle_groups: Sequence[str],
        mode: FlexibilityMode,
        count: int,
    ) -> list[ExerciseRef]: ...
