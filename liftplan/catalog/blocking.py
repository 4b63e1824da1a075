"""Async adapter over a synchronous (blocking) catalog.

Wraps catalogs whose queries block (a database session, a file scan) so
they run in a worker thread and never stall the event loop.
"""

import asyncio
from collections.abc import Sequence
from typing import Protocol

from loguru import logger

from liftplan.planner.enums import FlexibilityMode
from liftplan.planner.models import ExerciseRef


class SyncExerciseCatalog(Protocol):
    def candidates(
        self,
        muscle_group: str,
        count: int,
        equipment_filter: Sequence[str] | None = None,
        avoid: frozenset[int] = frozenset(),
    ) -> list[ExerciseRef]: ...

    def flexibility_candidates(
        self,
        muscle_groups: Sequence[str],
        mode: FlexibilityMode,
        count: int,
    ) -> list[ExerciseRef]: ...


class BlockingCatalogAdapter:
    """Runs a SyncExerciseCatalog's queries via asyncio.to_thread."""

    def __init__(self, catalog: SyncExerciseCatalog) -> None:
        self._catalog = catalog

    async def fetch_candidates(
        self,
        muscle_group: str,
        count: int,
        equipment_filter: Sequence[str] | None,
        avoid: frozenset[int],
    ) -> list[ExerciseRef]:
        logger.debug("Catalog query in worker thread", muscle_group=muscle_group, count=count)
        return await asyncio.to_thread(self._catalog.candidates, muscle_group, count, equipment_filter, avoid)

    async def fetch_flexibility_candidates(
        self,
        muscle_groups: Sequence[str],
        mode: FlexibilityMode,
        count: int,
    ) -> list[ExerciseRef]:
        return await asyncio.to_thread(self._catalog.flexibility_candidates, list(muscle_groups), mode, count)
