"""Tests for running a blocking catalog off the event loop, end to end with the engine."""

import threading

import pytest

from liftplan.catalog import BlockingCatalogAdapter, load_catalog
from liftplan.config.settings import get_default_catalog_path
from liftplan.planner import FlexibilityFlags, GenerationRequest, WorkoutPlanEngine
from liftplan.planner.enums import ExperienceLevel, FitnessGoal, FlexibilityMode


class RecordingCatalog:
    """Sync catalog that records which thread served each query."""

    def __init__(self) -> None:
        self.inner = load_catalog(get_default_catalog_path())
        self.threads: list[int] = []

    def candidates(self, muscle_group, count, equipment_filter=None, avoid=frozenset()):
        self.threads.append(threading.get_ident())
        return self.inner.candidates(muscle_group, count, equipment_filter, avoid)

    def flexibility_candidates(self, muscle_groups, mode, count):
        self.threads.append(threading.get_ident())
        return self.inner.flexibility_candidates(muscle_groups, mode, count)


@pytest.mark.asyncio
async def test_queries_run_in_worker_thread():
    sync_catalog = RecordingCatalog()
    adapter = BlockingCatalogAdapter(sync_catalog)

    refs = await adapter.fetch_candidates("Chest", 3, None, frozenset())
    flexibility = await adapter.fetch_flexibility_candidates(("Chest",), FlexibilityMode.WARMUP, 2)

    assert [ref.id for ref in refs] == [101, 102, 801]
    assert len(flexibility) == 2
    assert threading.get_ident() not in sync_catalog.threads


@pytest.mark.asyncio
async def test_engine_over_bundled_catalog_respects_equipment():
    catalog = load_catalog(get_default_catalog_path())
    entries = {entry.id: entry for entry in catalog.entries}
    engine = WorkoutPlanEngine(BlockingCatalogAdapter(catalog), rep_seed=21)

    plan = await engine.generate(
        GenerationRequest(
            duration_minutes=45,
            muscle_groups=("Chest", "Back"),
            goal=FitnessGoal.HYPERTROPHY,
            experience_level=ExperienceLevel.ADVANCED,
            equipment_filter=("Dumbbell", "Bench"),
            flexibility=FlexibilityFlags(warm_up=True),
        )
    )

    assert plan.ordered_exercises
    assert len(plan.exercise_ids) == len(plan.ordered_exercises)
    for exercise in plan.ordered_exercises:
        assert set(entries[exercise.exercise_id].equipment) <= {"dumbbell", "bench"}
    assert plan.warm_up_exercises
    assert plan.cool_down_exercises is None
