"""Root conftest for all tests.

Shared fixtures: fake async exercise catalogs and seeded random sources.
"""

import asyncio
import random
import sys
from collections.abc import Sequence
from pathlib import Path

import pytest

# Add project root to path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from liftplan.planner.enums import FlexibilityMode, MovementPattern
from liftplan.planner.models import ExerciseRef

MUSCLES = ["Chest", "Back", "Shoulders", "Quadriceps", "Glutes", "Biceps", "Triceps", "Abs", "Hamstrings"]


def make_exercises(muscle: str, base_id: int, count: int = 8) -> list[ExerciseRef]:
    """Alternating compound (tagged) and isolation (tagged) exercises for one muscle."""
    exercises = []
    for index in range(count):
        compound = index % 2 == 0
        exercises.append(
            ExerciseRef(
                id=base_id + index,
                name=f"{muscle} {'Press' if compound else 'Fly'} {index}",
                movement_pattern=MovementPattern.COMPOUND if compound else MovementPattern.ISOLATION,
                muscle_groups=(muscle,),
            )
        )
    return exercises


class FakeCatalog:
    """Async catalog over fixed per-muscle lists.

    Attributes:
        calls: (muscle_group, count, avoid) per fetch_candidates call
        failing: Muscle groups whose queries raise
        delay: Seconds each query sleeps before answering
        honor_avoid: When False, returns avoided ids anyway
    """

    def __init__(
        self,
        exercises: dict[str, list[ExerciseRef]],
        flexibility: dict[FlexibilityMode, list[ExerciseRef]] | None = None,
        failing: Sequence[str] = (),
        delay: float = 0.0,
        honor_avoid: bool = True,
    ) -> None:
        self.exercises = exercises
        self.flexibility = flexibility or {}
        self.failing = set(failing)
        self.delay = delay
        self.honor_avoid = honor_avoid
        self.calls: list[tuple[str, int, frozenset[int]]] = []
        self.flexibility_calls: list[FlexibilityMode] = []

    async def fetch_candidates(
        self,
        muscle_group: str,
        count: int,
        equipment_filter: Sequence[str] | None,
        avoid: frozenset[int],
    ) -> list[ExerciseRef]:
        self.calls.append((muscle_group, count, avoid))
        if self.delay:
            await asyncio.sleep(self.delay)
        if muscle_group in self.failing:
            raise ConnectionError(f"catalog down for {muscle_group}")
        candidates = self.exercises.get(muscle_group, [])
        if self.honor_avoid:
            candidates = [ref for ref in candidates if ref.id not in avoid]
        return candidates[:count]

    async def fetch_flexibility_candidates(
        self,
        muscle_groups: Sequence[str],
        mode: FlexibilityMode,
        count: int,
    ) -> list[ExerciseRef]:
        self.flexibility_calls.append(mode)
        return self.flexibility.get(mode, [])[:count]


def build_exercise_map(count: int = 8) -> dict[str, list[ExerciseRef]]:
    return {muscle: make_exercises(muscle, (index + 1) * 100, count) for index, muscle in enumerate(MUSCLES)}


@pytest.fixture
def exercise_map() -> dict[str, list[ExerciseRef]]:
    return build_exercise_map()


@pytest.fixture
def flexibility_map() -> dict[FlexibilityMode, list[ExerciseRef]]:
    return {
        FlexibilityMode.WARMUP: [
            ExerciseRef(id=5001, name="Arm Circles", muscle_groups=("Shoulders",)),
            ExerciseRef(id=5002, name="Glute Activation", muscle_groups=("Glutes",)),
            ExerciseRef(id=5003, name="Leg Swings", muscle_groups=("Hamstrings",)),
            ExerciseRef(id=5004, name="Cat-Cow", muscle_groups=("Back",)),
        ],
        FlexibilityMode.COOLDOWN: [
            ExerciseRef(id=6001, name="Static Chest Stretch", muscle_groups=("Chest",)),
            ExerciseRef(id=6002, name="Child's Pose", muscle_groups=("Back",)),
        ],
    }


@pytest.fixture
def fake_catalog(exercise_map, flexibility_map) -> FakeCatalog:
    return FakeCatalog(exercise_map, flexibility_map)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


class FirstChoice:
    """Deterministic stand-in for random.Random: always the first option."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    """Deterministic stand-in for random.Random: always the last option."""

    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def catalog_factory(exercise_map, flexibility_map):
    """Build a FakeCatalog over the shared exercise map with custom behaviour."""

    def _factory(**kwargs) -> FakeCatalog:
        exercises = kwargs.pop("exercises", exercise_map)
        flexibility = kwargs.pop("flexibility", flexibility_map)
        return FakeCatalog(exercises, flexibility, **kwargs)

    return _factory


@pytest.fixture
def first_choice() -> FirstChoice:
    return FirstChoice()


@pytest.fixture
def last_choice() -> LastChoice:
    return LastChoice()
