"""In-memory exercise catalog and YAML loader."""

from collections.abc import Iterable, Sequence
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from liftplan.catalog.models import CatalogEntry, CatalogFile
from liftplan.planner.enums import ExerciseCategory, FlexibilityMode
from liftplan.planner.models import ExerciseRef

_MODE_CATEGORY = {
    FlexibilityMode.WARMUP: ExerciseCategory.WARMUP,
    FlexibilityMode.COOLDOWN: ExerciseCategory.COOLDOWN,
}


class CatalogLoadError(ValueError):
    """Raised when a catalog file is missing or malformed."""

    pass


class InMemoryExerciseCatalog:
    """Catalog over a fixed list of entries.

    Provides the synchronous queries (`candidates`, `flexibility_candidates`)
    and the async adapter protocol on top of them.
    """

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        self._entries = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def candidates(
        self,
        muscle_group: str,
        count: int,
        equipment_filter: Sequence[str] | None = None,
        avoid: frozenset[int] = frozenset(),
    ) -> list[ExerciseRef]:
        """Strength exercises for a muscle group, most relevant first."""
        allowed = {item.lower() for item in equipment_filter} if equipment_filter is not None else None
        matches = [
            entry
            for entry in self._entries
            if entry.category == ExerciseCategory.STRENGTH
            and entry.targets(muscle_group)
            and entry.id not in avoid
            and entry.usable_with(allowed)
        ]
        matches.sort(key=lambda entry: (-entry.relevance, entry.id))
        return [entry.to_ref() for entry in matches[: max(0, count)]]

    def flexibility_candidates(
        self,
        muscle_groups: Sequence[str],
        mode: FlexibilityMode,
        count: int,
    ) -> list[ExerciseRef]:
        """Warm-up or cool-down entries, those covering the target muscles first."""
        category = _MODE_CATEGORY[FlexibilityMode(mode)]
        matches = [entry for entry in self._entries if entry.category == category]
        matches.sort(
            key=lambda entry: (
                -sum(1 for group in muscle_groups if entry.targets(group)),
                -entry.relevance,
                entry.id,
            )
        )
        return [entry.to_ref() for entry in matches[: max(0, count)]]

    async def fetch_candidates(
        self,
        muscle_group: str,
        count: int,
        equipment_filter: Sequence[str] | None,
        avoid: frozenset[int],
    ) -> list[ExerciseRef]:
        return self.candidates(muscle_group, count, equipment_filter, avoid)

    async def fetch_flexibility_candidates(
        self,
        muscle_groups: Sequence[str],
        mode: FlexibilityMode,
        count: int,
    ) -> list[ExerciseRef]:
        return self.flexibility_candidates(muscle_groups, mode, count)


def load_catalog(path: str | Path) -> InMemoryExerciseCatalog:
    """Load a YAML catalog file.

    Args:
        path: Path to a YAML file with a top-level `exercises:` list

    Returns:
        InMemoryExerciseCatalog

    Raises:
        CatalogLoadError: If the file is missing or malformed
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise CatalogLoadError(f"Catalog file not found: {catalog_path}")

    try:
        raw = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise CatalogLoadError(f"Invalid YAML in {catalog_path}: {e}") from e

    if not isinstance(raw, dict):
        raise CatalogLoadError(f"Catalog {catalog_path} must be a mapping with an 'exercises' list")

    try:
        parsed = CatalogFile.model_validate(raw)
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid catalog {catalog_path}: {e}") from e

    logger.info(f"Loaded {len(parsed.exercises)} exercises from {catalog_path}")
    return InMemoryExerciseCatalog(parsed.exercises)
