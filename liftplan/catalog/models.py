"""Catalog entry schema for file-backed exercise catalogs."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from liftplan.planner.enums import ExerciseCategory, MovementPattern
from liftplan.planner.models import ExerciseRef


class CatalogEntry(BaseModel):
    """One exercise in a catalog file.

    Attributes:
        id: Unique exercise id
        name: Display name
        muscle_groups: Muscle groups the exercise targets (first = primary)
        equipment: Equipment required; empty means bodyweight
        movement_pattern: compound | isolation; omitted = classify by name
        category: strength | warmup | cooldown
        relevance: Ranking score, higher first
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=0)
    name: str = Field(min_length=1)
    muscle_groups: tuple[str, ...] = ()
    equipment: tuple[str, ...] = ()
    movement_pattern: MovementPattern | None = None
    category: ExerciseCategory = ExerciseCategory.STRENGTH
    relevance: float = 0.0

    @field_validator("muscle_groups", "equipment")
    @classmethod
    def strip_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(item.strip() for item in value if item.strip())

    def targets(self, muscle_group: str) -> bool:
        wanted = muscle_group.lower()
        return any(group.lower() == wanted for group in self.muscle_groups)

    def usable_with(self, equipment_filter: set[str] | None) -> bool:
        """Whether every piece of required equipment is available (bodyweight always is)."""
        if equipment_filter is None:
            return True
        return all(item.lower() in equipment_filter for item in self.equipment)

    def to_ref(self) -> ExerciseRef:
        return ExerciseRef(
            id=self.id,
            name=self.name,
            movement_pattern=self.movement_pattern,
            equipment=self.equipment,
            muscle_groups=self.muscle_groups,
        )


class CatalogFile(BaseModel):
    """Top-level shape of a catalog YAML file."""

    exercises: list[CatalogEntry]

    @field_validator("exercises")
    @classmethod
    def unique_ids(cls, value: list[CatalogEntry]) -> list[CatalogEntry]:
        seen: set[int] = set()
        for entry in value:
            if entry.id in seen:
                raise ValueError(f"Duplicate exercise id {entry.id} ({entry.name})")
            seen.add(entry.id)
        return value
