"""Exercise catalog implementations."""

from liftplan.catalog.blocking import BlockingCatalogAdapter, SyncExerciseCatalog
from liftplan.catalog.memory import CatalogLoadError, InMemoryExerciseCatalog, load_catalog
from liftplan.catalog.models import CatalogEntry, CatalogFile

__all__ = [
    "BlockingCatalogAdapter",
    "CatalogEntry",
    "CatalogFile",
    "CatalogLoadError",
    "InMemoryExerciseCatalog",
    "SyncExerciseCatalog",
    "load_catalog",
]
