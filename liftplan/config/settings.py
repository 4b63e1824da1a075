from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_catalog_path() -> str:
    """Get path to the bundled sample exercise catalog."""
    return str(Path(__file__).parent.parent / "data" / "catalog" / "exercises.yaml")


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LIFTPLAN_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LIFTPLAN_LOG_FILE")
    debounce_seconds: float = Field(
        default=0.3,
        ge=0.0,
        validation_alias="LIFTPLAN_DEBOUNCE_SECONDS",
        description="Window during which configuration changes are coalesced into one generation run",
    )
    catalog_timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        validation_alias="LIFTPLAN_CATALOG_TIMEOUT_SECONDS",
        description="Per-call timeout for catalog queries (unset = no deadline)",
    )
    max_muscle_groups: int = Field(default=4, ge=1, validation_alias="LIFTPLAN_MAX_MUSCLE_GROUPS")
    flexibility_block_size: int = Field(
        default=3,
        ge=0,
        le=3,
        validation_alias="LIFTPLAN_FLEXIBILITY_BLOCK_SIZE",
        description="Exercises requested for each warm-up / cool-down block",
    )
    rep_seed: int | None = Field(
        default=None,
        validation_alias="LIFTPLAN_REP_SEED",
        description="Seed for rep selection (unset = non-deterministic)",
    )
    catalog_path: str = Field(
        default_factory=get_default_catalog_path,
        validation_alias="LIFTPLAN_CATALOG_PATH",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LIFTPLAN_LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("catalog_path")
    @classmethod
    def validate_catalog_path(cls, value: str) -> str:
        """Warn when the configured catalog file does not exist."""
        if value and not Path(value).exists():
            logger.warning(f"LIFTPLAN_CATALOG_PATH points to a missing file: {value}. The CLI will fail to load it.")
        return value


settings = Settings()
