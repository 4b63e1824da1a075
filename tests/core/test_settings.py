"""Tests for settings and logger configuration."""

import sys

import pytest
from loguru import logger
from pydantic import ValidationError

from liftplan.config.settings import Settings, get_default_catalog_path
from liftplan.core.logger import setup_logger


def test_defaults(monkeypatch):
    for name in ("LIFTPLAN_LOG_LEVEL", "LIFTPLAN_REP_SEED", "LIFTPLAN_CATALOG_TIMEOUT_SECONDS", "LIFTPLAN_CATALOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    app_settings = Settings(_env_file=None)

    assert app_settings.log_level == "INFO"
    assert app_settings.debounce_seconds == 0.3
    assert app_settings.catalog_timeout_seconds is None
    assert app_settings.max_muscle_groups == 4
    assert app_settings.flexibility_block_size == 3
    assert app_settings.rep_seed is None
    assert app_settings.catalog_path == get_default_catalog_path()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LIFTPLAN_LOG_LEVEL", "debug")
    monkeypatch.setenv("LIFTPLAN_REP_SEED", "42")
    monkeypatch.setenv("LIFTPLAN_CATALOG_TIMEOUT_SECONDS", "1.5")
    app_settings = Settings(_env_file=None)

    assert app_settings.log_level == "DEBUG"
    assert app_settings.rep_seed == 42
    assert app_settings.catalog_timeout_seconds == 1.5


def test_invalid_log_level_defaults_to_info(monkeypatch):
    monkeypatch.setenv("LIFTPLAN_LOG_LEVEL", "chatty")
    assert Settings(_env_file=None).log_level == "INFO"


def test_rejects_out_of_range_values():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, catalog_timeout_seconds=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, flexibility_block_size=4)


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "liftplan.log"
    setup_logger(level="DEBUG", log_file=str(log_file))
    try:
        logger.debug("file sink check", component="test")
    finally:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    content = log_file.read_text(encoding="utf-8")
    assert "Logger initialized with level=DEBUG" in content
    assert "file sink check" in content

    lines = content.splitlines()
    check_line = next(line for line in lines if "file sink check" in line)
    init_line = next(line for line in lines if "Logger initialized" in line)
    assert check_line.endswith("| {'component': 'test'}")
    assert "{" not in init_line
