"""CLI test fixtures."""

import sys

import pytest
from loguru import logger
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    """Commands reconfigure loguru against the runner's streams; put stderr back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
