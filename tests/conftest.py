"""Pytest configuration and global fixtures for RankEval tests."""

import io
import sys

import pytest
from loguru import logger

# Import shared fixtures
from tests.fixtures.common import (  # noqa: F401
    all_details,
    coverage_variant,
    sample_key,
    sample_keys,
    sample_result,
)


@pytest.fixture
def log_buffer():
    """Capture loguru output at DEBUG level into a string buffer."""
    buffer = io.StringIO()
    handler_id = logger.add(buffer, level="DEBUG", format="{level} {message}")
    yield buffer
    logger.remove(handler_id)


@pytest.fixture
def restore_logger():
    """Put loguru back to its default stderr sink after the test."""
    yield
    logger.remove()
    logger.add(sys.stderr)
