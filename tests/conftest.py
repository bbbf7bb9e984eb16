# ============================================================================
# ClassProfiler - Test Configuration and Fixtures
#
# Purpose: Shared pytest fixtures for testing
# Inputs: None
# Outputs: Fixtures for use in tests
# Dependencies: pytest, ClassProfiler
# Usage: pytest tests/ (fixtures are automatically available)
#
# Changelog:
#   2026-09-02: Initial fixtures (config reset, fake clock)
#   2026-09-21: RecordingSink / FailingSink for report tests
# ============================================================================

import itertools
import logging
import tracemalloc
from typing import List, Tuple

import pytest

from ClassProfiler.config import Config, set_config
from ClassProfiler.errors import SinkError
from ClassProfiler.sinks.base import Sink


class RecordingSink(Sink):
    """Sink that keeps every (level, message) it receives."""

    def __init__(self, level: int = logging.NOTSET):
        self.records: List[Tuple[int, str]] = []
        self._level = level

    def emit(self, level: int, message: str) -> None:
        if level >= self._level:
            self.records.append((level, message))

    @property
    def level(self) -> int:
        return self._level

    def set_level(self, level: int) -> None:
        self._level = level

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.records]


class FailingSink(Sink):
    """Sink whose every write fails."""

    def emit(self, level: int, message: str) -> None:
        raise SinkError("disk full")


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from built-in defaults, independent of YAML and env."""
    config = Config()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def failing_sink():
    return FailingSink()


@pytest.fixture
def fake_clock():
    """Clock advancing by exactly 1.0 on every read."""
    counter = itertools.count()
    return lambda: float(next(counter))


@pytest.fixture
def restore_tracemalloc():
    """Stop tracemalloc after the test if the test started it."""
    was_tracing = tracemalloc.is_tracing()
    yield
    if not was_tracing and tracemalloc.is_tracing():
        tracemalloc.stop()
