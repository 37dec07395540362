"""
Pytest fixtures for availability monitor testing.

Provides a controllable clock, a scripted probe and a loguru sink that
collects records so tests can assert on log levels and messages.
"""

from datetime import datetime, timedelta

import pytest
from loguru import logger

from pingmonitor.automation.monitor_models import ProbeResult

START = datetime(2024, 1, 1, 12, 0, 0)


class FakeClock:
    """Manual clock; optionally advances by `step` seconds on every read."""

    def __init__(self, start: datetime = START, step: float = 0.0):
        self.now = start
        self.step = timedelta(seconds=step)

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        return current

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class ScriptedProbe:
    """Returns pre-built probe results in order."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = 0

    def probe(self) -> ProbeResult:
        result = self.results[self.calls]
        self.calls += 1
        return result


REPLY = ProbeResult(success=True, latency_s=0.012, status="reply")
NO_REPLY = ProbeResult(success=False, status="no-reply")
SEND_FAILED = ProbeResult(success=False, status="send-failed")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def log_records():
    """Collect every loguru record emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def reset_logger():
    """Drop any sinks a test installed through setup_logging()."""
    yield
    logger.remove()
