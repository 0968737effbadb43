"""
Global pytest configuration and fixtures.

This file configures pytest behavior for all tests in the project.
"""

import pytest

from buffered_events.config.settings import ENV_PREFIX, reset_settings


# Register custom pytest marks to avoid warnings
def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "maintenance: mark test as maintenance test")


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep environment driven settings from leaking between tests."""
    for var in ("TTL_SECONDS", "MAINTENANCE_CHANCE", "DEBUG", "LOG_LEVEL"):
        monkeypatch.delenv(f"{ENV_PREFIX}{var}", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def clock():
    return FakeClock()
