"""Shared fixtures for governance tests."""

import pytest

from governance.app.rate_limit import RateGovernor


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def governor(clock):
    return RateGovernor(clock=clock)
