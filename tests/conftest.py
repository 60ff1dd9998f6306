"""Shared fixtures for the tomato test suite."""

from __future__ import annotations

import pytest


class FakeClock:
    """A manually advanced clock returning seconds as a float."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    """Return a fake clock starting at t=1000s."""
    return FakeClock()
