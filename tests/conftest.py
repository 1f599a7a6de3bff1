# tests/conftest.py
from __future__ import annotations

import pytest

from src.core.numerics.goal_seek import SearchInterval
from tests.utils import (
    ANNUITY_AMOUNTS,
    ANNUITY_OFFSETS,
    QUARTERLY_AMOUNTS,
    QUARTERLY_OFFSETS,
    make_schedule,
)


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_xirr_env(monkeypatch):
    for name in ("XIRR_GUESS", "XIRR_PRECISION", "XIRR_DEBUG", "XIRR_DEBUG_LOG"):
        monkeypatch.delenv(name, raising=False)
    yield


# -------- Schedules --------
@pytest.fixture
def annuity_schedule():
    return make_schedule(ANNUITY_AMOUNTS, ANNUITY_OFFSETS)


@pytest.fixture
def quarterly_schedule():
    return make_schedule(QUARTERLY_AMOUNTS, QUARTERLY_OFFSETS)


@pytest.fixture
def schedule_factory():
    """Factory for schedules with overridable amounts/offsets/guess."""

    def _factory(amounts=ANNUITY_AMOUNTS, day_offsets=ANNUITY_OFFSETS, initial_guess=0.1):
        return make_schedule(amounts, day_offsets, initial_guess)

    return _factory


# -------- Goal seek --------
@pytest.fixture
def interval():
    """Unconstrained search interval (fresh per test)."""
    return SearchInterval()


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
