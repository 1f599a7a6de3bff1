# tests/utils.py
"""
Single source of truth for test data, factories, and canonical schedules.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, timedelta

from src.core.numerics.goal_seek import EvaluationResult, Ok
from src.schemas.models import DEFAULT_GUESS, CashFlowSchedule, DatedCashFlow

# -----------------------------
# Canonical schedules
# -----------------------------

DEFAULT_START = date(2024, 1, 1)

# Four equal yearly payments on a 1,000 outlay
ANNUITY_AMOUNTS = (-1000.0, 275.0, 275.0, 275.0, 275.0)
ANNUITY_OFFSETS = (0, 365, 730, 1095, 1460)

# 10,000 out, repaid quarterly with growing amounts
QUARTERLY_AMOUNTS = (-10_000.0, 2_000.0, 3_000.0, 4_000.0, 5_000.0)
QUARTERLY_OFFSETS = (0, 90, 180, 270, 360)


# -----------------------------
# Factories
# -----------------------------


def make_schedule(
    amounts: Sequence[float] = ANNUITY_AMOUNTS,
    day_offsets: Sequence[int] = ANNUITY_OFFSETS,
    initial_guess: float = DEFAULT_GUESS,
) -> CashFlowSchedule:
    return CashFlowSchedule(amounts=tuple(amounts), day_offsets=tuple(day_offsets), initial_guess=initial_guess)


def make_growth_schedule(rate: float, years: int, amount: float = 1000.0) -> CashFlowSchedule:
    """One outflow at day 0 and its compounded value after `years` whole years."""
    return make_schedule([-amount, amount * (1.0 + rate) ** years], [0, 365 * years])


def make_flows(
    amounts: Sequence[float],
    day_offsets: Sequence[int],
    start: date = DEFAULT_START,
) -> list[DatedCashFlow]:
    return [DatedCashFlow(amount=a, date=start + timedelta(days=d)) for a, d in zip(amounts, day_offsets, strict=True)]


def annuity_pv(payment: float, rate: float, periods: int) -> float:
    """Closed-form present value of `periods` yearly payments in arrears."""
    return payment * (1.0 - (1.0 + rate) ** -periods) / rate


# -----------------------------
# Objective helpers
# -----------------------------


class CountingObjective:
    """Wrap an objective and count evaluations."""

    def __init__(self, f: Callable[[float], EvaluationResult]) -> None:
        self._f = f
        self.calls = 0
        self.points: list[float] = []

    def __call__(self, x: float) -> EvaluationResult:
        self.calls += 1
        self.points.append(x)
        return self._f(x)


def plain(f: Callable[[float], float]) -> Callable[[float], EvaluationResult]:
    """Lift a float -> float function into an always-Ok objective."""
    return lambda x: Ok(f(x))
