# src/core/finance/xirr.py
"""
XIRR: internal rate of return for cash flows on irregular dates.

The goal seek works on the growth factor g = 1 + rate. For a schedule with
amounts a_i on day numbers d_i the residual is

    NPV(g) = sum_i a_i / g ** ((d_i - d_0) / 365)

and the XIRR is g* - 1 where NPV(g*) = 0.

Failure is an ordinary outcome (no sign change, no real root, the search
leaving its interval, ...). It is reported as NaN, never raised.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from src.core.finance.errors import input_validation_guard
from src.core.numerics.goal_seek import (
    Error,
    EvaluationResult,
    Ok,
    SearchInterval,
    solve,
)
from src.schemas.models import DEFAULT_GUESS, CashFlowSchedule, SolverSettings, XirrReport

log = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.0
MAX_GROWTH_FACTOR = 1000.0


# =========================
# Residual
# =========================


@dataclass(frozen=True)
class CashFlowResidual:
    """NPV residual of a schedule as a function of the growth factor."""

    amounts: NDArray[np.float64]
    exponents: NDArray[np.float64]
    ordered: bool

    @classmethod
    def for_schedule(cls, schedule: CashFlowSchedule) -> CashFlowResidual:
        days = np.asarray(schedule.day_offsets, dtype=np.float64)
        relative = days - days[0]
        return cls(
            amounts=np.asarray(schedule.amounts, dtype=np.float64),
            exponents=relative / DAYS_PER_YEAR,
            ordered=bool((relative >= 0).all()),
        )

    def __call__(self, rate: float) -> EvaluationResult:
        # A flow dated before the first one has no meaning here.
        if not self.ordered:
            return Error()
        # Negative base with a fractional exponent gives NaN, zero base gives inf.
        with np.errstate(all="ignore"):
            total = float(np.sum(self.amounts / np.power(rate, self.exponents)))
        if not math.isfinite(total):
            return Error()
        return Ok(total)


def cash_flow_residual(rate: float, schedule: CashFlowSchedule) -> EvaluationResult:
    """One-off residual evaluation. Prefer CashFlowResidual inside loops."""
    return CashFlowResidual.for_schedule(schedule)(rate)


# =========================
# Solver
# =========================


class SolverState(str, Enum):
    CONSTRUCTED = "constructed"
    SOLVING = "solving"
    CONVERGED = "converged"
    FAILED = "failed"


def build_interval(settings: SolverSettings | None = None) -> SearchInterval:
    """Fresh search interval on the growth factor, capped at MAX_GROWTH_FACTOR."""
    settings = settings or SolverSettings()
    interval = SearchInterval(precision=settings.precision)
    interval.x_min = settings.x_min
    interval.x_max = min(settings.x_max, MAX_GROWTH_FACTOR, interval.x_max)
    return interval


def find_root(
    schedule: CashFlowSchedule,
    interval: SearchInterval | None = None,
    *,
    settings: SolverSettings | None = None,
) -> float:
    """
    Annualized XIRR of a schedule, or NaN when no root was found.

    Passing an interval from an earlier converged call returns its root
    without evaluating the residual again.
    """
    if not schedule.has_sign_change():
        log.debug("xirr: no sign change in %d flows", len(schedule.amounts))
        return math.nan

    if interval is None:
        interval = build_interval(settings)

    result = solve(CashFlowResidual.for_schedule(schedule), None, schedule.growth_guess, interval)
    if isinstance(result, Ok):
        return result.value - 1.0
    return math.nan


class XirrSolver:
    """
    One XIRR request: constructed → solving → converged | failed.

    solve() runs the search once. Later calls return the stored answer.
    """

    def __init__(self, schedule: CashFlowSchedule, settings: SolverSettings | None = None) -> None:
        self.schedule = schedule
        self.settings = settings or SolverSettings()
        self.state = SolverState.CONSTRUCTED
        self.interval: SearchInterval | None = None
        self._rate: float = math.nan

    @classmethod
    def from_arrays(
        cls,
        amounts: Sequence[float] | None,
        day_offsets: Sequence[int] | None,
        guess: float = DEFAULT_GUESS,
        *,
        settings: SolverSettings | None = None,
    ) -> XirrSolver:
        """Validate raw arrays; raises InputValidationError on bad input."""
        with input_validation_guard():
            schedule = CashFlowSchedule.model_validate(
                {"amounts": amounts, "day_offsets": day_offsets, "initial_guess": guess}
            )
        return cls(schedule, settings)

    @property
    def done(self) -> bool:
        return self.state in (SolverState.CONVERGED, SolverState.FAILED)

    @property
    def rate(self) -> float:
        return self._rate

    def solve(self) -> float:
        if self.done:
            return self._rate

        self.state = SolverState.SOLVING
        self.interval = build_interval(self.settings)
        self._rate = find_root(self.schedule, self.interval)
        self.state = SolverState.FAILED if math.isnan(self._rate) else SolverState.CONVERGED
        log.debug("xirr %s: %r (%s)", self.state.value, self._rate, self.schedule)
        return self._rate

    def report(self) -> XirrReport:
        rate = self.solve()
        return XirrReport.from_rate(
            rate,
            state=self.state.value,
            flows=len(self.schedule.amounts),
            initial_guess=self.schedule.initial_guess,
        )


__all__ = [
    "DAYS_PER_YEAR",
    "MAX_GROWTH_FACTOR",
    "CashFlowResidual",
    "cash_flow_residual",
    "SolverState",
    "build_interval",
    "find_root",
    "XirrSolver",
]
