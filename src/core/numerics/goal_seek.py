# src/core/numerics/goal_seek.py
"""
Goal seek: a one-dimensional root finder.

Damped Newton iteration over a bounded interval. When no derivative is
supplied it is estimated by a central difference. While iterating, the
search interval remembers the best positive and negative samples seen so
far; they size the difference step near zero and keep a bracket around the
root.

Functions never raise on numeric trouble. Every evaluation, including the
final answer, is an EvaluationResult: Ok(value) or Error().

Public API
----------
- Ok, Error, EvaluationResult
- Sample, SearchInterval
- update_bracket(x, y, interval) -> bool
- estimate_derivative(f, x, xstep, interval) -> EvaluationResult
- solve(f, df, x0, interval) -> EvaluationResult
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from src.core.debug import trace

MAX_ITERATIONS = 20
OVERSHOOT = 1.000001
DEFAULT_PRECISION = 1e-15

# =========================
# Evaluation results
# =========================


@dataclass(frozen=True)
class Ok:
    value: float


@dataclass(frozen=True)
class Error:
    """Failed evaluation. Carries no payload; reasons go to the debug log."""


EvaluationResult = Ok | Error
Objective = Callable[[float], EvaluationResult]


class FailureKind(str, Enum):
    """Why a search stopped. Only used for tracing; callers see Error()."""

    OUT_OF_DOMAIN = "out_of_domain"
    EVALUATION = "evaluation"
    FLAT_SPOT = "flat_spot"
    COLLAPSED_STEP = "collapsed_step"
    INFINITE_DERIVATIVE = "infinite_derivative"
    NON_CONVERGENCE = "non_convergence"


def _fail(kind: FailureKind, x: float) -> Error:
    trace("goal_seek failed: %s at x=%r", kind.value, x)
    return Error()


# =========================
# Search interval
# =========================


@dataclass(frozen=True)
class Sample:
    x: float
    y: float


@dataclass
class SearchInterval:
    """
    Mutable bookkeeping for a single root search.

    Create one per search. It may be handed back to solve() to reuse a
    resolved root, but never share one between concurrent searches.
    """

    x_min: float = -1e10
    x_max: float = 1e10
    precision: float = DEFAULT_PRECISION
    best_positive: Sample | None = None
    best_negative: Sample | None = None
    resolved_root: float | None = None

    def contains(self, x: float) -> bool:
        return self.x_min <= x <= self.x_max


def update_bracket(x: float, y: float, interval: SearchInterval) -> bool:
    """
    Record f(x) = y in the interval's bracket. Returns True on an exact root.

    With both sides known, a new sample replaces the same-signed one only if
    it shrinks the [neg, pos] span. With one side known, it replaces it only
    if it is closer to zero.
    """
    pos, neg = interval.best_positive, interval.best_negative
    if y > 0:
        if pos is None:
            interval.best_positive = Sample(x, y)
        elif neg is not None:
            if abs(x - neg.x) < abs(pos.x - neg.x):
                interval.best_positive = Sample(x, y)
        elif y < pos.y:
            interval.best_positive = Sample(x, y)
        return False
    if y < 0:
        if neg is None:
            interval.best_negative = Sample(x, y)
        elif pos is not None:
            if abs(x - pos.x) < abs(pos.x - neg.x):
                interval.best_negative = Sample(x, y)
        elif -y < -neg.y:
            interval.best_negative = Sample(x, y)
        return False

    # Lucky guess
    interval.resolved_root = x
    return True


def estimate_derivative(f: Objective, x: float, xstep: float, interval: SearchInterval) -> EvaluationResult:
    """Central-difference derivative of f at x, clamped to the interval."""
    xl = x - xstep
    if xl < interval.x_min:
        xl = x
    xr = x + xstep
    if xr > interval.x_max:
        xr = x

    if xl == xr:
        return _fail(FailureKind.COLLAPSED_STEP, x)

    left = f(xl)
    if not isinstance(left, Ok):
        return left
    right = f(xr)
    if not isinstance(right, Ok):
        return right

    dfx = (right.value - left.value) / (xr - xl)
    trace("estimate_derivative x=%r xl=%r xr=%r -> %r", x, xl, xr, dfx)
    if math.isinf(dfx):
        return _fail(FailureKind.INFINITE_DERIVATIVE, x)
    return Ok(dfx)


def _derivative_step(x0: float, interval: SearchInterval) -> float:
    if abs(x0) >= 1e-10:
        return abs(x0) / 1e6
    pos, neg = interval.best_positive, interval.best_negative
    if pos is not None and neg is not None:
        return abs(pos.x - neg.x) / 1e6
    return (interval.x_max - interval.x_min) / 1e6


def solve(
    f: Objective,
    df: Objective | None,
    x0: float,
    interval: SearchInterval,
) -> EvaluationResult:
    """
    Seek a root of f with Newton's method, starting at x0.

    f should be continuously differentiable on the interval. Pass df=None to
    estimate the derivative numerically. Convergence is quadratic once x0 is
    close enough to a simple root.

    If the interval already holds a resolved root it is returned without
    evaluating f.
    """
    if interval.resolved_root is not None:
        return Ok(interval.resolved_root)

    precision = interval.precision / 2

    for i in range(MAX_ITERATIONS):
        trace("goal_seek x0=%r (i=%d)", x0, i)
        if not interval.contains(x0):
            return _fail(FailureKind.OUT_OF_DOMAIN, x0)

        result = f(x0)
        if not isinstance(result, Ok):
            return _fail(FailureKind.EVALUATION, x0)
        y0 = result.value
        if not math.isfinite(y0):
            return _fail(FailureKind.EVALUATION, x0)
        trace("   y0=%r", y0)

        if update_bracket(x0, y0, interval):
            return Ok(x0)

        if df is not None:
            result = df(x0)
        else:
            result = estimate_derivative(f, x0, _derivative_step(x0, interval), interval)
        if not isinstance(result, Ok):
            return result

        df0 = result.value
        if df0 == 0:
            return _fail(FailureKind.FLAT_SPOT, x0)

        # Overshoot slightly so we don't creep up on the root from one side.
        x1 = x0 - OVERSHOOT * y0 / df0
        scale = abs(x0) + abs(x1)
        # A step that underflows to zero at x0 == 0 never counts as converged.
        stepsize = abs(x1 - x0) / scale if scale else math.nan
        trace("   df0=%r ss=%r", df0, stepsize)

        x0 = x1
        if stepsize < precision:
            interval.resolved_root = x0
            return Ok(x0)

    return _fail(FailureKind.NON_CONVERGENCE, x0)


__all__ = [
    "MAX_ITERATIONS",
    "OVERSHOOT",
    "DEFAULT_PRECISION",
    "Ok",
    "Error",
    "EvaluationResult",
    "Objective",
    "FailureKind",
    "Sample",
    "SearchInterval",
    "update_bracket",
    "estimate_derivative",
    "solve",
]
