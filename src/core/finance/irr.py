# src/core/finance/irr.py
"""
Convenience entry points: dates in, annualized rate out.

All of them validate the arrays first (InputValidationError on bad input)
and return NaN when the goal seek finds no rate.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import cast

from src.core.finance.day_count import DateLike, to_day_offsets
from src.core.finance.errors import InputValidationError
from src.core.finance.xirr import DAYS_PER_YEAR, XirrSolver
from src.schemas.models import DEFAULT_GUESS, SolverSettings

CashFlowItem = float | tuple[float, DateLike]
CashFlows = Iterable[CashFlowItem]


def _offsets(dates: Sequence[DateLike]) -> list[int]:
    try:
        return to_day_offsets(dates)
    except (TypeError, ValueError) as e:
        raise InputValidationError(str(e)) from e


def xirr(
    amounts: Sequence[float] | None,
    dates: Sequence[DateLike] | None,
    guess: float = DEFAULT_GUESS,
    *,
    settings: SolverSettings | None = None,
) -> float:
    """
    XIRR for amounts paid on the given dates.

    Dates may be date/datetime objects or ISO-8601 strings and must not
    precede the first one. Returns the rate as a fraction (0.1 = 10%) or NaN.
    """
    if amounts is None or dates is None:
        raise InputValidationError("amounts and dates are required")
    if len(amounts) != len(dates):
        raise InputValidationError(f"Both arrays must be of same size ({len(amounts)} != {len(dates)}).")
    return XirrSolver.from_arrays(list(amounts), _offsets(dates), guess, settings=settings).solve()


def xirr_flows(
    cash_flows: Iterable[tuple[float, DateLike]],
    guess: float = DEFAULT_GUESS,
    *,
    settings: SolverSettings | None = None,
) -> float:
    """XIRR for (amount, date) pairs, e.g. [(-1000, date(2024,1,1)), (1100, date(2025,1,1))]."""
    pairs = list(cash_flows)
    try:
        amounts = [a for a, _ in pairs]
        dates = [d for _, d in pairs]
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"Expected (amount, date) pairs: {e}") from e
    return xirr(amounts, dates, guess, settings=settings)


def irr(cash_flows: CashFlows, guess: float = DEFAULT_GUESS, *, settings: SolverSettings | None = None) -> float:
    """
    Annual IRR.

    Accepts either:
      - plain amounts at yearly periods 0..n, e.g. [-1000, 200, 200, ...]
      - (amount, date) pairs, which are solved as XIRR

    Returns the rate as a fraction, or NaN when undefined.
    """
    raw = list(cash_flows)
    if raw and isinstance(raw[0], tuple | list):
        return xirr_flows(cast(list[tuple[float, DateLike]], raw), guess, settings=settings)

    try:
        amounts = [float(cast(float, x)) for x in raw]
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"Expected plain amounts: {e}") from e
    offsets = [int(i * DAYS_PER_YEAR) for i in range(len(amounts))]
    return XirrSolver.from_arrays(amounts, offsets, guess, settings=settings).solve()


__all__ = ["CashFlowItem", "CashFlows", "xirr", "xirr_flows", "irr"]
