# src/schemas/models.py

from __future__ import annotations

import datetime as dt
import math

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, model_validator

DEFAULT_GUESS = 0.1

# =========================
# Cash flows
# =========================


class DatedCashFlow(BaseModel):
    """One signed cash flow on a calendar date (negative = outflow, positive = inflow)."""

    amount: FiniteFloat = Field(..., description="Signed amount in currency units.")
    date: dt.date = Field(..., description="Calendar date of the flow (ISO-8601 in JSON).")

    model_config = ConfigDict(frozen=True, extra="ignore")


class CashFlowSchedule(BaseModel):
    """
    Amounts and integer day offsets for one XIRR solve.

    Offsets are days since any epoch; only differences from the first entry
    matter. Their ordering is not checked here: an entry dated before the
    first one makes every residual evaluation fail instead.
    """

    amounts: tuple[FiniteFloat, ...] = Field(..., description="Signed cash flows, one per date.")
    day_offsets: tuple[int, ...] = Field(..., description="Day numbers, same length as amounts.")
    initial_guess: FiniteFloat = Field(DEFAULT_GUESS, description="Starting rate guess as a fraction (0.1 = 10%).")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def _check_lengths(self) -> CashFlowSchedule:
        if len(self.amounts) != len(self.day_offsets):
            raise ValueError(
                f"amounts and day_offsets must be of same size ({len(self.amounts)} != {len(self.day_offsets)})"
            )
        if len(self.amounts) < 2:
            raise ValueError("a schedule must contain at least 2 cash flows")
        return self

    @property
    def growth_guess(self) -> float:
        """Initial guess expressed as a growth factor (1 + rate)."""
        return self.initial_guess + 1.0

    def has_sign_change(self) -> bool:
        return any(a > 0 for a in self.amounts) and any(a < 0 for a in self.amounts)

    def describe(self) -> str:
        """Full debug dump. Builds strings for every flow; avoid in loops."""
        values = ",".join(repr(a) for a in self.amounts)
        dates = ",".join(str(d) for d in self.day_offsets)
        return f"CashFlowSchedule - n = {len(self.amounts)}, Guess = {self.growth_guess}, Values = {values}, Dates = {dates}"

    def summary(self) -> str:
        span = self.day_offsets[-1] - self.day_offsets[0]
        return (
            f"[CashFlowSchedule] n={len(self.amounts)} | "
            f"out={sum(a for a in self.amounts if a < 0):,.2f} in={sum(a for a in self.amounts if a > 0):,.2f} | "
            f"span={span}d | guess={self.initial_guess:.2%}"
        )

    def __str__(self) -> str:
        return self.summary()


# =========================
# Solver configuration
# =========================


class SolverSettings(BaseModel):
    """
    Search bounds and precision for the XIRR goal seek.

    Bounds are on the growth factor (1 + rate), not on the rate itself.
    x_max is capped at 1000 whatever the setting.
    """

    x_min: float = Field(-1.0, description="Lowest growth factor the search may visit.")
    x_max: float = Field(1000.0, description="Highest growth factor the search may visit.")
    precision: float = Field(1e-15, gt=0, lt=1, description="Desired relative precision of the root.")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def _check_bounds(self) -> SolverSettings:
        if not self.x_min < self.x_max:
            raise ValueError("x_min must be < x_max")
        return self


class XirrInputs(BaseModel):
    """
    File/JSON payload for one XIRR request.

    Exactly one of the two shapes must be used:
      - flows: [{"amount": -1000, "date": "2024-01-01"}, ...]
      - amounts + day_offsets: [-1000, 1100] / [0, 365]
    """

    flows: list[DatedCashFlow] | None = Field(None, description="Dated cash flows.")
    amounts: list[FiniteFloat] | None = Field(None, description="Raw amounts (use with day_offsets).")
    day_offsets: list[int] | None = Field(None, description="Raw day offsets (use with amounts).")
    guess: FiniteFloat = Field(DEFAULT_GUESS, description="Starting rate guess as a fraction.")
    settings: SolverSettings = Field(default_factory=SolverSettings, description="Goal-seek bounds and precision.")

    @model_validator(mode="after")
    def _one_shape(self) -> XirrInputs:
        has_flows = self.flows is not None
        has_raw = self.amounts is not None or self.day_offsets is not None
        if has_flows == has_raw:
            raise ValueError("provide either 'flows' or 'amounts' + 'day_offsets'")
        if has_raw and (self.amounts is None or self.day_offsets is None):
            raise ValueError("'amounts' and 'day_offsets' must be given together")
        return self


# =========================
# Results
# =========================


class XirrReport(BaseModel):
    """Outcome of one solve, shaped for printing or JSON output."""

    rate: float | None = Field(None, description="Annualized rate as a fraction; None when the search failed.")
    state: str = Field(..., description="Final solver state (converged/failed).")
    flows: int = Field(..., ge=0, description="Number of cash flows in the schedule.")
    initial_guess: float = Field(..., description="Rate guess the search started from.")

    @classmethod
    def from_rate(cls, rate: float, *, state: str, flows: int, initial_guess: float) -> XirrReport:
        return cls(rate=None if math.isnan(rate) else rate, state=state, flows=flows, initial_guess=initial_guess)

    @property
    def converged(self) -> bool:
        return self.rate is not None

    def summary(self) -> str:
        if self.rate is None:
            return f"XIRR: NaN (no solution; {self.flows} flows, guess {self.initial_guess:.2%})"
        return f"XIRR: {self.rate:.6%} ({self.flows} flows, guess {self.initial_guess:.2%})"

    def __str__(self) -> str:
        return self.summary()
