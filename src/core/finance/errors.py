# src/core/finance/errors.py
"""
Boundary errors for XIRR requests.

Only bad input raises. Numeric failures inside the goal seek (leaving the
search interval, flat spots, collapsed difference steps, non-convergence)
are returned as Error() and end up as a NaN rate.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError


class InputValidationError(ValueError):
    """Cash-flow arrays are missing, mismatched in length, or too short."""


@contextmanager
def input_validation_guard(context: str = "cash-flow schedule") -> Iterator[None]:
    """Re-raise pydantic validation failures as InputValidationError."""
    try:
        yield
    except ValidationError as exc:
        raise InputValidationError(f"Invalid {context}:\n{exc}") from exc


__all__ = ["InputValidationError", "input_validation_guard"]
