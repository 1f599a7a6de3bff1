# src/core/numerics/__init__.py

from .goal_seek import (
    Error,
    EvaluationResult,
    Ok,
    Sample,
    SearchInterval,
    estimate_derivative,
    solve,
    update_bracket,
)

__all__ = [
    "Ok",
    "Error",
    "EvaluationResult",
    "Sample",
    "SearchInterval",
    "update_bracket",
    "estimate_derivative",
    "solve",
]
