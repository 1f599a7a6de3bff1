# src/core/finance/__init__.py

from .day_count import days_between, to_day_offsets, to_serial
from .errors import InputValidationError
from .irr import irr, xirr, xirr_flows
from .xirr import CashFlowResidual, SolverState, XirrSolver, cash_flow_residual, find_root

__all__ = [
    "InputValidationError",
    "days_between",
    "to_day_offsets",
    "to_serial",
    "CashFlowResidual",
    "cash_flow_residual",
    "SolverState",
    "XirrSolver",
    "find_root",
    "xirr",
    "xirr_flows",
    "irr",
]
