# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_schedule, CountingObjective
"""

from .utils import CountingObjective, make_flows, make_schedule

__all__ = ["make_schedule", "make_flows", "CountingObjective"]
