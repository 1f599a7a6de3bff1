# src/inputs/inputs.py
"""
Inputs loader for XIRR requests.

Goals
-----
- File-first inputs with validation via Pydantic.
- Two JSON shapes: dated flows, or raw amounts + day offsets.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Bare list (root = flows)
   [
     {"amount": -1000, "date": "2024-01-01"},
     {"amount": 1100, "date": "2025-01-01"}
   ]

2) Structured (root = XirrInputs)
   {
     "flows": [ ... as above ... ],          # or:
     "amounts": [-1000, 1100], "day_offsets": [0, 365],
     "guess": 0.1,
     "settings": {"precision": 1e-15, "x_min": -1, "x_max": 1000}
   }

Environment overrides (optional)
--------------------------------
- XIRR_GUESS      -> XirrInputs.guess (float)
- XIRR_PRECISION  -> XirrInputs.settings.precision (float)

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> XirrInputs
    - load_json(text: str) -> XirrInputs
    - with_overrides(cfg, **kwargs) -> XirrInputs (non-destructive, validated copies)
- function to_schedule(cfg: XirrInputs) -> CashFlowSchedule
- function load_inputs(path: str | Path | None) -> XirrInputs  (convenience)
"""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.core.finance.day_count import to_day_offsets
from src.core.finance.errors import input_validation_guard
from src.schemas.models import CashFlowSchedule, SolverSettings, XirrInputs

# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/flows.json
        2) ./xirr.json
    """

    env_prefix: str = "XIRR_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> XirrInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.

        Returns:
            XirrInputs (validated).
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        cfg = self._parse_root(self._maybe_wrap_flows(raw))
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> XirrInputs:
        """Load inputs from a JSON string (either supported shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        cfg = self._parse_root(self._maybe_wrap_flows(raw))
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: XirrInputs,
        *,
        guess: float | None = None,
        precision: float | None = None,
    ) -> XirrInputs:
        """
        Return a *new* XirrInputs with provided non-null overrides applied.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if guess is not None:
            updates["guess"] = guess
        if precision is not None:
            # model_copy skips validation
            updates["settings"] = SolverSettings.model_validate({**cfg.settings.model_dump(), "precision": precision})

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/flows.json"), Path("xirr.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError(
            "No inputs path provided and no default inputs found. Looked for ./data/sample/flows.json and ./xirr.json."
        )

    def _read_json_file(self, p: Path) -> Any:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e

    def _maybe_wrap_flows(self, raw: Any) -> Any:
        """A bare list at the root is the flows list."""
        if isinstance(raw, list):
            return {"flows": raw}
        return raw

    def _parse_root(self, data: Any) -> XirrInputs:
        try:
            return XirrInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: XirrInputs) -> XirrInputs:
        """
        Apply light, optional overrides from environment variables.
        Unparseable or out-of-range values are ignored.
        """
        prefix = self.env_prefix
        guess: float | None = None
        precision: float | None = None

        raw_guess = os.getenv(f"{prefix}GUESS")
        if raw_guess:
            try:
                value = float(raw_guess)
                if math.isfinite(value):
                    guess = value
            except ValueError:
                pass

        raw_precision = os.getenv(f"{prefix}PRECISION")
        if raw_precision:
            try:
                value = float(raw_precision)
                if 0.0 < value < 1.0:
                    precision = value
            except ValueError:
                pass

        return self.with_overrides(cfg, guess=guess, precision=precision)


# ----------------------------
# Conversion
# ----------------------------


def to_schedule(cfg: XirrInputs) -> CashFlowSchedule:
    """Build the solver schedule; raises InputValidationError on bad arrays."""
    if cfg.flows is not None:
        amounts = [f.amount for f in cfg.flows]
        offsets = to_day_offsets([f.date for f in cfg.flows])
    else:
        amounts = list(cfg.amounts or [])
        offsets = list(cfg.day_offsets or [])

    with input_validation_guard():
        return CashFlowSchedule.model_validate({"amounts": amounts, "day_offsets": offsets, "initial_guess": cfg.guess})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> XirrInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
