"""Sensitivity sweeps over a single input.

Every run is an independent call to ``simulate`` so sweeps can fan out to an
executor. Results always come back in the order of the requested values.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import fields as dataclass_fields
from typing import Any, Iterable, Sequence

import pandas as pd

from .engine import SCENARIO_A, SCENARIO_B, SCENARIO_C, Projection, simulate
from .inputs import Inputs

DEFAULT_REL_X = 0.10  # +/-10% perturbation for tornado sweeps


def _run(base: Inputs, field: str, value: Any) -> Projection:
    return simulate(base.with_overrides(**{field: value}))


def sweep(
    base: Inputs,
    field: str,
    values: Iterable[Any],
    *,
    max_workers: int | None = None,
) -> pd.DataFrame:
    """NPV of each strategy as ``field`` takes each of ``values``.

    Args:
        base: Input set held fixed apart from ``field``.
        field: Name of an ``Inputs`` field.
        values: Values to try, in output order.
        max_workers: Run on a thread pool when greater than 1.

    Returns:
        DataFrame with columns ``value``, ``NPV A``, ``NPV B``, ``NPV C`` and
        ``Best`` (key of the recommended strategy).
    """
    if field not in Inputs.field_names():
        raise ValueError(f"Unknown input field: {field!r}")
    vals = list(values)

    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            projections = list(pool.map(lambda v: _run(base, field, v), vals))
    else:
        projections = [_run(base, field, v) for v in vals]

    rows = []
    for value, proj in zip(vals, projections):
        npvs = {res.key: res.npv for res in proj.results}
        rows.append(
            {
                "value": value,
                "NPV A": npvs[SCENARIO_A],
                "NPV B": npvs[SCENARIO_B],
                "NPV C": npvs[SCENARIO_C],
                "Best": proj.best.key,
            }
        )
    return pd.DataFrame(rows, columns=["value", "NPV A", "NPV B", "NPV C", "Best"])


def tornado(base: Inputs, fields: Sequence[str], *, rel: float = DEFAULT_REL_X) -> pd.DataFrame:
    """NPV swing of each strategy when each field moves by +/- ``rel``.

    Whole-number fields (``years``, ``mortgage_years``) are rounded and kept
    at 1 or more. The field's declared default decides that, not the runtime
    value, so ``Inputs(mortgage_rate_pct=3)`` still swings 2.7 to 3.3. Rows are
    sorted by the largest absolute swing first.
    """
    defaults = {f.name: f.default for f in dataclass_fields(Inputs)}
    rows = []
    for field in fields:
        if field not in defaults:
            raise ValueError(f"Unknown input field: {field!r}")
        kind = defaults[field]
        if isinstance(kind, bool):
            raise ValueError(f"Cannot perturb boolean field {field!r}")
        current = float(getattr(base, field))
        lo = current * (1.0 - rel)
        hi = current * (1.0 + rel)
        if isinstance(kind, int):
            lo, hi = max(1, int(round(lo))), max(1, int(round(hi)))
        table = sweep(base, field, [lo, hi])
        row: dict[str, Any] = {"field": field, "low": lo, "high": hi}
        for col in ("NPV A", "NPV B", "NPV C"):
            row[f"{col} swing"] = float(table[col].iloc[1] - table[col].iloc[0])
        row["max_abs_swing"] = max(abs(row[f"{c} swing"]) for c in ("NPV A", "NPV B", "NPV C"))
        rows.append(row)

    df = pd.DataFrame(rows)
    if df.empty:
        return df
    return df.sort_values("max_abs_swing", ascending=False, kind="stable").reset_index(drop=True)
