#!/usr/bin/env python3
"""Edge-case scenario sweep for the projection engine.

Each case runs a full projection and checks the structural invariants that
must hold for any finite input:

- one record per year, numbered 1..years
- every figure finite
- mortgage principal never increases
- NPV equals the discounted cash-flow sum with the terminal value last

Run:
  python -m dva.qa.qa_scenarios
"""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Any, Dict

_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from dva.core.engine import npv, scenario_cashflows, simulate
from dva.core.inputs import Inputs

SCENARIOS: Dict[str, Dict[str, Any]] = {
    "defaults": {},
    "zero_mortgage_rate": {"mortgage_rate_pct": 0.0},
    "negative_proceeds": {"current_mortgage_balance": 1_600_000.0, "cap_gains_tax_pct": 20.0},
    "zero_proceeds": {"current_home_value": 0.0, "selling_costs_pct": 0.0},
    "paid_off_inside_horizon": {"mortgage_years": 5, "years": 25},
    "cash_purchase": {"smaller_home_price": 600_000.0, "down_payment_from_proceeds_pct": 100.0 * 600_000 / 1_222_000},
    "no_storage": {"include_storage": False},
    "zero_discount": {"discount_rate_pct": 0.0},
    "negative_net_return": {"invest_return_pct": 1.0, "invest_tax_drag_pct": 3.0},
    "one_year": {"years": 1},
    "century": {"years": 100},
}


def _check(name: str, overrides: Dict[str, Any]) -> None:
    inputs = Inputs().with_overrides(**overrides)
    proj = simulate(inputs)

    years = [rec.year for rec in proj.yearly_data]
    assert years == list(range(1, inputs.years + 1)), f"{name}: bad year index {years[:3]}..."

    for rec in proj.yearly_data:
        for field, value in vars(rec).items():
            assert math.isfinite(value), f"{name}: year {rec.year} {field} is {value!r}"

    balances = [rec.remaining_principal for rec in proj.yearly_data]
    assert all(b2 <= b1 + 1e-9 for b1, b2 in zip(balances, balances[1:])), f"{name}: principal increased"

    flows = scenario_cashflows(proj)
    for res in proj.results:
        assert math.isfinite(res.npv), f"{name}: {res.key} NPV not finite"
        expected = npv(flows[res.key], inputs.discount_rate_pct)
        assert abs(res.npv - expected) <= 1e-6 * max(1.0, abs(expected)), f"{name}: {res.key} NPV mismatch"


def main(argv: list[str] | None = None) -> None:
    for name, overrides in SCENARIOS.items():
        _check(name, overrides)
    print(f"[QA SCENARIOS OK] {len(SCENARIOS)} cases")


if __name__ == "__main__":
    main()
