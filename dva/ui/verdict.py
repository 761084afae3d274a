"""Verdict line for the downsize-vs-rent comparison.

Picks the strategy with the highest NPV (ties go to A, then B, then C) and
phrases the lead over the runner-up.
"""

from __future__ import annotations

from dva.core.engine import Projection
from dva.ui.formatting import to_currency


def verdict_text(projection: Projection) -> str:
    best = projection.best
    others = [res for res in projection.results if res.key != best.key]
    if not others:
        return f"Recommended: {best.key} (NPV {to_currency(best.npv)})"

    runner_up = max(others, key=lambda r: r.npv)
    lead = best.npv - runner_up.npv
    if lead == 0:
        return f"{best.key} and {runner_up.key} tie on NPV ({to_currency(best.npv)})"
    return f"Recommended: {best.key}, leads {runner_up.key} by {to_currency(lead)} in NPV"
