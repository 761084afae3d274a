from __future__ import annotations

import math


def to_currency(x: float) -> str:
    """Whole-dollar USD string (``$1,234`` / ``-$1,234``); ``-`` for non-finite values."""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return "-"
    if not math.isfinite(v):
        return "-"
    v = round(v) + 0.0  # no "-$0"
    if v < 0:
        return f"-${abs(v):,.0f}"
    return f"${v:,.0f}"
