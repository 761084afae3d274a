"""Default inputs and market-assumption presets.

This module is intentionally free of UI-toolkit imports so tests and the CLI
share one source of truth for first-load values.
"""

from __future__ import annotations

from typing import Any, Dict, MutableMapping

from dva.core.inputs import Inputs

DEFAULT_INPUTS = Inputs()

# Market presets only touch the shared assumptions, never the household's own
# figures (home value, rent, prices).
PRESETS: Dict[str, Dict[str, float]] = {
    "Baseline": {
        "mortgage_rate_pct": 6.5,
        "home_appreciation_pct": 3.0,
        "rent_annual_inflation_pct": 3.0,
        "storage_annual_inflation_pct": 3.0,
        "invest_return_pct": 6.5,
        "discount_rate_pct": 5.5,
    },
    "High Inflation": {
        "mortgage_rate_pct": 8.0,
        "home_appreciation_pct": 5.0,
        "rent_annual_inflation_pct": 5.5,
        "storage_annual_inflation_pct": 5.0,
        "invest_return_pct": 8.0,
        "discount_rate_pct": 7.0,
    },
    "Stagnation": {
        "mortgage_rate_pct": 4.5,
        "home_appreciation_pct": 1.0,
        "rent_annual_inflation_pct": 1.5,
        "storage_annual_inflation_pct": 1.5,
        "invest_return_pct": 4.0,
        "discount_rate_pct": 4.0,
    },
}


def default_state() -> Dict[str, Any]:
    """Fresh, mutable copy of the default inputs as a plain dict."""
    return DEFAULT_INPUTS.to_dict()


def apply_preset(state: MutableMapping[str, Any], preset: str) -> MutableMapping[str, Any]:
    """Overwrite the preset's keys in ``state`` in place and return it."""
    if preset not in PRESETS:
        raise ValueError(f"Unknown preset {preset!r}; choose from {', '.join(PRESETS)}")
    state.update(PRESETS[preset])
    return state
