"""Typed input record for the projection engine.

Every ``*_pct`` field is a whole-number percentage (6.5 means 6.5%).
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class Inputs:
    # Current home
    current_home_value: float = 1_300_000.0
    current_mortgage_balance: float = 0.0
    selling_costs_pct: float = 6.0
    cap_gains_tax_pct: float = 0.0  # effective % on positive equity

    # Smaller home (scenario B)
    smaller_home_price: float = 700_000.0
    smaller_home_closing_pct: float = 2.5
    down_payment_from_proceeds_pct: float = 50.0
    mortgage_rate_pct: float = 6.5
    mortgage_years: int = 30
    property_tax_pct: float = 2.1
    insurance_annual: float = 2_500.0
    hoa_monthly: float = 250.0
    maintenance_pct: float = 1.0
    home_appreciation_pct: float = 3.0

    # Rent
    monthly_rent: float = 4_500.0
    rent_annual_inflation_pct: float = 3.0

    # Storage
    include_storage: bool = True
    storage_monthly: float = 350.0
    storage_annual_inflation_pct: float = 3.0

    # Investments
    invest_return_pct: float = 6.5
    invest_tax_drag_pct: float = 0.5

    # Horizon & discounting
    years: int = 15
    discount_rate_pct: float = 5.5

    @property
    def invest_net_rate_pct(self) -> float:
        return self.invest_return_pct - self.invest_tax_drag_pct

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **changes: Any) -> "Inputs":
        return replace(self, **changes)

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "Inputs":
        """Build an ``Inputs`` from loosely typed form/JSON data.

        Keys may be snake_case or camelCase (``monthlyRent``). Missing keys keep
        their defaults. Blank, unparseable or non-finite numbers become 0, the
        way an empty numeric form field reads. Unknown keys raise ``ValueError``.
        """
        known = {f.name: f for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        unknown: list[str] = []
        for raw_key, raw_value in (data or {}).items():
            key = normalize_key(str(raw_key))
            if key not in known:
                unknown.append(str(raw_key))
                continue
            default = known[key].default
            if isinstance(default, bool):
                kwargs[key] = _coerce_bool(raw_value)
            elif isinstance(default, int):
                kwargs[key] = int(_coerce_number(raw_value))
            else:
                kwargs[key] = _coerce_number(raw_value)
        if unknown:
            raise ValueError(f"Unknown input field(s): {', '.join(sorted(unknown))}")
        return cls(**kwargs)


_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_key(name: str) -> str:
    """``monthlyRent`` -> ``monthly_rent``; snake_case passes through."""
    return _CAMEL_RE.sub("_", name).lower()


def _coerce_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("$", "").replace("%", "")
        if not value:
            return 0.0
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(x):
        return 0.0
    return x


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
