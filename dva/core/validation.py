"""Validation helpers for the downsize-vs-rent analyzer.

The projection engine assumes well-formed positive terms and horizons and
does no defensive checking of its own. This module is the layer that runs in
front of it:

* ``get_validation_warnings`` never raises. It returns human-readable
  messages a UI can show next to the inputs (e.g. a down payment larger than
  the smaller home's price, or net proceeds that go negative).

* ``validate_inputs`` raises ``ValueError`` for inputs the engine cannot
  meaningfully project: negative prices or balances, a horizon or mortgage
  term of zero years or less.

* ``clamp_inputs`` (with ``clamp_rate`` / ``clamp_positive``) pulls values back
  into a modeled range for the CLI's ``--clamp`` flag
  and emits a ``warnings.warn`` for each one it moves.
"""

from __future__ import annotations

import warnings as _warnings
from typing import List

from .engine import settle_sale
from .inputs import Inputs

_NON_NEGATIVE_FIELDS = {
    "current_home_value": "Current home value",
    "current_mortgage_balance": "Current mortgage balance",
    "smaller_home_price": "Smaller home price",
    "insurance_annual": "Insurance",
    "hoa_monthly": "HOA",
    "monthly_rent": "Monthly rent",
    "storage_monthly": "Storage",
}


def get_validation_errors(inputs: Inputs) -> List[str]:
    """Return the hard errors that make a projection meaningless."""
    errors: List[str] = []
    for name, label in _NON_NEGATIVE_FIELDS.items():
        value = float(getattr(inputs, name))
        if value < 0:
            errors.append(f"{label} must not be negative (got {value:,.2f}).")
    if int(inputs.years) <= 0:
        errors.append(f"Horizon must be at least 1 year (got {inputs.years}).")
    if int(inputs.mortgage_years) <= 0:
        errors.append(f"Mortgage term must be at least 1 year (got {inputs.mortgage_years}).")
    return errors


def validate_inputs(inputs: Inputs) -> Inputs:
    """Raise ``ValueError`` listing every hard error; return ``inputs`` otherwise."""
    errors = get_validation_errors(inputs)
    if errors:
        raise ValueError("Invalid inputs: " + " ".join(errors))
    return inputs


def get_validation_warnings(inputs: Inputs) -> List[str]:
    """Return a list of human-readable warnings for an input set.

    Warnings flag combinations that are legal but probably not what the user
    meant. The list is empty when nothing looks off.
    """
    msgs: List[str] = []
    sale = settle_sale(inputs)

    if sale.net_proceeds < 0:
        msgs.append(
            f"Net proceeds from the sale are negative (${sale.net_proceeds:,.0f}): "
            "the mortgage balance and selling costs exceed the sale price."
        )

    down = sale.net_proceeds * float(inputs.down_payment_from_proceeds_pct) / 100.0
    price = float(inputs.smaller_home_price)
    if price > 0 and down > price + 1e-9:
        msgs.append(
            f"Down payment of ${down:,.0f} exceeds the smaller home price of ${price:,.0f}; "
            "the surplus is treated as a negative mortgage."
        )

    dp_pct = float(inputs.down_payment_from_proceeds_pct)
    if dp_pct < 0 or dp_pct > 100:
        msgs.append(f"Down payment share of proceeds is {dp_pct:.1f}%; expected between 0% and 100%.")

    if inputs.invest_tax_drag_pct > inputs.invest_return_pct:
        msgs.append(
            f"Investment tax drag ({inputs.invest_tax_drag_pct:.2f}%) exceeds the return "
            f"({inputs.invest_return_pct:.2f}%): invested balances will shrink every year."
        )

    if int(inputs.years) > 100:
        msgs.append(f"Horizon of {inputs.years} years is beyond the modeled range (100 years).")

    return msgs


# ---------------------------------------------------------------------------
# Range clamping (``--clamp`` on the CLI)
# ---------------------------------------------------------------------------

# field -> (label, low, high); None leaves that side open
_RATE_RANGES = {
    "selling_costs_pct": ("Selling costs", 0.0, 20.0),
    "cap_gains_tax_pct": ("Capital gains tax", 0.0, 60.0),
    "down_payment_from_proceeds_pct": ("Down payment from proceeds", 0.0, 100.0),
    "mortgage_rate_pct": ("Mortgage rate", 0.0, 25.0),
    "home_appreciation_pct": ("Home appreciation", -20.0, 30.0),
    "rent_annual_inflation_pct": ("Rent inflation", -5.0, 25.0),
    "invest_return_pct": ("Investment return", -20.0, 50.0),
    "discount_rate_pct": ("Discount rate", -5.0, 50.0),
}
_AMOUNT_CAPS = {
    "current_home_value": ("Current home value", 100_000_000.0),
    "current_mortgage_balance": ("Current mortgage balance", None),
    "smaller_home_price": ("Smaller home price", 100_000_000.0),
    "monthly_rent": ("Monthly rent", 1_000_000.0),
    "storage_monthly": ("Storage", 100_000.0),
}
_TERM_RANGES = {
    "mortgage_years": ("Mortgage term", 1, 50),
    "years": ("Horizon", 1, 100),
}


def _pull_into(value, name: str, low, high, unit: str = ""):
    if high is not None and value > high:
        _warnings.warn(f"{name}={value:g}{unit} is above {high:g}{unit}; using {high:g}{unit}.")
        return high
    if low is not None and value < low:
        _warnings.warn(f"{name}={value:g}{unit} is below {low:g}{unit}; using {low:g}{unit}.")
        return low
    return value


def clamp_rate(value: float, name: str, *, min_val: float = -10.0, max_val: float = 50.0) -> float:
    """Pull a whole-number percentage into ``[min_val, max_val]``, warning if moved."""
    return _pull_into(value, name, min_val, max_val, "%")


def clamp_positive(value: float, name: str, *, max_val: float | None = None) -> float:
    return _pull_into(value, name, 0.0, max_val)


def clamp_inputs(inputs: Inputs) -> Inputs:
    """Copy of ``inputs`` with rates, amounts and terms pulled into modeled ranges.

    Each adjustment is reported through ``warnings.warn``; nothing raises.
    """
    changes = {}
    for field, (label, low, high) in _RATE_RANGES.items():
        changes[field] = clamp_rate(getattr(inputs, field), label, min_val=low, max_val=high)
    for field, (label, cap) in _AMOUNT_CAPS.items():
        changes[field] = clamp_positive(getattr(inputs, field), label, max_val=cap)
    for field, (label, low, high) in _TERM_RANGES.items():
        changes[field] = int(_pull_into(int(getattr(inputs, field)), label, low, high))
    return inputs.with_overrides(**changes)
