"""Fixed-rate mortgage amortization utilities.

All rates are annual nominal percentages (6.5 means 6.5%) compounded monthly.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

# Remaining principal at or below this is treated as paid off.
PAID_OFF_EPS = 1e-6


def _annual_pct_to_monthly_rate(rate_pct: float) -> float:
    """Convert an annual nominal rate in percent to a monthly rate (decimal)."""
    return float(rate_pct) / 100.0 / 12.0


def amortization_payment(principal: float, annual_rate_pct: float, years: float) -> float:
    """Level monthly payment for a fixed-rate loan.

    Args:
        principal: Loan principal. Negative principal yields a negative payment.
        annual_rate_pct: Annual nominal rate in percent.
        years: Loan term in years.

    Returns:
        Monthly payment amount.
    """
    r = _annual_pct_to_monthly_rate(annual_rate_pct)
    n = float(years) * 12.0
    if r == 0:
        return float(principal) / n
    return float(principal) * r / (1.0 - (1.0 + r) ** (-n))


@dataclass(frozen=True)
class AmortizationYear:
    interest_paid: float
    principal_paid: float
    remaining_principal: float


def amortize_year(remaining_principal: float, payment: float, monthly_rate: float) -> AmortizationYear:
    """Run up to 12 monthly payments against ``remaining_principal``.

    Principal paid in a month never exceeds what is still owed, and the loop
    stops as soon as the balance drops to ``PAID_OFF_EPS`` or below.
    """
    remaining = float(remaining_principal)
    interest_year = 0.0
    principal_year = 0.0
    for _ in range(12):
        interest = remaining * monthly_rate
        principal_paid = min(payment - interest, remaining)
        remaining -= principal_paid
        interest_year += interest
        principal_year += principal_paid
        if remaining <= PAID_OFF_EPS:
            break
    return AmortizationYear(
        interest_paid=interest_year,
        principal_paid=principal_year,
        remaining_principal=remaining,
    )


def amortization_schedule(principal: float, annual_rate_pct: float, years: int) -> pd.DataFrame:
    """Year-by-year schedule for a fixed-rate loan over its full term.

    Columns: ``Year``, ``Interest``, ``Principal``, ``Balance``. The balance
    column is clamped at zero for display.
    """
    n_years = int(years)
    payment = amortization_payment(principal, annual_rate_pct, n_years)
    mr = _annual_pct_to_monthly_rate(annual_rate_pct)

    rows = []
    remaining = float(principal)
    for year in range(1, n_years + 1):
        step = amortize_year(remaining, payment, mr)
        remaining = step.remaining_principal
        rows.append(
            {
                "Year": year,
                "Interest": step.interest_paid,
                "Principal": step.principal_paid,
                "Balance": max(0.0, remaining),
            }
        )
    return pd.DataFrame(rows, columns=["Year", "Interest", "Principal", "Balance"])
