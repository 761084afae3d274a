"""Tabular views of a projection.

Kept free of Streamlit imports so the CLI and tests can build the same tables
a UI would show.
"""

from __future__ import annotations

import pandas as pd

from dva.core.engine import Projection

YEARLY_COLUMNS = {
    "year": "Year",
    "invest_a": "Invest A",
    "net_worth_a": "Net Worth A",
    "home_value": "Home Value",
    "remaining_principal": "Mortgage Bal",
    "invest_b": "Invest B",
    "net_worth_b": "Net Worth B",
    "out_a": "Out A",
    "home_costs_b": "Home Costs B",
    "out_c": "Out C",
    "net_worth_c": "Net Worth C",
    "interest_paid_b": "Interest B",
    "principal_paid_b": "Principal B",
    "invest_c": "Invest C",
}


def yearly_frame(projection: Projection) -> pd.DataFrame:
    """One row per projected year, with display column names."""
    rows = [{label: getattr(rec, attr) for attr, label in YEARLY_COLUMNS.items()} for rec in projection.yearly_data]
    df = pd.DataFrame(rows, columns=list(YEARLY_COLUMNS.values()))
    if not df.empty:
        df["Home Equity B"] = df["Home Value"] - df["Mortgage Bal"]
    else:
        df["Home Equity B"] = pd.Series(dtype="float64")
    return df


def results_frame(projection: Projection) -> pd.DataFrame:
    """One row per strategy: NPV, terminal assets and whether it is recommended."""
    best_key = projection.best.key
    return pd.DataFrame(
        [
            {
                "Scenario": res.key,
                "NPV": res.npv,
                "Terminal Assets": res.terminal,
                "Recommended": res.key == best_key,
            }
            for res in projection.results
        ],
        columns=["Scenario", "NPV", "Terminal Assets", "Recommended"],
    )


def settlement_summary(projection: Projection) -> dict[str, float]:
    return {
        "net_proceeds": projection.net_proceeds,
        "selling_costs": projection.selling_costs,
        "capital_gains_tax": projection.capital_gains_tax,
        "equity_before_tax": projection.equity_before_tax,
        "down_payment": projection.down_payment,
        "closing_costs": projection.closing_costs,
        "mortgage_principal": projection.mortgage_principal,
        "monthly_payment": projection.monthly_payment,
    }
