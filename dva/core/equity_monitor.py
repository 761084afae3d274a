"""Negative-equity monitoring for projection tables.

These helpers analyze the year-by-year DataFrame (see ``dva.ui.tables``) to
find years where the buy-smaller scenario owes more than the home is worth,
or where any strategy's net worth snapshot drops below zero. Negative net
proceeds seed negative balances on purpose, so these are reported, not
prevented. They are designed to be called AFTER simulation, not during.
"""
from __future__ import annotations

from typing import Any

import pandas as pd

NET_WORTH_COLUMNS = ("Net Worth A", "Net Worth B", "Net Worth C")


def detect_negative_equity(df: pd.DataFrame | None) -> dict[str, Any]:
    """Analyze a projection DataFrame for negative equity conditions.

    Home equity is ``Home Equity B`` when present, otherwise
    ``Home Value - Mortgage Bal``.

    Returns:
        Dict with keys:
        - has_negative_equity: bool: True if home equity is ever below zero
        - first_underwater_year: int | None: first such year
        - max_negative_equity: float: deepest underwater amount (negative number)
        - years_underwater: int: total years with negative equity
        - underwater_at_horizon: bool: whether still underwater in the last year
        - negative_net_worth: dict[str, int]: years below zero per net worth column
    """
    result: dict[str, Any] = {
        "has_negative_equity": False,
        "first_underwater_year": None,
        "max_negative_equity": 0.0,
        "years_underwater": 0,
        "underwater_at_horizon": False,
        "negative_net_worth": {},
    }

    if df is None or df.empty:
        return result

    for col in NET_WORTH_COLUMNS:
        if col in df.columns:
            nw = pd.to_numeric(df[col], errors="coerce")
            n_neg = int((nw < 0).sum())
            if n_neg:
                result["negative_net_worth"][col] = n_neg

    if "Home Equity B" in df.columns:
        equity = pd.to_numeric(df["Home Equity B"], errors="coerce")
    elif "Home Value" in df.columns and "Mortgage Bal" in df.columns:
        equity = pd.to_numeric(df["Home Value"], errors="coerce") - pd.to_numeric(df["Mortgage Bal"], errors="coerce")
    else:
        return result

    underwater_mask = equity < 0
    if not underwater_mask.any():
        return result

    result["has_negative_equity"] = True
    result["years_underwater"] = int(underwater_mask.sum())
    result["max_negative_equity"] = float(equity[underwater_mask].min())
    result["underwater_at_horizon"] = bool(underwater_mask.iloc[-1])

    first_idx = underwater_mask.idxmax()
    if "Year" in df.columns:
        result["first_underwater_year"] = int(df.loc[first_idx, "Year"])
    else:
        result["first_underwater_year"] = int(first_idx) + 1

    return result


def format_underwater_warning(analysis: dict[str, Any]) -> str | None:
    """Generate a user-friendly warning message for negative equity.

    Returns None if nothing went negative.
    """
    parts: list[str] = []
    if analysis.get("has_negative_equity"):
        years = analysis["years_underwater"]
        max_neg = abs(analysis["max_negative_equity"])
        first_year = analysis["first_underwater_year"]
        msg = (
            f"The smaller home is underwater (negative equity) for {years} year(s). "
            f"First occurring in year {first_year}, with a maximum deficit of ${max_neg:,.0f}."
        )
        if analysis.get("underwater_at_horizon"):
            msg += " It is STILL underwater at the end of the horizon."
        parts.append(msg)

    negative_nw = analysis.get("negative_net_worth") or {}
    for col, n_years in negative_nw.items():
        parts.append(f"{col} is below zero in {n_years} year(s).")

    if not parts:
        return None
    return " ".join(parts)
