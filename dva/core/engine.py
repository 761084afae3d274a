"""Deterministic projection engine for the downsize-vs-rent comparison.

Three strategies are projected side by side from the same sale of the current
home:

* A: sell and rent, investing 100% of net proceeds.
* B: sell and buy a smaller home, putting part of the proceeds down and
  investing the rest.
* C: sell and rent (with storage), investing half of the proceeds and keeping
  the other half as non-growing cash.

The yearly projection is a fold over ``1..years``. Each strategy has its own
immutable state and a pure step function returning the next state plus that
year's figures; ``simulate`` threads the three states through the loop and
collects one ``YearRecord`` per year.

Ranking uses the NPV of ``[initial, -outflow_1, ..., -outflow_N, terminal]``.
The terminal value is discounted at period ``N + 1``, one period past the last
annual outflow.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .inputs import Inputs
from .mortgage import _annual_pct_to_monthly_rate, amortization_payment, amortize_year

SCENARIO_A = "A: Sell & Rent (invest 100%)"
SCENARIO_B = "B: Sell & Buy Smaller (invest rest)"
SCENARIO_C = "C: Rent + Storage (invest 50%)"
SCENARIO_KEYS = (SCENARIO_A, SCENARIO_B, SCENARIO_C)

# Share of net proceeds scenario C invests; the remainder is held as cash.
C_INVESTED_SHARE = 0.5


def _pct(x: float) -> float:
    return float(x) / 100.0


def grow_annual(value: float, rate_pct: float, years: int = 1) -> float:
    """Compound ``value`` at ``rate_pct`` (percent) for ``years`` whole years."""
    return value * (1.0 + _pct(rate_pct)) ** years


def npv(cashflows: Iterable[float], discount_rate_pct: float) -> float:
    """Net present value with the entry at index ``t`` discounted by ``(1+r)^t``."""
    r = _pct(discount_rate_pct)
    return sum(cf / (1.0 + r) ** t for t, cf in enumerate(cashflows))


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SaleSettlement:
    selling_costs: float
    equity_before_tax: float
    capital_gains_tax: float
    net_proceeds: float


@dataclass(frozen=True)
class YearRecord:
    year: int
    net_worth_a: float
    net_worth_b: float
    net_worth_c: float
    invest_a: float
    invest_b: float
    invest_c: float
    out_a: float
    home_costs_b: float
    out_c: float
    remaining_principal: float
    home_value: float
    interest_paid_b: float = 0.0
    principal_paid_b: float = 0.0


@dataclass(frozen=True)
class ScenarioResult:
    key: str
    npv: float
    terminal: float


@dataclass(frozen=True)
class Projection:
    net_proceeds: float
    yearly_data: tuple[YearRecord, ...]
    results: tuple[ScenarioResult, ...]
    equity_before_tax: float
    selling_costs: float
    capital_gains_tax: float
    down_payment: float = 0.0
    closing_costs: float = 0.0
    mortgage_principal: float = 0.0
    monthly_payment: float = 0.0

    @property
    def best(self) -> ScenarioResult:
        return recommend(self.results)


def recommend(results: Sequence[ScenarioResult]) -> ScenarioResult:
    """Highest-NPV result; ties go to the earliest entry."""
    if not results:
        raise ValueError("recommend() needs at least one scenario result")
    best = results[0]
    for res in results[1:]:
        if res.npv > best.npv:
            best = res
    return best


# ---------------------------------------------------------------------------
# Sale settlement
# ---------------------------------------------------------------------------


def settle_sale(inputs: Inputs) -> SaleSettlement:
    """Cash left after selling the current home.

    Tax is floored at zero: a loss position pays no tax and gets no rebate.
    ``net_proceeds`` may be negative when debt plus selling costs exceed value.
    """
    gross_sale = float(inputs.current_home_value)
    selling_costs = gross_sale * _pct(inputs.selling_costs_pct)
    equity_before_tax = gross_sale - float(inputs.current_mortgage_balance) - selling_costs
    capital_gains_tax = max(0.0, equity_before_tax) * _pct(inputs.cap_gains_tax_pct)
    return SaleSettlement(
        selling_costs=selling_costs,
        equity_before_tax=equity_before_tax,
        capital_gains_tax=capital_gains_tax,
        net_proceeds=equity_before_tax - capital_gains_tax,
    )


# ---------------------------------------------------------------------------
# Scenario states and step functions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RentState:
    """Scenarios A and C: a growing balance plus nominal rent/storage."""

    invest: float
    rent_monthly: float
    storage_monthly: float
    cash: float = 0.0


@dataclass(frozen=True)
class OwnState:
    """Scenario B: invested remainder, mortgage and the home itself."""

    invest: float
    remaining_principal: float
    home_value: float


@dataclass(frozen=True)
class RentYear:
    invest: float
    outflow: float
    net_worth: float


@dataclass(frozen=True)
class OwnYear:
    invest: float
    home_costs: float
    interest_paid: float
    principal_paid: float
    remaining_principal: float
    home_value: float
    net_worth: float


def step_rent(state: RentState, inputs: Inputs) -> tuple[RentState, RentYear]:
    """Advance a renting scenario by one year.

    The outflow is deducted from the snapshot only; the invested balance
    carries forward untouched by living costs.
    """
    invest = grow_annual(state.invest, inputs.invest_net_rate_pct)
    rent_annual = state.rent_monthly * 12.0
    storage_annual = (state.storage_monthly if inputs.include_storage else 0.0) * 12.0
    outflow = rent_annual + storage_annual

    new_state = replace(
        state,
        invest=invest,
        rent_monthly=state.rent_monthly * (1.0 + _pct(inputs.rent_annual_inflation_pct)),
        storage_monthly=state.storage_monthly * (1.0 + _pct(inputs.storage_annual_inflation_pct)),
    )
    return new_state, RentYear(invest=invest, outflow=outflow, net_worth=invest + state.cash - outflow)


def step_own(
    state: OwnState, inputs: Inputs, *, payment: float, monthly_rate: float
) -> tuple[OwnState, OwnYear]:
    """Advance the buy-smaller scenario by one year.

    Property tax and maintenance are charged on the home value at the start of
    the year; the reported home value is the appreciated year-end value.
    """
    invest = grow_annual(state.invest, inputs.invest_net_rate_pct)
    amort = amortize_year(state.remaining_principal, payment, monthly_rate)

    property_tax = state.home_value * _pct(inputs.property_tax_pct)
    maintenance = state.home_value * _pct(inputs.maintenance_pct)
    hoa = float(inputs.hoa_monthly) * 12.0
    home_costs = amort.interest_paid + property_tax + maintenance + float(inputs.insurance_annual) + hoa

    home_value = grow_annual(state.home_value, inputs.home_appreciation_pct)
    remaining = amort.remaining_principal

    new_state = OwnState(invest=invest, remaining_principal=remaining, home_value=home_value)
    return new_state, OwnYear(
        invest=invest,
        home_costs=home_costs,
        interest_paid=amort.interest_paid,
        principal_paid=amort.principal_paid,
        remaining_principal=remaining,
        home_value=home_value,
        net_worth=invest + home_value - remaining - home_costs,
    )


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


def simulate(inputs: Inputs) -> Projection:
    """Project all three strategies over ``inputs.years`` and rank them by NPV."""
    sale = settle_sale(inputs)
    net_proceeds = sale.net_proceeds
    dp_share = _pct(inputs.down_payment_from_proceeds_pct)

    # Scenario B purchase at t=0
    down_payment = net_proceeds * dp_share
    closing_costs = float(inputs.smaller_home_price) * _pct(inputs.smaller_home_closing_pct)
    principal_b = float(inputs.smaller_home_price) - down_payment
    payment_b = amortization_payment(principal_b, inputs.mortgage_rate_pct, inputs.mortgage_years)
    monthly_rate_b = _annual_pct_to_monthly_rate(inputs.mortgage_rate_pct)

    state_a = RentState(
        invest=net_proceeds,
        rent_monthly=float(inputs.monthly_rent),
        storage_monthly=float(inputs.storage_monthly),
    )
    state_b = OwnState(
        invest=net_proceeds * (1.0 - dp_share),
        remaining_principal=principal_b,
        home_value=float(inputs.smaller_home_price),
    )
    cash_c = net_proceeds * (1.0 - C_INVESTED_SHARE)
    state_c = RentState(
        invest=net_proceeds * C_INVESTED_SHARE,
        rent_monthly=float(inputs.monthly_rent),
        storage_monthly=float(inputs.storage_monthly),
        cash=cash_c,
    )

    cashflows_a = [0.0]
    cashflows_b = [-(down_payment + closing_costs)]
    cashflows_c = [0.0]
    yearly: list[YearRecord] = []

    for year in range(1, int(inputs.years) + 1):
        state_a, year_a = step_rent(state_a, inputs)
        state_b, year_b = step_own(state_b, inputs, payment=payment_b, monthly_rate=monthly_rate_b)
        state_c, year_c = step_rent(state_c, inputs)

        yearly.append(
            YearRecord(
                year=year,
                net_worth_a=year_a.net_worth,
                net_worth_b=year_b.net_worth,
                net_worth_c=year_c.net_worth,
                invest_a=year_a.invest,
                invest_b=year_b.invest,
                invest_c=year_c.invest,
                out_a=year_a.outflow,
                home_costs_b=year_b.home_costs,
                out_c=year_c.outflow,
                remaining_principal=max(0.0, year_b.remaining_principal),
                home_value=year_b.home_value,
                interest_paid_b=year_b.interest_paid,
                principal_paid_b=year_b.principal_paid,
            )
        )
        cashflows_a.append(-year_a.outflow)
        cashflows_b.append(-year_b.home_costs)
        cashflows_c.append(-year_c.outflow)

    last = yearly[-1] if yearly else None
    terminal_a = last.invest_a if last else 0.0
    terminal_b = (last.home_value - last.remaining_principal + last.invest_b) if last else 0.0
    terminal_c = (last.invest_c if last else 0.0) + cash_c

    rate = inputs.discount_rate_pct
    results = (
        ScenarioResult(key=SCENARIO_A, npv=npv([*cashflows_a, terminal_a], rate), terminal=terminal_a),
        ScenarioResult(key=SCENARIO_B, npv=npv([*cashflows_b, terminal_b], rate), terminal=terminal_b),
        ScenarioResult(key=SCENARIO_C, npv=npv([*cashflows_c, terminal_c], rate), terminal=terminal_c),
    )

    return Projection(
        net_proceeds=net_proceeds,
        yearly_data=tuple(yearly),
        results=results,
        equity_before_tax=sale.equity_before_tax,
        selling_costs=sale.selling_costs,
        capital_gains_tax=sale.capital_gains_tax,
        down_payment=down_payment,
        closing_costs=closing_costs,
        mortgage_principal=principal_b,
        monthly_payment=payment_b,
    )


def scenario_cashflows(projection: Projection) -> dict[str, list[float]]:
    """Rebuild each strategy's NPV cash-flow sequence, terminal value last."""
    years = projection.yearly_data
    terminals = {res.key: res.terminal for res in projection.results}
    return {
        SCENARIO_A: [0.0, *(-y.out_a for y in years), terminals[SCENARIO_A]],
        SCENARIO_B: [
            -(projection.down_payment + projection.closing_costs),
            *(-y.home_costs_b for y in years),
            terminals[SCENARIO_B],
        ],
        SCENARIO_C: [0.0, *(-y.out_c for y in years), terminals[SCENARIO_C]],
    }
