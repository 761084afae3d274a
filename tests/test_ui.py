"""Tests for the presentation helpers: tables, charts, formatting, defaults, verdict."""

from __future__ import annotations

import pytest

from dva.core.engine import SCENARIO_A, SCENARIO_B, Projection, ScenarioResult, simulate
from dva.core.inputs import Inputs
from dva.core.sensitivity import sweep
from dva.ui.charts import net_worth_figure, outflows_figure, sensitivity_figure
from dva.ui.defaults import DEFAULT_INPUTS, PRESETS, apply_preset, default_state
from dva.ui.formatting import to_currency
from dva.ui.tables import results_frame, settlement_summary, yearly_frame
from dva.ui.verdict import verdict_text


@pytest.fixture(scope="module")
def proj() -> Projection:
    return simulate(Inputs())


class TestToCurrency:
    def test_whole_dollars(self) -> None:
        assert to_currency(1_222_000) == "$1,222,000"
        assert to_currency(1234.4) == "$1,234"
        assert to_currency(1234.6) == "$1,235"

    def test_negative(self) -> None:
        assert to_currency(-178_000) == "-$178,000"
        assert to_currency(-0.4) == "$0"

    def test_non_finite(self) -> None:
        assert to_currency(float("nan")) == "-"
        assert to_currency(float("inf")) == "-"
        assert to_currency(None) == "-"  # type: ignore[arg-type]


class TestTables:
    def test_yearly_frame(self, proj: Projection) -> None:
        df = yearly_frame(proj)
        assert len(df) == 15
        assert list(df["Year"]) == list(range(1, 16))
        assert df["Net Worth A"].iloc[0] == pytest.approx(proj.yearly_data[0].net_worth_a)
        assert df["Home Equity B"].iloc[0] == pytest.approx(
            proj.yearly_data[0].home_value - proj.yearly_data[0].remaining_principal
        )

    def test_yearly_frame_empty(self) -> None:
        df = yearly_frame(simulate(Inputs(years=0)))
        assert df.empty
        assert "Home Equity B" in df.columns

    def test_results_frame(self, proj: Projection) -> None:
        df = results_frame(proj)
        assert list(df["Scenario"]) == [res.key for res in proj.results]
        assert int(df["Recommended"].sum()) == 1
        assert df.loc[df["Recommended"], "Scenario"].iloc[0] == proj.best.key

    def test_settlement_summary(self, proj: Projection) -> None:
        s = settlement_summary(proj)
        assert s["net_proceeds"] == pytest.approx(1_222_000.0)
        assert s["mortgage_principal"] == pytest.approx(89_000.0)


class TestCharts:
    def test_net_worth_figure(self, proj: Projection) -> None:
        fig = net_worth_figure(proj)
        assert [t.name for t in fig.data] == ["A: Rent (100% invest)", "B: Buy Smaller", "C: Rent+Storage (50% invest)"]
        assert list(fig.data[0].x) == list(range(1, 16))
        assert fig.data[1].y[0] == pytest.approx(proj.yearly_data[0].net_worth_b)
        assert fig.layout.title.text == "Net Worth Over Time"

    def test_outflows_figure_is_stacked(self, proj: Projection) -> None:
        fig = outflows_figure(proj)
        assert len(fig.data) == 3
        assert all(t.stackgroup == "outflows" for t in fig.data)
        assert fig.data[1].y[0] == pytest.approx(proj.yearly_data[0].home_costs_b)

    def test_sensitivity_figure(self) -> None:
        table = sweep(Inputs(), "monthly_rent", [3_000.0, 4_500.0, 6_000.0])
        fig = sensitivity_figure(table, "monthly_rent")
        assert [t.name for t in fig.data] == ["NPV A", "NPV B", "NPV C"]
        assert list(fig.data[0].x) == [3_000.0, 4_500.0, 6_000.0]


class TestDefaults:
    def test_default_state_is_a_fresh_copy(self) -> None:
        state = default_state()
        state["years"] = 99
        assert default_state()["years"] == 15
        assert DEFAULT_INPUTS.years == 15

    def test_presets_only_touch_known_fields(self) -> None:
        names = set(Inputs.field_names())
        for preset in PRESETS.values():
            assert set(preset) <= names

    def test_apply_preset(self) -> None:
        state = apply_preset(default_state(), "Stagnation")
        assert state["home_appreciation_pct"] == PRESETS["Stagnation"]["home_appreciation_pct"]
        assert state["monthly_rent"] == 4_500.0
        assert Inputs.from_mapping(state).invest_return_pct == PRESETS["Stagnation"]["invest_return_pct"]

    def test_apply_unknown_preset(self) -> None:
        with pytest.raises(ValueError):
            apply_preset(default_state(), "Boom")


class TestVerdict:
    def test_mentions_best(self, proj: Projection) -> None:
        text = verdict_text(proj)
        assert proj.best.key in text
        assert text.startswith("Recommended:")

    def test_tie(self) -> None:
        proj = Projection(
            net_proceeds=0.0,
            yearly_data=(),
            results=(ScenarioResult(SCENARIO_A, 10.0, 0.0), ScenarioResult(SCENARIO_B, 10.0, 0.0)),
            equity_before_tax=0.0,
            selling_costs=0.0,
            capital_gains_tax=0.0,
        )
        assert "tie" in verdict_text(proj)
        assert verdict_text(proj).startswith(SCENARIO_A)

    def test_lead_amount(self) -> None:
        proj = Projection(
            net_proceeds=0.0,
            yearly_data=(),
            results=(ScenarioResult(SCENARIO_A, 10.0, 0.0), ScenarioResult(SCENARIO_B, 1_510.0, 0.0)),
            equity_before_tax=0.0,
            selling_costs=0.0,
            capital_gains_tax=0.0,
        )
        assert verdict_text(proj) == f"Recommended: {SCENARIO_B}, leads {SCENARIO_A} by $1,500 in NPV"
