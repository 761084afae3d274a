import json

import pytest

from dva import __main__ as cli


def test_cli_json_summary_defaults(capsys):
    """Default run reports the reference sale and a positive mortgage payment."""
    rc = cli.main(["--json"])
    assert rc == 0

    data = json.loads(capsys.readouterr().out)
    assert data["horizon_years"] == 15
    assert data["net_proceeds"] == pytest.approx(1_222_000.0)
    assert data["selling_costs"] == pytest.approx(78_000.0)
    assert data["down_payment"] == pytest.approx(611_000.0)
    assert data["mortgage_principal"] == pytest.approx(89_000.0)
    assert data["monthly_payment"] == pytest.approx(562.54, abs=0.01)
    assert [r["key"] for r in data["results"]] == [
        "A: Sell & Rent (invest 100%)",
        "B: Sell & Buy Smaller (invest rest)",
        "C: Rent + Storage (invest 50%)",
    ]
    best = max(data["results"], key=lambda r: r["npv"])
    assert data["recommended"] == best["key"]
    assert len(data["projection_hash"]) == 64


def test_cli_json_is_deterministic(capsys):
    cli.main(["--json"])
    first = capsys.readouterr().out
    cli.main(["--json"])
    second = capsys.readouterr().out
    assert first == second


def test_cli_csv_has_one_row_per_year(capsys):
    rc = cli.main(["--set", "years=7"])
    assert rc == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("Year,Invest A,Net Worth A")
    assert len(lines) == 1 + 7


def test_cli_example_round_trips(capsys, tmp_path):
    assert cli.main(["--example"]) == 0
    example = json.loads(capsys.readouterr().out)
    assert example["inputs"]["monthly_rent"] == 4_500.0

    example["inputs"]["years"] = 5
    cfg = tmp_path / "scenario.json"
    cfg.write_text(json.dumps(example))
    out_file = tmp_path / "out.csv"

    assert cli.main(["--config", str(cfg), "--output", str(out_file)]) == 0
    rows = out_file.read_text().strip().splitlines()
    assert len(rows) == 1 + 5


def test_cli_overrides_beat_config(capsys, tmp_path):
    cfg = tmp_path / "scenario.json"
    cfg.write_text(json.dumps({"inputs": {"years": 5, "includeStorage": True}}))
    assert cli.main(["--config", str(cfg), "--set", "years=3", "--set", "include_storage=false", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["horizon_years"] == 3

    assert cli.main(["--set", "years=3", "--set", "includeStorage=false", "--json"]) == 0
    direct = json.loads(capsys.readouterr().out)
    assert data["projection_hash"] == direct["projection_hash"]


def test_cli_preset_changes_result(capsys):
    cli.main(["--json"])
    base = json.loads(capsys.readouterr().out)
    assert cli.main(["--json", "--preset", "High Inflation"]) == 0
    high = json.loads(capsys.readouterr().out)
    assert high["monthly_payment"] > base["monthly_payment"]


def test_cli_missing_config(capsys, tmp_path):
    rc = cli.main(["--config", str(tmp_path / "nope.json")])
    assert rc == 1
    assert "not found" in capsys.readouterr().err


def test_cli_rejects_invalid_horizon(capsys):
    rc = cli.main(["--set", "years=0"])
    assert rc == 1
    assert "Horizon" in capsys.readouterr().err


def test_cli_rejects_unknown_field(capsys):
    rc = cli.main(["--set", "not_a_field=1"])
    assert rc == 1
    assert "not_a_field" in capsys.readouterr().err


def test_cli_strict_fails_on_warnings(capsys):
    rc = cli.main(["--strict", "--set", "current_mortgage_balance=1500000"])
    assert rc == 1
    err = capsys.readouterr().err
    assert "Net proceeds" in err


def test_cli_negative_proceeds_still_runs(capsys):
    rc = cli.main(["--json", "--set", "current_mortgage_balance=1500000"])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data["net_proceeds"] < 0


@pytest.mark.parametrize("payload", [[1, 2], {"inputs": None}, {"inputs": [["years", 5]]}])
def test_cli_config_must_be_object(capsys, tmp_path, payload):
    cfg = tmp_path / "scenario.json"
    cfg.write_text(json.dumps(payload))
    rc = cli.main(["--config", str(cfg), "--json"])
    assert rc == 1
    captured = capsys.readouterr()
    assert "Config error" in captured.err
    assert captured.out == ""


def test_cli_clamp_pulls_values_into_range(capsys):
    rc = cli.main(["--clamp", "--json", "--set", "years=0", "--set", "mortgage_rate_pct=40"])
    assert rc == 0
    captured = capsys.readouterr()
    data = json.loads(captured.out)
    assert data["horizon_years"] == 1
    assert "Horizon" in captured.err
    assert "Mortgage rate" in captured.err

    assert cli.main(["--json", "--set", "years=1", "--set", "mortgage_rate_pct=25"]) == 0
    direct = json.loads(capsys.readouterr().out)
    assert data["projection_hash"] == direct["projection_hash"]


def test_cli_without_clamp_still_rejects(capsys):
    assert cli.main(["--set", "years=0"]) == 1
    assert "Horizon" in capsys.readouterr().err
