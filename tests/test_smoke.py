"""Pytest wrappers for the dva QA suites."""

from __future__ import annotations

from dva.core.engine import simulate
from dva.qa.qa_scenarios import main as _qa_scenarios_main
from dva.qa.smoke_check import main as _smoke_main

import run_all_qa


def test_smoke_import() -> None:
    """Engine import succeeds."""
    assert simulate is not None


def test_smoke_check() -> None:
    _smoke_main([])


def test_qa_scenarios() -> None:
    """All edge-case scenarios keep the structural invariants."""
    _qa_scenarios_main([])


def test_run_all_qa_selected_suite(capsys) -> None:
    assert run_all_qa.main(["smoke"]) == 0
    assert "QA PASS" in capsys.readouterr().out


def test_run_all_qa_rejects_unknown_suite(capsys) -> None:
    assert run_all_qa.main(["nope"]) == 1
    assert "nope" in capsys.readouterr().out
