#!/usr/bin/env python3
"""Quick smoke checks for the downsize-vs-rent analyzer.

Run:
  python -m dva.qa.smoke_check
"""

from __future__ import annotations

import compileall
import math
import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def die(msg: str, code: int = 1) -> None:
    print(f"\n[SMOKE CHECK FAILED] {msg}\n")
    raise SystemExit(code)


def main(argv: list[str] | None = None) -> None:
    pkg_dir = _REPO_ROOT / "dva"
    if not compileall.compile_dir(str(pkg_dir), quiet=1):
        die("dva/ package failed to compile.")

    try:
        from dva.core.engine import simulate
        from dva.core.inputs import Inputs
    except ImportError as e:
        die(f"Import failure: {e}")

    proj = simulate(Inputs())
    if len(proj.yearly_data) != 15:
        die(f"Default projection has {len(proj.yearly_data)} rows, expected 15.")
    if abs(proj.net_proceeds - 1_222_000.0) > 1e-6:
        die(f"Default net proceeds drifted: {proj.net_proceeds!r}")
    if not all(math.isfinite(res.npv) for res in proj.results):
        die("Default projection produced a non-finite NPV.")

    print("\n[SMOKE CHECK OK]")
    print(f"Rows: {len(proj.yearly_data)}")
    for res in proj.results:
        print(f"{res.key}: NPV {res.npv:,.0f}  terminal {res.terminal:,.0f}")
    print(f"Recommended: {proj.best.key}\n")


if __name__ == "__main__":
    main()
