#!/usr/bin/env python3
"""Run the dva QA suites in order and report a single pass/fail.

    python run_all_qa.py                 # every suite
    python run_all_qa.py smoke           # just the named suites
    python run_all_qa.py --list

Exit code is 0 when every selected suite passes, 1 otherwise.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

# suite name -> module exposing ``main(argv)``
SUITES = {
    "smoke": "dva.qa.smoke_check",
    "scenarios": "dva.qa.qa_scenarios",
}


def run_suite(name: str) -> int:
    module = importlib.import_module(SUITES[name])
    try:
        rc = module.main([])
    except SystemExit as exc:
        rc = exc.code
    except AssertionError as exc:
        print(f"[qa] {name}: assertion failed: {exc}")
        return 1
    if rc is None:
        return 0
    return rc if isinstance(rc, int) else 1


def main(argv: list[str] | None = None) -> int:
    root = str(Path(__file__).resolve().parent)
    if root not in sys.path:
        sys.path.insert(0, root)

    ap = argparse.ArgumentParser(description="Run dva QA suites.")
    ap.add_argument("suites", nargs="*", help="Suites to run (default: all).")
    ap.add_argument("--list", action="store_true", help="List suites and exit.")
    args = ap.parse_args(argv)

    if args.list:
        print("\n".join(SUITES))
        return 0

    unknown = sorted(set(args.suites) - set(SUITES))
    if unknown:
        print(f"[qa] unknown suite(s): {', '.join(unknown)}")
        return 1

    selected = [s for s in SUITES if not args.suites or s in args.suites]
    failed = []
    for name in selected:
        print(f"--- {name} ---")
        rc = run_suite(name)
        print(f"[qa] {name}: {'ok' if rc == 0 else f'FAILED (exit {rc})'}\n")
        if rc != 0:
            failed.append(name)

    if failed:
        print(f"QA FAILED: {', '.join(failed)}")
        return 1
    print("QA PASS")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
