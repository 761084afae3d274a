"""Canonical JSON and deterministic hashes for inputs and projections.

The engine is a pure function, so the same ``Inputs`` must always produce the
same projection. These helpers give both sides a stable, comparable form: a
canonical JSON string (sorted keys, normalized floats) and its SHA-256.
"""

from __future__ import annotations

import hashlib
import json
import math
from dataclasses import asdict, is_dataclass
from typing import Any

from .engine import Projection
from .inputs import Inputs

INPUTS_SCHEMA = "dva.inputs.v1"
PROJECTION_SCHEMA = "dva.projection.v1"


def _normalize_float(x: float) -> int | float | None:
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v):
        return None
    # Collapse signed zero and tiny floating noise.
    if abs(v) < 1e-15:
        v = 0.0
    v = float(f"{v:.12g}")
    if abs(v - round(v)) <= 1e-12:
        return int(round(v))
    return v


def canonicalize_jsonish(value: Any) -> Any:
    """Return a JSON-safe, deterministically ordered representation.

    Dataclasses become dicts, tuples become lists, floats are normalized to 12
    significant digits and non-finite floats become ``None``.
    """
    if value is None or isinstance(value, (str, bool)):
        return value

    if isinstance(value, int):
        return int(value)

    if isinstance(value, float):
        return _normalize_float(value)

    if is_dataclass(value) and not isinstance(value, type):
        return canonicalize_jsonish(asdict(value))

    if isinstance(value, dict):
        return {str(k): canonicalize_jsonish(value[k]) for k in sorted(value.keys(), key=str)}

    if isinstance(value, (list, tuple)):
        return [canonicalize_jsonish(v) for v in value]

    # numpy scalars and similar expose item()
    if hasattr(value, "item"):
        return canonicalize_jsonish(value.item())

    return str(value)


def canonical_json(value: Any) -> str:
    return json.dumps(canonicalize_jsonish(value), sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def inputs_hash(inputs: Inputs) -> str:
    return _sha256(canonical_json(inputs))


def projection_to_dict(projection: Projection) -> dict[str, Any]:
    """Plain-dict form of a projection, including the recommended strategy."""
    payload = canonicalize_jsonish(projection)
    payload["best"] = projection.best.key
    return payload


def projection_hash(projection: Projection) -> str:
    return _sha256(canonical_json(projection_to_dict(projection)))


def snapshot(inputs: Inputs, projection: Projection) -> dict[str, Any]:
    """Self-describing record pairing an input set with its projection."""
    return {
        "inputs": {"schema": INPUTS_SCHEMA, "state": canonicalize_jsonish(inputs), "hash": inputs_hash(inputs)},
        "projection": {
            "schema": PROJECTION_SCHEMA,
            "state": projection_to_dict(projection),
            "hash": projection_hash(projection),
        },
    }
