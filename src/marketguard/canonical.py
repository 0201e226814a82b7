"""Canonical JSON form used for immutability comparisons.

Two values are considered equal when their canonical serializations are
identical: object key order is ignored, array order and scalar values are
not.
"""

import json
from typing import Any


def canonicalize(value: Any) -> Any:
    """Return a copy of a JSON value with all object keys sorted recursively.

    Integral floats are folded into ints so that ``1`` and ``1.0`` compare
    equal, as they do in JSON.
    """
    if isinstance(value, dict):
        return {key: canonicalize(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [canonicalize(item) for item in value]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def canonical_dumps(value: Any) -> str:
    """Serialize a JSON value in canonical form."""
    return json.dumps(
        canonicalize(value),
        ensure_ascii=False,
        separators=(",", ":"),
    )


def canonical_equal(left: Any, right: Any) -> bool:
    """Compare two JSON values by their canonical serialization."""
    return canonical_dumps(left) == canonical_dumps(right)
