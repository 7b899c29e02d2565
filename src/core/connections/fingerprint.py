"""Connection fingerprints.

A fingerprint is the pool key of a connection. It is built only from the
request fields that change the data a connection would fetch, so that
requests that differ in irrelevant fields share one connection.
"""

from __future__ import annotations

import itertools
from typing import Any, Mapping

from src.core.models import DIMENSIONS, OBSERVATIONS, ConnectionRequest

NODIM = "NODIM"
UNDEFINED = "undefined"

_unique_counter = itertools.count(1)


def _unique_id(prefix: str = "conn_") -> str:
    """Return a process-wide unique token. Never reused."""
    return f"{prefix}{next(_unique_counter)}"


def _part(value: Any) -> str:
    """Render one fingerprint segment."""
    if value is None:
        return UNDEFINED
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_connection_id(request: ConnectionRequest | Mapping[str, Any]) -> str:
    """Build the deterministic fingerprint for a connection request.

    Args:
        request: A ConnectionRequest or an equivalent mapping.

    Returns:
        ``"dimensions:<dimension>"`` for dimension requests,
        ``"observations:<dimension|NODIM>:<measure>:<aggregation>[:<interval>][:<bucket>]"``
        for observation requests, and a fresh ``conn_<n>`` token otherwise.
    """
    if not isinstance(request, ConnectionRequest):
        request = ConnectionRequest.from_dict(request)

    if request.type == DIMENSIONS:
        # Measures, aggregations and buckets don't change a dimension's values.
        return f"{DIMENSIONS}:{_part(request.dimension)}"

    if request.type == OBSERVATIONS:
        dim = NODIM if request.dimension is None else _part(request.dimension)
        parts = [OBSERVATIONS, dim, _part(request.measure), _part(request.aggregation)]
        if request.bucket_interval is not None:
            parts.append(_part(request.bucket_interval))
        if request.bucket is not None:
            parts.append(_part(request.bucket))
        return ":".join(parts)

    return _unique_id()


__all__ = ["NODIM", "UNDEFINED", "build_connection_id"]
