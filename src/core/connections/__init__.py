"""Connection fingerprinting and the dataset-scoped connection pool.

Usage:
    from src.core.connections import ConnectionPool
    pool = ConnectionPool(dataset)
    conn = pool.get_connection({"type": "dimensions", "dimension": "age"})
"""

from __future__ import annotations

from .connection import Connection, DimensionalConnection
from .fingerprint import NODIM, build_connection_id
from .pool import ConnectionPool

__all__ = [
    "Connection",
    "ConnectionPool",
    "DimensionalConnection",
    "NODIM",
    "build_connection_id",
]
