"""Models package re-exports.

Allows `from src.core.models import ConnectionRequest` imports by re-exporting
from the implementation module.
"""

from __future__ import annotations

from .models import (
    DIMENSIONS,
    OBSERVATIONS,
    ConnectionKind,
    ConnectionRequest,
    DimensionHierarchy,
    DimensionSpec,
    DrillDownRequest,
    InvalidRequestError,
)

__all__ = [
    "DIMENSIONS",
    "OBSERVATIONS",
    "ConnectionKind",
    "ConnectionRequest",
    "DimensionHierarchy",
    "DimensionSpec",
    "DrillDownRequest",
    "InvalidRequestError",
]
