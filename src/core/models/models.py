"""Data models for connection requests, element dimension specs and hierarchies.

Provides ConnectionRequest, ConnectionKind, DimensionSpec and
DimensionHierarchy used across the project.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

DIMENSIONS = "dimensions"
OBSERVATIONS = "observations"

_REQUEST_FIELDS = ("dimension", "measure", "aggregation", "bucket", "bucket_interval", "cut")


class InvalidRequestError(ValueError):
    """Raised when a request description cannot be read at all."""


class ConnectionKind(Enum):
    """Concrete connection variant chosen for a request."""

    BASE = "base"
    DIMENSIONAL = "dimensional"


@dataclass
class ConnectionRequest:
    """Description of the data a consumer wants from a dataset.

    Attributes:
        type: ``"dimensions"``, ``"observations"`` or anything else.
            Unknown or missing types are accepted and never deduplicated.
        dimension: Dimension field id, or None when absent.
        measure: Measure field id used by observation requests.
        aggregation: Aggregation name used by observation requests.
        bucket: Bucket value. ``0`` and ``""`` are present values.
        bucket_interval: Bucket interval. Same absence rule as ``bucket``.
        cut: Explicit cut overriding the pool and dataset defaults.
        extra: Any other fields, carried onto the created connection.
    """

    type: str | None
    dimension: str | None = None
    measure: str | None = None
    aggregation: str | None = None
    bucket: Any = None
    bucket_interval: Any = None
    cut: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> ConnectionKind:
        """Variant discriminant: dimensional whenever a dimension is given."""
        if self.dimension is None:
            return ConnectionKind.BASE
        return ConnectionKind.DIMENSIONAL

    def attributes(self) -> dict[str, Any]:
        """Return the present request fields (cut excluded) as a flat dict."""
        attrs: dict[str, Any] = {"type": self.type}
        for name in _REQUEST_FIELDS:
            if name == "cut":
                continue
            value = getattr(self, name)
            if value is not None:
                attrs[name] = value
        attrs.update(self.extra)
        return attrs

    def to_dict(self) -> dict[str, Any]:
        """Convert the request to a plain dict, omitting absent fields."""
        data = self.attributes()
        if self.cut is not None:
            data["cut"] = dict(self.cut)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectionRequest:
        """Create a request from a mapping such as ``{"type": "dimensions", ...}``.

        Args:
            data: Mapping with at least a ``type`` key.

        Returns:
            ConnectionRequest instance.

        Raises:
            InvalidRequestError: If ``data`` is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise InvalidRequestError(f"Request must be a mapping, got {type(data).__name__}")

        raw_type = data.get("type")
        known = {name: data.get(name) for name in _REQUEST_FIELDS}
        extra = {k: v for k, v in data.items() if k != "type" and k not in _REQUEST_FIELDS}
        return cls(type=None if raw_type is None else str(raw_type), extra=extra, **known)


@dataclass
class DimensionSpec:
    """One entry of an element's declarative ``dimensions`` list.

    Attributes:
        field_id: Dimension field id. Specs without one are skipped.
        bucket: Optional bucket for the observations request.
    """

    field_id: str | None = None
    bucket: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DimensionSpec:
        """Create from ``{"field": {"id": ...}, "bucket": ...}``."""
        field_data = data.get("field") or {}
        return cls(field_id=field_data.get("id"), bucket=data.get("bucket"))


@dataclass
class DimensionHierarchy:
    """Drill-down description for a hierarchical dimension.

    Attributes:
        dimension: Dimension field id the hierarchy belongs to.
        level_field: Observation key holding the row's hierarchy level.
        levels: Ordered level names, coarsest first.
    """

    dimension: str
    level_field: str
    levels: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, dimension: str, data: Mapping[str, Any]) -> DimensionHierarchy:
        return cls(
            dimension=dimension,
            level_field=str(data["level_field"]),
            levels=list(data.get("levels", [])),
        )


@dataclass(frozen=True)
class DrillDownRequest:
    """A request to navigate into a finer level of a hierarchical dimension."""

    dimension: str
    level: Any
    parent_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"dimension": self.dimension, "level": self.level, "parentId": self.parent_id}
