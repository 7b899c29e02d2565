"""Dataset: cut state, dimension hierarchies and the connection pool owner.

The dataset outlives every connection and element built on it. Cut changes
are published as events; they never refresh connections already pooled.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from src.core.config import config
from src.core.connections.pool import ConnectionPool
from src.core.events import EventEmitter
from src.core.models import OBSERVATIONS, DimensionHierarchy, DrillDownRequest

if TYPE_CHECKING:
    from src.core.connections.connection import Connection
    from src.core.visualisation.element import Element

logger = logging.getLogger(__name__)

CUT_CHANGED = "change:cut"
DRILL_DOWN = "drillDown"


class Dataset:
    """A dataset and the connection pool scoped to it.

    Attributes:
        id: Dataset identifier used in connection and element URLs.
        cut: Current filter state, mapping dimension field id to value.
        hierarchies: Drill-down descriptions keyed by dimension field id.
        pool: Connection pool bound to this dataset.
        drilldowns: Drill-down requests issued so far, oldest first.
    """

    def __init__(
        self,
        id: str,
        cut: Mapping[str, Any] | None = None,
        hierarchies: Mapping[str, DimensionHierarchy] | None = None,
        default_cut: dict[str, Any] | None = None,
    ) -> None:
        self.id = id
        self.cut: dict[str, Any] = dict(cut or {})
        self.hierarchies: dict[str, DimensionHierarchy] = dict(hierarchies or {})
        self.events = EventEmitter()
        if default_cut is None:
            default_cut = config.connection_default_cut
        self.pool = ConnectionPool(self, default_cut=default_cut)
        self.drilldowns: list[DrillDownRequest] = []

    def get_dimension_hierarchy(self, dimension: str | None) -> DimensionHierarchy | None:
        if dimension is None:
            return None
        return self.hierarchies.get(dimension)

    def get_cut(self, field_id: str | None) -> Any:
        return self.cut.get(field_id) if field_id is not None else None

    def is_cut(self, field_id: str | None) -> bool:
        return field_id is not None and field_id in self.cut

    def has_cut_id(self, field_id: str | None, value_id: Any) -> bool:
        """Return True if ``value_id`` is (one of) the cut value(s) of the field."""
        if not self.is_cut(field_id):
            return False
        current = self.cut[field_id]
        values = current if isinstance(current, (list, tuple, set)) else [current]
        return any(str(v) == str(value_id) for v in values)

    def has_cut_value(
        self, field_id: str | None, index: int, connection: Connection | None = None
    ) -> bool:
        """Return True if the observation row at ``index`` of the field is cut.

        Args:
            field_id: Dimension field id.
            index: Row position in the observations.
            connection: Observations connection holding the rows. Elements
                pass their own; without one, the first loaded observations
                connection pooled for the field is used.
        """
        if connection is None:
            connection = next(
                (
                    conn
                    for conn in self.pool
                    if conn.type == OBSERVATIONS
                    and conn.get("dimension") == field_id
                    and conn.is_loaded()
                ),
                None,
            )
        if connection is None:
            return False
        row = connection.get_value(index)
        return row is not None and self.has_cut_id(field_id, row.get("id"))

    def add_cut(self, values: Mapping[str, Any]) -> None:
        """Merge ``{field_id: value}`` into the cut and publish the change."""
        self.cut.update(values)
        logger.info("Dataset %s cut added: %s", self.id, dict(values))
        self.events.publish(CUT_CHANGED, dict(self.cut))

    def remove_cut(self, field_ids: Iterable[str]) -> None:
        """Drop the given fields from the cut and publish the change."""
        removed = [f for f in field_ids if f in self.cut]
        if not removed:
            return
        for field_id in removed:
            del self.cut[field_id]
        logger.info("Dataset %s cut removed: %s", self.id, removed)
        self.events.publish(CUT_CHANGED, dict(self.cut))

    def drill_down(self, dimension: str, level: Any, parent_id: str) -> DrillDownRequest:
        """Record and publish a drill-down into ``dimension`` below ``parent_id``."""
        request = DrillDownRequest(dimension=dimension, level=level, parent_id=parent_id)
        self.drilldowns.append(request)
        logger.info("Dataset %s drill-down: %s", self.id, request.to_dict())
        self.events.publish(DRILL_DOWN, request)
        return request

    def watch(self, element: Element) -> list[str]:
        """Apply an element's ``addCut``/``removeCut`` events to this dataset.

        Returns:
            The subscription handles on the element's event channel.
        """
        return [
            element.events.subscribe("addCut", self.add_cut),
            element.events.subscribe("removeCut", self.remove_cut),
        ]


__all__ = ["CUT_CHANGED", "DRILL_DOWN", "Dataset"]
