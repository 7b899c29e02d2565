"""Visualisation element: pooled data dependencies and readiness tracking.

An element declares the dimensions it plots. Each dimension spec resolves to
one dimension connection and one observations connection through the
dataset's pool, so elements plotting the same data share connections.

Readiness is counter based: every ``change`` received from any subscribed
connection bumps ``loaded_count`` and republishes ``ready``. The element
reports loaded when a full round of notifications has been seen
(``loaded_count`` is a multiple of the number of subscriptions) and every
connection currently reports loaded. The round check does not verify that
each distinct connection fired; one connection firing twice completes a
round on its own.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Mapping

from src.core.config import config
from src.core.connections.connection import Connection
from src.core.events import EventEmitter
from src.core.models import DIMENSIONS, OBSERVATIONS, ConnectionRequest, DimensionSpec

if TYPE_CHECKING:
    from src.core.dataset import Dataset

logger = logging.getLogger(__name__)

READY = "ready"
ADD_CUT = "addCut"
REMOVE_CUT = "removeCut"


class Element:
    """A chart element bound to a dataset.

    Args:
        attributes: Element definition, e.g. ``{"id": "e1", "measure": {"id":
            "count"}, "aggregation": "sum", "dimensions": [{"field": {"id":
            "age"}, "bucket": 5}]}``.
        dataset: Dataset whose pool supplies the connections.
        visualisation_id: Id of the owning visualisation, used by ``url``.
    """

    # Observation ids with a decodable parent reference
    valid_parent = re.compile(r"\d+")

    def __init__(
        self,
        attributes: Mapping[str, Any],
        dataset: Dataset,
        visualisation_id: str | None = None,
    ) -> None:
        self.attributes = dict(attributes)
        self.dataset = dataset
        self.visualisation_id = visualisation_id
        self.events = EventEmitter()
        self.loaded_count = 0
        self.dimensions: list[Connection] = []
        self.observations: list[Connection] = []
        self._handles: list[tuple[Connection, str]] = []

        raw_measure = self.get("measure")
        measure = raw_measure.get("id") if isinstance(raw_measure, Mapping) else None
        aggregation = self.get("aggregation")

        for raw_spec in self.get("dimensions") or []:
            spec = DimensionSpec.from_dict(raw_spec)
            if spec.field_id is None:
                continue

            values = {
                "dimension": spec.field_id,
                "bucket": spec.bucket,
                "measure": measure,
                "aggregation": aggregation,
            }
            dimension = dataset.pool.get_connection(ConnectionRequest(type=DIMENSIONS, **values))
            observations = dataset.pool.get_connection(
                ConnectionRequest(type=OBSERVATIONS, **values)
            )

            for connection in (dimension, observations):
                self._handles.append((connection, connection.subscribe(self._on_change)))

            self.dimensions.append(dimension)
            self.observations.append(observations)

        logger.debug(
            "Element %s depends on %d connection(s)", self.get("id"), len(self._handles)
        )

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def url(self) -> str:
        return (
            f"{config.api_base_path}/datasets/{self.dataset.id}"
            f"/visualisations/{self.visualisation_id}/elements/{self.get('id')}"
        )

    @property
    def connections(self) -> list[Connection]:
        """All subscribed connections, dimensions first."""
        return self.dimensions + self.observations

    def _on_change(self, _connection: Connection) -> None:
        """Dataset connection change event handler."""
        self.loaded_count += 1
        self.events.publish(READY, self)

    def is_loaded(self) -> bool:
        """Return True if all required data has loaded."""
        total = len(self.dimensions) + len(self.observations)
        if total == 0:
            return False
        return self.loaded_count % total == 0 and all(
            conn.is_loaded() for conn in self.connections
        )

    def dispose(self) -> None:
        """Unsubscribe from every connection. ``loaded_count`` is kept."""
        for connection, handle in self._handles:
            connection.unsubscribe(handle)
        self._handles.clear()

    def feature_click(self, index: int) -> bool:
        """Handle a click on the feature (bar, point, row) at ``index``.

        Non-hierarchical dimensions toggle the cut on the clicked value.
        Hierarchical dimensions drill down below the clicked value when its
        id carries a parent reference.

        Returns:
            False when the element is not interactive, True otherwise.
        """
        if self.get("interactive") is False:
            return False

        dimension = self.get_field_id()
        hierarchy = self.dataset.get_dimension_hierarchy(dimension)
        observation = self.get_observation(index)
        if observation is None:
            raise IndexError(f"No observation at index {index}")

        if hierarchy is None:
            if self.has_cut_id(observation.get("id")):
                self.remove_cut()
            else:
                self.add_cut(observation.get("id"))
        else:
            level = observation.get(hierarchy.level_field)
            match = self.valid_parent.search(str(observation.get("id")))
            if match:
                self.dataset.drill_down(dimension, level, match.group(0))

        return True

    def add_cut(self, value: Any) -> None:
        """Publish an ``addCut`` event for this element's field."""
        self.events.publish(ADD_CUT, {self.get_field_id(): value})

    def remove_cut(self) -> None:
        """Publish a ``removeCut`` event for this element's field."""
        self.events.publish(REMOVE_CUT, [self.get_field_id()])

    def get_measure_label(self) -> str | None:
        return self.get("measure_label")

    # Proxies onto the first dimension/observations connections

    def get_labels(self) -> list[Any]:
        return self.dimensions[0].get_data()

    def get_label(self, value: Mapping[str, Any]) -> dict[str, Any]:
        label = self.dimensions[0].get_value(value.get("id"))
        if label is None:
            return {"label": "", **value}
        return label

    def get_observations(self) -> list[Any]:
        return self.observations[0].get_data()

    def get_observation(self, index: int) -> Any:
        return self.observations[0].get_value(index)

    def get_total(self) -> Any:
        return self.observations[0].get_total()

    def get_field_id(self) -> str | None:
        if not self.observations:
            return None
        return self.observations[0].get("dimension")

    def get_cut(self) -> Any:
        return self.dataset.get_cut(self.get_field_id())

    def is_cut(self) -> bool:
        return self.dataset.is_cut(self.get_field_id())

    def has_cut_id(self, value_id: Any) -> bool:
        return self.dataset.has_cut_id(self.get_field_id(), value_id)

    def has_cut_value(self, index: int) -> bool:
        if not self.observations:
            return False
        return self.dataset.has_cut_value(self.get_field_id(), index, self.observations[0])


__all__ = ["ADD_CUT", "READY", "REMOVE_CUT", "Element"]
