"""Pooled connections to dataset resources.

A connection is an addressable, asynchronously populated unit of dataset
data. Fetching is done elsewhere; the fetcher hands the parsed payload to
``set_data`` (or reports ``mark_failed``) and every subscriber is told
through the ``change`` event.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.core.config import config
from src.core.events import EventEmitter, EventHandler
from src.core.models import DIMENSIONS, ConnectionKind

if TYPE_CHECKING:
    from src.core.dataset import Dataset

logger = logging.getLogger(__name__)

CHANGE = "change"


class Connection:
    """Base connection variant, used for requests without a dimension.

    Attributes:
        id: Fingerprint of the request that created the connection.
        type: Request type (``"dimensions"``, ``"observations"``, ...).
        dataset: Owning dataset, shared with the pool and all connections.
        cut: Filter state the connection was created with.
    """

    kind = ConnectionKind.BASE

    def __init__(
        self,
        id: str,
        dataset: Dataset,
        cut: dict[str, Any] | None = None,
        **attributes: Any,
    ) -> None:
        self.id = id
        self.dataset = dataset
        self.cut = cut
        self.type: str | None = attributes.pop("type", None)
        self._attributes = attributes
        self._data: Any = None
        self._loaded = False
        self.error: Exception | None = None
        self.events = EventEmitter()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, loaded={self._loaded})"

    def get(self, name: str, default: Any = None) -> Any:
        """Read a request attribute carried onto this connection."""
        if name in ("id", "type", "cut", "dataset"):
            return getattr(self, name)
        return self._attributes.get(name, default)

    def subscribe(self, handler: EventHandler) -> str:
        """Subscribe to this connection's ``change`` notification."""
        return self.events.subscribe(CHANGE, handler)

    def unsubscribe(self, handle: str) -> None:
        self.events.unsubscribe(handle)

    def url(self) -> str:
        return f"{config.api_base_path}/datasets/{self.dataset.id}/{self.type}"

    def is_loaded(self) -> bool:
        return self._loaded

    def set_data(self, payload: Any) -> None:
        """Apply a fetched payload, mark the connection loaded and notify."""
        self._data = payload
        self._loaded = True
        self.error = None
        logger.debug("Connection %s loaded", self.id)
        self.events.publish(CHANGE, self)

    def mark_failed(self, error: Exception) -> None:
        """Record a fetch failure. The connection stays not loaded."""
        self.error = error
        self._loaded = False
        logger.warning("Connection %s failed to load: %s", self.id, error)

    def set_cut(self, cut: dict[str, Any] | None) -> None:
        """Replace the cut of this (possibly shared) connection.

        The current payload no longer matches the cut, so the connection
        reverts to not loaded until new data is applied.
        """
        self.cut = cut
        self._loaded = False
        self.events.publish(CHANGE, self)

    def get_data(self) -> list[Any]:
        """Return the loaded rows (empty until loaded)."""
        if self._data is None:
            return []
        if isinstance(self._data, dict):
            return list(self._data.get("data", []))
        return list(self._data)

    def get_value(self, key: Any) -> Any:
        """Return the row at position ``key``, or None when out of range."""
        rows = self.get_data()
        try:
            return rows[int(key)]
        except (IndexError, TypeError, ValueError):
            return None

    def get_total(self) -> Any:
        """Return the payload total, or the sum of the rows' ``total`` values."""
        if isinstance(self._data, dict) and "total" in self._data:
            return self._data["total"]
        return sum(row.get("total", 0) or 0 for row in self.get_data() if isinstance(row, dict))


class DimensionalConnection(Connection):
    """Connection variant for requests that name a dimension."""

    kind = ConnectionKind.DIMENSIONAL

    @property
    def dimension(self) -> str:
        return self._attributes["dimension"]

    @property
    def measure(self) -> str | None:
        return self._attributes.get("measure")

    @property
    def aggregation(self) -> str | None:
        return self._attributes.get("aggregation")

    @property
    def bucket(self) -> Any:
        return self._attributes.get("bucket")

    @property
    def bucket_interval(self) -> Any:
        return self._attributes.get("bucket_interval")

    def url(self) -> str:
        if self.type == DIMENSIONS:
            return f"{super().url()}/{self.dimension}"
        return super().url()

    def get_value(self, key: Any) -> Any:
        """Dimension rows are looked up by id, observation rows by position."""
        if self.type != DIMENSIONS:
            return super().get_value(key)
        for row in self.get_data():
            if isinstance(row, dict) and row.get("id") == key:
                return row
        return None


CONNECTION_TYPES: dict[ConnectionKind, type[Connection]] = {
    ConnectionKind.BASE: Connection,
    ConnectionKind.DIMENSIONAL: DimensionalConnection,
}


__all__ = ["CHANGE", "CONNECTION_TYPES", "Connection", "DimensionalConnection"]
