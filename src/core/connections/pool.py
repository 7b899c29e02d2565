"""Dataset-scoped connection pool.

The pool guarantees at most one connection per fingerprint for the
lifetime of its dataset. Entries are created lazily on the first miss and
are never evicted or refreshed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Mapping

from src.core.connections.connection import CONNECTION_TYPES, Connection
from src.core.connections.fingerprint import build_connection_id
from src.core.models import ConnectionRequest

if TYPE_CHECKING:
    from src.core.dataset import Dataset

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Get-or-create cache of connections keyed by fingerprint.

    Args:
        dataset: Dataset every pooled connection belongs to.
        default_cut: Cut applied to new connections whose request carries
            none. Falls back to the dataset's cut when None.
    """

    def __init__(self, dataset: Dataset, default_cut: dict[str, Any] | None = None) -> None:
        self.dataset = dataset
        self.default_cut = default_cut
        self._connections: dict[str, Connection] = {}

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._connections

    def __iter__(self) -> Iterator[Connection]:
        return iter(list(self._connections.values()))

    def ids(self) -> list[str]:
        return list(self._connections)

    def get(self, connection_id: str) -> Connection | None:
        return self._connections.get(connection_id)

    def get_connection(self, request: ConnectionRequest | Mapping[str, Any]) -> Connection:
        """Return the shared connection for ``request``, creating it on a miss.

        Args:
            request: A ConnectionRequest or an equivalent mapping.

        Returns:
            The pooled connection. Repeat lookups return the same instance
            untouched, whatever cut the later request carries.
        """
        if not isinstance(request, ConnectionRequest):
            request = ConnectionRequest.from_dict(request)

        connection_id = build_connection_id(request)
        existing = self._connections.get(connection_id)
        if existing is not None:
            logger.debug("Connection pool hit: %s", connection_id)
            return existing

        connection = self._create(connection_id, request)
        self._connections[connection_id] = connection
        logger.info(
            "Created %s %s for dataset %s",
            type(connection).__name__,
            connection_id,
            self.dataset.id,
        )
        return connection

    def _create(self, connection_id: str, request: ConnectionRequest) -> Connection:
        if request.cut is not None:
            cut = request.cut
        elif self.default_cut is not None:
            cut = self.default_cut
        else:
            cut = self.dataset.cut

        # id and dataset are owned by the pool
        attributes = request.attributes()
        attributes.pop("id", None)
        attributes.pop("dataset", None)

        connection_cls = CONNECTION_TYPES[request.kind]
        return connection_cls(
            id=connection_id,
            dataset=self.dataset,
            cut=dict(cut) if cut is not None else None,
            **attributes,
        )


__all__ = ["ConnectionPool"]
