"""Synchronous publish/subscribe channel.

Connections, datasets and elements all carry an ``EventEmitter``. Delivery
is immediate and in subscription order; a handler runs to completion before
the next one is called.

Example::

    emitter = EventEmitter()
    handle = emitter.subscribe("change", lambda payload: print(payload))
    emitter.publish("change", {"id": "dimensions:age"})
    emitter.unsubscribe(handle)
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


@dataclass(frozen=True)
class Subscription:
    """Internal subscription record."""

    id: str
    event: str
    handler: EventHandler


class EventEmitter:
    """In-process observer with synchronous, ordered delivery."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, Subscription] = {}

    def subscribe(self, event: str, handler: EventHandler) -> str:
        """Register ``handler`` for ``event``.

        Args:
            event: Event name, e.g. ``"change"`` or ``"ready"``.
            handler: Callable receiving the published payload.

        Returns:
            Subscription handle accepted by ``unsubscribe``.
        """
        sub_id = f"sub_{uuid.uuid4().hex[:12]}"
        self._subscriptions[sub_id] = Subscription(id=sub_id, event=event, handler=handler)
        return sub_id

    def unsubscribe(self, handle: str) -> None:
        """Remove a subscription. Unknown handles are ignored."""
        self._subscriptions.pop(handle, None)

    def publish(self, event: str, payload: Any = None) -> None:
        """Deliver ``payload`` to every handler subscribed to ``event``.

        Handlers added while delivery is in progress are not called for this
        publish. Exceptions raised by a handler propagate to the caller.
        """
        handlers = [sub.handler for sub in self._subscriptions.values() if sub.event == event]
        if not handlers:
            return
        logger.debug("Publishing %r to %d handler(s)", event, len(handlers))
        for handler in handlers:
            handler(payload)

    def subscription_count(self, event: str | None = None) -> int:
        """Number of active subscriptions, optionally for one event."""
        if event is None:
            return len(self._subscriptions)
        return sum(1 for sub in self._subscriptions.values() if sub.event == event)


__all__ = ["EventEmitter", "EventHandler", "Subscription"]
