"""Tests for the synchronous event channel."""

from __future__ import annotations

import pytest

from src.core.events import EventEmitter


def test_delivery_in_subscription_order():
    emitter = EventEmitter()
    calls = []
    emitter.subscribe("change", lambda p: calls.append(("first", p)))
    emitter.subscribe("other", lambda p: calls.append(("other", p)))
    emitter.subscribe("change", lambda p: calls.append(("second", p)))

    emitter.publish("change", 1)

    assert calls == [("first", 1), ("second", 1)]


def test_unsubscribe_stops_delivery():
    emitter = EventEmitter()
    calls = []
    handle = emitter.subscribe("change", calls.append)
    emitter.unsubscribe(handle)
    emitter.unsubscribe("sub_unknown")

    emitter.publish("change", "x")

    assert calls == []
    assert emitter.subscription_count() == 0


def test_handlers_added_during_publish_wait_for_next_publish():
    emitter = EventEmitter()
    calls = []

    def add_more(payload):
        calls.append(("outer", payload))
        emitter.subscribe("change", lambda p: calls.append(("inner", p)))

    emitter.subscribe("change", add_more)
    emitter.publish("change", 1)
    assert calls == [("outer", 1)]
    assert emitter.subscription_count("change") == 2


def test_handler_errors_propagate():
    emitter = EventEmitter()
    calls = []

    def boom(_payload):
        raise RuntimeError("handler failed")

    emitter.subscribe("change", boom)
    emitter.subscribe("change", calls.append)

    with pytest.raises(RuntimeError):
        emitter.publish("change", None)
    assert calls == []
