# tests/unit/test_events.py
"""
Unit tests for the in-process event dispatcher.
"""

import pytest

from chirper.core.events import ChirpCreated, EventDispatcher
from chirper.core.models import Chirp


class OtherEvent:
    pass


class TestEventDispatcher:
    """Tests for subscribe / dispatch."""

    def test_dispatch_without_listeners(self):
        events = EventDispatcher()
        assert events.dispatch(OtherEvent()) == []
        assert events.has_listeners(OtherEvent) is False

    def test_handlers_run_in_subscription_order(self):
        events = EventDispatcher()
        calls = []
        events.subscribe(ChirpCreated, lambda e: calls.append("first") or 1)
        events.subscribe(ChirpCreated, lambda e: calls.append("second") or 2)

        results = events.dispatch(ChirpCreated(chirp=Chirp(id=1, user_id=1, message="Hi")))

        assert calls == ["first", "second"]
        assert results == [1, 2]

    def test_dispatch_matches_exact_event_type(self):
        events = EventDispatcher()
        seen = []
        events.subscribe(ChirpCreated, seen.append)

        events.dispatch(OtherEvent())

        assert seen == []

    def test_listeners_for_returns_a_copy(self):
        events = EventDispatcher()
        events.subscribe(ChirpCreated, print)

        events.listeners_for(ChirpCreated).clear()

        assert events.has_listeners(ChirpCreated)

    def test_handler_errors_propagate(self):
        events = EventDispatcher()

        def boom(event):
            raise RuntimeError("listener broke")

        events.subscribe(OtherEvent, boom)
        with pytest.raises(RuntimeError):
            events.dispatch(OtherEvent())
