# src/chirper/core/events.py
"""
In-process domain events.

Subscribers are registered explicitly when the container wires the
application; there is no listener discovery. Dispatch is synchronous:
``dispatch`` returns once every handler for the event has run.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, List, Type

from .models import Chirp

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Any]


@dataclass(frozen=True)
class ChirpCreated:
    """Fired after a chirp has been persisted."""
    chirp: Chirp


class EventDispatcher:
    """
    Minimal publish/subscribe registry.

    Usage:
        events = EventDispatcher()
        events.subscribe(ChirpCreated, dispatcher.handle)
        events.dispatch(ChirpCreated(chirp))
    """

    def __init__(self):
        self._listeners: DefaultDict[Type, List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: Type, handler: EventHandler) -> None:
        """Register a handler for an event type."""
        self._listeners[event_type].append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__qualname__', handler)} to {event_type.__name__}")

    def listeners_for(self, event_type: Type) -> List[EventHandler]:
        """Handlers registered for an event type, in subscription order."""
        return list(self._listeners.get(event_type, []))

    def has_listeners(self, event_type: Type) -> bool:
        return bool(self._listeners.get(event_type))

    def dispatch(self, event: Any) -> List[Any]:
        """
        Run every handler registered for ``type(event)``.

        Returns:
            The handlers' return values, in subscription order
        """
        handlers = self.listeners_for(type(event))
        logger.debug(f"Dispatching {type(event).__name__} to {len(handlers)} listener(s)")
        return [handler(event) for handler in handlers]
