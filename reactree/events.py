"""
Event Bus
=========

Named listeners plus an ordered list of external subscribers.

Listeners are matched on the exact event name. Wildcard and namespaced
names (``create:players.*``, ``change:stuff.info``) are ordinary names; the
classifier fires them explicitly, so the bus never pattern-matches.

Subscribers are any objects with a callable ``trigger``. Each receives every
event fired on the bus, prefixed ``namespace:`` when it subscribed with one.
That is how one store (or a view) follows another.

Example:
    bus = EventBus()
    bus.on("change:name", lambda change, new, old: print(change, new))
    bus.subscribe(other_store, "players")  # relays as "players:change:name"
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import InvalidListenerError, UnsupportedSubscriberError

Listener = Callable[..., Any]


class EventBus:
    """Registry of listeners and subscribers for one store."""

    def __init__(self):
        self._events: Dict[str, List[Listener]] = {}
        self._subscribers: List[Tuple[Any, str]] = []

    def on(self, event: str, callback: Listener) -> "EventBus":
        """Append ``callback`` to the listeners of ``event``."""
        if not callable(callback):
            raise InvalidListenerError(
                f"Listener for '{event}' must be callable, got {type(callback).__name__}"
            )
        self._events.setdefault(event, []).append(callback)
        return self

    def off(self, event: str, callback: Optional[Listener] = None) -> "EventBus":
        """Remove every listener of ``event``, or only those equal to ``callback``."""
        if event not in self._events:
            return self
        if callback is None:
            del self._events[event]
            return self

        remaining = [listener for listener in self._events[event] if listener != callback]
        if remaining:
            self._events[event] = remaining
        else:
            del self._events[event]
        return self

    def trigger(self, event: str, *args: Any) -> None:
        """Call listeners of ``event`` in order, then relay it to subscribers."""
        # Copies allow listeners to (un)register while being dispatched.
        for listener in list(self._events.get(event, ())):
            listener(*args)

        for subscriber, namespace in list(self._subscribers):
            name = f"{namespace}:{event}" if namespace else event
            subscriber.trigger(name, *args)

    def subscribe(self, subscriber: Any, namespace: str = "") -> "EventBus":
        """Relay every event to ``subscriber``, optionally namespace-prefixed."""
        if not callable(getattr(subscriber, "trigger", None)):
            raise UnsupportedSubscriberError(
                "Unsupported subscriber type provided. Must implement a trigger method."
            )
        self._subscribers.append((subscriber, namespace))
        logging.debug(f"Subscribed {type(subscriber).__name__} (namespace={namespace!r})")
        return self

    def unsubscribe(self, subscriber: Any, namespace: str = "") -> "EventBus":
        """Stop relaying to the exact (subscriber, namespace) pair."""
        self._subscribers = [
            (sub, ns)
            for sub, ns in self._subscribers
            if not (sub is subscriber and ns == namespace)
        ]
        logging.debug(f"Unsubscribed {type(subscriber).__name__} (namespace={namespace!r})")
        return self

    def listeners(self, event: str) -> List[Listener]:
        return list(self._events.get(event, ()))

    @property
    def events(self) -> List[str]:
        """Event names that currently have listeners, in registration order."""
        return list(self._events)

    @property
    def subscribers(self) -> List[Tuple[Any, str]]:
        return list(self._subscribers)
