"""
Reactree Store - Reactive Tree Facade
=====================================

A store holds a nested tree of plain values (dicts, lists, leaves and
callables), tracks every mutation made through it, diffs the result against
the last committed snapshot and fans typed change notifications out to
listeners and subscribers.

Basic Usage
-----------

```python
from reactree import Store

store = Store({"stuff": {"northwind": "costa", "info": [1, 2, 3]}, "name": "dave"})

store.on("update:name", lambda new, old: print(f"{old} -> {new}"))
store.set("name", "bob")            # dave -> bob

store.get("stuff.info[1]")          # 2
store.get(["stuff", "info", 1])     # 2
```

Events
------

Each mutation classifies every path it touches as CREATE, UPDATE, REMOVE or
NONE (innermost first) and fires, per path:

- ``create:<path>`` / ``update:<path>`` / ``remove:<path>`` / ``unchanged:<path>``
- the same typed event on the wildcard path (``players.*``) except for NONE
- ``change:<path>`` and ``change:<wildcard>`` with ``(change, new, old)``
  unless the path is unchanged
- ``change`` with ``(change, path, new, old)`` for every visited path

When anything changed, the snapshot is committed and ``updated`` fires once.
Reads fire ``read`` with the dotted path unless the store was created with
``emit_reads=False``.

Handles
-------

``get`` returns an :class:`~reactree.proxy.AccessProxy` for dicts and lists.
Handles resolve their path on every access, so they keep working after
their subtree is replaced:

```python
player = store.get("players.0")
player.on("change", lambda change, new, old: ...)   # listens on change:players.0
player["name"] = "sally"                             # observed write
```

Subscribers
-----------

Anything with a ``trigger(event, *args)`` method can follow a store,
including another store:

```python
audit = Store()
store.subscribe(audit, "main")   # audit receives "main:change:name", ...
```
"""

import logging
from typing import Any, Callable, Optional

from .classifier import ChangeClassifier, ChangeType
from .events import EventBus
from .live import LiveTree
from .proxy import AccessProxy, unwrap_value
from .util.paths import UNDEFINED, Keys, PathLike, join, resolve
from .util.snapshot import Snapshot, deep_copy


class Store:
    """
    Reactive tree store.

    Args:
        data: Initial mapping. Deep-copied; the caller's object is never aliased.
        cache_size: Maximum number of handles kept for identity-stable reads.
        emit_reads: Whether reads fire ``read`` events.

    Raises:
        CircularReferenceError: If ``data`` contains a cycle.
    """

    def __init__(
        self,
        data: Optional[dict] = None,
        *,
        cache_size: int = 1024,
        emit_reads: bool = True,
    ):
        if data is not None and not isinstance(data, dict):
            raise TypeError(f"Store data must be a dict, got {type(data).__name__}")

        self._bus = EventBus()
        self._emit_reads = emit_reads
        self._live = LiveTree(
            data,
            wrapper_factory=self._make_proxy,
            on_write=self._apply_changes,
            cache_size=cache_size,
        )
        self._snapshot = Snapshot(self._live.root)
        self._classifier = ChangeClassifier(emit=self.trigger, view=self._live.view)

    def _make_proxy(self, keys: Keys) -> AccessProxy:
        return AccessProxy(self, keys)

    # ==================== Data access ====================

    @property
    def data(self) -> AccessProxy:
        """Handle for the whole tree."""
        return self._live.wrap(self._live.root, ())

    def get(self, path: PathLike = None, fallback: Any = None) -> Any:
        """
        Read the value at ``path``.

        Composites come back as handles, leaves as-is. Missing paths return
        ``fallback``. An empty path returns the root handle.
        """
        keys = resolve(path)
        if not keys:
            return self.data

        value = self._live.resolve(keys)
        if self._emit_reads:
            self.trigger("read", join(keys))
        if value is UNDEFINED:
            return fallback
        return self._live.view(keys, value)

    def set(self, path: PathLike, value: Any) -> None:
        """
        Write ``value`` at ``path``, creating missing intermediate dicts.

        Composite values are deep-copied before anything is modified, so a
        cyclic value leaves the store untouched.

        Raises:
            CircularReferenceError: If ``value`` contains a cycle.
            ValueError: If ``path`` is empty.
        """
        keys = resolve(path)
        if not keys:
            raise ValueError("Cannot replace the store root, set its fields instead")
        self._live.write(keys, deep_copy(value, unwrap=unwrap_value))

    def delete(self, path: PathLike) -> bool:
        """Remove the value at ``path``. Returns False if there was nothing to remove."""
        keys = resolve(path)
        if not keys:
            return False
        return self._live.remove(keys)

    def to_dict(self) -> dict:
        """Independent deep copy of the live tree."""
        return deep_copy(self._live.root)

    def _resolve(self, keys: Keys) -> Any:
        return self._live.resolve(keys)

    def _mutate(self, keys: Keys, operation: Callable[[Any], Any]) -> Any:
        return self._live.mutate(keys, operation)

    # ==================== Change pipeline ====================

    def _apply_changes(self, keys: Keys) -> None:
        """Classify the write at ``keys``, commit it and announce it."""
        if not keys:
            return
        change = self._classifier.classify(keys, self._snapshot.root, self._live.root)
        if change is not ChangeType.NONE:
            self._snapshot.commit(keys, self._live.root)
            logging.debug(f"Store change at '{join(keys)}': {change}")
            self.trigger("updated")

    # ==================== Events ====================

    def on(self, event: str, callback: Callable[..., Any]) -> "Store":
        """
        Listen for ``event``.

        Raises:
            InvalidListenerError: If ``callback`` is not callable.
        """
        self._bus.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable[..., Any]] = None) -> "Store":
        self._bus.off(event, callback)
        return self

    def trigger(self, event: str, *args: Any) -> None:
        """Fire ``event`` on this store's listeners and subscribers."""
        self._bus.trigger(event, *args)

    def subscribe(self, subscriber: Any, namespace: str = "") -> "Store":
        """
        Relay every event of this store to ``subscriber``.

        Raises:
            UnsupportedSubscriberError: If ``subscriber`` has no callable ``trigger``.
        """
        self._bus.subscribe(subscriber, namespace)
        return self

    def unsubscribe(self, subscriber: Any, namespace: str = "") -> "Store":
        self._bus.unsubscribe(subscriber, namespace)
        return self

    @property
    def events(self) -> EventBus:
        return self._bus

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def __repr__(self) -> str:
        return f"Store({self._live.root!r})"
