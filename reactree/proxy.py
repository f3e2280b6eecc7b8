"""
AccessProxy - Path-Bound Handles
================================

A handle carries nothing but a path and its store. Every access resolves
that path against the live tree again, so a handle taken before its subtree
was replaced wholesale still sees the replacement (or ``None`` once the path
is gone) and never a stale copy.

Item access is the raw field entry point:

    players = store.get("players")
    players[0]["name"]          # field read, composites come back as handles
    players[0]["name"] = "bob"  # observed write
    del players[0]              # observed delete

Attribute access is a convenience for mapping fields. The handle's own
methods (``get``, ``set``, ``on``, ``off``, ``trigger``, ``get_context`` and
the collection helpers) take precedence over same-named fields; reach those
fields with ``handle["get"]`` or ``store.get("path.get")``.
"""

import json
from typing import TYPE_CHECKING, Any, Iterator, List, Tuple

from .util.paths import UNDEFINED, PathLike, is_composite, join, resolve
from .util.snapshot import deep_copy

if TYPE_CHECKING:
    from .store import Store


class AccessProxy:
    """Lazily resolving read/write handle bound to one path of a store."""

    __slots__ = ("_store", "_path")

    def __init__(self, store: "Store", path: Tuple[str, ...]):
        object.__setattr__(self, "_store", store)
        object.__setattr__(self, "_path", tuple(path))

    # ==================== Delegated store API ====================

    def get(self, sub_path: PathLike = None, fallback: Any = None) -> Any:
        """Read below this handle; no sub path returns the handle's own value."""
        return self._store.get(self._path + resolve(sub_path), fallback)

    def set(self, sub_path: PathLike, value: Any) -> "AccessProxy":
        self._store.set(self._path + resolve(sub_path), value)
        return self

    def on(self, event: str, callback) -> "AccessProxy":
        self._store.on(self._bind(event), callback)
        return self

    def off(self, event: str, callback=None) -> "AccessProxy":
        self._store.off(self._bind(event), callback)
        return self

    def trigger(self, event: str, *args: Any) -> None:
        self._store.trigger(self._bind(event), *args)

    def get_context(self) -> str:
        """Dotted path this handle is bound to."""
        return join(self._path)

    def get_real(self) -> Any:
        """The live node itself. Writes made through it are not observed."""
        value = self._store._resolve(self._path)
        return None if value is UNDEFINED else value

    def unwrap(self) -> Any:
        """Independent deep copy of the current value."""
        return deep_copy(self.get_real())

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.get_real(), **kwargs)

    def _bind(self, event: str) -> str:
        # "change" -> "change:ctx", "change:name" -> "change:ctx.name"
        context = self.get_context()
        if not context:
            return event
        if ":" in event:
            kind, _, sub = event.partition(":")
            return f"{kind}:{context}.{sub}"
        return f"{event}:{context}"

    # ==================== Field access ====================

    def _key(self, key: Any) -> str:
        if isinstance(key, int) and key < 0:
            node = self._store._resolve(self._path)
            if isinstance(node, list):
                key += len(node)
        return str(key)

    def __getitem__(self, key: Any) -> Any:
        if isinstance(key, slice):
            return [self[index] for index in range(*key.indices(len(self)))]
        return self._store.get(self._path + (self._key(key),))

    def __setitem__(self, key: Any, value: Any) -> None:
        self._store.set(self._path + (self._key(key),), value)

    def __delitem__(self, key: Any) -> None:
        if not self._store.delete(self._path + (self._key(key),)):
            raise KeyError(key)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __setattr__(self, name: str, value: Any) -> None:
        if name in AccessProxy.__slots__:
            raise AttributeError(f"'{name}' is read-only")
        self[name] = value

    def __delattr__(self, name: str) -> None:
        del self[name]

    # ==================== Collection protocol ====================

    def __len__(self) -> int:
        node = self._store._resolve(self._path)
        return len(node) if is_composite(node) else 0

    def __iter__(self) -> Iterator[Any]:
        node = self._store._resolve(self._path)
        if isinstance(node, dict):
            return iter(list(node))
        if isinstance(node, list):
            return (self[index] for index in range(len(node)))
        return iter(())

    def __contains__(self, item: Any) -> bool:
        node = self._store._resolve(self._path)
        if isinstance(node, dict):
            return item in node
        if isinstance(node, list):
            return unwrap_value(item) in node
        return False

    def __eq__(self, other: Any) -> bool:
        return self.get_real() == unwrap_value(other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"AccessProxy({self.get_context()!r}, {self.get_real()!r})"

    def keys(self) -> List[str]:
        node = self._store._resolve(self._path)
        return list(node) if isinstance(node, dict) else []

    def values(self) -> List[Any]:
        return [self[key] for key in self.keys()]

    def items(self) -> List[Tuple[str, Any]]:
        return [(key, self[key]) for key in self.keys()]

    def append(self, value: Any) -> None:
        self[len(self)] = value

    def extend(self, values: Any) -> None:
        items = deep_copy(list(values), unwrap=unwrap_value)
        self._store._mutate(self._path, lambda node: node.extend(items))

    def insert(self, index: int, value: Any) -> None:
        item = deep_copy(value, unwrap=unwrap_value)
        self._store._mutate(self._path, lambda node: node.insert(index, item))

    def pop(self, key: Any = -1, default: Any = UNDEFINED) -> Any:
        """Remove and return an item. Mapping handles take a key, lists an index."""
        node = self._store._resolve(self._path)
        if isinstance(node, dict):
            key = self._key(key)
            if key not in node:
                if default is UNDEFINED:
                    raise KeyError(key)
                return default
            value = node[key]
            self._store.delete(self._path + (key,))
            return value
        return self._store._mutate(self._path, lambda items: items.pop(key))


def unwrap_value(value: Any) -> Any:
    """Raw data behind a handle; other values are returned unchanged."""
    return value.get_real() if isinstance(value, AccessProxy) else value
