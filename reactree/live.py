"""
LiveTree - The Observed Mutable Tree
====================================

The live tree owns the raw data callers read and write through the store.
Every write goes through here: it is applied to the raw structure first and
then reported, with the path that changed, to the ``on_write`` hook (the
store's classify/commit pipeline) before control returns.

Composite nodes are handed out wrapped. Wrapping is identity-stable: asking
for the wrapper of the same node at the same path returns the wrapper issued
before, so repeated reads of a substructure compare identical.
"""

from typing import Any, Callable, Optional, Sequence

from .util.identity_cache import IdentityCache
from .util.paths import (
    UNDEFINED,
    Keys,
    get_child,
    is_composite,
    remove_child,
    set_child,
    walk,
)
from .util.snapshot import deep_copy

WrapperFactory = Callable[[Keys], Any]
WriteHook = Callable[[Keys], None]


class LiveTree:
    """
    Raw live data plus the wrapper cache.

    Args:
        data: Initial mapping. Copied, never aliased.
        wrapper_factory: Builds the wrapper for a path.
        on_write: Called with the affected path after every applied write.
        cache_size: Maximum number of wrappers kept by the identity cache.
    """

    def __init__(
        self,
        data: Optional[dict],
        wrapper_factory: WrapperFactory,
        on_write: WriteHook,
        cache_size: int = 1024,
    ):
        self.root: dict = deep_copy(data) if data is not None else {}
        self._wrapper_factory = wrapper_factory
        self._on_write = on_write
        self._cache = IdentityCache(maxsize=cache_size)

    def resolve(self, keys: Sequence[str]) -> Any:
        return walk(self.root, keys)

    def wrap(self, node: Any, keys: Keys) -> Any:
        """Return the wrapper for ``node``, reusing the one issued earlier."""
        wrapper = self._cache.get(node)
        if wrapper is None or wrapper._path != keys:
            wrapper = self._cache.put(node, self._wrapper_factory(keys))
        return wrapper

    def view(self, keys: Keys, value: Any) -> Any:
        """Caller-facing form of a value: wrapper for composites, leaf as-is."""
        if is_composite(value):
            return self.wrap(value, keys)
        return None if value is UNDEFINED else value

    def write(self, keys: Keys, value: Any) -> None:
        """
        Store ``value`` (already copied) at ``keys``.

        Missing or leaf intermediates are built as a detached chain of dicts
        and attached in one step at the first gap, so a single pipeline run
        covers the whole new branch.
        """
        base = self.root
        for depth, key in enumerate(keys[:-1]):
            child = get_child(base, key)
            if not is_composite(child):
                detached = node = {}
                for inner in keys[depth + 1 : -1]:
                    node[inner] = {}
                    node = node[inner]
                node[keys[-1]] = value
                self._assign(base, keys[: depth + 1], detached)
                return
            base = child
        self._assign(base, keys, value)

    def _assign(self, parent: Any, keys: Keys, value: Any) -> None:
        key = keys[-1]
        if isinstance(parent, list) and key.isdigit() and int(key) > len(parent):
            # Padding creates several indices at once, diff the whole list.
            set_child(parent, key, value)
            self._on_write(keys[:-1])
            return
        set_child(parent, key, value)
        self._on_write(keys)

    def remove(self, keys: Keys) -> bool:
        """Delete the value at ``keys``. Returns False when nothing was there."""
        parent = walk(self.root, keys[:-1])
        if not is_composite(parent) or not remove_child(parent, keys[-1]):
            return False
        # Removing from a list shifts later items, so the list itself is diffed.
        self._on_write(keys[:-1] if isinstance(parent, list) else keys)
        return True

    def mutate(self, keys: Keys, operation: Callable[[Any], Any]) -> Any:
        """Run ``operation`` on the composite at ``keys`` and report it as one write."""
        node = walk(self.root, keys)
        if not is_composite(node):
            raise TypeError(f"No container at '{'.'.join(keys)}'")
        result = operation(node)
        self._on_write(keys)
        return result

    @property
    def cache(self) -> IdentityCache:
        return self._cache

    def __repr__(self) -> str:
        return f"LiveTree({self.root!r})"
