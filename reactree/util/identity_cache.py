"""
Identity Cache
==============

Maps a composite node (by object identity) to the wrapper issued for it.

dicts and lists cannot be weakly referenced, so each entry keeps a strong
reference to its node alongside the wrapper. That pins the node's ``id()``
for as long as the entry lives, which is what makes the identity key
safe. Entries are evicted least-recently-used once ``maxsize`` is reached,
so nodes that have left the tree are eventually released.
"""

from typing import Any, Optional, Tuple

from cachetools import LRUCache


class IdentityCache:
    """
    LRU cache keyed by node identity.

    Usage:
        cache = IdentityCache(maxsize=128)
        wrapper = cache.get(node)
        if wrapper is None:
            wrapper = cache.put(node, make_wrapper(node))
    """

    def __init__(self, maxsize: int = 1024):
        self._entries: LRUCache = LRUCache(maxsize=maxsize)

    def get(self, node: Any) -> Optional[Any]:
        entry: Optional[Tuple[Any, Any]] = self._entries.get(id(node))
        if entry is None or entry[0] is not node:
            return None
        return entry[1]

    def put(self, node: Any, wrapper: Any) -> Any:
        self._entries[id(node)] = (node, wrapper)
        return wrapper

    def clear(self) -> None:
        self._entries.clear()

    @property
    def maxsize(self) -> int:
        return self._entries.maxsize

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, node: Any) -> bool:
        return self.get(node) is not None
