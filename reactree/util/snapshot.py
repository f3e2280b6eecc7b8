"""
Snapshot - Last Committed Baseline
==================================

The snapshot is a fully independent deep copy of the live tree. The
classifier diffs the live tree against it, and after a non-trivial change
the affected subtree is committed back so the next diff starts from the
new baseline.

Copies reject cycles: a composite that appears again on its own ancestor
chain raises ``CircularReferenceError``. The same composite shared by two
siblings is not a cycle and is simply copied twice.
"""

import logging
from typing import Any, Callable, Optional, Sequence, Set

from ..errors import CircularReferenceError
from .paths import (
    UNDEFINED,
    get_child,
    is_composite,
    remove_child,
    set_child,
    walk,
)


def deep_copy(value: Any, unwrap: Optional[Callable[[Any], Any]] = None) -> Any:
    """
    Deep-copy dicts and lists, passing leaves and callables through.

    Mapping keys are converted to ``str`` so the copy is addressable by
    normalized paths. ``unwrap`` is applied to every value before it is
    copied, so wrappers found anywhere inside ``value`` are replaced by a
    copy of the data they stand for.

    Raises:
        CircularReferenceError: If a composite contains itself.
    """
    return _copy(value, set(), [], unwrap)


def _copy(
    value: Any,
    ancestors: Set[int],
    trail: list,
    unwrap: Optional[Callable[[Any], Any]],
) -> Any:
    if unwrap is not None:
        value = unwrap(value)
    if not is_composite(value):
        return value

    marker = id(value)
    if marker in ancestors:
        path = ".".join(trail)
        logging.debug(f"Rejecting cyclic value at '{path}'")
        raise CircularReferenceError(path)

    ancestors.add(marker)
    try:
        if isinstance(value, dict):
            result = {}
            for key, item in value.items():
                trail.append(str(key))
                result[str(key)] = _copy(item, ancestors, trail, unwrap)
                trail.pop()
            return result

        copied = []
        for index, item in enumerate(value):
            trail.append(str(index))
            copied.append(_copy(item, ancestors, trail, unwrap))
            trail.pop()
        return copied
    finally:
        ancestors.discard(marker)


class Snapshot:
    """Independent copy of the tree, mutated only by :meth:`commit`."""

    def __init__(self, data: Optional[dict] = None):
        self.root: dict = deep_copy(data) if data is not None else {}

    def get(self, keys: Sequence[str]) -> Any:
        return walk(self.root, keys)

    def commit(self, keys: Sequence[str], source: Any) -> None:
        """
        Bring the snapshot in line with ``source`` (the live root) along ``keys``.

        Walks down while both sides hold composites. At the first location the
        snapshot lacks (or at the final key) the live subtree is copied in, or
        removed when the live side no longer has it. Unchanged ancestors are
        never re-copied.
        """
        if not keys:
            return

        target = self.root
        last = len(keys) - 1
        for depth, key in enumerate(keys):
            value = get_child(source, key)
            existing = get_child(target, key)
            if depth == last or not is_composite(existing) or not is_composite(value):
                if value is UNDEFINED:
                    remove_child(target, key)
                else:
                    set_child(target, key, deep_copy(value))
                logging.debug(f"Committed snapshot at '{'.'.join(keys[: depth + 1])}'")
                return
            target, source = existing, value

    def __repr__(self) -> str:
        return f"Snapshot({self.root!r})"
