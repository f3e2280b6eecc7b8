"""
Change Classification
=====================

Recursive structural diff between the snapshot and the live tree.

Classification walks down the mutated path one key at a time. Above the
target a child's CREATE or REMOVE is reported as an UPDATE of the ancestor;
at the target, composites are compared field by field over the union of
both sides' keys. Every visited path gets exactly one classification and
fires its notifications as soon as it is resolved, so events arrive
innermost first.

Events fired for a path ``ns`` whose wildcard form is ``wild``
(``stuff.info`` -> ``stuff.*``, ``name`` -> ``*``):

    create:ns, create:wild      (new)
    update:ns, update:wild      (new, old)
    remove:ns, remove:wild      (old)
    unchanged:ns                (new)
    change:ns, change:wild      (change, new, old)     -- skipped for NONE
    change                      (change, ns, new, old) -- always
"""

from enum import Enum
from typing import Any, Callable, Sequence, Tuple

from .util.paths import (
    UNDEFINED,
    Keys,
    field_names,
    get_child,
    is_composite,
    join,
    wildcard,
)
from .util.snapshot import deep_copy


class ChangeType(str, Enum):
    """Classification of a single path in one diff pass."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    REMOVE = "REMOVE"
    NONE = "NONE"

    def __str__(self) -> str:
        return self.value


def values_equal(original: Any, updated: Any) -> bool:
    if original is updated:
        return True
    if callable(original) or callable(updated):
        return False
    return original == updated


def classify_leaf(original: Any, updated: Any) -> ChangeType:
    """Classify a pair of non-composite values."""
    if updated is UNDEFINED:
        return ChangeType.REMOVE
    if original is UNDEFINED:
        return ChangeType.CREATE
    if values_equal(original, updated):
        return ChangeType.NONE
    return ChangeType.UPDATE


class ChangeClassifier:
    """
    Diffs one mutated path and reports each resolved classification.

    In every event above, ``new`` is passed through ``view``, so the store
    delivers composites as handles bound to their path rather than raw
    nodes. ``old`` is always a plain copy of the committed value, detached
    from the snapshot.

    Args:
        emit: Event sink, called as ``emit(event_name, *args)``.
        view: Turns a live value at a path into its caller-facing form.
    """

    def __init__(
        self,
        emit: Callable[..., None],
        view: Callable[[Keys, Any], Any],
    ):
        self._emit = emit
        self._view = view

    def classify(
        self,
        keys: Sequence[str],
        original: Any,
        updated: Any,
        path: Tuple[str, ...] = (),
    ) -> ChangeType:
        """
        Classify the location ``keys`` below ``original``/``updated``.

        ``original`` and ``updated`` are the parents of ``keys[0]`` on the
        snapshot and live side; ``path`` is where those parents sit.
        """
        key, rest = keys[0], keys[1:]
        path = path + (key,)
        original = get_child(original, key)
        updated = get_child(updated, key)

        if rest:
            change = self.classify(rest, original, updated, path)
            if change in (ChangeType.CREATE, ChangeType.REMOVE):
                change = ChangeType.UPDATE
        elif is_composite(original) or is_composite(updated):
            change = self._classify_fields(path, original, updated)
        else:
            change = classify_leaf(original, updated)

        self._notify(change, path, original, updated)
        return change

    def _classify_fields(
        self, path: Tuple[str, ...], original: Any, updated: Any
    ) -> ChangeType:
        # New keys first, then the ones only the old side had.
        fields = dict.fromkeys(field_names(updated) + field_names(original))
        results = [self.classify((name,), original, updated, path) for name in fields]

        change = ChangeType.UPDATE
        if updated is UNDEFINED:
            change = ChangeType.REMOVE
        elif original is UNDEFINED:
            change = ChangeType.CREATE

        if all(result is ChangeType.NONE for result in results):
            change = ChangeType.NONE
        return change

    def _notify(
        self, change: ChangeType, path: Tuple[str, ...], original: Any, updated: Any
    ) -> None:
        namespace = join(path)
        wild = wildcard(namespace)
        new = None if updated is UNDEFINED else self._view(path, updated)
        old = None if original is UNDEFINED else deep_copy(original)

        if change is ChangeType.CREATE:
            self._emit(f"create:{namespace}", new)
            self._emit(f"create:{wild}", new)
        elif change is ChangeType.UPDATE:
            self._emit(f"update:{namespace}", new, old)
            self._emit(f"update:{wild}", new, old)
        elif change is ChangeType.REMOVE:
            self._emit(f"remove:{namespace}", old)
            self._emit(f"remove:{wild}", old)
        else:
            self._emit(f"unchanged:{namespace}", new)

        if change is not ChangeType.NONE:
            self._emit(f"change:{namespace}", change, new, old)
            self._emit(f"change:{wild}", change, new, old)

        self._emit("change", change, namespace, new, old)
