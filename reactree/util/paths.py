"""
Path Resolution and Container Access
====================================

Paths address a location in a tree of dicts and lists. Three notations are
accepted and normalize to the same key tuple:

    resolve("stuff.nest[0].foo")        # ('stuff', 'nest', '0', 'foo')
    resolve("stuff.nest.0.foo")         # ('stuff', 'nest', '0', 'foo')
    resolve(["stuff", "nest", 0, "foo"])  # ('stuff', 'nest', '0', 'foo')

Resolution never fails. Malformed strings simply yield whatever tokens the
rule finds, and empty input resolves to the root (an empty tuple).

The helpers below are shared by the live tree, the snapshot and the
classifier so that every layer agrees on what "absent" means.
"""

import re
from typing import Any, Iterable, List, Sequence, Tuple, Union

PathLike = Union[None, str, int, Sequence[Any]]
Keys = Tuple[str, ...]

_TOKEN = re.compile(r"[^.\[\]]+")


class _Undefined:
    """Marker for a location that holds no value at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


def resolve(path: PathLike) -> Keys:
    """Normalize a textual or pre-split path into a tuple of string keys."""
    if path is None or path == "":
        return ()
    if isinstance(path, str):
        return tuple(_TOKEN.findall(path))
    if isinstance(path, int):
        return (str(path),)
    return tuple(str(key) for key in path)


def join(keys: Iterable[str]) -> str:
    """Render keys back into dotted notation (the event namespace form)."""
    return ".".join(keys)


def wildcard(namespace: str) -> str:
    """Replace the final segment of a namespace with ``*``."""
    head, sep, _ = namespace.rpartition(".")
    return f"{head}{sep}*"


def is_composite(value: Any) -> bool:
    return isinstance(value, (dict, list))


def _index(container: list, key: str) -> int:
    if isinstance(key, int):
        return key
    return int(key) if key.isdigit() else -1


def get_child(container: Any, key: str) -> Any:
    """Read one level down, returning ``UNDEFINED`` when nothing is there."""
    if isinstance(container, dict):
        return container.get(key, UNDEFINED)
    if isinstance(container, list):
        index = _index(container, key)
        if 0 <= index < len(container):
            return container[index]
    return UNDEFINED


def set_child(container: Any, key: str, value: Any) -> None:
    """Write one level down. Lists grow (padding with None) to reach the index."""
    if isinstance(container, list):
        index = _index(container, key)
        if index < 0:
            raise IndexError(f"Invalid list index: {key!r}")
        if index >= len(container):
            container.extend([None] * (index - len(container) + 1))
        container[index] = value
    else:
        container[key] = value


def remove_child(container: Any, key: str) -> bool:
    """Remove one level down. Returns whether anything was removed."""
    if isinstance(container, dict):
        if key in container:
            del container[key]
            return True
    elif isinstance(container, list):
        index = _index(container, key)
        if 0 <= index < len(container):
            del container[index]
            return True
    return False


def field_names(value: Any) -> List[str]:
    """Keys of a composite in iteration order; empty for leaves."""
    if isinstance(value, dict):
        return list(value.keys())
    if isinstance(value, list):
        return [str(index) for index in range(len(value))]
    return []


def walk(root: Any, keys: Sequence[str]) -> Any:
    """Descend from ``root`` along ``keys``; ``UNDEFINED`` once the path breaks."""
    value = root
    for key in keys:
        value = get_child(value, key)
        if value is UNDEFINED:
            break
    return value
