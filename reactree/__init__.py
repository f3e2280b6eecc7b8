"""
Reactree - Reactive Tree Store

A store over a nested tree of plain values that diffs every mutation against
its last committed snapshot and fans out typed change events per path,
per wildcard path and globally, to listeners and subscribing stores.
"""

from .classifier import ChangeClassifier, ChangeType
from .errors import (
    CircularReferenceError,
    InvalidListenerError,
    ReactreeError,
    UnsupportedSubscriberError,
)
from .events import EventBus
from .live import LiveTree
from .proxy import AccessProxy
from .store import Store
from .util.paths import UNDEFINED, resolve
from .util.snapshot import Snapshot, deep_copy

__all__ = [
    # Facade
    "Store",
    "AccessProxy",
    # Engine components
    "ChangeClassifier",
    "ChangeType",
    "EventBus",
    "LiveTree",
    "Snapshot",
    # Helpers
    "deep_copy",
    "resolve",
    # Sentinel
    "UNDEFINED",
    # Exceptions
    "ReactreeError",
    "CircularReferenceError",
    "InvalidListenerError",
    "UnsupportedSubscriberError",
]
