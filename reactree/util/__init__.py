"""
Reactree Utils - Tree Primitives
================================

Building blocks shared by the live tree, the snapshot and the classifier.

Modules:
- paths: Path normalization, the UNDEFINED sentinel and container helpers
- snapshot: Cycle-checked deep copy and the committed baseline
- identity_cache: LRU cache of wrappers keyed by node identity
"""

from .identity_cache import IdentityCache
from .paths import UNDEFINED, join, resolve, wildcard
from .snapshot import Snapshot, deep_copy

__all__ = [
    "IdentityCache",
    "Snapshot",
    "UNDEFINED",
    "deep_copy",
    "join",
    "resolve",
    "wildcard",
]
