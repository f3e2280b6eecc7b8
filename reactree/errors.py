"""
Reactree Errors
===============

Every failure raised by the store is a programmer error surfaced
synchronously to the immediate caller. Each class also derives from the
closest built-in category so callers can catch either.
"""


class ReactreeError(Exception):
    """Base class for all reactree errors."""

    pass


class CircularReferenceError(ReactreeError, ValueError):
    """Raised when a value to be copied into the store contains a cycle."""

    def __init__(self, path: str = ""):
        self.path = path
        where = f" at '{path}'" if path else ""
        super().__init__(f"Circular reference detected{where}")


class InvalidListenerError(ReactreeError, TypeError):
    """Raised when a non-callable is registered as a listener."""

    pass


class UnsupportedSubscriberError(ReactreeError, TypeError):
    """Raised when a subscriber does not implement a callable ``trigger``."""

    pass
