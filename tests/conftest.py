"""
Shared pytest fixtures and configuration for reactree tests.
"""

import pytest

from reactree import Store


def make_store(**kwargs):
    """Store seeded with the tree most scenarios start from."""
    return Store(
        {
            "stuff": {
                "northwind": "costa",
                "info": [1, 2, 3],
                "nest": [{"foo": "bar"}],
            },
            "name": "dave",
            "zero": [],
        },
        **kwargs,
    )


class Recorder:
    """Subscriber that records every event it is sent."""

    def __init__(self):
        self.calls = []

    def trigger(self, event, *args):
        self.calls.append((event, args))

    @property
    def events(self):
        return [event for event, _ in self.calls]

    def changes(self):
        """(change, path) pairs of the global change events, in firing order."""
        return [(args[0], args[1]) for event, args in self.calls if event == "change"]

    def clear(self):
        self.calls.clear()


@pytest.fixture
def store():
    """Provide a fresh seeded Store instance."""
    return make_store()


@pytest.fixture
def empty_store():
    return Store()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def recorded(recorder):
    """Seeded store with a recorder subscribed (reads not emitted)."""
    quiet = make_store(emit_reads=False)
    quiet.subscribe(recorder)
    return quiet, recorder
