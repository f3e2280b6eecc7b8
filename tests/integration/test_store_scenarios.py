"""End-to-end change detection scenarios on a seeded store."""

import pytest

from reactree import ChangeType, Store

C, U, R, N = ChangeType.CREATE, ChangeType.UPDATE, ChangeType.REMOVE, ChangeType.NONE


def collect_changes(store):
    changes = []
    store.on("change", lambda change, path, new, old: changes.append((change, path)))
    return changes


@pytest.mark.integration
@pytest.mark.store
def test_create_by_set_and_by_direct_write(store):
    changes = collect_changes(store)

    store.set("count", 0)
    store.data.other = 0

    assert changes == [(C, "count"), (C, "other")]


@pytest.mark.integration
@pytest.mark.store
@pytest.mark.parametrize("value", ["Gertrude", 0, False, None])
def test_leaf_update_payloads(store, value):
    seen = []
    store.on("change", lambda *args: seen.append(args))

    store.set("name", value)

    assert seen == [(U, "name", value, "dave")]


@pytest.mark.integration
@pytest.mark.store
def test_delete_reports_remove_with_old_value(store):
    seen = []
    store.on("change", lambda *args: seen.append(args))

    del store.data["name"]

    assert seen == [(R, "name", None, "dave")]


@pytest.mark.integration
@pytest.mark.store
def test_nested_update_bubbles_as_update(store):
    changes = collect_changes(store)

    store.set("stuff.northwind", "eggs")

    assert changes == [(U, "stuff.northwind"), (U, "stuff")]


@pytest.mark.integration
@pytest.mark.store
def test_replace_object_with_object(store):
    store.set("testing", {"animal": "cat", "cake": "yes"})
    changes = collect_changes(store)

    store.set("testing", {"platypus": False})

    assert changes == [
        (C, "testing.platypus"),
        (R, "testing.animal"),
        (R, "testing.cake"),
        (U, "testing"),
    ]


@pytest.mark.integration
@pytest.mark.store
def test_replace_object_with_equal_object(store):
    store.set("testing", {"animal": "cat", "cake": "yes"})
    changes = collect_changes(store)
    updates = []
    store.on("updated", lambda: updates.append(True))

    store.set("testing", {"animal": "cat", "cake": "yes"})

    assert changes == [(N, "testing.animal"), (N, "testing.cake"), (N, "testing")]
    assert updates == []


@pytest.mark.integration
@pytest.mark.store
def test_replace_object_with_similar_object(store):
    store.set("testing", {"animal": "cat", "cake": "no"})
    changes = collect_changes(store)

    store.set("testing", {"animal": "cat", "cake": "yes"})

    assert changes == [(N, "testing.animal"), (U, "testing.cake"), (U, "testing")]


@pytest.mark.integration
@pytest.mark.store
def test_replace_object_with_empty_string(store):
    store.set("testing", {"animal": "cat", "cake": "no"})
    changes = collect_changes(store)

    store.set("testing", "")

    assert changes == [(R, "testing.animal"), (R, "testing.cake"), (U, "testing")]


@pytest.mark.integration
@pytest.mark.store
def test_make_tree(store):
    """A new deep path creates each level once, innermost first"""
    changes = collect_changes(store)
    updates = []
    store.on("updated", lambda: updates.append(True))

    store.set("a.b.c.d.e.f", "Hi")

    assert changes == [
        (C, "a.b.c.d.e.f"),
        (C, "a.b.c.d.e"),
        (C, "a.b.c.d"),
        (C, "a.b.c"),
        (C, "a.b"),
        (C, "a"),
    ]
    assert updates == [True]


@pytest.mark.integration
@pytest.mark.store
def test_make_tree_on_empty_store(empty_store):
    changes = collect_changes(empty_store)
    updates = []
    empty_store.on("updated", lambda: updates.append(True))

    empty_store.set("a.b.c", "Hi")

    assert changes == [(C, "a.b.c"), (C, "a.b"), (C, "a")]
    assert updates == [True]


@pytest.mark.integration
@pytest.mark.store
def test_remove_tree(store):
    store.set("a.b.c.d.e.f", "Hi")
    changes = collect_changes(store)

    store.set("a", {})

    assert changes == [
        (R, "a.b.c.d.e.f"),
        (R, "a.b.c.d.e"),
        (R, "a.b.c.d"),
        (R, "a.b.c"),
        (R, "a.b"),
        (U, "a"),
    ]


@pytest.mark.integration
@pytest.mark.store
def test_wildcard_fires_once_per_new_direct_child(store):
    store.set("players", [{"name": "bob"}, {"name": "sally"}])
    created = []
    store.on("create:players.*", created.append)

    store.set("players", [{"name": "bob"}, {"name": "sally"}, {"name": "buzz"}])

    assert len(created) == 1
    assert created[0].name == "buzz"
    assert created[0].get_context() == "players.2"


@pytest.mark.integration
@pytest.mark.store
def test_wildcard_ignores_grandchildren(store):
    store.set("parent", {"child": {"x": 0}})
    created = []
    store.on("create:parent.*", created.append)

    store.set("parent.child.grandchild", 1)

    assert created == []


@pytest.mark.integration
@pytest.mark.store
@pytest.mark.parametrize("value", [["bob"], {"name": "bob"}, [], {}])
def test_resetting_same_value_is_unchanged(store, value):
    store.set("abc", value)
    changes = collect_changes(store)

    store.set("abc", value)

    assert {change for change, _ in changes} == {N}


@pytest.mark.integration
@pytest.mark.store
def test_deleting_last_field(store):
    store.set("only", {"field": 1})
    changes = collect_changes(store)

    store.delete("only.field")

    assert changes == [(R, "only.field"), (U, "only")]


@pytest.mark.integration
@pytest.mark.store
def test_stored_callable_is_an_opaque_leaf(store):
    def handler():
        return "called"

    changes = collect_changes(store)
    store.set("handler", handler)
    store.set("handler", handler)

    assert changes == [(C, "handler"), (N, "handler")]
    assert store.get("handler")() == "called"


@pytest.mark.integration
@pytest.mark.store
def test_update_listeners_receive_handles(store):
    store.set("test.testing", {"name": "bobbert"})
    testing = store.get("test.testing")
    seen = []
    testing.on("update", lambda new, old: seen.append((new.get_context(), old)))

    store.set("test.testing", {"name": "ziggy"})

    assert seen == [("test.testing", {"name": "bobbert"})]


@pytest.mark.integration
@pytest.mark.store
def test_handle_listener_sees_removal(store):
    store.set("test.testing", {"name": "bobbert"})
    testing = store.get("test.testing")
    seen = []
    testing.on("change", lambda change, new, old: seen.append(change))

    store.set("test", {})

    assert seen == [R]


@pytest.mark.integration
@pytest.mark.store
def test_handle_set_reports_old_and_new(store):
    store.set("test.testing", {"name": "bobbert"})
    testing = store.get("test.testing")
    seen = []
    testing.on("change", lambda change, new, old: seen.append((change, new.name, old["name"])))

    testing.set("name", "Jane")

    assert seen == [(U, "Jane", "bobbert")]


@pytest.mark.integration
@pytest.mark.store
class TestOrphanedHandles:
    """Handles follow their path, never the node they were created from"""

    def test_reads_follow_replacement(self, store):
        store.set("test", {"data": {"name": "abc"}})
        data = store.get("test.data")

        store.set("test", {"data": {"name": "def"}})

        assert data.name == "def"

    def test_reads_resolve_to_none_when_path_is_gone(self, store):
        store.set("test", {"data": {"name": "abc"}})
        data = store.get("test.data")

        store.set("test", {})

        assert data.name is None
        assert data.get_real() is None
        assert len(data) == 0
        assert list(data) == []

    def test_set_after_replacement(self, store):
        store.set("test", {"data": {"name": "abc"}})
        data = store.get("test.data")
        store.set("test", {"data": {"name": "def"}})

        data.set("name", "huh")

        assert store.get("test.data.name") == "huh"

    def test_item_write_after_replacement(self, store):
        store.set("test", {"data": {"name": "abc"}})
        data = store.get("test.data")
        store.set("test", {"data": {"name": "def"}})

        data.name = "hmm"

        assert store.get("test.data.name") == "hmm"


@pytest.mark.integration
@pytest.mark.events
class TestSubscribers:
    def test_subscriber_receives_every_event(self, recorded):
        store, recorder = recorded

        store.set("name", "Bob")

        assert recorder.events == [
            "update:name",
            "update:*",
            "change:name",
            "change:*",
            "change",
            "updated",
        ]

    def test_namespaced_subscriber(self, recorded):
        store, recorder = recorded
        store.unsubscribe(recorder)
        store.subscribe(recorder, "potato")

        store.set("name", "Bob")

        assert recorder.events == [
            "potato:update:name",
            "potato:update:*",
            "potato:change:name",
            "potato:change:*",
            "potato:change",
            "potato:updated",
        ]

    def test_unsubscribe_one_namespace(self, recorded):
        store, recorder = recorded
        store.subscribe(recorder, "test")

        store.set("name", "Bob")
        assert len(recorder.calls) == 12
        assert recorder.events[:2] == ["update:name", "test:update:name"]

        store.unsubscribe(recorder)
        store.set("name", "Jim")
        assert len(recorder.calls) == 18
        assert all(event.startswith("test:") for event in recorder.events[12:])

        store.unsubscribe(recorder, "test")
        store.set("name", "Zippy")
        assert len(recorder.calls) == 18

    def test_store_follows_another_store(self):
        source = Store({"players": []})
        mirror = Store(emit_reads=False)
        joined = []
        mirror.on("players:create:players.*", lambda new: joined.append(new.name))
        source.subscribe(mirror, "players")

        source.get("players").append({"name": "buzz"})

        assert joined == ["buzz"]


@pytest.mark.integration
@pytest.mark.store
class TestReentrantListeners:
    def test_listener_can_set_during_cascade(self, store):
        store.on("update:name", lambda new, old: store.set("greeting", f"hi {new}"))
        order = []
        store.on("change", lambda change, path, new, old: order.append(path))

        store.set("name", "Bob")

        assert store.get("greeting") == "hi Bob"
        # The nested cascade completes before the outer one continues.
        assert order == ["greeting", "name"]
        assert store.snapshot.root == store.to_dict()

    def test_nested_updated_fires_before_outer(self, store):
        fired = []
        store.on("update:name", lambda new, old: store.set("count", 1))
        store.on("create:count", lambda new: fired.append("create:count"))
        store.on("updated", lambda: fired.append("updated"))

        store.set("name", "Bob")

        assert fired == ["create:count", "updated", "updated"]
