from reactree import Store

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Creating a store")
print("-" * 100)
print()

# A store holds a plain tree. The data is copied in, your dict is never aliased.
store = Store(
    {
        "stuff": {"northwind": "costa", "info": [1, 2, 3]},
        "name": "dave",
    },
    emit_reads=False,
)

# Paths can use dots, brackets or a list of keys.
print(store.get("stuff.info[1]"), store.get("stuff.info.1"), store.get(["stuff", "info", 1]))

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Listening for changes")
print("-" * 100)
print()

log_update = lambda new, old: print(f"Name changed from {old} to {new}")

store.on("update:name", log_update)
store.set("name", "bob")  # update:name fires
store.set("name", "bob")  # nothing changed, only unchanged:name fires

store.off("update:name", log_update)
store.set("name", "sally")  # no longer logged


# The global change event sees every path a mutation touches, innermost first.
def log_change(change, path, new, old):
    print(f"{change:>7} {path}")


store.on("change", log_change)
store.set("a.b.c", "Hi")  # CREATE a.b.c, a.b, a
store.off("change", log_change)

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Handles and wildcards")
print("-" * 100)
print()

store.set("players", [{"name": "bob"}, {"name": "sally"}])

# Wildcard events fire for any direct child.
store.on("create:players.*", lambda player: print(f"New player: {player.name}"))

players = store.get("players")
players.append({"name": "buzz"})

# Handles resolve their path on every access, even after the subtree is replaced.
first = store.get("players.0")
store.set("players", [{"name": "zed"}])
print(f"First player is now {first.name}")

# Handles scope events to their own path.
first.on("change", lambda change, new, old: print(f"players.0 {change}"))
first.name = "zara"

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Following another store")
print("-" * 100)
print()

audit = Store(emit_reads=False)
audit.on("main:updated", lambda: print("main store committed a change"))
store.subscribe(audit, "main")

store.set("name", "dave")
