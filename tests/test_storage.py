# Area: Persistence Tests
"""Tests for NamespacedStorage."""

from party_core.storage import STORAGE_KEYS, MemoryBackend, NamespacedStorage


class TestNamespacedStorage:
    """Tests for namespaced JSON storage."""

    def test_keys_are_prefixed(self):
        backend = MemoryBackend()
        storage = NamespacedStorage(backend)

        storage.set(STORAGE_KEYS["selected_game"], "nameblame")

        assert backend.get_item("lof.v1.selectedGame") == '"nameblame"'

    def test_round_trip_structured_value(self):
        storage = NamespacedStorage()
        storage.set("flags", {"sound": True, "volume": 3})
        assert storage.get("flags") == {"sound": True, "volume": 3}

    def test_missing_key_returns_default(self):
        storage = NamespacedStorage()
        assert storage.get("nothing") is None
        assert storage.get("nothing", "fallback") == "fallback"

    def test_unreadable_value_returns_default(self):
        backend = MemoryBackend({"lof.v1.flags": "{broken"})
        storage = NamespacedStorage(backend)
        assert storage.get("flags", {}) == {}

    def test_remove(self):
        storage = NamespacedStorage()
        storage.set("a", 1)
        storage.remove("a")
        storage.remove("never-set")
        assert storage.get("a") is None

    def test_clear_namespace_leaves_other_keys(self):
        backend = MemoryBackend({"other.key": "1", "lof.v2.old": "2"})
        storage = NamespacedStorage(backend)
        storage.set("a", 1)
        storage.set("b", 2)

        removed = storage.clear_namespace()

        assert removed == 2
        assert sorted(backend.keys()) == ["lof.v2.old", "other.key"]

    def test_scoped_storage(self):
        backend = MemoryBackend()
        storage = NamespacedStorage(backend)
        scoped = storage.scoped("nameblame")

        scoped.set("score", 5)

        assert scoped.prefix == "lof.nameblame.v1."
        assert backend.get_item("lof.nameblame.v1.score") == "5"
        assert storage.get("score") is None

    def test_custom_namespace_and_version(self):
        storage = NamespacedStorage(namespace="party", version="v2")
        assert storage.key("x") == "party.v2.x"
