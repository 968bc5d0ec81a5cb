# Area: Persistence
"""
party_core.storage — Namespaced key-value storage
=================================================

The core never decides how data is persisted. Hosts and module
business logic talk to a NamespacedStorage, which prefixes every key
with ``<namespace>.<version>.`` and stores JSON-encoded values in any
StorageBackend (a browser-like string store, a file, a database row).

MemoryBackend is the default backend and what tests use.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Iterable, Optional, Protocol

logger = logging.getLogger("party_core.storage")

DEFAULT_NAMESPACE = "lof"
DEFAULT_VERSION = "v1"

STORAGE_KEYS = {
    "selected_game": "selectedGame",
    "session_player": "session.player",
    "flags": "flags",
    "recent_games": "recentGames",
}


class StorageBackend(Protocol):
    """Minimal string store."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def keys(self) -> Iterable[str]: ...


class MemoryBackend:
    """In-process StorageBackend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterable[str]:
        return list(self._data)


class NamespacedStorage:
    """
    JSON values under versioned, namespaced keys.

    Usage:
        storage = NamespacedStorage(MemoryBackend())
        storage.set("selectedGame", "nameblame")
        storage.get("selectedGame")  # "nameblame"
    """

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        namespace: str = DEFAULT_NAMESPACE,
        version: str = DEFAULT_VERSION,
    ):
        self.backend = backend if backend is not None else MemoryBackend()
        self.namespace = namespace
        self.version = version

    @property
    def prefix(self) -> str:
        return f"{self.namespace}.{self.version}."

    def key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str, default: Any = None) -> Any:
        """Read a value; missing or unreadable entries return ``default``."""
        raw = self.backend.get_item(self.key(key))
        if not raw:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable stored value for {key}")
            return default

    def set(self, key: str, value: Any) -> None:
        self.backend.set_item(self.key(key), json.dumps(value))

    def remove(self, key: str) -> None:
        self.backend.remove_item(self.key(key))

    def clear_namespace(self) -> int:
        """Remove every key of this namespace/version. Returns the count removed."""
        prefix = self.prefix
        doomed = [k for k in self.backend.keys() if k.startswith(prefix)]
        for k in doomed:
            self.backend.remove_item(k)
        return len(doomed)

    def scoped(self, module_id: str) -> "NamespacedStorage":
        """Storage for one module, e.g. ``lof.nameblame.v1.``."""
        return NamespacedStorage(self.backend, f"{self.namespace}.{module_id}", self.version)
