from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract string-keyed store for the application's persisted records.

    Contract used by the state repository. Values are opaque strings (the
    repository stores JSON text). Writes are synchronous and assumed to
    succeed.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:  # pragma: no cover - interface only
        """Return the stored value or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:  # pragma: no cover
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:  # pragma: no cover
        """Remove ``key``. Removing an absent key is a no-op."""
