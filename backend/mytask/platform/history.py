from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mytask.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

logger = get_logger(__name__)

Payload = dict[str, Any] | None


class HistoryPort(ABC):
    """Platform navigation history (a browser history stack or equivalent).

    ``back`` does not return anything: the platform later notifies every
    subscriber with the payload of the entry that is now on top, or None when
    that entry carries no payload.
    """

    @abstractmethod
    def push(self, payload: Payload) -> None:  # pragma: no cover - interface only
        """Add a new entry on top of the current one."""

    @abstractmethod
    def replace(self, payload: Payload) -> None:  # pragma: no cover
        """Overwrite the payload of the current entry."""

    @abstractmethod
    def back(self) -> None:  # pragma: no cover
        """Ask the platform to step back one entry."""

    @abstractmethod
    def subscribe(self, listener: Callable[[Payload], None]) -> Callable[[], None]:  # pragma: no cover
        """Register a back-navigation listener; returns an unsubscribe callable."""


@dataclass(frozen=True)
class HistoryRecord:
    """One push or replace call, kept for inspection."""

    method: str
    payload: Payload


class InMemoryHistory(HistoryPort):
    """History stack with browser semantics, held in memory.

    Starts with a single entry without payload. ``push`` drops any forward
    entries. ``back`` at the first entry does nothing (the platform would
    leave the application). Listeners are called synchronously.
    """

    def __init__(self) -> None:
        self._entries: list[Payload] = [None]
        self._index = 0
        self._listeners: list[Callable[[Payload], None]] = []
        self.records: list[HistoryRecord] = []

    @property
    def current(self) -> Payload:
        return self._entries[self._index]

    @property
    def length(self) -> int:
        return self._index + 1

    def push(self, payload: Payload) -> None:
        del self._entries[self._index + 1:]
        self._entries.append(payload)
        self._index += 1
        self.records.append(HistoryRecord("push", payload))

    def replace(self, payload: Payload) -> None:
        self._entries[self._index] = payload
        self.records.append(HistoryRecord("replace", payload))

    def back(self) -> None:
        if self._index == 0:
            logger.debug("History back ignored at first entry")
            return
        self._index -= 1
        self._dispatch(self._entries[self._index])

    def forward(self) -> None:
        if self._index + 1 >= len(self._entries):
            return
        self._index += 1
        self._dispatch(self._entries[self._index])

    def subscribe(self, listener: Callable[[Payload], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _dispatch(self, payload: Payload) -> None:
        for listener in list(self._listeners):
            listener(payload)
