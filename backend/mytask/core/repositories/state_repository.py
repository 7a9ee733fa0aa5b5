from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from mytask.core.models.tag import Tag, default_tags
from mytask.core.models.task import Task
from mytask.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mytask.core.repositories.kv_store import KeyValueStore

logger = get_logger(__name__)

_TASKS = TypeAdapter(list[Task])
_TAGS = TypeAdapter(list[Tag])


class StateRepository:
    """Reads and writes the three persisted records: identity, tags and tasks.

    Each record is independent. Loading never fails: a missing or malformed
    record yields its default value (no identity, the default tag set, no
    tasks) and the problem is only logged.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        email_key: str = "mytask_email",
        tasks_key: str = "mytask_tasks",
        tags_key: str = "mytask_tags",
    ) -> None:
        self._store = store
        self.email_key = email_key
        self.tasks_key = tasks_key
        self.tags_key = tags_key

    # -- identity --

    def load_identity(self) -> str:
        """Return the remembered e-mail, or an empty string when signed out."""
        return self._store.get(self.email_key) or ""

    def save_identity(self, email: str) -> None:
        self._store.set(self.email_key, email)

    def clear_identity(self) -> None:
        self._store.remove(self.email_key)

    # -- tags --

    def load_tags(self) -> list[Tag]:
        raw = self._store.get(self.tags_key)
        if raw is None:
            return default_tags()
        try:
            return _TAGS.validate_json(raw)
        except ValidationError as err:
            logger.warning("Stored tags are unreadable (%d errors), using defaults", err.error_count())
            return default_tags()

    def save_tags(self, tags: Sequence[Tag]) -> None:
        self._store.set(self.tags_key, serialize_tags(tags))

    # -- tasks --

    def load_tasks(self) -> list[Task]:
        raw = self._store.get(self.tasks_key)
        if raw is None:
            return []
        try:
            return _TASKS.validate_json(raw)
        except ValidationError as err:
            logger.warning("Stored tasks are unreadable (%d errors), starting empty", err.error_count())
            return []

    def save_tasks(self, tasks: Sequence[Task]) -> None:
        self._store.set(self.tasks_key, serialize_tasks(tasks))


def serialize_tasks(tasks: Sequence[Task]) -> str:
    """Encode tasks as the stored JSON array (camelCase keys, no null due dates)."""
    return _TASKS.dump_json(list(tasks), by_alias=True, exclude_none=True).decode()


def serialize_tags(tags: Sequence[Tag]) -> str:
    return _TAGS.dump_json(list(tags), by_alias=True).decode()


def deserialize_tasks(raw: str | bytes) -> list[Task]:
    return _TASKS.validate_json(raw)


def deserialize_tags(raw: str | bytes) -> list[Tag]:
    return _TAGS.validate_json(raw)
