from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from mytask.core.models.tag import Tag
    from mytask.core.models.task import Task


def matches_query(task: Task, query: str, resolve_tag: Callable[[Task], Tag | None]) -> bool:
    """True if the query is empty or found in the title or the tag label, ignoring case."""
    if not query:
        return True
    needle = query.lower()
    if needle in task.title.lower():
        return True
    tag = resolve_tag(task)
    return tag is not None and needle in tag.label.lower()


def _sort_key(task: Task) -> tuple[int, int, str]:
    if task.completed:
        # Completed tasks keep their input order.
        return (1, 0, "")
    if task.due_date:
        return (0, 0, task.due_date)
    return (0, 1, "")


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Order tasks for display.

    Open tasks come first, dated before undated, dated ones by ascending ISO
    date. Remaining ties keep input order (``sorted`` is stable).
    """
    return sorted(tasks, key=_sort_key)


def order_tasks(
    tasks: Iterable[Task],
    query: str,
    resolve_tag: Callable[[Task], Tag | None],
) -> list[Task]:
    """Filter tasks by ``query`` and return them in display order.

    Recomputed from scratch on every call.
    """
    return sort_tasks(t for t in tasks if matches_query(t, query, resolve_tag))


def tag_resolver(tags: Iterable[Tag]) -> Callable[[Task], Tag | None]:
    """Build a Task -> Tag lookup over a snapshot of the tag collection."""
    by_id = {tag.id: tag for tag in tags}
    return lambda task: by_id.get(task.tag_id)
