from __future__ import annotations

from typing import TYPE_CHECKING

from mytask.core.errors import EmptyTitleError
from mytask.core.models.task import Task
from mytask.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from mytask.core.repositories.state_repository import StateRepository
    from mytask.core.schemas.draft import Draft
    from mytask.core.state import AppState


logger = get_logger(__name__)


class TaskService:
    """Task CRUD over the controller-owned state. Every change is persisted."""

    def __init__(self, state: AppState, repo: StateRepository, new_id: Callable[[], str]) -> None:
        self._state = state
        self._repo = repo
        self._new_id = new_id

    @staticmethod
    def can_save(draft: Draft) -> bool:
        return bool(draft.title.strip())

    def _fields_from_draft(self, draft: Draft) -> dict:
        if not self.can_save(draft):
            raise EmptyTitleError("Title must not be empty")
        return {
            "title": draft.title.strip(),
            "description": draft.description,
            "tag_id": draft.tag_id or self._state.default_tag_id(),
            "due_date": draft.due_date or None,
        }

    def create_task(self, draft: Draft) -> Task:
        """Create a task from editor input and put it at the front of the list."""
        task = Task(id=self._new_id(), completed=False, **self._fields_from_draft(draft))
        self._state.tasks = [task, *self._state.tasks]
        self._repo.save_tasks(self._state.tasks)
        logger.info("Created task %s", task.id)
        return task

    def update_task(self, task_id: str, draft: Draft) -> Task | None:
        """Replace the editable fields of a task; None if the id is unknown."""
        fields = self._fields_from_draft(draft)
        updated: Task | None = None
        tasks = []
        for task in self._state.tasks:
            if task.id == task_id:
                task = Task(id=task.id, completed=task.completed, **fields)
                updated = task
            tasks.append(task)
        if updated is None:
            logger.debug("Update ignored, task %s not found", task_id)
            return None
        self._state.tasks = tasks
        self._repo.save_tasks(tasks)
        return updated

    def save(self, task_id: str | None, draft: Draft) -> Task | None:
        """Create when there is no edit target, update otherwise."""
        if task_id is None:
            return self.create_task(draft)
        return self.update_task(task_id, draft)

    def toggle_task(self, task_id: str) -> Task | None:
        toggled: Task | None = None
        tasks = []
        for task in self._state.tasks:
            if task.id == task_id:
                task = task.model_copy(update={"completed": not task.completed})
                toggled = task
            tasks.append(task)
        if toggled is None:
            return None
        self._state.tasks = tasks
        self._repo.save_tasks(tasks)
        return toggled

    def delete_task(self, task_id: str) -> bool:
        remaining = [t for t in self._state.tasks if t.id != task_id]
        if len(remaining) == len(self._state.tasks):
            return False
        self._state.tasks = remaining
        self._repo.save_tasks(remaining)
        logger.info("Deleted task %s", task_id)
        return True
