from __future__ import annotations

from dataclasses import dataclass, field

from mytask.core.models.tag import FALLBACK_TAG_ID, Tag
from mytask.core.models.task import Task
from mytask.core.schemas.draft import Draft


@dataclass
class AppState:
    """Everything the application controller owns.

    Only the controller and the services it drives mutate this object; view
    models read from it.
    """

    tasks: list[Task] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    identity: str = ""
    draft: Draft = field(default_factory=Draft)
    editing_task_id: str | None = None

    @property
    def signed_in(self) -> bool:
        return bool(self.identity)

    def find_task(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_tag(self, tag_id: str) -> Tag | None:
        return next((t for t in self.tags if t.id == tag_id), None)

    def default_tag_id(self) -> str:
        """Tag used when a task is saved without a selection."""
        return self.tags[0].id if self.tags else FALLBACK_TAG_ID
