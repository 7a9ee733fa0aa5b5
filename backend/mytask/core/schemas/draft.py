from __future__ import annotations

from pydantic import Field, field_validator

from mytask.core.models.base import AppBaseModel
from mytask.core.models.task import Task, coerce_due_date


class Draft(AppBaseModel):
    """In-progress note editor input, kept while the tag editor is open.

    Never persisted.
    """

    title: str = ""
    description: str = ""
    tag_id: str | None = None
    due_date: str | None = Field(default=None, description="YYYY-MM-DD or None")

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: object) -> object:
        return coerce_due_date(v)

    @classmethod
    def from_task(cls, task: Task) -> Draft:
        return cls(
            title=task.title,
            description=task.description,
            tag_id=task.tag_id,
            due_date=task.due_date,
        )
