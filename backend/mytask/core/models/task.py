from __future__ import annotations

from datetime import date, datetime

from pydantic import Field, field_validator

from mytask.utils.validation import validate_iso_date

from .base import StoredModel


def coerce_due_date(v: object) -> object:
    """Normalize a due date input to a YYYY-MM-DD string or None.

    Dates and datetimes keep only their calendar day; an empty string means no
    due date; any other string must be a valid ISO calendar date.
    """
    if isinstance(v, datetime):
        v = v.date()
    if isinstance(v, date):
        return v.isoformat()
    if v is None or v == "":
        return None
    if isinstance(v, str):
        ok, error = validate_iso_date(v)
        if not ok:
            raise ValueError(error)
    return v


class Task(StoredModel):
    """Task domain model."""

    id: str = Field(min_length=1, description="Unique id assigned from creation time")
    title: str = Field(description="Task title, non-empty for saved tasks")
    description: str = Field(default="", description="Free-form details")
    tag_id: str = Field(description="Id of the tag this task is filed under")
    completed: bool = Field(default=False, description="Whether the task is done")
    due_date: str | None = Field(default=None, description="Due date as YYYY-MM-DD")

    @field_validator("due_date", mode="before")
    @classmethod
    def validate_due_date(cls, v: object) -> object:
        return coerce_due_date(v)

    @property
    def due(self) -> date | None:
        return date.fromisoformat(self.due_date) if self.due_date else None

    def is_overdue(self, today: date | None = None) -> bool:
        """True when the task is open and its due date is before today.

        A task due today is not overdue.
        """
        if self.completed or self.due_date is None:
            return False
        return self.due < (today or date.today())
