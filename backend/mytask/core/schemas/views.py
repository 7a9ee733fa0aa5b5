from __future__ import annotations

from pydantic import Field

from mytask.core.models.base import AppBaseModel
from mytask.core.models.tag import COLOR_PALETTE, Tag  # noqa: TCH001
from mytask.core.models.task import Task  # noqa: TCH001
from mytask.core.schemas.draft import Draft  # noqa: TCH001


class LoginView(AppBaseModel):
    email: str = ""
    error: str | None = None


class WelcomeView(AppBaseModel):
    email: str


class TaskCard(AppBaseModel):
    """One row of the home list."""

    task: Task
    tag: Tag | None = None
    overdue: bool = False


class HomeView(AppBaseModel):
    """Home screen: filtered, ordered tasks plus header statistics.

    - completed_count / total_count cover every task, not only matching ones
    - show_empty_state is True only when nothing matches and there is no query
    """

    email: str
    query: str = ""
    cards: list[TaskCard] = Field(default_factory=list)
    completed_count: int = 0
    total_count: int = 0
    show_empty_state: bool = False


class NoteEditorView(AppBaseModel):
    is_editing: bool
    draft: Draft
    tags: list[Tag]
    can_save: bool
    deletable_tag_ids: list[str] = Field(default_factory=list)


class TagEditorView(AppBaseModel):
    palette: list[str] = Field(default_factory=lambda: list(COLOR_PALETTE))
    default_color: str = COLOR_PALETTE[0]
