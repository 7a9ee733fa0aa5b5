from __future__ import annotations

from typing import TYPE_CHECKING

from mytask.core.errors import DuplicateTagError, EmptyTagLabelError, ProtectedTagError
from mytask.core.models.tag import (
    COLOR_PALETTE,
    FALLBACK_TAG_ID,
    PROTECTED_TAG_IDS,
    Tag,
    normalize_label,
)
from mytask.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from mytask.core.repositories.state_repository import StateRepository
    from mytask.core.state import AppState


logger = get_logger(__name__)


class TagService:
    """Create and delete tags, keeping tasks pointed at existing tags."""

    def __init__(self, state: AppState, repo: StateRepository, new_id: Callable[[], str]) -> None:
        self._state = state
        self._repo = repo
        self._new_id = new_id

    def label_exists(self, label: str) -> bool:
        key = normalize_label(label)
        return any(normalize_label(t.label) == key for t in self._state.tags)

    def create_tag(self, label: str, color: str = COLOR_PALETTE[0]) -> Tag:
        """Append a new tag with a fresh id.

        Raises EmptyTagLabelError for a blank label and DuplicateTagError when
        the trimmed label already exists ignoring case.
        """
        trimmed = label.strip()
        if not trimmed:
            raise EmptyTagLabelError("Tag label must not be empty")
        if self.label_exists(trimmed):
            raise DuplicateTagError(trimmed)

        tag = Tag(id=self._new_id(), label=trimmed, color=color)
        self._state.tags = [*self._state.tags, tag]
        self._repo.save_tags(self._state.tags)
        logger.info("Created tag %s (%s)", tag.id, tag.label)
        return tag

    @staticmethod
    def is_protected(tag_id: str) -> bool:
        return tag_id in PROTECTED_TAG_IDS

    def check_deletable(self, tag_id: str) -> None:
        if self.is_protected(tag_id):
            raise ProtectedTagError(tag_id)

    def delete_tag(self, tag_id: str) -> int:
        """Remove a tag and move its tasks to the fallback tag.

        Returns the number of reassigned tasks. Raises ProtectedTagError for a
        default tag, in which case nothing changes.
        """
        self.check_deletable(tag_id)

        remaining = [t for t in self._state.tags if t.id != tag_id]
        reassigned = 0
        tasks = []
        for task in self._state.tasks:
            if task.tag_id == tag_id:
                task = task.model_copy(update={"tag_id": FALLBACK_TAG_ID})
                reassigned += 1
            tasks.append(task)

        self._state.tags = remaining
        self._state.tasks = tasks
        self._repo.save_tags(remaining)
        if reassigned:
            self._repo.save_tasks(tasks)
        logger.info("Deleted tag %s, reassigned %d task(s)", tag_id, reassigned)
        return reassigned
