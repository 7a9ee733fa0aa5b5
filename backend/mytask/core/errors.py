from __future__ import annotations


class MyTaskError(ValueError):
    """Base class for input validation failures in the task domain."""


class InvalidIdentityError(MyTaskError):
    """The submitted identity is not e-mail shaped."""


class EmptyTitleError(MyTaskError):
    """A task cannot be saved without a title."""


class EmptyTagLabelError(MyTaskError):
    """A tag cannot be created without a label."""


class DuplicateTagError(MyTaskError):
    """A tag with the same label (ignoring case) already exists."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Tag '{label}' already exists")
        self.label = label


class ProtectedTagError(MyTaskError):
    """Default tags cannot be deleted."""

    def __init__(self, tag_id: str) -> None:
        super().__init__("Default tags cannot be deleted")
        self.tag_id = tag_id


class InvalidTransitionError(MyTaskError):
    """A forward navigation was requested that the screen graph does not allow."""
