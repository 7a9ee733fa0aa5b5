from __future__ import annotations

from enum import Enum


class Screen(str, Enum):
    """The five mutually exclusive screens of the application."""

    LOGIN = "login"
    WELCOME = "welcome"
    HOME = "home"
    EDIT_NOTE = "edit_note"
    EDIT_TAG = "edit_tag"


class NavigationMethod(str, Enum):
    """How a forward transition is recorded on the history stack."""

    PUSH = "push"
    REPLACE = "replace"
