from __future__ import annotations

from abc import ABC, abstractmethod

from mytask.utils.logging import get_logger

logger = get_logger(__name__)


class Prompter(ABC):
    """User-facing dialogs: yes/no confirmations and plain notices."""

    @abstractmethod
    def confirm(self, message: str) -> bool:  # pragma: no cover - interface only
        """Ask the user a yes/no question. Destructive actions run only on True."""

    @abstractmethod
    def notify(self, message: str) -> None:  # pragma: no cover
        """Show a notice the user acknowledges."""


class StaticPrompter(Prompter):
    """Answers every confirmation with a fixed reply and keeps the notices.

    Suitable for headless use; a UI supplies its own prompter.
    """

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.questions: list[str] = []
        self.notices: list[str] = []

    def confirm(self, message: str) -> bool:
        self.questions.append(message)
        logger.debug("Confirm %r -> %s", message, self.answer)
        return self.answer

    def notify(self, message: str) -> None:
        self.notices.append(message)
        logger.info("Notice: %s", message)
