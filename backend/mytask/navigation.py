"""Screen navigation state machine kept in sync with a platform history stack.

Forward moves are validated against an explicit transition table and recorded
on the history port as push or replace, with the target screen attached as
the entry payload. Backward moves are driven by the platform: the controller
asks the history to step back, and the screen is restored from the payload
the platform reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from mytask.core.errors import InvalidTransitionError
from mytask.core.models.screen import NavigationMethod, Screen
from mytask.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from mytask.platform.history import HistoryPort, Payload

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Transition rules
# ---------------------------------------------------------------------------

# Forward transitions: {current: {target: method}}. Leaving EDIT_TAG and
# EDIT_NOTE happens through history back, not through this table.
_TRANSITIONS: dict[Screen, dict[Screen, NavigationMethod]] = {
    Screen.LOGIN: {Screen.WELCOME: NavigationMethod.REPLACE},
    Screen.WELCOME: {Screen.HOME: NavigationMethod.REPLACE},
    Screen.HOME: {
        Screen.EDIT_NOTE: NavigationMethod.PUSH,
        Screen.LOGIN: NavigationMethod.REPLACE,
    },
    Screen.EDIT_NOTE: {Screen.EDIT_TAG: NavigationMethod.PUSH},
    Screen.EDIT_TAG: {},
}

PAYLOAD_KEY = "screen"


def allowed_targets(screen: Screen) -> dict[Screen, NavigationMethod]:
    return dict(_TRANSITIONS[screen])


def initial_screen(signed_in: bool) -> Screen:
    """Startup rule, also used when a history entry has no usable payload."""
    return Screen.HOME if signed_in else Screen.LOGIN


def screen_payload(screen: Screen) -> dict[str, Any]:
    return {PAYLOAD_KEY: screen.value}


def screen_from_payload(payload: Payload) -> Screen | None:
    """Read the screen tag from a history payload, or None if absent or unknown."""
    if not isinstance(payload, dict):
        return None
    value = payload.get(PAYLOAD_KEY)
    try:
        return Screen(value)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

@dataclass
class ScreenChange:
    """Record of a single screen change."""

    from_screen: Screen
    to_screen: Screen
    method: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Navigator:
    """Owns the current screen and mirrors forward moves onto the history port.

    Usage::

        nav = Navigator(history, is_signed_in=lambda: state.signed_in)
        nav.start()
        nav.navigate(Screen.WELCOME)   # replace, per the transition table
        nav.back()                     # platform reports the previous entry
    """

    def __init__(
        self,
        history: HistoryPort,
        is_signed_in: Callable[[], bool],
        on_change: Callable[[ScreenChange], None] | None = None,
    ) -> None:
        self._history = history
        self._is_signed_in = is_signed_in
        self._on_change = on_change
        self._unsubscribe: Callable[[], None] | None = None
        self.current: Screen = initial_screen(is_signed_in())
        self.changes: list[ScreenChange] = []

    def start(self) -> Screen:
        """Pick the startup screen, stamp it on the current history entry, listen for back."""
        self.current = initial_screen(self._is_signed_in())
        self._history.replace(screen_payload(self.current))
        if self._unsubscribe is None:
            self._unsubscribe = self._history.subscribe(self.handle_back)
        return self.current

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def can_navigate(self, to: Screen) -> bool:
        return to in _TRANSITIONS[self.current]

    def navigate(self, to: Screen) -> ScreenChange:
        """Move forward to ``to``.

        Raises InvalidTransitionError if the table does not allow it.
        """
        method = _TRANSITIONS[self.current].get(to)
        if method is None:
            allowed = [s.value for s in _TRANSITIONS[self.current]]
            raise InvalidTransitionError(
                f"Cannot navigate from {self.current.value} to {to.value}. Allowed: {allowed}"
            )

        payload = screen_payload(to)
        if method is NavigationMethod.PUSH:
            self._history.push(payload)
        else:
            self._history.replace(payload)
        return self._set(to, method.value)

    def back(self) -> None:
        """Ask the platform to go back; the screen changes when it reports."""
        self._history.back()

    def handle_back(self, payload: Payload) -> None:
        """Restore the screen named by a back-navigation payload."""
        target = screen_from_payload(payload)
        if target is None:
            target = initial_screen(self._is_signed_in())
            logger.debug("History entry without screen payload, falling back to %s", target.value)
        self._set(target, "back")

    def _set(self, to: Screen, method: str) -> ScreenChange:
        change = ScreenChange(from_screen=self.current, to_screen=to, method=method)
        self.current = to
        self.changes.append(change)
        logger.debug("Screen %s -> %s (%s)", change.from_screen.value, to.value, method)
        if self._on_change is not None:
            self._on_change(change)
        return change
