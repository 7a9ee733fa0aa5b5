from __future__ import annotations

import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TimestampIdGenerator:
    """Issue string ids derived from the creation time in milliseconds.

    Ids are strictly increasing for the lifetime of the generator: two calls
    within the same millisecond (or a clock going backwards) bump the value
    past the previously issued one.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        value = self._clock()
        if value <= self._last:
            value = self._last + 1
        self._last = value
        return str(value)
