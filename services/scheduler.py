"""Interval triggers for transmissions and recap events."""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, List


class Trigger(str, Enum):
    transmission_due = "transmission_due"
    recap_due = "recap_due"


class Scheduler:
    """Two independent timers over one monotonic clock.

    A timer that fires resets its reference point to the time of the tick, so
    a long gap between ticks yields a single firing rather than a backlog.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        start = clock()
        self._last_transmission = start
        self._last_recap = start

    def poll(self, send_interval_seconds: float, recap_interval_minutes: int) -> List[Trigger]:
        now = self._clock()
        fired: List[Trigger] = []

        if now - self._last_transmission >= send_interval_seconds:
            self._last_transmission = now
            fired.append(Trigger.transmission_due)

        if recap_interval_minutes > 0 and now - self._last_recap >= recap_interval_minutes * 60:
            self._last_recap = now
            fired.append(Trigger.recap_due)

        return fired
