"""One-shot timers keyed by purpose.

The main loop drives the scheduler with :meth:`Scheduler.tick`; tests drive it
with :meth:`Scheduler.advance` to simulate elapsed time deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional


class TimerKey(Enum):
    FEEDBACK = "feedback"
    CUE = "cue"


@dataclass
class _PendingTimer:
    deadline: int
    callback: Callable[[], None]


class Scheduler:
    """Holds at most one pending callback per :class:`TimerKey`."""

    def __init__(self, now: int = 0) -> None:
        self.now = now
        self._pending: Dict[TimerKey, _PendingTimer] = {}

    def schedule(self, key: TimerKey, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run ``callback`` after ``delay_ms``, replacing any timer under ``key``."""

        if delay_ms <= 0:
            raise ValueError(f"Timer delay must be positive, got {delay_ms}")
        self._pending[key] = _PendingTimer(self.now + int(delay_ms), callback)

    def cancel(self, key: TimerKey) -> None:
        self._pending.pop(key, None)

    def cancel_all(self) -> None:
        self._pending.clear()

    def is_scheduled(self, key: TimerKey) -> bool:
        return key in self._pending

    def remaining(self, key: TimerKey) -> Optional[int]:
        timer = self._pending.get(key)
        if timer is None:
            return None
        return max(0, timer.deadline - self.now)

    def tick(self, now_ms: int) -> None:
        """Fire every timer due at ``now_ms`` in deadline order."""

        while True:
            due = [
                (timer.deadline, key)
                for key, timer in self._pending.items()
                if timer.deadline <= now_ms
            ]
            if not due:
                break
            deadline, key = min(due, key=lambda item: item[0])
            timer = self._pending.pop(key)
            # Callbacks that reschedule measure from their own deadline.
            self.now = max(self.now, deadline)
            timer.callback()
        self.now = max(self.now, now_ms)

    def advance(self, delta_ms: int) -> None:
        self.tick(self.now + delta_ms)
