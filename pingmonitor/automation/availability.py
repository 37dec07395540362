"""
Availability tracking over a rolling window of probe outcomes.

The tracker keeps the last N outcomes, derives a success rate from them and
runs two hysteresis state machines (degraded, lost) against that rate:
- A machine triggers when the rate drops below its threshold
- It recovers only when the rate rises strictly above the threshold
- A rate exactly at the threshold leaves the machine where it is
"""

import operator
from collections import deque
from datetime import datetime
from enum import Enum
from typing import Callable

from pingmonitor.automation.monitor_models import AvailabilityEvent

DEFAULT_WINDOW_SIZE = 24
DEFAULT_DEGRADED_THRESHOLD = 50.0
DEFAULT_LOST_THRESHOLD = 5.0


class RollingWindow:
    """Fixed-capacity FIFO of probe outcomes with a running success count."""

    def __init__(self, capacity: int = DEFAULT_WINDOW_SIZE):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"Window capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity
        self._outcomes: deque[bool] = deque()
        self._successes = 0

    def __len__(self) -> int:
        return len(self._outcomes)

    @property
    def outcomes(self) -> tuple[bool, ...]:
        """Snapshot of the window, oldest first."""
        return tuple(self._outcomes)

    def record(self, outcome: bool) -> None:
        outcome = bool(outcome)
        self._outcomes.append(outcome)
        if outcome:
            self._successes += 1

        if len(self._outcomes) > self.capacity:
            if self._outcomes.popleft():
                self._successes -= 1

    def current_rate(self) -> float:
        """Success percentage over the window; 0.0 while the window is empty."""
        if not self._outcomes:
            return 0.0
        return self._successes / len(self._outcomes) * 100.0


class ThresholdState(str, Enum):
    NORMAL = "normal"
    TRIGGERED = "triggered"


class ThresholdMonitor:
    """Two-state hysteresis machine for one availability threshold."""

    def __init__(
        self,
        name: str,
        threshold: float,
        trigger_when: Callable[[float, float], bool] = operator.lt,
        recover_when: Callable[[float, float], bool] = operator.gt,
    ):
        self.name = name
        self.threshold = threshold
        self.trigger_when = trigger_when
        self.recover_when = recover_when
        self.state = ThresholdState.NORMAL
        self.triggered_at: datetime | None = None

    @property
    def triggered(self) -> bool:
        return self.state is ThresholdState.TRIGGERED

    def evaluate(self, rate: float, now: datetime) -> AvailabilityEvent | None:
        """Apply at most one transition for this rate and return its event."""
        if self.state is ThresholdState.NORMAL and self.trigger_when(rate, self.threshold):
            self.state = ThresholdState.TRIGGERED
            self.triggered_at = now
            return AvailabilityEvent(state=self.name, transition="triggered", rate=rate, at=now)

        if self.state is ThresholdState.TRIGGERED and self.recover_when(rate, self.threshold):
            duration = now - self.triggered_at
            self.state = ThresholdState.NORMAL
            self.triggered_at = None
            return AvailabilityEvent(
                state=self.name, transition="recovered", rate=rate, at=now, duration=duration
            )

        return None


class AvailabilityTracker:
    """Rolling success rate plus the degraded and lost state machines."""

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        degraded_threshold: float = DEFAULT_DEGRADED_THRESHOLD,
        lost_threshold: float = DEFAULT_LOST_THRESHOLD,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._window = RollingWindow(window_size)
        # Evaluated in this order: degraded before lost
        self.degraded = ThresholdMonitor("degraded", degraded_threshold)
        self.lost = ThresholdMonitor("lost", lost_threshold)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings, clock: Callable[[], datetime] = datetime.now) -> "AvailabilityTracker":
        return cls(
            window_size=settings.window_size,
            degraded_threshold=settings.degraded_threshold,
            lost_threshold=settings.lost_threshold,
            clock=clock,
        )

    @property
    def window_size(self) -> int:
        return self._window.capacity

    @property
    def sample_count(self) -> int:
        return len(self._window)

    @property
    def outcomes(self) -> tuple[bool, ...]:
        return self._window.outcomes

    def record(self, outcome: bool) -> None:
        self._window.record(outcome)

    def current_rate(self) -> float:
        return self._window.current_rate()

    def evaluate(self) -> list[AvailabilityEvent]:
        """Run both state machines against the current rate."""
        if not self.sample_count:
            return []

        rate = self.current_rate()
        now = self._clock()
        events = []
        for monitor in (self.degraded, self.lost):
            event = monitor.evaluate(rate, now)
            if event is not None:
                events.append(event)
        return events

    def tick(self, outcome: bool) -> list[AvailabilityEvent]:
        """Ingest one probe outcome and return the transitions it caused."""
        self.record(outcome)
        return self.evaluate()
