"""
Driver loop for the availability monitor.

Each tick probes the host once, feeds the outcome to the tracker, writes a
debug record and logs any service transitions. The loop owns the sleep
between ticks; the tracker stays free of timing and I/O.
"""

import time
from typing import Callable

from loguru import logger

from pingmonitor.automation.availability import AvailabilityTracker
from pingmonitor.automation.monitor_models import AvailabilityEvent, MonitorSettings

# Recovery from a total loss is logged louder than its onset
EVENT_LEVELS = {
    "degraded-triggered": "WARNING",
    "degraded-recovered": "WARNING",
    "lost-triggered": "WARNING",
    "lost-recovered": "ERROR",
}


def format_event(event: AvailabilityEvent) -> str:
    """Render an event as a log line: what happened, latency column, rate."""
    if event.kind == "degraded-triggered":
        text = "Service degraded"
    elif event.kind == "degraded-recovered":
        text = f"Service degradation ended after {event.duration_hms}"
    elif event.kind == "lost-triggered":
        text = "Service lost"
    else:
        text = f"Service loss ended after {event.duration_hms}"
    return f"{text}, 0.000, {event.rate:.2f}"


class AvailabilityMonitor:
    """Runs the probe -> track -> log cycle at a fixed interval."""

    def __init__(
        self,
        probe,
        tracker: AvailabilityTracker,
        interval_s: float = 5.0,
        sleep: Callable[[float], None] = time.sleep,
        log=logger,
        console=None,
    ):
        self.probe = probe
        self.tracker = tracker
        self.interval_s = interval_s
        self._sleep = sleep
        self.log = log
        self.console = console if console is not None else log
        self.ticks = 0

    def log_configuration(self, settings: MonitorSettings) -> None:
        self.console.info(f"Address = {settings.address}")
        self.console.info(f"Rate count max = {settings.window_size} samples")
        self.console.info(f"Repeat delay = {settings.interval_ms} ms")
        self.console.info(f"Probe timeout = {settings.timeout_ms} ms")
        self.console.info(f"Degraded service threshold = {settings.degraded_threshold} %")
        self.console.info(f"Lost service threshold = {settings.lost_threshold} %")

    def tick(self) -> list[AvailabilityEvent]:
        result = self.probe.probe()
        events = self.tracker.tick(result.success)
        self.ticks += 1

        latency = result.latency_s if result.latency_s is not None else 0.0
        self.log.debug(f"{result.summary}, {latency:.3f}, {self.tracker.current_rate():.2f}")

        for event in events:
            self.console.log(EVENT_LEVELS[event.kind], format_event(event))

        return events

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until interrupted, or until max_ticks ticks have run."""
        while max_ticks is None or self.ticks < max_ticks:
            self.tick()
            if max_ticks is not None and self.ticks >= max_ticks:
                break
            self._sleep(self.interval_s)
        return self.ticks
