"""
Brightness watcher
- Polls the backlight level at a fixed interval
- On every change (0 included) checks for the lock screen
- Re-initializes the TSP only while the lock screen is showing
"""

import enum
import logging
import time
from typing import Callable, Optional

from .panel import TspOutcome

log = logging.getLogger(__name__)

POLL_INTERVAL = 0.6
READ_BACKOFF = 5.0


class StepResult(enum.Enum):
    UNREADABLE = "unreadable"
    UNCHANGED = "unchanged"
    FIXED = "fixed"
    SKIPPED = "skipped"


class BrightnessMonitor:
    """Owns the last good brightness sample and reacts to transitions."""

    def __init__(
        self,
        previous: int,
        sample: Callable[[], Optional[int]],
        lockscreen_active: Callable[[], bool],
        reinitialize: Callable[[], TspOutcome],
        poll_interval: float = POLL_INTERVAL,
        read_backoff: float = READ_BACKOFF,
        sleep: Callable[[float], None] = time.sleep,
        source: str = "brightness node",
    ):
        self.previous = previous
        self._sample = sample
        self._lockscreen_active = lockscreen_active
        self._reinitialize = reinitialize
        self.poll_interval = poll_interval
        self.read_backoff = read_backoff
        self._sleep = sleep
        self._source = source

    def step(self) -> StepResult:
        self._sleep(self.poll_interval)

        current = self._sample()
        if current is None:
            log.warning("Could not read current brightness from %s. Skipping current cycle.", self._source)
            self._sleep(self.read_backoff)
            return StepResult.UNREADABLE

        if current == self.previous:
            return StepResult.UNCHANGED

        old, self.previous = self.previous, current
        if self._lockscreen_active():
            log.info("Brightness changed from %s to %s. Device IS on lock screen. Triggering TSP fix.", old, current)
            outcome = self._reinitialize()
            if not outcome.ok:
                log.warning("TSP fix failed: %s", outcome.error)
            elif outcome.result_unread:
                log.info("TSP fix sent; driver result unavailable.")
            return StepResult.FIXED

        log.info("Brightness changed from %s to %s. Device IS NOT on lock screen. Skipping TSP fix.", old, current)
        return StepResult.SKIPPED

    def run(self, iterations: Optional[int] = None) -> None:
        """Loop forever (or *iterations* times); only a signal ends the process."""
        log.info("Starting brightness monitoring loop...")
        count = 0
        while iterations is None or count < iterations:
            count += 1
            try:
                self.step()
            except Exception:
                log.exception("Unexpected error in monitoring cycle")
                # never spin: a failing cycle waits like an unreadable sample
                self._sleep(self.read_backoff)
        if iterations is None:
            log.critical("TSP Fix Script Finished Unexpectedly.")
