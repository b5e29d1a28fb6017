"""A simple wall-clock timer that reports lap and total times."""

from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO


class Timer:
    """Accumulates elapsed time across start/stop intervals and laps."""

    def __init__(
        self,
        name: str = "time",
        start: bool = True,
        *,
        clock: Callable[[], float] = time.perf_counter,
        out: Optional[TextIO] = None,
    ) -> None:
        self.name = name
        self._clock = clock
        self._out = out
        self._total_so_far = 0.0
        self._last = 0.0
        self._on = False
        if start:
            self.start()

    @property
    def running(self) -> bool:
        return self._on

    @staticmethod
    def _diff(later: float, earlier: float) -> float:
        # Resolution is whole microseconds, truncated.
        return int((later - earlier) * 1_000_000) / 1_000_000

    def _report(self, elapsed: float, label: str) -> None:
        prefix = f"{self.name}: {label}: " if label else f"{self.name}: "
        print(f"{prefix}{elapsed:.4f}", file=self._out or sys.stdout)

    def start(self) -> None:
        self._on = True
        self._last = self._clock()

    def stop(self) -> float:
        """Stop the timer and return the time since the last start or lap."""
        self._on = False
        elapsed = self._diff(self._clock(), self._last)
        self._total_so_far += elapsed
        return elapsed

    def reset(self) -> None:
        self._total_so_far = 0.0
        self._on = False

    def next_time(self) -> float:
        """Return the time since the last lap and begin a new lap."""
        if not self._on:
            return 0.0
        now = self._clock()
        elapsed = self._diff(now, self._last)
        self._total_so_far += elapsed
        self._last = now
        return elapsed

    def total_time(self) -> float:
        if self._on:
            return self._total_so_far + self._diff(self._clock(), self._last)
        return self._total_so_far

    def next(self, label: str) -> None:
        """Report the lap time under ``label`` if the timer is running."""
        if self._on:
            self._report(self.next_time(), label)

    def total(self) -> None:
        self._report(self.total_time(), "total")