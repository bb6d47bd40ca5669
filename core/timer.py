"""Reaction time measurement."""

import time

from .utils import round_half_up


class ReactionTimer:
    """Stopwatch for a single open interval.

    Callers pair start() with stop(). A paused interval keeps its elapsed time
    and continues from there on resume().
    """

    def __init__(self, clock=time.perf_counter):
        self._clock = clock
        self._start_time = None
        self._paused_at = None
        self._paused_total = 0.0

    @property
    def is_running(self) -> bool:
        return self._start_time is not None and self._paused_at is None

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    def start(self) -> None:
        """Open a new interval, overwriting any interval still open."""
        self._start_time = self._clock()
        self._paused_at = None
        self._paused_total = 0.0

    def stop(self) -> int:
        """Close the interval and return elapsed milliseconds.

        Returns 0 when no interval is open; hosts may call stop() on paths
        where no timed response happened.
        """
        if self._start_time is None:
            return 0
        end = self._paused_at if self._paused_at is not None else self._clock()
        elapsed = end - self._start_time - self._paused_total
        self.reset()
        return max(0, round_half_up(elapsed * 1000))

    def pause(self) -> None:
        if self.is_running:
            self._paused_at = self._clock()

    def resume(self) -> None:
        if self._paused_at is not None:
            self._paused_total += self._clock() - self._paused_at
            self._paused_at = None

    def reset(self) -> None:
        self._start_time = None
        self._paused_at = None
        self._paused_total = 0.0
