"""
Timed delay primitive.

TimedDelay is the step primitive the scheduler synthesizes when a routine
yields DelayFor(duration). It is chained like any other child, so the
paused routine resumes through the ordinary resume-link protocol.

The delay is cooperative, not a deadline: it only measures the elapsed time
the host feeds into each tick.
"""

import math

from pycadence.core.errors import StepExhaustedError
from pycadence.core.step import CONTINUE, DONE, StepPrimitive, StepResult

__all__ = ["TimedDelay"]


class TimedDelay(StepPrimitive):
    """
    Completes once accumulated elapsed time reaches a target duration.

    Each advance adds `elapsed` to the running total and reports Done on the
    advance where the total first reaches or exceeds `duration`, Continue
    before that. A zero duration completes on its first advance.

    Attributes:
        duration: Target duration in seconds

    Example:
        ```python
        delay = TimedDelay(1.0)
        delay.advance(0.4)   # Continue
        delay.advance(0.6)   # Done
        ```
    """

    def __init__(self, duration: float):
        if math.isnan(duration) or duration < 0:
            raise ValueError(f"delay duration must be >= 0, got {duration}")
        self.duration = float(duration)
        self._accumulated = 0.0
        self._finished = False

    @property
    def accumulated(self) -> float:
        """Elapsed time observed so far, in seconds."""
        return self._accumulated

    @property
    def remaining(self) -> float:
        """Seconds left before the delay completes (never negative)."""
        return max(0.0, self.duration - self._accumulated)

    def advance(self, elapsed: float) -> StepResult:
        if self._finished:
            raise StepExhaustedError(f"{self!r} already reported Done")

        self._accumulated += elapsed
        if self._accumulated >= self.duration:
            self._finished = True
            return DONE
        return CONTINUE

    def __repr__(self) -> str:
        return f"TimedDelay(duration={self.duration}, accumulated={self._accumulated})"
