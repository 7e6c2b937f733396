"""
Step primitives and step results.

This module defines the contract every unit of deferred work follows: a
StepPrimitive is advanced one step at a time and answers each advance with
a StepResult telling the scheduler what to do next.

**Design Pattern**: State Machine using Union types

Suspension is explicit. A step never blocks; it returns one of a closed set
of results and the scheduler interprets it:

    Continue          stay scheduled, step again next visit
    ChainTo(child)    pause until `child` finishes, then resume
    DelayFor(secs)    pause until `secs` of host time have elapsed
    Done              finished, never advance again
    Unsupported(req)  a suspension request the scheduler cannot honor

Multi-step routines are usually written as generators and reduced to this
contract by GeneratorStep:

    ```python
    def blink(lamp):
        lamp.on()
        yield wait(0.5)          # DelayFor(0.5)
        lamp.off()
        yield fade_out(lamp)     # nested generator, ChainTo
        elapsed = yield          # Continue; receives next tick's elapsed
    ```
"""

import inspect
import math
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import Any

from pycadence.core.errors import StepExhaustedError

__all__ = [
    "Continue",
    "ChainTo",
    "DelayFor",
    "Done",
    "Unsupported",
    "StepResult",
    "CONTINUE",
    "DONE",
    "StepPrimitive",
    "GeneratorStep",
    "as_step",
    "wait",
]


# =============================================================================
# STEP RESULTS
# =============================================================================


@dataclass(frozen=True)
class Continue:
    """Routine stays where it is and is stepped again on the next visit."""

    def __str__(self) -> str:
        return "Continue"


@dataclass(frozen=True)
class ChainTo:
    """
    Routine pauses until a nested child routine completes.

    The child is scheduled at the tail of the registry with a resume-link
    back to the pausing routine. When the child reports Done the parent is
    re-queued; if the child fails the parent never resumes.

    Attributes:
        child: Anything `as_step` accepts (normally a StepPrimitive)
    """

    child: Any

    def __str__(self) -> str:
        return f"ChainTo({self.child!r})"


@dataclass(frozen=True)
class DelayFor:
    """
    Routine pauses until `duration` seconds of host time have elapsed.

    Handled exactly like ChainTo with a TimedDelay child, so a delay is an
    ordinary chained child rather than a special scheduler case.

    Attributes:
        duration: Delay in seconds, must be >= 0
    """

    duration: float

    def __post_init__(self) -> None:
        if math.isnan(self.duration) or self.duration < 0:
            raise ValueError(f"delay duration must be >= 0, got {self.duration}")

    def __str__(self) -> str:
        return f"DelayFor({self.duration})"


@dataclass(frozen=True)
class Done:
    """Routine finished. The primitive must never be advanced again."""

    def __str__(self) -> str:
        return "Done"


@dataclass(frozen=True)
class Unsupported:
    """
    Suspension request the scheduler does not know how to honor.

    The scheduler reports it and treats the step as a plain Continue: the
    routine proceeds as if no suspension had been requested.

    Attributes:
        request: The object the routine yielded
    """

    request: Any

    def __str__(self) -> str:
        return f"Unsupported({type(self.request).__name__})"


# StepResult is the closed set of answers a step can give.
#
#     match primitive.advance(elapsed):
#         case Continue():
#             ...
#         case ChainTo(child):
#             ...
#         case DelayFor(duration):
#             ...
#         case Done():
#             ...
#         case Unsupported(request):
#             ...
#
StepResult = Continue | ChainTo | DelayFor | Done | Unsupported

CONTINUE = Continue()
DONE = Done()

_STEP_RESULT_TYPES = (Continue, ChainTo, DelayFor, Done, Unsupported)


# =============================================================================
# STEP PRIMITIVES
# =============================================================================


class StepPrimitive(ABC):
    """
    A resumable computation advanced one step at a time.

    Implementations are single-use: once `advance` returns Done the
    scheduler drops the primitive and never advances it again.

    Example:
        ```python
        class Countdown(StepPrimitive):
            def __init__(self, n: int):
                self.n = n

            def advance(self, elapsed: float) -> StepResult:
                self.n -= 1
                return DONE if self.n <= 0 else CONTINUE
        ```
    """

    @abstractmethod
    def advance(self, elapsed: float) -> StepResult:
        """
        Advance the computation by one step.

        Args:
            elapsed: Host time in seconds since the previous tick (0.0 when the
                step happens in the same pass that scheduled the primitive)

        Returns:
            What the scheduler should do with this routine next
        """


class GeneratorStep(StepPrimitive):
    """
    Adapter that reduces a generator to the one-call-per-step contract.

    The first advance primes the generator; every later advance sends the
    tick's elapsed time in, so `elapsed = yield` inside a routine observes
    host time.

    Yielded values are interpreted as:
    - None: Continue
    - a StepResult: returned as-is (`yield wait(1.0)`, `yield CONTINUE`)
    - a generator or StepPrimitive: ChainTo that child
    - anything else: Unsupported

    Returning from the generator reports Done. An exception escaping the
    generator exhausts the adapter and propagates to the scheduler.
    """

    def __init__(self, generator: Generator[Any, float, Any]):
        if not inspect.isgenerator(generator):
            raise TypeError(f"expected a generator, got {type(generator).__name__}")
        self._generator = generator
        self._primed = False
        self._finished = False

    @property
    def finished(self) -> bool:
        """True once the generator returned, raised or yielded Done."""
        return self._finished

    def advance(self, elapsed: float) -> StepResult:
        if self._finished:
            raise StepExhaustedError(f"{self!r} already reported Done")

        try:
            if self._primed:
                yielded = self._generator.send(elapsed)
            else:
                self._primed = True
                yielded = next(self._generator)
        except StopIteration:
            self._finished = True
            return DONE
        except Exception:
            self._finished = True
            raise

        result = _interpret(yielded)
        if isinstance(result, Done):
            self._finished = True
            self._generator.close()
        return result

    def __repr__(self) -> str:
        name = getattr(self._generator, "__qualname__", type(self._generator).__name__)
        return f"GeneratorStep({name})"


def _interpret(yielded: Any) -> StepResult:
    if yielded is None:
        return CONTINUE
    if isinstance(yielded, _STEP_RESULT_TYPES):
        return yielded
    if isinstance(yielded, StepPrimitive) or inspect.isgenerator(yielded):
        return ChainTo(yielded)
    return Unsupported(yielded)


def as_step(routine: StepPrimitive | Generator | Callable[[], Generator]) -> StepPrimitive:
    """
    Coerce a routine into a StepPrimitive.

    Args:
        routine: A StepPrimitive (returned unchanged), a generator (wrapped in
            GeneratorStep), or a zero-argument generator function (called,
            then wrapped)

    Returns:
        A StepPrimitive ready to be scheduled

    Raises:
        TypeError: If the routine is none of the above
    """
    if isinstance(routine, StepPrimitive):
        return routine
    if inspect.isgenerator(routine):
        return GeneratorStep(routine)
    if inspect.isgeneratorfunction(routine):
        return GeneratorStep(routine())
    raise TypeError(
        f"cannot schedule {type(routine).__name__}: expected a StepPrimitive, "
        "a generator or a generator function"
    )


def wait(seconds: float) -> DelayFor:
    """
    Suspend the yielding routine for `seconds` of host time.

    Example:
        ```python
        def spawn_waves():
            for wave in range(3):
                spawn(wave)
                yield wait(2.0)
        ```

    Raises:
        ValueError: If seconds is negative
    """
    return DelayFor(float(seconds))
