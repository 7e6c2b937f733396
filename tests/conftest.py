"""
Pytest configuration and fixtures for pycadence tests.

Provides reusable fixtures for schedulers and runtimes, scripted step
primitives, and Hypothesis strategies.
"""

from collections.abc import Iterable

import pytest
from hypothesis import strategies as st

from pycadence.core import CONTINUE, DONE, StepPrimitive, StepResult
from pycadence.executor import CallbackList, Runtime, Scheduler


@pytest.fixture
def scheduler() -> Scheduler:
    """Fresh scheduler with an empty registry."""
    return Scheduler()


@pytest.fixture
def callbacks() -> CallbackList:
    """Fresh, empty repeating callback list."""
    return CallbackList()


@pytest.fixture
def runtime() -> Runtime:
    """Runtime with its own scheduler and callback list."""
    return Runtime()


# Scripted primitives for driving the scheduler deterministically


class ScriptedStep(StepPrimitive):
    """
    Step primitive that plays back a fixed script.

    Each advance pops the next entry: a StepResult is returned, an
    exception instance is raised. Once the script runs out it reports Done.
    Every advance records the elapsed time it received.
    """

    def __init__(self, script: Iterable[StepResult | BaseException] = (), name: str = "scripted"):
        self.script = list(script)
        self.name = name
        self.calls: list[float] = []

    def advance(self, elapsed: float) -> StepResult:
        self.calls.append(elapsed)
        if not self.script:
            return DONE
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    @property
    def steps(self) -> int:
        return len(self.calls)

    def __repr__(self) -> str:
        return f"ScriptedStep({self.name})"


def continuing(steps: int, name: str = "scripted") -> ScriptedStep:
    """Primitive that runs exactly `steps` advances, the last one reporting Done."""
    return ScriptedStep([CONTINUE] * (steps - 1), name=name)


def forever(log: list, name: str):
    """Generator routine that logs its name on every step and never ends."""
    while True:
        log.append(name)
        yield


def step_names(scheduler: Scheduler) -> list[str]:
    """Names of the primitives currently scheduled, in registry order."""
    return [getattr(node.step, "name", repr(node.step)) for node in scheduler.registry]


# Hypothesis strategies for property-based testing

step_counts = st.lists(st.integers(min_value=1, max_value=12), min_size=1, max_size=20)

elapsed_increments = st.lists(
    st.floats(min_value=0.01, max_value=10.0, allow_nan=False, allow_infinity=False),
    min_size=1,
    max_size=20,
)
