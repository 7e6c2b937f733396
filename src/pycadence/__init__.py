"""
pycadence: Ownerless routines and repeating callbacks for tick-driven hosts.

A cooperative, single-threaded scheduler. Routines are step primitives
(usually generators) that suspend by yielding; the host drives everything
by calling tick(elapsed) once per frame.

Design Pattern: Façade Pattern
This module re-exports the pieces a host and a routine author need,
hiding the registry and the step protocol.

Example:
    ```python
    from pycadence import Runtime, wait

    def countdown(n):
        while n > 0:
            print(n)
            n -= 1
            yield wait(1.0)
        print("liftoff")

    runtime = Runtime()
    handle = runtime.start(countdown(3))

    # host frame loop
    while running:
        runtime.tick(frame_delta)
    ```
"""

# Core types
from pycadence.core import (
    CONTINUE,
    DONE,
    CadenceError,
    CallbackConfigurationError,
    ChainTo,
    Continue,
    DelayFor,
    Done,
    GeneratorStep,
    RegistryError,
    StepExhaustedError,
    StepPrimitive,
    StepResult,
    TimedDelay,
    Unsupported,
    as_step,
    wait,
)

# Execution
from pycadence.executor.callbacks import CallbackList
from pycadence.executor.registry import TaskNode, TaskRegistry
from pycadence.executor.runtime import Runtime
from pycadence.executor.scheduler import Scheduler, SchedulerError, TaskHandle
from pycadence.executor.ticker import Ticker, TickerError, TickerHandle

# Version
__version__ = "0.1.0"

__all__ = [
    # Step primitives
    "StepPrimitive",
    "StepResult",
    "Continue",
    "ChainTo",
    "DelayFor",
    "Done",
    "Unsupported",
    "CONTINUE",
    "DONE",
    "GeneratorStep",
    "TimedDelay",
    "as_step",
    "wait",

    # Scheduler
    "Scheduler",
    "SchedulerError",
    "TaskHandle",
    "TaskNode",
    "TaskRegistry",

    # Repeating callbacks
    "CallbackList",

    # Host integration
    "Runtime",
    "Ticker",
    "TickerHandle",
    "TickerError",

    # Errors
    "CadenceError",
    "CallbackConfigurationError",
    "RegistryError",
    "StepExhaustedError",

    # Metadata
    "__version__",
]
