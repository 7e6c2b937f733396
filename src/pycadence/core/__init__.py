"""
Core types for pycadence.

This module contains the fundamental types used throughout pycadence:
- StepPrimitive: A resumable computation advanced one step at a time
- StepResult: What a step asks the scheduler to do next
  (Continue, ChainTo, DelayFor, Done, Unsupported)
- GeneratorStep: Adapter turning a generator into a StepPrimitive
- TimedDelay: The primitive behind DelayFor
- Error types raised by the library itself
"""

from pycadence.core.delay import TimedDelay
from pycadence.core.errors import (
    CadenceError,
    CallbackConfigurationError,
    RegistryError,
    StepExhaustedError,
)
from pycadence.core.step import (
    CONTINUE,
    DONE,
    ChainTo,
    Continue,
    DelayFor,
    Done,
    GeneratorStep,
    StepPrimitive,
    StepResult,
    Unsupported,
    as_step,
    wait,
)

__all__ = [
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
    "as_step",
    "wait",
    "TimedDelay",
    "CadenceError",
    "CallbackConfigurationError",
    "RegistryError",
    "StepExhaustedError",
]
