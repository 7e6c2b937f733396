"""
Error types for pycadence.

Errors are values: every failure the library itself raises is a
CadenceError subclass carrying enough context to act on. Errors raised by
user code inside a step or a repeating callback are NOT wrapped; they are
isolated and logged at the boundary where the scheduler invokes user code.
"""

__all__ = [
    "CadenceError",
    "CallbackConfigurationError",
    "RegistryError",
    "StepExhaustedError",
]


class CadenceError(Exception):
    """Base class for errors raised by pycadence itself."""

    pass


class CallbackConfigurationError(CadenceError):
    """
    A repeating callback violates the stateless-callable precondition.

    Only callables with no implicit binding to instance state may be
    registered: plain functions, static methods, class methods and
    module-level builtins. Bound instance methods are rejected.

    Attributes:
        callback: The rejected callable
    """

    def __init__(self, callback: object, message: str | None = None):
        self.callback = callback
        super().__init__(message or f"{callback!r} is bound to instance state")


class RegistryError(CadenceError):
    """Task registry invariant violated (e.g. a node linked twice)."""

    pass


class StepExhaustedError(CadenceError):
    """A single-use step primitive was advanced after reporting Done."""

    pass

