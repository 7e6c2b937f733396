"""Repeating callback list.

Zero-argument callbacks invoked once per tick, in registration order. Each
callback runs inside its own failure boundary: a failing callback is
logged, stays registered, and does not stop the rest of the pass.

Only stateless callables are accepted: a callable bound to an instance
would keep that instance alive and keep ticking it after its owner is gone.
"""

import inspect
import logging
from collections.abc import Callable
from types import ModuleType

from pycadence.core.errors import CallbackConfigurationError

__all__ = ["CallbackList", "is_stateless"]

logger = logging.getLogger(__name__)


def is_stateless(callback: Callable[[], object]) -> bool:
    """Return True if the callable carries no implicit instance binding.

    Plain functions, static methods and lambdas are stateless. Class
    methods and module-level builtins are bound to a class or a module,
    both of which are global, so they count as stateless too. Bound
    instance methods (including bound builtin methods such as
    `some_list.clear`) are not.
    """
    if (
        inspect.ismethod(callback)
        or inspect.isbuiltin(callback)
        or inspect.ismethodwrapper(callback)
    ):
        owner = getattr(callback, "__self__", None)
        return owner is None or isinstance(owner, (type, ModuleType))
    return inspect.isfunction(callback)


class CallbackList:
    """Ordered set of repeating callbacks.

    Example:
        ```python
        def poll_input():
            ...

        callbacks = CallbackList()
        callbacks.register(poll_input)

        # once per host frame
        callbacks.tick()
        ```
    """

    def __init__(self):
        self._callbacks: list[Callable[[], object]] = []

    def register(self, callback: Callable[[], object]) -> bool:
        """Add a callback to the end of the list.

        Registering a callback that is already present is a no-op and logs
        a warning.

        Args:
            callback: Stateless zero-argument callable

        Returns:
            True if the callback was added, False if it was already present

        Raises:
            TypeError: If callback is not callable
            CallbackConfigurationError: If callback is bound to instance state
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        if not is_stateless(callback):
            logger.error(f"Repeating callbacks must be stateless; rejected {_name(callback)}")
            raise CallbackConfigurationError(
                callback,
                f"{_name(callback)} is bound to an instance; only stateless callables "
                "(functions, static methods, class methods) can be registered",
            )

        if callback in self._callbacks:
            logger.warning(f"{_name(callback)} has already been registered")
            return False

        self._callbacks.append(callback)
        logger.debug(f"Registered repeating callback: {_name(callback)}")
        return True

    def unregister(self, callback: Callable[[], object]) -> bool:
        """Remove a callback; silently does nothing if it is not registered.

        Returns:
            True if the callback was removed
        """
        try:
            self._callbacks.remove(callback)
        except ValueError:
            return False
        return True

    def tick(self) -> None:
        """Invoke every registered callback once.

        Iterates a snapshot, so callbacks may register or unregister
        callbacks (themselves included) while the pass runs; the change takes
        effect on the next tick.
        """
        for callback in tuple(self._callbacks):
            try:
                callback()
            except Exception:
                logger.exception(f"Repeating callback {_name(callback)} failed")

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, callback: object) -> bool:
        return callback in self._callbacks

    def __iter__(self):
        return iter(tuple(self._callbacks))


def _name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
