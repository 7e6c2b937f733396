"""
Runtime - one object owning everything a host ticks each frame.

Design Pattern: Façade Pattern
Bundles the repeating callback list and the routine scheduler behind a
single tick(elapsed) so a host only needs one hook in its update loop.

Within a tick the repeating callbacks run first, then the scheduler pass.
Nothing here is process-global: whoever creates a Runtime owns it and
decides its lifetime.
"""

from collections.abc import Callable

from pycadence.executor.callbacks import CallbackList
from pycadence.executor.scheduler import Scheduler, TaskHandle

__all__ = ["Runtime"]


class Runtime:
    """
    Repeating callbacks plus routine scheduler, ticked together.

    Usage:
        ```python
        runtime = Runtime()
        runtime.register(sample_sensors)
        handle = runtime.start(calibrate)

        while running:
            runtime.tick(frame_delta)

        runtime.cancel(handle)
        ```
    """

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        callbacks: CallbackList | None = None,
    ):
        """
        Args:
            scheduler: Scheduler to drive (a fresh one if omitted)
            callbacks: Callback list to drive (a fresh one if omitted)
        """
        self._scheduler = scheduler if scheduler is not None else Scheduler()
        self._callbacks = callbacks if callbacks is not None else CallbackList()

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def callbacks(self) -> CallbackList:
        return self._callbacks

    def register(self, callback: Callable[[], object]) -> bool:
        """Register a repeating callback. See CallbackList.register."""
        return self._callbacks.register(callback)

    def unregister(self, callback: Callable[[], object]) -> bool:
        return self._callbacks.unregister(callback)

    def start(self, routine) -> TaskHandle:
        """Start a routine. See Scheduler.start."""
        return self._scheduler.start(routine)

    def cancel(self, handle: TaskHandle) -> bool:
        return self._scheduler.cancel(handle)

    def tick(self, elapsed: float) -> None:
        """
        Run one host frame: repeating callbacks, then the routine pass.

        Args:
            elapsed: Host time in seconds since the previous tick
        """
        self._callbacks.tick()
        self._scheduler.tick(elapsed)

    def shutdown(self) -> None:
        """Drop all callbacks and routines."""
        self._callbacks.clear()
        self._scheduler.clear()
