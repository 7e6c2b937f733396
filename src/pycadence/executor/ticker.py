"""Asyncio host driver for a Runtime.

A Ticker stands in for a host frame loop: it calls runtime.tick(elapsed)
once per interval, feeding the measured monotonic time since the previous
tick. It is a generic driver for hosts that have no update loop of their
own (services, tools, tests), not an integration with any engine.

Features:
- Fixed-interval ticking with measured elapsed time
- Interval configurable from the environment
- Graceful shutdown through a handle
"""

import asyncio
import logging
import math
import os
import time
from collections.abc import Callable

from pycadence.core.errors import CadenceError
from pycadence.executor.runtime import Runtime

__all__ = ["Ticker", "TickerHandle", "TickerError", "DEFAULT_INTERVAL", "INTERVAL_ENV_VAR"]

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0 / 60.0
INTERVAL_ENV_VAR = "PYCADENCE_TICK_INTERVAL"


class Ticker:
    """Drives a Runtime from an asyncio event loop.

    Usage:
        runtime = Runtime()
        runtime.start(my_routine)

        handle = await Ticker(runtime, interval=0.05).start()
        ...
        await handle.shutdown()

    Configuration from the environment:
        # $ export PYCADENCE_TICK_INTERVAL=0.02
        ticker = Ticker(runtime).from_env()
    """

    def __init__(
        self,
        runtime: Runtime,
        interval: float = DEFAULT_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the ticker.

        Args:
            runtime: Runtime to tick
            interval: Seconds between ticks, must be > 0
            clock: Monotonic time source in seconds

        Raises:
            TickerError: If interval is not a finite positive number
        """
        if not math.isfinite(interval) or interval <= 0:
            raise TickerError(f"tick interval must be a finite number > 0, got {interval}")

        self._runtime = runtime
        self._interval = interval
        self._clock = clock
        self._ticks = 0
        self._running = False
        self._shutdown_event = asyncio.Event()

    def from_env(self) -> "Ticker":
        """Configure the interval from the PYCADENCE_TICK_INTERVAL variable.

        If the variable is unset, the default interval (1/60 s) is used.

        Returns:
            New Ticker for the same runtime and clock

        Raises:
            TickerError: If the variable is not a finite positive number
        """
        raw = os.getenv(INTERVAL_ENV_VAR)
        if raw is None:
            return Ticker(self._runtime, DEFAULT_INTERVAL, self._clock)
        try:
            interval = float(raw)
        except ValueError as e:
            raise TickerError(f"{INTERVAL_ENV_VAR}={raw!r} is not a number") from e
        return Ticker(self._runtime, interval, self._clock)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def ticks(self) -> int:
        """Number of ticks delivered so far."""
        return self._ticks

    @property
    def runtime(self) -> Runtime:
        return self._runtime

    async def start(self) -> "TickerHandle":
        """Start ticking in a background task.

        Returns:
            Handle for stopping the ticker

        Raises:
            TickerError: If the ticker is already running
        """
        if self._running:
            raise TickerError("ticker is already running")

        self._running = True
        self._shutdown_event.clear()
        task = asyncio.create_task(self._run())
        return TickerHandle(self, task)

    async def _run(self) -> None:
        """Tick loop. Runs until shutdown() or cancellation."""
        logger.info(f"Ticker started (interval={self._interval}s)")
        last = self._clock()
        try:
            while not self._shutdown_event.is_set():
                try:
                    await asyncio.wait_for(self._shutdown_event.wait(), timeout=self._interval)
                    break
                except TimeoutError:
                    pass

                now = self._clock()
                elapsed = max(0.0, now - last)
                last = now
                try:
                    self._runtime.tick(elapsed)
                except Exception as e:
                    logger.error(f"Ticker: tick failed: {e}")
                self._ticks += 1
        finally:
            self._running = False
            logger.info(f"Ticker stopped after {self._ticks} ticks")

    async def shutdown(self) -> None:
        """Ask the tick loop to stop after the current tick."""
        logger.debug("Ticker shutting down...")
        self._shutdown_event.set()


class TickerHandle:
    """Handle for controlling a running ticker.

    Usage:
        handle = await ticker.start()
        await handle.shutdown()
    """

    def __init__(self, ticker: Ticker, task: asyncio.Task):
        self._ticker = ticker
        self._task = task

    def is_running(self) -> bool:
        """Return True if the tick loop is still running."""
        return not self._task.done()

    def ticks(self) -> int:
        return self._ticker.ticks

    async def shutdown(self) -> None:
        """Stop the ticker and wait for the loop to exit."""
        await self._ticker.shutdown()
        await self._task

    def abort(self) -> None:
        """Cancel the tick loop immediately without waiting.

        Prefer shutdown() for normal termination.
        """
        self._task.cancel()


class TickerError(CadenceError):
    """Ticker misconfigured or misused.

    Raised for non-finite or non-positive intervals, unparsable interval settings and
    starting a ticker that is already running.
    """

    pass
