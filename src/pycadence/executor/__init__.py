"""
Executor module - the runtime that drives routines and callbacks.

This module contains the execution components:
- registry: Ordered task registry (TaskNode, TaskRegistry)
- scheduler: Start/cancel/tick for step primitives (Scheduler, TaskHandle)
- callbacks: Repeating zero-argument callbacks (CallbackList)
- runtime: Façade ticking callbacks and scheduler together (Runtime)
- ticker: Asyncio host driver (Ticker, TickerHandle)
"""

from pycadence.executor.callbacks import CallbackList, is_stateless
from pycadence.executor.registry import TaskNode, TaskRegistry
from pycadence.executor.runtime import Runtime
from pycadence.executor.scheduler import Scheduler, SchedulerError, TaskHandle
from pycadence.executor.ticker import Ticker, TickerError, TickerHandle

__all__ = [
    # Registry
    "TaskNode",
    "TaskRegistry",
    # Scheduler
    "Scheduler",
    "SchedulerError",
    "TaskHandle",
    # Repeating callbacks
    "CallbackList",
    "is_stateless",
    # Host integration
    "Runtime",
    "Ticker",
    "TickerHandle",
    "TickerError",
]
