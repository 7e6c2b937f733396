"""
Scheduler - cooperative, single-threaded runner for ownerless routines.

A routine is started once and then driven by the host calling tick() once
per frame. Each tick drains the registry in a single pass:

    tick(elapsed)
      └── for node in registry (reaches nodes appended behind the cursor)
            └── advance one step inside a per-node failure boundary
                  Continue        → stay
                  ChainTo(child)  → unlink, schedule child with resume-link
                  DelayFor(secs)  → unlink, schedule TimedDelay child
                  Done            → unlink, re-queue resume-link target
                  Unsupported     → log, stay
                  raises          → log, unlink, abandon ancestors

Only the active leaf of a chain is ever present in the registry; paused
ancestors are reachable only through the leaf's resume-links. Cancellation
therefore walks resume-links from each scheduled leaf back to the root the
handle names.

Usage:
    ```python
    scheduler = Scheduler()

    def patrol():
        while True:
            yield wait(1.0)
            guard.turn()

    handle = scheduler.start(patrol)

    # host frame loop
    scheduler.tick(frame_delta)

    scheduler.cancel(handle)
    ```
"""

import logging
import math
import threading
from dataclasses import dataclass
from uuid import UUID

from uuid_extensions import uuid7

from pycadence.core.delay import TimedDelay
from pycadence.core.errors import CadenceError
from pycadence.core.step import (
    ChainTo,
    Continue,
    DelayFor,
    Done,
    StepPrimitive,
    Unsupported,
    as_step,
)
from pycadence.executor.registry import TaskNode, TaskRegistry

__all__ = ["Scheduler", "TaskHandle", "SchedulerError"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskHandle:
    """
    Opaque reference to a started routine.

    Identifies the chain's root node by its task id. Task ids are uuid7
    values and never reused, so a handle stays safe to use for the whole
    life of the scheduler: after the chain finishes, cancel() with it is a
    no-op rather than a hit on some unrelated routine.

    Attributes:
        task_id: Identity of the root node created by start()
    """

    task_id: UUID

    def __str__(self) -> str:
        return f"TaskHandle({self.task_id})"


class Scheduler:
    """
    Cooperative scheduler for step primitives.

    Owns the task registry. All four operations (start, cancel, tick,
    clear) hold one re-entrant lock, so a host that calls them from more
    than one thread is serialized, and routines may still start or cancel
    work on their own scheduler from inside a step.

    Elapsed time: a node stepped in the same pass that created it receives
    0.0; every other step receives the tick's elapsed. A delay spawned
    during frame N therefore starts counting with frame N+1.
    """

    def __init__(self):
        self._registry = TaskRegistry()
        self._lock = threading.RLock()
        self._pass = 0
        self._ticking = False

    # =========================================================================
    # Public API
    # =========================================================================

    def start(self, routine) -> TaskHandle:
        """
        Start a routine and run its first step immediately.

        A routine that finishes or fails on this first step never shows up
        in the registry; the returned handle is still valid (cancelling it
        is a no-op).

        Args:
            routine: A StepPrimitive, a generator, or a zero-argument
                generator function

        Returns:
            Handle naming the chain's root node

        Raises:
            TypeError: If the routine cannot be turned into a StepPrimitive
        """
        step = as_step(routine)
        with self._lock:
            node = TaskNode(uuid7(), step, created_pass=self._current_pass())
            self._registry.append(node)
            logger.debug(f"Routine started: task_id={node.task_id} step={step!r}")
            self._step(node, 0.0)
        return TaskHandle(node.task_id)

    def cancel(self, handle: TaskHandle) -> bool:
        """
        Cancel the whole chain rooted at `handle`.

        Scans the registry front to back for the first node whose
        resume-link path reaches the root, and unlinks it. Paused ancestors
        were already out of the registry, so nothing in the chain runs again.

        A step already taken this tick is not undone.

        Returns:
            True if an active node was removed, False if the chain had
            already finished (or failed)
        """
        with self._lock:
            for node in self._registry:
                if any(link.task_id == handle.task_id for link in node.chain()):
                    self._registry.remove(node)
                    logger.debug(f"Routine cancelled: root={handle.task_id} leaf={node.task_id}")
                    return True
            return False

    def tick(self, elapsed: float) -> None:
        """
        Drain the registry once, stepping every reachable node.

        Children chained and parents resumed during the pass are appended at
        the tail. They are stepped before the pass ends only if the traversal
        had not yet reached the tail when they were appended; otherwise they
        run on the next tick. A routine that keeps chaining therefore advances
        a bounded number of steps per tick.

        Failures raised by steps are logged and never propagate out of tick().

        Args:
            elapsed: Host time in seconds since the previous tick

        Raises:
            ValueError: If elapsed is negative or not finite
            SchedulerError: If called from inside a step of this scheduler
        """
        if not math.isfinite(elapsed) or elapsed < 0:
            raise ValueError(f"elapsed must be a finite number >= 0, got {elapsed}")

        with self._lock:
            if self._ticking:
                raise SchedulerError("tick() called re-entrantly from inside a step")
            if self._registry.is_empty():
                return

            self._pass += 1
            self._ticking = True
            try:
                for node in self._registry.traverse():
                    delta = 0.0 if node.created_pass == self._pass else elapsed
                    self._step(node, delta)
            finally:
                self._ticking = False

    def is_active(self, handle: TaskHandle) -> bool:
        """Return True while any node of the handle's chain is scheduled."""
        with self._lock:
            return any(
                link.task_id == handle.task_id
                for node in self._registry
                for link in node.chain()
            )

    def clear(self) -> int:
        """
        Drop every scheduled routine without stepping it again.

        Returns:
            Number of nodes removed
        """
        with self._lock:
            removed = self._registry.clear()
            if removed:
                logger.debug(f"Scheduler cleared: {len(removed)} routines dropped")
            return len(removed)

    @property
    def active_count(self) -> int:
        """Number of nodes currently scheduled (one per running chain)."""
        return len(self._registry)

    @property
    def registry(self) -> TaskRegistry:
        """Task registry (for testing/inspection)."""
        return self._registry

    def __len__(self) -> int:
        return len(self._registry)

    # =========================================================================
    # Step protocol
    # =========================================================================

    def _current_pass(self) -> int | None:
        return self._pass if self._ticking else None

    def _step(self, node: TaskNode, elapsed: float) -> None:
        """Advance one node once and apply the result to the registry."""
        try:
            result = node.step.advance(elapsed)

            # Cancelled from inside its own step: nothing else may happen.
            if not node.linked:
                return

            match result:
                case Continue():
                    pass
                case Done():
                    self._complete(node)
                case ChainTo(child):
                    self._chain(node, as_step(child))
                case DelayFor(duration):
                    logger.debug(f"Delay started: task_id={node.task_id} duration={duration}")
                    self._chain(node, TimedDelay(duration))
                case Unsupported(request):
                    logger.error(
                        f"Routine {node.task_id} yielded unsupported suspension request "
                        f"{type(request).__name__}; the routine will continue as normal"
                    )
                case _:
                    logger.error(
                        f"Routine {node.task_id} returned {type(result).__name__}, "
                        "not a StepResult; the routine will continue as normal"
                    )
        except Exception:
            logger.exception(f"Routine {node.task_id} failed; abandoning its chain")
            if node.linked:
                self._registry.remove(node)

    def _complete(self, node: TaskNode) -> None:
        if node.resume is not None:
            self._registry.append(node.resume)
            logger.debug(f"Routine ended: task_id={node.task_id} resuming={node.resume.task_id}")
        else:
            logger.debug(f"Routine ended: task_id={node.task_id}")
        self._registry.remove(node)

    def _chain(self, node: TaskNode, child: StepPrimitive) -> None:
        child_node = TaskNode(uuid7(), child, resume=node, created_pass=self._current_pass())
        self._registry.append(child_node)
        self._registry.remove(node)
        logger.debug(f"Chain started: parent={node.task_id} child={child_node.task_id}")


class SchedulerError(CadenceError):
    """
    Scheduler misuse.

    Raised for operations the cooperative model cannot honor, such as
    ticking the scheduler from inside one of its own steps.
    """

    pass
