"""Task nodes and the ordered task registry.

The registry is an intrusive doubly linked list of TaskNodes in scheduling
order (FIFO of activation). It supports O(1) append and removal of
arbitrary nodes while a traversal is in progress.

Traversal captures the successor of the current node before handing the
node out, and reads every later link from the live structure. Nodes
appended at the tail while the cursor is behind it are reached in the same
pass; nodes appended while the cursor is on the tail wait for the next pass.
A node unlinked during the pass keeps the successor it had at removal time,
so a captured successor that gets cancelled is skipped rather than ending
the pass.
"""

from collections.abc import Iterator
from uuid import UUID

from pycadence.core.errors import RegistryError
from pycadence.core.step import StepPrimitive

__all__ = ["TaskNode", "TaskRegistry"]


class TaskNode:
    """Scheduler bookkeeping for one step primitive.

    Attributes:
        task_id: Unique, never reused identity (uuid7)
        step: The primitive this node advances
        resume: The paused parent node to re-queue when this one finishes,
            or None for a chain root
        created_pass: Number of the scheduling pass that created the node,
            or None when it was created outside a pass
    """

    def __init__(
        self,
        task_id: UUID,
        step: StepPrimitive,
        resume: "TaskNode | None" = None,
        created_pass: int | None = None,
    ):
        self.task_id = task_id
        self.step = step
        self.resume = resume
        self.created_pass = created_pass

        self._prev: TaskNode | None = None
        self._next: TaskNode | None = None
        self._registry: TaskRegistry | None = None

    @property
    def linked(self) -> bool:
        """True while the node is present in a registry."""
        return self._registry is not None

    def chain(self) -> Iterator["TaskNode"]:
        """Walk this node and its resume-links up to the chain root."""
        node: TaskNode | None = self
        while node is not None:
            yield node
            node = node.resume

    def __repr__(self) -> str:
        resume = self.resume.task_id if self.resume is not None else None
        return f"TaskNode(task_id={self.task_id}, step={self.step!r}, resume={resume})"


class TaskRegistry:
    """Ordered collection of active TaskNodes.

    A node is present at most once. Appends always go to the tail; removal
    may target any node, including the one a traversal is currently on.

    Example:
        ```python
        registry = TaskRegistry()
        registry.append(node_a)
        registry.append(node_b)

        for node in registry.traverse():
            if finished(node):
                registry.remove(node)   # safe mid-traversal
        ```
    """

    def __init__(self):
        self._head: TaskNode | None = None
        self._tail: TaskNode | None = None
        self._size = 0

    def append(self, node: TaskNode) -> None:
        """Link a node at the tail.

        Raises:
            RegistryError: If the node is already linked
        """
        if node._registry is not None:
            raise RegistryError(f"{node!r} is already scheduled")

        node._registry = self
        node._prev = self._tail
        node._next = None
        if self._tail is None:
            self._head = node
        else:
            self._tail._next = node
        self._tail = node
        self._size += 1

    def remove(self, node: TaskNode) -> None:
        """Unlink a node.

        The node keeps its current successor so an in-progress traversal can
        continue from it.

        Raises:
            RegistryError: If the node is not linked in this registry
        """
        if node._registry is not self:
            raise RegistryError(f"{node!r} is not scheduled in this registry")

        if node._prev is None:
            self._head = node._next
        else:
            node._prev._next = node._next
        if node._next is None:
            self._tail = node._prev
        else:
            node._next._prev = node._prev

        node._prev = None
        node._registry = None
        self._size -= 1

    def traverse(self) -> Iterator[TaskNode]:
        """Visit linked nodes from head to tail.

        The successor is captured before each node is yielded, so whatever
        the consumer appends while the cursor sits on the tail is left for the
        next pass. Nodes unlinked before the cursor gets to them are skipped.
        """
        node = self._head
        while node is not None:
            following = node._next
            if node._registry is self:
                yield node
            node = following

    def clear(self) -> list[TaskNode]:
        """Unlink every node and return them in scheduling order.

        Cleared nodes drop their successor so an in-progress traversal ends.
        """
        nodes = list(self)
        for node in nodes:
            node._prev = None
            node._next = None
            node._registry = None
        self._head = None
        self._tail = None
        self._size = 0
        return nodes

    @property
    def first(self) -> TaskNode | None:
        return self._head

    @property
    def last(self) -> TaskNode | None:
        return self._tail

    def is_empty(self) -> bool:
        """Returns True if no nodes are scheduled."""
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, node: object) -> bool:
        return isinstance(node, TaskNode) and node._registry is self

    def __iter__(self) -> Iterator[TaskNode]:
        """Snapshot of the live nodes in scheduling order."""
        nodes = []
        node = self._head
        while node is not None:
            nodes.append(node)
            node = node._next
        return iter(nodes)

    def __repr__(self) -> str:
        return f"TaskRegistry(size={self._size})"
