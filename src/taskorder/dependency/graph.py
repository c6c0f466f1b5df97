"""Task Graph - tasks as nodes with directed "unlocks" edges.

An edge `parent -> child` means the child depends on the parent: the parent
must be scheduled first. Edges are stored on the parent.

Nodes live in an arena indexed by `task_id - 1`. Ids are dense positive
integers, so the arena never needs hashing or reference links between nodes;
edges are plain ids.
"""

from bisect import insort
from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog

from ..constants import MIN_TASK_ID
from ..utils.exceptions import TaskNotFoundError

logger = structlog.get_logger(__name__)


def _descending(task_id: int) -> int:
    return -task_id


@dataclass
class TaskNode:
    """
    Node in the task graph.

    Attributes:
        task_id: Positive integer id, unique within a graph
        children: Ids of tasks this task unlocks, kept in descending order
    """

    task_id: int
    children: list[int] = field(default_factory=list)

    def add_child(self, child_id: int) -> None:
        """
        Record that this task unlocks `child_id`.

        Duplicates are kept; the traversal skips already resolved children.
        """
        insort(self.children, child_id, key=_descending)

    def __hash__(self) -> int:
        """Hash based on task id."""
        return hash(self.task_id)


class TaskGraph:
    """
    Directed graph of task dependencies.

    Features:
    - Arena storage indexed by task id
    - Child edges kept in descending id order as they are inserted
    - Graphviz DOT rendering
    """

    def __init__(self) -> None:
        """Initialize empty task graph."""
        self._arena: list[TaskNode | None] = []
        self._size = 0

    @classmethod
    def with_tasks(cls, task_count: int) -> "TaskGraph":
        """
        Create a graph holding tasks 1..task_count and no edges.

        Args:
            task_count: Number of tasks to create

        Returns:
            The populated TaskGraph
        """
        graph = cls()
        for task_id in range(MIN_TASK_ID, task_count + 1):
            graph.create_node(task_id)
        return graph

    @classmethod
    def from_nodes(cls, nodes: list[TaskNode]) -> "TaskGraph":
        """
        Wrap existing nodes (e.g. the list returned by `build`) in a graph.

        Args:
            nodes: Nodes with unique positive ids

        Returns:
            TaskGraph sharing the given node objects

        Raises:
            ValueError: If ids are invalid or repeated
        """
        graph = cls()
        for node in nodes:
            graph.create_node(node.task_id)
            graph._arena[node.task_id - 1] = node
        return graph

    def create_node(self, task_id: int) -> TaskNode:
        """
        Allocate a node with the given id and no edges.

        Args:
            task_id: Positive integer id, not yet used in this graph

        Returns:
            The created TaskNode

        Raises:
            ValueError: If the id is not positive or already taken
        """
        if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < MIN_TASK_ID:
            raise ValueError(f"Task id must be a positive integer: {task_id!r}")

        if task_id in self:
            raise ValueError(f"Task already in graph: {task_id}")

        if task_id > len(self._arena):
            self._arena.extend([None] * (task_id - len(self._arena)))

        node = TaskNode(task_id=task_id)
        self._arena[task_id - 1] = node
        self._size += 1
        return node

    def get_node(self, task_id: int) -> TaskNode:
        """
        Look up a node by id.

        Raises:
            TaskNotFoundError: If no node has this id
        """
        if task_id not in self:
            raise TaskNotFoundError(task_id)
        return self._arena[task_id - 1]  # type: ignore[return-value]

    def add_edge(self, parent_id: int, child_id: int) -> None:
        """
        Record that `parent_id` unlocks `child_id` (child depends on parent).

        Self-loops and duplicate edges are accepted as-is.

        Args:
            parent_id: Prerequisite task (executes BEFORE)
            child_id: Dependent task (executes AFTER)

        Raises:
            TaskNotFoundError: If either task is not in the graph
        """
        parent = self.get_node(parent_id)
        self.get_node(child_id)

        if parent_id == child_id:
            logger.warning("Added self-dependency", task_id=parent_id)

        parent.add_child(child_id)
        logger.debug("Added dependency edge", parent=parent_id, child=child_id)

    def child_edges(self, node: TaskNode | int) -> list[TaskNode]:
        """
        Return the tasks unlocked by `node`, highest id first.

        Args:
            node: A TaskNode of this graph or its id

        Returns:
            Dependent nodes in descending id order
        """
        task_id = node.task_id if isinstance(node, TaskNode) else node
        return [self._arena[child_id - 1] for child_id in self.get_node(task_id).children]

    @property
    def nodes(self) -> list[TaskNode]:
        """All nodes in ascending id order."""
        return [node for node in self._arena if node is not None]

    @property
    def edge_count(self) -> int:
        return sum(len(node.children) for node in self)

    def __contains__(self, task_id: object) -> bool:
        return (
            isinstance(task_id, int)
            and MIN_TASK_ID <= task_id <= len(self._arena)
            and self._arena[task_id - 1] is not None
        )

    def __iter__(self) -> Iterator[TaskNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return self._size

    def to_dot(self) -> str:
        """
        Generate DOT format representation of the task graph.

        Returns:
            String containing the Graphviz DOT definition
        """
        lines = ["digraph TaskGraph {"]
        lines.append("    rankdir=LR;")
        lines.append("    node [shape=circle];")

        for node in self:
            lines.append(f'    "{node.task_id}";')

        for node in self:
            for child_id in node.children:
                lines.append(f'    "{node.task_id}" -> "{child_id}";')

        lines.append("}")
        return "\n".join(lines)
