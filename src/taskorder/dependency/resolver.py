"""Dependency Resolver - build a task graph from rules and order it.

Build phase:
-----------
The rule list is parsed and validated first (RuleListParser), then all N
nodes are created before any edge is attached. A rule `T0 k T1 .. Tk` adds
the edges `Ti -> T0`. Any error aborts the build; no partial graph escapes.

Order phase:
-----------
Post-order depth-first traversal from a chosen root, then reversed:

    1. Mark the node in progress
    2. Visit each unresolved child, highest id first
    3. Append the node to `resolved`, clear in-progress
    4. Reverse `resolved` once the root finishes

A node is appended only after everything it unlocks has been appended, so
after the reversal every prerequisite precedes its dependents. Visiting the
highest child first puts lower-numbered siblings earlier in the final order,
which makes the output deterministic.

Example (1 -> {5, 3}, 5 -> {3, 2}, 3 -> {2, 4}):
    resolved = [4, 2, 3, 5, 1]  ->  order = [1, 5, 3, 2, 4]

The traversal uses an explicit stack, so depth is not bounded by the
interpreter's recursion limit. A child that is still in progress closes a
cycle and raises CyclicDependencyError. Nodes unreachable from the root are
left out of the order.
"""

import time

import structlog

from ..constants import DEFAULT_ROOT_ID
from ..core.parser import RuleListParser
from ..models.results import ResolutionResult
from ..models.rules import RuleList
from ..utils.exceptions import CyclicDependencyError
from .graph import TaskGraph, TaskNode

logger = structlog.get_logger(__name__)


class DependencyResolver:
    """
    Resolve task dependencies into a single execution order.

    Turns rule text into a TaskGraph and computes one valid topological
    order reachable from a root task.
    """

    def __init__(self, parser: RuleListParser | None = None) -> None:
        """
        Initialize resolver.

        Args:
            parser: Rule list parser to use (default: RuleListParser())
        """
        self.parser = parser or RuleListParser()

    def build_from_rules(self, rule_text: str) -> TaskGraph:
        """
        Parse rule text and build the task graph.

        Args:
            rule_text: Rule list in the `N M` / `T0 k T1 .. Tk` format

        Returns:
            TaskGraph holding tasks 1..N

        Raises:
            RuleListError: If the rule list is malformed
        """
        return self.build_from_rule_list(self.parser.parse(rule_text))

    def build_from_rule_list(self, rule_list: RuleList) -> TaskGraph:
        """
        Build the task graph from an already parsed rule list.

        Args:
            rule_list: Validated rules

        Returns:
            TaskGraph holding tasks 1..N
        """
        logger.info(
            "Building task graph",
            task_count=rule_list.task_count,
            rule_count=len(rule_list.rules),
        )

        graph = TaskGraph.with_tasks(rule_list.task_count)
        for rule in rule_list.rules:
            for parent_id in rule.parent_ids:
                graph.add_edge(parent_id, rule.child_id)

        logger.info("Task graph built", nodes=len(graph), edges=graph.edge_count)
        return graph

    def resolve_order(self, graph: TaskGraph, root: TaskNode | int) -> list[int]:
        """
        Compute a dependency order of the tasks reachable from `root`.

        Args:
            graph: Graph to traverse
            root: Root node or its id

        Returns:
            Task ids, prerequisites before dependents

        Raises:
            TaskNotFoundError: If the root is not in the graph
            CyclicDependencyError: If a cycle is reachable from the root
        """
        root_id = root.task_id if isinstance(root, TaskNode) else root
        graph.get_node(root_id)

        resolved: list[int] = []
        done: set[int] = set()
        in_progress: set[int] = {root_id}
        path: list[int] = [root_id]
        stack = [(root_id, iter(graph.get_node(root_id).children))]

        while stack:
            task_id, children = stack[-1]
            for child_id in children:
                if child_id in done:
                    continue
                if child_id == task_id:
                    logger.warning("Ignoring self-dependency", task_id=task_id)
                    continue
                if child_id in in_progress:
                    cycle = path[path.index(child_id) :] + [child_id]
                    logger.error("Cyclic dependency detected", cycle=cycle)
                    raise CyclicDependencyError(
                        f"Cyclic dependency detected: {' -> '.join(map(str, cycle))}",
                        cycles=[cycle],
                    )
                in_progress.add(child_id)
                path.append(child_id)
                stack.append((child_id, iter(graph.get_node(child_id).children)))
                break
            else:
                stack.pop()
                path.pop()
                in_progress.discard(task_id)
                done.add(task_id)
                resolved.append(task_id)

        resolved.reverse()
        logger.debug("Dependency order resolved", root=root_id, order=resolved)
        return resolved

    def resolve(self, graph: TaskGraph, root_id: int = DEFAULT_ROOT_ID) -> ResolutionResult:
        """
        Order the graph from `root_id` and report what was left out.

        Args:
            graph: Graph to traverse
            root_id: Task to start from

        Returns:
            ResolutionResult with the order, excluded ids and timing
        """
        start = time.perf_counter()
        ordered = self.resolve_order(graph, root_id)
        duration_ms = (time.perf_counter() - start) * 1000

        reached = set(ordered)
        excluded = [node.task_id for node in graph if node.task_id not in reached]

        if excluded:
            logger.warning(
                "Tasks unreachable from root were excluded",
                root=root_id,
                excluded=excluded,
            )

        logger.info(
            "Resolution complete",
            root=root_id,
            ordered=len(ordered),
            excluded=len(excluded),
            duration_ms=round(duration_ms, 3),
        )

        return ResolutionResult(
            root_id=root_id,
            order=ordered,
            excluded=excluded,
            duration_ms=duration_ms,
        )


def build(rule_text: str) -> list[TaskNode]:
    """
    Build the task nodes described by `rule_text`.

    Returns:
        Node list where index 0 holds task 1, index 1 task 2, and so on
    """
    return DependencyResolver().build_from_rules(rule_text).nodes


def order(nodes: list[TaskNode] | TaskGraph, root_id: int = DEFAULT_ROOT_ID) -> list[int]:
    """
    Order the tasks reachable from `root_id`.

    Args:
        nodes: Node list from `build`, or a TaskGraph
        root_id: Task to start from

    Returns:
        Task ids, prerequisites before dependents
    """
    graph = nodes if isinstance(nodes, TaskGraph) else TaskGraph.from_nodes(nodes)
    return DependencyResolver().resolve_order(graph, root_id)
