"""Result types for resolution runs."""

from dataclasses import dataclass, field


@dataclass
class ResolutionResult:
    """
    Result of ordering a task graph from a single root.

    Attributes:
        root_id: Task the traversal started from
        order: Task ids in execution order (prerequisites first)
        excluded: Task ids not reachable from the root, ascending
        duration_ms: Traversal duration in milliseconds
    """

    root_id: int
    order: list[int] = field(default_factory=list)
    excluded: list[int] = field(default_factory=list)
    duration_ms: float | None = None

    @property
    def is_complete(self) -> bool:
        """
        Check whether every task in the graph was ordered.

        Returns:
            bool: True if no task was left out of the order.
        """
        return not self.excluded

    def to_dict(self) -> dict[str, object]:
        """Plain-dict form, suitable for JSON output."""
        return {
            "root": self.root_id,
            "order": list(self.order),
            "excluded": list(self.excluded),
            "duration_ms": self.duration_ms,
        }
