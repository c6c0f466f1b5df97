"""Custom exceptions for the task dependency resolver.

Exception Hierarchy:
-------------------
TaskOrderError (base)
├── RuleListError                # Build-time problems with the rule list
│   ├── MalformedHeaderError     # First line missing, malformed or over the cap
│   ├── MalformedRuleError       # Rule line too short or parent count mismatch
│   │   └── OutOfRangeIdError    # Child or parent id outside [1, N]
│   └── RuleCountMismatchError   # Rule lines read != declared rule count
├── CyclicDependencyError        # Cycle reachable from the traversal root
└── TaskNotFoundError            # Root id not present in the graph

Usage Guidelines:
----------------
1. Catch TaskOrderError as the catch-all for resolver errors.
2. Every RuleListError aborts the build; no partial graph is ever returned.
3. Include context in exceptions: line number for rule-list errors, the
   offending ids for range and cycle errors.
"""


class TaskOrderError(Exception):
    """Base exception for all resolver errors."""

    pass


class RuleListError(TaskOrderError):
    """Raised when the rule list cannot be turned into a graph."""

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize RuleListError.

        Args:
            message: Error message.
            line_number: Optional line number where error occurred.
            original_error: Optional original exception that caused this error.
        """
        super().__init__(message)
        self.line_number = line_number
        self.original_error = original_error

    def __str__(self) -> str:
        """
        Return string representation with line number if available.

        Returns:
            str: Error message prefixed with line number if set.
        """
        if self.line_number:
            return f"Line {self.line_number}: {self.args[0]}"
        return str(self.args[0]) if self.args else "Rule list error"


class MalformedHeaderError(RuleListError):
    """Raised when the `N M` header line is missing or invalid."""

    pass


class MalformedRuleError(RuleListError):
    """Raised when a `T0 k T1 .. Tk` rule line is invalid."""

    pass


class OutOfRangeIdError(MalformedRuleError):
    """Raised when a rule references a task id outside [1, N]."""

    def __init__(
        self,
        task_id: int,
        task_count: int,
        role: str = "task",
        line_number: int | None = None,
    ) -> None:
        """
        Initialize OutOfRangeIdError.

        Args:
            task_id: The offending id.
            task_count: Declared number of tasks (N).
            role: Which position the id held in the rule ("child" or "parent").
            line_number: Optional line number where error occurred.
        """
        super().__init__(
            f"{role} task id {task_id} is not in the expected range [1, {task_count}]",
            line_number=line_number,
        )
        self.task_id = task_id
        self.task_count = task_count
        self.role = role


class RuleCountMismatchError(RuleListError):
    """Raised when the number of rule lines differs from the header's declaration."""

    def __init__(
        self,
        expected: int,
        actual: int,
        line_number: int | None = None,
    ) -> None:
        """
        Initialize RuleCountMismatchError.

        Args:
            expected: Rule count declared in the header (M).
            actual: Rule lines consumed when the mismatch was detected.
            line_number: Line of the first unexpected rule, if any.
        """
        if actual > expected:
            message = f"Unexpected rule line: header declares only {expected} rules"
        else:
            message = f"Read fewer rules than expected: {actual} of {expected}"
        super().__init__(message, line_number=line_number)
        self.expected = expected
        self.actual = actual


class CyclicDependencyError(TaskOrderError):
    """
    Raised when the graph reachable from the traversal root contains a cycle.

    A depth-first traversal that finds a child already on the current path
    has found a back edge. Example:

        1 -> 2 -> 3 -> 2

    Task 2 can never be scheduled because it (transitively) depends on
    itself, so no valid order exists and the resolver fails fast.
    """

    def __init__(self, message: str, cycles: list[list[int]] | None = None) -> None:
        """
        Initialize CyclicDependencyError.

        Args:
            message: Error message.
            cycles: List of detected cycles, where each cycle is a list of task ids.
        """
        super().__init__(message)
        self.cycles = cycles or []


class TaskNotFoundError(TaskOrderError):
    """Raised when a task id is not present in the graph."""

    def __init__(self, task_id: int) -> None:
        """
        Initialize TaskNotFoundError.

        Args:
            task_id: The id that was looked up.
        """
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id
