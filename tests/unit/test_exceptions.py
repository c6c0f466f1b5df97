"""Unit tests for Custom Exceptions."""

import pytest

from src.taskorder.utils.exceptions import (
    CyclicDependencyError,
    MalformedHeaderError,
    MalformedRuleError,
    OutOfRangeIdError,
    RuleCountMismatchError,
    RuleListError,
    TaskNotFoundError,
    TaskOrderError,
)


class TestRuleListError:
    """Test RuleListError formatting."""

    def test_message_without_line(self):
        """Test string form without a line number."""
        error = RuleListError("bad input")

        assert str(error) == "bad input"
        assert error.line_number is None
        assert error.original_error is None

    def test_message_with_line(self):
        """Test string form with a line number."""
        error = MalformedHeaderError("bad header", line_number=1)

        assert str(error) == "Line 1: bad header"

    def test_original_error_kept(self):
        """Test wrapping an underlying exception."""
        cause = ValueError("nope")
        error = MalformedRuleError("bad rule", line_number=3, original_error=cause)

        assert error.original_error is cause

    @pytest.mark.parametrize(
        "error_class",
        [MalformedHeaderError, MalformedRuleError, OutOfRangeIdError, RuleCountMismatchError],
    )
    def test_hierarchy(self, error_class):
        """All build-time errors derive from RuleListError and TaskOrderError."""
        assert issubclass(error_class, RuleListError)
        assert issubclass(error_class, TaskOrderError)


class TestOutOfRangeIdError:
    """Test OutOfRangeIdError."""

    def test_creation(self):
        """Test message and attributes."""
        error = OutOfRangeIdError(7, 5, role="parent", line_number=4)

        assert str(error) == "Line 4: parent task id 7 is not in the expected range [1, 5]"
        assert error.task_id == 7
        assert error.task_count == 5
        assert error.role == "parent"

    def test_is_malformed_rule(self):
        """Range errors are a kind of malformed rule."""
        assert isinstance(OutOfRangeIdError(0, 3), MalformedRuleError)


class TestRuleCountMismatchError:
    """Test RuleCountMismatchError."""

    def test_too_few(self):
        """Test message when input ends early."""
        error = RuleCountMismatchError(expected=2, actual=1)

        assert str(error) == "Read fewer rules than expected: 1 of 2"
        assert error.expected == 2
        assert error.actual == 1

    def test_too_many(self):
        """Test message for an extra rule line."""
        error = RuleCountMismatchError(expected=1, actual=2, line_number=3)

        assert str(error) == "Line 3: Unexpected rule line: header declares only 1 rules"


class TestTraversalErrors:
    """Test traversal-time exceptions."""

    def test_cyclic_dependency_error(self):
        """Test cycles are stored."""
        error = CyclicDependencyError("cycle", cycles=[[2, 3, 2]])

        assert error.cycles == [[2, 3, 2]]
        assert isinstance(error, TaskOrderError)
        assert not isinstance(error, RuleListError)

    def test_cyclic_dependency_error_default_cycles(self):
        """Test cycles default to an empty list."""
        assert CyclicDependencyError("cycle").cycles == []

    def test_task_not_found_error(self):
        """Test TaskNotFoundError message."""
        error = TaskNotFoundError(9)

        assert str(error) == "Task not found: 9"
        assert error.task_id == 9
