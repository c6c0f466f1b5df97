"""Utility functions and exceptions."""

from .exceptions import (
    CyclicDependencyError,
    MalformedHeaderError,
    MalformedRuleError,
    OutOfRangeIdError,
    RuleCountMismatchError,
    RuleListError,
    TaskNotFoundError,
    TaskOrderError,
)

__all__ = [
    "TaskOrderError",
    "RuleListError",
    "MalformedHeaderError",
    "MalformedRuleError",
    "OutOfRangeIdError",
    "RuleCountMismatchError",
    "CyclicDependencyError",
    "TaskNotFoundError",
]
