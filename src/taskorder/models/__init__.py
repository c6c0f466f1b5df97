"""Data models for rule lists and resolution results."""

from .results import ResolutionResult
from .rules import Rule, RuleHeader, RuleList

__all__ = [
    "Rule",
    "RuleHeader",
    "RuleList",
    "ResolutionResult",
]
