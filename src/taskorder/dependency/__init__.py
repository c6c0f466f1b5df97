"""Dependency graph and ordering."""

from .graph import TaskGraph, TaskNode
from .resolver import DependencyResolver, build, order

__all__ = [
    "TaskGraph",
    "TaskNode",
    "DependencyResolver",
    "build",
    "order",
]
