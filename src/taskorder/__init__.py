"""Task Dependency Resolver - order tasks so prerequisites run first."""

__version__ = "0.1.0"

from .cli import app  # noqa: E402
from .config import ResolverConfig  # noqa: E402
from .dependency import DependencyResolver, TaskGraph, build, order  # noqa: E402

__all__ = ["app", "ResolverConfig", "DependencyResolver", "TaskGraph", "build", "order"]
