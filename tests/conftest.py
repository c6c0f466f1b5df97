"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Data fixtures: Sample rule list texts
- Path fixtures: Rule list files written to a temp directory
- Object fixtures: Parsers, resolvers and built graphs
"""

from pathlib import Path

import pytest

from src.taskorder.core.parser import RuleListParser
from src.taskorder.dependency.graph import TaskGraph
from src.taskorder.dependency.resolver import DependencyResolver

# =============================================================================
# Data Fixtures
# =============================================================================

# (1) -> (5), (1) -> (3)
# (5) -> (3), (5) -> (2)
# (3) -> (2), (3) -> (4)
SAMPLE_RULES = """5 4
3 2 1 5
2 2 5 3
4 1 3
5 1 1
"""


@pytest.fixture
def sample_rules() -> str:
    """Rule list for the five-task worked example."""
    return SAMPLE_RULES


@pytest.fixture
def cyclic_rules() -> str:
    """Rule list where 2 and 3 depend on each other, reachable from 1."""
    return "3 3\n2 1 1\n3 1 2\n2 1 3\n"


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def rule_file(tmp_path: Path, sample_rules: str) -> Path:
    """Write the worked example to a temp file."""
    path = tmp_path / "tasks.txt"
    path.write_text(sample_rules)
    return path


@pytest.fixture
def write_rules(tmp_path: Path):
    """Factory writing arbitrary rule text to a temp file."""

    def _write(text: str, name: str = "rules.txt") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


# =============================================================================
# Object Fixtures
# =============================================================================


@pytest.fixture
def parser() -> RuleListParser:
    """Create a new RuleListParser instance."""
    return RuleListParser()


@pytest.fixture
def resolver() -> DependencyResolver:
    """Create a new DependencyResolver instance."""
    return DependencyResolver()


@pytest.fixture
def sample_graph(resolver: DependencyResolver, sample_rules: str) -> TaskGraph:
    """Graph built from the worked example."""
    return resolver.build_from_rules(sample_rules)
