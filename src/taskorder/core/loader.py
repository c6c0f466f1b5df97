"""Load rule lists from files."""

from pathlib import Path

import structlog

from ..dependency.graph import TaskGraph
from ..dependency.resolver import DependencyResolver
from ..models.rules import RuleList
from ..utils.exceptions import RuleListError
from .parser import RuleListParser

logger = structlog.get_logger(__name__)


def read_rule_text(path: Path) -> str:
    """
    Read raw rule list text.

    Raises:
        FileNotFoundError: If the file doesn't exist
        RuleListError: If the file is not valid UTF-8
    """
    if not path.exists():
        raise FileNotFoundError(f"Rule file not found: {path}")

    logger.debug("Reading rule file", path=str(path))
    data = path.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise RuleListError(
            f"Rule file is not valid UTF-8: {path}",
            line_number=data.count(b"\n", 0, e.start) + 1,
            original_error=e,
        ) from e


def load_rules(path: Path, parser: RuleListParser | None = None) -> RuleList:
    """
    Load and validate a rule list file.

    Args:
        path: Rule list file
        parser: Parser to use (default: RuleListParser())

    Returns:
        Validated RuleList
    """
    parser = parser or RuleListParser()
    return parser.parse(read_rule_text(path))


def load_graph(path: Path, resolver: DependencyResolver | None = None) -> TaskGraph:
    """
    Load a rule list file and build its task graph.

    Args:
        path: Rule list file
        resolver: Resolver to build with (default: DependencyResolver())

    Returns:
        TaskGraph holding tasks 1..N
    """
    resolver = resolver or DependencyResolver()
    logger.info("Loading task graph", path=str(path))
    return resolver.build_from_rules(read_rule_text(path))
