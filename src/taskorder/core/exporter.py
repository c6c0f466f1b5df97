"""Render resolved orders for output."""

import json
from collections.abc import Sequence
from enum import Enum

from ..constants import DEFAULT_SEPARATOR
from ..models.results import ResolutionResult


class OutputFormat(str, Enum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"


class OrderExporter:
    """Format a resolved order as text or JSON."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        self.separator = separator

    def to_text(self, order: Sequence[int]) -> str:
        """
        Join task ids on one line, e.g. `1 5 3 2 4`.

        Args:
            order: Task ids in execution order

        Returns:
            str: The ids joined by the configured separator.
        """
        return self.separator.join(str(task_id) for task_id in order)

    def to_json(self, result: ResolutionResult) -> str:
        """
        Serialize a resolution result.

        Returns:
            str: Indented JSON document.
        """
        return json.dumps(result.to_dict(), indent=2)

    def render(self, result: ResolutionResult, output_format: OutputFormat) -> str:
        if output_format == OutputFormat.JSON:
            return self.to_json(result)
        return self.to_text(result.order)
