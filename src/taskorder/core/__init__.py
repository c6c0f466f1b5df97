"""Core rule list parsing and output formatting.

The file loader lives in `core.loader` and is imported explicitly, since it
depends on the dependency package.
"""

from .exporter import OrderExporter, OutputFormat
from .parser import RuleListParser

__all__ = [
    "RuleListParser",
    "OrderExporter",
    "OutputFormat",
]
