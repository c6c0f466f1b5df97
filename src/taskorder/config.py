"""Configuration management for the task dependency resolver."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml

from .constants import COMMENT_PREFIX, DEFAULT_ROOT_ID, DEFAULT_SEPARATOR
from .core.exporter import OutputFormat


@dataclass
class ResolutionConfig:
    """
    Resolution configuration.

    Controls which task the traversal starts from and how rule text is read.
    """

    root_id: int = DEFAULT_ROOT_ID
    comment_prefix: str = COMMENT_PREFIX


@dataclass
class OutputConfig:
    """Output configuration for resolved orders."""

    format: OutputFormat = OutputFormat.TEXT
    separator: str = DEFAULT_SEPARATOR


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"
    file: Path | None = None


@dataclass
class ResolverConfig:
    """
    Complete configuration for the resolver.

    This combines all configuration sections.
    """

    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "ResolverConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            ResolverConfig instance

        Raises:
            ValueError: If the YAML is invalid or a section has unknown keys
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        try:
            resolution = ResolutionConfig(**(data.get("resolution") or {}))

            output_data = dict(data.get("output") or {})
            if "format" in output_data:
                output_data["format"] = OutputFormat(output_data["format"])
            output = OutputConfig(**output_data)

            logging_data = dict(data.get("logging") or {})
            # Convert file path string to Path if present
            if logging_data.get("file"):
                logging_data["file"] = Path(logging_data["file"])
            logging = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ValueError(f"Invalid configuration section in {config_path}: {e}") from e

        return cls(resolution=resolution, output=output, logging=logging)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "resolution": self.resolution.__dict__,
            "output": {
                k: v.value if isinstance(v, Enum) else v for k, v in self.output.__dict__.items()
            },
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            TASKORDER_ROOT: Root task id (default: 1)
            TASKORDER_OUTPUT_FORMAT: text or json (default: text)
            LOG_LEVEL: Logging level (default: INFO)
            LOG_FORMAT: console or json (default: console)

        Returns:
            ResolverConfig instance

        Raises:
            ValueError: If TASKORDER_ROOT is not an integer or the format is unknown
        """
        root = os.environ.get("TASKORDER_ROOT", str(DEFAULT_ROOT_ID))
        try:
            root_id = int(root)
        except ValueError as e:
            raise ValueError(f"TASKORDER_ROOT must be an integer, got {root!r}") from e

        return cls(
            resolution=ResolutionConfig(root_id=root_id),
            output=OutputConfig(
                format=OutputFormat(os.environ.get("TASKORDER_OUTPUT_FORMAT", "text")),
            ),
            logging=LoggingConfig(
                level=os.environ.get("LOG_LEVEL", "INFO"),
                format=os.environ.get("LOG_FORMAT", "console"),
            ),
        )


def load_config(config_file: Path | None = None) -> ResolverConfig:
    """
    Load configuration from file or environment variables.

    Args:
        config_file: Optional path to YAML config file

    Returns:
        ResolverConfig instance

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        return ResolverConfig.from_file(config_file)
    return ResolverConfig.from_env()
