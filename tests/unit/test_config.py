"""Unit tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from src.taskorder.config import (
    LoggingConfig,
    OutputConfig,
    ResolutionConfig,
    ResolverConfig,
    load_config,
)
from src.taskorder.core.exporter import OutputFormat


class TestDefaults:
    """Test default configuration values."""

    def test_resolution_defaults(self):
        """Default root is task 1 and '#' starts comments."""
        config = ResolutionConfig()

        assert config.root_id == 1
        assert config.comment_prefix == "#"

    def test_output_defaults(self):
        """Default output is space-separated text."""
        config = OutputConfig()

        assert config.format == OutputFormat.TEXT
        assert config.separator == " "

    def test_logging_defaults(self):
        """Default logging is INFO on the console."""
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.format == "console"
        assert config.file is None

    def test_resolver_config_sections(self):
        """ResolverConfig holds all sections."""
        config = ResolverConfig()

        assert isinstance(config.resolution, ResolutionConfig)
        assert isinstance(config.output, OutputConfig)
        assert isinstance(config.logging, LoggingConfig)


class TestFromFile:
    """Test YAML loading."""

    def test_from_file(self, tmp_path):
        """All sections are read."""
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.dump(
                {
                    "resolution": {"root_id": 3, "comment_prefix": ";"},
                    "output": {"format": "json", "separator": ","},
                    "logging": {"level": "DEBUG", "format": "json", "file": "logs/run.log"},
                }
            )
        )

        config = ResolverConfig.from_file(path)

        assert config.resolution.root_id == 3
        assert config.resolution.comment_prefix == ";"
        assert config.output.format == OutputFormat.JSON
        assert config.output.separator == ","
        assert config.logging.level == "DEBUG"
        assert config.logging.file == Path("logs/run.log")

    def test_partial_file(self, tmp_path):
        """Missing sections fall back to defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("resolution:\n  root_id: 2\n")

        config = ResolverConfig.from_file(path)

        assert config.resolution.root_id == 2
        assert config.output.format == OutputFormat.TEXT

    def test_empty_file(self, tmp_path):
        """An empty file yields defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert ResolverConfig.from_file(path).resolution.root_id == 1

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML raises ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("resolution: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            ResolverConfig.from_file(path)

    def test_non_mapping(self, tmp_path):
        """A top-level list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="expected dictionary"):
            ResolverConfig.from_file(path)

    def test_null_sections(self, tmp_path):
        """Empty section headers fall back to defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("resolution:\noutput:\nlogging:\n")

        config = ResolverConfig.from_file(path)

        assert config.resolution.root_id == 1
        assert config.output.format == OutputFormat.TEXT
        assert config.logging.level == "INFO"

    def test_unknown_key(self, tmp_path):
        """Unknown section keys raise ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("resolution:\n  start: 3\n")

        with pytest.raises(ValueError, match="Invalid configuration section"):
            ResolverConfig.from_file(path)

    def test_round_trip(self, tmp_path):
        """to_file output loads back to the same values."""
        path = tmp_path / "nested" / "config.yaml"
        config = ResolverConfig(
            resolution=ResolutionConfig(root_id=4),
            output=OutputConfig(format=OutputFormat.JSON),
        )

        config.to_file(path)
        loaded = ResolverConfig.from_file(path)

        assert loaded.resolution.root_id == 4
        assert loaded.output.format == OutputFormat.JSON
        assert "file" not in yaml.safe_load(path.read_text())["logging"]


class TestFromEnv:
    """Test environment loading."""

    def test_defaults(self, monkeypatch):
        """Unset variables give defaults."""
        for name in ("TASKORDER_ROOT", "TASKORDER_OUTPUT_FORMAT", "LOG_LEVEL", "LOG_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        config = ResolverConfig.from_env()

        assert config.resolution.root_id == 1
        assert config.output.format == OutputFormat.TEXT
        assert config.logging.level == "INFO"

    def test_values(self, monkeypatch):
        """Variables override defaults."""
        monkeypatch.setenv("TASKORDER_ROOT", "5")
        monkeypatch.setenv("TASKORDER_OUTPUT_FORMAT", "json")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("LOG_FORMAT", "json")

        config = ResolverConfig.from_env()

        assert config.resolution.root_id == 5
        assert config.output.format == OutputFormat.JSON
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_invalid_root(self, monkeypatch):
        """A non-integer root is rejected."""
        monkeypatch.setenv("TASKORDER_ROOT", "first")

        with pytest.raises(ValueError, match="TASKORDER_ROOT"):
            ResolverConfig.from_env()


class TestLoadConfig:
    """Test load_config."""

    def test_missing_file(self, tmp_path):
        """A named but missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_file(self, tmp_path):
        """A given file is loaded."""
        path = tmp_path / "config.yaml"
        path.write_text("resolution:\n  root_id: 7\n")

        assert load_config(path).resolution.root_id == 7

    def test_env(self, monkeypatch):
        """Without a file, the environment is used."""
        monkeypatch.setenv("TASKORDER_ROOT", "2")

        assert load_config().resolution.root_id == 2
