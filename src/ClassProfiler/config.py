# ============================================================================
# ClassProfiler - Configuration Management
#
# Purpose: Load and manage configuration from YAML and env vars
# Inputs: YAML files, environment variables
# Outputs: Config model with all settings
# Dependencies: pyyaml, pydantic, pathlib
# Usage: config = Config.from_default() or Config.from_yaml("path.yaml")
#
# Changelog:
#   2026-09-02: Initial configuration system
#   2026-09-14: Added AllocationConfig (clamp_bytes, start_tracemalloc)
#   2026-09-21: Added SinkConfig for file rotation and fan-out to stdout
#   2026-10-03: Process-wide active config (get_config/set_config)
# ============================================================================

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError

from ClassProfiler.errors import ConfigurationError


class LoggingConfig(BaseModel):
    """Module logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TimingConfig(BaseModel):
    """Timing collector configuration."""

    mode: Literal["cumulative", "last"] = "cumulative"
    alias_prefix: str = "_timed_"


class AllocationConfig(BaseModel):
    """Allocation collector configuration."""

    alias_prefix: str = "_allocated_"
    # Heap-growth deltas are reported raw (may be negative) unless clamped
    clamp_bytes: bool = False
    start_tracemalloc: bool = True


class ReportConfig(BaseModel):
    """Report formatting configuration."""

    precision: int = 6
    separator: str = " | "


class SinkConfig(BaseModel):
    """Default profiler sink configuration."""

    type: Literal["stdout", "file", "both"] = "stdout"
    level: str = "WARNING"
    path: str = "profiler.log"
    max_bytes: int = 1_048_576
    backup_count: int = 0


class Config(BaseModel):
    """Root configuration object."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    allocation: AllocationConfig = Field(default_factory=AllocationConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    sink: SinkConfig = Field(default_factory=SinkConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """
        Load configuration from a YAML file with environment variable overrides.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file contents fail validation
        """
        yaml_path = Path(path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}

        data = cls._apply_env_overrides(data)

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}", details=str(e)) from e

    @classmethod
    def from_default(cls) -> "Config":
        """
        Load configuration from the default config file.

        Returns:
            Config instance
        """
        package_root = Path(__file__).parent.parent.parent
        default_config = package_root / "configs" / "default.yaml"

        if default_config.exists():
            return cls.from_yaml(str(default_config))
        return cls(**cls._apply_env_overrides({}))

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern:
        CLASSPROFILER_<SECTION>_<KEY>=value

        Examples:
            CLASSPROFILER_TIMING_MODE=last          → data["timing"]["mode"]
            CLASSPROFILER_SINK_MAX_BYTES=2048       → data["sink"]["max_bytes"]

        Args:
            data: Configuration dictionary

        Returns:
            Updated configuration dictionary
        """
        prefix = "CLASSPROFILER_"
        sections = list(cls.model_fields)

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(prefix):
                continue

            remainder = env_key[len(prefix) :].lower()
            for section in sorted(sections, key=len, reverse=True):
                section_prefix = section + "_"
                if not remainder.startswith(section_prefix):
                    continue
                field = remainder[len(section_prefix) :]
                section_data = data.setdefault(section, {})
                if isinstance(section_data, dict):
                    section_data[field] = cls._parse_env_value(env_value)
                break

        return data

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """
        Parse environment variable value to appropriate type.

        Args:
            value: String value from environment

        Returns:
            Parsed value (str, int, float, or bool)
        """
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value


_ACTIVE_CONFIG: Optional[Config] = None


def get_config() -> Config:
    """Return the process-wide active config, loading defaults on first use."""
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = Config.from_default()
    return _ACTIVE_CONFIG


def set_config(config: Optional[Config]) -> None:
    """Replace the active config. Passing None reloads defaults on next access."""
    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = config
