"""
Configuration management for lighthouse-gate using Pydantic.

These settings govern how the gate runs (logging, report files). The
thresholds being enforced are action inputs and live in
``lighthouse_gate.config.thresholds``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lighthouse_gate.errors import InvalidConfigurationError

# --- Setup Logging ---
log = logging.getLogger(__name__)

CONFIG_FILENAMES = ("lighthouse-gate.yaml", "lighthouse-gate.yml")

# --- Nested Configuration Models ---


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING)."
    )
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )
    json_logs: bool = Field(default=False, description="Render console logs as JSON lines.")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None or v == "":
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


class ReportConfig(BaseModel):
    """Configuration for files read from and written to the output directory."""

    write_status_report: bool = Field(
        default=True, description="Write the gate verdict as JSON into the output directory."
    )
    status_filename: str = Field(default="lighthouse-gate-status.json", min_length=1)
    results_filename: str = Field(
        default="results.json",
        min_length=1,
        description="Results file read from the output directory when no inline results are given.",
    )


# --- Main Configuration Class ---


class GateSettings(BaseSettings):
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    model_config = SettingsConfigDict(env_prefix="LIGHTHOUSE_GATE_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> GateSettings:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls()
        if not isinstance(yaml_data, dict):
            raise InvalidConfigurationError(f"Configuration file must contain a mapping: {path}")
        try:
            return cls(**yaml_data)
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid configuration in {path}: {e}") from e


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for name in CONFIG_FILENAMES:
        path = current_dir / name
        if path.is_file():
            return path
    return None


def load_settings(config_path: Path | None = None) -> GateSettings:
    """
    Load settings from ``config_path``, a config file in the working
    directory, or the environment alone, in that order.
    """
    path = config_path or find_config_file()
    if path is None:
        try:
            return GateSettings()
        except ValidationError as e:
            raise InvalidConfigurationError(f"Invalid gate settings in environment: {e}") from e
    log.info("Loading configuration from: %s", path)
    return GateSettings.from_yaml(path)
