"""Gate settings and threshold configuration."""

from __future__ import annotations

from .config import GateSettings, MonitoringConfig, ReportConfig, find_config_file, load_settings
from .thresholds import (
    OUTPUT_DIRECTORY_INPUT,
    RESULTS_INPUT,
    THRESHOLD_INPUTS,
    ThresholdConfig,
    normalize,
    parse_threshold,
)

__all__ = [
    "GateSettings",
    "MonitoringConfig",
    "ReportConfig",
    "find_config_file",
    "load_settings",
    "ThresholdConfig",
    "THRESHOLD_INPUTS",
    "RESULTS_INPUT",
    "OUTPUT_DIRECTORY_INPUT",
    "normalize",
    "parse_threshold",
]
