"""Minimum score thresholds and the normalization of raw action inputs.

Each threshold is tri-state: ``None`` when the input was not provided, or
the parsed number otherwise. A threshold of ``0`` is a real threshold.
"""

from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Dict, Mapping, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lighthouse_gate.errors import InvalidConfigurationError
from lighthouse_gate.models import Category

logger = structlog.get_logger(__name__)

# Input names as declared by the action.
THRESHOLD_INPUTS: Dict[Category, str] = {
    Category.ACCESSIBILITY: "minAccessibilityScore",
    Category.BEST_PRACTICES: "minBestPracticesScore",
    Category.PERFORMANCE: "minPerformanceScore",
    Category.PROGRESSIVE_WEB_APP: "minProgressiveWebAppScore",
    Category.SEO: "minSeoScore",
}
RESULTS_INPUT = "lighthouseCheckResults"
OUTPUT_DIRECTORY_INPUT = "outputDirectory"

# Plain ASCII decimal: no exponent, digit separators or non-ASCII digits
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")

_THRESHOLD_FIELDS: Dict[Category, str] = {
    Category.ACCESSIBILITY: "min_accessibility_score",
    Category.BEST_PRACTICES: "min_best_practices_score",
    Category.PERFORMANCE: "min_performance_score",
    Category.PROGRESSIVE_WEB_APP: "min_progressive_web_app_score",
    Category.SEO: "min_seo_score",
}


class ThresholdConfig(BaseModel):
    """Minimum scores to enforce, plus where the runner keeps its reports."""

    model_config = ConfigDict(frozen=True)

    min_accessibility_score: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    min_best_practices_score: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    min_performance_score: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    min_progressive_web_app_score: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    min_seo_score: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    output_directory: Optional[Path] = None

    def threshold_for(self, category: Category) -> Optional[float]:
        return getattr(self, _THRESHOLD_FIELDS[category])

    def configured_thresholds(self) -> Dict[Category, float]:
        """Thresholds that were set, in category order."""
        thresholds: Dict[Category, float] = {}
        for category in Category:
            value = self.threshold_for(category)
            if value is not None:
                thresholds[category] = value
        return thresholds

    @property
    def has_thresholds(self) -> bool:
        return any(self.threshold_for(category) is not None for category in Category)


def _blank_to_none(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def parse_threshold(input_name: str, raw: Optional[str]) -> Optional[float]:
    """
    Parse one threshold input.

    Args:
        input_name: Action input name, used in error messages
        raw: Raw string value; None or blank means "not configured"

    Returns:
        The threshold, or None when not configured

    Raises:
        InvalidConfigurationError: If the value is not a finite, non-negative number
    """
    value = _blank_to_none(raw)
    if value is None:
        return None
    try:
        threshold = float(value)
    except ValueError as e:
        raise InvalidConfigurationError(f"{input_name} must be a number, got {raw!r}") from e
    if not math.isfinite(threshold):
        raise InvalidConfigurationError(f"{input_name} must be a finite number, got {raw!r}")
    if not _DECIMAL_PATTERN.fullmatch(value):
        raise InvalidConfigurationError(f"{input_name} must be a plain decimal number, got {raw!r}")
    if threshold < 0:
        raise InvalidConfigurationError(f"{input_name} must not be negative, got {raw!r}")
    return threshold


def normalize(raw_fields: Mapping[str, str]) -> ThresholdConfig:
    """Convert raw action inputs into a typed ThresholdConfig."""
    values: Dict[str, object] = {}
    for category, input_name in THRESHOLD_INPUTS.items():
        values[_THRESHOLD_FIELDS[category]] = parse_threshold(input_name, raw_fields.get(input_name))

    output_directory = _blank_to_none(raw_fields.get(OUTPUT_DIRECTORY_INPUT))
    values["output_directory"] = Path(output_directory) if output_directory else None

    try:
        config = ThresholdConfig(**values)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid threshold configuration: {e}") from e

    logger.debug(
        "Inputs normalized",
        thresholds={category.value: value for category, value in config.configured_thresholds().items()},
        output_directory=str(config.output_directory) if config.output_directory else None,
    )
    return config
