"""
lighthouse-gate - fail CI runs when Lighthouse scores drop below minimums.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import GateSettings, ThresholdConfig, normalize
from .errors import GateError, InvalidConfigurationError, MalformedResultsError
from .evaluator import evaluate
from .gate import run_gate
from .models import AuditResult, Category, EvaluationOutcome, GateStatus, ResultsPayload, ScoreFailure

__all__ = [
    "__version__",
    "AuditResult",
    "Category",
    "EvaluationOutcome",
    "GateError",
    "GateSettings",
    "GateStatus",
    "InvalidConfigurationError",
    "MalformedResultsError",
    "ResultsPayload",
    "ScoreFailure",
    "ThresholdConfig",
    "evaluate",
    "normalize",
    "run_gate",
]
