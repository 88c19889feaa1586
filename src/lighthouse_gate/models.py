"""
Data structures for Lighthouse results and gate outcomes.

The results payload is produced by an external Lighthouse runner and is
validated with Pydantic. Everything the gate derives from it is a frozen
dataclass so that an evaluation can be compared and replayed as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

# ============================================================================
# Enums
# ============================================================================


class Category(Enum):
    """Lighthouse audit categories, in the order failures are reported."""

    ACCESSIBILITY = "accessibility"
    BEST_PRACTICES = "bestPractices"
    PERFORMANCE = "performance"
    PROGRESSIVE_WEB_APP = "progressiveWebApp"
    SEO = "seo"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: Dict[Category, str] = {
    Category.ACCESSIBILITY: "Accessibility",
    Category.BEST_PRACTICES: "Best Practices",
    Category.PERFORMANCE: "Performance",
    Category.PROGRESSIVE_WEB_APP: "Progressive Web App",
    Category.SEO: "SEO",
}


class GateStatus(Enum):
    """Verdict of a gate evaluation."""

    PASS = "pass"
    FAIL = "fail"


# ============================================================================
# Results payload
# ============================================================================


class AuditResult(BaseModel):
    """Lighthouse scores for a single audited URL."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    url: str = Field(min_length=1)
    # JSON booleans are rejected, not read as 0 or 1
    scores: Dict[str, Optional[Union[StrictInt, StrictFloat]]] = Field(default_factory=dict)
    runtime_error: Optional[str] = Field(default=None, alias="runtimeError")

    @field_validator("scores", mode="before")
    @classmethod
    def missing_scores_to_empty(cls, v: Any) -> Any:
        # Pages that hit a runtime error may carry "scores": null
        return {} if v is None else v

    def score_for(self, category: Category) -> Optional[float]:
        """Return the score for ``category``, or None when it was not scored."""
        return self.scores.get(category.value)


class ResultsPayload(BaseModel):
    """
    The results object emitted by the Lighthouse runner.

    ``data`` is None when the runner produced no result list at all, which
    is distinct from an empty list of audited pages.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    data: Optional[List[AuditResult]] = None
    runtime_error: Optional[str] = Field(default=None, alias="runtimeError")


# ============================================================================
# Evaluation outcome
# ============================================================================

FAILURE_REPORT_HEADER = "Minimum score requirements failed:"


def build_failure_report(messages: Sequence[str]) -> str:
    """Join failure messages under the fixed report header."""
    return FAILURE_REPORT_HEADER + "\n" + "\n".join(messages)


@dataclass(frozen=True)
class ScoreFailure:
    """A single category score that fell below its minimum."""

    url: str
    category: Category
    threshold: float
    score: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "url": self.url,
            "category": self.category.value,
            "threshold": self.threshold,
            "score": self.score,
        }


@dataclass(frozen=True)
class EvaluationOutcome:
    """
    Result of evaluating a results payload against the configured thresholds.

    Attributes:
        status: PASS or FAIL
        messages: Human-readable failure descriptions, in report order
        failures: Structured score violations behind ``messages``. Empty when
            the run failed for a reason other than a score (no thresholds,
            runtime error).
    """

    status: GateStatus
    messages: Tuple[str, ...] = ()
    failures: Tuple[ScoreFailure, ...] = ()

    @classmethod
    def passed(cls) -> EvaluationOutcome:
        return cls(status=GateStatus.PASS)

    @classmethod
    def failed(cls, messages: List[str], failures: Optional[List[ScoreFailure]] = None) -> EvaluationOutcome:
        return cls(status=GateStatus.FAIL, messages=tuple(messages), failures=tuple(failures or ()))

    @property
    def is_failure(self) -> bool:
        return self.status is GateStatus.FAIL

    @property
    def report(self) -> Optional[str]:
        """Failure report handed to the status reporter, or None on pass."""
        if not self.is_failure:
            return None
        return build_failure_report(self.messages)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "status": self.status.value,
            "messages": list(self.messages),
            "failures": [failure.to_dict() for failure in self.failures],
        }
