"""
Threshold evaluation for Lighthouse results.

Every audited URL is checked against every configured category before a
verdict is returned, so a single report lists all violations. Violations
are collected as ``ScoreFailure`` records and rendered to text last.
"""

from __future__ import annotations

from typing import List, Sequence

import structlog

from lighthouse_gate.config.thresholds import ThresholdConfig
from lighthouse_gate.errors import MalformedResultsError
from lighthouse_gate.models import (
    AuditResult,
    Category,
    EvaluationOutcome,
    ResultsPayload,
    ScoreFailure,
    build_failure_report,
)

logger = structlog.get_logger(__name__)

NO_SCORES_MESSAGE = "All scores were missing from Lighthouse result."

__all__ = [
    "NO_SCORES_MESSAGE",
    "build_failure_report",
    "evaluate",
    "find_failures",
    "format_failure",
    "format_number",
]


def format_number(value: float) -> str:
    """Render a score or threshold without a trailing ``.0`` when integral."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def format_failure(failure: ScoreFailure) -> str:
    return (
        f"{failure.url}: {failure.category.display_name}: "
        f"minimum score: {format_number(failure.threshold)}, "
        f"actual score: {format_number(failure.score)}"
    )


def find_failures(config: ThresholdConfig, results: Sequence[AuditResult]) -> List[ScoreFailure]:
    """
    Compare every result against every configured threshold.

    Args:
        config: Thresholds to enforce
        results: Audited pages, in producer order

    Returns:
        Score failures ordered by result, then by category
    """
    thresholds = config.configured_thresholds()
    failures: List[ScoreFailure] = []

    for result in results:
        if result.runtime_error:
            logger.warning("Lighthouse reported a runtime error", url=result.url, error=result.runtime_error)

        for category in Category:
            threshold = thresholds.get(category)
            if threshold is None:
                continue
            score = result.score_for(category)
            if score is None:
                continue
            if score < threshold:
                failures.append(ScoreFailure(url=result.url, category=category, threshold=threshold, score=score))

    return failures


def evaluate(config: ThresholdConfig, payload: ResultsPayload) -> EvaluationOutcome:
    """
    Decide whether a Lighthouse run satisfies the configured thresholds.

    With no thresholds configured the run fails with the payload's own
    runtime error, or with a fixed message when there is none.

    Raises:
        MalformedResultsError: If thresholds are set but the payload has no result list
    """
    if not config.has_thresholds:
        message = payload.runtime_error or NO_SCORES_MESSAGE
        logger.info("No minimum scores configured", reason=message)
        return EvaluationOutcome.failed([message])

    if payload.data is None:
        raise MalformedResultsError("Lighthouse results are missing the 'data' list")

    failures = find_failures(config, payload.data)
    if not failures:
        logger.info("All Lighthouse scores meet the configured minimums", results=len(payload.data))
        return EvaluationOutcome.passed()

    messages = [format_failure(failure) for failure in failures]
    for message in messages:
        logger.info("Minimum score not met", failure=message)
    return EvaluationOutcome.failed(messages, failures)
