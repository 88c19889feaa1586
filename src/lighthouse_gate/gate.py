"""
End-to-end gate run: read inputs, evaluate, report.
"""

from __future__ import annotations

from typing import Optional

import structlog

from lighthouse_gate.config.config import GateSettings
from lighthouse_gate.config.thresholds import RESULTS_INPUT, normalize
from lighthouse_gate.errors import GateError
from lighthouse_gate.evaluator import evaluate
from lighthouse_gate.inputs import InputProvider, read_raw_inputs
from lighthouse_gate.models import EvaluationOutcome
from lighthouse_gate.reporting import StatusReporter, write_status_report
from lighthouse_gate.results import load_results

logger = structlog.get_logger(__name__)


def run_gate(
    provider: InputProvider,
    reporter: StatusReporter,
    settings: Optional[GateSettings] = None,
) -> Optional[EvaluationOutcome]:
    """
    Run the Lighthouse gate once.

    Structural errors (bad thresholds, unreadable results) are reported
    verbatim. Score violations are reported as one failure report.

    Args:
        provider: Source of the action inputs
        reporter: Receives the failure explanation, if any
        settings: Gate settings; defaults are used when omitted

    Returns:
        The evaluation outcome, or None when the run aborted on a structural error
    """
    settings = settings or GateSettings()

    try:
        raw_inputs = read_raw_inputs(provider)
        config = normalize(raw_inputs)
        payload = load_results(raw_inputs[RESULTS_INPUT], config.output_directory, settings.report.results_filename)
        outcome = evaluate(config, payload)
    except GateError as e:
        logger.error("Lighthouse gate aborted", error_type=type(e).__name__, error=str(e))
        reporter.set_failed(str(e))
        return None

    if outcome.report is not None:
        logger.info("Lighthouse gate failed", failures=len(outcome.messages))
        reporter.set_failed(outcome.report)
    else:
        logger.info("Lighthouse gate passed")

    if config.output_directory is not None and settings.report.write_status_report:
        try:
            write_status_report(config.output_directory, outcome, settings.report.status_filename)
        except OSError as e:
            logger.error("Could not write status report", output_directory=str(config.output_directory), error=str(e))
            reporter.set_failed(f"Could not write status report to {config.output_directory}: {e}")

    return outcome
