#!/usr/bin/env python3
"""
GitHub Action entry point for lighthouse-gate.

Reads the action inputs from the environment, evaluates the Lighthouse
results and exits non-zero when the run must be marked as failed.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import structlog
from lighthouse_gate.config import load_settings
from lighthouse_gate.errors import GateError
from lighthouse_gate.gate import run_gate
from lighthouse_gate.inputs import EnvironmentInputProvider
from lighthouse_gate.observability import configure_logging
from lighthouse_gate.reporting import ActionsStatusReporter

logger = structlog.get_logger(__name__)


def main() -> int:
    """Main entry point."""
    reporter = ActionsStatusReporter()

    config_path = os.getenv("LIGHTHOUSE_GATE_CONFIG")
    try:
        settings = load_settings(Path(config_path) if config_path else None)
    except (GateError, FileNotFoundError) as e:
        reporter.set_failed(str(e))
        return reporter.exit_code

    configure_logging(settings.monitoring)

    try:
        run_gate(EnvironmentInputProvider(), reporter, settings)
    except Exception as e:
        logger.error("Unhandled exception in main", error=str(e), exc_info=True)
        reporter.set_failed(str(e))

    return reporter.exit_code


if __name__ == "__main__":
    sys.exit(main())
