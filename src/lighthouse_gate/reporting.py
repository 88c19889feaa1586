"""
Reporting of the gate verdict to the host process.

A failed verdict is handed to a ``StatusReporter`` as a single explanation
string. The verdict can also be persisted as JSON next to the Lighthouse
reports.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Protocol, TextIO

import structlog
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from lighthouse_gate.models import EvaluationOutcome
from lighthouse_gate.utils.atomic import atomic_write_json

logger = structlog.get_logger(__name__)


class StatusReporter(Protocol):
    """Marks the current invocation as failed."""

    exit_code: int

    def set_failed(self, message: str) -> None:
        """Record a failure, with ``message`` as the explanation."""
        ...


def escape_command_data(message: str) -> str:
    """Escape a message for use in a GitHub Actions workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsStatusReporter:
    """Reports failures through the ``::error::`` workflow command."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self.exit_code = 0
        self.failure_messages: list[str] = []

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.failure_messages.append(message)
        stream = self._stream or sys.stdout
        stream.write(f"::error::{escape_command_data(message)}\n")
        stream.flush()


class ConsoleStatusReporter:
    """Reports failures to a terminal."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self.exit_code = 0

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.console.print(Panel(Text(message), title="Lighthouse Gate Failed", border_style="red"))


def write_status_report(
    output_directory: Path,
    outcome: EvaluationOutcome,
    filename: str = "lighthouse-gate-status.json",
) -> Path:
    """
    Write ``outcome`` as JSON into ``output_directory``.

    Returns:
        Path of the written report

    Raises:
        OSError: If the report cannot be written
    """
    path = Path(output_directory) / filename
    atomic_write_json(path, outcome.to_dict())
    logger.info("Status report written", path=str(path), status=outcome.status.value)
    return path
