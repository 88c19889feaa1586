"""Unit tests for status reporters and the status report file."""

import io
import json

from lighthouse_gate.models import Category, EvaluationOutcome, ScoreFailure
from lighthouse_gate.reporting import (
    ActionsStatusReporter,
    ConsoleStatusReporter,
    escape_command_data,
    write_status_report,
)
from rich.console import Console


class TestActionsStatusReporter:
    """Test the GitHub Actions workflow-command reporter."""

    def test_initial_state(self):
        """Test a fresh reporter."""
        reporter = ActionsStatusReporter(io.StringIO())

        assert reporter.exit_code == 0
        assert reporter.failure_messages == []

    def test_set_failed_writes_error_command(self):
        """Test that a failure is written as an error command."""
        stream = io.StringIO()
        reporter = ActionsStatusReporter(stream)

        reporter.set_failed("Minimum score requirements failed:\nhttps://a.test: SEO: minimum score: 90, actual score: 10")

        assert reporter.exit_code == 1
        assert stream.getvalue() == (
            "::error::Minimum score requirements failed:%0Ahttps://a.test: SEO: minimum score: 90, actual score: 10\n"
        )

    def test_multiple_failures_are_kept(self):
        """Test that every failure is kept."""
        reporter = ActionsStatusReporter(io.StringIO())

        reporter.set_failed("first")
        reporter.set_failed("second")

        assert reporter.failure_messages == ["first", "second"]

    def test_escape_command_data(self):
        """Test escaping of workflow command data."""
        assert escape_command_data("100%\r\ndone") == "100%25%0D%0Adone"


class TestConsoleStatusReporter:
    """Test the terminal reporter."""

    def test_set_failed_prints_message(self):
        """Test that the console reporter prints the failure."""
        console = Console(file=io.StringIO(), width=120, color_system=None)
        reporter = ConsoleStatusReporter(console)

        reporter.set_failed("https://a.test: SEO: minimum score: 90, actual score: 10")

        output = console.file.getvalue()
        assert reporter.exit_code == 1
        assert "https://a.test: SEO: minimum score: 90, actual score: 10" in output
        assert "Lighthouse Gate Failed" in output

    def test_brackets_are_not_markup(self):
        """Test that brackets in messages are printed literally."""
        console = Console(file=io.StringIO(), width=120, color_system=None)

        ConsoleStatusReporter(console).set_failed("[red]literal[/red]")

        assert "[red]literal[/red]" in console.file.getvalue()


class TestWriteStatusReport:
    """Test persisting the verdict to the output directory."""

    def test_failure_report(self, tmp_path):
        """Test the status file for a failing outcome."""
        failure = ScoreFailure(url="https://a.test", category=Category.PERFORMANCE, threshold=95, score=90)
        outcome = EvaluationOutcome.failed(["https://a.test: Performance: minimum score: 95, actual score: 90"], [failure])

        path = write_status_report(tmp_path, outcome)

        assert path == tmp_path / "lighthouse-gate-status.json"
        assert json.loads(path.read_text()) == {
            "status": "fail",
            "messages": ["https://a.test: Performance: minimum score: 95, actual score: 90"],
            "failures": [{"url": "https://a.test", "category": "performance", "threshold": 95, "score": 90}],
        }

    def test_pass_report_custom_filename(self, tmp_path):
        """Test the status file for a pass with a custom name."""
        path = write_status_report(tmp_path / "nested", EvaluationOutcome.passed(), filename="gate.json")

        assert path.exists()
        assert json.loads(path.read_text()) == {"status": "pass", "messages": [], "failures": []}
