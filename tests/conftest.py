"""
Test configuration for lighthouse-gate.

Provides factories for Lighthouse results payloads and keeps every test
isolated from action inputs set in the surrounding environment.
"""

import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional

import pytest
import structlog
from lighthouse_gate.models import AuditResult, ResultsPayload

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove action inputs and gate settings inherited from the host."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "LIGHTHOUSE_GATE_")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    monkeypatch.delenv("GITHUB_RUN_ID", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging so streams never outlive a test."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
            handler.close()


# ============================================================================
# Payload Fixtures
# ============================================================================


@pytest.fixture
def make_result() -> Callable[..., AuditResult]:
    """Build an AuditResult from keyword scores (payload key names)."""

    def _make(url: str = "https://example.com", runtime_error: Optional[str] = None, **scores: Any) -> AuditResult:
        return AuditResult.model_validate({"url": url, "scores": scores, "runtimeError": runtime_error})

    return _make


@pytest.fixture
def make_payload() -> Callable[..., ResultsPayload]:
    """Build a ResultsPayload from AuditResults."""

    def _make(*results: AuditResult, runtime_error: Optional[str] = None) -> ResultsPayload:
        return ResultsPayload(data=list(results), runtime_error=runtime_error)

    return _make


@pytest.fixture
def sample_results() -> Dict[str, Any]:
    """A results object as emitted by the Lighthouse runner."""
    data: List[Dict[str, Any]] = [
        {
            "url": "https://www.example.com/",
            "emulatedFormFactor": "mobile",
            "localReport": "/tmp/lighthouse/www_example_com_mobile.html",
            "runtimeError": None,
            "scores": {
                "accessibility": 92,
                "bestPractices": 100,
                "performance": 71,
                "progressiveWebApp": 54,
                "seo": 98,
            },
        },
        {
            "url": "https://www.example.com/about",
            "emulatedFormFactor": "mobile",
            "localReport": "/tmp/lighthouse/www_example_com_about_mobile.html",
            "runtimeError": None,
            "scores": {
                "accessibility": 85,
                "bestPractices": 93,
                "performance": 88,
                "progressiveWebApp": 54,
                "seo": 100,
            },
        },
    ]
    return {"code": "SUCCESS", "data": data}


@pytest.fixture
def sample_results_json(sample_results: Dict[str, Any]) -> str:
    return json.dumps(sample_results)


class RecordingReporter:
    """StatusReporter test double that keeps every failure message."""

    def __init__(self) -> None:
        self.exit_code = 0
        self.messages: List[str] = []

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self.messages.append(message)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
