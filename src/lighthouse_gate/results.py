"""Decoding of the Lighthouse results payload."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import ValidationError

from lighthouse_gate.errors import MalformedResultsError
from lighthouse_gate.models import ResultsPayload

logger = structlog.get_logger(__name__)


def _validate(data: Any, source: str) -> ResultsPayload:
    try:
        return ResultsPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedResultsError(f"Lighthouse results from {source} have an unexpected shape: {e}") from e


def parse_results(raw: str, source: str = "lighthouseCheckResults") -> ResultsPayload:
    """
    Decode a JSON-encoded results object.

    Raises:
        MalformedResultsError: If ``raw`` is not JSON or not a results object
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedResultsError(f"{source} is not valid JSON: {e}") from e
    return _validate(data, source)


def read_results_text(path: Path) -> str:
    """
    Read a results file as UTF-8 text.

    Raises:
        MalformedResultsError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise MalformedResultsError(f"Lighthouse results file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise MalformedResultsError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise MalformedResultsError(f"Could not read Lighthouse results file {path}: {e}") from e


def read_results_file(path: Path) -> ResultsPayload:
    """
    Read a results file written by the Lighthouse runner.

    The runner writes either the full results object or the bare list of
    audited pages; the latter is treated as the object's ``data``.
    """
    text = read_results_text(path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResultsError(f"{path} is not valid JSON: {e}") from e
    if isinstance(data, list):
        data = {"data": data}
    return _validate(data, str(path))


def load_results(
    raw_results: str,
    output_directory: Optional[Path] = None,
    results_filename: str = "results.json",
) -> ResultsPayload:
    """
    Load results from the inline input, falling back to the output directory.

    Raises:
        MalformedResultsError: If neither source provides a usable payload
    """
    if raw_results.strip():
        return parse_results(raw_results)

    if output_directory is not None:
        path = output_directory / results_filename
        logger.info("No inline results given, reading results file", path=str(path))
        return read_results_file(path)

    raise MalformedResultsError("lighthouseCheckResults is required when outputDirectory is not set")
