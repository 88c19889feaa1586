"""
Structural errors raised by the Lighthouse gate.

Score violations are never raised; they are collected as ``ScoreFailure``
records by the evaluator. Only inputs that cannot be interpreted at all
end up here.
"""

from __future__ import annotations


class GateError(Exception):
    """Base class for errors that abort a gate run."""

    pass


class InvalidConfigurationError(GateError, ValueError):
    """Raised when a threshold or settings value cannot be used."""

    pass


class MalformedResultsError(GateError, ValueError):
    """Raised when the Lighthouse results payload has an unexpected shape."""

    pass
