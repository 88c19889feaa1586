"""
Providers for named action inputs.

Only the normalization step reads inputs; the evaluator never touches the
host environment.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Protocol

from lighthouse_gate.config.thresholds import OUTPUT_DIRECTORY_INPUT, RESULTS_INPUT, THRESHOLD_INPUTS

ACTION_INPUTS = (*THRESHOLD_INPUTS.values(), RESULTS_INPUT, OUTPUT_DIRECTORY_INPUT)


class InputProvider(Protocol):
    """A source of string inputs, keyed by action input name."""

    def get_input(self, name: str) -> str:
        """Return the trimmed input value, or an empty string when unset."""
        ...


class EnvironmentInputProvider:
    """Reads inputs the way the GitHub Actions runner exposes them (``INPUT_<NAME>``)."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ if environ is not None else os.environ

    @staticmethod
    def variable_name(name: str) -> str:
        return f"INPUT_{name.replace(' ', '_').upper()}"

    def get_input(self, name: str) -> str:
        return self._environ.get(self.variable_name(name), "").strip()


class MappingInputProvider:
    """Serves inputs from a mapping, deferring unset names to ``fallback``."""

    def __init__(self, values: Mapping[str, Optional[str]], fallback: Optional[InputProvider] = None) -> None:
        self._values = dict(values)
        self._fallback = fallback

    def get_input(self, name: str) -> str:
        value = self._values.get(name)
        if value is None:
            return self._fallback.get_input(name) if self._fallback else ""
        return value.strip()


def read_raw_inputs(provider: InputProvider) -> Dict[str, str]:
    """Collect every action input from ``provider``."""
    return {name: provider.get_input(name) for name in ACTION_INPUTS}
