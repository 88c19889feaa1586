"""Command-line interface for lighthouse-gate."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click
import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lighthouse_gate import __version__
from lighthouse_gate.config.config import GateSettings, load_settings
from lighthouse_gate.config.thresholds import (
    OUTPUT_DIRECTORY_INPUT,
    RESULTS_INPUT,
    THRESHOLD_INPUTS,
    normalize,
)
from lighthouse_gate.errors import GateError, InvalidConfigurationError
from lighthouse_gate.evaluator import format_number
from lighthouse_gate.gate import run_gate
from lighthouse_gate.inputs import EnvironmentInputProvider, MappingInputProvider, read_raw_inputs
from lighthouse_gate.models import Category
from lighthouse_gate.observability import configure_logging
from lighthouse_gate.reporting import ActionsStatusReporter, ConsoleStatusReporter, StatusReporter
from lighthouse_gate.results import read_results_text

console = Console()
logger = structlog.get_logger(__name__)

# CLI option name -> category, in report order
_THRESHOLD_OPTIONS: Dict[str, Category] = {
    "min_accessibility": Category.ACCESSIBILITY,
    "min_best_practices": Category.BEST_PRACTICES,
    "min_performance": Category.PERFORMANCE,
    "min_progressive_web_app": Category.PROGRESSIVE_WEB_APP,
    "min_seo": Category.SEO,
}


def threshold_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add one ``--min-*`` option per category; each overrides its action input."""
    for option_name, category in reversed(list(_THRESHOLD_OPTIONS.items())):
        flag = "--" + option_name.replace("_", "-")
        func = click.option(
            flag,
            option_name,
            default=None,
            help=f"Minimum {category.display_name} score (overrides {THRESHOLD_INPUTS[category]}).",
        )(func)
    return func


def _build_provider(
    thresholds: Dict[str, Optional[str]],
    results: Optional[str] = None,
    output_directory: Optional[Path] = None,
) -> MappingInputProvider:
    overrides: Dict[str, Optional[str]] = {
        THRESHOLD_INPUTS[category]: thresholds.get(option_name) for option_name, category in _THRESHOLD_OPTIONS.items()
    }
    overrides[RESULTS_INPUT] = results
    overrides[OUTPUT_DIRECTORY_INPUT] = str(output_directory) if output_directory else None
    return MappingInputProvider(overrides, fallback=EnvironmentInputProvider())


def _in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Settings file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the settings file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], log_level: Optional[str]) -> None:
    """lighthouse-gate - fail CI runs when Lighthouse scores drop below minimums."""
    ctx.ensure_object(dict)
    try:
        settings = load_settings(config)
    except (InvalidConfigurationError, FileNotFoundError) as e:
        console.print(Text(f"Invalid configuration: {e}", style="red"))
        sys.exit(2)

    if log_level:
        settings = settings.model_copy(
            update={"monitoring": settings.monitoring.model_copy(update={"log_level": log_level})}
        )
    configure_logging(settings.monitoring)
    ctx.obj["settings"] = settings


@cli.command()
@threshold_options
@click.option(
    "--results-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read lighthouseCheckResults from this JSON file.",
)
@click.option(
    "--output-directory",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding Lighthouse reports (overrides outputDirectory).",
)
@click.pass_context
def check(
    ctx: click.Context,
    results_file: Optional[Path],
    output_directory: Optional[Path],
    **threshold_values: Optional[str],
) -> None:
    """Evaluate Lighthouse results against the minimum scores."""
    settings: GateSettings = ctx.obj["settings"]

    reporter: StatusReporter
    logger.debug("Running Lighthouse gate", github_actions=_in_github_actions())
    if _in_github_actions():
        reporter = ActionsStatusReporter()
    else:
        reporter = ConsoleStatusReporter(console)

    results = None
    if results_file:
        try:
            results = read_results_text(results_file)
        except GateError as e:
            logger.error("Could not read results file", path=str(results_file), error=str(e))
            reporter.set_failed(str(e))
            sys.exit(reporter.exit_code)

    provider = _build_provider(threshold_values, results, output_directory)
    outcome = run_gate(provider, reporter, settings)
    if outcome is not None and not outcome.is_failure:
        console.print(Panel("✅ All Lighthouse scores meet the configured minimums.", border_style="green"))

    if reporter.exit_code:
        sys.exit(reporter.exit_code)


@cli.command()
@threshold_options
def thresholds(**options: Optional[str]) -> None:
    """Show which minimum scores are configured."""
    provider = _build_provider(options)
    try:
        config = normalize(read_raw_inputs(provider))
    except GateError as e:
        console.print(Text(str(e), style="red"))
        sys.exit(1)

    table = Table(title="Minimum Scores")
    table.add_column("Category", style="cyan")
    table.add_column("Input", style="dim")
    table.add_column("Minimum", style="magenta")

    for category in Category:
        value = config.threshold_for(category)
        minimum = "unset" if value is None else format_number(value)
        table.add_row(category.display_name, THRESHOLD_INPUTS[category], minimum)

    console.print(table)
    if not config.has_thresholds:
        console.print("[yellow]No minimum scores configured; the gate will fail.[/yellow]")


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
