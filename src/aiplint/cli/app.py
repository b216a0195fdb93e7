# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing one-shot validation and report parsing."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..config.loader import load_config
from ..core.documents import TextDocument
from ..core.errors import ConfigError
from ..core.logging import ConsolePreferences, fail, info, ok, section, warn
from ..core.models import DocumentSettings
from ..diagnostics.sinks import ConsoleDiagnosticSink, DiagnosticSink, JsonDiagnosticSink
from ..orchestration.builder import build_enricher, build_linter, build_orchestrator
from ..orchestration.orchestrator import ValidationStatus
from ..parsers.render import render_reports
from ..parsers.report import parse_report

EXIT_CLEAN = 0
EXIT_PROBLEMS = 1
EXIT_CONFIG_ERROR = 2
STDIN_MARKER = "-"

PACKAGE_LOGGER = logging.getLogger("aiplint")

app = typer.Typer(
    name="aiplint",
    help="Run api-linter over protobuf files and report AIP findings as diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    """Route package log records to stderr, at debug level when ``verbose``."""

    if not getattr(PACKAGE_LOGGER, "_aiplint_configured", False):
        handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
        PACKAGE_LOGGER.addHandler(handler)
        setattr(PACKAGE_LOGGER, "_aiplint_configured", True)
    PACKAGE_LOGGER.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def check(
    file: Path = typer.Argument(..., metavar="FILE", help="Protobuf file to validate."),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Configuration file to load."),
    suggest: bool | None = typer.Option(
        None,
        "--suggest/--no-suggest",
        help="Request fix suggestions from the configured service.",
    ),
    max_problems: int | None = typer.Option(
        None,
        "--max-problems",
        min=0,
        help="Maximum number of findings sent for suggestions.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit LSP publishDiagnostics JSON."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colour output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline details to stderr."),
) -> None:
    """Validate FILE once and print its diagnostics."""
    _configure_logging(verbose)
    use_color = not no_color
    use_emoji = not no_emoji
    root = Path.cwd()

    try:
        config = load_config(root, config_file)
    except ConfigError as exc:
        fail(str(exc), use_emoji=use_emoji, use_color=use_color)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    if suggest is not None:
        config.suggestions.enabled = suggest
    if max_problems is not None:
        config.defaults = DocumentSettings(max_problems=max_problems)

    target = file.expanduser().resolve()
    if not target.is_file():
        raise typer.BadParameter(f"{file} is not a readable file", param_hint="FILE")
    document = TextDocument.from_path(target)

    sink: DiagnosticSink
    if as_json:
        sink = JsonDiagnosticSink(sys.stdout)
    else:
        section(f"api-linter {file}", use_color=use_color)
        sink = ConsoleDiagnosticSink(ConsolePreferences(color=use_color, emoji=use_emoji))

    orchestrator = build_orchestrator(
        config,
        sink,
        linter=build_linter(config.linter, cwd=root),
        enricher=build_enricher(config.suggestions),
    )
    with orchestrator:
        outcome = orchestrator.validate(document)

    if outcome.status in {ValidationStatus.LINTER_FAILED, ValidationStatus.CLEARED}:
        fail(f"api-linter failed: {outcome.error}", use_emoji=use_emoji, use_color=use_color)
        if outcome.error is not None and outcome.error.stderr and not as_json:
            info(outcome.error.stderr.strip(), use_emoji=use_emoji, use_color=use_color)
        raise typer.Exit(code=EXIT_PROBLEMS)

    count = len(outcome.diagnostics)
    if count == 0:
        if not as_json:
            ok(f"No problems found in {file}", use_emoji=use_emoji, use_color=use_color)
        raise typer.Exit(code=EXIT_CLEAN)
    if not as_json:
        noun = "problem" if count == 1 else "problems"
        warn(f"{count} {noun} found in {file}", use_emoji=use_emoji, use_color=use_color)
    raise typer.Exit(code=EXIT_PROBLEMS)


@app.command()
def parse(
    source: str = typer.Argument(
        STDIN_MARKER,
        metavar="[FILE|-]",
        help="Raw api-linter output to parse; '-' reads standard input.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit the parsed reports as JSON."),
) -> None:
    """Parse raw api-linter output and print the reports it contains."""
    if source == STDIN_MARKER:
        raw_text = sys.stdin.read()
    else:
        path = Path(source).expanduser()
        if not path.is_file():
            raise typer.BadParameter(f"{source} is not a readable file", param_hint="FILE")
        raw_text = path.read_text(encoding="utf-8")

    reports = parse_report(raw_text)
    if as_json:
        typer.echo(json.dumps([report.model_dump(mode="json") for report in reports], indent=2))
        return
    rendered = render_reports(reports)
    if rendered:
        typer.echo(rendered)


__all__ = ["app"]
