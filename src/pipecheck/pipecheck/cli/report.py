# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Render pipeline reports on the console."""

from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pipecheck.validation import PipelineReport, TaskRefsMissingError

console = Console()


def _title(report: PipelineReport) -> str:
    ns = f"{report.pipeline.namespace}/" if report.pipeline.namespace else ""
    return f"{ns}{report.name}"


def _hints(report: PipelineReport) -> List[str]:
    hints = []
    for error in report.errors.values():
        if isinstance(error, TaskRefsMissingError):
            for name, suggestion in sorted(error.suggestions.items()):
                hints.append(f"'{name}': did you mean {suggestion}?")
    return hints


def print_report_text(reports: List[PipelineReport], quiet: bool = False, out: Optional[Console] = None):
    """Print one pass/fail block per pipeline."""
    out = out or console
    for report in reports:
        if report.verified:
            if not quiet:
                out.print(Text(f"{_title(report)} verified!", style="green"))
            continue

        heading = Text(f"{_title(report)} has the following errors", style="yellow")
        if report.pipeline.source:
            heading.append(f" ({report.pipeline.source})", style="dim")
        out.print(heading)
        for section, error in report.errors.items():
            out.print(Text(f"{section} error", style="bold red"))
            out.print(Text(str(error)))
        for hint in _hints(report):
            out.print(Text(f"  hint: {hint}", style="cyan"))
        for warning in report.warnings:
            out.print(Text(f"  warning: {warning}", style="yellow"))


def print_report_table(reports: List[PipelineReport], quiet: bool = False, out: Optional[Console] = None):
    """Print one row per failing (pipeline, validation) pair."""
    out = out or console
    table = Table(title="Pipeline Validation Results")
    table.add_column("Pipeline", style="cyan")
    table.add_column("Validation", style="magenta")
    table.add_column("Status", style="bold")
    table.add_column("Details")

    rows = 0
    for report in reports:
        if report.verified:
            if not quiet:
                table.add_row(_title(report), "-", Text("verified", style="green"), "")
                rows += 1
            continue
        for section, error in report.errors.items():
            table.add_row(_title(report), section, Text("failed", style="red"), Text(str(error)))
            rows += 1

    if rows:
        out.print(table)


def print_summary(reports: List[PipelineReport], out: Optional[Console] = None):
    out = out or console
    failed = sum(1 for r in reports if not r.verified)
    verified = len(reports) - failed
    if not reports:
        out.print(Text("No pipelines found.", style="yellow"))
        return
    summary = Text("\nValidation complete: ")
    summary.append(f"{verified} verified", style="green")
    if failed:
        summary.append(", ")
        summary.append(f"{failed} failed", style="red")
    out.print(summary)
