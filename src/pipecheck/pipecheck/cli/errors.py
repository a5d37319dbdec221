# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Actionable error messages for failures that stop a validation run."""

import re
from typing import Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)

ERROR_PATTERNS = {
    "kubectl": {
        "pattern": r"kubectl not found",
        "message": "kubectl is not installed",
        "action": "Install kubectl or point PIPECHECK_KUBECTL at the binary",
    },
    "auth": {
        "pattern": r"(unauthorized|must be logged in|token.*expired|credential.*expired)",
        "message": "Authentication failed",
        "action": "Refresh your cluster credentials and try again",
    },
    "forbidden": {
        "pattern": r"(forbidden|cannot list resource)",
        "message": "Permission denied",
        "action": "Ask for `list` access to pipelines, tasks and clustertasks in the tekton.dev group",
    },
    "crd": {
        "pattern": r"doesn't have a resource type",
        "message": "Tekton resources are not installed on this cluster",
        "action": "Install Tekton Pipelines or check --context / PIPECHECK_API_VERSION",
    },
    "network": {
        "pattern": r"(connection refused|unable to connect to the server|no such host|timeout|i/o timeout)",
        "message": "Cannot connect to cluster",
        "action": "Check that the cluster is reachable with `kubectl cluster-info`",
    },
    "yaml": {
        "pattern": r"yaml parse error",
        "message": "A manifest is not valid YAML",
        "action": "Fix the syntax error reported below",
    },
}


def detect_error_pattern(output: str) -> Optional[Tuple[str, str]]:
    for pattern_info in ERROR_PATTERNS.values():
        if re.search(pattern_info["pattern"], output, re.IGNORECASE):
            return (pattern_info["message"], pattern_info["action"])
    return None


def show_error(title: str, output: str, log_file: Optional[str] = None):
    """Display a formatted error with smart extraction."""
    console.print()
    detected = detect_error_pattern(output)
    if detected:
        message, action = detected
        error_text = Text()
        error_text.append(f"✗ {title}\n\n", style="bold red")
        error_text.append(f"{message}\n\n", style="red")
        error_text.append("→ Fix: ", style="bold yellow")
        error_text.append(f"{action}\n", style="yellow")
        console.print(Panel(error_text, border_style="red", expand=False))
    else:
        console.print(Panel(Text(f"✗ {title}", style="bold red"), border_style="red", expand=False))

    lines = output.strip().split("\n")
    context = lines[-10:]
    if context and context != [""]:
        console.print("\n[dim]Details:[/dim]")
        for line in context:
            console.print(Text.assemble(("  │ ", "dim"), line))

    if log_file:
        console.print(f"\n[dim]Full logs: {log_file}[/dim]")
    console.print()
