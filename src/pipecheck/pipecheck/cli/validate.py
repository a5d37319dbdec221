# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""``pipecheck validate``: check pipelines against the tasks they reference."""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console

from pipecheck.catalog import CatalogError, ClusterSource, KubectlWrapper, ManifestSource
from pipecheck.validation import CatalogSource, validate_all

from .config import PipecheckConfig, load_and_validate_config
from .errors import show_error
from .logging import configure_logging, log
from .report import print_report_table, print_report_text, print_summary

console = Console()

DESCRIPTION = """Validates Tekton pipelines by ensuring the following:
  - taskRefs used in a pipeline exist as Tasks or ClusterTasks
  - task params without a default value are declared by the pipeline
  - task workspaces that are not optional are declared by the pipeline"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for pipecheck commands."""
    parser = argparse.ArgumentParser(
        description="Static checks for Tekton pipelines",
        prog="pipecheck",
    )

    subparsers = parser.add_subparsers(
        dest="action",
        help="Action to perform",
        required=True,
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate pipelines",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    validate_parser.add_argument(
        "paths",
        nargs="*",
        help="Manifest files or directories to validate (default: current directory)",
    )
    validate_parser.add_argument(
        "--cluster",
        action="store_true",
        help="Read pipelines and tasks from the cluster instead of manifest files",
    )
    validate_parser.add_argument(
        "--kubeconfig",
        type=str,
        default=None,
        help="kubeconfig file used with --cluster (default: PIPECHECK_KUBECONFIG or kubectl's own)",
    )
    validate_parser.add_argument(
        "--context",
        type=str,
        default=None,
        help="kubeconfig context used with --cluster",
    )
    validate_parser.add_argument(
        "--namespace",
        "-n",
        type=str,
        default=None,
        help="Only validate pipelines in this namespace",
    )
    validate_parser.add_argument(
        "--pipeline",
        "-p",
        action="append",
        default=None,
        help="Only validate the named pipeline (repeatable)",
    )
    validate_parser.add_argument(
        "--format",
        choices=["text", "table"],
        default="text",
        help="Output format (default: text)",
    )
    validate_parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only output failing pipelines and the summary",
    )
    validate_parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: PIPECHECK_LOG_LEVEL or WARNING)",
    )

    return parser


def build_source(args: argparse.Namespace, cfg: PipecheckConfig) -> CatalogSource:
    """Create the catalog source selected on the command line."""
    if args.cluster:
        if args.paths:
            log("Ignoring manifest paths because --cluster was given", level="warning")
        kubectl = KubectlWrapper(
            kubectl=cfg.kubectl,
            kubeconfig=args.kubeconfig or cfg.kubeconfig,
            context=args.context or cfg.context,
            timeout=cfg.request_timeout,
        )
        return ClusterSource(
            kubectl,
            api_group=cfg.api_group,
            api_version=cfg.api_version,
            default_namespace=cfg.default_namespace,
        )
    return ManifestSource(args.paths or ["."], default_namespace=cfg.default_namespace)


def cmd_validate(args: argparse.Namespace, cfg: PipecheckConfig) -> int:
    """Execute the validate command."""
    source = build_source(args, cfg)

    if not args.quiet:
        target = "cluster" if args.cluster else ", ".join(args.paths or ["."])
        console.print(f"Validating pipelines in: {target}")

    try:
        reports = validate_all(source, namespace=args.namespace, names=args.pipeline)
    except CatalogError as e:
        show_error("Unable to load pipelines", str(e), cfg.log_file)
        return 1

    if args.format == "table":
        print_report_table(reports, args.quiet, console)
    else:
        print_report_text(reports, args.quiet, console)
    print_summary(reports, console)

    return 0 if all(r.verified for r in reports) else 1


def dispatch(args: argparse.Namespace, cfg: PipecheckConfig) -> int:
    """Dispatch to the appropriate command handler."""
    if args.action == "validate":
        return cmd_validate(args, cfg)
    console.print(f"[red]Unknown action: {args.action}[/red]")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for pipecheck."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_and_validate_config()
    except ValidationError as e:
        show_error("Invalid configuration", str(e))
        return 1

    try:
        configure_logging(
            args.log_level or cfg.log_level,
            cfg.log_file,
            cfg.max_log_file_bytes,
            cfg.log_backup_count,
        )
    except ValueError as e:
        show_error("Invalid log level", str(e))
        return 1

    return dispatch(args, cfg)


if __name__ == "__main__":
    sys.exit(main())
