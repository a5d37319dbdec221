# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Run every pipeline check and collect the findings per pipeline."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Protocol

from pipecheck.model import Catalog, Pipeline

from .errors import PipelineValidationError
from .params import check_params
from .references import check_task_refs
from .warnings import check_warnings
from .workspaces import check_workspaces

LOGGER = logging.getLogger(__name__)

TASK_REF_SECTION = "taskRef validation"
PARAMS_SECTION = "parameter validation"
WORKSPACES_SECTION = "workspace validation"

Check = Callable[[Pipeline, Catalog], None]

CHECKS: Dict[str, Check] = {
    TASK_REF_SECTION: check_task_refs,
    PARAMS_SECTION: check_params,
    WORKSPACES_SECTION: check_workspaces,
}


class CatalogSource(Protocol):
    """Anything that can list pipelines and assemble their catalogs."""

    def pipelines(self) -> List[Pipeline]:
        ...

    def catalog_for(self, namespace: Optional[str]) -> Catalog:
        ...


@dataclass
class PipelineReport:
    """Outcome of validating one pipeline."""

    pipeline: Pipeline
    errors: Dict[str, PipelineValidationError] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.pipeline.name

    @property
    def verified(self) -> bool:
        return not self.errors


def _run_section(check: Check, pipeline: Pipeline, catalog: Catalog) -> Optional[PipelineValidationError]:
    """Call a single check and hand back the finding it raised, if any."""
    try:
        check(pipeline, catalog)
    except PipelineValidationError as exc:
        return exc
    return None


def validate_pipeline(pipeline: Pipeline, catalog: Catalog) -> PipelineReport:
    """Run all checks against *pipeline*; one failing check never skips the others."""
    report = PipelineReport(pipeline)
    for section, check in CHECKS.items():
        error = _run_section(check, pipeline, catalog)
        if error is not None:
            report.errors[section] = error
    report.warnings = check_warnings(pipeline, catalog)
    LOGGER.debug(
        "Validated pipeline %s: %s",
        pipeline.name,
        "verified" if report.verified else ", ".join(report.errors),
    )
    return report


def select_pipelines(
    pipelines: Iterable[Pipeline],
    namespace: Optional[str] = None,
    names: Optional[Iterable[str]] = None,
) -> List[Pipeline]:
    """Filter and order pipelines by (namespace, name)."""
    wanted = set(names) if names else None
    selected = [
        p
        for p in pipelines
        if (namespace is None or p.namespace == namespace)
        and (wanted is None or p.name in wanted)
    ]
    return sorted(selected, key=lambda p: (p.namespace or "", p.name))


def validate_all(
    source: CatalogSource,
    namespace: Optional[str] = None,
    names: Optional[Iterable[str]] = None,
) -> List[PipelineReport]:
    """Validate every pipeline of *source*, assembling each namespace's catalog once."""
    catalogs: Dict[Optional[str], Catalog] = {}
    reports: List[PipelineReport] = []
    for pipeline in select_pipelines(source.pipelines(), namespace, names):
        if pipeline.namespace not in catalogs:
            catalogs[pipeline.namespace] = source.catalog_for(pipeline.namespace)
        reports.append(validate_pipeline(pipeline, catalogs[pipeline.namespace]))
    return reports
