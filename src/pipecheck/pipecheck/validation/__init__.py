# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Pipeline validation against the task catalog.

Public API
----------
check_task_refs         Every taskRef resolves to a Task or ClusterTask of that kind.
check_params            The pipeline declares every param its tasks cannot default.
check_workspaces        The pipeline declares every workspace its tasks are bound to.
check_warnings          Non-fatal advisories (currently none).
validate_pipeline       Run all checks on one pipeline and build a PipelineReport.
validate_all            Validate every pipeline of a catalog source.
"""

from .engine import (
    CHECKS,
    PARAMS_SECTION,
    TASK_REF_SECTION,
    WORKSPACES_SECTION,
    CatalogSource,
    PipelineReport,
    select_pipelines,
    validate_all,
    validate_pipeline,
)
from .errors import (
    ParamsMissingError,
    PipelineValidationError,
    TaskRefsMissingError,
    WorkspacesMissingError,
)
from .params import check_params, required_params
from .references import check_task_refs
from .sets import outliers
from .warnings import check_warnings
from .workspaces import check_workspaces, required_workspaces

__all__ = [
    "CHECKS",
    "PARAMS_SECTION",
    "TASK_REF_SECTION",
    "WORKSPACES_SECTION",
    "CatalogSource",
    "PipelineReport",
    "ParamsMissingError",
    "PipelineValidationError",
    "TaskRefsMissingError",
    "WorkspacesMissingError",
    "check_params",
    "check_task_refs",
    "check_warnings",
    "check_workspaces",
    "outliers",
    "required_params",
    "required_workspaces",
    "select_pipelines",
    "validate_all",
    "validate_pipeline",
]
