# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Check that a pipeline declares every workspace its tasks are bound to."""

import logging
from typing import Dict, List

from pipecheck.model import Catalog, Pipeline, PipelineTask

from .errors import WorkspacesMissingError
from .sets import outliers

LOGGER = logging.getLogger(__name__)


def required_workspaces(pipeline_task: PipelineTask, catalog: Catalog) -> List[str]:
    """Return the pipeline workspace names that *pipeline_task* relies on.

    Two sources contribute, for each catalog entry matching the reference:

    - a non-optional task workspace the pipeline task never binds must exist
      in the pipeline under the task-side name;
    - every binding the pipeline task declares must point at an existing
      pipeline workspace (its ``workspace`` target, or its own name when the
      target is omitted).

    Optional task workspaces are ignored, but an explicit binding to one is
    still checked.
    """
    if pipeline_task.task_ref is None:
        return []

    bound = [b.name for b in pipeline_task.workspaces]
    required: List[str] = []
    for entry in catalog.resolve(pipeline_task.task_ref.name):
        needed = [w.name for w in entry.workspaces if not w.optional]
        required.extend(outliers(bound, needed))
        required.extend(b.target for b in pipeline_task.workspaces)
    return required


def check_workspaces(pipeline: Pipeline, catalog: Catalog) -> None:
    """Raise ``WorkspacesMissingError`` when a required workspace is not declared.

    Optional pipeline workspaces still count as declared; optionality on
    the pipeline side never exempts a requirement.
    """
    declared = pipeline.workspace_names()
    missing: Dict[str, List[str]] = {}

    for pt in pipeline.all_tasks():
        absent = outliers(declared, required_workspaces(pt, catalog))
        if absent:
            missing[pt.name] = absent

    if missing:
        LOGGER.debug("Pipeline %s is missing workspaces: %s", pipeline.name, missing)
        raise WorkspacesMissingError(pipeline.name, missing)
