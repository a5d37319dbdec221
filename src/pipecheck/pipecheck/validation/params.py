# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Check that a pipeline declares every param its tasks cannot default."""

import logging
from typing import Dict, List

from pipecheck.model import Catalog, Pipeline, PipelineTask

from .errors import ParamsMissingError
from .sets import outliers

LOGGER = logging.getLogger(__name__)


def required_params(pipeline_task: PipelineTask, catalog: Catalog) -> List[str]:
    """Return the params the referenced task(s) need and do not default.

    Every catalog entry whose name matches the reference contributes,
    regardless of its kind. Unresolved references and inline specs yield
    nothing.
    """
    if pipeline_task.task_ref is None:
        return []
    required: List[str] = []
    for entry in catalog.resolve(pipeline_task.task_ref.name):
        required.extend(p.name for p in entry.params if not p.has_default)
    return required


def check_params(pipeline: Pipeline, catalog: Catalog) -> None:
    """Raise ``ParamsMissingError`` when a required task param is not a pipeline param."""
    declared = pipeline.param_names()
    missing: Dict[str, List[str]] = {}

    for pt in pipeline.all_tasks():
        absent = outliers(declared, required_params(pt, catalog))
        if absent:
            missing[pt.name] = absent

    if missing:
        LOGGER.debug("Pipeline %s is missing params: %s", pipeline.name, missing)
        raise ParamsMissingError(pipeline.name, missing)
