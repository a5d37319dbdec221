# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Check that every taskRef of a pipeline exists in the catalog."""

import logging
from typing import Dict, List, Optional

from pipecheck.model import CLUSTER_TASK_KIND, TASK_KIND, Catalog, Pipeline

from .errors import TaskRefsMissingError
from .sets import outliers
from .suggestions import suggest

LOGGER = logging.getLogger(__name__)


def _suggestion(name: str, same_kind: List[str], other_kind: List[str], other_label: str) -> Optional[str]:
    hint = suggest(name, same_kind)
    if hint:
        return hint
    hint = suggest(name, other_kind)
    return f"{hint} ({other_label})" if hint else None


def check_task_refs(pipeline: Pipeline, catalog: Catalog) -> None:
    """Raise ``TaskRefsMissingError`` if a referenced Task or ClusterTask is absent.

    Tasks and ClusterTasks are matched separately: a ClusterTask reference is
    not satisfied by a namespaced Task of the same name, and vice versa.
    Inline task specs have no reference and are ignored.
    """
    task_refs: List[str] = []
    cluster_task_refs: List[str] = []
    for pt in pipeline.all_tasks():
        if pt.task_ref is None:
            continue
        if pt.task_ref.is_cluster_task:
            cluster_task_refs.append(pt.task_ref.name)
        else:
            task_refs.append(pt.task_ref.name)

    task_names = catalog.task_names()
    cluster_task_names = catalog.cluster_task_names()

    missing_tasks = outliers(task_names, task_refs)
    missing_cluster_tasks = outliers(cluster_task_names, cluster_task_refs)
    if not missing_tasks and not missing_cluster_tasks:
        return

    suggestions: Dict[str, str] = {}
    for name in missing_tasks:
        hint = _suggestion(name, task_names, cluster_task_names, CLUSTER_TASK_KIND)
        if hint:
            suggestions[name] = hint
    for name in missing_cluster_tasks:
        hint = _suggestion(name, cluster_task_names, task_names, TASK_KIND)
        if hint:
            suggestions.setdefault(name, hint)

    LOGGER.debug(
        "Pipeline %s: missing tasks %s, missing cluster tasks %s",
        pipeline.name,
        missing_tasks,
        missing_cluster_tasks,
    )
    raise TaskRefsMissingError(pipeline.name, missing_tasks + missing_cluster_tasks, suggestions)
