# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Decode Tekton manifests (``tekton.dev/v1beta1`` and ``v1``) into the typed model.

Only the declaration-level fields pipecheck validates are read; steps,
results, ``runAfter`` and the like are ignored.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from pipecheck.model import (
    CLUSTER_TASK_KIND,
    TASK_KIND,
    ClusterTask,
    ParamBinding,
    ParamSpec,
    Pipeline,
    PipelineParam,
    PipelineTask,
    PipelineWorkspace,
    Task,
    TaskRef,
    WorkspaceBinding,
    WorkspaceDeclaration,
)

from .errors import ManifestError

LOGGER = logging.getLogger(__name__)

PIPELINE_KIND = "Pipeline"
LIST_KIND = "List"
SUPPORTED_KINDS = (PIPELINE_KIND, TASK_KIND, CLUSTER_TASK_KIND)

Resource = Union[Pipeline, Task, ClusterTask]


def _describe(doc: Dict[str, Any], source: Optional[str]) -> str:
    name = (doc.get("metadata") or {}).get("name", "<unnamed>")
    where = f" ({source})" if source else ""
    return f"{doc.get('kind', '<no kind>')} '{name}'{where}"


def _mapping(value: Any, what: str, context: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"{context}: '{what}' must be a mapping")
    return value


def _items(value: Any, what: str, context: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestError(f"{context}: '{what}' must be a list")
    for item in value:
        if not isinstance(item, dict) or not item.get("name"):
            raise ManifestError(f"{context}: every entry of '{what}' must be a mapping with a name")
    return value


def _metadata(doc: Dict[str, Any], context: str) -> Tuple[str, Optional[str]]:
    metadata = _mapping(doc.get("metadata"), "metadata", context)
    name = metadata.get("name")
    if not name:
        raise ManifestError(f"{context}: missing metadata.name")
    return str(name), metadata.get("namespace")


def _task_definition(cls, doc: Dict[str, Any], source: Optional[str]):
    context = _describe(doc, source)
    name, namespace = _metadata(doc, context)
    spec = _mapping(doc.get("spec"), "spec", context)
    params = tuple(
        ParamSpec(p["name"], p.get("default"), p.get("type", "string"))
        for p in _items(spec.get("params"), "spec.params", context)
    )
    workspaces = tuple(
        WorkspaceDeclaration(w["name"], bool(w.get("optional", False)))
        for w in _items(spec.get("workspaces"), "spec.workspaces", context)
    )
    return cls(name, params, workspaces, namespace=namespace, source=source)


def decode_task(doc: Dict[str, Any], source: Optional[str] = None) -> Task:
    return _task_definition(Task, doc, source)


def decode_cluster_task(doc: Dict[str, Any], source: Optional[str] = None) -> ClusterTask:
    return _task_definition(ClusterTask, doc, source)


def _pipeline_task(item: Dict[str, Any], context: str) -> PipelineTask:
    context = f"{context} task '{item['name']}'"
    task_ref = None
    ref = item.get("taskRef")
    if ref is not None:
        ref = _mapping(ref, "taskRef", context)
        # Resolver-based refs (bundles, git, hub) carry no name to check.
        if ref.get("name"):
            task_ref = TaskRef(str(ref["name"]), ref.get("kind") or TASK_KIND)
    params = tuple(
        ParamBinding(p["name"], p.get("value"))
        for p in _items(item.get("params"), "params", context)
    )
    workspaces = tuple(
        WorkspaceBinding(w["name"], w.get("workspace") or None)
        for w in _items(item.get("workspaces"), "workspaces", context)
    )
    return PipelineTask(item["name"], task_ref, params, workspaces)


def decode_pipeline(doc: Dict[str, Any], source: Optional[str] = None) -> Pipeline:
    context = _describe(doc, source)
    name, namespace = _metadata(doc, context)
    spec = _mapping(doc.get("spec"), "spec", context)
    params = tuple(
        PipelineParam(p["name"], p.get("default"), p.get("type", "string"))
        for p in _items(spec.get("params"), "spec.params", context)
    )
    workspaces = tuple(
        PipelineWorkspace(w["name"], bool(w.get("optional", False)))
        for w in _items(spec.get("workspaces"), "spec.workspaces", context)
    )
    tasks = tuple(
        _pipeline_task(t, context) for t in _items(spec.get("tasks"), "spec.tasks", context)
    )
    finally_tasks = tuple(
        _pipeline_task(t, context) for t in _items(spec.get("finally"), "spec.finally", context)
    )
    return Pipeline(name, namespace, params, workspaces, tasks, finally_tasks, source=source)


_DECODERS = {
    PIPELINE_KIND: decode_pipeline,
    TASK_KIND: decode_task,
    CLUSTER_TASK_KIND: decode_cluster_task,
}


def decode(doc: Any, source: Optional[str] = None) -> List[Resource]:
    """Decode one manifest document, expanding ``kind: List`` wrappers.

    Documents of other kinds are skipped.
    """
    if doc is None:
        return []
    if not isinstance(doc, dict):
        LOGGER.debug("Skipping non-mapping document at %s", source or "document")
        return []

    kind = doc.get("kind")
    if kind == LIST_KIND or (kind is None and "items" in doc):
        resources: List[Resource] = []
        for item in doc.get("items") or []:
            resources.extend(decode(item, source))
        return resources

    decoder = _DECODERS.get(kind)
    if decoder is None:
        LOGGER.debug("Skipping %s", _describe(doc, source))
        return []
    return [decoder(doc, source)]
