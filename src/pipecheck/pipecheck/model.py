# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Typed model of the pipelines and tasks that pipecheck validates.

The model is a read-only snapshot: it is produced by a catalog source
(``pipecheck.catalog``) and consumed by ``pipecheck.validation`` without
ever being mutated.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, List, Optional, Tuple

TASK_KIND = "Task"
CLUSTER_TASK_KIND = "ClusterTask"


@dataclass(frozen=True)
class TaskRef:
    """Reference from a pipeline task to a catalog entry."""

    name: str
    kind: str = TASK_KIND

    @property
    def is_cluster_task(self) -> bool:
        return self.kind == CLUSTER_TASK_KIND


@dataclass(frozen=True)
class ParamSpec:
    """A parameter declared by a Task or ClusterTask."""

    name: str
    default: Optional[Any] = None
    type: str = "string"

    @property
    def has_default(self) -> bool:
        return self.default is not None


@dataclass(frozen=True)
class WorkspaceDeclaration:
    """A workspace declared by a Task or ClusterTask."""

    name: str
    optional: bool = False


@dataclass(frozen=True)
class ParamBinding:
    name: str
    value: Any = None


@dataclass(frozen=True)
class WorkspaceBinding:
    """Binds a task-side workspace to a pipeline workspace.

    ``workspace`` is the pipeline-side name; ``None`` means the binding
    targets the pipeline workspace with the same name as the task side.
    """

    name: str
    workspace: Optional[str] = None

    @property
    def target(self) -> str:
        return self.workspace or self.name


@dataclass(frozen=True)
class PipelineParam:
    name: str
    default: Optional[Any] = None
    type: str = "string"


@dataclass(frozen=True)
class PipelineWorkspace:
    name: str
    optional: bool = False


@dataclass(frozen=True)
class PipelineTask:
    """One entry of a pipeline's ``tasks`` or ``finally`` list.

    A ``task_ref`` of ``None`` means the task is declared inline through
    ``taskSpec`` and has nothing to resolve against the catalog.
    """

    name: str
    task_ref: Optional[TaskRef] = None
    params: Tuple[ParamBinding, ...] = ()
    workspaces: Tuple[WorkspaceBinding, ...] = ()


@dataclass(frozen=True)
class Pipeline:
    name: str
    namespace: Optional[str] = None
    params: Tuple[PipelineParam, ...] = ()
    workspaces: Tuple[PipelineWorkspace, ...] = ()
    tasks: Tuple[PipelineTask, ...] = ()
    finally_tasks: Tuple[PipelineTask, ...] = ()
    source: Optional[str] = None  # "file:line" when loaded from a manifest

    def all_tasks(self) -> Iterator[PipelineTask]:
        """Yield the main tasks followed by the finally tasks."""
        yield from self.tasks
        yield from self.finally_tasks

    def param_names(self) -> List[str]:
        return [p.name for p in self.params]

    def workspace_names(self) -> List[str]:
        return [w.name for w in self.workspaces]


@dataclass(frozen=True)
class TaskDefinition:
    """Capability shared by Task and ClusterTask: a name, params and workspaces."""

    kind: ClassVar[str] = TASK_KIND

    name: str
    params: Tuple[ParamSpec, ...] = ()
    workspaces: Tuple[WorkspaceDeclaration, ...] = ()
    namespace: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class Task(TaskDefinition):
    kind: ClassVar[str] = TASK_KIND


@dataclass(frozen=True)
class ClusterTask(TaskDefinition):
    kind: ClassVar[str] = CLUSTER_TASK_KIND


@dataclass
class Catalog:
    """Tasks visible in one namespace plus every ClusterTask of the cluster."""

    tasks: List[Task] = field(default_factory=list)
    cluster_tasks: List[ClusterTask] = field(default_factory=list)

    def task_names(self) -> List[str]:
        return [t.name for t in self.tasks]

    def cluster_task_names(self) -> List[str]:
        return [t.name for t in self.cluster_tasks]

    def entries(self) -> Iterator[TaskDefinition]:
        yield from self.cluster_tasks
        yield from self.tasks

    def resolve(self, name: str) -> List[TaskDefinition]:
        """Return every entry named *name*, whatever its kind."""
        return [entry for entry in self.entries() if entry.name == name]
