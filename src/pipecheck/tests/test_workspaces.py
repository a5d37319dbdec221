# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import pytest

from pipecheck.model import (
    Catalog,
    ClusterTask,
    Pipeline,
    PipelineTask,
    PipelineWorkspace,
    Task,
    TaskRef,
    WorkspaceBinding,
)
from pipecheck.validation import WorkspacesMissingError, check_workspaces, required_workspaces

from .builders import workspaces


def _pipeline(declared, *bindings, ref="task"):
    return Pipeline(
        "p",
        workspaces=tuple(PipelineWorkspace(n) for n in declared),
        tasks=(PipelineTask("t", TaskRef(ref), workspaces=tuple(bindings)),),
    )


def test_pipeline_has_all_needed_workspaces(pipeline, complete_catalog):
    assert check_workspaces(pipeline, complete_catalog) is None


def test_missing_workspaces_per_task(pipeline):
    catalog = Catalog(
        tasks=[
            Task("task-a", workspaces=workspaces("ws-a-1", "ws-a-2", "ws-a-missing")),
            Task("task-finally", workspaces=workspaces("ws-finally", "ws-a-missing-finally")),
        ],
        cluster_tasks=[
            ClusterTask("task-b", workspaces=workspaces("ws-b-1", "ws-b-missing-2", "ws-b-missing")),
        ],
    )
    with pytest.raises(WorkspacesMissingError) as exc_info:
        check_workspaces(pipeline, catalog)

    error = exc_info.value
    assert error.missing == {
        "task-a": ["ws-a-missing"],
        "task-b": ["ws-b-missing", "ws-b-missing-2"],
        "task-finally": ["ws-a-missing-finally"],
    }
    assert str(error) == (
        "test-pipeline is missing the following workspaces:\n"
        "  task-a: [ws-a-missing]\n"
        "  task-b: [ws-b-missing, ws-b-missing-2]\n"
        "  task-finally: [ws-a-missing-finally]"
    )


def test_binding_to_differently_named_pipeline_workspace():
    pipeline = _pipeline(["ws2"], WorkspaceBinding("ws-a-2", "ws2"))
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("ws-a-2"))])
    assert check_workspaces(pipeline, catalog) is None


def test_unbound_required_workspace_needs_same_name_in_pipeline():
    pipeline = _pipeline(["other"])
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("ws-x"))])
    with pytest.raises(WorkspacesMissingError) as exc_info:
        check_workspaces(pipeline, catalog)
    assert exc_info.value.missing == {"t": ["ws-x"]}


def test_unbound_required_workspace_satisfied_by_same_name():
    pipeline = _pipeline(["ws-x"])
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("ws-x"))])
    assert check_workspaces(pipeline, catalog) is None


def test_binding_without_target_uses_its_own_name():
    pipeline = _pipeline(["source"], WorkspaceBinding("source"))
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("source"))])
    assert check_workspaces(pipeline, catalog) is None

    pipeline = _pipeline(["elsewhere"], WorkspaceBinding("source"))
    with pytest.raises(WorkspacesMissingError) as exc_info:
        check_workspaces(pipeline, catalog)
    assert exc_info.value.missing == {"t": ["source"]}


def test_binding_to_undeclared_target_is_reported():
    pipeline = _pipeline(["ws1"], WorkspaceBinding("output", "ws-typo"))
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("output"))])
    with pytest.raises(WorkspacesMissingError) as exc_info:
        check_workspaces(pipeline, catalog)
    assert exc_info.value.missing == {"t": ["ws-typo"]}


def test_optional_task_workspace_is_not_required():
    pipeline = _pipeline([])
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces(optional=("cache",)))])
    assert check_workspaces(pipeline, catalog) is None


def test_explicit_binding_of_optional_workspace_is_still_checked():
    pipeline = _pipeline(["ws1"], WorkspaceBinding("cache", "missing-cache"))
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces(optional=("cache",)))])
    with pytest.raises(WorkspacesMissingError) as exc_info:
        check_workspaces(pipeline, catalog)
    assert exc_info.value.missing == {"t": ["missing-cache"]}


def test_optional_pipeline_workspace_counts_as_declared():
    pipeline = Pipeline(
        "p",
        workspaces=(PipelineWorkspace("shared", optional=True),),
        tasks=(PipelineTask("t", TaskRef("task"), workspaces=(WorkspaceBinding("src", "shared"),)),),
    )
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("src"))])
    assert check_workspaces(pipeline, catalog) is None


def test_unresolved_and_inline_tasks_are_skipped():
    pipeline = Pipeline(
        "p",
        tasks=(
            PipelineTask("ghost", TaskRef("ghost"), workspaces=(WorkspaceBinding("a", "nowhere"),)),
            PipelineTask("inline", workspaces=(WorkspaceBinding("b", "nowhere"),)),
        ),
    )
    assert check_workspaces(pipeline, Catalog()) is None


def test_required_workspaces_are_deduplicated_on_report():
    pipeline_task = PipelineTask(
        "t",
        TaskRef("task"),
        workspaces=(WorkspaceBinding("a", "shared"), WorkspaceBinding("b", "shared")),
    )
    catalog = Catalog(tasks=[Task("task", workspaces=workspaces("a", "b", "c"))])
    assert sorted(required_workspaces(pipeline_task, catalog)) == ["c", "shared", "shared"]

    pipeline = Pipeline("p", tasks=(pipeline_task,))
    with pytest.raises(WorkspacesMissingError) as exc_info:
        check_workspaces(pipeline, catalog)
    assert exc_info.value.missing == {"t": ["c", "shared"]}
