# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Findings raised by the pipeline validators.

Each validator raises at most one of these per pipeline. They carry the
structured listing (``missing``) next to the rendered message, so callers
can either print ``str(error)`` or inspect the data.
"""

from typing import Dict, List, Mapping, Optional


def _format_names(names: List[str]) -> str:
    return "[" + ", ".join(names) + "]"


def _format_task_map(missing: Mapping[str, List[str]]) -> str:
    return "\n".join(f"  {task}: {_format_names(names)}" for task, names in missing.items())


class PipelineValidationError(ValueError):
    """Base class for every validation finding on a pipeline."""

    def __init__(self, pipeline: str, message: str):
        super().__init__(message)
        self.pipeline = pipeline
        self.message = message

    def __str__(self) -> str:
        return self.message


class TaskRefsMissingError(PipelineValidationError):
    """Referenced tasks or cluster tasks that do not exist."""

    def __init__(
        self,
        pipeline: str,
        missing: List[str],
        suggestions: Optional[Dict[str, str]] = None,
    ):
        self.missing = sorted(set(missing))
        self.suggestions = dict(suggestions or {})
        super().__init__(
            pipeline,
            f"The following tasks/clusterTasks are used in {pipeline} pipeline "
            f"but do not exist in the cluster: {_format_names(self.missing)}",
        )


class _PerTaskMissingError(PipelineValidationError):
    what = ""

    def __init__(self, pipeline: str, missing: Mapping[str, List[str]]):
        self.missing: Dict[str, List[str]] = {
            task: sorted(set(names)) for task, names in sorted(missing.items())
        }
        super().__init__(
            pipeline,
            f"{pipeline} is missing the following {self.what}:\n{_format_task_map(self.missing)}",
        )


class ParamsMissingError(_PerTaskMissingError):
    """Required task params that the pipeline does not declare."""

    what = "params"


class WorkspacesMissingError(_PerTaskMissingError):
    """Required workspaces that the pipeline does not declare."""

    what = "workspaces"
