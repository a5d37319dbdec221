# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Catalog source backed by a live cluster, read through ``kubectl``."""

import json
import logging
import subprocess
from typing import Any, Dict, List, Optional

from pipecheck.model import Catalog, ClusterTask, Pipeline, Task

from .decoding import decode_cluster_task, decode_pipeline, decode_task
from .errors import ClusterError

LOGGER = logging.getLogger(__name__)

MISSING_RESOURCE_TYPE = "doesn't have a resource type"


class KubectlWrapper:
    """Thin wrapper over the kubectl binary returning parsed JSON."""

    def __init__(
        self,
        kubectl: str = "kubectl",
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        timeout: int = 30,
    ):
        self.kubectl = kubectl
        self.kubeconfig = kubeconfig
        self.context = context
        self.timeout = timeout

    def _base_command(self) -> List[str]:
        cmd = [self.kubectl]
        if self.kubeconfig:
            cmd += ["--kubeconfig", self.kubeconfig]
        if self.context:
            cmd += ["--context", self.context]
        return cmd

    def _run(self, args: List[str]) -> str:
        cmd = self._base_command() + args
        LOGGER.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise ClusterError(f"kubectl not found: {self.kubectl}") from e
        except subprocess.TimeoutExpired as e:
            raise ClusterError(
                f"Timeout after {self.timeout}s running: {' '.join(cmd)}"
            ) from e
        if proc.returncode != 0:
            raise ClusterError(proc.stderr.strip() or f"kubectl exited with code {proc.returncode}")
        return proc.stdout

    def get(
        self,
        resource: str,
        namespace: Optional[str] = None,
        all_namespaces: bool = False,
    ) -> Dict[str, Any]:
        args = ["get", resource, "-o", "json"]
        if all_namespaces:
            args.append("--all-namespaces")
        elif namespace:
            args += ["-n", namespace]
        output = self._run(args)
        try:
            return json.loads(output)
        except ValueError as e:
            raise ClusterError(f"kubectl returned invalid JSON for {resource}: {e}") from e


class ClusterSource:
    """Pipelines, Tasks and ClusterTasks listed from the cluster.

    Namespaced tasks are fetched once per namespace; ClusterTasks once per
    source.
    """

    def __init__(
        self,
        kubectl: KubectlWrapper,
        api_group: str = "tekton.dev",
        api_version: str = "v1beta1",
        default_namespace: str = "default",
    ):
        self.kubectl = kubectl
        self.api_group = api_group
        self.api_version = api_version
        self.default_namespace = default_namespace
        self._tasks: Dict[str, List[Task]] = {}
        self._cluster_tasks: Optional[List[ClusterTask]] = None

    def _resource(self, plural: str) -> str:
        return f"{plural}.{self.api_version}.{self.api_group}"

    def _items(self, plural: str, **kwargs) -> List[Dict[str, Any]]:
        return self.kubectl.get(self._resource(plural), **kwargs).get("items") or []

    def pipelines(self) -> List[Pipeline]:
        items = self._items("pipelines", all_namespaces=True)
        LOGGER.info("Found %d pipeline(s) in the cluster", len(items))
        return [decode_pipeline(item) for item in items]

    def tasks(self, namespace: Optional[str]) -> List[Task]:
        ns = namespace or self.default_namespace
        if ns not in self._tasks:
            self._tasks[ns] = [decode_task(item) for item in self._items("tasks", namespace=ns)]
        return self._tasks[ns]

    def cluster_tasks(self) -> List[ClusterTask]:
        if self._cluster_tasks is None:
            try:
                items = self._items("clustertasks")
            except ClusterError as e:
                if MISSING_RESOURCE_TYPE not in str(e):
                    raise
                LOGGER.warning("ClusterTasks are not served by this cluster, assuming none exist")
                items = []
            self._cluster_tasks = [decode_cluster_task(item) for item in items]
        return self._cluster_tasks

    def catalog_for(self, namespace: Optional[str]) -> Catalog:
        return Catalog(tasks=list(self.tasks(namespace)), cluster_tasks=list(self.cluster_tasks()))
