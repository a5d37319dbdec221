# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import json
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pipecheck.catalog import ClusterError, ClusterSource, KubectlWrapper
from pipecheck.validation import validate_all


def _completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def _list(*items):
    return {"apiVersion": "v1", "kind": "List", "items": list(items)}


class TestKubectlWrapper:
    def test_builds_command_with_kubeconfig_and_context(self):
        kubectl = KubectlWrapper("kubectl", kubeconfig="/tmp/kc", context="prod", timeout=5)
        with patch("pipecheck.catalog.cluster.subprocess.run") as run:
            run.return_value = _completed(json.dumps(_list()))
            assert kubectl.get("tasks.v1beta1.tekton.dev", namespace="ci") == _list()
        cmd = run.call_args[0][0]
        assert cmd == [
            "kubectl",
            "--kubeconfig",
            "/tmp/kc",
            "--context",
            "prod",
            "get",
            "tasks.v1beta1.tekton.dev",
            "-o",
            "json",
            "-n",
            "ci",
        ]
        assert run.call_args[1]["timeout"] == 5

    def test_all_namespaces(self):
        with patch("pipecheck.catalog.cluster.subprocess.run") as run:
            run.return_value = _completed(json.dumps(_list()))
            KubectlWrapper().get("pipelines", all_namespaces=True)
        assert run.call_args[0][0][-1] == "--all-namespaces"

    def test_failure_raises_cluster_error_with_stderr(self):
        with patch("pipecheck.catalog.cluster.subprocess.run") as run:
            run.return_value = _completed(stderr="error: Unauthorized\n", returncode=1)
            with pytest.raises(ClusterError, match="Unauthorized"):
                KubectlWrapper().get("pipelines")

    def test_missing_binary(self):
        with patch("pipecheck.catalog.cluster.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(ClusterError, match="kubectl not found"):
                KubectlWrapper("/no/kubectl").get("pipelines")

    def test_timeout(self):
        with patch(
            "pipecheck.catalog.cluster.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="kubectl", timeout=1),
        ):
            with pytest.raises(ClusterError, match="Timeout"):
                KubectlWrapper(timeout=1).get("pipelines")

    def test_invalid_json(self):
        with patch("pipecheck.catalog.cluster.subprocess.run") as run:
            run.return_value = _completed("not json")
            with pytest.raises(ClusterError, match="invalid JSON"):
                KubectlWrapper().get("pipelines")


def _fake_kubectl(responses):
    """Return a KubectlWrapper mock answering get() from a {(resource, namespace): payload} map."""
    kubectl = MagicMock(spec=KubectlWrapper)

    def get(resource, namespace=None, all_namespaces=False):
        payload = responses[(resource, namespace)]
        if isinstance(payload, Exception):
            raise payload
        return payload

    kubectl.get.side_effect = get
    return kubectl


PIPELINE = {
    "kind": "Pipeline",
    "metadata": {"name": "build", "namespace": "ci"},
    "spec": {
        "tasks": [
            {"name": "clone", "taskRef": {"name": "git-clone"}},
            {"name": "lint", "taskRef": {"name": "lint", "kind": "ClusterTask"}},
        ]
    },
}


class TestClusterSource:
    def test_catalog_for_namespace(self):
        kubectl = _fake_kubectl(
            {
                ("tasks.v1beta1.tekton.dev", "ci"): _list(
                    {"kind": "Task", "metadata": {"name": "git-clone", "namespace": "ci"}}
                ),
                ("clustertasks.v1beta1.tekton.dev", None): _list(
                    {"kind": "ClusterTask", "metadata": {"name": "lint"}}
                ),
            }
        )
        catalog = ClusterSource(kubectl).catalog_for("ci")
        assert catalog.task_names() == ["git-clone"]
        assert catalog.cluster_task_names() == ["lint"]

    def test_tasks_cached_per_namespace(self):
        kubectl = _fake_kubectl(
            {
                ("tasks.v1beta1.tekton.dev", "a"): _list({"metadata": {"name": "ta"}, "kind": "Task"}),
                ("tasks.v1beta1.tekton.dev", "b"): _list({"metadata": {"name": "tb"}, "kind": "Task"}),
                ("clustertasks.v1beta1.tekton.dev", None): _list(),
            }
        )
        source = ClusterSource(kubectl)
        assert source.catalog_for("a").task_names() == ["ta"]
        assert source.catalog_for("b").task_names() == ["tb"]
        assert source.catalog_for("a").task_names() == ["ta"]
        resources = [c.args[0] for c in kubectl.get.call_args_list]
        assert resources.count("clustertasks.v1beta1.tekton.dev") == 1
        assert resources.count("tasks.v1beta1.tekton.dev") == 2

    def test_missing_clustertask_resource_type_means_none(self):
        kubectl = _fake_kubectl(
            {
                ("tasks.v1.tekton.dev", "default"): _list(),
                ("clustertasks.v1.tekton.dev", None): ClusterError(
                    'error: the server doesn\'t have a resource type "clustertasks"'
                ),
            }
        )
        catalog = ClusterSource(kubectl, api_version="v1").catalog_for(None)
        assert catalog.cluster_task_names() == []

    def test_other_clustertask_errors_propagate(self):
        kubectl = _fake_kubectl(
            {
                ("tasks.v1beta1.tekton.dev", "default"): _list(),
                ("clustertasks.v1beta1.tekton.dev", None): ClusterError("connection refused"),
            }
        )
        with pytest.raises(ClusterError, match="connection refused"):
            ClusterSource(kubectl).catalog_for("default")

    def test_validate_cluster_pipelines(self):
        kubectl = _fake_kubectl(
            {
                ("pipelines.v1beta1.tekton.dev", None): _list(PIPELINE),
                ("tasks.v1beta1.tekton.dev", "ci"): _list(
                    {"kind": "Task", "metadata": {"name": "git-clone", "namespace": "ci"}}
                ),
                ("clustertasks.v1beta1.tekton.dev", None): _list(),
            }
        )
        [report] = validate_all(ClusterSource(kubectl))
        assert report.pipeline.namespace == "ci"
        assert report.errors["taskRef validation"].missing == ["lint"]
