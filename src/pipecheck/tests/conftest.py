# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import textwrap

import pytest
import yaml

from pipecheck.catalog import decode_pipeline
from pipecheck.model import Catalog, ClusterTask, Task

from .builders import params, workspaces

PIPELINE_YAML = textwrap.dedent(
    """\
    apiVersion: tekton.dev/v1beta1
    kind: Pipeline
    metadata:
      name: test-pipeline
    spec:
      workspaces:
        - name: ws1
        - name: ws-no-needed
        - name: ws2
          optional: true
      params:
        - name: param1
        - name: param2
          default: "param2-default"
          type: string
        - name: param3
          type: array
          default: ["param3-1", "param3-2"]
        - name: param4
        - name: param-finally
        - name: param-not-needed
      tasks:
        - name: task-a
          taskRef:
            name: task-a
          params:
            - name: param1
              value: $(params.param1)
            - name: param2
              value: $(params.param2)
            - name: param-extra
              value: $(params.param1)-$(params.param2)
          workspaces:
            - name: ws-a-1
              workspace: ws1
            - name: ws-a-2
              workspace: ws2
        - name: task-b
          taskRef:
            kind: ClusterTask
            name: task-b
          workspaces:
            - name: ws-b-1
              workspace: ws1
          params:
            - name: param3
              value: ["$(params.param3)"]
        - name: task-c
          runAfter:
            - task-a
            - task-b
          params:
            - name: param4
              value: $(params.param4)
          taskSpec:
            params:
              - name: param4
            steps:
              - image: ubuntu
                script: echo 'hello there'
      finally:
      - name: task-finally
        params:
        - name: param-finally
          value: $(params.param-finally)
        taskRef:
          name: task-finally
        workspaces:
        - name: ws-finally
          workspace: ws1
    """
)


@pytest.fixture
def pipeline_yaml():
    return PIPELINE_YAML


@pytest.fixture
def pipeline():
    return decode_pipeline(yaml.safe_load(PIPELINE_YAML))


@pytest.fixture
def complete_catalog():
    """A catalog that satisfies every reference, param and workspace of the fixture pipeline."""
    return Catalog(
        tasks=[
            Task("task-a", params("param1", "param2"), workspaces("ws-a-1", "ws-a-2")),
            Task("task-finally", params("param-finally"), workspaces("ws-finally")),
            Task("task-z"),
        ],
        cluster_tasks=[
            ClusterTask("task-b", params("param3"), workspaces("ws-b-1")),
            ClusterTask("task-zzz"),
        ],
    )
