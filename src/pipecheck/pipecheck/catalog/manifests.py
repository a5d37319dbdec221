# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Catalog source backed by manifest files on disk.

Lets pipelines be checked before they are applied to a cluster, e.g. in CI
against the repository that holds the Tekton resources.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from pipecheck.model import Catalog, ClusterTask, Pipeline, Task

from .decoding import decode
from .errors import ManifestError
from .line_tracker import load_documents

LOGGER = logging.getLogger(__name__)

MANIFEST_SUFFIXES = (".yaml", ".yml", ".json")


def find_manifests(paths: Iterable[str]) -> List[str]:
    """Expand files and directories into a sorted list of manifest files."""
    files: List[str] = []
    for path in paths:
        if os.path.isfile(path):
            files.append(os.path.abspath(path))
        elif os.path.isdir(path):
            for candidate in Path(path).rglob("*"):
                if candidate.is_file() and candidate.suffix in MANIFEST_SUFFIXES:
                    files.append(str(candidate.resolve()))
        else:
            raise ManifestError(f"Path not found: {path}")
    return sorted(set(files))


class ManifestSource:
    """Pipelines, Tasks and ClusterTasks read from YAML or JSON files."""

    def __init__(self, paths: Iterable[str], default_namespace: str = "default"):
        self.paths = list(paths)
        self.default_namespace = default_namespace
        self._pipelines: List[Pipeline] = []
        self._tasks: Dict[str, List[Task]] = {}
        self._cluster_tasks: List[ClusterTask] = []
        self._loaded = False

    def _namespace(self, namespace: Optional[str]) -> str:
        return namespace or self.default_namespace

    def _load_file(self, filepath: str) -> None:
        try:
            with open(filepath, encoding="utf-8") as f:
                content = f.read()
            documents = load_documents(content)
        except yaml.YAMLError as e:
            raise ManifestError(f"YAML parse error in {filepath}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError(f"Error reading file {filepath}: {e}") from e

        for doc, line in documents:
            for resource in decode(doc, f"{filepath}:{line}"):
                if isinstance(resource, Pipeline):
                    ns = self._namespace(resource.namespace)
                    self._pipelines.append(replace(resource, namespace=ns))
                elif isinstance(resource, ClusterTask):
                    self._cluster_tasks.append(resource)
                else:
                    ns = self._namespace(resource.namespace)
                    self._tasks.setdefault(ns, []).append(resource)

    def load(self) -> None:
        if self._loaded:
            return
        files = find_manifests(self.paths)
        LOGGER.info("Loading %d manifest file(s)", len(files))
        for filepath in files:
            self._load_file(filepath)
        self._loaded = True

    def pipelines(self) -> List[Pipeline]:
        self.load()
        return list(self._pipelines)

    def catalog_for(self, namespace: Optional[str]) -> Catalog:
        self.load()
        return Catalog(
            tasks=list(self._tasks.get(self._namespace(namespace), [])),
            cluster_tasks=list(self._cluster_tasks),
        )
