# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Sources of pipelines and task catalogs: manifest files or a live cluster."""

from .cluster import ClusterSource, KubectlWrapper
from .decoding import decode, decode_cluster_task, decode_pipeline, decode_task
from .errors import CatalogError, ClusterError, ManifestError
from .manifests import ManifestSource, find_manifests

__all__ = [
    "CatalogError",
    "ClusterError",
    "ClusterSource",
    "KubectlWrapper",
    "ManifestError",
    "ManifestSource",
    "decode",
    "decode_cluster_task",
    "decode_pipeline",
    "decode_task",
    "find_manifests",
]
