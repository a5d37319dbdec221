# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.


class CatalogError(Exception):
    """The pipelines or tasks could not be loaded."""


class ManifestError(CatalogError):
    """A manifest file is unreadable or a document does not decode."""


class ClusterError(CatalogError):
    """kubectl failed while listing Tekton resources."""
