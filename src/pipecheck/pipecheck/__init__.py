# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Static validation of Tekton pipelines against the tasks they reference."""

__version__ = "0.1.0"
