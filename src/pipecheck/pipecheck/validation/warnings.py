# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Non-fatal advisories about a pipeline.

Reserved for findings such as params or workspaces declared by a pipeline
but never required by its tasks. No advisory is produced yet.
"""

from typing import List

from pipecheck.model import Catalog, Pipeline


def check_warnings(pipeline: Pipeline, catalog: Catalog) -> List[str]:
    return []
