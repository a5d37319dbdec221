# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Load multi-document YAML while keeping each document's 1-based start line."""

from typing import Any, List, Tuple

import yaml


def load_documents(content: str) -> List[Tuple[Any, int]]:
    """Return ``(document, line)`` for every document in *content*.

    Raises ``yaml.YAMLError`` if the stream cannot be parsed.
    """
    loader = yaml.SafeLoader(content)
    documents: List[Tuple[Any, int]] = []
    try:
        while loader.check_node():
            node = loader.get_node()
            documents.append((loader.construct_document(node), node.start_mark.line + 1))
    finally:
        loader.dispose()
    return documents
