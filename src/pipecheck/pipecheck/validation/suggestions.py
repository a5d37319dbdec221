# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Edit-distance suggestions for misspelled task references."""

import difflib
from typing import List, Optional


def suggest(ref: str, candidates: List[str], n: int = 3, cutoff: float = 0.6) -> Optional[str]:
    """Return a human-readable suggestion string for *ref*, or None if no close match."""
    matches = difflib.get_close_matches(ref, list(dict.fromkeys(candidates)), n=n, cutoff=cutoff)
    return ", ".join(f"'{m}'" for m in matches) if matches else None
