# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Set helpers shared by the validators."""

from typing import Iterable, List


def outliers(available: Iterable[str], wanted: Iterable[str]) -> List[str]:
    """Return the items of *wanted* that are absent from *available*.

    The result is sorted and free of duplicates, so repeated references to
    the same missing name are reported once.
    """
    present = set(available)
    return sorted({name for name in wanted if name not in present})
