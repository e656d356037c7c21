"""Partitioning of link groups into bounded request batches."""

from __future__ import annotations

from typing import List, Sequence

from linkaudit.links.models import LinkGroup


def chunk(groups: Sequence[LinkGroup], size: int) -> List[List[LinkGroup]]:
    """Split *groups* into consecutive batches of at most *size* groups.

    A group is never split across batches, and order is preserved, so
    concatenating the result gives back *groups*.
    """
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(groups[i:i + size]) for i in range(0, len(groups), size)]
