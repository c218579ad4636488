"""Ordering and truncation of context-discovery results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

DEFAULT_RESULT_CAP = 30


@dataclass(slots=True, frozen=True)
class Discovery:
    """A node reached during context discovery."""

    id: str
    depth: int
    degree: int


def rank_related(discoveries: Sequence[Discovery], result_cap: int = DEFAULT_RESULT_CAP) -> List[Discovery]:
    """Closest first, then best connected; discovery order breaks remaining ties.

    ``sorted`` is stable, so entries with equal depth and degree keep the order
    they were discovered in.
    """
    if result_cap <= 0:
        return []
    ranked = sorted(discoveries, key=lambda item: (item.depth, -item.degree))
    return ranked[:result_cap]
