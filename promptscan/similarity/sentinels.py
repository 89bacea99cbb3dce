"""Non-numeric results returned by the similarity functions."""

from __future__ import annotations

from enum import Enum
from typing import Union


class Sentinel(Enum):
    """Distinguished markers that short-circuit expensive computation.

    ``EXCEEDED`` is returned by ``bounded_levenshtein`` when the edit distance
    is provably larger than the allowed budget.  ``BELOW_THRESHOLD`` is
    returned by threshold-aware similarity functions when the score is
    provably below the requested threshold; the exact value is not computed.
    """

    EXCEEDED = "exceeded"
    BELOW_THRESHOLD = "below_threshold"

    def __repr__(self) -> str:
        return self.name

    def __bool__(self) -> bool:
        return False


EXCEEDED = Sentinel.EXCEEDED
BELOW_THRESHOLD = Sentinel.BELOW_THRESHOLD

Distance = Union[int, Sentinel]
SimilarityScore = Union[float, Sentinel]


def score_exceeds(score: SimilarityScore, floor: float) -> bool:
    """True when ``score`` is numeric and strictly greater than ``floor``."""
    if isinstance(score, Sentinel):
        return False
    return score > floor
