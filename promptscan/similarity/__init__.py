"""Pure string-similarity functions and the size-tiered selector."""

from promptscan.similarity.metrics import (
    bounded_levenshtein,
    threshold_similarity,
    jaro_winkler,
    cosine_ngram,
    hash_jaccard,
)
from promptscan.similarity.selector import smart_similarity
from promptscan.similarity.sentinels import (
    BELOW_THRESHOLD,
    EXCEEDED,
    Sentinel,
    SimilarityScore,
)

__all__ = [
    "bounded_levenshtein",
    "threshold_similarity",
    "jaro_winkler",
    "cosine_ngram",
    "hash_jaccard",
    "smart_similarity",
    "BELOW_THRESHOLD",
    "EXCEEDED",
    "Sentinel",
    "SimilarityScore",
]
