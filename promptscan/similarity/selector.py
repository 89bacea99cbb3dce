"""Size-tiered similarity selection.

``smart_similarity`` rejects pairs whose length ratio already rules out the
threshold, then dispatches to the cheapest metric that is still meaningful
for the input length:

    max length < 100      jaro_winkler
    max length < 1000     threshold_similarity (edit distance)
    max length < 10000    cosine_ngram, trigrams
    otherwise             hash_jaccard, 200-char chunks
"""

from __future__ import annotations

from promptscan.similarity import metrics
from promptscan.similarity.sentinels import BELOW_THRESHOLD, SimilarityScore

SHORT_TEXT_LIMIT = 100
MEDIUM_TEXT_LIMIT = 1000
LONG_TEXT_LIMIT = 10000

COSINE_NGRAM_SIZE = 3
HASH_CHUNK_SIZE = 200


def smart_similarity(a: str, b: str, threshold: float = 0.9) -> SimilarityScore:
    """Similarity of ``a`` and ``b`` or ``BELOW_THRESHOLD``.

    Args:
        a: First string.
        b: Second string.
        threshold: Minimum similarity of interest, in ``[0, 1]``.

    Returns:
        1.0 for equal strings, a score ``>= threshold``, or
        ``BELOW_THRESHOLD`` when the pair provably cannot reach it.
    """
    metrics.validate_threshold(threshold)
    if a == b:
        return 1.0

    min_len = min(len(a), len(b))
    max_len = max(len(a), len(b))

    # Length ratio bounds every metric's best possible score.
    if min_len / max_len < threshold:
        return BELOW_THRESHOLD

    if max_len < SHORT_TEXT_LIMIT:
        similarity = metrics.jaro_winkler(a, b)
    elif max_len < MEDIUM_TEXT_LIMIT:
        return metrics.threshold_similarity(a, b, threshold)
    elif max_len < LONG_TEXT_LIMIT:
        similarity = metrics.cosine_ngram(a, b, COSINE_NGRAM_SIZE)
    else:
        similarity = metrics.hash_jaccard(a, b, HASH_CHUNK_SIZE)

    return BELOW_THRESHOLD if similarity < threshold else similarity
