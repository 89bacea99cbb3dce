"""String similarity measures used by the duplicate scanner.

Four independent, pure functions with different cost/accuracy trade-offs:

* ``bounded_levenshtein`` / ``threshold_similarity`` - exact edit distance in
  O(min(m, n)) memory with early termination once a budget is exceeded.
* ``jaro_winkler`` - cheap, typo-tolerant, suited to short strings.
* ``cosine_ngram`` - character n-gram frequency vectors, linear time.
* ``hash_jaccard`` - rolling-hash chunk fingerprints for very long texts.

None of these functions log or keep state; they are safe to call from any
thread.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Set

from promptscan.errors import ValidationFailure
from promptscan.similarity.sentinels import (
    BELOW_THRESHOLD,
    EXCEEDED,
    Distance,
    SimilarityScore,
)

_HASH_BASE = 31
_HASH_MASK = 0xFFFFFFFF
# Absorbs float error in ``length * (1 - threshold)`` (e.g. 10 * (1 - 0.9)).
_BUDGET_EPSILON = 1e-9


def validate_threshold(threshold: float, name: str = "threshold") -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ValidationFailure(
            f"{name} must be a number in [0, 1]", details={name: threshold}
        )
    if not 0.0 <= threshold <= 1.0:
        raise ValidationFailure(
            f"{name} must be in [0, 1], got {threshold}", details={name: threshold}
        )


def bounded_levenshtein(a: str, b: str, max_distance: float = math.inf) -> Distance:
    """Edit distance between ``a`` and ``b``, or ``EXCEEDED`` past ``max_distance``.

    Uses two rows sized to the shorter operand.  Returns ``EXCEEDED`` as soon
    as the length difference or the minimum of a completed row is larger
    than ``max_distance``; a finite result is always the exact distance.
    """
    if len(a) > len(b):
        a, b = b, a
    m, n = len(a), len(b)

    if n - m > max_distance:
        return EXCEEDED

    if m == 0:
        return n if n <= max_distance else EXCEEDED

    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        b_char = b[j - 1]
        curr_row[0] = j
        row_min = j
        for i in range(1, m + 1):
            cost = 0 if a[i - 1] == b_char else 1
            value = min(
                prev_row[i] + 1,         # deletion
                curr_row[i - 1] + 1,     # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            curr_row[i] = value
            if value < row_min:
                row_min = value

        if row_min > max_distance:
            return EXCEEDED

        prev_row, curr_row = curr_row, prev_row

    distance = prev_row[m]
    return distance if distance <= max_distance else EXCEEDED


def threshold_similarity(a: str, b: str, threshold: float = 0.0) -> SimilarityScore:
    """Normalized edit similarity ``(len(longer) - distance) / len(longer)``.

    Returns ``BELOW_THRESHOLD`` when the similarity cannot reach
    ``threshold``; the edit-distance budget is derived from it so hopeless
    pairs terminate early.
    """
    validate_threshold(threshold)
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    if not longer:
        return 1.0

    max_distance = math.floor(len(longer) * (1 - threshold) + _BUDGET_EPSILON)
    distance = bounded_levenshtein(longer, shorter, max_distance)
    if distance is EXCEEDED:
        return BELOW_THRESHOLD
    return (len(longer) - distance) / len(longer)


def jaro_winkler(a: str, b: str, prefix_scale: float = 0.1) -> float:
    """Jaro similarity with the Winkler common-prefix boost (prefix <= 4).

    Identical strings score 1.0; an empty operand (against a non-empty one)
    or zero matching characters score 0.0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    # Greedy matching depends on operand order; fix it so the result is symmetric.
    if (len(a), a) > (len(b), b):
        a, b = b, a

    window = max(len(a), len(b)) // 2 - 1
    a_matched = [False] * len(a)
    b_matched = [False] * len(b)

    matches = 0
    for i, ch in enumerate(a):
        start = max(0, i - window)
        end = min(i + window + 1, len(b))
        for j in range(start, end):
            if b_matched[j] or b[j] != ch:
                continue
            a_matched[i] = True
            b_matched[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, ch in enumerate(a):
        if not a_matched[i]:
            continue
        while not b_matched[k]:
            k += 1
        if ch != b[k]:
            transpositions += 1
        k += 1

    jaro = (
        matches / len(a)
        + matches / len(b)
        + (matches - transpositions / 2) / matches
    ) / 3

    prefix = 0
    for x, y in zip(a[:4], b[:4]):
        if x != y:
            break
        prefix += 1

    return min(1.0, jaro + prefix * prefix_scale * (1 - jaro))


def _ngram_counts(text: str, n: int) -> Counter:
    return Counter(text[i:i + n] for i in range(len(text) - n + 1))


def cosine_ngram(a: str, b: str, n: int = 2) -> float:
    """Cosine similarity of character n-gram frequency vectors."""
    if n < 1:
        raise ValidationFailure("n-gram size must be positive", details={"n": n})
    if a == b:
        return 1.0
    if len(a) < n or len(b) < n:
        return 0.0

    grams_a = _ngram_counts(a, n)
    grams_b = _ngram_counts(b, n)

    dot = sum(count * grams_b[gram] for gram, count in grams_a.items() if gram in grams_b)
    magnitude = (
        math.sqrt(sum(c * c for c in grams_a.values()))
        * math.sqrt(sum(c * c for c in grams_b.values()))
    )
    if magnitude == 0:
        return 0.0
    return min(1.0, dot / magnitude)


def rolling_hashes(text: str, chunk_size: int) -> Set[int]:
    """32-bit polynomial hashes (base 31) of every ``chunk_size`` window."""
    if len(text) < chunk_size:
        return set()

    # Weight of the outgoing character: base ** (chunk_size - 1) mod 2**32
    top_weight = pow(_HASH_BASE, chunk_size - 1, _HASH_MASK + 1)

    h = 0
    for ch in text[:chunk_size]:
        h = (h * _HASH_BASE + ord(ch)) & _HASH_MASK
    hashes = {h}

    for i in range(chunk_size, len(text)):
        outgoing = ord(text[i - chunk_size])
        h = ((h - outgoing * top_weight) * _HASH_BASE + ord(text[i])) & _HASH_MASK
        hashes.add(h)
    return hashes


def hash_jaccard(a: str, b: str, chunk_size: int = 100) -> float:
    """Jaccard similarity over rolling-hash fingerprints of fixed-size chunks.

    Approximate: hash collisions are accepted in exchange for linear cost on
    very long inputs.
    """
    if chunk_size < 1:
        raise ValidationFailure(
            "chunk size must be positive", details={"chunk_size": chunk_size}
        )
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    hashes_a = rolling_hashes(a, chunk_size)
    hashes_b = rolling_hashes(b, chunk_size)
    union = len(hashes_a | hashes_b)
    if union == 0:
        return 0.0
    return len(hashes_a & hashes_b) / union
