"""Standard information retrieval evaluation metrics.

Implements NDCG@K, Precision@K, Recall@K, MAP@K (average precision for a
single query) and MRR@K over one ranked list.

NDCG works on graded relevance; the other four work on binary relevance:
  - grades: ordered list of relevance grades (floats, possibly nan)
  - relevance: ordered list of booleans, True where the item is relevant

Every function evaluates only the first k positions. k is clamped into
[1, len(sequence)] as a last resort; callers are expected to clamp first.

NDCG returns None when it is undefined (an unparseable grade anywhere in the
list, or an ideal DCG of zero). Recall, MAP and MRR return 0.0 when there is
nothing to find.
"""

import math
import re
from collections.abc import Sequence

# Decimal and exponent forms, signed Infinity, and 0x/0o/0b integer literals.
# ASCII digits only; no digit-group underscores.
_DECIMAL_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_INFINITY_RE = re.compile(r"[+-]?Infinity")
_PREFIXED_INT_RE = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def parse_grade(text: str) -> float:
    """Parse a relevance grade typed by the user.

    Args:
        text: Raw grade text.

    Returns:
        The numeric grade. Empty or whitespace-only text counts as 0.0;
        anything that is not a number becomes nan. "Infinity" parses as inf,
        which makes NDCG undefined like any other overflowing gain.
    """
    stripped = text.strip()
    if not stripped:
        return 0.0
    if _DECIMAL_RE.fullmatch(stripped) or _INFINITY_RE.fullmatch(stripped):
        return float(stripped)
    if _PREFIXED_INT_RE.fullmatch(stripped):
        return float(int(stripped, 0))
    return math.nan


def clamp_k(k: int, length: int) -> int:
    """Clamp a cutoff into [1, length]."""
    return max(1, min(k, length))


def _gain(grade: float) -> float:
    try:
        return 2.0**grade - 1.0
    except OverflowError:
        return math.inf


def dcg_at_k(grades: Sequence[float], k: int) -> float:
    """Compute DCG@K = sum over i=1..k of (2^grade_i - 1) / log2(i + 1).

    Args:
        grades: Relevance grades in rank order.
        k: Number of top positions to score. Positions beyond the end of the
            list are not padded.

    Returns:
        Discounted cumulative gain of the first k grades.
    """
    return sum(_gain(grade) / math.log2(i + 2) for i, grade in enumerate(grades[:k]))


def ideal_dcg_at_k(grades: Sequence[float], k: int) -> float:
    """Compute IDCG@K: DCG@K of all grades sorted descending.

    The whole list is sorted, so grades ranked below the cutoff can
    contribute to the ideal prefix.
    """
    return dcg_at_k(sorted(grades, reverse=True), k)


def ndcg_components(
    grades: Sequence[float], k: int
) -> tuple[float | None, float | None, float | None]:
    """Compute DCG@K, IDCG@K and NDCG@K together.

    Args:
        grades: Relevance grades in rank order.
        k: Cutoff rank.

    Returns:
        (dcg, idcg, ndcg). All three are None if any grade is nan. Otherwise
        dcg and idcg are numbers and ndcg is None when idcg is zero or the
        ratio is not finite.
    """
    if any(math.isnan(grade) for grade in grades):
        return None, None, None

    k = clamp_k(k, len(grades))
    dcg = dcg_at_k(grades, k)
    idcg = ideal_dcg_at_k(grades, k)
    if idcg == 0:
        return dcg, idcg, None

    score = dcg / idcg
    if not math.isfinite(score):
        return dcg, idcg, None
    return dcg, idcg, score


def ndcg_at_k(grades: Sequence[float], k: int) -> float | None:
    """Compute NDCG@K = DCG@K / IDCG@K.

    Args:
        grades: Relevance grades in rank order.
        k: Cutoff rank.

    Returns:
        NDCG@K in [0.0, 1.0] for non-negative grades, or None if any grade is
        nan or the ideal DCG is zero (e.g. every grade is 0).
    """
    return ndcg_components(grades, k)[2]


def precision_at_k(relevance: Sequence[bool], k: int) -> float:
    """Compute Precision@K: fraction of the top K that is relevant.

    Args:
        relevance: Binary relevance flags in rank order.
        k: Number of top positions to consider.

    Returns:
        Precision@K value in [0.0, 1.0].
    """
    k = clamp_k(k, len(relevance))
    return sum(relevance[:k]) / k


def recall_at_k(relevance: Sequence[bool], k: int) -> float:
    """Compute Recall@K: fraction of all relevant items found in the top K.

    Args:
        relevance: Binary relevance flags in rank order.
        k: Number of top positions to consider.

    Returns:
        Recall@K value in [0.0, 1.0]. Returns 0.0 if nothing is relevant.
    """
    total_relevant = sum(relevance)
    if total_relevant == 0:
        return 0.0

    k = clamp_k(k, len(relevance))
    return sum(relevance[:k]) / total_relevant


def average_precision(relevance: Sequence[bool], k: int) -> float:
    """Compute Average Precision over the top K for a single query.

    AP@K = (1 / hits) * sum(precision@i * rel(i)) for i in 1..K

    where rel(i) = 1 if the item at rank i is relevant, 0 otherwise, and hits
    is the number of relevant items within the top K.

    Args:
        relevance: Binary relevance flags in rank order.
        k: Number of top positions to consider.

    Returns:
        Average precision in [0.0, 1.0]. Returns 0.0 if no relevant item
        appears in the top K.
    """
    k = clamp_k(k, len(relevance))
    hits = 0
    sum_precision = 0.0

    for i, is_relevant in enumerate(relevance[:k]):
        if is_relevant:
            hits += 1
            sum_precision += hits / (i + 1)

    if hits == 0:
        return 0.0

    return sum_precision / hits


def mrr(relevance: Sequence[bool], k: int) -> float:
    """Compute reciprocal rank: 1 / rank of the first relevant item in the top K.

    Args:
        relevance: Binary relevance flags in rank order.
        k: Number of top positions to consider.

    Returns:
        Reciprocal rank in (0.0, 1.0], or 0.0 if no relevant item is found.
    """
    k = clamp_k(k, len(relevance))
    for i, is_relevant in enumerate(relevance[:k]):
        if is_relevant:
            return 1.0 / (i + 1)
    return 0.0
