"""Metric recomputation for one ranking snapshot.

`recompute` is the single entry point the list controller calls after every
edit. It copies grades and relevance flags out of the ranking once, clamps k,
and evaluates all five metrics from that copy so they always describe the
same state.
"""

import logging
from collections.abc import Sequence

from rankmetrics.data.models import MetricsSnapshot, RankedItem
from rankmetrics.evaluation.metrics import (
    average_precision,
    clamp_k,
    mrr,
    ndcg_components,
    parse_grade,
    precision_at_k,
    recall_at_k,
)

logger = logging.getLogger(__name__)


def recompute(ranking: Sequence[RankedItem], k: int) -> MetricsSnapshot:
    """Evaluate every metric on the given ranking at cutoff k.

    Args:
        ranking: Items in rank order.
        k: Cutoff rank. Clamped into [1, len(ranking)].

    Returns:
        MetricsSnapshot with all five metrics and the intermediate DCG/IDCG.
    """
    grades = tuple(parse_grade(item.grade_text) for item in ranking)
    relevance = tuple(item.is_relevant for item in ranking)

    clamped = clamp_k(k, len(ranking))
    if clamped != k:
        logger.warning(f"Cutoff k={k} outside [1, {len(ranking)}], using k={clamped}")

    dcg, idcg, ndcg = ndcg_components(grades, clamped)
    if ndcg is None:
        logger.debug(f"NDCG@{clamped} undefined for grades {list(grades)}")

    return MetricsSnapshot(
        k=clamped,
        ndcg=ndcg,
        precision=precision_at_k(relevance, clamped),
        recall=recall_at_k(relevance, clamped),
        mean_average_precision=average_precision(relevance, clamped),
        mean_reciprocal_rank=mrr(relevance, clamped),
        dcg=dcg,
        idcg=idcg,
    )


def format_metric(value: float | None, digits: int = 4) -> str:
    """Format a metric value for display.

    Args:
        value: Metric value, or None when undefined.
        digits: Number of decimal places.

    Returns:
        "N/A" for undefined values, otherwise fixed-point text.
    """
    if value is None:
        return "N/A"
    return f"{value:.{digits}f}"


def format_snapshot_table(snapshot: MetricsSnapshot, digits: int = 4) -> str:
    """Format a snapshot into a one-row metrics table.

    Args:
        snapshot: Metrics to display.
        digits: Number of decimal places.

    Returns:
        Formatted table string ready for printing.
    """
    col_width = max(12, digits + 6)
    header = ""
    row = ""
    for name, value in snapshot.as_dict().items():
        header += f"{name.label + '@' + str(snapshot.k):>{col_width}}"
        row += f"{format_metric(value, digits):>{col_width}}"

    lines = [
        "=== Ranking Metrics ===",
        "",
        header,
        "-" * len(header),
        row,
    ]
    return "\n".join(lines)
