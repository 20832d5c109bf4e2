"""Data models for the ranking metrics simulator.

All domain objects are defined here as dataclasses. The metrics engine only
reads grades and relevance flags from them; identifiers belong to the
list controller.
"""

from dataclasses import dataclass
from enum import StrEnum

# ==================== Ranking Models ====================


@dataclass
class RankedItem:
    """One position in the ranking under evaluation.

    The identifier is stable across reorders, unlike the position.
    """

    item_id: str
    grade_text: str = ""  # Graded relevance as typed, parsed by the engine
    is_relevant: bool = False  # Binary relevance, independent of the grade


# ==================== Metric Models ====================


class MetricName(StrEnum):
    """The five ranking metrics, in display order."""

    NDCG = "ndcg"
    PRECISION = "precision"
    RECALL = "recall"
    MAP = "map"
    MRR = "mrr"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    MetricName.NDCG: "NDCG",
    MetricName.PRECISION: "Precision",
    MetricName.RECALL: "Recall",
    MetricName.MAP: "MAP",
    MetricName.MRR: "MRR",
}


@dataclass(frozen=True)
class MetricsSnapshot:
    """All five metrics computed together from one (ranking, k) snapshot.

    `ndcg`, `dcg` and `idcg` are None when a grade fails to parse; `ndcg` is
    also None when the ideal DCG is zero. The binary-relevance metrics are
    always numbers.
    """

    k: int
    ndcg: float | None
    precision: float
    recall: float
    mean_average_precision: float
    mean_reciprocal_rank: float
    dcg: float | None = None
    idcg: float | None = None

    def as_dict(self) -> dict[MetricName, float | None]:
        """Return metric name → value in display order."""
        return {
            MetricName.NDCG: self.ndcg,
            MetricName.PRECISION: self.precision,
            MetricName.RECALL: self.recall,
            MetricName.MAP: self.mean_average_precision,
            MetricName.MRR: self.mean_reciprocal_rank,
        }
