"""Ranking metrics, recomputation, and metric definitions."""

from rankmetrics.evaluation.formulas import METRIC_DEFINITIONS, MetricDefinition, get_definition
from rankmetrics.evaluation.metrics import (
    average_precision,
    dcg_at_k,
    ideal_dcg_at_k,
    mrr,
    ndcg_at_k,
    ndcg_components,
    parse_grade,
    precision_at_k,
    recall_at_k,
)
from rankmetrics.evaluation.runner import format_metric, format_snapshot_table, recompute

__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "average_precision",
    "dcg_at_k",
    "format_metric",
    "format_snapshot_table",
    "get_definition",
    "ideal_dcg_at_k",
    "mrr",
    "ndcg_at_k",
    "ndcg_components",
    "parse_grade",
    "precision_at_k",
    "recall_at_k",
    "recompute",
]
