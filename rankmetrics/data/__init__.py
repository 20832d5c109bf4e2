"""Domain models."""

from rankmetrics.data.models import MetricName, MetricsSnapshot, RankedItem

__all__ = ["MetricName", "MetricsSnapshot", "RankedItem"]
