"""Metric definitions shown in the help panel and by the CLI.

Formulas are LaTeX strings so the Streamlit app can render them with
st.latex; the CLI prints them as-is.
"""

from dataclasses import dataclass

from rankmetrics.data.models import MetricName


@dataclass(frozen=True)
class MetricDefinition:
    """Mathematical definition of one metric."""

    name: MetricName
    title: str
    formulas: tuple[str, ...] = ()
    note: str = ""


METRIC_DEFINITIONS: tuple[MetricDefinition, ...] = (
    MetricDefinition(
        name=MetricName.NDCG,
        title="NDCG@k",
        formulas=(
            r"NDCG@k = \frac{DCG@k}{IDCG@k}",
            r"DCG@k = \sum_{i=1}^k \frac{2^{rel_i} - 1}{\log_2(i+1)}",
        ),
        note=(
            "IDCG@k is the DCG@k of the ideal ordering: every grade in the list "
            "sorted from highest to lowest. NDCG is N/A when a grade is not a "
            "number or when the ideal DCG is zero."
        ),
    ),
    MetricDefinition(
        name=MetricName.PRECISION,
        title="Precision@k",
        formulas=(r"Precision@k = \frac{\text{relevant items in top } k}{k}",),
    ),
    MetricDefinition(
        name=MetricName.RECALL,
        title="Recall@k",
        formulas=(
            r"Recall@k = \frac{\text{relevant items in top } k}{\text{total relevant items}}",
        ),
        note="Recall is 0 when no item in the list is relevant.",
    ),
    MetricDefinition(
        name=MetricName.MAP,
        title="MAP@k",
        formulas=(
            r"AP@k = \frac{\sum_{i=1}^k P(i) \times rel(i)}{\text{relevant items in top } k}",
        ),
        note=(
            "P(i) is the precision over the first i items and rel(i) is 1 if "
            "the item at rank i is relevant, 0 otherwise. With a single query "
            "MAP equals AP. It is 0 when no relevant item is in the top k."
        ),
    ),
    MetricDefinition(
        name=MetricName.MRR,
        title="MRR@k",
        formulas=(r"MRR@k = \frac{1}{rank}",),
        note=(
            "rank is the position of the first relevant item. MRR is 0 when "
            "no relevant item is in the top k."
        ),
    ),
)


def get_definition(name: MetricName | str) -> MetricDefinition:
    """Look up the definition of a metric by name.

    Raises:
        ValueError: If the name is not a known metric.
    """
    metric = MetricName(name)
    for definition in METRIC_DEFINITIONS:
        if definition.name == metric:
            return definition
    raise ValueError(f"No definition for metric {name!r}")


def format_definitions() -> str:
    """Render all definitions as plain text."""
    lines: list[str] = []
    for definition in METRIC_DEFINITIONS:
        lines.append(definition.title)
        lines.extend(f"    {formula}" for formula in definition.formulas)
        if definition.note:
            lines.append(f"    {definition.note}")
        lines.append("")
    return "\n".join(lines).rstrip()
