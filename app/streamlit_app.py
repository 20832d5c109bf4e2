"""Streamlit UI for the IR Metrics Simulator.

Users edit a ranked list of graded relevance judgments and watch NDCG,
Precision, Recall, MAP and MRR at cutoff k update after every change.

Usage:
    streamlit run app/streamlit_app.py
"""

import logging
import math

import streamlit as st
from dotenv import load_dotenv

from rankmetrics.config import Settings
from rankmetrics.data.models import MetricsSnapshot
from rankmetrics.evaluation.formulas import METRIC_DEFINITIONS
from rankmetrics.evaluation.metrics import parse_grade
from rankmetrics.evaluation.runner import format_metric
from rankmetrics.state.controller import ControllerConfig, RankingController

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

CONTROLLER_KEY = "controller"
K_KEY = "k_input"
MAX_GRADE_KEY = "max_grade_input"


# ==================== Logging ====================


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the app process.

    Streamlit reruns the script on every interaction, so handlers are only
    installed once; the level is applied on every run.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(level)


# ==================== Cached Resources ====================


@st.cache_resource
def load_settings() -> Settings:
    """Load application settings (cached across reruns)."""
    return Settings()


def get_controller() -> RankingController:
    """Return this session's controller, creating it on first run."""
    if CONTROLLER_KEY not in st.session_state:
        settings = load_settings()
        st.session_state[CONTROLLER_KEY] = RankingController(
            ControllerConfig(
                list_size=settings.default_list_size,
                max_grade=settings.default_max_grade,
                relevance_probability=settings.relevance_probability,
                seed=settings.random_seed,
            )
        )
        logger.info("Created ranking controller for new session")
    return st.session_state[CONTROLLER_KEY]


def _grade_key(item_id: str) -> str:
    return f"grade-{item_id}"


def _relevance_key(item_id: str) -> str:
    return f"relevant-{item_id}"


def _position(controller: RankingController, item_id: str) -> int:
    for i, item in enumerate(controller.ranking):
        if item.item_id == item_id:
            return i
    raise KeyError(item_id)


def sync_widget_state(controller: RankingController) -> None:
    """Copy controller values into widget state before widgets are drawn.

    Bulk edits (randomize, max grade clamping) change values the widgets
    would otherwise keep from the previous run.
    """
    st.session_state[K_KEY] = controller.k
    st.session_state[MAX_GRADE_KEY] = controller.max_grade
    for item in controller.ranking:
        st.session_state[_grade_key(item.item_id)] = item.grade_text
        st.session_state[_relevance_key(item.item_id)] = item.is_relevant


# ==================== Widget Callbacks ====================


def on_grade_change(item_id: str) -> None:
    controller = get_controller()
    controller.set_grade(_position(controller, item_id), st.session_state[_grade_key(item_id)])


def on_relevance_change(item_id: str) -> None:
    controller = get_controller()
    controller.set_relevance(
        _position(controller, item_id), st.session_state[_relevance_key(item_id)]
    )


def on_k_change() -> None:
    get_controller().set_k(st.session_state[K_KEY])


def on_max_grade_change() -> None:
    get_controller().set_max_grade(st.session_state[MAX_GRADE_KEY])


# ==================== Sidebar ====================


def render_sidebar() -> None:
    """Render the metric definitions help panel."""
    with st.sidebar:
        st.header("Metric Definitions")
        for definition in METRIC_DEFINITIONS:
            st.subheader(definition.title)
            for formula in definition.formulas:
                st.latex(formula)
            if definition.note:
                st.caption(definition.note)


# ==================== Metrics Display ====================


def render_metrics(snapshot: MetricsSnapshot, digits: int = 4) -> None:
    """Render the five metric tiles.

    Args:
        snapshot: Metrics for the current ranking.
        digits: Decimal places to show.
    """
    columns = st.columns(len(snapshot.as_dict()))
    for column, (name, value) in zip(columns, snapshot.as_dict().items()):
        with column:
            st.metric(f"{name.label}@{snapshot.k}", format_metric(value, digits))


# ==================== Ranking Editor ====================


def render_settings_row(controller: RankingController) -> None:
    col1, col2 = st.columns(2)
    with col1:
        st.number_input(
            "Max grade",
            min_value=1,
            step=1,
            key=MAX_GRADE_KEY,
            on_change=on_max_grade_change,
        )
    with col2:
        st.number_input(
            "k",
            min_value=1,
            max_value=len(controller),
            step=1,
            key=K_KEY,
            on_change=on_k_change,
            help="Cutoff rank: only the top k items are evaluated.",
        )


def render_item_row(controller: RankingController, index: int) -> None:
    """Render one ranking row: position, grade, grade bar, relevance, reorder.

    Args:
        controller: Session controller.
        index: 0-based position of the row.
    """
    ranking = controller.ranking
    item = ranking[index]

    col_rank, col_grade, col_bar, col_rel, col_up, col_down = st.columns([1, 4, 3, 1, 1, 1])
    with col_rank:
        st.markdown(f"**{index + 1}.**")
    with col_grade:
        st.text_input(
            f"Grade {index + 1}",
            key=_grade_key(item.item_id),
            on_change=on_grade_change,
            args=(item.item_id,),
            placeholder="Relevance grade",
            label_visibility="collapsed",
        )
    with col_bar:
        grade = parse_grade(item.grade_text)
        if not math.isnan(grade):
            st.progress(min(max(grade / controller.max_grade, 0.0), 1.0))
        else:
            st.caption("invalid")
    with col_rel:
        st.checkbox(
            f"Relevant {index + 1}",
            key=_relevance_key(item.item_id),
            on_change=on_relevance_change,
            args=(item.item_id,),
            label_visibility="collapsed",
        )
    with col_up:
        st.button(
            "↑",
            key=f"up-{item.item_id}",
            disabled=index == 0,
            on_click=controller.move_item,
            args=(item.item_id, ranking[index - 1].item_id) if index > 0 else None,
        )
    with col_down:
        st.button(
            "↓",
            key=f"down-{item.item_id}",
            disabled=index == len(ranking) - 1,
            on_click=controller.move_item,
            args=(item.item_id, ranking[index + 1].item_id) if index < len(ranking) - 1 else None,
        )


def render_list_actions(controller: RankingController) -> None:
    col1, col2 = st.columns(2)
    with col1:
        st.button(
            "Remove",
            on_click=controller.remove_item,
            disabled=len(controller) <= 1,
            use_container_width=True,
        )
    with col2:
        st.button("Add", on_click=controller.add_item, use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.button("Random", on_click=controller.randomize, use_container_width=True)
        st.button(
            "Sort for max NDCG", on_click=controller.sort_descending, use_container_width=True
        )
    with col2:
        st.button("Shuffle", on_click=controller.shuffle, use_container_width=True)
        st.button(
            "Sort for min NDCG", on_click=controller.sort_ascending, use_container_width=True
        )


# ==================== Main App ====================


def main() -> None:
    """Main Streamlit application entry point."""
    st.set_page_config(page_title="IR Metrics Simulator", layout="centered")

    settings = load_settings()
    setup_logging(settings.log_level)
    controller = get_controller()
    sync_widget_state(controller)

    st.title(f"IR Metrics Simulator (list size: {len(controller)})")
    st.markdown(
        "Enter a relevance grade for each ranked item and tick the items that count "
        "as relevant. Metrics are recomputed after every change."
    )

    render_sidebar()
    render_metrics(controller.metrics, settings.display_precision)
    st.divider()

    render_settings_row(controller)
    for index in range(len(controller)):
        render_item_row(controller, index)

    st.divider()
    render_list_actions(controller)


if __name__ == "__main__":
    main()
