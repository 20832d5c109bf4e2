"""Tests for the ranking list controller.

Every mutation must leave k inside [1, len] and a fresh metrics snapshot.
"""

import logging

import pytest

from rankmetrics.state.controller import ControllerConfig, RankingController


def _make_controller(grades: list[str], relevant: list[bool], **config) -> RankingController:
    controller = RankingController(ControllerConfig(list_size=len(grades), **config))
    for i, (grade, flag) in enumerate(zip(grades, relevant)):
        controller.set_grade(i, grade)
        controller.set_relevance(i, flag)
    return controller


@pytest.fixture
def controller() -> RankingController:
    """Reference list: grades 3,2,3,0,1,2 relevant at ranks 1, 2, 5."""
    return _make_controller(
        ["3", "2", "3", "0", "1", "2"],
        [True, True, False, False, True, False],
        seed=7,
    )


def _grades(controller: RankingController) -> list[str]:
    return [item.grade_text for item in controller.ranking]


def _ids(controller: RankingController) -> list[str]:
    return [item.item_id for item in controller.ranking]


# ==================== Initial State ====================


class TestInitialState:
    def test_defaults(self) -> None:
        controller = RankingController()

        assert len(controller) == 10
        assert controller.k == 10
        assert controller.max_grade == 5
        assert all(item.grade_text == "" for item in controller.ranking)
        assert not any(item.is_relevant for item in controller.ranking)

    def test_initial_metrics(self) -> None:
        metrics = RankingController().metrics

        assert metrics.k == 10
        assert metrics.ndcg is None
        assert metrics.precision == 0.0
        assert metrics.recall == 0.0
        assert metrics.mean_average_precision == 0.0
        assert metrics.mean_reciprocal_rank == 0.0

    def test_unique_ids(self) -> None:
        ids = _ids(RankingController())
        assert len(set(ids)) == len(ids)

    def test_configured_size(self) -> None:
        controller = RankingController(ControllerConfig(list_size=3, max_grade=2))

        assert len(controller) == 3
        assert controller.k == 3
        assert controller.max_grade == 2


# ==================== Edits ====================


class TestItemEdits:
    def test_metrics_follow_edits(self, controller: RankingController) -> None:
        metrics = controller.metrics

        assert metrics.ndcg == pytest.approx(0.948811, abs=1e-6)
        assert metrics.precision == 0.5
        assert metrics.recall == 1.0
        assert metrics.mean_average_precision == pytest.approx(2.6 / 3)
        assert metrics.mean_reciprocal_rank == 1.0

    def test_invalid_grade_only_affects_ndcg(self, controller: RankingController) -> None:
        controller.set_grade(2, "three")
        metrics = controller.metrics

        assert metrics.ndcg is None
        assert metrics.precision == 0.5
        assert metrics.recall == 1.0
        assert metrics.mean_reciprocal_rank == 1.0

    def test_relevance_toggle(self, controller: RankingController) -> None:
        controller.set_relevance(0, False)

        assert controller.metrics.mean_reciprocal_rank == 0.5
        assert controller.metrics.recall == 1.0

    def test_index_out_of_range(self, controller: RankingController) -> None:
        with pytest.raises(IndexError):
            controller.set_grade(6, "1")
        with pytest.raises(IndexError):
            controller.set_relevance(-1, True)

    def test_ranking_is_a_copy(self, controller: RankingController) -> None:
        controller.ranking[0].grade_text = "0"

        assert controller.ranking[0].grade_text == "3"


# ==================== Cutoff ====================


class TestCutoff:
    def test_set_k(self, controller: RankingController) -> None:
        controller.set_k(3)

        assert controller.k == 3
        assert controller.metrics.k == 3
        assert controller.metrics.precision == pytest.approx(2 / 3)

    def test_set_k_clamps(self, controller: RankingController) -> None:
        controller.set_k(100)
        assert controller.k == 6

        controller.set_k(0)
        assert controller.k == 1

        controller.set_k(-4)
        assert controller.k == 1

    def test_set_k_from_text(self, controller: RankingController) -> None:
        controller.set_k("4")
        assert controller.k == 4

        controller.set_k("lots")
        assert controller.k == 1

    def test_set_k_reads_leading_integer(self, controller: RankingController) -> None:
        controller.set_k("1e3")
        assert controller.k == 1

        controller.set_k(" 3.7")
        assert controller.k == 3

        controller.set_k("5 items")
        assert controller.k == 5

        controller.set_k(2.9)
        assert controller.k == 2


# ==================== Max Grade ====================


class TestMaxGrade:
    def test_grades_clamped_to_new_max(self, controller: RankingController) -> None:
        controller.set_max_grade(2)

        assert controller.max_grade == 2
        assert _grades(controller) == ["2", "2", "2", "0", "1", "2"]

    def test_empty_grade_becomes_zero(self) -> None:
        controller = RankingController(ControllerConfig(list_size=2))
        controller.set_grade(0, "4")
        controller.set_max_grade(3)

        assert _grades(controller) == ["3", "0"]

    def test_fractional_and_invalid_grades(self) -> None:
        controller = _make_controller(["2.5", "abc", "4.0"], [False, False, False])
        controller.set_max_grade(5)

        assert _grades(controller) == ["2.5", "abc", "4"]

    def test_invalid_max_grade_falls_back_to_one(self, controller: RankingController) -> None:
        controller.set_max_grade("high")

        assert controller.max_grade == 1
        assert _grades(controller) == ["1", "1", "1", "0", "1", "1"]

    def test_max_grade_at_least_one(self, controller: RankingController) -> None:
        controller.set_max_grade(-3)
        assert controller.max_grade == 1

    def test_max_grade_reads_leading_integer(self, controller: RankingController) -> None:
        controller.set_max_grade("2abc")

        assert controller.max_grade == 2
        assert _grades(controller) == ["2", "2", "2", "0", "1", "2"]

    def test_max_grade_exponent_text(self, controller: RankingController) -> None:
        controller.set_max_grade("1e3")
        assert controller.max_grade == 1


# ==================== Structure ====================


class TestAddRemove:
    def test_add_item_extends_k(self, controller: RankingController) -> None:
        controller.set_k(3)
        item = controller.add_item()

        assert len(controller) == 7
        assert controller.k == 4
        assert controller.ranking[-1].item_id == item.item_id
        assert item.grade_text == ""
        assert not item.is_relevant

    def test_remove_item_clamps_k(self, controller: RankingController) -> None:
        assert controller.remove_item() is True

        assert len(controller) == 5
        assert controller.k == 5
        assert controller.metrics.k == 5

    def test_remove_keeps_smaller_k(self, controller: RankingController) -> None:
        controller.set_k(2)
        controller.remove_item()

        assert controller.k == 2

    def test_cannot_remove_last_item(self, caplog: pytest.LogCaptureFixture) -> None:
        controller = RankingController(ControllerConfig(list_size=1))

        with caplog.at_level(logging.INFO, logger="rankmetrics.state.controller"):
            assert controller.remove_item() is False

        assert len(controller) == 1
        assert controller.k == 1
        assert "Cannot remove" in caplog.text

    def test_ids_not_reused(self, controller: RankingController) -> None:
        controller.remove_item()
        controller.add_item()

        ids = _ids(controller)
        assert len(set(ids)) == len(ids)
        assert ids[-1] == "item-6"


class TestMoveItem:
    def test_move_down(self, controller: RankingController) -> None:
        controller.move_item("item-0", "item-2")

        assert _ids(controller)[:4] == ["item-1", "item-2", "item-0", "item-3"]
        assert controller.metrics.mean_reciprocal_rank == 1.0

    def test_move_up(self, controller: RankingController) -> None:
        controller.move_item("item-4", "item-0")

        assert _ids(controller)[:3] == ["item-4", "item-0", "item-1"]
        assert _grades(controller)[0] == "1"

    def test_move_onto_itself(self, controller: RankingController) -> None:
        before = _ids(controller)
        controller.move_item("item-3", "item-3")
        assert _ids(controller) == before

    def test_unknown_id(self, controller: RankingController) -> None:
        with pytest.raises(KeyError):
            controller.move_item("item-0", "item-99")

    def test_move_updates_ndcg(self) -> None:
        controller = _make_controller(["0", "3"], [False, True])
        assert controller.metrics.ndcg < 1.0

        controller.move_item("item-1", "item-0")
        assert controller.metrics.ndcg == 1.0
        assert controller.metrics.mean_reciprocal_rank == 1.0


# ==================== Bulk Edits ====================


class TestBulkEdits:
    def test_sort_descending_maximizes_ndcg(self, controller: RankingController) -> None:
        controller.sort_descending()

        assert _grades(controller) == ["3", "3", "2", "2", "1", "0"]
        assert controller.metrics.ndcg == pytest.approx(1.0)

    def test_sort_descending_twice(self, controller: RankingController) -> None:
        controller.sort_descending()
        once = controller.metrics.ndcg
        controller.sort_descending()

        assert controller.metrics.ndcg == once

    def test_sort_is_stable(self, controller: RankingController) -> None:
        controller.sort_descending()
        assert _ids(controller) == ["item-0", "item-2", "item-1", "item-5", "item-4", "item-3"]

    def test_sort_ascending(self, controller: RankingController) -> None:
        controller.sort_ascending()

        assert _grades(controller) == ["0", "1", "2", "2", "3", "3"]
        assert controller.metrics.ndcg < 1.0

    def test_sort_invalid_grades_as_zero(self) -> None:
        controller = _make_controller(["x", "2", "1"], [False, False, False])
        controller.sort_descending()

        assert _grades(controller) == ["2", "1", "x"]

    def test_randomize_within_bounds(self, controller: RankingController) -> None:
        controller.randomize()

        for item in controller.ranking:
            assert 0 <= int(item.grade_text) <= controller.max_grade

    def test_randomize_is_seeded(self) -> None:
        first = RankingController(ControllerConfig(seed=3))
        second = RankingController(ControllerConfig(seed=3))
        first.randomize()
        second.randomize()

        assert first.ranking == second.ranking
        assert first.metrics == second.metrics

    def test_randomize_relevance_probability(self) -> None:
        never = RankingController(ControllerConfig(relevance_probability=0.0, seed=1))
        always = RankingController(ControllerConfig(relevance_probability=1.0, seed=1))
        never.randomize()
        always.randomize()

        assert not any(item.is_relevant for item in never.ranking)
        assert all(item.is_relevant for item in always.ranking)

    def test_shuffle_is_permutation(self, controller: RankingController) -> None:
        before = sorted(_ids(controller))
        controller.shuffle()

        assert sorted(_ids(controller)) == before
        assert controller.metrics.k == controller.k
