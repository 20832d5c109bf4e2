"""List state controller for the interactive ranking editor.

Owns the mutable ranking, the max grade and the cutoff k. Every mutation
re-clamps k and recomputes all five metrics from the post-mutation state, so
the exposed `metrics` snapshot never mixes old and new values.

The controller holds no presentation logic; the Streamlit app and the CLI
drive it through the mutation methods below.
"""

import logging
import math
import random
import re
from dataclasses import dataclass, replace

from rankmetrics.data.models import MetricsSnapshot, RankedItem
from rankmetrics.evaluation.metrics import clamp_k, parse_grade
from rankmetrics.evaluation.runner import recompute

_INT_PREFIX_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class ControllerConfig:
    """Configuration for the ranking controller.

    Attributes:
        list_size: Number of empty items created on initialization.
        max_grade: Initial upper bound for grades.
        relevance_probability: Chance that randomize() marks an item relevant.
        seed: Optional seed for randomize() and shuffle().
    """

    list_size: int = 10
    max_grade: int = 5
    relevance_probability: float = 0.5
    seed: int | None = None


def _to_int(value: int | float | str) -> int | None:
    """Read an integer from a widget value or user text.

    Text is read like parseInt: the leading optional sign and ASCII digits,
    ignoring anything after them ("1e3" reads as 1, "3.7" as 3).
    """
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX_RE.match(value.strip())
    return int(match.group()) if match else None


def _format_grade(grade: float) -> str:
    if grade.is_integer():
        return str(int(grade))
    return str(grade)


def _sort_key(item: RankedItem) -> float:
    grade = parse_grade(item.grade_text)
    return 0.0 if math.isnan(grade) else grade


class RankingController:
    """Holds the ranking under evaluation and keeps its metrics current.

    Items are addressed by position for edits and by stable id for moves.
    """

    def __init__(self, config: ControllerConfig | None = None) -> None:
        """Initialize the controller with an empty ranking.

        Args:
            config: Controller configuration. Defaults to ControllerConfig().
        """
        self.config = config or ControllerConfig()
        self.logger = logging.getLogger(__name__)
        self._rng = random.Random(self.config.seed)
        self._next_id = 0
        self._items: list[RankedItem] = [
            self._new_item() for _ in range(max(1, self.config.list_size))
        ]
        self._max_grade = max(1, self.config.max_grade)
        self._k = len(self._items)
        self._metrics = recompute(self._items, self._k)

    # ==================== Read Surface ====================

    @property
    def ranking(self) -> tuple[RankedItem, ...]:
        """Copies of the current items in rank order."""
        return tuple(replace(item) for item in self._items)

    @property
    def k(self) -> int:
        return self._k

    @property
    def max_grade(self) -> int:
        return self._max_grade

    @property
    def metrics(self) -> MetricsSnapshot:
        """Metrics for the current ranking and k."""
        return self._metrics

    def __len__(self) -> int:
        return len(self._items)

    # ==================== Item Edits ====================

    def set_grade(self, index: int, text: str) -> None:
        """Replace the grade text of the item at `index`."""
        self._check_index(index)
        self._items[index].grade_text = text
        self.logger.debug(f"Grade at position {index + 1} set to {text!r}")
        self._refresh()

    def set_relevance(self, index: int, is_relevant: bool) -> None:
        """Set the binary relevance flag of the item at `index`."""
        self._check_index(index)
        self._items[index].is_relevant = bool(is_relevant)
        self.logger.debug(f"Relevance at position {index + 1} set to {bool(is_relevant)}")
        self._refresh()

    # ==================== Scalar Settings ====================

    def set_max_grade(self, value: int | float | str) -> None:
        """Change the max grade and clamp existing grades down to it.

        Unparseable input falls back to 1. Grades that do not parse are left
        as typed; empty grades become "0".
        """
        parsed = _to_int(value)
        if parsed is None:
            self.logger.info(f"Ignoring max grade {value!r}, falling back to 1")
        self._max_grade = max(1, parsed or 1)

        for item in self._items:
            grade = parse_grade(item.grade_text)
            if math.isnan(grade):
                continue
            item.grade_text = _format_grade(min(grade, float(self._max_grade)))

        self.logger.debug(f"Max grade set to {self._max_grade}")
        self._refresh()

    def set_k(self, value: int | float | str) -> None:
        """Set the cutoff, clamped into [1, len(ranking)]."""
        parsed = _to_int(value)
        if parsed is None:
            self.logger.info(f"Ignoring cutoff {value!r}, falling back to 1")
        self._k = clamp_k(parsed or 1, len(self._items))
        self.logger.debug(f"Cutoff set to k={self._k}")
        self._refresh()

    # ==================== Structural Edits ====================

    def add_item(self) -> RankedItem:
        """Append an empty, non-relevant item and extend k by one.

        Returns:
            A copy of the new item.
        """
        item = self._new_item()
        self._items.append(item)
        self._k += 1
        self.logger.debug(f"Added {item.item_id}, list size {len(self._items)}")
        self._refresh()
        return replace(item)

    def remove_item(self) -> bool:
        """Remove the last item. The final remaining item is never removed.

        Returns:
            True if an item was removed.
        """
        if len(self._items) <= 1:
            self.logger.info("Cannot remove the only item in the ranking")
            return False

        removed = self._items.pop()
        self.logger.debug(f"Removed {removed.item_id}, list size {len(self._items)}")
        self._refresh()
        return True

    def move_item(self, item_id: str, target_id: str) -> None:
        """Move an item to the position currently held by another item.

        Items between the two positions shift by one, as in drag and drop.

        Raises:
            KeyError: If either id is not in the ranking.
        """
        if item_id == target_id:
            return

        old_index = self._index_of(item_id)
        new_index = self._index_of(target_id)
        self._items.insert(new_index, self._items.pop(old_index))
        self.logger.debug(f"Moved {item_id} from {old_index + 1} to {new_index + 1}")
        self._refresh()

    # ==================== Bulk Edits ====================

    def randomize(self) -> None:
        """Assign random integer grades in [0, max grade] and random relevance."""
        for item in self._items:
            item.grade_text = str(self._rng.randint(0, self._max_grade))
            item.is_relevant = self._rng.random() < self.config.relevance_probability
        self.logger.debug("Randomized grades and relevance")
        self._refresh()

    def shuffle(self) -> None:
        """Randomly permute the ranking."""
        self._rng.shuffle(self._items)
        self.logger.debug("Shuffled ranking")
        self._refresh()

    def sort_descending(self) -> None:
        """Order by grade, highest first (maximizes NDCG)."""
        self._items.sort(key=_sort_key, reverse=True)
        self.logger.debug("Sorted ranking by grade, descending")
        self._refresh()

    def sort_ascending(self) -> None:
        """Order by grade, lowest first (minimizes NDCG)."""
        self._items.sort(key=_sort_key)
        self.logger.debug("Sorted ranking by grade, ascending")
        self._refresh()

    # ==================== Internals ====================

    def _new_item(self) -> RankedItem:
        item = RankedItem(item_id=f"item-{self._next_id}")
        self._next_id += 1
        return item

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"Position {index} out of range for {len(self._items)} items")

    def _index_of(self, item_id: str) -> int:
        for i, item in enumerate(self._items):
            if item.item_id == item_id:
                return i
        raise KeyError(item_id)

    def _refresh(self) -> None:
        self._k = clamp_k(self._k, len(self._items))
        self._metrics = recompute(self._items, self._k)
