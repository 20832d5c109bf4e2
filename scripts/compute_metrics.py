#!/usr/bin/env python3
"""CLI script to compute ranking metrics for one ranked list.

Grades are given in rank order; relevant items are given by their 1-based
positions. k defaults to the list length and is clamped into range.

Usage:
    python scripts/compute_metrics.py --grades G [G ...] [--relevant R ...] [-k K]

Examples:
    # Graded list with relevant items at ranks 1, 2 and 5
    python scripts/compute_metrics.py --grades 3 2 3 0 1 2 --relevant 1 2 5 -k 6

    # Also print the metric definitions
    python scripts/compute_metrics.py --grades 3 0 2 --explain
"""

import argparse
import logging
import sys

from rankmetrics.config import get_settings
from rankmetrics.data.models import RankedItem
from rankmetrics.evaluation.formulas import format_definitions
from rankmetrics.evaluation.runner import format_snapshot_table, recompute


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="Compute NDCG, Precision, Recall, MAP and MRR for a ranked list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--grades",
        nargs="+",
        required=True,
        help="Relevance grades in rank order (non-numeric grades make NDCG N/A)",
    )

    parser.add_argument(
        "--relevant",
        nargs="*",
        type=int,
        default=[],
        help="1-based positions of the items judged relevant",
    )

    parser.add_argument(
        "-k",
        type=int,
        default=None,
        help="Cutoff rank (default: length of the list)",
    )

    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print the metric definitions after the results",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL setting)",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for metric computation.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    logger = logging.getLogger(__name__)

    bad_positions = [p for p in args.relevant if not 1 <= p <= len(args.grades)]
    if bad_positions:
        logger.error(f"Relevant positions out of range 1..{len(args.grades)}: {bad_positions}")
        return 1

    relevant = set(args.relevant)
    ranking = [
        RankedItem(item_id=f"item-{i}", grade_text=grade, is_relevant=(i + 1) in relevant)
        for i, grade in enumerate(args.grades)
    ]
    k = args.k if args.k is not None else len(ranking)

    snapshot = recompute(ranking, k)
    logger.debug(f"DCG@{snapshot.k}={snapshot.dcg}, IDCG@{snapshot.k}={snapshot.idcg}")

    print(format_snapshot_table(snapshot, settings.display_precision))
    if args.explain:
        print()
        print(format_definitions())

    return 0


if __name__ == "__main__":
    sys.exit(main())
