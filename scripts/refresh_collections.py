"""Regenerate the trending and seasonal collections.

Meant to be run from cron or a job queue, e.g. every ``TRENDING_REFRESH_HOURS``.
"""

from __future__ import annotations

import argparse
import logging

from app.application.use_cases.collections import generate_seasonal, generate_trending
from app.domain.errors import MarketplaceError
from app.infrastructure.database import SessionLocal, initialize_database

logger = logging.getLogger("refresh_collections")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the refresh run."""

    parser = argparse.ArgumentParser(
        description="Regenerate the marketplace's trending and seasonal collections.",
    )
    parser.add_argument(
        "--only",
        choices=("trending", "seasonal"),
        default=None,
        help="Run a single generator instead of both.",
    )
    parser.add_argument(
        "--month",
        type=int,
        default=None,
        help="Month used to pick active seasons (default: current month).",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Year stamped on seasonal collections (default: current year).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level for the run (default: INFO).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the requested generators and print one line per outcome."""

    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()

    session = SessionLocal()
    try:
        outcomes = []
        if args.only in (None, "trending"):
            outcomes.extend(generate_trending(session))
        if args.only in (None, "seasonal"):
            outcomes.extend(generate_seasonal(session, month=args.month, year=args.year))
    except MarketplaceError as exc:
        raise SystemExit(f"Collection refresh failed: {exc}") from exc
    finally:
        session.close()

    for outcome in outcomes:
        state = f"collection {outcome.collection_id}" if outcome.materialized else "skipped"
        print(f"{outcome.key}: {state} ({outcome.candidate_count} candidates)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
