"""Use case regenerating the trending collections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    COLLECTION_TYPE_TRENDING,
    Collection,
    GenerationOutcome,
    TrendingMetadata,
)
from app.infrastructure.repositories import CollectionRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

MIN_TRENDING_TEMPLATES = 5
MIN_RATINGS_FOR_RATED = 5
NEW_TEMPLATE_WINDOW = timedelta(days=7)
SYSTEM_AUTHOR = "system"


@dataclass(frozen=True)
class TrendingAlgorithm:
    key: str
    name: str
    description: str
    sort_field: str
    limit: int
    featured: bool = False
    filters: dict[str, Any] = field(default_factory=dict)


TRENDING_ALGORITHMS: tuple[TrendingAlgorithm, ...] = (
    TrendingAlgorithm(
        "downloads_7d",
        "Most Downloaded (7 days)",
        "Templates with highest downloads in the last 7 days",
        sort_field="download_count",
        limit=20,
        featured=True,
    ),
    TrendingAlgorithm(
        "rated_30d",
        "Highest Rated (30 days)",
        "Best rated templates from the last 30 days",
        sort_field="average_rating",
        limit=15,
        filters={"min_ratings": MIN_RATINGS_FOR_RATED},
    ),
    TrendingAlgorithm(
        "rising_stars",
        "Rising Stars",
        "Templates with rapidly growing popularity",
        sort_field="growth_rate",
        limit=12,
        filters={"require_sort_value": True},
    ),
    TrendingAlgorithm(
        "new_notable",
        "New & Notable",
        "Recent templates gaining traction",
        sort_field="download_count",
        limit=10,
    ),
)


def trending_key(algorithm: str) -> str:
    return f"trending:{algorithm}"


def _candidates(
    repository: TemplateRepository, algorithm: TrendingAlgorithm, now: datetime
) -> list[int]:
    filters = dict(algorithm.filters)
    if algorithm.key == "new_notable":
        filters["created_since"] = now - NEW_TEMPLATE_WINDOW
    ranked = repository.rank(
        sort_field=algorithm.sort_field, limit=algorithm.limit, **filters
    )
    return [template.id for template in ranked]


def generate_trending(
    session: Session, *, now: datetime | None = None
) -> list[GenerationOutcome]:
    """Rebuild one collection per trending algorithm.

    An algorithm with fewer than five candidates is skipped and its previous
    collection, if any, stays in place. The run reads and writes in a single
    transaction.
    """

    moment = ensure_app_timezone(now) or now_in_app_timezone()
    refresh_hours = get_settings().trending_refresh_hours

    def _apply(tx: Session) -> list[GenerationOutcome]:
        templates = TemplateRepository(tx)
        collections = CollectionRepository(tx)
        outcomes: list[GenerationOutcome] = []
        for algorithm in TRENDING_ALGORITHMS:
            key = trending_key(algorithm.key)
            template_ids = _candidates(templates, algorithm, moment)
            if len(template_ids) < MIN_TRENDING_TEMPLATES:
                outcomes.append(
                    GenerationOutcome(
                        key=key, materialized=False, candidate_count=len(template_ids)
                    )
                )
                continue
            created, _ = collections.supersede(
                Collection(
                    id=None,
                    name=algorithm.name,
                    description=algorithm.description,
                    type=COLLECTION_TYPE_TRENDING,
                    template_ids=tuple(template_ids),
                    metadata=TrendingMetadata(
                        algorithm=algorithm.key,
                        refresh_interval_hours=refresh_hours,
                        generated_at=moment,
                    ),
                    created_by=SYSTEM_AUTHOR,
                    created_at=moment,
                    featured=algorithm.featured,
                    generator_key=key,
                )
            )
            outcomes.append(
                GenerationOutcome(
                    key=key,
                    materialized=True,
                    candidate_count=len(template_ids),
                    collection_id=created.id,
                )
            )
        return outcomes

    outcomes = ContentStore(session).run(_apply, name="generate_trending")
    for outcome in outcomes:
        if outcome.materialized:
            logger.info(
                "Trending collection %s materialized as %s with %s templates",
                outcome.key,
                outcome.collection_id,
                outcome.candidate_count,
            )
        else:
            logger.info(
                "Trending collection %s skipped: %s of %s required templates",
                outcome.key,
                outcome.candidate_count,
                MIN_TRENDING_TEMPLATES,
            )
    return outcomes


__all__ = [
    "MIN_TRENDING_TEMPLATES",
    "TRENDING_ALGORITHMS",
    "TrendingAlgorithm",
    "generate_trending",
    "trending_key",
]
