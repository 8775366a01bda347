"""Use case regenerating the seasonal collections."""

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import (
    COLLECTION_TYPE_SEASONAL,
    Collection,
    GenerationOutcome,
    SeasonalMetadata,
)
from app.domain.errors import ValidationError
from app.infrastructure.repositories import CollectionRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .generate_trending import SYSTEM_AUTHOR
from .seasons import Season, active_seasons, season_window

logger = logging.getLogger(__name__)

MIN_SEASONAL_TEMPLATES = 3
SEASONAL_TEMPLATE_LIMIT = 15


def seasonal_key(season: Season, year: int) -> str:
    """Key of the collection for the season whose window starts in ``year``."""

    return f"seasonal:{season.key}:{year}"


def generate_seasonal(
    session: Session, *, month: int | None = None, year: int | None = None
) -> list[GenerationOutcome]:
    """Rebuild the collections of every season active in ``month``.

    Candidates are approved, listed templates tagged with one of the season's
    keywords, best quality score first. Defaults to the current month.

    A season is identified by the year its window opens, so the December and
    January runs of one winter supersede the same collection. Seasonal
    collections whose window closed before ``month`` are retired in the same
    transaction.
    """

    today = now_in_app_timezone()
    month = today.month if month is None else month
    year = today.year if year is None else year
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 < year < 9999:
        raise ValidationError("Year is out of range")

    seasons = active_seasons(month)
    first_of_month = date(year, month, 1)

    def _apply(tx: Session) -> tuple[list[GenerationOutcome], list[int]]:
        templates = TemplateRepository(tx)
        collections = CollectionRepository(tx)
        retired = collections.retire_seasonal_ended_before(first_of_month)
        outcomes: list[GenerationOutcome] = []
        for season in seasons:
            start_date, end_date = season_window(season, month, year)
            key = seasonal_key(season, start_date.year)
            template_ids: list[int] = []
            if season.keywords:
                ranked = templates.rank(
                    sort_field="quality_score",
                    limit=SEASONAL_TEMPLATE_LIMIT,
                    any_tags=season.keywords,
                )
                template_ids = [template.id for template in ranked]
            if len(template_ids) < MIN_SEASONAL_TEMPLATES:
                outcomes.append(
                    GenerationOutcome(
                        key=key, materialized=False, candidate_count=len(template_ids)
                    )
                )
                continue
            created, _ = collections.supersede(
                Collection(
                    id=None,
                    name=f"{season.name} Collection {start_date.year}",
                    description=f"Beautiful {season.name.lower()} templates for your projects",
                    type=COLLECTION_TYPE_SEASONAL,
                    template_ids=tuple(template_ids),
                    metadata=SeasonalMetadata(
                        season=season.key,
                        year=start_date.year,
                        start_date=start_date,
                        end_date=end_date,
                        theme_color=season.theme_color,
                    ),
                    created_by=SYSTEM_AUTHOR,
                    created_at=now_in_app_timezone(),
                    featured=True,
                    generator_key=key,
                    tags=season.keywords,
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
        return outcomes, retired

    outcomes, retired = ContentStore(session).run(
        _apply, name=f"generate_seasonal[{year}-{month:02d}]"
    )
    if retired:
        logger.info(
            "Retired %s seasonal collection(s) that ended before %s: %s",
            len(retired),
            first_of_month.isoformat(),
            retired,
        )
    for outcome in outcomes:
        if outcome.materialized:
            logger.info(
                "Seasonal collection %s materialized as %s with %s templates",
                outcome.key,
                outcome.collection_id,
                outcome.candidate_count,
            )
        else:
            logger.info(
                "Seasonal collection %s skipped: %s of %s required templates",
                outcome.key,
                outcome.candidate_count,
                MIN_SEASONAL_TEMPLATES,
            )
    return outcomes


__all__ = ["MIN_SEASONAL_TEMPLATES", "generate_seasonal", "seasonal_key"]
