"""Use case for rating a template."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import QualityScore
from app.infrastructure.repositories import RatingRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .recompute_quality_score import lock_template_ratings, write_quality_score
from .validators import ensure_comment, ensure_score, ensure_user_id

logger = logging.getLogger(__name__)


def submit_rating(
    session: Session,
    *,
    template_id: int,
    user_id: str,
    score: int,
    comment: str | None = None,
) -> QualityScore:
    """Record ``user_id``'s rating and return the template's new quality score.

    A second rating from the same user replaces the first one.
    """

    valid_score = ensure_score(score)
    valid_comment = ensure_comment(comment)
    valid_user = ensure_user_id(user_id)

    def _apply(tx: Session) -> QualityScore:
        # Take the template row lock before touching the rating set.
        lock_template_ratings(tx, template_id)
        RatingRepository(tx).upsert(
            template_id=template_id,
            user_id=valid_user,
            score=valid_score,
            comment=valid_comment,
            now=now_in_app_timezone(),
        )
        return write_quality_score(tx, template_id)

    quality = ContentStore(session).run(
        _apply, name=f"submit_rating[{template_id}:{valid_user}]"
    )
    logger.debug(
        "Template %s rated %s by %s; %s ratings, average %.2f",
        template_id,
        valid_score,
        valid_user,
        quality.total_ratings,
        quality.average,
    )
    return quality


__all__ = ["submit_rating"]
