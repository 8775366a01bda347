"""Use case for re-deriving a template's cached quality score."""

from sqlalchemy.orm import Session

from app.domain.entities import QualityScore
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import RatingRepository, TemplateRepository
from app.infrastructure.store import ContentStore

from .scoring import compute_quality_score


def lock_template_ratings(session: Session, template_id: int) -> None:
    """Take the template's row lock for the rest of the transaction."""

    if not TemplateRepository(session).lock_for_rating(template_id):
        raise NotFoundError("Template", template_id)


def write_quality_score(session: Session, template_id: int) -> QualityScore:
    """Score the full rating set and cache the result on the template.

    The caller must hold the lock from :func:`lock_template_ratings`.
    """

    count, score_sum = RatingRepository(session).aggregate(template_id)
    score = compute_quality_score(count, score_sum)
    TemplateRepository(session).write_quality_score(template_id, score)
    return score


def recompute_quality_score(session: Session, *, template_id: int) -> QualityScore:
    """Rebuild the cached quality score of ``template_id`` from its ratings."""

    def _apply(tx: Session) -> QualityScore:
        lock_template_ratings(tx, template_id)
        return write_quality_score(tx, template_id)

    return ContentStore(session).run(
        _apply, name=f"recompute_quality_score[{template_id}]"
    )


__all__ = ["lock_template_ratings", "recompute_quality_score", "write_quality_score"]
