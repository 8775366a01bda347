"""Use case for listing the ratings of a template."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Rating
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import RatingRepository, TemplateRepository


def list_template_ratings(
    session: Session, template_id: int, *, limit: int | None = 100
) -> Sequence[Rating]:
    """Return the ratings of ``template_id``, newest first."""

    if TemplateRepository(session).get(template_id) is None:
        raise NotFoundError("Template", template_id)
    return RatingRepository(session).list_for_template(template_id, limit=limit)


__all__ = ["list_template_ratings"]
