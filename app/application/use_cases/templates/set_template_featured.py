"""Use cases for the moderator-curated featured template shelf."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import TEMPLATE_STATUS_APPROVED, Template
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

FEATURED_TEMPLATE_LIMIT = 20


def set_template_featured(
    session: Session, *, template_id: int, featured: bool = True
) -> Template:
    """Feature or unfeature a template by hand.

    Only approved templates can be featured. This flag is independent of the
    rating-derived ``quality_score.is_featured``.
    """

    def _apply(tx: Session) -> Template:
        repository = TemplateRepository(tx)
        current = repository.get(template_id)
        if current is None:
            raise NotFoundError("Template", template_id)
        if featured and current.status != TEMPLATE_STATUS_APPROVED:
            raise ValidationError("Only approved templates can be featured")
        if current.manually_featured == featured:
            return current
        return repository.update(
            replace(
                current,
                manually_featured=featured,
                featured_at=now_in_app_timezone() if featured else None,
            )
        )

    template = ContentStore(session).run(
        _apply, name=f"set_template_featured[{template_id}]"
    )
    logger.info(
        "Template %s %s", template_id, "featured" if featured else "unfeatured"
    )
    return template


def get_featured_templates(
    session: Session, *, limit: int = FEATURED_TEMPLATE_LIMIT
) -> Sequence[Template]:
    """Return the featured shelf, best rated first."""

    if limit < 1 or limit > 100:
        raise ValidationError("Limit must be between 1 and 100")
    return TemplateRepository(session).list_featured(limit=limit)


__all__ = ["get_featured_templates", "set_template_featured"]
