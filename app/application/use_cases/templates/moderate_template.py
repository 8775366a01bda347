"""Use case for moderating submitted templates."""

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_user_id
from app.domain.entities import (
    MODERATION_ACTIONS,
    TEMPLATE_STATUS_APPROVED,
    TEMPLATE_STATUS_REJECTED,
    ModerationEvent,
    Template,
)
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import ModerationLogRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .validators import ensure_status

logger = logging.getLogger(__name__)


def apply_moderation(
    tx: Session,
    current: Template,
    *,
    status: str,
    moderator_id: str,
    review_notes: str | None,
) -> Template:
    """Set ``current``'s status inside the caller's transaction and log it.

    Approving a template activates and lists it; rejecting it hides it and
    withdraws any manual featuring. Other statuses leave visibility alone.
    """

    now = now_in_app_timezone()
    is_active, is_listed = current.is_active, current.is_listed
    manually_featured, featured_at = current.manually_featured, current.featured_at
    if status == TEMPLATE_STATUS_APPROVED:
        is_active, is_listed = True, True
    elif status == TEMPLATE_STATUS_REJECTED:
        is_active, is_listed = False, False
        manually_featured, featured_at = False, None
    moderated = TemplateRepository(tx).update(
        replace(
            current,
            status=status,
            is_active=is_active,
            is_listed=is_listed,
            manually_featured=manually_featured,
            featured_at=featured_at,
            moderated_by=moderator_id,
            moderated_at=now,
            review_notes=review_notes if review_notes is not None else current.review_notes,
        )
    )
    ModerationLogRepository(tx).append(
        ModerationEvent(
            id=None,
            template_id=current.id,
            action=MODERATION_ACTIONS[status],
            moderator_id=moderator_id,
            previous_status=current.status,
            new_status=status,
            notes=review_notes,
            created_at=now,
        )
    )
    return moderated


def moderate_template(
    session: Session,
    *,
    template_id: int,
    status: str,
    moderator_id: str,
    review_notes: str | None = None,
) -> Template:
    """Record a moderation decision.

    Moving a template back to ``pending`` leaves its visibility as it was.
    Every decision is appended to the moderation log.
    """

    new_status = ensure_status(status)
    moderator = ensure_user_id(moderator_id)
    notes = (review_notes or "").strip() or None

    def _apply(tx: Session) -> Template:
        current = TemplateRepository(tx).get(template_id)
        if current is None:
            raise NotFoundError("Template", template_id)
        return apply_moderation(
            tx, current, status=new_status, moderator_id=moderator, review_notes=notes
        )

    # The log entry is not idempotent, so transient failures are not replayed.
    moderated = ContentStore(session).run(
        _apply, name=f"moderate_template[{template_id}]", retry_unavailable=False
    )
    logger.info("Template %s marked %s by %s", template_id, new_status, moderator)
    return moderated


__all__ = ["apply_moderation", "moderate_template"]
