"""Use case for applying one moderation decision to many templates."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_user_id
from app.application.use_cases.templates.moderate_template import moderate_template
from app.application.use_cases.templates.validators import ensure_status
from app.domain.entities import BulkModerationResult
from app.domain.errors import MarketplaceError

from .validators import ensure_template_ids

logger = logging.getLogger(__name__)


def bulk_moderate(
    session: Session,
    *,
    template_ids: Iterable[int],
    status: str,
    moderator_id: str,
    review_notes: str | None = None,
) -> list[BulkModerationResult]:
    """Moderate each template in its own transaction.

    A template that cannot be moderated is reported in its result and does not
    stop the rest of the batch.
    """

    new_status = ensure_status(status)
    moderator = ensure_user_id(moderator_id)
    ids = ensure_template_ids(template_ids)

    results: list[BulkModerationResult] = []
    for template_id in ids:
        try:
            template = moderate_template(
                session,
                template_id=template_id,
                status=new_status,
                moderator_id=moderator,
                review_notes=review_notes,
            )
        except MarketplaceError as exc:
            logger.warning("Bulk moderation skipped template %s: %s", template_id, exc)
            results.append(
                BulkModerationResult(template_id=template_id, success=False, error=str(exc))
            )
            continue
        results.append(
            BulkModerationResult(template_id=template_id, success=True, status=template.status)
        )

    succeeded = sum(1 for result in results if result.success)
    logger.info(
        "Bulk moderation by %s marked %s/%s template(s) %s",
        moderator,
        succeeded,
        len(results),
        new_status,
    )
    return results


__all__ = ["bulk_moderate"]
