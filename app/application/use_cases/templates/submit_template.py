"""Use case for submitting templates to the marketplace."""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_user_id
from app.application.use_cases.versions.snapshots import analyze_snapshot, parse_snapshot
from app.domain.entities import (
    INITIAL_VERSION,
    TEMPLATE_STATUS_PENDING,
    TEMPLATE_TYPE_FREE,
    Template,
)
from app.infrastructure.repositories import TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .validators import (
    ensure_category,
    ensure_description,
    ensure_name,
    ensure_pricing,
    normalize_tags,
)

logger = logging.getLogger(__name__)


def submit_template(
    session: Session,
    *,
    name: str,
    category: str,
    content: str | Mapping[str, Any],
    created_by: str,
    description: str | None = None,
    tags: Iterable[str] | None = None,
    creator_display_name: str | None = None,
    template_type: str = TEMPLATE_TYPE_FREE,
    price: Decimal | str | int | None = None,
    is_listed: bool = False,
) -> Template:
    """Create a template awaiting moderation.

    The submitted content becomes the template's snapshot at ``1.0.0``; the
    version history starts with the first content update.
    """

    snapshot = parse_snapshot(content)
    normalized_type, amount = ensure_pricing(template_type, price)
    template = Template(
        id=None,
        name=ensure_name(name),
        description=ensure_description(description),
        category=ensure_category(category),
        tags=normalize_tags(tags),
        status=TEMPLATE_STATUS_PENDING,
        is_listed=bool(is_listed),
        is_active=True,
        template_type=normalized_type,
        price=amount,
        content=snapshot,
        created_by=ensure_user_id(created_by),
        created_at=now_in_app_timezone(),
        creator_display_name=(creator_display_name or "").strip() or None,
        current_version=INITIAL_VERSION,
        version_count=0,
        ai_metadata=analyze_snapshot(snapshot),
    )

    saved = ContentStore(session).run(
        lambda tx: TemplateRepository(tx).create(template),
        name="submit_template",
    )
    logger.info(
        "Template %s '%s' submitted by %s for review",
        saved.id,
        saved.name,
        saved.created_by,
    )
    return saved


__all__ = ["submit_template"]
