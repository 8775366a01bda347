"""Use cases for browsing the template catalogue."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.pagination import paginate
from app.domain.entities import Page, Template
from app.domain.errors import ValidationError
from app.infrastructure.repositories import TemplateRepository

from .validators import ensure_category, ensure_status

SORT_OPTIONS = ("newest", "popular", "rating", "usage")
AI_TEMPLATE_LIMIT = 50


def list_templates(
    session: Session,
    *,
    category: str | None = None,
    template_type: str | None = None,
    created_by: str | None = None,
    only_quality: bool = False,
    only_featured: bool = False,
    search: str | None = None,
    sort_by: str = "newest",
    limit: int = 20,
    cursor: str | None = None,
) -> Page[Template]:
    """Return one page of active templates matching the filters."""

    if sort_by not in SORT_OPTIONS:
        raise ValidationError(f"sort_by must be one of: {', '.join(SORT_OPTIONS)}")
    normalized_category = ensure_category(category) if category else None
    repository = TemplateRepository(session)

    def _fetch(skip: int, size: int) -> Sequence[Template]:
        return repository.list(
            skip=skip,
            limit=size,
            category=normalized_category,
            template_type=template_type,
            created_by=created_by,
            only_quality=only_quality,
            only_featured=only_featured,
            search=(search or "").strip() or None,
            sort_by=sort_by,
        )

    return paginate(_fetch, limit=limit, cursor=cursor)


def list_quality_templates_for_ai(
    session: Session, *, category: str | None = None
) -> Sequence[Template]:
    """Return AI-eligible templates, best rated first."""

    return TemplateRepository(session).list(
        limit=AI_TEMPLATE_LIMIT,
        category=ensure_category(category) if category else None,
        only_quality=True,
        sort_by="rating",
    )


def list_templates_by_status(
    session: Session,
    *,
    status: str | None = None,
    limit: int = 20,
    cursor: str | None = None,
) -> Page[Template]:
    """Return the moderation queue, newest submissions first."""

    normalized_status = ensure_status(status) if status else None
    repository = TemplateRepository(session)
    return paginate(
        lambda skip, size: repository.list_by_status(
            normalized_status, skip=skip, limit=size
        ),
        limit=limit,
        cursor=cursor,
    )


__all__ = ["list_quality_templates_for_ai", "list_templates", "list_templates_by_status"]
