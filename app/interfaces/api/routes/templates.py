"""Routes for the template catalogue, ratings and comments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.moderation import flag_template as flag_template_uc
from app.application.use_cases.ratings import (
    list_template_ratings as list_template_ratings_uc,
    recompute_quality_score as recompute_quality_score_uc,
    submit_rating as submit_rating_uc,
)
from app.application.use_cases.templates import (
    add_template_comment as add_template_comment_uc,
    delete_template as delete_template_uc,
    get_featured_templates as get_featured_templates_uc,
    get_marketplace_stats as get_marketplace_stats_uc,
    get_template as get_template_uc,
    list_quality_templates_for_ai as list_quality_templates_for_ai_uc,
    list_template_comments as list_template_comments_uc,
    list_templates as list_templates_uc,
    list_templates_by_status as list_templates_by_status_uc,
    moderate_template as moderate_template_uc,
    record_growth_rate as record_growth_rate_uc,
    set_template_featured as set_template_featured_uc,
    submit_template as submit_template_uc,
    track_template_usage as track_template_usage_uc,
    update_template_listing as update_template_listing_uc,
)
from app.application.use_cases.versions import (
    update_template_content as update_template_content_uc,
)
from app.domain.entities import Page, Template
from app.domain.errors import MarketplaceError
from app.infrastructure.database import get_db
from app.interfaces.api.routes_helpers import http_error_for
from app.interfaces.api.schemas import (
    CommentCreate,
    CommentRead,
    MarketplaceStatsRead,
    QualityScoreRead,
    RatingCreate,
    RatingRead,
    ReportCreate,
    ReportRead,
    TemplateContentUpdate,
    TemplateCreate,
    TemplateFeaturedUpdate,
    TemplateGrowthRate,
    TemplateListingUpdate,
    TemplateModeration,
    TemplatePage,
    TemplateRead,
    TemplateUsage,
    VersionRead,
)

router = APIRouter(prefix="/templates", tags=["templates"])


def _template_to_read_model(template: Template) -> TemplateRead:
    return TemplateRead.model_validate(template, from_attributes=True)


def _page_to_read_model(page: Page[Template]) -> TemplatePage:
    return TemplatePage(
        items=[_template_to_read_model(template) for template in page.items],
        next_cursor=page.next_cursor,
    )


@router.post("/", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def submit_template(
    template_in: TemplateCreate, db: Session = Depends(get_db)
) -> TemplateRead:
    """Submit a template for moderation."""

    try:
        template = submit_template_uc(
            db,
            name=template_in.name,
            category=template_in.category,
            content=template_in.content,
            created_by=template_in.created_by,
            description=template_in.description,
            tags=template_in.tags,
            creator_display_name=template_in.creator_display_name,
            template_type=template_in.template_type,
            price=template_in.price,
            is_listed=template_in.is_listed,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _template_to_read_model(template)


@router.get("/", response_model=TemplatePage)
def list_templates(
    category: str | None = None,
    template_type: str | None = None,
    created_by: str | None = None,
    only_quality: bool = False,
    only_featured: bool = False,
    search: str | None = None,
    sort_by: str = "newest",
    limit: int = Query(default=20, ge=1, le=100),
    cursor: str | None = None,
    db: Session = Depends(get_db),
) -> TemplatePage:
    try:
        page = list_templates_uc(
            db,
            category=category,
            template_type=template_type,
            created_by=created_by,
            only_quality=only_quality,
            only_featured=only_featured,
            search=search,
            sort_by=sort_by,
            limit=limit,
            cursor=cursor,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _page_to_read_model(page)


@router.get("/ai-quality", response_model=list[TemplateRead])
def list_quality_templates_for_ai(
    category: str | None = None, db: Session = Depends(get_db)
) -> list[TemplateRead]:
    """Templates trustworthy enough to seed automated page generation."""

    try:
        templates = list_quality_templates_for_ai_uc(db, category=category)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return [_template_to_read_model(template) for template in templates]


@router.get("/moderation", response_model=TemplatePage)
def list_moderation_queue(
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int = Query(default=20, ge=1, le=100),
    cursor: str | None = None,
    db: Session = Depends(get_db),
) -> TemplatePage:
    try:
        page = list_templates_by_status_uc(
            db, status=status_filter, limit=limit, cursor=cursor
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _page_to_read_model(page)


@router.get("/featured", response_model=list[TemplateRead])
def list_featured_templates(
    limit: int = Query(default=20, ge=1, le=100), db: Session = Depends(get_db)
) -> list[TemplateRead]:
    """Templates featured by moderators, best rated first."""

    try:
        templates = get_featured_templates_uc(db, limit=limit)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return [_template_to_read_model(template) for template in templates]


@router.get("/stats", response_model=MarketplaceStatsRead)
def read_marketplace_stats(db: Session = Depends(get_db)) -> MarketplaceStatsRead:
    stats = get_marketplace_stats_uc(db)
    return MarketplaceStatsRead.model_validate(stats, from_attributes=True)


@router.get("/{template_id}", response_model=TemplateRead)
def read_template(template_id: int, db: Session = Depends(get_db)) -> TemplateRead:
    try:
        template = get_template_uc(db, template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _template_to_read_model(template)


@router.patch("/{template_id}/listing", response_model=TemplateRead)
def update_template_listing(
    template_id: int,
    listing_in: TemplateListingUpdate,
    db: Session = Depends(get_db),
) -> TemplateRead:
    try:
        template = update_template_listing_uc(
            db,
            template_id=template_id,
            is_listed=listing_in.is_listed,
            price=listing_in.price,
            template_type=listing_in.template_type,
            description=listing_in.description,
            tags=listing_in.tags,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _template_to_read_model(template)


@router.post("/{template_id}/moderation", response_model=TemplateRead)
def moderate_template(
    template_id: int,
    moderation_in: TemplateModeration,
    db: Session = Depends(get_db),
) -> TemplateRead:
    try:
        template = moderate_template_uc(
            db,
            template_id=template_id,
            status=moderation_in.status,
            moderator_id=moderation_in.moderator_id,
            review_notes=moderation_in.review_notes,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _template_to_read_model(template)


@router.put("/{template_id}/content", response_model=VersionRead)
def update_template_content(
    template_id: int,
    content_in: TemplateContentUpdate,
    db: Session = Depends(get_db),
) -> VersionRead:
    """Replace the template's content, recording a new version."""

    try:
        version = update_template_content_uc(
            db,
            template_id=template_id,
            content=content_in.content,
            author_id=content_in.author_id,
            changelog=content_in.changelog,
            version_type=content_in.version_type,
            request_id=content_in.request_id,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return VersionRead.model_validate(version, from_attributes=True)


@router.post("/{template_id}/usage", status_code=status.HTTP_204_NO_CONTENT)
def track_template_usage(
    template_id: int, usage_in: TemplateUsage, db: Session = Depends(get_db)
) -> Response:
    try:
        track_template_usage_uc(db, template_id=template_id, action=usage_in.action)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{template_id}/growth-rate", status_code=status.HTTP_204_NO_CONTENT)
def record_growth_rate(
    template_id: int, growth_in: TemplateGrowthRate, db: Session = Depends(get_db)
) -> Response:
    try:
        record_growth_rate_uc(
            db, template_id=template_id, growth_rate=growth_in.growth_rate
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(template_id: int, db: Session = Depends(get_db)) -> Response:
    """Delete a template with its ratings, comments and versions."""

    try:
        delete_template_uc(db, template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/ratings", response_model=QualityScoreRead)
def submit_rating(
    template_id: int, rating_in: RatingCreate, db: Session = Depends(get_db)
) -> QualityScoreRead:
    try:
        score = submit_rating_uc(
            db,
            template_id=template_id,
            user_id=rating_in.user_id,
            score=rating_in.score,
            comment=rating_in.comment,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return QualityScoreRead.model_validate(score, from_attributes=True)


@router.get("/{template_id}/ratings", response_model=list[RatingRead])
def list_template_ratings(
    template_id: int, db: Session = Depends(get_db)
) -> list[RatingRead]:
    try:
        ratings = list_template_ratings_uc(db, template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return [RatingRead.model_validate(rating, from_attributes=True) for rating in ratings]


@router.post("/{template_id}/ratings/recompute", response_model=QualityScoreRead)
def recompute_quality_score(
    template_id: int, db: Session = Depends(get_db)
) -> QualityScoreRead:
    try:
        score = recompute_quality_score_uc(db, template_id=template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return QualityScoreRead.model_validate(score, from_attributes=True)


@router.post(
    "/{template_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
def add_template_comment(
    template_id: int, comment_in: CommentCreate, db: Session = Depends(get_db)
) -> CommentRead:
    try:
        comment = add_template_comment_uc(
            db,
            template_id=template_id,
            user_id=comment_in.user_id,
            comment=comment_in.comment,
            display_name=comment_in.display_name,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return CommentRead.model_validate(comment, from_attributes=True)


@router.get("/{template_id}/comments", response_model=list[CommentRead])
def list_template_comments(
    template_id: int, db: Session = Depends(get_db)
) -> list[CommentRead]:
    try:
        comments = list_template_comments_uc(db, template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return [CommentRead.model_validate(comment, from_attributes=True) for comment in comments]


@router.put("/{template_id}/featured", response_model=TemplateRead)
def set_template_featured(
    template_id: int,
    featured_in: TemplateFeaturedUpdate,
    db: Session = Depends(get_db),
) -> TemplateRead:
    try:
        template = set_template_featured_uc(
            db, template_id=template_id, featured=featured_in.featured
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _template_to_read_model(template)


@router.post(
    "/{template_id}/reports",
    response_model=ReportRead,
    status_code=status.HTTP_201_CREATED,
)
def flag_template(
    template_id: int, report_in: ReportCreate, db: Session = Depends(get_db)
) -> ReportRead:
    """Report a template; it stays flagged until a moderator resolves it."""

    try:
        report = flag_template_uc(
            db,
            template_id=template_id,
            reporter_id=report_in.reporter_id,
            reason=report_in.reason,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return ReportRead.model_validate(report, from_attributes=True)
