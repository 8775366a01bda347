"""Routes for the report queue and moderator tooling."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.application.use_cases.moderation import (
    bulk_moderate as bulk_moderate_uc,
    get_moderation_stats as get_moderation_stats_uc,
    list_template_reports as list_template_reports_uc,
    resolve_template_report as resolve_template_report_uc,
)
from app.domain.errors import MarketplaceError
from app.infrastructure.database import get_db
from app.interfaces.api.routes_helpers import http_error_for
from app.interfaces.api.schemas import (
    BulkModerationRequest,
    BulkModerationResultRead,
    ModerationStatsRead,
    ReportPage,
    ReportRead,
    ReportResolve,
)

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("/bulk", response_model=list[BulkModerationResultRead])
def bulk_moderate(
    bulk_in: BulkModerationRequest, db: Session = Depends(get_db)
) -> list[BulkModerationResultRead]:
    """Apply one decision to many templates; failures are reported per item."""

    try:
        results = bulk_moderate_uc(
            db,
            template_ids=bulk_in.template_ids,
            status=bulk_in.status,
            moderator_id=bulk_in.moderator_id,
            review_notes=bulk_in.review_notes,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return [
        BulkModerationResultRead.model_validate(result, from_attributes=True)
        for result in results
    ]


@router.get("/stats", response_model=ModerationStatsRead)
def read_moderation_stats(
    days: int = Query(default=30), db: Session = Depends(get_db)
) -> ModerationStatsRead:
    try:
        stats = get_moderation_stats_uc(db, days=days)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return ModerationStatsRead.model_validate(stats, from_attributes=True)


@router.get("/reports", response_model=ReportPage)
def list_template_reports(
    status_filter: str = Query(default="open", alias="status"),
    template_id: int | None = None,
    limit: int = Query(default=20, ge=1, le=100),
    cursor: str | None = None,
    db: Session = Depends(get_db),
) -> ReportPage:
    """List reports; ``status=all`` includes resolved ones."""

    try:
        page = list_template_reports_uc(
            db,
            status=None if status_filter == "all" else status_filter,
            template_id=template_id,
            limit=limit,
            cursor=cursor,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return ReportPage(
        items=[ReportRead.model_validate(report, from_attributes=True) for report in page.items],
        next_cursor=page.next_cursor,
    )


@router.post("/reports/{report_id}/resolve", response_model=ReportRead)
def resolve_template_report(
    report_id: int, resolve_in: ReportResolve, db: Session = Depends(get_db)
) -> ReportRead:
    try:
        report = resolve_template_report_uc(
            db,
            report_id=report_id,
            resolution=resolve_in.resolution,
            moderator_id=resolve_in.moderator_id,
            notes=resolve_in.notes,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return ReportRead.model_validate(report, from_attributes=True)
