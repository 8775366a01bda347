"""Use cases for working through the template report queue."""

import logging

from sqlalchemy.orm import Session

from app.application.use_cases.pagination import paginate
from app.application.use_cases.ratings.validators import ensure_user_id
from app.application.use_cases.templates.moderate_template import apply_moderation
from app.domain.entities import (
    REPORT_RESOLUTIONS,
    REPORT_RESOLUTION_UPHOLD,
    REPORT_STATUS_OPEN,
    TEMPLATE_STATUS_FLAGGED,
    TEMPLATE_STATUS_REJECTED,
    Page,
    TemplateReport,
)
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import ReportRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .validators import ensure_report_status, ensure_resolution

logger = logging.getLogger(__name__)


def list_template_reports(
    session: Session,
    *,
    status: str | None = REPORT_STATUS_OPEN,
    template_id: int | None = None,
    limit: int = 20,
    cursor: str | None = None,
) -> Page[TemplateReport]:
    """Return reports, newest first. ``status=None`` lists every report."""

    normalized_status = ensure_report_status(status) if status is not None else None
    repository = ReportRepository(session)
    return paginate(
        lambda skip, size: repository.list(
            status=normalized_status, template_id=template_id, skip=skip, limit=size
        ),
        limit=limit,
        cursor=cursor,
    )


def resolve_template_report(
    session: Session,
    *,
    report_id: int,
    resolution: str,
    moderator_id: str,
    notes: str | None = None,
) -> TemplateReport:
    """Close an open report.

    ``uphold`` rejects the template and closes every open report against it.
    ``dismiss`` closes only this report; once no open report remains, a
    flagged template returns to the status it had before it was flagged.
    """

    action = ensure_resolution(resolution)
    moderator = ensure_user_id(moderator_id)
    clean_notes = (notes or "").strip() or None
    report_status = REPORT_RESOLUTIONS[action]

    def _apply(tx: Session) -> TemplateReport:
        reports = ReportRepository(tx)
        report = reports.get(report_id)
        if report is None:
            raise NotFoundError("Report", report_id)
        if not report.is_open:
            raise ValidationError(f"Report {report_id} is already {report.status}")
        template = TemplateRepository(tx).get(report.template_id)
        if template is None:
            raise NotFoundError("Template", report.template_id)

        now = now_in_app_timezone()
        if action == REPORT_RESOLUTION_UPHOLD:
            to_close = reports.open_for_template(template.id)
            new_status = TEMPLATE_STATUS_REJECTED
        else:
            to_close = [report]
            still_open = [
                other
                for other in reports.open_for_template(template.id)
                if other.id != report.id
            ]
            new_status = None
            if not still_open and template.status == TEMPLATE_STATUS_FLAGGED:
                new_status = report.previous_status

        for open_report in to_close:
            reports.resolve(
                open_report.id,
                status=report_status,
                resolved_by=moderator,
                resolved_at=now,
                notes=clean_notes,
            )
        if new_status is not None and new_status != template.status:
            apply_moderation(
                tx,
                template,
                status=new_status,
                moderator_id=moderator,
                review_notes=clean_notes,
            )
        return reports.get(report_id)

    resolved = ContentStore(session).run(
        _apply, name=f"resolve_template_report[{report_id}]", retry_unavailable=False
    )
    logger.info(
        "Report %s on template %s %s by %s",
        report_id,
        resolved.template_id,
        resolved.status,
        moderator,
    )
    return resolved


__all__ = ["list_template_reports", "resolve_template_report"]
