"""Use case for reporting a template to the moderators."""

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_user_id
from app.domain.entities import (
    REPORT_STATUS_OPEN,
    TEMPLATE_STATUS_FLAGGED,
    TEMPLATE_STATUS_PENDING,
    TemplateReport,
)
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import ReportRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .validators import ensure_reason

logger = logging.getLogger(__name__)


def flag_template(
    session: Session, *, template_id: int, reporter_id: str, reason: str
) -> TemplateReport:
    """Open a report against a template and move it to ``flagged``.

    A reporter may hold one open report per template. The report remembers the
    status the template had before it was flagged so that dismissing the last
    open report can put it back.
    """

    reporter = ensure_user_id(reporter_id)
    valid_reason = ensure_reason(reason)

    def _apply(tx: Session) -> TemplateReport:
        templates = TemplateRepository(tx)
        reports = ReportRepository(tx)
        template = templates.get(template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        open_reports = reports.open_for_template(template_id)
        if any(report.reporter_id == reporter for report in open_reports):
            raise ValidationError(
                f"{reporter} already has an open report on template {template_id}"
            )

        if template.status != TEMPLATE_STATUS_FLAGGED:
            previous_status = template.status
            templates.update(replace(template, status=TEMPLATE_STATUS_FLAGGED))
        elif open_reports:
            previous_status = open_reports[0].previous_status
        else:
            previous_status = TEMPLATE_STATUS_PENDING

        return reports.create(
            TemplateReport(
                id=None,
                template_id=template_id,
                reporter_id=reporter,
                reason=valid_reason,
                status=REPORT_STATUS_OPEN,
                previous_status=previous_status,
                created_at=now_in_app_timezone(),
            )
        )

    report = ContentStore(session).run(
        _apply, name=f"flag_template[{template_id}]", retry_unavailable=False
    )
    logger.info("Template %s flagged by %s (report %s)", template_id, reporter, report.id)
    return report


__all__ = ["flag_template"]
