"""Persistence layer for template reports and the moderation log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.entities import (
    REPORT_STATUS_OPEN,
    ModerationEvent,
    ModeratorActivity,
    TemplateReport,
)
from app.infrastructure.models import ModerationEventModel, TemplateReportModel
from app.utils import ensure_app_timezone


class ReportRepository:
    """Store user reports and their resolution."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, report_id: int) -> TemplateReport | None:
        model = self.session.get(TemplateReportModel, report_id)
        return self._to_entity(model) if model else None

    def create(self, report: TemplateReport) -> TemplateReport:
        model = TemplateReportModel(
            template_id=report.template_id,
            reporter_id=report.reporter_id,
            reason=report.reason,
            status=report.status,
            previous_status=report.previous_status,
            created_at=report.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def list(
        self,
        *,
        status: str | None = None,
        template_id: int | None = None,
        skip: int = 0,
        limit: int | None = 20,
    ) -> Sequence[TemplateReport]:
        query = self.session.query(TemplateReportModel)
        if status:
            query = query.filter(TemplateReportModel.status == status)
        if template_id is not None:
            query = query.filter(TemplateReportModel.template_id == template_id)
        query = query.order_by(
            TemplateReportModel.created_at.desc(), TemplateReportModel.id.desc()
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def open_for_template(self, template_id: int) -> Sequence[TemplateReport]:
        """Return the template's open reports, oldest first."""

        query = (
            self.session.query(TemplateReportModel)
            .filter(TemplateReportModel.template_id == template_id)
            .filter(TemplateReportModel.status == REPORT_STATUS_OPEN)
            .order_by(TemplateReportModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def resolve(
        self,
        report_id: int,
        *,
        status: str,
        resolved_by: str,
        resolved_at: datetime,
        notes: str | None,
    ) -> TemplateReport:
        model = self.session.get(TemplateReportModel, report_id)
        if model is None:
            msg = f"Report with id {report_id} not found"
            raise ValueError(msg)
        model.status = status
        model.resolved_by = resolved_by
        model.resolved_at = resolved_at
        model.resolution_notes = notes
        self.session.flush()
        return self._to_entity(model)

    def count_created_since(self, since: datetime) -> int:
        return self.session.execute(
            select(func.count(TemplateReportModel.id)).where(
                TemplateReportModel.created_at >= since
            )
        ).scalar_one()

    @staticmethod
    def _to_entity(model: TemplateReportModel) -> TemplateReport:
        return TemplateReport(
            id=model.id,
            template_id=model.template_id,
            reporter_id=model.reporter_id,
            reason=model.reason,
            status=model.status,
            previous_status=model.previous_status,
            created_at=ensure_app_timezone(model.created_at),
            resolved_by=model.resolved_by,
            resolved_at=ensure_app_timezone(model.resolved_at),
            resolution_notes=model.resolution_notes,
        )


class ModerationLogRepository:
    """Append-only log of moderation decisions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, event: ModerationEvent) -> ModerationEvent:
        model = ModerationEventModel(
            template_id=event.template_id,
            action=event.action,
            moderator_id=event.moderator_id,
            previous_status=event.previous_status,
            new_status=event.new_status,
            notes=event.notes,
            created_at=event.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def list_for_template(self, template_id: int) -> Sequence[ModerationEvent]:
        query = (
            self.session.query(ModerationEventModel)
            .filter(ModerationEventModel.template_id == template_id)
            .order_by(ModerationEventModel.created_at.desc(), ModerationEventModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_by_action(self, since: datetime) -> dict[str, int]:
        rows = self.session.execute(
            select(ModerationEventModel.action, func.count(ModerationEventModel.id))
            .where(ModerationEventModel.created_at >= since)
            .group_by(ModerationEventModel.action)
        ).all()
        return {action: count for action, count in rows}

    def top_moderators(self, since: datetime, *, limit: int) -> list[ModeratorActivity]:
        actions = func.count(ModerationEventModel.id)
        rows = self.session.execute(
            select(ModerationEventModel.moderator_id, actions)
            .where(ModerationEventModel.created_at >= since)
            .group_by(ModerationEventModel.moderator_id)
            .order_by(actions.desc(), ModerationEventModel.moderator_id.asc())
            .limit(limit)
        ).all()
        return [
            ModeratorActivity(moderator_id=moderator_id, actions=count)
            for moderator_id, count in rows
        ]

    @staticmethod
    def _to_entity(model: ModerationEventModel) -> ModerationEvent:
        return ModerationEvent(
            id=model.id,
            template_id=model.template_id,
            action=model.action,
            moderator_id=model.moderator_id,
            previous_status=model.previous_status,
            new_status=model.new_status,
            notes=model.notes,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ModerationLogRepository", "ReportRepository"]
