"""SQLAlchemy models for template reports and the moderation log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class TemplateReportModel(Base):
    """A user report against a template, open until a moderator resolves it."""

    __tablename__ = "template_report"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("marketplace_template.id"), nullable=False, index=True
    )
    reporter_id = Column(String(64), nullable=False)
    reason = Column(String(500), nullable=False)
    status = Column(String(20), nullable=False, default="open", index=True)
    previous_status = Column(String(20), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    resolved_by = Column(String(64), nullable=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    resolution_notes = Column(Text, nullable=True)


class ModerationEventModel(Base):
    """Append-only log of moderation decisions.

    Rows outlive the template they refer to, so ``template_id`` is not a
    foreign key.
    """

    __tablename__ = "moderation_event"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(Integer, nullable=False, index=True)
    action = Column(String(20), nullable=False)
    moderator_id = Column(String(64), nullable=False, index=True)
    previous_status = Column(String(20), nullable=False)
    new_status = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone, index=True
    )


__all__ = ["ModerationEventModel", "TemplateReportModel"]
