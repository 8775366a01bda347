"""Schemas for the report queue and moderation endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReportCreate(BaseModel):
    reporter_id: str
    reason: str


class ReportResolve(BaseModel):
    resolution: str
    moderator_id: str
    notes: str | None = None


class ReportRead(BaseModel):
    id: int
    template_id: int
    reporter_id: str
    reason: str
    status: str
    previous_status: str
    created_at: datetime | None
    resolved_by: str | None
    resolved_at: datetime | None
    resolution_notes: str | None

    model_config = ConfigDict(from_attributes=True)


class ReportPage(BaseModel):
    items: list[ReportRead]
    next_cursor: str | None = None


class BulkModerationRequest(BaseModel):
    template_ids: list[int]
    status: str
    moderator_id: str
    review_notes: str | None = None


class BulkModerationResultRead(BaseModel):
    template_id: int
    success: bool
    status: str | None = None
    error: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ModeratorActivityRead(BaseModel):
    moderator_id: str
    actions: int

    model_config = ConfigDict(from_attributes=True)


class ModerationStatsRead(BaseModel):
    since: datetime
    total_actions: int
    approved: int
    rejected: int
    flagged: int
    requeued: int
    reports_opened: int
    top_moderators: list[ModeratorActivityRead]

    model_config = ConfigDict(from_attributes=True)
