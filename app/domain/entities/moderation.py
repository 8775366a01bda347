"""Domain entities for template moderation: reports, decisions and their log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .template import (
    TEMPLATE_STATUS_APPROVED,
    TEMPLATE_STATUS_FLAGGED,
    TEMPLATE_STATUS_PENDING,
    TEMPLATE_STATUS_REJECTED,
)

MODERATION_ACTION_APPROVE = "approve"
MODERATION_ACTION_REJECT = "reject"
MODERATION_ACTION_FLAG = "flag"
MODERATION_ACTION_REQUEUE = "requeue"
# Action recorded in the moderation log for each status a moderator sets.
MODERATION_ACTIONS = {
    TEMPLATE_STATUS_APPROVED: MODERATION_ACTION_APPROVE,
    TEMPLATE_STATUS_REJECTED: MODERATION_ACTION_REJECT,
    TEMPLATE_STATUS_FLAGGED: MODERATION_ACTION_FLAG,
    TEMPLATE_STATUS_PENDING: MODERATION_ACTION_REQUEUE,
}

REPORT_STATUS_OPEN = "open"
REPORT_STATUS_DISMISSED = "dismissed"
REPORT_STATUS_UPHELD = "upheld"
REPORT_STATUSES = (REPORT_STATUS_OPEN, REPORT_STATUS_DISMISSED, REPORT_STATUS_UPHELD)

REPORT_RESOLUTION_DISMISS = "dismiss"
REPORT_RESOLUTION_UPHOLD = "uphold"
REPORT_RESOLUTIONS = {
    REPORT_RESOLUTION_DISMISS: REPORT_STATUS_DISMISSED,
    REPORT_RESOLUTION_UPHOLD: REPORT_STATUS_UPHELD,
}


@dataclass(frozen=True)
class TemplateReport:
    """A user's report that a template breaks the marketplace rules.

    ``previous_status`` is the status the template had before it was first
    flagged; dismissing the last open report restores it.
    """

    id: int | None
    template_id: int
    reporter_id: str
    reason: str
    status: str
    previous_status: str
    created_at: datetime | None
    resolved_by: str | None = None
    resolved_at: datetime | None = None
    resolution_notes: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status == REPORT_STATUS_OPEN


@dataclass(frozen=True)
class ModerationEvent:
    id: int | None
    template_id: int
    action: str
    moderator_id: str
    previous_status: str
    new_status: str
    notes: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class ModeratorActivity:
    moderator_id: str
    actions: int


@dataclass(frozen=True)
class ModerationStats:
    """Moderation activity since ``since``."""

    since: datetime
    total_actions: int
    approved: int
    rejected: int
    flagged: int
    requeued: int
    reports_opened: int
    top_moderators: tuple[ModeratorActivity, ...]


@dataclass(frozen=True)
class BulkModerationResult:
    """Outcome of one template in a bulk moderation request."""

    template_id: int
    success: bool
    status: str | None = None
    error: str | None = None


__all__ = [
    "BulkModerationResult",
    "MODERATION_ACTIONS",
    "MODERATION_ACTION_APPROVE",
    "MODERATION_ACTION_FLAG",
    "MODERATION_ACTION_REJECT",
    "MODERATION_ACTION_REQUEUE",
    "ModerationEvent",
    "ModerationStats",
    "ModeratorActivity",
    "REPORT_RESOLUTIONS",
    "REPORT_RESOLUTION_DISMISS",
    "REPORT_RESOLUTION_UPHOLD",
    "REPORT_STATUSES",
    "REPORT_STATUS_DISMISSED",
    "REPORT_STATUS_OPEN",
    "REPORT_STATUS_UPHELD",
    "TemplateReport",
]
