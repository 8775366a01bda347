"""Use case summarising recent moderation activity."""

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.domain.entities import (
    MODERATION_ACTION_APPROVE,
    MODERATION_ACTION_FLAG,
    MODERATION_ACTION_REJECT,
    MODERATION_ACTION_REQUEUE,
    ModerationStats,
)
from app.infrastructure.repositories import ModerationLogRepository, ReportRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .validators import ensure_days

DEFAULT_STATS_DAYS = 30
TOP_MODERATORS = 5


def get_moderation_stats(
    session: Session, *, days: int = DEFAULT_STATS_DAYS, now: datetime | None = None
) -> ModerationStats:
    """Count moderation decisions and new reports over the last ``days`` days."""

    since = ensure_app_timezone(now or now_in_app_timezone()) - timedelta(days=ensure_days(days))
    log = ModerationLogRepository(session)
    by_action = log.count_by_action(since)
    return ModerationStats(
        since=since,
        total_actions=sum(by_action.values()),
        approved=by_action.get(MODERATION_ACTION_APPROVE, 0),
        rejected=by_action.get(MODERATION_ACTION_REJECT, 0),
        flagged=by_action.get(MODERATION_ACTION_FLAG, 0),
        requeued=by_action.get(MODERATION_ACTION_REQUEUE, 0),
        reports_opened=ReportRepository(session).count_created_since(since),
        top_moderators=tuple(log.top_moderators(since, limit=TOP_MODERATORS)),
    )


__all__ = ["DEFAULT_STATS_DAYS", "get_moderation_stats"]
