"""Validation helpers for moderation use cases."""

from collections.abc import Iterable

from app.domain.entities import REPORT_RESOLUTIONS, REPORT_STATUSES
from app.domain.errors import ValidationError

MAX_REASON_LENGTH = 500
MAX_BULK_TEMPLATES = 100
MAX_STATS_DAYS = 366


def ensure_reason(reason: str | None) -> str:
    normalized = (reason or "").strip()
    if not normalized:
        raise ValidationError("A report needs a reason")
    if len(normalized) > MAX_REASON_LENGTH:
        raise ValidationError(f"Reason cannot exceed {MAX_REASON_LENGTH} characters")
    return normalized


def ensure_resolution(resolution: str | None) -> str:
    normalized = (resolution or "").strip().lower()
    if normalized not in REPORT_RESOLUTIONS:
        allowed = ", ".join(sorted(REPORT_RESOLUTIONS))
        raise ValidationError(f"Resolution must be one of: {allowed}")
    return normalized


def ensure_report_status(status: str | None) -> str:
    normalized = (status or "").strip().lower()
    if normalized not in REPORT_STATUSES:
        allowed = ", ".join(REPORT_STATUSES)
        raise ValidationError(f"Report status must be one of: {allowed}")
    return normalized


def ensure_template_ids(template_ids: Iterable[int] | None) -> list[int]:
    """De-duplicate ``template_ids`` keeping their order."""

    unique = list(dict.fromkeys(template_ids or ()))
    if not unique:
        raise ValidationError("At least one template id is required")
    if len(unique) > MAX_BULK_TEMPLATES:
        raise ValidationError(
            f"At most {MAX_BULK_TEMPLATES} templates can be moderated at once"
        )
    return unique


def ensure_days(days: int) -> int:
    if days < 1 or days > MAX_STATS_DAYS:
        raise ValidationError(f"Days must be between 1 and {MAX_STATS_DAYS}")
    return days


__all__ = [
    "MAX_BULK_TEMPLATES",
    "ensure_days",
    "ensure_reason",
    "ensure_report_status",
    "ensure_resolution",
    "ensure_template_ids",
]
