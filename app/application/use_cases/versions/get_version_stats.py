"""Use case summarising a template's version history."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import VERSION_TYPES, TemplateVersion, VersionStats
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import TemplateRepository, VersionRepository

FREQUENCY_NEW = "new"
FREQUENCY_VERY_FREQUENT = "very frequent"
FREQUENCY_FREQUENT = "frequent"
FREQUENCY_REGULAR = "regular"
FREQUENCY_OCCASIONAL = "occasional"

_FREQUENCY_BANDS = (
    (7, FREQUENCY_VERY_FREQUENT),
    (30, FREQUENCY_FREQUENT),
    (90, FREQUENCY_REGULAR),
)

_SECONDS_PER_DAY = 86400


def classify_update_frequency(versions: Sequence[TemplateVersion]) -> str:
    """Classify the mean gap between versions, given newest first."""

    if len(versions) < 2:
        return FREQUENCY_NEW
    newest = versions[0].created_at
    oldest = versions[-1].created_at
    span_days = (newest - oldest).total_seconds() / _SECONDS_PER_DAY
    mean_gap = span_days / (len(versions) - 1)
    for upper_bound, label in _FREQUENCY_BANDS:
        if mean_gap < upper_bound:
            return label
    return FREQUENCY_OCCASIONAL


def get_version_stats(session: Session, *, template_id: int) -> VersionStats:
    template = TemplateRepository(session).get(template_id)
    if template is None:
        raise NotFoundError("Template", template_id)

    versions = VersionRepository(session).list_for_template(template_id)
    per_type = {version_type: 0 for version_type in VERSION_TYPES}
    for version in versions:
        per_type[version.version_type] = per_type.get(version.version_type, 0) + 1

    return VersionStats(
        total_versions=len(versions),
        current_version=versions[0].version if versions else template.current_version,
        earliest_version=versions[-1].version if versions else template.current_version,
        version_types=per_type,
        total_downloads=sum(version.download_count for version in versions),
        last_update=versions[0].created_at if versions else None,
        update_frequency=classify_update_frequency(versions),
    )


__all__ = ["classify_update_frequency", "get_version_stats"]
