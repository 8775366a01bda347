"""Use case for diffing two versions of a template."""

from sqlalchemy.orm import Session

from app.domain.entities import VersionDiff

from .get_version import get_version
from .snapshots import describe_changes, diff_components, diff_size


def compare_versions(
    session: Session,
    *,
    template_id: int,
    version_a_id: int,
    version_b_id: int,
) -> VersionDiff:
    """Describe what changed going from version A to version B."""

    version_a = get_version(session, template_id=template_id, version_id=version_a_id)
    version_b = get_version(session, template_id=template_id, version_id=version_b_id)
    changes, root_changed = describe_changes(version_a.content, version_b.content)
    return VersionDiff(
        version_a=version_a.version,
        version_b=version_b.version,
        changes=changes,
        root_structure_changed=root_changed,
        size=diff_size(version_a.content, version_b.content),
        components=diff_components(version_a.content, version_b.content),
    )


__all__ = ["compare_versions"]
