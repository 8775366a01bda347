"""Use case for restoring an earlier template version."""

from sqlalchemy.orm import Session

from app.domain.entities import VERSION_TYPE_PATCH, TemplateVersion

from .create_version import create_version
from .get_version import get_version


def rollback_version(
    session: Session,
    *,
    template_id: int,
    version_id: int,
    author_id: str,
    request_id: str | None = None,
) -> TemplateVersion:
    """Publish the content of ``version_id`` again as a new patch version.

    History is never rewritten: the restored snapshot is appended on top.
    """

    target = get_version(session, template_id=template_id, version_id=version_id)
    return create_version(
        session,
        template_id=template_id,
        content=target.content,
        version_type=VERSION_TYPE_PATCH,
        changelog=f"Rolled back to version {target.version}",
        author_id=author_id,
        request_id=request_id,
    )


__all__ = ["rollback_version"]
