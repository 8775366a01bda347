"""Use case for editing a template's content through its version history."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import VERSION_TYPE_MINOR, TemplateVersion

from .create_version import create_version


def update_template_content(
    session: Session,
    *,
    template_id: int,
    content: str | Mapping[str, Any],
    author_id: str,
    changelog: str | None = None,
    version_type: str = VERSION_TYPE_MINOR,
    request_id: str | None = None,
) -> TemplateVersion:
    """Store new content for a template; every edit becomes a version."""

    return create_version(
        session,
        template_id=template_id,
        content=content,
        version_type=version_type,
        changelog=changelog or "Template updated",
        author_id=author_id,
        request_id=request_id,
    )


__all__ = ["update_template_content"]
