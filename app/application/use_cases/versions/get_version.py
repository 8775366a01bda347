"""Use cases for reading a template's version history."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import TemplateVersion
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import TemplateRepository, VersionRepository


def get_version(session: Session, *, template_id: int, version_id: int) -> TemplateVersion:
    """Return the version ``version_id`` of ``template_id``."""

    version = VersionRepository(session).get(version_id)
    if version is None or version.template_id != template_id:
        raise NotFoundError("Version", version_id)
    return version


def list_versions(session: Session, *, template_id: int) -> Sequence[TemplateVersion]:
    """Return the versions of ``template_id``, newest first."""

    if TemplateRepository(session).get(template_id) is None:
        raise NotFoundError("Template", template_id)
    return VersionRepository(session).list_for_template(template_id)


__all__ = ["get_version", "list_versions"]
