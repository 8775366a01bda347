"""Use case for counting downloads of a specific version."""

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError
from app.infrastructure.repositories import VersionRepository
from app.infrastructure.store import ContentStore


def record_version_download(session: Session, *, template_id: int, version_id: int) -> None:
    def _apply(tx: Session) -> None:
        versions = VersionRepository(tx)
        version = versions.get(version_id)
        if version is None or version.template_id != template_id:
            raise NotFoundError("Version", version_id)
        versions.increment_downloads(version_id)

    ContentStore(session).run(_apply, name=f"record_version_download[{version_id}]")


__all__ = ["record_version_download"]
