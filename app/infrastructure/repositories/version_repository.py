"""Persistence layer for the append-only template version log."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import TemplateVersion
from app.infrastructure.models import TemplateVersionModel
from app.infrastructure.repositories.template_repository import (
    ai_metadata_from_payload,
    ai_metadata_to_payload,
)
from app.infrastructure.store import increment_counters
from app.utils import ensure_app_timezone


class VersionRepository:
    """Append and read template versions. Rows are never updated in place,
    apart from their download counter."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, version_id: int) -> TemplateVersion | None:
        model = self.session.get(TemplateVersionModel, version_id)
        return self._to_entity(model) if model else None

    def list_for_template(self, template_id: int) -> Sequence[TemplateVersion]:
        """Return the template's versions, newest first."""

        query = (
            self.session.query(TemplateVersionModel)
            .filter(TemplateVersionModel.template_id == template_id)
            .order_by(TemplateVersionModel.sequence.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def latest(self, template_id: int) -> TemplateVersion | None:
        model = (
            self.session.query(TemplateVersionModel)
            .filter(TemplateVersionModel.template_id == template_id)
            .order_by(TemplateVersionModel.sequence.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def find_by_request(self, template_id: int, request_id: str) -> TemplateVersion | None:
        model = (
            self.session.query(TemplateVersionModel)
            .filter(TemplateVersionModel.template_id == template_id)
            .filter(TemplateVersionModel.request_id == request_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def append(self, version: TemplateVersion) -> TemplateVersion:
        model = TemplateVersionModel(
            template_id=version.template_id,
            sequence=version.sequence,
            version=version.version,
            version_type=version.version_type,
            content=version.content,
            changelog=version.changelog,
            created_by=version.created_by,
            created_at=version.created_at,
            download_count=0,
            ai_metadata=ai_metadata_to_payload(version.ai_metadata),
            request_id=version.request_id,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def increment_downloads(self, version_id: int) -> bool:
        return increment_counters(
            self.session, TemplateVersionModel, version_id, {"download_count": 1}
        )

    @staticmethod
    def _to_entity(model: TemplateVersionModel) -> TemplateVersion:
        return TemplateVersion(
            id=model.id,
            template_id=model.template_id,
            sequence=model.sequence,
            version=model.version,
            version_type=model.version_type,
            content=dict(model.content or {}),
            changelog=model.changelog or "",
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            download_count=model.download_count or 0,
            ai_metadata=ai_metadata_from_payload(model.ai_metadata),
            request_id=model.request_id,
        )


__all__ = ["VersionRepository"]
