"""Routes for template version history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.versions import (
    compare_versions as compare_versions_uc,
    create_version as create_version_uc,
    get_version as get_version_uc,
    get_version_stats as get_version_stats_uc,
    list_versions as list_versions_uc,
    reconcile_current_version as reconcile_current_version_uc,
    record_version_download as record_version_download_uc,
    rollback_version as rollback_version_uc,
)
from app.domain.entities import TemplateVersion
from app.domain.errors import MarketplaceError
from app.infrastructure.database import get_db
from app.interfaces.api.routes_helpers import http_error_for
from app.interfaces.api.schemas import (
    TemplateRead,
    VersionCreate,
    VersionDiffRead,
    VersionRead,
    VersionRollback,
    VersionStatsRead,
)

router = APIRouter(prefix="/templates/{template_id}/versions", tags=["versions"])


def _version_to_read_model(version: TemplateVersion) -> VersionRead:
    return VersionRead.model_validate(version, from_attributes=True)


@router.post("/", response_model=VersionRead, status_code=status.HTTP_201_CREATED)
def create_version(
    template_id: int, version_in: VersionCreate, db: Session = Depends(get_db)
) -> VersionRead:
    try:
        version = create_version_uc(
            db,
            template_id=template_id,
            content=version_in.content,
            version_type=version_in.version_type,
            changelog=version_in.changelog,
            author_id=version_in.author_id,
            request_id=version_in.request_id,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _version_to_read_model(version)


@router.get("/", response_model=list[VersionRead])
def list_versions(template_id: int, db: Session = Depends(get_db)) -> list[VersionRead]:
    try:
        versions = list_versions_uc(db, template_id=template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return [_version_to_read_model(version) for version in versions]


@router.get("/stats", response_model=VersionStatsRead)
def read_version_stats(
    template_id: int, db: Session = Depends(get_db)
) -> VersionStatsRead:
    try:
        stats = get_version_stats_uc(db, template_id=template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return VersionStatsRead.model_validate(stats, from_attributes=True)


@router.get("/compare", response_model=VersionDiffRead)
def compare_versions(
    template_id: int,
    version_a: int,
    version_b: int,
    db: Session = Depends(get_db),
) -> VersionDiffRead:
    try:
        diff = compare_versions_uc(
            db,
            template_id=template_id,
            version_a_id=version_a,
            version_b_id=version_b,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return VersionDiffRead.model_validate(diff, from_attributes=True)


@router.post("/reconcile", response_model=TemplateRead)
def reconcile_current_version(
    template_id: int, db: Session = Depends(get_db)
) -> TemplateRead:
    """Re-derive the template's current version from its newest version."""

    try:
        template = reconcile_current_version_uc(db, template_id=template_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return TemplateRead.model_validate(template, from_attributes=True)


@router.get("/{version_id}", response_model=VersionRead)
def read_version(
    template_id: int, version_id: int, db: Session = Depends(get_db)
) -> VersionRead:
    try:
        version = get_version_uc(db, template_id=template_id, version_id=version_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _version_to_read_model(version)


@router.post(
    "/{version_id}/rollback",
    response_model=VersionRead,
    status_code=status.HTTP_201_CREATED,
)
def rollback_version(
    template_id: int,
    version_id: int,
    rollback_in: VersionRollback,
    db: Session = Depends(get_db),
) -> VersionRead:
    """Publish an earlier version's content again as a new patch version."""

    try:
        version = rollback_version_uc(
            db,
            template_id=template_id,
            version_id=version_id,
            author_id=rollback_in.author_id,
            request_id=rollback_in.request_id,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _version_to_read_model(version)


@router.post("/{version_id}/downloads", status_code=status.HTTP_204_NO_CONTENT)
def record_version_download(
    template_id: int, version_id: int, db: Session = Depends(get_db)
) -> Response:
    try:
        record_version_download_uc(db, template_id=template_id, version_id=version_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
