"""Use case for appending a version to a template's history."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_user_id
from app.domain.entities import TemplateVersion
from app.domain.errors import ConcurrencyConflict, NotFoundError, ValidationError
from app.infrastructure.repositories import TemplateRepository, VersionRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .semver import ensure_version_type, next_version
from .snapshots import analyze_snapshot, parse_snapshot

logger = logging.getLogger(__name__)

MAX_CHANGELOG_LENGTH = 2000
MAX_REQUEST_ID_LENGTH = 64


def create_version(
    session: Session,
    *,
    template_id: int,
    content: str | Mapping[str, Any],
    version_type: str,
    changelog: str | None = None,
    author_id: str,
    request_id: str | None = None,
) -> TemplateVersion:
    """Append a version built from ``content`` and repoint the template to it.

    The template's version pointer is advanced with a compare-and-swap; when a
    concurrent writer moved it first the whole step is replayed from a fresh
    read, so every caller gets its own, strictly increasing version.

    ``request_id`` makes the call idempotent per template: repeating it returns
    the version it already created. Only keyed calls are retried when the
    store reports a transient failure, since a commit may have landed before
    the connection dropped.
    """

    snapshot = parse_snapshot(content)
    bump = ensure_version_type(version_type)
    author = ensure_user_id(author_id)
    note = (changelog or "").strip()
    if len(note) > MAX_CHANGELOG_LENGTH:
        raise ValidationError(
            f"Changelog cannot exceed {MAX_CHANGELOG_LENGTH} characters"
        )
    ai_metadata = analyze_snapshot(snapshot)
    key = _ensure_request_id(request_id)

    def _apply(tx: Session) -> TemplateVersion:
        templates = TemplateRepository(tx)
        template = templates.get(template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        if key is not None:
            existing = VersionRepository(tx).find_by_request(template_id, key)
            if existing is not None:
                return existing

        new_version = next_version(template.current_version, bump)
        advanced = templates.advance_version(
            template_id,
            expected_version=template.current_version,
            expected_count=template.version_count,
            new_version=new_version,
            content=snapshot,
            ai_metadata=ai_metadata,
        )
        if not advanced:
            raise ConcurrencyConflict(
                f"Template {template_id} moved past {template.current_version}"
            )
        return VersionRepository(tx).append(
            TemplateVersion(
                id=None,
                template_id=template_id,
                sequence=template.version_count + 1,
                version=new_version,
                version_type=bump,
                content=snapshot,
                changelog=note,
                created_by=author,
                created_at=now_in_app_timezone(),
                ai_metadata=ai_metadata,
                request_id=key,
            )
        )

    version = ContentStore(session).run(
        _apply,
        name=f"create_version[{template_id}]",
        retry_unavailable=key is not None,
    )
    logger.info(
        "Template %s advanced to %s (%s) by %s",
        template_id,
        version.version,
        version.version_type,
        author,
    )
    return version


def _ensure_request_id(request_id: str | None) -> str | None:
    if request_id is None:
        return None
    normalized = request_id.strip()
    if not normalized:
        raise ValidationError("Request id cannot be blank")
    if len(normalized) > MAX_REQUEST_ID_LENGTH:
        raise ValidationError(
            f"Request id cannot exceed {MAX_REQUEST_ID_LENGTH} characters"
        )
    return normalized


__all__ = ["create_version"]
