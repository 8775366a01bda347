"""Use case for rebuilding a template's version pointer from its history."""

import logging

from sqlalchemy.orm import Session

from app.domain.entities import INITIAL_VERSION, Template
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import TemplateRepository, VersionRepository
from app.infrastructure.store import ContentStore

logger = logging.getLogger(__name__)


def reconcile_current_version(session: Session, *, template_id: int) -> Template:
    """Point ``current_version`` back at the newest stored version.

    The template's content snapshot and AI metadata are refreshed from that
    version too. A template without versions returns to the initial version
    and keeps its submitted content.
    """

    def _apply(tx: Session) -> None:
        templates = TemplateRepository(tx)
        template = templates.get(template_id)
        if template is None:
            raise NotFoundError("Template", template_id)
        versions = VersionRepository(tx).list_for_template(template_id)
        if not versions:
            templates.reset_version_pointer(
                template_id,
                current_version=INITIAL_VERSION,
                version_count=0,
                content=None,
                ai_metadata=None,
            )
            return
        latest = versions[0]
        if (
            template.current_version != latest.version
            or template.version_count != len(versions)
        ):
            logger.warning(
                "Template %s pointed at %s (%s versions); resetting to %s (%s)",
                template_id,
                template.current_version,
                template.version_count,
                latest.version,
                len(versions),
            )
        templates.reset_version_pointer(
            template_id,
            current_version=latest.version,
            version_count=len(versions),
            content=latest.content,
            ai_metadata=latest.ai_metadata,
        )

    ContentStore(session).run(_apply, name=f"reconcile_current_version[{template_id}]")
    return TemplateRepository(session).get(template_id)


__all__ = ["reconcile_current_version"]
