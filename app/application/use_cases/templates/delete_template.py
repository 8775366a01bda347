"""Use case for deleting templates."""

import logging

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError
from app.infrastructure.repositories import CollectionRepository, TemplateRepository
from app.infrastructure.store import ContentStore

logger = logging.getLogger(__name__)


def delete_template(session: Session, template_id: int) -> None:
    """Delete the template, its ratings, comments and versions.

    The template is also removed from every collection that lists it; the
    remaining entries keep their order.
    """

    def _apply(tx: Session) -> list[int]:
        repository = TemplateRepository(tx)
        if repository.get(template_id) is None:
            raise NotFoundError("Template", template_id)
        affected = CollectionRepository(tx).remove_template_everywhere(template_id)
        repository.delete(template_id)
        return affected

    affected = ContentStore(session).run(_apply, name=f"delete_template[{template_id}]")
    logger.info(
        "Template %s deleted; removed from %s collection(s)", template_id, len(affected)
    )


__all__ = ["delete_template"]
