"""Use case for deleting collections."""

import logging

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError
from app.infrastructure.repositories import CollectionRepository
from app.infrastructure.store import ContentStore

logger = logging.getLogger(__name__)


def delete_collection(session: Session, collection_id: int) -> None:
    """Delete the collection; the templates it listed are left untouched."""

    def _apply(tx: Session) -> None:
        if not CollectionRepository(tx).delete(collection_id):
            raise NotFoundError("Collection", collection_id)

    ContentStore(session).run(_apply, name=f"delete_collection[{collection_id}]")
    logger.info("Collection %s deleted", collection_id)


__all__ = ["delete_collection"]
