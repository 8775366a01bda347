"""Use case for re-ordering or replacing the templates of a collection."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Collection
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import CollectionRepository, TemplateRepository
from app.infrastructure.store import ContentStore

from .validators import ensure_template_ids, ensure_templates_exist


def update_collection_templates(
    session: Session, *, collection_id: int, template_ids: Sequence[int]
) -> Collection:
    """Replace the ordered template list of an authored collection.

    Trending and seasonal collections are only ever regenerated.
    """

    ids = ensure_template_ids(template_ids)

    def _apply(tx: Session) -> Collection:
        collections = CollectionRepository(tx)
        current = collections.get(collection_id)
        if current is None:
            raise NotFoundError("Collection", collection_id)
        if current.is_generated:
            raise ValidationError(
                f"'{current.type}' collections are regenerated, not edited"
            )
        ensure_templates_exist(TemplateRepository(tx), ids)
        return collections.replace_templates(collection_id, ids)

    return ContentStore(session).run(
        _apply, name=f"update_collection_templates[{collection_id}]"
    )


__all__ = ["update_collection_templates"]
