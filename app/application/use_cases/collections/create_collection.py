"""Use case for authoring collections."""

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_user_id
from app.domain.entities import Collection, CollectionMetadata
from app.infrastructure.repositories import CollectionRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone

from .validators import (
    ensure_authored_type,
    ensure_collection_description,
    ensure_collection_name,
    ensure_metadata,
    ensure_template_ids,
    ensure_templates_exist,
    normalize_labels,
)

logger = logging.getLogger(__name__)


def create_collection(
    session: Session,
    *,
    name: str,
    collection_type: str,
    template_ids: Sequence[int],
    created_by: str,
    description: str | None = None,
    metadata: CollectionMetadata | None = None,
    is_public: bool = True,
    featured: bool = False,
    tags: Iterable[str] | None = None,
    categories: Iterable[str] | None = None,
) -> Collection:
    """Create a curated, category, creator or bundle collection.

    Every referenced template must exist; the list order is the ranking shown
    to visitors.
    """

    normalized_type = ensure_authored_type(collection_type)
    author = ensure_user_id(created_by)
    collection = Collection(
        id=None,
        name=ensure_collection_name(name),
        description=ensure_collection_description(description),
        type=normalized_type,
        template_ids=ensure_template_ids(template_ids),
        metadata=ensure_metadata(normalized_type, metadata, created_by=author),
        created_by=author,
        created_at=now_in_app_timezone(),
        is_public=bool(is_public),
        featured=bool(featured),
        tags=normalize_labels(tags),
        categories=normalize_labels(categories),
    )

    def _apply(tx: Session) -> Collection:
        ensure_templates_exist(TemplateRepository(tx), collection.template_ids)
        return CollectionRepository(tx).create(collection)

    saved = ContentStore(session).run(_apply, name="create_collection")
    logger.info(
        "Collection %s '%s' (%s) created with %s templates",
        saved.id,
        saved.name,
        saved.type,
        saved.template_count,
    )
    return saved


__all__ = ["create_collection"]
