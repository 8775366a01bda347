"""Use cases for browsing collections."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.pagination import paginate
from app.domain.entities import COLLECTION_TYPES, Collection, Page
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import CollectionRepository

SORT_OPTIONS = ("created_at", "updated_at", "view_count")
FEATURED_COLLECTION_LIMIT = 6


def get_collection(session: Session, collection_id: int) -> Collection:
    collection = CollectionRepository(session).get(collection_id)
    if collection is None:
        raise NotFoundError("Collection", collection_id)
    return collection


def list_collections(
    session: Session,
    *,
    collection_type: str | None = None,
    category: str | None = None,
    featured: bool | None = None,
    is_public: bool | None = True,
    sort_by: str = "created_at",
    descending: bool = True,
    limit: int = 20,
    cursor: str | None = None,
) -> Page[Collection]:
    """Return one page of active collections matching the filters."""

    if collection_type is not None and collection_type not in COLLECTION_TYPES:
        raise ValidationError(f"Unknown collection type '{collection_type}'")
    if sort_by not in SORT_OPTIONS:
        raise ValidationError(f"sort_by must be one of: {', '.join(SORT_OPTIONS)}")
    repository = CollectionRepository(session)
    normalized_category = (category or "").strip().lower() or None

    def _fetch(skip: int, size: int) -> Sequence[Collection]:
        return repository.list(
            skip=skip,
            limit=size,
            collection_type=collection_type,
            category=normalized_category,
            featured=featured,
            is_public=is_public,
            sort_by=sort_by,
            descending=descending,
        )

    return paginate(_fetch, limit=limit, cursor=cursor)


def get_featured_collections(
    session: Session, *, limit: int = FEATURED_COLLECTION_LIMIT
) -> Sequence[Collection]:
    """Return public featured collections, most recently updated first."""

    return CollectionRepository(session).list(
        limit=limit, featured=True, is_public=True, sort_by="updated_at"
    )


__all__ = ["get_collection", "get_featured_collections", "list_collections"]
