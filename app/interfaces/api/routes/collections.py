"""Routes for discovery collections and bundles."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.collections import (
    create_bundle as create_bundle_uc,
    create_collection as create_collection_uc,
    delete_collection as delete_collection_uc,
    generate_seasonal as generate_seasonal_uc,
    generate_trending as generate_trending_uc,
    get_collection as get_collection_uc,
    get_featured_collections as get_featured_collections_uc,
    list_collections as list_collections_uc,
    record_analytics as record_analytics_uc,
    update_collection_templates as update_collection_templates_uc,
)
from app.domain.entities import Collection, GenerationOutcome
from app.domain.errors import MarketplaceError
from app.infrastructure.database import get_db
from app.interfaces.api.routes_helpers import (
    http_error_for,
    metadata_from_request,
    metadata_to_response,
)
from app.interfaces.api.schemas import (
    BundleCreate,
    CollectionAnalyticsEvent,
    CollectionAnalyticsRead,
    CollectionCreate,
    CollectionPage,
    CollectionRead,
    CollectionTemplatesUpdate,
    GenerationOutcomeRead,
    SeasonalGeneration,
)

router = APIRouter(prefix="/collections", tags=["collections"])


def _collection_to_read_model(collection: Collection) -> CollectionRead:
    return CollectionRead(
        id=collection.id,
        name=collection.name,
        description=collection.description,
        type=collection.type,
        template_ids=list(collection.template_ids),
        template_count=collection.template_count,
        metadata=metadata_to_response(collection.metadata),
        created_by=collection.created_by,
        created_at=collection.created_at,
        updated_at=collection.updated_at,
        is_public=collection.is_public,
        featured=collection.featured,
        status=collection.status,
        generator_key=collection.generator_key,
        tags=list(collection.tags),
        categories=list(collection.categories),
        analytics=CollectionAnalyticsRead.model_validate(
            collection.analytics, from_attributes=True
        ),
    )


def _outcomes_to_read_model(outcomes: list[GenerationOutcome]) -> list[GenerationOutcomeRead]:
    return [
        GenerationOutcomeRead.model_validate(outcome, from_attributes=True)
        for outcome in outcomes
    ]


@router.post("/", response_model=CollectionRead, status_code=status.HTTP_201_CREATED)
def create_collection(
    collection_in: CollectionCreate, db: Session = Depends(get_db)
) -> CollectionRead:
    try:
        collection = create_collection_uc(
            db,
            name=collection_in.name,
            collection_type=collection_in.type,
            template_ids=collection_in.template_ids,
            created_by=collection_in.created_by,
            description=collection_in.description,
            metadata=metadata_from_request(collection_in.type, collection_in.metadata),
            is_public=collection_in.is_public,
            featured=collection_in.featured,
            tags=collection_in.tags,
            categories=collection_in.categories,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _collection_to_read_model(collection)


@router.post(
    "/bundles", response_model=CollectionRead, status_code=status.HTTP_201_CREATED
)
def create_bundle(bundle_in: BundleCreate, db: Session = Depends(get_db)) -> CollectionRead:
    try:
        bundle = create_bundle_uc(
            db,
            name=bundle_in.name,
            template_ids=bundle_in.template_ids,
            bundle_price=bundle_in.bundle_price,
            created_by=bundle_in.created_by,
            description=bundle_in.description,
            discount=bundle_in.discount,
            featured=bundle_in.featured,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _collection_to_read_model(bundle)


@router.get("/", response_model=CollectionPage)
def list_collections(
    collection_type: str | None = Query(default=None, alias="type"),
    category: str | None = None,
    featured: bool | None = None,
    is_public: bool | None = True,
    sort_by: str = "created_at",
    descending: bool = True,
    limit: int = Query(default=20, ge=1, le=100),
    cursor: str | None = None,
    db: Session = Depends(get_db),
) -> CollectionPage:
    try:
        page = list_collections_uc(
            db,
            collection_type=collection_type,
            category=category,
            featured=featured,
            is_public=is_public,
            sort_by=sort_by,
            descending=descending,
            limit=limit,
            cursor=cursor,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return CollectionPage(
        items=[_collection_to_read_model(collection) for collection in page.items],
        next_cursor=page.next_cursor,
    )


@router.get("/featured", response_model=list[CollectionRead])
def list_featured_collections(db: Session = Depends(get_db)) -> list[CollectionRead]:
    collections = get_featured_collections_uc(db)
    return [_collection_to_read_model(collection) for collection in collections]


@router.post("/generate/trending", response_model=list[GenerationOutcomeRead])
def generate_trending(db: Session = Depends(get_db)) -> list[GenerationOutcomeRead]:
    """Regenerate every trending collection."""

    try:
        outcomes = generate_trending_uc(db)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _outcomes_to_read_model(outcomes)


@router.post("/generate/seasonal", response_model=list[GenerationOutcomeRead])
def generate_seasonal(
    generation_in: SeasonalGeneration, db: Session = Depends(get_db)
) -> list[GenerationOutcomeRead]:
    """Regenerate the collections of the seasons active in the given month."""

    try:
        outcomes = generate_seasonal_uc(
            db, month=generation_in.month, year=generation_in.year
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _outcomes_to_read_model(outcomes)


@router.get("/{collection_id}", response_model=CollectionRead)
def read_collection(collection_id: int, db: Session = Depends(get_db)) -> CollectionRead:
    try:
        collection = get_collection_uc(db, collection_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _collection_to_read_model(collection)


@router.put("/{collection_id}/templates", response_model=CollectionRead)
def update_collection_templates(
    collection_id: int,
    templates_in: CollectionTemplatesUpdate,
    db: Session = Depends(get_db),
) -> CollectionRead:
    try:
        collection = update_collection_templates_uc(
            db, collection_id=collection_id, template_ids=templates_in.template_ids
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return _collection_to_read_model(collection)


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_collection(collection_id: int, db: Session = Depends(get_db)) -> Response:
    try:
        delete_collection_uc(db, collection_id)
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{collection_id}/analytics", status_code=status.HTTP_204_NO_CONTENT)
def record_analytics(
    collection_id: int,
    event_in: CollectionAnalyticsEvent,
    db: Session = Depends(get_db),
) -> Response:
    try:
        record_analytics_uc(
            db,
            collection_id=collection_id,
            event=event_in.event,
            amount=event_in.amount,
        )
    except MarketplaceError as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
