"""Persistence layer for discovery collections."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.entities import (
    BundleMetadata,
    CategoryMetadata,
    Collection,
    CollectionAnalytics,
    CollectionMetadata,
    COLLECTION_TYPE_BUNDLE,
    COLLECTION_TYPE_CATEGORY,
    COLLECTION_TYPE_CREATOR,
    COLLECTION_TYPE_CURATED,
    COLLECTION_TYPE_SEASONAL,
    COLLECTION_TYPE_TRENDING,
    CreatorMetadata,
    CuratedMetadata,
    SeasonalMetadata,
    TrendingMetadata,
)
from app.infrastructure.models import CollectionMembershipModel, CollectionModel
from app.infrastructure.store import increment_counters
from app.utils import ensure_app_timezone, now_in_app_timezone

_SORT_COLUMNS = {
    "created_at": CollectionModel.created_at,
    "updated_at": CollectionModel.updated_at,
    "view_count": CollectionModel.view_count,
}


class CollectionRepository:
    """Provide CRUD operations for collections and their ordered members."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, collection_id: int) -> Collection | None:
        model = self.session.get(CollectionModel, collection_id)
        return self._to_entity(model) if model else None

    def get_by_generator_key(self, generator_key: str) -> Collection | None:
        model = self._get_by_generator_key(generator_key)
        return self._to_entity(model) if model else None

    def list(
        self,
        *,
        skip: int = 0,
        limit: int | None = 20,
        collection_type: str | None = None,
        category: str | None = None,
        featured: bool | None = None,
        is_public: bool | None = True,
        sort_by: str = "created_at",
        descending: bool = True,
    ) -> Sequence[Collection]:
        query = self.session.query(CollectionModel).filter(
            CollectionModel.status == "active"
        )
        if collection_type:
            query = query.filter(CollectionModel.type == collection_type)
        if featured is not None:
            query = query.filter(CollectionModel.featured.is_(featured))
        if is_public is not None:
            query = query.filter(CollectionModel.is_public.is_(is_public))
        column = _SORT_COLUMNS.get(sort_by, CollectionModel.created_at)
        if descending:
            query = query.order_by(column.desc(), CollectionModel.id.desc())
        else:
            query = query.order_by(column.asc(), CollectionModel.id.asc())
        if category:
            # Categories live in a JSON list; filter after loading.
            matches = [
                model for model in query.all() if category in (model.categories or [])
            ]
            end = None if limit is None else skip + limit
            return [self._to_entity(model) for model in matches[skip:end]]
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, collection: Collection) -> Collection:
        now = now_in_app_timezone()
        model = CollectionModel(
            name=collection.name,
            description=collection.description,
            type=collection.type,
            metadata_payload=metadata_to_payload(collection.metadata),
            created_by=collection.created_by,
            created_at=ensure_app_timezone(collection.created_at) or now,
            updated_at=now,
            is_public=collection.is_public,
            featured=collection.featured,
            status=collection.status,
            generator_key=collection.generator_key,
            tags=list(collection.tags),
            categories=list(collection.categories),
            revenue=Decimal("0.00"),
        )
        model.memberships = [
            CollectionMembershipModel(template_id=template_id, position=position)
            for position, template_id in enumerate(collection.template_ids)
        ]
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def supersede(self, collection: Collection) -> tuple[Collection, int | None]:
        """Replace the live collection sharing ``collection.generator_key``.

        Returns the new collection and the id of the one it replaced.
        """

        previous = self._get_by_generator_key(collection.generator_key)
        previous_id = None
        if previous is not None:
            previous_id = previous.id
            self.session.delete(previous)
            # Flush the delete first: the unit of work would otherwise insert
            # the replacement before removing the old row's generator key.
            self.session.flush()
        return self.create(collection), previous_id

    def retire_seasonal_ended_before(self, cutoff: date) -> list[int]:
        """Delete seasonal collections whose window ended before ``cutoff``.

        Returns the ids of the deleted collections.
        """

        models = (
            self.session.query(CollectionModel)
            .filter(CollectionModel.type == COLLECTION_TYPE_SEASONAL)
            .order_by(CollectionModel.id.asc())
            .all()
        )
        retired: list[int] = []
        for model in models:
            end_date = (model.metadata_payload or {}).get("end_date")
            if end_date and date.fromisoformat(end_date) < cutoff:
                retired.append(model.id)
                self.session.delete(model)
        if retired:
            self.session.flush()
        return retired

    def replace_templates(self, collection_id: int, template_ids: Sequence[int]) -> Collection:
        model = self.session.get(CollectionModel, collection_id)
        if model is None:
            msg = f"Collection with id {collection_id} not found"
            raise ValueError(msg)
        model.memberships.clear()
        self.session.flush()
        model.memberships.extend(
            CollectionMembershipModel(template_id=template_id, position=position)
            for position, template_id in enumerate(template_ids)
        )
        model.updated_at = now_in_app_timezone()
        self.session.flush()
        return self._to_entity(model)

    def remove_template_everywhere(self, template_id: int) -> list[int]:
        """Drop ``template_id`` from every collection, keeping the others' order.

        Returns the ids of the collections that referenced the template.
        """

        affected = self.session.execute(
            select(CollectionMembershipModel.collection_id).where(
                CollectionMembershipModel.template_id == template_id
            )
        ).scalars().all()
        now = now_in_app_timezone()
        for collection_id in affected:
            model = self.session.get(CollectionModel, collection_id)
            remaining = [
                membership
                for membership in model.memberships
                if membership.template_id != template_id
            ]
            model.memberships = remaining
            for position, membership in enumerate(remaining):
                membership.position = position
            model.updated_at = now
        self.session.flush()
        return list(affected)

    def delete(self, collection_id: int) -> bool:
        model = self.session.get(CollectionModel, collection_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.flush()
        return True

    def increment_analytics(self, collection_id: int, **deltas: Any) -> bool:
        return increment_counters(self.session, CollectionModel, collection_id, deltas)

    def count(self) -> int:
        return self.session.execute(select(func.count(CollectionModel.id))).scalar_one()

    def _get_by_generator_key(self, generator_key: str | None) -> CollectionModel | None:
        if generator_key is None:
            return None
        return (
            self.session.query(CollectionModel)
            .filter(CollectionModel.generator_key == generator_key)
            .first()
        )

    @staticmethod
    def _to_entity(model: CollectionModel) -> Collection:
        return Collection(
            id=model.id,
            name=model.name,
            description=model.description or "",
            type=model.type,
            template_ids=tuple(membership.template_id for membership in model.memberships),
            metadata=metadata_from_payload(model.type, model.metadata_payload or {}),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            is_public=bool(model.is_public),
            featured=bool(model.featured),
            status=model.status,
            generator_key=model.generator_key,
            tags=tuple(model.tags or ()),
            categories=tuple(model.categories or ()),
            analytics=CollectionAnalytics(
                view_count=model.view_count or 0,
                download_count=model.download_count or 0,
                save_count=model.save_count or 0,
                impressions=model.impressions or 0,
                clicks=model.clicks or 0,
                conversions=model.conversions or 0,
                revenue=Decimal(str(model.revenue or 0)).quantize(Decimal("0.01")),
            ),
        )


def metadata_to_payload(metadata: CollectionMetadata) -> dict[str, Any]:
    """Serialise a metadata variant into JSON-compatible values."""

    if isinstance(metadata, BundleMetadata):
        return {
            "original_price": str(metadata.original_price),
            "bundle_price": str(metadata.bundle_price),
            "discount": metadata.discount,
            "savings": str(metadata.savings),
            "currency": metadata.currency,
        }
    if isinstance(metadata, SeasonalMetadata):
        return {
            "season": metadata.season,
            "year": metadata.year,
            "start_date": metadata.start_date.isoformat(),
            "end_date": metadata.end_date.isoformat(),
            "theme_color": metadata.theme_color,
        }
    if isinstance(metadata, TrendingMetadata):
        return {
            "algorithm": metadata.algorithm,
            "refresh_interval_hours": metadata.refresh_interval_hours,
            "generated_at": metadata.generated_at.isoformat(),
            "auto_update": metadata.auto_update,
        }
    if isinstance(metadata, CategoryMetadata):
        return {"category": metadata.category}
    if isinstance(metadata, CreatorMetadata):
        return {"creator_id": metadata.creator_id}
    if isinstance(metadata, CuratedMetadata):
        return {"curator_note": metadata.curator_note}
    raise TypeError(f"Unsupported collection metadata: {type(metadata).__name__}")


def metadata_from_payload(collection_type: str, payload: dict[str, Any]) -> CollectionMetadata:
    """Rebuild the metadata variant stored for ``collection_type``."""

    if collection_type == COLLECTION_TYPE_BUNDLE:
        return BundleMetadata(
            original_price=Decimal(payload["original_price"]),
            bundle_price=Decimal(payload["bundle_price"]),
            discount=int(payload["discount"]),
            savings=Decimal(payload["savings"]),
            currency=payload.get("currency", "USD"),
        )
    if collection_type == COLLECTION_TYPE_SEASONAL:
        return SeasonalMetadata(
            season=payload["season"],
            year=int(payload["year"]),
            start_date=date.fromisoformat(payload["start_date"]),
            end_date=date.fromisoformat(payload["end_date"]),
            theme_color=payload["theme_color"],
        )
    if collection_type == COLLECTION_TYPE_TRENDING:
        return TrendingMetadata(
            algorithm=payload["algorithm"],
            refresh_interval_hours=int(payload["refresh_interval_hours"]),
            generated_at=datetime.fromisoformat(payload["generated_at"]),
            auto_update=bool(payload.get("auto_update", True)),
        )
    if collection_type == COLLECTION_TYPE_CATEGORY:
        return CategoryMetadata(category=payload["category"])
    if collection_type == COLLECTION_TYPE_CREATOR:
        return CreatorMetadata(creator_id=payload["creator_id"])
    if collection_type == COLLECTION_TYPE_CURATED:
        return CuratedMetadata(curator_note=payload.get("curator_note"))
    raise ValueError(f"Unknown collection type: {collection_type}")


__all__ = ["CollectionRepository", "metadata_from_payload", "metadata_to_payload"]
