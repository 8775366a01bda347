"""Persistence layer for marketplace templates."""

from __future__ import annotations

from collections.abc import Collection as CollectionOf
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.orm import Session

from app.domain.entities import (
    AIMetadata,
    MarketplaceStats,
    QualityScore,
    TEMPLATE_STATUS_APPROVED,
    TEMPLATE_STATUS_FLAGGED,
    TEMPLATE_STATUS_PENDING,
    TEMPLATE_STATUS_REJECTED,
    Template,
)
from app.infrastructure.models import (
    CollectionMembershipModel,
    CommentModel,
    RatingModel,
    TemplateModel,
    TemplateReportModel,
    TemplateTagModel,
    TemplateVersionModel,
)
from app.infrastructure.store import increment_counters
from app.utils import ensure_app_timezone, now_in_app_timezone

_LIST_ORDERINGS = {
    "newest": (TemplateModel.created_at.desc(), TemplateModel.id.desc()),
    "popular": (TemplateModel.usage_count.desc(), TemplateModel.id.desc()),
    "rating": (TemplateModel.average_rating.desc(), TemplateModel.id.desc()),
    "usage": (TemplateModel.download_count.desc(), TemplateModel.id.desc()),
}

_RANK_FIELDS = {
    "download_count": TemplateModel.download_count,
    "average_rating": TemplateModel.average_rating,
    "growth_rate": TemplateModel.growth_rate,
    "quality_score": TemplateModel.wilson_lower_bound,
}


class TemplateRepository:
    """Provide CRUD and projection maintenance for templates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, template_id: int) -> Template | None:
        model = self.session.get(TemplateModel, template_id)
        return self._to_entity(model) if model else None

    def existing_ids(self, template_ids: CollectionOf[int]) -> set[int]:
        if not template_ids:
            return set()
        rows = self.session.execute(
            select(TemplateModel.id).where(TemplateModel.id.in_(tuple(template_ids)))
        )
        return {row[0] for row in rows}

    def get_many(self, template_ids: Sequence[int]) -> list[Template]:
        """Return the existing templates among ``template_ids`` in the given order."""

        if not template_ids:
            return []
        models = (
            self.session.query(TemplateModel)
            .filter(TemplateModel.id.in_(tuple(template_ids)))
            .all()
        )
        by_id = {model.id: model for model in models}
        return [
            self._to_entity(by_id[template_id])
            for template_id in dict.fromkeys(template_ids)
            if template_id in by_id
        ]

    def list_by_status(
        self, status: str | None, *, skip: int = 0, limit: int | None = 20
    ) -> Sequence[Template]:
        query = self.session.query(TemplateModel)
        if status:
            query = query.filter(TemplateModel.status == status)
        query = query.order_by(TemplateModel.created_at.desc(), TemplateModel.id.desc())
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list(
        self,
        *,
        skip: int = 0,
        limit: int | None = 20,
        category: str | None = None,
        template_type: str | None = None,
        created_by: str | None = None,
        only_quality: bool = False,
        only_featured: bool = False,
        search: str | None = None,
        sort_by: str = "newest",
    ) -> Sequence[Template]:
        query = self.session.query(TemplateModel).filter(TemplateModel.is_active.is_(True))
        if category:
            query = query.filter(TemplateModel.category == category)
        if template_type:
            query = query.filter(TemplateModel.template_type == template_type)
        if created_by:
            query = query.filter(TemplateModel.created_by == created_by)
        if only_quality:
            query = query.filter(TemplateModel.is_quality_for_ai.is_(True))
        if only_featured:
            query = query.filter(TemplateModel.is_featured.is_(True))
        if search:
            term = f"%{search.strip().lower()}%"
            tag_match = (
                select(TemplateTagModel.id)
                .where(TemplateTagModel.template_id == TemplateModel.id)
                .where(func.lower(TemplateTagModel.tag).like(term))
                .exists()
            )
            query = query.filter(
                or_(
                    func.lower(TemplateModel.name).like(term),
                    func.lower(TemplateModel.description).like(term),
                    tag_match,
                )
            )
        query = query.order_by(*_LIST_ORDERINGS.get(sort_by, _LIST_ORDERINGS["newest"]))
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_featured(self, *, limit: int) -> Sequence[Template]:
        """Return approved, visible templates a moderator featured, best rated first."""

        query = (
            self.session.query(TemplateModel)
            .filter(TemplateModel.manually_featured.is_(True))
            .filter(TemplateModel.status == TEMPLATE_STATUS_APPROVED)
            .filter(TemplateModel.is_active.is_(True))
            .filter(TemplateModel.is_listed.is_(True))
            .order_by(TemplateModel.average_rating.desc(), TemplateModel.id.asc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def rank(
        self,
        *,
        sort_field: str,
        limit: int,
        min_ratings: int | None = None,
        created_since: datetime | None = None,
        require_sort_value: bool = False,
        any_tags: CollectionOf[str] | None = None,
    ) -> Sequence[Template]:
        """Return approved, listed templates ordered by ``sort_field``.

        Ties are broken by ascending id so repeated runs rank identically.
        """

        column = _RANK_FIELDS[sort_field]
        query = self.session.query(TemplateModel).filter(
            and_(
                TemplateModel.status == TEMPLATE_STATUS_APPROVED,
                TemplateModel.is_listed.is_(True),
                TemplateModel.is_active.is_(True),
            )
        )
        if min_ratings is not None:
            query = query.filter(TemplateModel.total_ratings >= min_ratings)
        if created_since is not None:
            query = query.filter(TemplateModel.created_at >= created_since)
        if require_sort_value:
            query = query.filter(column.isnot(None))
        if any_tags is not None:
            tag_match = (
                select(TemplateTagModel.id)
                .where(TemplateTagModel.template_id == TemplateModel.id)
                .where(TemplateTagModel.tag.in_(tuple(any_tags)))
                .exists()
            )
            query = query.filter(tag_match)
        query = query.order_by(column.desc(), TemplateModel.id.asc()).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def create(self, template: Template) -> Template:
        model = TemplateModel()
        self._apply_entity_to_model(model, template, include_creation_fields=True)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def update(self, template: Template) -> Template:
        """Persist editable catalogue fields; projections are left untouched."""

        model = self.session.get(TemplateModel, template.id)
        if model is None:
            msg = f"Template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template, include_creation_fields=False)
        model.updated_at = now_in_app_timezone()
        self.session.flush()
        return self._to_entity(model)

    def lock_for_rating(self, template_id: int) -> bool:
        """Bump the rating revision, taking the template's row lock.

        Concurrent rating transactions on the same template queue behind this
        statement, so the aggregate each one reads afterwards includes every
        rating committed before it.
        """

        return increment_counters(
            self.session, TemplateModel, template_id, {"rating_revision": 1}
        )

    def write_quality_score(self, template_id: int, score: QualityScore) -> None:
        self.session.execute(
            update(TemplateModel)
            .where(TemplateModel.id == template_id)
            .values(
                average_rating=score.average,
                wilson_lower_bound=score.wilson_lower_bound,
                total_ratings=score.total_ratings,
                is_quality_for_ai=score.is_quality_for_ai,
                is_featured=score.is_featured,
                updated_at=now_in_app_timezone(),
            )
            .execution_options(synchronize_session=False)
        )

    def advance_version(
        self,
        template_id: int,
        *,
        expected_version: str,
        expected_count: int,
        new_version: str,
        content: dict[str, Any],
        ai_metadata: AIMetadata,
    ) -> bool:
        """Compare-and-swap the current version pointer.

        Returns ``False`` when another writer moved the pointer first.
        """

        result = self.session.execute(
            update(TemplateModel)
            .where(TemplateModel.id == template_id)
            .where(TemplateModel.current_version == expected_version)
            .where(TemplateModel.version_count == expected_count)
            .values(
                current_version=new_version,
                version_count=expected_count + 1,
                content=content,
                ai_metadata=ai_metadata_to_payload(ai_metadata),
                updated_at=now_in_app_timezone(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def reset_version_pointer(
        self,
        template_id: int,
        *,
        current_version: str,
        version_count: int,
        content: dict[str, Any] | None,
        ai_metadata: AIMetadata | None,
    ) -> None:
        values: dict[str, Any] = {
            "current_version": current_version,
            "version_count": version_count,
            "updated_at": now_in_app_timezone(),
        }
        if content is not None:
            values["content"] = content
        if ai_metadata is not None:
            values["ai_metadata"] = ai_metadata_to_payload(ai_metadata)
        self.session.execute(
            update(TemplateModel)
            .where(TemplateModel.id == template_id)
            .values(values)
            .execution_options(synchronize_session=False)
        )

    def increment_counters(self, template_id: int, **deltas: int) -> bool:
        return increment_counters(self.session, TemplateModel, template_id, deltas)

    def set_growth_rate(self, template_id: int, growth_rate: float | None) -> bool:
        result = self.session.execute(
            update(TemplateModel)
            .where(TemplateModel.id == template_id)
            .values(growth_rate=growth_rate)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    def delete(self, template_id: int) -> None:
        """Physically delete a template together with the records it owns."""

        model = self.session.get(TemplateModel, template_id)
        if model is None:
            msg = f"Template with id {template_id} not found"
            raise ValueError(msg)
        for child in (
            RatingModel,
            CommentModel,
            TemplateReportModel,
            TemplateVersionModel,
        ):
            self.session.execute(
                delete(child)
                .where(child.template_id == template_id)
                .execution_options(synchronize_session=False)
            )
        self.session.delete(model)
        self.session.flush()

    def stats(self) -> MarketplaceStats:
        status_rows = self.session.execute(
            select(TemplateModel.status, func.count(TemplateModel.id)).group_by(
                TemplateModel.status
            )
        ).all()
        per_status = {status: count for status, count in status_rows}
        totals = self.session.execute(
            select(
                func.count(TemplateModel.id),
                func.coalesce(func.sum(TemplateModel.download_count), 0),
                func.coalesce(
                    func.sum(TemplateModel.price * TemplateModel.download_count), 0
                ),
                func.coalesce(
                    func.sum(TemplateModel.average_rating * TemplateModel.total_ratings), 0
                ),
                func.coalesce(func.sum(TemplateModel.total_ratings), 0),
            )
        ).one()
        featured = self.session.execute(
            select(func.count(TemplateModel.id))
            .where(TemplateModel.is_featured.is_(True))
            .where(TemplateModel.is_listed.is_(True))
        ).scalar_one()
        total, downloads, revenue, weighted_sum, rating_count = totals
        average = float(weighted_sum) / rating_count if rating_count else 0.0
        return MarketplaceStats(
            total_templates=total,
            pending_review=per_status.get(TEMPLATE_STATUS_PENDING, 0),
            approved=per_status.get(TEMPLATE_STATUS_APPROVED, 0),
            rejected=per_status.get(TEMPLATE_STATUS_REJECTED, 0),
            flagged=per_status.get(TEMPLATE_STATUS_FLAGGED, 0),
            featured=featured,
            total_downloads=int(downloads),
            total_revenue=Decimal(str(revenue)).quantize(Decimal("0.01")),
            average_rating=round(average, 2),
        )

    @staticmethod
    def _to_entity(model: TemplateModel) -> Template:
        return Template(
            id=model.id,
            name=model.name,
            description=model.description or "",
            category=model.category,
            tags=tuple(row.tag for row in model.tag_rows),
            status=model.status,
            is_listed=bool(model.is_listed),
            is_active=bool(model.is_active),
            template_type=model.template_type,
            price=Decimal(str(model.price or 0)).quantize(Decimal("0.01")),
            content=dict(model.content or {}),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            creator_display_name=model.creator_display_name,
            current_version=model.current_version,
            version_count=model.version_count or 0,
            ai_metadata=ai_metadata_from_payload(model.ai_metadata),
            quality_score=QualityScore(
                average=model.average_rating or 0.0,
                wilson_lower_bound=model.wilson_lower_bound or 0.0,
                total_ratings=model.total_ratings or 0,
                is_quality_for_ai=bool(model.is_quality_for_ai),
                is_featured=bool(model.is_featured),
            ),
            view_count=model.view_count or 0,
            download_count=model.download_count or 0,
            usage_count=model.usage_count or 0,
            growth_rate=model.growth_rate,
            moderated_by=model.moderated_by,
            moderated_at=ensure_app_timezone(model.moderated_at),
            review_notes=model.review_notes,
            manually_featured=bool(model.manually_featured),
            featured_at=ensure_app_timezone(model.featured_at),
            collection_ids=tuple(
                membership.collection_id for membership in model.memberships
            ),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: TemplateModel,
        template: Template,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_by = template.created_by
            model.creator_display_name = template.creator_display_name
            model.created_at = (
                ensure_app_timezone(template.created_at) or now_in_app_timezone()
            )
            model.content = template.content
            model.ai_metadata = ai_metadata_to_payload(template.ai_metadata)
            model.current_version = template.current_version
            model.version_count = template.version_count
        model.name = template.name
        model.description = template.description
        model.category = template.category
        model.status = template.status
        model.is_listed = template.is_listed
        model.is_active = template.is_active
        model.template_type = template.template_type
        model.price = template.price
        model.moderated_by = template.moderated_by
        model.moderated_at = ensure_app_timezone(template.moderated_at)
        model.review_notes = template.review_notes
        model.manually_featured = template.manually_featured
        model.featured_at = ensure_app_timezone(template.featured_at)

        current = {row.tag: row for row in model.tag_rows}
        wanted = list(dict.fromkeys(template.tags))
        model.tag_rows = [current.get(tag) or TemplateTagModel(tag=tag) for tag in wanted]


def ai_metadata_to_payload(metadata: AIMetadata) -> dict[str, Any]:
    return {
        "component_types": list(metadata.component_types),
        "layout_style": metadata.layout_style,
        "complexity": metadata.complexity,
        "has_images": metadata.has_images,
        "has_buttons": metadata.has_buttons,
        "has_text": metadata.has_text,
        "is_responsive": metadata.is_responsive,
    }


def ai_metadata_from_payload(payload: dict[str, Any] | None) -> AIMetadata:
    if not payload:
        return AIMetadata()
    return AIMetadata(
        component_types=tuple(payload.get("component_types") or ()),
        layout_style=payload.get("layout_style", "basic"),
        complexity=payload.get("complexity", "low"),
        has_images=bool(payload.get("has_images")),
        has_buttons=bool(payload.get("has_buttons")),
        has_text=bool(payload.get("has_text")),
        is_responsive=bool(payload.get("is_responsive", True)),
    )


__all__ = [
    "TemplateRepository",
    "ai_metadata_from_payload",
    "ai_metadata_to_payload",
]
