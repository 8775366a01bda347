"""Persistence layer for template ratings and comments."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.domain.entities import Rating, TemplateComment
from app.infrastructure.models import CommentModel, RatingModel
from app.utils import ensure_app_timezone


class RatingRepository:
    """Keyed storage of ratings: one row per (template, user)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, template_id: int, user_id: str) -> Rating | None:
        model = self._get_model(template_id, user_id)
        return self._to_entity(model) if model else None

    def upsert(
        self,
        *,
        template_id: int,
        user_id: str,
        score: int,
        comment: str,
        now: datetime,
    ) -> Rating:
        """Replace the user's rating in place, or insert the first one.

        A concurrent first insert for the same pair trips the unique
        constraint; the caller's transaction is then replayed and lands on the
        update branch.
        """

        model = self._get_model(template_id, user_id)
        if model is None:
            model = RatingModel(
                template_id=template_id,
                user_id=user_id,
                created_at=now,
            )
            self.session.add(model)
        else:
            model.updated_at = now
        model.score = score
        model.comment = comment
        self.session.flush()
        return self._to_entity(model)

    def aggregate(self, template_id: int) -> tuple[int, int]:
        """Return ``(count, sum_of_scores)`` over the template's rating set."""

        count, total = self.session.execute(
            select(
                func.count(RatingModel.id),
                func.coalesce(func.sum(RatingModel.score), 0),
            ).where(RatingModel.template_id == template_id)
        ).one()
        return int(count), int(total)

    def list_for_template(
        self, template_id: int, *, limit: int | None = 100
    ) -> Sequence[Rating]:
        query = (
            self.session.query(RatingModel)
            .filter(RatingModel.template_id == template_id)
            .order_by(
                func.coalesce(RatingModel.updated_at, RatingModel.created_at).desc(),
                RatingModel.id.desc(),
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def _get_model(self, template_id: int, user_id: str) -> RatingModel | None:
        return (
            self.session.query(RatingModel)
            .filter(RatingModel.template_id == template_id)
            .filter(RatingModel.user_id == user_id)
            .first()
        )

    @staticmethod
    def _to_entity(model: RatingModel) -> Rating:
        return Rating(
            id=model.id,
            template_id=model.template_id,
            user_id=model.user_id,
            score=model.score,
            comment=model.comment or "",
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


class CommentRepository:
    """Append-only storage for template comments."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, comment: TemplateComment) -> TemplateComment:
        model = CommentModel(
            template_id=comment.template_id,
            user_id=comment.user_id,
            display_name=comment.display_name,
            comment=comment.comment,
            created_at=comment.created_at,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def list_for_template(
        self, template_id: int, *, limit: int | None = 100
    ) -> Sequence[TemplateComment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.template_id == template_id)
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: CommentModel) -> TemplateComment:
        return TemplateComment(
            id=model.id,
            template_id=model.template_id,
            user_id=model.user_id,
            display_name=model.display_name,
            comment=model.comment,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["CommentRepository", "RatingRepository"]
