"""Use cases for template discussion threads."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.ratings.validators import ensure_comment, ensure_user_id
from app.domain.entities import TemplateComment
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import CommentRepository, TemplateRepository
from app.infrastructure.store import ContentStore
from app.utils import now_in_app_timezone


def add_template_comment(
    session: Session,
    *,
    template_id: int,
    user_id: str,
    comment: str,
    display_name: str | None = None,
) -> TemplateComment:
    """Append a comment to the template's discussion."""

    text = ensure_comment(comment, required=True)
    author = ensure_user_id(user_id)

    def _apply(tx: Session) -> TemplateComment:
        if TemplateRepository(tx).get(template_id) is None:
            raise NotFoundError("Template", template_id)
        return CommentRepository(tx).create(
            TemplateComment(
                id=None,
                template_id=template_id,
                user_id=author,
                display_name=(display_name or "").strip() or None,
                comment=text,
                created_at=now_in_app_timezone(),
            )
        )

    # Not replayed on a failed commit: a retry could post the comment twice.
    return ContentStore(session).run(
        _apply, name=f"add_template_comment[{template_id}]", retry_unavailable=False
    )


def list_template_comments(
    session: Session, template_id: int, *, limit: int | None = 100
) -> Sequence[TemplateComment]:
    """Return the comments of ``template_id``, newest first."""

    if TemplateRepository(session).get(template_id) is None:
        raise NotFoundError("Template", template_id)
    return CommentRepository(session).list_for_template(template_id, limit=limit)


__all__ = ["add_template_comment", "list_template_comments"]
