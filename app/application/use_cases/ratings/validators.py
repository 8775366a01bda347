"""Validation helpers for rating and comment use cases."""

from typing import Any

from app.domain.errors import ValidationError

from .scoring import MAX_SCORE, MIN_SCORE

MAX_COMMENT_LENGTH = 500


def ensure_score(score: Any) -> int:
    """Return ``score`` when it is a whole number between 1 and 5."""

    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError("Rating score must be an integer")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(
            f"Rating score must be between {MIN_SCORE} and {MAX_SCORE}"
        )
    return score


def ensure_comment(comment: str | None, *, required: bool = False) -> str:
    normalized = (comment or "").strip()
    if required and not normalized:
        raise ValidationError("Comment cannot be empty")
    if len(normalized) > MAX_COMMENT_LENGTH:
        raise ValidationError(
            f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"
        )
    return normalized


def ensure_user_id(user_id: str | None) -> str:
    normalized = (user_id or "").strip()
    if not normalized:
        raise ValidationError("A user id is required")
    return normalized


__all__ = ["MAX_COMMENT_LENGTH", "ensure_comment", "ensure_score", "ensure_user_id"]
