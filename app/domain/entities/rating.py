"""Domain entities for template feedback."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Rating:
    """A user's score for a template; one per (template, user) pair."""

    id: int | None
    template_id: int
    user_id: str
    score: int
    comment: str
    created_at: datetime | None
    updated_at: datetime | None = None


@dataclass
class TemplateComment:
    """Free-form discussion attached to a template."""

    id: int | None
    template_id: int
    user_id: str
    display_name: str | None
    comment: str
    created_at: datetime | None


__all__ = ["Rating", "TemplateComment"]
