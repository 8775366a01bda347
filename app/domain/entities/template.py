"""Domain entity representing a marketplace template."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from .ai_metadata import AIMetadata
from .quality_score import QualityScore

TEMPLATE_STATUS_PENDING = "pending"
TEMPLATE_STATUS_APPROVED = "approved"
TEMPLATE_STATUS_REJECTED = "rejected"
TEMPLATE_STATUS_FLAGGED = "flagged"
TEMPLATE_STATUSES = (
    TEMPLATE_STATUS_PENDING,
    TEMPLATE_STATUS_APPROVED,
    TEMPLATE_STATUS_REJECTED,
    TEMPLATE_STATUS_FLAGGED,
)

TEMPLATE_TYPE_FREE = "free"
TEMPLATE_TYPE_PAID = "paid"
TEMPLATE_TYPE_PREMIUM = "premium"
TEMPLATE_TYPES = (TEMPLATE_TYPE_FREE, TEMPLATE_TYPE_PAID, TEMPLATE_TYPE_PREMIUM)

TEMPLATE_CATEGORIES = (
    "landing",
    "business",
    "portfolio",
    "ecommerce",
    "blog",
    "events",
    "personal",
    "other",
)

VISIBILITY_LISTED = "listed"
VISIBILITY_UNLISTED = "unlisted"

INITIAL_VERSION = "1.0.0"


@dataclass
class Template:
    """A submitted page template and its denormalized projections.

    ``quality_score``, ``current_version`` and ``version_count`` are caches of
    the template's Rating set and Version sequence.
    """

    id: int | None
    name: str
    description: str
    category: str
    tags: tuple[str, ...]
    status: str
    is_listed: bool
    is_active: bool
    template_type: str
    price: Decimal
    content: dict[str, Any]
    created_by: str
    created_at: datetime | None
    updated_at: datetime | None = None
    creator_display_name: str | None = None
    current_version: str = INITIAL_VERSION
    version_count: int = 0
    ai_metadata: AIMetadata = field(default_factory=AIMetadata)
    quality_score: QualityScore = field(default_factory=QualityScore.empty)
    view_count: int = 0
    download_count: int = 0
    usage_count: int = 0
    growth_rate: float | None = None
    moderated_by: str | None = None
    moderated_at: datetime | None = None
    review_notes: str | None = None
    manually_featured: bool = False
    featured_at: datetime | None = None
    collection_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def visibility(self) -> str:
        return VISIBILITY_LISTED if self.is_listed else VISIBILITY_UNLISTED

    @property
    def average_rating(self) -> float:
        return self.quality_score.average

    @property
    def total_ratings(self) -> int:
        return self.quality_score.total_ratings


__all__ = [
    "INITIAL_VERSION",
    "TEMPLATE_CATEGORIES",
    "TEMPLATE_STATUSES",
    "TEMPLATE_STATUS_APPROVED",
    "TEMPLATE_STATUS_FLAGGED",
    "TEMPLATE_STATUS_PENDING",
    "TEMPLATE_STATUS_REJECTED",
    "TEMPLATE_TYPES",
    "TEMPLATE_TYPE_FREE",
    "TEMPLATE_TYPE_PAID",
    "TEMPLATE_TYPE_PREMIUM",
    "Template",
    "VISIBILITY_LISTED",
    "VISIBILITY_UNLISTED",
]
