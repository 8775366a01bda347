"""Schemas for template, rating and comment endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ContentSnapshot = dict[str, Any] | str


class AIMetadataRead(BaseModel):
    component_types: list[str]
    layout_style: str
    complexity: str
    has_images: bool
    has_buttons: bool
    has_text: bool
    is_responsive: bool

    model_config = ConfigDict(from_attributes=True)


class QualityScoreRead(BaseModel):
    average: float
    wilson_lower_bound: float
    total_ratings: int
    is_quality_for_ai: bool
    is_featured: bool

    model_config = ConfigDict(from_attributes=True)


class TemplateCreate(BaseModel):
    """Payload required to submit a template for review."""

    name: str
    category: str
    content: ContentSnapshot
    created_by: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    creator_display_name: str | None = None
    template_type: str = "free"
    price: Decimal | None = None
    is_listed: bool = False


class TemplateListingUpdate(BaseModel):
    is_listed: bool | None = None
    price: Decimal | None = None
    template_type: str | None = None
    description: str | None = None
    tags: list[str] | None = None

    model_config = ConfigDict(extra="forbid")


class TemplateModeration(BaseModel):
    status: str
    moderator_id: str
    review_notes: str | None = None


class TemplateUsage(BaseModel):
    action: str = "usage"


class TemplateFeaturedUpdate(BaseModel):
    featured: bool = True


class TemplateGrowthRate(BaseModel):
    growth_rate: float | None


class TemplateContentUpdate(BaseModel):
    content: ContentSnapshot
    author_id: str
    changelog: str | None = None
    version_type: str = "minor"
    request_id: str | None = None


class TemplateRead(BaseModel):
    id: int
    name: str
    description: str
    category: str
    tags: list[str]
    status: str
    visibility: str
    is_listed: bool
    is_active: bool
    template_type: str
    price: Decimal
    content: dict[str, Any]
    created_by: str
    creator_display_name: str | None
    created_at: datetime | None
    updated_at: datetime | None
    current_version: str
    version_count: int
    ai_metadata: AIMetadataRead
    quality_score: QualityScoreRead
    view_count: int
    download_count: int
    usage_count: int
    growth_rate: float | None
    moderated_by: str | None
    moderated_at: datetime | None
    review_notes: str | None
    manually_featured: bool
    featured_at: datetime | None
    collection_ids: list[int]

    model_config = ConfigDict(from_attributes=True)


class TemplatePage(BaseModel):
    items: list[TemplateRead]
    next_cursor: str | None = None


class RatingCreate(BaseModel):
    user_id: str
    score: int
    comment: str | None = None


class RatingRead(BaseModel):
    id: int
    template_id: int
    user_id: str
    score: int
    comment: str
    created_at: datetime | None
    updated_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class CommentCreate(BaseModel):
    user_id: str
    comment: str
    display_name: str | None = None


class CommentRead(BaseModel):
    id: int
    template_id: int
    user_id: str
    display_name: str | None
    comment: str
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class MarketplaceStatsRead(BaseModel):
    total_templates: int
    pending_review: int
    approved: int
    rejected: int
    flagged: int
    featured: int
    total_downloads: int
    total_revenue: Decimal
    average_rating: float

    model_config = ConfigDict(from_attributes=True)
