"""Schemas for collection endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CollectionCreate(BaseModel):
    """Payload required to author a collection."""

    name: str
    type: str
    template_ids: list[int]
    created_by: str
    description: str | None = None
    metadata: dict[str, Any] | None = None
    is_public: bool = True
    featured: bool = False
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)


class BundleCreate(BaseModel):
    name: str
    template_ids: list[int]
    bundle_price: Decimal
    created_by: str
    description: str | None = None
    discount: int | None = None
    featured: bool = False


class CollectionTemplatesUpdate(BaseModel):
    template_ids: list[int]


class CollectionAnalyticsEvent(BaseModel):
    event: str
    amount: Decimal | int | None = None


class SeasonalGeneration(BaseModel):
    month: int | None = None
    year: int | None = None


class CollectionAnalyticsRead(BaseModel):
    view_count: int
    download_count: int
    save_count: int
    impressions: int
    clicks: int
    conversions: int
    revenue: Decimal

    model_config = ConfigDict(from_attributes=True)


class CollectionRead(BaseModel):
    id: int
    name: str
    description: str
    type: str
    template_ids: list[int]
    template_count: int
    metadata: dict[str, Any]
    created_by: str
    created_at: datetime | None
    updated_at: datetime | None
    is_public: bool
    featured: bool
    status: str
    generator_key: str | None
    tags: list[str]
    categories: list[str]
    analytics: CollectionAnalyticsRead


class CollectionPage(BaseModel):
    items: list[CollectionRead]
    next_cursor: str | None = None


class GenerationOutcomeRead(BaseModel):
    key: str
    materialized: bool
    candidate_count: int
    collection_id: int | None

    model_config = ConfigDict(from_attributes=True)
