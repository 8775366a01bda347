"""Domain entities for discovery collections.

Each collection type carries its own metadata variant; ``Collection.metadata``
always holds the variant that matches ``Collection.type``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Union

COLLECTION_TYPE_BUNDLE = "bundle"
COLLECTION_TYPE_CURATED = "curated"
COLLECTION_TYPE_SEASONAL = "seasonal"
COLLECTION_TYPE_TRENDING = "trending"
COLLECTION_TYPE_CATEGORY = "category"
COLLECTION_TYPE_CREATOR = "creator"
COLLECTION_TYPES = (
    COLLECTION_TYPE_BUNDLE,
    COLLECTION_TYPE_CURATED,
    COLLECTION_TYPE_SEASONAL,
    COLLECTION_TYPE_TRENDING,
    COLLECTION_TYPE_CATEGORY,
    COLLECTION_TYPE_CREATOR,
)
# Regenerated by the curator and superseded as a whole, never edited.
GENERATED_COLLECTION_TYPES = (COLLECTION_TYPE_SEASONAL, COLLECTION_TYPE_TRENDING)

COLLECTION_STATUS_ACTIVE = "active"


@dataclass(frozen=True)
class BundleMetadata:
    original_price: Decimal
    bundle_price: Decimal
    discount: int
    savings: Decimal
    currency: str = "USD"


@dataclass(frozen=True)
class CuratedMetadata:
    curator_note: str | None = None


@dataclass(frozen=True)
class SeasonalMetadata:
    season: str
    year: int
    start_date: date
    end_date: date
    theme_color: str


@dataclass(frozen=True)
class TrendingMetadata:
    algorithm: str
    refresh_interval_hours: int
    generated_at: datetime
    auto_update: bool = True


@dataclass(frozen=True)
class CategoryMetadata:
    category: str


@dataclass(frozen=True)
class CreatorMetadata:
    creator_id: str


CollectionMetadata = Union[
    BundleMetadata,
    CuratedMetadata,
    SeasonalMetadata,
    TrendingMetadata,
    CategoryMetadata,
    CreatorMetadata,
]

METADATA_TYPES: dict[str, type] = {
    COLLECTION_TYPE_BUNDLE: BundleMetadata,
    COLLECTION_TYPE_CURATED: CuratedMetadata,
    COLLECTION_TYPE_SEASONAL: SeasonalMetadata,
    COLLECTION_TYPE_TRENDING: TrendingMetadata,
    COLLECTION_TYPE_CATEGORY: CategoryMetadata,
    COLLECTION_TYPE_CREATOR: CreatorMetadata,
}


@dataclass(frozen=True)
class CollectionAnalytics:
    view_count: int = 0
    download_count: int = 0
    save_count: int = 0
    impressions: int = 0
    clicks: int = 0
    conversions: int = 0
    revenue: Decimal = Decimal("0.00")


@dataclass
class Collection:
    """An ordered, weakly referenced set of template identifiers."""

    id: int | None
    name: str
    description: str
    type: str
    template_ids: tuple[int, ...]
    metadata: CollectionMetadata
    created_by: str
    created_at: datetime | None
    updated_at: datetime | None = None
    is_public: bool = True
    featured: bool = False
    status: str = COLLECTION_STATUS_ACTIVE
    generator_key: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    categories: tuple[str, ...] = field(default_factory=tuple)
    analytics: CollectionAnalytics = field(default_factory=CollectionAnalytics)

    @property
    def template_count(self) -> int:
        return len(self.template_ids)

    @property
    def is_generated(self) -> bool:
        return self.type in GENERATED_COLLECTION_TYPES


@dataclass(frozen=True)
class GenerationOutcome:
    """What a curation run did for one algorithm or season."""

    key: str
    materialized: bool
    candidate_count: int
    collection_id: int | None = None


__all__ = [
    "BundleMetadata",
    "COLLECTION_STATUS_ACTIVE",
    "COLLECTION_TYPES",
    "COLLECTION_TYPE_BUNDLE",
    "COLLECTION_TYPE_CATEGORY",
    "COLLECTION_TYPE_CREATOR",
    "COLLECTION_TYPE_CURATED",
    "COLLECTION_TYPE_SEASONAL",
    "COLLECTION_TYPE_TRENDING",
    "CategoryMetadata",
    "Collection",
    "CollectionAnalytics",
    "CollectionMetadata",
    "CreatorMetadata",
    "CuratedMetadata",
    "GENERATED_COLLECTION_TYPES",
    "GenerationOutcome",
    "METADATA_TYPES",
    "SeasonalMetadata",
    "TrendingMetadata",
]
