"""Domain value aggregating catalogue-wide marketplace figures."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MarketplaceStats:
    total_templates: int
    pending_review: int
    approved: int
    rejected: int
    flagged: int
    featured: int
    total_downloads: int
    total_revenue: Decimal
    average_rating: float


__all__ = ["MarketplaceStats"]
