"""Domain entities exposed by the application."""

from .ai_metadata import AIMetadata
from .collection import (
    COLLECTION_STATUS_ACTIVE,
    COLLECTION_TYPES,
    COLLECTION_TYPE_BUNDLE,
    COLLECTION_TYPE_CATEGORY,
    COLLECTION_TYPE_CREATOR,
    COLLECTION_TYPE_CURATED,
    COLLECTION_TYPE_SEASONAL,
    COLLECTION_TYPE_TRENDING,
    GENERATED_COLLECTION_TYPES,
    METADATA_TYPES,
    BundleMetadata,
    CategoryMetadata,
    Collection,
    CollectionAnalytics,
    CollectionMetadata,
    CreatorMetadata,
    CuratedMetadata,
    GenerationOutcome,
    SeasonalMetadata,
    TrendingMetadata,
)
from .marketplace_stats import MarketplaceStats
from .moderation import (
    MODERATION_ACTIONS,
    MODERATION_ACTION_APPROVE,
    MODERATION_ACTION_FLAG,
    MODERATION_ACTION_REJECT,
    MODERATION_ACTION_REQUEUE,
    REPORT_RESOLUTIONS,
    REPORT_RESOLUTION_DISMISS,
    REPORT_RESOLUTION_UPHOLD,
    REPORT_STATUSES,
    REPORT_STATUS_DISMISSED,
    REPORT_STATUS_OPEN,
    REPORT_STATUS_UPHELD,
    BulkModerationResult,
    ModerationEvent,
    ModerationStats,
    ModeratorActivity,
    TemplateReport,
)
from .page import Page
from .quality_score import QualityScore
from .rating import Rating, TemplateComment
from .template import (
    INITIAL_VERSION,
    TEMPLATE_CATEGORIES,
    TEMPLATE_STATUSES,
    TEMPLATE_STATUS_APPROVED,
    TEMPLATE_STATUS_FLAGGED,
    TEMPLATE_STATUS_PENDING,
    TEMPLATE_STATUS_REJECTED,
    TEMPLATE_TYPES,
    TEMPLATE_TYPE_FREE,
    TEMPLATE_TYPE_PAID,
    TEMPLATE_TYPE_PREMIUM,
    VISIBILITY_LISTED,
    VISIBILITY_UNLISTED,
    Template,
)
from .version import (
    VERSION_TYPES,
    VERSION_TYPE_MAJOR,
    VERSION_TYPE_MINOR,
    VERSION_TYPE_PATCH,
    ComponentsDiff,
    SizeDiff,
    TemplateVersion,
    VersionDiff,
    VersionStats,
)

__all__ = [
    "AIMetadata",
    "BulkModerationResult",
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
    "ComponentsDiff",
    "CreatorMetadata",
    "CuratedMetadata",
    "GENERATED_COLLECTION_TYPES",
    "GenerationOutcome",
    "INITIAL_VERSION",
    "METADATA_TYPES",
    "MODERATION_ACTIONS",
    "MODERATION_ACTION_APPROVE",
    "MODERATION_ACTION_FLAG",
    "MODERATION_ACTION_REJECT",
    "MODERATION_ACTION_REQUEUE",
    "MarketplaceStats",
    "ModerationEvent",
    "ModerationStats",
    "ModeratorActivity",
    "Page",
    "QualityScore",
    "REPORT_RESOLUTIONS",
    "REPORT_RESOLUTION_DISMISS",
    "REPORT_RESOLUTION_UPHOLD",
    "REPORT_STATUSES",
    "REPORT_STATUS_DISMISSED",
    "REPORT_STATUS_OPEN",
    "REPORT_STATUS_UPHELD",
    "Rating",
    "SeasonalMetadata",
    "SizeDiff",
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
    "TemplateComment",
    "TemplateReport",
    "TemplateVersion",
    "TrendingMetadata",
    "VERSION_TYPES",
    "VERSION_TYPE_MAJOR",
    "VERSION_TYPE_MINOR",
    "VERSION_TYPE_PATCH",
    "VISIBILITY_LISTED",
    "VISIBILITY_UNLISTED",
    "VersionDiff",
    "VersionStats",
]
