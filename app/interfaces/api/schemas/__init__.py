from .collection import (
    BundleCreate,
    CollectionAnalyticsEvent,
    CollectionAnalyticsRead,
    CollectionCreate,
    CollectionPage,
    CollectionRead,
    CollectionTemplatesUpdate,
    GenerationOutcomeRead,
    SeasonalGeneration,
)
from .moderation import (
    BulkModerationRequest,
    BulkModerationResultRead,
    ModerationStatsRead,
    ModeratorActivityRead,
    ReportCreate,
    ReportPage,
    ReportRead,
    ReportResolve,
)
from .template import (
    CommentCreate,
    CommentRead,
    MarketplaceStatsRead,
    QualityScoreRead,
    RatingCreate,
    RatingRead,
    TemplateContentUpdate,
    TemplateCreate,
    TemplateFeaturedUpdate,
    TemplateGrowthRate,
    TemplateListingUpdate,
    TemplateModeration,
    TemplatePage,
    TemplateRead,
    TemplateUsage,
)
from .version import (
    VersionCreate,
    VersionDiffRead,
    VersionRead,
    VersionRollback,
    VersionStatsRead,
)

__all__ = [
    "BundleCreate",
    "BulkModerationRequest",
    "BulkModerationResultRead",
    "CollectionAnalyticsEvent",
    "CollectionAnalyticsRead",
    "CollectionCreate",
    "CollectionPage",
    "CollectionRead",
    "CollectionTemplatesUpdate",
    "CommentCreate",
    "CommentRead",
    "GenerationOutcomeRead",
    "MarketplaceStatsRead",
    "ModerationStatsRead",
    "ModeratorActivityRead",
    "QualityScoreRead",
    "RatingCreate",
    "RatingRead",
    "ReportCreate",
    "ReportPage",
    "ReportRead",
    "ReportResolve",
    "SeasonalGeneration",
    "TemplateContentUpdate",
    "TemplateCreate",
    "TemplateFeaturedUpdate",
    "TemplateGrowthRate",
    "TemplateListingUpdate",
    "TemplateModeration",
    "TemplatePage",
    "TemplateRead",
    "TemplateUsage",
    "VersionCreate",
    "VersionDiffRead",
    "VersionRead",
    "VersionRollback",
    "VersionStatsRead",
]
