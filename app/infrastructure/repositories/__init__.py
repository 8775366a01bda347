"""Repository implementations for infrastructure layer."""

from .collection_repository import CollectionRepository
from .moderation_repository import ModerationLogRepository, ReportRepository
from .rating_repository import CommentRepository, RatingRepository
from .template_repository import TemplateRepository
from .version_repository import VersionRepository

__all__ = [
    "CollectionRepository",
    "CommentRepository",
    "ModerationLogRepository",
    "RatingRepository",
    "ReportRepository",
    "TemplateRepository",
    "VersionRepository",
]
