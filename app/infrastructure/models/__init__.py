"""ORM models used by the application infrastructure."""

from .collection import CollectionMembershipModel, CollectionModel
from .moderation import ModerationEventModel, TemplateReportModel
from .template import CommentModel, RatingModel, TemplateModel, TemplateTagModel
from .version import TemplateVersionModel

__all__ = [
    "CollectionMembershipModel",
    "CollectionModel",
    "CommentModel",
    "ModerationEventModel",
    "RatingModel",
    "TemplateModel",
    "TemplateReportModel",
    "TemplateTagModel",
    "TemplateVersionModel",
]
