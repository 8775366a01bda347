"""Template catalogue use cases."""

from .comments import add_template_comment, list_template_comments
from .delete_template import delete_template
from .get_marketplace_stats import get_marketplace_stats
from .get_template import get_template, get_templates_by_ids
from .list_templates import (
    list_quality_templates_for_ai,
    list_templates,
    list_templates_by_status,
)
from .moderate_template import apply_moderation, moderate_template
from .set_template_featured import get_featured_templates, set_template_featured
from .submit_template import submit_template
from .track_template_usage import record_growth_rate, track_template_usage
from .update_template_listing import update_template_listing

__all__ = [
    "add_template_comment",
    "apply_moderation",
    "delete_template",
    "get_featured_templates",
    "get_marketplace_stats",
    "get_template",
    "get_templates_by_ids",
    "list_quality_templates_for_ai",
    "list_template_comments",
    "list_templates",
    "list_templates_by_status",
    "moderate_template",
    "record_growth_rate",
    "set_template_featured",
    "submit_template",
    "track_template_usage",
    "update_template_listing",
]
