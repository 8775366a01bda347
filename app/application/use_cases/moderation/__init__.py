"""Report queue and moderation workflow use cases."""

from .bulk_moderate import bulk_moderate
from .flag_template import flag_template
from .get_moderation_stats import get_moderation_stats
from .reports import list_template_reports, resolve_template_report

__all__ = [
    "bulk_moderate",
    "flag_template",
    "get_moderation_stats",
    "list_template_reports",
    "resolve_template_report",
]
