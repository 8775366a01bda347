"""Template version history use cases."""

from .compare_versions import compare_versions
from .create_version import create_version
from .get_version import get_version, list_versions
from .get_version_stats import get_version_stats
from .reconcile_current_version import reconcile_current_version
from .record_version_download import record_version_download
from .rollback_version import rollback_version
from .update_template_content import update_template_content

__all__ = [
    "compare_versions",
    "create_version",
    "get_version",
    "get_version_stats",
    "list_versions",
    "reconcile_current_version",
    "record_version_download",
    "rollback_version",
    "update_template_content",
]
