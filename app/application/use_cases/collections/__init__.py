"""Collection curation use cases."""

from .create_bundle import REFERENCE_TEMPLATE_PRICE, create_bundle, price_bundle
from .create_collection import create_collection
from .delete_collection import delete_collection
from .generate_seasonal import generate_seasonal
from .generate_trending import TRENDING_ALGORITHMS, generate_trending
from .get_collection import get_collection, get_featured_collections, list_collections
from .record_analytics import ANALYTICS_EVENTS, record_analytics
from .seasons import SEASONS, active_seasons, season_window
from .update_collection_templates import update_collection_templates

__all__ = [
    "ANALYTICS_EVENTS",
    "REFERENCE_TEMPLATE_PRICE",
    "SEASONS",
    "TRENDING_ALGORITHMS",
    "active_seasons",
    "create_bundle",
    "create_collection",
    "delete_collection",
    "generate_seasonal",
    "generate_trending",
    "get_collection",
    "get_featured_collections",
    "list_collections",
    "price_bundle",
    "record_analytics",
    "season_window",
    "update_collection_templates",
]
