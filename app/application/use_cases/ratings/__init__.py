"""Rating use cases."""

from .list_template_ratings import list_template_ratings
from .recompute_quality_score import recompute_quality_score
from .scoring import (
    FEATURED_THRESHOLD,
    MIN_RATINGS_FOR_AI,
    MIN_RATINGS_FOR_FEATURED,
    MIN_SCORE_FOR_AI,
    compute_quality_score,
    qualifies_for_ai,
    qualifies_for_featured,
    score_ratings,
)
from .submit_rating import submit_rating

__all__ = [
    "FEATURED_THRESHOLD",
    "MIN_RATINGS_FOR_AI",
    "MIN_RATINGS_FOR_FEATURED",
    "MIN_SCORE_FOR_AI",
    "compute_quality_score",
    "list_template_ratings",
    "qualifies_for_ai",
    "qualifies_for_featured",
    "recompute_quality_score",
    "score_ratings",
    "submit_rating",
]
