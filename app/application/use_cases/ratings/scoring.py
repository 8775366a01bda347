"""Quality scoring of templates from their rating set.

The score is the lower bound of the Wilson score interval for the share of
"stars" a template earns, scaled back onto the 1-5 rating range. It ranks
templates with few ratings conservatively.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from app.domain.entities import QualityScore

MAX_SCORE = 5
MIN_SCORE = 1
WILSON_Z = 1.96

MIN_RATINGS_FOR_AI = 10
MIN_SCORE_FOR_AI = 3.5
MIN_RATINGS_FOR_FEATURED = 20
FEATURED_THRESHOLD = 4.5

_CENTS = Decimal("0.01")


def round_half_up(value: float, places: Decimal = _CENTS) -> float:
    """Round ``value`` to two decimals, halves away from zero."""

    return float(Decimal(str(value)).quantize(places, rounding=ROUND_HALF_UP))


def wilson_lower_bound(count: int, average: float, *, z: float = WILSON_Z) -> float:
    """Return the unrounded Wilson lower bound on the 0-5 scale."""

    if count <= 0:
        return 0.0
    p_hat = average / MAX_SCORE
    z_squared = z * z
    centre = p_hat + z_squared / (2 * count)
    margin = z * math.sqrt((p_hat * (1 - p_hat) + z_squared / (4 * count)) / count)
    score01 = (centre - margin) / (1 + z_squared / count)
    return score01 * MAX_SCORE


def qualifies_for_ai(total_ratings: int, average: float) -> bool:
    return total_ratings >= MIN_RATINGS_FOR_AI and average >= MIN_SCORE_FOR_AI


def qualifies_for_featured(total_ratings: int, average: float) -> bool:
    return total_ratings >= MIN_RATINGS_FOR_FEATURED and average >= FEATURED_THRESHOLD


def compute_quality_score(count: int, score_sum: int) -> QualityScore:
    """Derive the quality score from the size and sum of a rating set."""

    if count <= 0:
        return QualityScore.empty()
    average = score_sum / count
    return QualityScore(
        average=round_half_up(average),
        wilson_lower_bound=round_half_up(wilson_lower_bound(count, average)),
        total_ratings=count,
        is_quality_for_ai=qualifies_for_ai(count, average),
        is_featured=qualifies_for_featured(count, average),
    )


def score_ratings(scores: Iterable[int]) -> QualityScore:
    values = list(scores)
    return compute_quality_score(len(values), sum(values))


__all__ = [
    "FEATURED_THRESHOLD",
    "MAX_SCORE",
    "MIN_RATINGS_FOR_AI",
    "MIN_RATINGS_FOR_FEATURED",
    "MIN_SCORE",
    "MIN_SCORE_FOR_AI",
    "WILSON_Z",
    "compute_quality_score",
    "qualifies_for_ai",
    "qualifies_for_featured",
    "round_half_up",
    "score_ratings",
    "wilson_lower_bound",
]
