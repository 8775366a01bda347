"""Domain value describing the derived quality signal of a template."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QualityScore:
    """Projection of a template's Rating set.

    Never authored directly: it is always recomputed from the ratings.
    """

    average: float
    wilson_lower_bound: float
    total_ratings: int
    is_quality_for_ai: bool
    is_featured: bool

    @classmethod
    def empty(cls) -> "QualityScore":
        return cls(
            average=0.0,
            wilson_lower_bound=0.0,
            total_ratings=0,
            is_quality_for_ai=False,
            is_featured=False,
        )


__all__ = ["QualityScore"]
