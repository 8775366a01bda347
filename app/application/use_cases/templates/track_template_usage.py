"""Use cases for template activity counters."""

import math

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import TemplateRepository
from app.infrastructure.store import ContentStore

from .validators import ensure_action


def track_template_usage(session: Session, *, template_id: int, action: str = "usage") -> None:
    """Count one ``usage``, ``download`` or ``view`` of a template."""

    column = ensure_action(action)

    def _apply(tx: Session) -> None:
        if not TemplateRepository(tx).increment_counters(template_id, **{column: 1}):
            raise NotFoundError("Template", template_id)

    ContentStore(session).run(_apply, name=f"track_template_usage[{template_id}:{action}]")


def record_growth_rate(
    session: Session, *, template_id: int, growth_rate: float | None
) -> None:
    """Store the externally computed growth rate used by the rising stars ranking."""

    if growth_rate is not None:
        if isinstance(growth_rate, bool) or not isinstance(growth_rate, (int, float)):
            raise ValidationError("Growth rate must be a number")
        if not math.isfinite(growth_rate):
            raise ValidationError("Growth rate must be finite")

    def _apply(tx: Session) -> None:
        value = float(growth_rate) if growth_rate is not None else None
        if not TemplateRepository(tx).set_growth_rate(template_id, value):
            raise NotFoundError("Template", template_id)

    ContentStore(session).run(_apply, name=f"record_growth_rate[{template_id}]")


__all__ = ["record_growth_rate", "track_template_usage"]
