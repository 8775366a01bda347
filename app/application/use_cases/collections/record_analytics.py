"""Use case for collection engagement counters."""

from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import CollectionRepository
from app.infrastructure.store import ContentStore

EVENT_VIEW = "view"
EVENT_DOWNLOAD = "download"
EVENT_SAVE = "save"
EVENT_CLICK = "click"
EVENT_REVENUE = "revenue"

# Counters bumped by each counted event.
EVENT_COUNTERS = {
    EVENT_VIEW: ("view_count", "impressions"),
    EVENT_DOWNLOAD: ("download_count", "conversions"),
    EVENT_SAVE: ("save_count",),
    EVENT_CLICK: ("clicks",),
}
ANALYTICS_EVENTS = (*EVENT_COUNTERS, EVENT_REVENUE)


def _revenue_amount(amount: Decimal | str | int | float | None) -> Decimal:
    if amount is None:
        raise ValidationError("Revenue events require an amount")
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid revenue amount '{amount}'") from exc
    if not value.is_finite() or value <= 0:
        raise ValidationError("Revenue amount must be positive")
    return value.quantize(Decimal("0.01"))


def _event_count(amount: Decimal | str | int | float | None) -> int:
    if amount is None:
        return 1
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
        raise ValidationError("Event counts must be positive integers")
    return amount


def record_analytics(
    session: Session,
    *,
    collection_id: int,
    event: str,
    amount: Decimal | str | int | float | None = None,
) -> None:
    """Add one engagement event to the collection's counters.

    ``amount`` is the money earned for ``revenue`` events and an optional
    event count otherwise. Deltas are not idempotent, so an unavailable store
    fails the call instead of replaying it.
    """

    normalized = (event or "").strip().lower()
    if normalized not in ANALYTICS_EVENTS:
        raise ValidationError(f"Event must be one of: {', '.join(ANALYTICS_EVENTS)}")
    if normalized == EVENT_REVENUE:
        deltas: dict[str, object] = {"revenue": _revenue_amount(amount)}
    else:
        count = _event_count(amount)
        deltas = {column: count for column in EVENT_COUNTERS[normalized]}

    def _apply(tx: Session) -> None:
        if not CollectionRepository(tx).increment_analytics(collection_id, **deltas):
            raise NotFoundError("Collection", collection_id)

    ContentStore(session).run(
        _apply,
        name=f"record_analytics[{collection_id}:{normalized}]",
        retry_unavailable=False,
    )


__all__ = ["ANALYTICS_EVENTS", "record_analytics"]
