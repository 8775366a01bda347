"""Validation helpers for template catalogue use cases."""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.entities import (
    TEMPLATE_CATEGORIES,
    TEMPLATE_STATUSES,
    TEMPLATE_TYPES,
    TEMPLATE_TYPE_FREE,
)
from app.domain.errors import ValidationError

MAX_NAME_LENGTH = 120
MAX_DESCRIPTION_LENGTH = 2000
MAX_TAGS = 20
MAX_TAG_LENGTH = 40
TRACKED_ACTIONS = {
    "usage": "usage_count",
    "download": "download_count",
    "view": "view_count",
}


def ensure_name(name: str | None) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("Template name cannot be empty")
    if len(normalized) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Template name cannot exceed {MAX_NAME_LENGTH} characters"
        )
    return normalized


def ensure_description(description: str | None) -> str:
    normalized = (description or "").strip()
    if len(normalized) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )
    return normalized


def ensure_category(category: str | None) -> str:
    normalized = (category or "").strip().lower()
    if normalized not in TEMPLATE_CATEGORIES:
        raise ValidationError(f"Unknown template category '{category}'")
    return normalized


def ensure_status(status: str | None) -> str:
    normalized = (status or "").strip().lower()
    if normalized not in TEMPLATE_STATUSES:
        allowed = ", ".join(TEMPLATE_STATUSES)
        raise ValidationError(f"Status must be one of: {allowed}")
    return normalized


def normalize_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Lower-case, strip and de-duplicate ``tags`` keeping their order."""

    seen: dict[str, None] = {}
    for raw in tags or ():
        if not isinstance(raw, str):
            raise ValidationError("Tags must be strings")
        tag = raw.strip().lower()
        if not tag:
            continue
        if len(tag) > MAX_TAG_LENGTH:
            raise ValidationError(f"Tags cannot exceed {MAX_TAG_LENGTH} characters")
        seen.setdefault(tag, None)
    if len(seen) > MAX_TAGS:
        raise ValidationError(f"A template can have at most {MAX_TAGS} tags")
    return tuple(seen)


def ensure_pricing(template_type: str | None, price: Any) -> tuple[str, Decimal]:
    normalized_type = (template_type or TEMPLATE_TYPE_FREE).strip().lower()
    if normalized_type not in TEMPLATE_TYPES:
        allowed = ", ".join(TEMPLATE_TYPES)
        raise ValidationError(f"Template type must be one of: {allowed}")
    try:
        amount = Decimal(str(price if price is not None else 0))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid price '{price}'") from exc
    if not amount.is_finite() or amount < 0:
        raise ValidationError("Price must be a non-negative amount")
    amount = amount.quantize(Decimal("0.01"))
    if normalized_type == TEMPLATE_TYPE_FREE and amount != 0:
        raise ValidationError("Free templates cannot have a price")
    return normalized_type, amount


def ensure_action(action: str | None) -> str:
    normalized = (action or "").strip().lower()
    if normalized not in TRACKED_ACTIONS:
        allowed = ", ".join(sorted(TRACKED_ACTIONS))
        raise ValidationError(f"Action must be one of: {allowed}")
    return TRACKED_ACTIONS[normalized]


__all__ = [
    "TRACKED_ACTIONS",
    "ensure_action",
    "ensure_category",
    "ensure_description",
    "ensure_name",
    "ensure_pricing",
    "ensure_status",
    "normalize_tags",
]
