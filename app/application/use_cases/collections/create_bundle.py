"""Use case for packaging templates into a discounted bundle."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sqlalchemy.orm import Session

from app.domain.entities import COLLECTION_TYPE_BUNDLE, BundleMetadata, Collection
from app.domain.errors import ValidationError

from .create_collection import create_collection
from .validators import ensure_template_ids

# Flat list price assumed for every template in a bundle.
REFERENCE_TEMPLATE_PRICE = Decimal("29.99")
BUNDLE_CURRENCY = "USD"

_CENTS = Decimal("0.01")


def _ensure_amount(value: Decimal | str | int | float) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid bundle price '{value}'") from exc
    if not amount.is_finite() or amount < 0:
        raise ValidationError("Bundle price must be a non-negative amount")
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


def price_bundle(
    template_count: int,
    bundle_price: Decimal | str | int | float,
    discount: int | None = None,
) -> BundleMetadata:
    """Work out the pricing metadata of a bundle of ``template_count`` templates.

    ``discount`` overrides the computed percentage when given, even when it
    is zero.
    """

    price = _ensure_amount(bundle_price)
    original = (REFERENCE_TEMPLATE_PRICE * template_count).quantize(_CENTS)
    if original <= 0:
        raise ValidationError("A bundle needs at least one template")
    if price > original:
        raise ValidationError("Bundle price cannot exceed the combined template price")
    if discount is None:
        ratio = (original - price) / original * 100
        percent = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    else:
        if isinstance(discount, bool) or not isinstance(discount, int):
            raise ValidationError("Discount must be a whole percentage")
        if not 0 <= discount <= 100:
            raise ValidationError("Discount must be between 0 and 100")
        percent = discount
    return BundleMetadata(
        original_price=original,
        bundle_price=price,
        discount=percent,
        savings=original - price,
        currency=BUNDLE_CURRENCY,
    )


def create_bundle(
    session: Session,
    *,
    name: str,
    template_ids: Sequence[int],
    bundle_price: Decimal | str | int | float,
    created_by: str,
    description: str | None = None,
    discount: int | None = None,
    featured: bool = False,
) -> Collection:
    """Create a public bundle collection priced against the reference price."""

    ids = ensure_template_ids(template_ids)
    return create_collection(
        session,
        name=name,
        description=description,
        collection_type=COLLECTION_TYPE_BUNDLE,
        template_ids=ids,
        created_by=created_by,
        metadata=price_bundle(len(ids), bundle_price, discount),
        is_public=True,
        featured=featured,
    )


__all__ = ["REFERENCE_TEMPLATE_PRICE", "create_bundle", "price_bundle"]
