"""Use case for editing a template's marketplace listing."""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.entities import Template
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import TemplateRepository
from app.infrastructure.store import ContentStore

from .validators import ensure_description, ensure_pricing, normalize_tags


def update_template_listing(
    session: Session,
    *,
    template_id: int,
    is_listed: bool | None = None,
    price: Decimal | str | int | None = None,
    template_type: str | None = None,
    description: str | None = None,
    tags: Iterable[str] | None = None,
) -> Template:
    """Update the listing fields of a template; ``None`` keeps a field."""

    new_description = ensure_description(description) if description is not None else None
    new_tags = normalize_tags(tags) if tags is not None else None

    def _apply(tx: Session) -> Template:
        repository = TemplateRepository(tx)
        current = repository.get(template_id)
        if current is None:
            raise NotFoundError("Template", template_id)
        normalized_type, amount = ensure_pricing(
            template_type if template_type is not None else current.template_type,
            price if price is not None else current.price,
        )
        return repository.update(
            replace(
                current,
                is_listed=current.is_listed if is_listed is None else bool(is_listed),
                template_type=normalized_type,
                price=amount,
                description=(
                    current.description if new_description is None else new_description
                ),
                tags=current.tags if new_tags is None else new_tags,
            )
        )

    return ContentStore(session).run(
        _apply, name=f"update_template_listing[{template_id}]"
    )


__all__ = ["update_template_listing"]
