"""Use cases for retrieving templates."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Template
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import TemplateRepository


def get_template(session: Session, template_id: int) -> Template:
    """Return the template identified by ``template_id`` or raise an error."""

    template = TemplateRepository(session).get(template_id)
    if template is None:
        raise NotFoundError("Template", template_id)
    return template


def get_templates_by_ids(session: Session, template_ids: Sequence[int]) -> list[Template]:
    """Return the templates that still exist among ``template_ids``, in order."""

    return TemplateRepository(session).get_many(template_ids)


__all__ = ["get_template", "get_templates_by_ids"]
