"""Use case reporting catalogue-wide marketplace figures."""

from sqlalchemy.orm import Session

from app.domain.entities import MarketplaceStats
from app.infrastructure.repositories import TemplateRepository


def get_marketplace_stats(session: Session) -> MarketplaceStats:
    return TemplateRepository(session).stats()


__all__ = ["get_marketplace_stats"]
