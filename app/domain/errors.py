"""Typed errors raised by the marketplace engine."""

from __future__ import annotations


class MarketplaceError(Exception):
    """Base class for every error the engine raises on purpose."""


class ValidationError(MarketplaceError, ValueError):
    """Input was rejected before any write took place."""


class NotFoundError(MarketplaceError, ValueError):
    """A referenced template, version, rating or collection does not exist."""

    def __init__(self, kind: str, identifier: object) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} {identifier} not found")


class ConcurrencyConflict(MarketplaceError):
    """A concurrent writer won the race; the transaction can be replayed."""


class ConflictError(MarketplaceError):
    """Concurrent writers kept winning until the retry budget ran out."""


class StoreUnavailable(MarketplaceError):
    """The persistence layer failed transiently."""


__all__ = [
    "ConcurrencyConflict",
    "ConflictError",
    "MarketplaceError",
    "NotFoundError",
    "StoreUnavailable",
    "ValidationError",
]
