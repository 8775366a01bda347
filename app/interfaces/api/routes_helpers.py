"""Helper utilities shared across API route handlers."""

from dataclasses import asdict
from typing import Any

from fastapi import HTTPException, status

from app.domain.entities import METADATA_TYPES, CollectionMetadata
from app.domain.errors import (
    ConflictError,
    MarketplaceError,
    NotFoundError,
    StoreUnavailable,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[MarketplaceError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def http_error_for(exc: MarketplaceError) -> HTTPException:
    """Translate an engine error into the matching HTTP error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
    )


def metadata_from_request(
    collection_type: str, payload: dict[str, Any] | None
) -> CollectionMetadata | None:
    """Build the metadata variant for ``collection_type`` from a request body."""

    if payload is None:
        return None
    metadata_type = METADATA_TYPES.get(collection_type)
    if metadata_type is None:
        raise ValidationError(f"Unknown collection type '{collection_type}'")
    try:
        return metadata_type(**payload)
    except TypeError as exc:
        raise ValidationError(
            f"Invalid metadata for '{collection_type}' collections"
        ) from exc


def metadata_to_response(metadata: CollectionMetadata) -> dict[str, Any]:
    return asdict(metadata)


__all__ = ["http_error_for", "metadata_from_request", "metadata_to_response"]
