"""Validation helpers for collection use cases."""

from collections.abc import Iterable, Sequence

from app.domain.entities import (
    COLLECTION_TYPES,
    COLLECTION_TYPE_CREATOR,
    COLLECTION_TYPE_CURATED,
    GENERATED_COLLECTION_TYPES,
    METADATA_TYPES,
    CollectionMetadata,
    CreatorMetadata,
    CuratedMetadata,
)
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.repositories import TemplateRepository

MAX_NAME_LENGTH = 120
MAX_DESCRIPTION_LENGTH = 2000
MAX_TEMPLATES_PER_COLLECTION = 100


def ensure_collection_name(name: str | None) -> str:
    normalized = (name or "").strip()
    if not normalized:
        raise ValidationError("Collection name cannot be empty")
    if len(normalized) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Collection name cannot exceed {MAX_NAME_LENGTH} characters"
        )
    return normalized


def ensure_collection_description(description: str | None) -> str:
    normalized = (description or "").strip()
    if len(normalized) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )
    return normalized


def ensure_authored_type(collection_type: str | None) -> str:
    normalized = (collection_type or "").strip().lower()
    if normalized not in COLLECTION_TYPES:
        raise ValidationError(f"Unknown collection type '{collection_type}'")
    if normalized in GENERATED_COLLECTION_TYPES:
        raise ValidationError(
            f"'{normalized}' collections are generated and cannot be authored"
        )
    return normalized


def ensure_template_ids(template_ids: Sequence[int] | None) -> tuple[int, ...]:
    ids = tuple(template_ids or ())
    if not ids:
        raise ValidationError("A collection needs at least one template")
    if any(isinstance(value, bool) or not isinstance(value, int) for value in ids):
        raise ValidationError("Template ids must be integers")
    if len(set(ids)) != len(ids):
        raise ValidationError("Template ids must not repeat")
    if len(ids) > MAX_TEMPLATES_PER_COLLECTION:
        raise ValidationError(
            f"A collection can hold at most {MAX_TEMPLATES_PER_COLLECTION} templates"
        )
    return ids


def ensure_templates_exist(repository: TemplateRepository, template_ids: Iterable[int]) -> None:
    wanted = list(template_ids)
    existing = repository.existing_ids(wanted)
    missing = [template_id for template_id in wanted if template_id not in existing]
    if missing:
        raise NotFoundError("Template", missing[0])


def ensure_metadata(
    collection_type: str,
    metadata: CollectionMetadata | None,
    *,
    created_by: str,
) -> CollectionMetadata:
    """Return metadata matching ``collection_type``, defaulting where possible."""

    if metadata is None:
        if collection_type == COLLECTION_TYPE_CURATED:
            return CuratedMetadata()
        if collection_type == COLLECTION_TYPE_CREATOR:
            return CreatorMetadata(creator_id=created_by)
        raise ValidationError(f"'{collection_type}' collections require metadata")
    expected = METADATA_TYPES[collection_type]
    if not isinstance(metadata, expected):
        raise ValidationError(
            f"'{collection_type}' collections take {expected.__name__} metadata"
        )
    return metadata


def normalize_labels(values: Iterable[str] | None) -> tuple[str, ...]:
    labels: dict[str, None] = {}
    for raw in values or ():
        label = str(raw).strip().lower()
        if label:
            labels.setdefault(label, None)
    return tuple(labels)


__all__ = [
    "ensure_authored_type",
    "ensure_collection_description",
    "ensure_collection_name",
    "ensure_metadata",
    "ensure_template_ids",
    "ensure_templates_exist",
    "normalize_labels",
]
