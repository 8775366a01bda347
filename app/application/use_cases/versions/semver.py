"""Semantic version arithmetic for template histories."""

from __future__ import annotations

from app.domain.entities import (
    VERSION_TYPES,
    VERSION_TYPE_MAJOR,
    VERSION_TYPE_MINOR,
    VERSION_TYPE_PATCH,
)
from app.domain.errors import ValidationError


def parse_version(value: str) -> tuple[int, int, int]:
    """Split ``MAJOR.MINOR.PATCH`` into its integer parts."""

    parts = (value or "").strip().split(".")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise ValidationError(f"'{value}' is not a MAJOR.MINOR.PATCH version")
    major, minor, patch = (int(part) for part in parts)
    return major, minor, patch


def ensure_version_type(version_type: str) -> str:
    normalized = (version_type or "").strip().lower()
    if normalized not in VERSION_TYPES:
        allowed = ", ".join(VERSION_TYPES)
        raise ValidationError(f"Version type must be one of: {allowed}")
    return normalized


def next_version(current: str, version_type: str) -> str:
    """Return the version that follows ``current`` for a ``version_type`` bump."""

    major, minor, patch = parse_version(current)
    bump = ensure_version_type(version_type)
    if bump == VERSION_TYPE_MAJOR:
        return f"{major + 1}.0.0"
    if bump == VERSION_TYPE_MINOR:
        return f"{major}.{minor + 1}.0"
    if bump == VERSION_TYPE_PATCH:
        return f"{major}.{minor}.{patch + 1}"
    raise ValidationError(f"Unsupported version type '{version_type}'")  # pragma: no cover


__all__ = ["ensure_version_type", "next_version", "parse_version"]
