"""Domain entities describing a template's version history."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .ai_metadata import AIMetadata

VERSION_TYPE_MAJOR = "major"
VERSION_TYPE_MINOR = "minor"
VERSION_TYPE_PATCH = "patch"
VERSION_TYPES = (VERSION_TYPE_MAJOR, VERSION_TYPE_MINOR, VERSION_TYPE_PATCH)


@dataclass(frozen=True)
class TemplateVersion:
    """Immutable snapshot appended to a template's history."""

    id: int | None
    template_id: int
    sequence: int
    version: str
    version_type: str
    content: dict[str, Any]
    changelog: str
    created_by: str
    created_at: datetime | None
    download_count: int = 0
    ai_metadata: AIMetadata = field(default_factory=AIMetadata)
    request_id: str | None = None


@dataclass(frozen=True)
class ComponentsDiff:
    added: tuple[str, ...]
    removed: tuple[str, ...]
    unchanged: tuple[str, ...]


@dataclass(frozen=True)
class SizeDiff:
    size_a: int
    size_b: int
    difference: int


@dataclass(frozen=True)
class VersionDiff:
    """Comparison between two snapshots of the same template."""

    version_a: str
    version_b: str
    changes: tuple[str, ...]
    root_structure_changed: bool
    size: SizeDiff
    components: ComponentsDiff


@dataclass(frozen=True)
class VersionStats:
    """Aggregate view over a template's version history."""

    total_versions: int
    current_version: str
    earliest_version: str
    version_types: dict[str, int]
    total_downloads: int
    last_update: datetime | None
    update_frequency: str


__all__ = [
    "ComponentsDiff",
    "SizeDiff",
    "TemplateVersion",
    "VERSION_TYPES",
    "VERSION_TYPE_MAJOR",
    "VERSION_TYPE_MINOR",
    "VERSION_TYPE_PATCH",
    "VersionDiff",
    "VersionStats",
]
