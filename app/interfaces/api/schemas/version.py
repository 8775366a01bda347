"""Schemas for template version endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from .template import AIMetadataRead, ContentSnapshot


class VersionCreate(BaseModel):
    content: ContentSnapshot
    version_type: str
    author_id: str
    changelog: str | None = None
    request_id: str | None = None


class VersionRollback(BaseModel):
    author_id: str
    request_id: str | None = None


class VersionRead(BaseModel):
    id: int
    template_id: int
    sequence: int
    version: str
    version_type: str
    content: dict[str, Any]
    changelog: str
    created_by: str
    created_at: datetime | None
    download_count: int
    ai_metadata: AIMetadataRead
    request_id: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ComponentsDiffRead(BaseModel):
    added: list[str]
    removed: list[str]
    unchanged: list[str]

    model_config = ConfigDict(from_attributes=True)


class SizeDiffRead(BaseModel):
    size_a: int
    size_b: int
    difference: int

    model_config = ConfigDict(from_attributes=True)


class VersionDiffRead(BaseModel):
    version_a: str
    version_b: str
    changes: list[str]
    root_structure_changed: bool
    size: SizeDiffRead
    components: ComponentsDiffRead

    model_config = ConfigDict(from_attributes=True)


class VersionStatsRead(BaseModel):
    total_versions: int
    current_version: str
    earliest_version: str
    version_types: dict[str, int]
    total_downloads: int
    last_update: datetime | None
    update_frequency: str

    model_config = ConfigDict(from_attributes=True)
