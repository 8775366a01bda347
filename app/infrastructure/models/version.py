"""SQLAlchemy model for the append-only template version log."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class TemplateVersionModel(Base):
    """Database representation of an immutable template version."""

    __tablename__ = "template_version"
    __table_args__ = (
        UniqueConstraint("template_id", "sequence", name="uq_template_version_sequence"),
        UniqueConstraint("template_id", "version", name="uq_template_version_number"),
        # Idempotency key of the write that created the version, if any.
        UniqueConstraint("template_id", "request_id", name="uq_template_version_request"),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("marketplace_template.id"), nullable=False, index=True
    )
    sequence = Column(Integer, nullable=False)
    version = Column(String(32), nullable=False)
    version_type = Column(String(10), nullable=False)
    content = Column(JSON, nullable=False)
    changelog = Column(Text, nullable=False, default="")
    created_by = Column(String(64), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    download_count = Column(Integer, nullable=False, default=0)
    ai_metadata = Column(JSON, nullable=False, default=dict)
    request_id = Column(String(64), nullable=True)


__all__ = ["TemplateVersionModel"]
