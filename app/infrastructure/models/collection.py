"""SQLAlchemy models for discovery collections."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class CollectionModel(Base):
    """Database representation of a template collection."""

    __tablename__ = "template_collection"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=False, default="")
    type = Column(String(20), nullable=False, index=True)
    metadata_payload = Column(JSON, nullable=False, default=dict)
    created_by = Column(String(64), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, default=now_in_app_timezone
    )
    is_public = Column(Boolean, nullable=False, default=True)
    featured = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="active")
    # One live collection per generator (``trending:<algorithm>`` ...).
    generator_key = Column(String(120), nullable=True, unique=True)
    tags = Column(JSON, nullable=False, default=list)
    categories = Column(JSON, nullable=False, default=list)

    view_count = Column(Integer, nullable=False, default=0)
    download_count = Column(Integer, nullable=False, default=0)
    save_count = Column(Integer, nullable=False, default=0)
    impressions = Column(Integer, nullable=False, default=0)
    clicks = Column(Integer, nullable=False, default=0)
    conversions = Column(Integer, nullable=False, default=0)
    revenue = Column(Numeric(12, 2), nullable=False, default=0)

    memberships = relationship(
        "CollectionMembershipModel",
        back_populates="collection",
        order_by="CollectionMembershipModel.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class CollectionMembershipModel(Base):
    """Ordered weak reference from a collection to a template id."""

    __tablename__ = "collection_membership"
    __table_args__ = (
        UniqueConstraint(
            "collection_id", "template_id", name="uq_collection_membership"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    collection_id = Column(
        Integer,
        ForeignKey("template_collection.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # No foreign key: collections never own template lifecycles.
    template_id = Column(Integer, nullable=False, index=True)
    position = Column(Integer, nullable=False)

    collection = relationship("CollectionModel", back_populates="memberships")


__all__ = ["CollectionMembershipModel", "CollectionModel"]
