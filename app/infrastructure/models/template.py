"""SQLAlchemy models for marketplace templates and their feedback."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_timezone


class TemplateModel(Base):
    """Database representation of a marketplace template."""

    __tablename__ = "marketplace_template"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(30), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    is_listed = Column(Boolean, nullable=False, default=False)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    template_type = Column(String(20), nullable=False, default="free")
    price = Column(Numeric(10, 2), nullable=False, default=0)
    content = Column(JSON, nullable=False, default=dict)
    ai_metadata = Column(JSON, nullable=False, default=dict)

    current_version = Column(String(32), nullable=False, default="1.0.0")
    version_count = Column(Integer, nullable=False, default=0)

    # Cached projection of the rating set; see ``rating_revision``.
    average_rating = Column(Float, nullable=False, default=0.0)
    wilson_lower_bound = Column(Float, nullable=False, default=0.0, index=True)
    total_ratings = Column(Integer, nullable=False, default=0)
    is_quality_for_ai = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    rating_revision = Column(Integer, nullable=False, default=0)

    view_count = Column(Integer, nullable=False, default=0)
    download_count = Column(Integer, nullable=False, default=0)
    usage_count = Column(Integer, nullable=False, default=0)
    growth_rate = Column(Float, nullable=True)

    created_by = Column(String(64), nullable=False)
    creator_display_name = Column(String(120), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )
    moderated_by = Column(String(64), nullable=True)
    moderated_at = Column(DateTime(timezone=True), nullable=True)
    review_notes = Column(Text, nullable=True)
    # Set by moderators, independent of the rating-derived ``is_featured``.
    manually_featured = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    featured_at = Column(DateTime(timezone=True), nullable=True)

    tag_rows = relationship(
        "TemplateTagModel",
        order_by="TemplateTagModel.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    memberships = relationship(
        "CollectionMembershipModel",
        primaryjoin="TemplateModel.id == foreign(CollectionMembershipModel.template_id)",
        order_by="CollectionMembershipModel.collection_id",
        viewonly=True,
        lazy="selectin",
    )


class TemplateTagModel(Base):
    """Normalised tag attached to a template."""

    __tablename__ = "template_tag"
    __table_args__ = (UniqueConstraint("template_id", "tag", name="uq_template_tag"),)

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("marketplace_template.id"), nullable=False, index=True
    )
    tag = Column(String(50), nullable=False, index=True)


class RatingModel(Base):
    """A single user's rating, addressable by (template, user)."""

    __tablename__ = "template_rating"
    __table_args__ = (
        UniqueConstraint("template_id", "user_id", name="uq_template_rating_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("marketplace_template.id"), nullable=False, index=True
    )
    user_id = Column(String(64), nullable=False)
    score = Column(Integer, nullable=False)
    comment = Column(String(500), nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(DateTime(timezone=True), nullable=True)


class CommentModel(Base):
    __tablename__ = "template_comment"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("marketplace_template.id"), nullable=False, index=True
    )
    user_id = Column(String(64), nullable=False)
    display_name = Column(String(120), nullable=True)
    comment = Column(String(500), nullable=False)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["CommentModel", "RatingModel", "TemplateModel", "TemplateTagModel"]
