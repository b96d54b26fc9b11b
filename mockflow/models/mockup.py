"""Mockup, MockupShare and MockupVersion models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from mockflow.database import Base
from mockflow.models.mixins import CreatedAtMixin, TimestampMixin

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONPayload = JSON().with_variant(JSONB(), "postgresql")


class Mockup(Base, TimestampMixin):
    """A saved chat, AI or social screenshot mockup.

    ``data`` and ``appearance`` are opaque to the backend; their shape belongs to
    the editor for the mockup's type.
    """

    __tablename__ = "mockups"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True
    )
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, index=True)  # MockupType
    platform = Column(String(30), nullable=False)  # Platform
    data = Column(JSONPayload, nullable=False, default=dict)
    appearance = Column(JSONPayload, nullable=False, default=dict)
    thumbnail_url = Column(String(500), nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)

    # Relationships
    owner = relationship("User", backref="mockups")
    project = relationship("Project", back_populates="mockups")
    shares = relationship("MockupShare", back_populates="mockup", cascade="all, delete-orphan")
    versions = relationship(
        "MockupVersion", back_populates="mockup", cascade="all, delete-orphan"
    )


class MockupShare(Base, TimestampMixin):
    """Grant of view or edit access on a mockup.

    A share names its grantee by user id or, for people without an account yet,
    by email. Link shares carry a token instead. A share whose ``expires_at`` has
    passed stays in the table but grants nothing.
    """

    __tablename__ = "mockup_shares"

    id = Column(Integer, primary_key=True, index=True)
    mockup_id = Column(
        Integer, ForeignKey("mockups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    shared_with_user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    shared_with_email = Column(String(255), nullable=True, index=True)  # lower-cased
    permission = Column(String(20), nullable=False, default="view")  # SharePermission
    share_token = Column(String(64), nullable=True, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    mockup = relationship("Mockup", back_populates="shares")
    shared_with_user = relationship("User", foreign_keys=[shared_with_user_id])


class MockupVersion(Base, CreatedAtMixin):
    """Immutable snapshot of a mockup's content."""

    __tablename__ = "mockup_versions"
    __table_args__ = (
        UniqueConstraint("mockup_id", "version_number", name="uq_mockup_version_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    mockup_id = Column(
        Integer, ForeignKey("mockups.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    version_number = Column(Integer, nullable=False)

    # Snapshot of the mockup at this version
    name = Column(String(255), nullable=False)
    data = Column(JSONPayload, nullable=False, default=dict)
    appearance = Column(JSONPayload, nullable=False, default=dict)
    thumbnail_url = Column(String(500), nullable=True)

    change_description = Column(Text, nullable=True)

    # Relationships
    mockup = relationship("Mockup", back_populates="versions")
