"""API key model."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from mockflow.database import Base
from mockflow.models.mixins import TimestampMixin


class ApiKey(Base, TimestampMixin):
    """Secret key that acts on behalf of its user for programmatic access."""

    __tablename__ = "api_keys"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    key = Column(String(67), nullable=False, unique=True, index=True)  # "mk_" + 64 hex

    # Permissions
    can_generate_mockups = Column(Boolean, nullable=False, default=True)
    can_save_mockups = Column(Boolean, nullable=False, default=True)
    can_access_templates = Column(Boolean, nullable=False, default=True)

    rate_limit = Column(Integer, nullable=False, default=100)  # requests per hour
    is_active = Column(Boolean, nullable=False, default=True)
    last_used_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="api_keys")
