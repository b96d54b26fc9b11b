"""Project model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from mockflow.database import Base
from mockflow.models.mixins import TimestampMixin


class Project(Base, TimestampMixin):
    """Folder for grouping an owner's mockups.

    Deleting a project detaches its mockups instead of deleting them.
    """

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=False)

    # Relationships
    owner = relationship("User", backref="projects")
    mockups = relationship("Mockup", back_populates="project")
