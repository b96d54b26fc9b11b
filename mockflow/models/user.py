"""User model."""

from sqlalchemy import Column, Integer, String

from mockflow.database import Base
from mockflow.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account that owns mockups and projects and receives shares.

    ``email`` is stored lower-cased so shares addressed to an email match the
    account registered with it regardless of case.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)

    # Backrefs: mockups, projects, api_keys

    @property
    def display_name(self) -> str:
        """Name shown to collaborators, falling back to the email's local part."""
        return self.name or self.email.split("@", 1)[0]
