"""SQLAlchemy models."""

from mockflow.models.api_key import ApiKey
from mockflow.models.mockup import Mockup, MockupShare, MockupVersion
from mockflow.models.project import Project
from mockflow.models.user import User

__all__ = [
    "User",
    "Project",
    "Mockup",
    "MockupShare",
    "MockupVersion",
    "ApiKey",
]
