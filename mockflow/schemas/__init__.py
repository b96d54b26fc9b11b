"""Pydantic schemas for API requests and responses."""

from mockflow.schemas.api_key import ApiKeyCreate, ApiKeyCreated, ApiKeySummary
from mockflow.schemas.auth import (
    AuthResponse,
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
)
from mockflow.schemas.mockup import (
    MockupCreate,
    MockupDetailResponse,
    MockupEnvelope,
    MockupListResponse,
    MockupResponse,
    MockupUpdate,
    PublicMockupResponse,
)
from mockflow.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from mockflow.schemas.share import ShareCreate, ShareResponse, ShareUpdate
from mockflow.schemas.version import (
    RestoreResponse,
    VersionCreate,
    VersionResponse,
    VersionSummary,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "ProfileUpdate",
    "ApiKeyCreate",
    "ApiKeyCreated",
    "ApiKeySummary",
    "MockupCreate",
    "MockupUpdate",
    "MockupResponse",
    "MockupDetailResponse",
    "MockupListResponse",
    "MockupEnvelope",
    "PublicMockupResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ShareCreate",
    "ShareUpdate",
    "ShareResponse",
    "VersionCreate",
    "VersionSummary",
    "VersionResponse",
    "RestoreResponse",
]
