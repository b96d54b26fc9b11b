"""Mockup schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mockflow.models.enums import AccessLevel, MockupType, Platform


class MockupCreate(BaseModel):
    """Create a new mockup."""

    name: str = Field(..., min_length=1, max_length=255)
    type: MockupType
    platform: Platform
    data: dict[str, Any]
    appearance: dict[str, Any] | None = None
    project_id: int | None = None
    is_public: bool = False
    thumbnail_url: str | None = Field(None, max_length=500)


class MockupUpdate(BaseModel):
    """Sparse update of a mockup. Only fields present in the request are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    data: dict[str, Any] | None = None
    appearance: dict[str, Any] | None = None
    thumbnail_url: str | None = Field(None, max_length=500)
    # Owner-only
    project_id: int | None = None
    is_public: bool | None = None


class MockupResponse(BaseModel):
    """Full mockup record."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    project_id: int | None
    name: str
    type: MockupType
    platform: Platform
    data: dict[str, Any]
    appearance: dict[str, Any]
    thumbnail_url: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime


class PublicMockupResponse(BaseModel):
    """Public view of a mockup, without anything identifying its owner."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: MockupType
    platform: Platform
    data: dict[str, Any]
    appearance: dict[str, Any]
    created_at: datetime


class MockupDetailResponse(BaseModel):
    """A mockup together with the caller's access level."""

    mockup: MockupResponse | PublicMockupResponse
    permission: AccessLevel


class MockupListResponse(BaseModel):
    """One page of the caller's own mockups."""

    mockups: list[MockupResponse]
    total: int
    limit: int
    offset: int


class MockupEnvelope(BaseModel):
    """Offline export file wrapping a mockup's content."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = Field(..., min_length=1)
    exported_at: datetime | None = Field(None, alias="exportedAt")
    mockup_type: MockupType = Field(..., alias="mockupType")
    platform: str
    name: str | None = None
    data: dict[str, Any]
    appearance: dict[str, Any] | None = None
